"""Filter runners.

ARCHITECTURE:
    ordered filters + variants → SimpleVariantFilterRunner | SparseVariantFilterRunner → variants
    ordered gene filters + genes → GeneFilterRunner → genes (results copied onto member variants)

Key Design:
- Filters run left to right on each record; later filters may read annotation
  attached by earlier provider steps.
- Runners return a new list and never delete from the caller's sequence.
- The simple runner keeps every record with every result; the sparse runner
  drops a record at its first FAIL. Records passing everything are the same
  under both.
- Gene filtering runs only once variant filtering and grouping are complete.
"""

import logging
from typing import Iterable, Sequence

from variantfilter.filters.base import FilterTarget, GeneFilter, VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.gene import Gene
from variantfilter.models.report import FilterResultCount
from variantfilter.models.variant import VariantEvaluation

logger = logging.getLogger(__name__)


def _check_target(filters: Sequence, target: FilterTarget) -> None:
    for each in filters:
        if getattr(each, "target", None) is not target:
            raise TypeError(f"{type(each).__name__} cannot run on a {target.value}")


class _FilterCounter:
    """Tally of pass/fail results per filter, in filter order."""

    def __init__(self) -> None:
        self._counts: dict[FilterType, FilterResultCount] = {}

    def reset(self, filters: Sequence) -> None:
        self._counts = {
            each.filter_type: FilterResultCount(filter_type=each.filter_type) for each in filters
        }

    def record(self, filter_result: FilterResult) -> None:
        count = self._counts.get(filter_result.filter_type)
        if count is None:
            count = FilterResultCount(filter_type=filter_result.filter_type)
            self._counts[filter_result.filter_type] = count
        if filter_result.passed():
            count.pass_count += 1
        elif filter_result.failed():
            count.fail_count += 1

    def counts(self) -> list[FilterResultCount]:
        return [count.model_copy() for count in self._counts.values()]


class SimpleVariantFilterRunner:
    """Runs every filter on every variant, keeping all variants.

    Use when a full report of how many variants failed each filter is needed.
    """

    def __init__(self) -> None:
        self._counter = _FilterCounter()

    def run(
        self,
        filters: Sequence[VariantFilter],
        variant_evaluations: Iterable[VariantEvaluation],
    ) -> list[VariantEvaluation]:
        _check_target(filters, FilterTarget.VARIANT)
        self._counter.reset(filters)

        results = [self._run_all(filters, ve) for ve in variant_evaluations]

        passed = sum(1 for ve in results if ve.passed_filters())
        logger.info(
            f"Filtered {len(results)} variants with {len(filters)} filters: "
            f"{passed} passed all filters"
        )
        return results

    def _run_all(self, filters: Sequence[VariantFilter], variant_evaluation: VariantEvaluation) -> VariantEvaluation:
        for variant_filter in filters:
            filter_result = variant_filter.run_filter(variant_evaluation)
            variant_evaluation.add_filter_result(filter_result)
            self._counter.record(filter_result)
        return variant_evaluation

    def filter_counts(self) -> list[FilterResultCount]:
        """Pass/fail counts per filter from the last run."""
        return self._counter.counts()


class SparseVariantFilterRunner:
    """Runs filters until a variant fails one, then drops the variant.

    Bounds memory on large inputs since failing variants are not retained.
    NOT_RUN results do not stop a variant.
    """

    def __init__(self) -> None:
        self._counter = _FilterCounter()

    def run(
        self,
        filters: Sequence[VariantFilter],
        variant_evaluations: Iterable[VariantEvaluation],
    ) -> list[VariantEvaluation]:
        _check_target(filters, FilterTarget.VARIANT)
        self._counter.reset(filters)

        total = 0
        passed: list[VariantEvaluation] = []
        for variant_evaluation in variant_evaluations:
            total += 1
            if self._run_until_failure(filters, variant_evaluation):
                passed.append(variant_evaluation)

        logger.info(
            f"Filtered {total} variants with {len(filters)} filters: "
            f"{len(passed)} retained, {total - len(passed)} removed"
        )
        return passed

    def _run_until_failure(self, filters: Sequence[VariantFilter], variant_evaluation: VariantEvaluation) -> bool:
        for variant_filter in filters:
            filter_result = variant_filter.run_filter(variant_evaluation)
            variant_evaluation.add_filter_result(filter_result)
            self._counter.record(filter_result)
            if filter_result.failed():
                logger.debug(f"{variant_evaluation.variant_key()} failed {filter_result.filter_type.value}")
                return False
        return True

    def filter_counts(self) -> list[FilterResultCount]:
        """Pass/fail counts per filter from the last run.

        Only variants that reached a filter are counted for it.
        """
        return self._counter.counts()


class GeneFilterRunner:
    """Runs gene filters and copies each gene result onto the gene's variants."""

    def __init__(self) -> None:
        self._counter = _FilterCounter()

    def run(self, filters: Sequence[GeneFilter], genes: Iterable[Gene]) -> list[Gene]:
        _check_target(filters, FilterTarget.GENE)
        self._counter.reset(filters)

        results = list(genes)
        for gene in results:
            for gene_filter in filters:
                filter_result = gene_filter.run_filter(gene)
                gene.add_filter_result(filter_result)
                for variant_evaluation in gene.variant_evaluations:
                    variant_evaluation.add_filter_result(filter_result)
                self._counter.record(filter_result)

        passed = sum(1 for gene in results if gene.passed_filters())
        logger.info(f"Filtered {len(results)} genes with {len(filters)} filters: {passed} passed")
        return results

    def filter_counts(self) -> list[FilterResultCount]:
        return self._counter.counts()
