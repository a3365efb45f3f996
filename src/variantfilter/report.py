"""Summaries of what each filter did in a run.

Counts come from the results stored on the records themselves. When the
sparse runner was used, failing variants were dropped, so its tallies should
be passed in as ``filter_counts`` instead.
"""

import logging
from typing import Sequence

from variantfilter.filters.base import Filter, FilterTarget
from variantfilter.filters.frequency import FrequencyFilter, KnownVariantFilter
from variantfilter.filters.gene_id import EntrezGeneIdFilter
from variantfilter.filters.inheritance import InheritanceFilter, VariantInheritanceFilter
from variantfilter.filters.interval import IntervalFilter
from variantfilter.filters.pathogenicity import PathogenicityFilter
from variantfilter.filters.priority_score import PriorityScoreFilter, VariantPriorityScoreFilter
from variantfilter.filters.providers import unwrap
from variantfilter.filters.quality import QualityFilter
from variantfilter.filters.regulatory import RegulatoryFeatureFilter
from variantfilter.filters.variant_effect import VariantEffectFilter
from variantfilter.models.filter_result import FilterType
from variantfilter.models.filterable import Filterable
from variantfilter.models.frequency import FrequencyData, FrequencySource
from variantfilter.models.gene import Gene
from variantfilter.models.report import FilterReport, FilterResultCount
from variantfilter.models.variant import VariantEvaluation

logger = logging.getLogger(__name__)


def as_percent(number: int, total: int) -> float:
    if total == 0:
        return 0.0
    return 100.0 * number / total


class FilterReportFactory:
    """Builds one FilterReport per filter, in filter order."""

    def make_filter_reports(
        self,
        filters: Sequence[Filter],
        variant_evaluations: Sequence[VariantEvaluation],
        genes: Sequence[Gene] = (),
        filter_counts: Sequence[FilterResultCount] | None = None,
    ) -> list[FilterReport]:
        counts = None
        if filter_counts is not None:
            counts = {count.filter_type: count for count in filter_counts}

        reports = []
        for each in filters:
            report = self.make_filter_report(each, variant_evaluations, genes)
            if counts is not None and each.filter_type in counts:
                count = counts[each.filter_type]
                report = report.model_copy(update={"passed": count.pass_count, "failed": count.fail_count})
            reports.append(report)
        return reports

    def make_filter_report(
        self,
        each: Filter,
        variant_evaluations: Sequence[VariantEvaluation],
        genes: Sequence[Gene] = (),
    ) -> FilterReport:
        """Report for a single filter, counted over variants or genes by its target."""
        base_filter = unwrap(each) if each.target is FilterTarget.VARIANT else each
        records: Sequence[Filterable] = variant_evaluations if each.target is FilterTarget.VARIANT else genes

        messages = self._messages(base_filter, variant_evaluations)
        passed, failed = self._count(each.filter_type, records)
        logger.debug(f"{each.filter_type.value} report: {passed} passed, {failed} failed")
        return FilterReport(filter_type=each.filter_type, passed=passed, failed=failed, messages=tuple(messages))

    @staticmethod
    def _count(filter_type: FilterType, records: Sequence[Filterable]) -> tuple[int, int]:
        passed = sum(1 for record in records if record.passed_filter(filter_type))
        failed = sum(1 for record in records if record.failed_filter(filter_type))
        return passed, failed

    def _messages(self, each: Filter, variant_evaluations: Sequence[VariantEvaluation]) -> list[str]:
        if isinstance(each, VariantEffectFilter):
            effects = ", ".join(sorted(effect.value for effect in each.off_target_effects))
            return [f"Removed variants with effects of type: [{effects}]"]
        if isinstance(each, KnownVariantFilter):
            return self._known_variant_messages(variant_evaluations)
        if isinstance(each, FrequencyFilter):
            return [f"Variants filtered for maximum allele frequency of {each.max_frequency:.2f}%"]
        if isinstance(each, QualityFilter):
            return [f"Variants filtered for minimum PHRED quality of {each.min_quality:.1f}"]
        if isinstance(each, PathogenicityFilter):
            if each.keep_non_pathogenic:
                return [
                    "Retained all non-pathogenic variants of all types. "
                    "Scoring was applied, but the filter passed all variants."
                ]
            return ["Retained all non-pathogenic missense variants"]
        if isinstance(each, IntervalFilter):
            return [f"Restricted variants to interval: {each.interval}"]
        if isinstance(each, EntrezGeneIdFilter):
            gene_ids = ", ".join(str(gene_id) for gene_id in sorted(each.gene_ids))
            return [f"Retained variants in genes: {gene_ids}"]
        if isinstance(each, (InheritanceFilter, VariantInheritanceFilter)):
            modes = ",".join(sorted(mode.value for mode in each.modes))
            return [f"Genes filtered for compatibility with {modes} inheritance."]
        if isinstance(each, (PriorityScoreFilter, VariantPriorityScoreFilter)):
            return [f"Genes filtered for minimum {each.priority_type} score of {each.min_priority_score}"]
        if isinstance(each, RegulatoryFeatureFilter):
            return ["Removed non-regulatory non-coding variants"]
        return []

    @staticmethod
    def _known_variant_messages(variant_evaluations: Sequence[VariantEvaluation]) -> list[str]:
        not_in_database = rs_id = thousand_genomes = esp = exac = gnomad = 0
        for variant_evaluation in variant_evaluations:
            frequency_data = variant_evaluation.frequency_data or FrequencyData.empty()
            if not frequency_data.is_represented_in_database():
                not_in_database += 1
            if frequency_data.has_dbsnp_rs_id():
                rs_id += 1
            if frequency_data.frequency_for_source(FrequencySource.THOUSAND_GENOMES) is not None:
                thousand_genomes += 1
            if frequency_data.has_esp_data():
                esp += 1
            if frequency_data.has_exac_data():
                exac += 1
            if frequency_data.has_gnomad_data():
                gnomad += 1

        total = len(variant_evaluations)
        return [
            f"Removed {not_in_database} variants with no RSID or frequency data "
            f"({as_percent(not_in_database, total):.1f}%)",
            f'dbSNP "rs" id available for {rs_id} variants ({as_percent(rs_id, total):.1f}%)',
            f"Data available from 1000 Genomes for {thousand_genomes} variants "
            f"({as_percent(thousand_genomes, total):.1f}%)",
            f"Data available in Exome Server Project for {esp} variants ({as_percent(esp, total):.1f}%)",
            f"Data available from ExAC Project for {exac} variants ({as_percent(exac, total):.1f}%)",
            f"Data available from gnomAD for {gnomad} variants ({as_percent(gnomad, total):.1f}%)",
        ]
