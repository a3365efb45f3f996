"""Filtering engine tying settings, runners and reports together.

ARCHITECTURE:
    FilterSettings → FilterFactory → variant runner → genes_from_variants → GeneFilterRunner → FilterReportFactory → FilterRunResults

Key Design:
- Filters are built on construction so configuration errors surface before any variant is read
- RunMode.FULL keeps every variant; RunMode.PASS_ONLY drops variants at their first failure
- Gene filtering only starts once every variant has been filtered and grouped
"""

import logging
from typing import Any, Iterable

from pydantic import BaseModel, Field

from variantfilter.api.data_service import VariantDataService
from variantfilter.config.settings import FilterSettings, RunMode
from variantfilter.factory import FilterFactory
from variantfilter.models.gene import Gene, genes_from_variants
from variantfilter.models.report import FilterReport, FilterResultCount
from variantfilter.models.variant import VariantEvaluation
from variantfilter.report import FilterReportFactory
from variantfilter.runners import GeneFilterRunner, SimpleVariantFilterRunner, SparseVariantFilterRunner

logger = logging.getLogger(__name__)


class FilterRunResults(BaseModel):
    """Everything produced by one engine run."""

    variant_evaluations: list[VariantEvaluation] = Field(default_factory=list)
    genes: list[Gene] = Field(default_factory=list)
    filter_reports: list[FilterReport] = Field(default_factory=list)
    filter_counts: list[FilterResultCount] = Field(default_factory=list)

    def passed_variant_evaluations(self) -> list[VariantEvaluation]:
        return [ve for ve in self.variant_evaluations if ve.passed_filters()]

    def passed_genes(self) -> list[Gene]:
        return [gene for gene in self.genes if gene.passed_filters()]


class FilterEngine:
    """
    Engine for variant and gene filtering.

    Can be used as a context manager to close the data service afterwards.
    """

    def __init__(self, settings: FilterSettings, data_service: VariantDataService | None = None) -> None:
        self.settings = settings
        self.data_service = data_service
        factory = FilterFactory(data_service)
        self.variant_filters = factory.make_variant_filters(settings)
        self.gene_filters = factory.make_gene_filters(settings)
        self.report_factory = FilterReportFactory()

    def __enter__(self) -> "FilterEngine":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        close = getattr(self.data_service, "close", None)
        if close is not None:
            close()

    def run(self, variant_evaluations: Iterable[VariantEvaluation]) -> FilterRunResults:
        """Filter variants, group them into genes and filter the genes.

        Returns:
            FilterRunResults with the variants retained by the runner, their
            genes, one report per filter and the per-filter tallies
        """
        if self.settings.run_mode is RunMode.PASS_ONLY:
            variant_runner = SparseVariantFilterRunner()
        else:
            variant_runner = SimpleVariantFilterRunner()

        logger.info(
            f"Running {len(self.variant_filters)} variant filters and {len(self.gene_filters)} gene filters "
            f"in {self.settings.run_mode.value} mode"
        )
        variants = variant_runner.run(self.variant_filters, variant_evaluations)

        genes = genes_from_variants(variants)
        gene_runner = GeneFilterRunner()
        genes = gene_runner.run(self.gene_filters, genes)

        filter_counts = variant_runner.filter_counts() + gene_runner.filter_counts()
        # failing variants are gone in pass-only mode, so only the runner tallies are complete
        report_counts = filter_counts if self.settings.run_mode is RunMode.PASS_ONLY else None
        filter_reports = self.report_factory.make_filter_reports(
            [*self.variant_filters, *self.gene_filters],
            variants,
            genes,
            filter_counts=report_counts,
        )

        return FilterRunResults(
            variant_evaluations=variants,
            genes=genes,
            filter_reports=filter_reports,
            filter_counts=filter_counts,
        )
