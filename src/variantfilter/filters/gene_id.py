"""Keep only variants in an allow-list of genes."""

from typing import ClassVar

from pydantic import Field

from variantfilter.filters.base import VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.variant import VariantEvaluation


class EntrezGeneIdFilter(VariantFilter):
    """Passes variants whose Entrez gene id is in ``gene_ids``."""

    FILTER_TYPE: ClassVar[FilterType] = FilterType.ENTREZ_GENE_ID

    gene_ids: frozenset[int] = Field(..., min_length=1)

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        return self._result(variant_evaluation.entrez_gene_id in self.gene_ids)
