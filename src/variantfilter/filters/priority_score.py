"""Filter genes, or variants, on an externally computed priority score."""

from typing import ClassVar

from pydantic import Field

from variantfilter.filters.base import GeneFilter, VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.gene import Gene
from variantfilter.models.variant import VariantEvaluation


class PriorityScoreFilter(GeneFilter):
    """Passes genes whose priority score is at least ``min_priority_score``.

    An unset score is 0.
    """

    FILTER_TYPE: ClassVar[FilterType] = FilterType.PRIORITY_SCORE

    min_priority_score: float = Field(..., ge=0.0, le=1.0)
    priority_type: str = "combined"

    def run_filter(self, gene: Gene) -> FilterResult:
        return self._result(gene.priority_score >= self.min_priority_score)


class VariantPriorityScoreFilter(VariantFilter):
    """Variant-level counterpart of PriorityScoreFilter."""

    FILTER_TYPE: ClassVar[FilterType] = FilterType.PRIORITY_SCORE

    min_priority_score: float = Field(..., ge=0.0, le=1.0)
    priority_type: str = "combined"

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        return self._result(variant_evaluation.priority_score >= self.min_priority_score)
