"""Filter variants by call quality."""

from typing import ClassVar

from pydantic import Field

from variantfilter.filters.base import VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.variant import VariantEvaluation


class QualityFilter(VariantFilter):
    """Passes variants with a PHRED quality at or above ``min_quality``."""

    FILTER_TYPE: ClassVar[FilterType] = FilterType.QUALITY

    min_quality: float = Field(..., ge=0.0)

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        return self._result(variant_evaluation.phred_score >= self.min_quality)
