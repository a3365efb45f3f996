"""Score variants by predicted pathogenicity.

Reads ``VariantEvaluation.pathogenicity_data``, attached by a pathogenicity
data provider step. Without it the effect-class default is used.
"""

from typing import ClassVar

from variantfilter.filters.base import VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterResultStatus, FilterType
from variantfilter.models.variant import (
    PATHOGENIC_EFFECTS,
    VariantEvaluation,
    default_pathogenicity_score,
)


class PathogenicityFilter(VariantFilter):
    """Always scores, and passes variants of a pathogenic-capable effect class.

    With ``keep_non_pathogenic`` set every variant passes, so the filter only
    contributes its score.
    """

    FILTER_TYPE: ClassVar[FilterType] = FilterType.PATHOGENICITY

    keep_non_pathogenic: bool = False

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        score = self.calculate_score(variant_evaluation)
        if self.keep_non_pathogenic or variant_evaluation.variant_effect in PATHOGENIC_EFFECTS:
            status = FilterResultStatus.PASS
        else:
            status = FilterResultStatus.FAIL
        return FilterResult(filter_type=self.filter_type, score=score, status=status)

    @staticmethod
    def calculate_score(variant_evaluation: VariantEvaluation) -> float:
        """Most pathogenic predictor score, falling back to the effect default."""
        pathogenicity_data = variant_evaluation.pathogenicity_data
        if pathogenicity_data is not None:
            score = pathogenicity_data.most_pathogenic_score()
            if score is not None:
                return score
        return default_pathogenicity_score(variant_evaluation.variant_effect)
