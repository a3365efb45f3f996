"""Drop non-coding variants that fall outside known regulatory regions."""

from typing import ClassVar

from variantfilter.filters.base import VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.variant import VariantEffect, VariantEvaluation

_NON_CODING_EFFECTS = frozenset({
    VariantEffect.INTERGENIC_VARIANT,
    VariantEffect.UPSTREAM_GENE_VARIANT,
})


class RegulatoryFeatureFilter(VariantFilter):
    """Fails intergenic and upstream variants unless they are in a regulatory region."""

    FILTER_TYPE: ClassVar[FilterType] = FilterType.REGULATORY_FEATURE

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        if variant_evaluation.variant_effect in _NON_CODING_EFFECTS:
            return self._result(variant_evaluation.is_regulatory_region)
        return self._result(True)
