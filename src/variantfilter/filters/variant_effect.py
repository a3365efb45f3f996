"""Filter variants by functional effect."""

from typing import ClassVar

from pydantic import Field

from variantfilter.filters.base import VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.variant import VariantEffect, VariantEvaluation

# Effects considered off-target for an exome analysis.
DEFAULT_OFF_TARGET_EFFECTS: frozenset[VariantEffect] = frozenset({
    VariantEffect.FIVE_PRIME_UTR_EXON_VARIANT,
    VariantEffect.FIVE_PRIME_UTR_INTRON_VARIANT,
    VariantEffect.THREE_PRIME_UTR_EXON_VARIANT,
    VariantEffect.THREE_PRIME_UTR_INTRON_VARIANT,
    VariantEffect.NON_CODING_TRANSCRIPT_EXON_VARIANT,
    VariantEffect.NON_CODING_TRANSCRIPT_INTRON_VARIANT,
    VariantEffect.CODING_TRANSCRIPT_INTRON_VARIANT,
    VariantEffect.SYNONYMOUS_VARIANT,
    VariantEffect.DOWNSTREAM_GENE_VARIANT,
    VariantEffect.UPSTREAM_GENE_VARIANT,
    VariantEffect.INTERGENIC_VARIANT,
    VariantEffect.REGULATORY_REGION_VARIANT,
})


class VariantEffectFilter(VariantFilter):
    """Fails variants whose effect is in the off-target set."""

    FILTER_TYPE: ClassVar[FilterType] = FilterType.VARIANT_EFFECT

    off_target_effects: frozenset[VariantEffect] = Field(default=DEFAULT_OFF_TARGET_EFFECTS)

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        return self._result(variant_evaluation.variant_effect not in self.off_target_effects)
