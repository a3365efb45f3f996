"""Variant and gene filters."""

from variantfilter.filters.base import Filter, FilterTarget, GeneFilter, VariantFilter
from variantfilter.filters.frequency import FrequencyFilter, KnownVariantFilter
from variantfilter.filters.gene_id import EntrezGeneIdFilter
from variantfilter.filters.inheritance import InheritanceFilter, VariantInheritanceFilter
from variantfilter.filters.interval import GeneticInterval, IntervalFilter
from variantfilter.filters.pathogenicity import PathogenicityFilter
from variantfilter.filters.priority_score import PriorityScoreFilter, VariantPriorityScoreFilter
from variantfilter.filters.providers import (
    DataProvidedVariantFilter,
    FrequencyDataProvider,
    PathogenicityDataProvider,
    unwrap,
)
from variantfilter.filters.quality import QualityFilter
from variantfilter.filters.regulatory import RegulatoryFeatureFilter
from variantfilter.filters.variant_effect import DEFAULT_OFF_TARGET_EFFECTS, VariantEffectFilter

__all__ = [
    "Filter",
    "FilterTarget",
    "VariantFilter",
    "GeneFilter",
    "VariantEffectFilter",
    "DEFAULT_OFF_TARGET_EFFECTS",
    "FrequencyFilter",
    "KnownVariantFilter",
    "QualityFilter",
    "PathogenicityFilter",
    "GeneticInterval",
    "IntervalFilter",
    "EntrezGeneIdFilter",
    "InheritanceFilter",
    "VariantInheritanceFilter",
    "PriorityScoreFilter",
    "VariantPriorityScoreFilter",
    "RegulatoryFeatureFilter",
    "FrequencyDataProvider",
    "PathogenicityDataProvider",
    "DataProvidedVariantFilter",
    "unwrap",
]
