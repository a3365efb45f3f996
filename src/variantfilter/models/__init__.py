"""Data models for variant filtering."""

from variantfilter.models.filter_result import FilterResult, FilterResultStatus, FilterType
from variantfilter.models.frequency import (
    ALL_FREQUENCY_SOURCES,
    Frequency,
    FrequencyData,
    FrequencySource,
)
from variantfilter.models.gene import Gene, genes_from_variants
from variantfilter.models.inheritance import ModeOfInheritance
from variantfilter.models.pathogenicity import (
    ALL_PATHOGENICITY_SOURCES,
    PathogenicityData,
    PathogenicityScore,
    PathogenicitySource,
)
from variantfilter.models.report import FilterReport, FilterResultCount
from variantfilter.models.variant import VariantEffect, VariantEvaluation

__all__ = [
    "FilterType",
    "FilterResultStatus",
    "FilterResult",
    "FrequencySource",
    "Frequency",
    "FrequencyData",
    "ALL_FREQUENCY_SOURCES",
    "PathogenicitySource",
    "PathogenicityScore",
    "PathogenicityData",
    "ALL_PATHOGENICITY_SOURCES",
    "ModeOfInheritance",
    "VariantEffect",
    "VariantEvaluation",
    "Gene",
    "genes_from_variants",
    "FilterReport",
    "FilterResultCount",
]
