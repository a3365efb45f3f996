"""Build ordered filter lists from FilterSettings."""

import logging

from variantfilter.api.data_service import VariantDataService
from variantfilter.config.settings import FilterSettings
from variantfilter.filters.base import GeneFilter, VariantFilter
from variantfilter.filters.frequency import FrequencyFilter, KnownVariantFilter
from variantfilter.filters.gene_id import EntrezGeneIdFilter
from variantfilter.filters.inheritance import InheritanceFilter
from variantfilter.filters.interval import IntervalFilter
from variantfilter.filters.pathogenicity import PathogenicityFilter
from variantfilter.filters.priority_score import PriorityScoreFilter
from variantfilter.filters.providers import (
    DataProvidedVariantFilter,
    FrequencyDataProvider,
    PathogenicityDataProvider,
)
from variantfilter.filters.quality import QualityFilter
from variantfilter.filters.regulatory import RegulatoryFeatureFilter
from variantfilter.filters.variant_effect import VariantEffectFilter

logger = logging.getLogger(__name__)


class FilterConfigurationError(Exception):
    """Raised when the requested filters cannot be built as configured."""

    pass


class FilterFactory:
    """Turns settings into variant and gene filter lists.

    Variant filters are ordered cheapest first: gene id, interval, effect and
    quality need no lookups, then the frequency and pathogenicity filters,
    which are composed with the data provider steps they depend on. Gene
    filters are kept in a separate list.
    """

    def __init__(self, data_service: VariantDataService | None = None) -> None:
        self.data_service = data_service

    def make_variant_filters(self, settings: FilterSettings) -> list[VariantFilter]:
        filters: list[VariantFilter] = []

        if settings.genes_to_keep is not None:
            filters.append(EntrezGeneIdFilter(gene_ids=settings.genes_to_keep))

        if settings.genetic_interval is not None:
            filters.append(IntervalFilter(interval=settings.genetic_interval))

        if settings.off_target_effects is not None:
            filters.append(VariantEffectFilter(off_target_effects=settings.off_target_effects))

        if settings.min_quality is not None:
            filters.append(QualityFilter(min_quality=settings.min_quality))

        if settings.remove_known_variants:
            filters.append(self._with_frequency_data(KnownVariantFilter(), settings))

        if settings.max_frequency is not None:
            frequency_filter = FrequencyFilter(
                max_frequency=settings.max_frequency,
                remove_known_variants=settings.remove_known_variants,
            )
            filters.append(self._with_frequency_data(frequency_filter, settings))

        if settings.pathogenicity_pass_all is not None:
            pathogenicity_filter = PathogenicityFilter(keep_non_pathogenic=settings.pathogenicity_pass_all)
            filters.append(self._with_pathogenicity_data(pathogenicity_filter, settings))

        if settings.remove_non_regulatory_non_coding:
            filters.append(RegulatoryFeatureFilter())

        logger.debug(f"Built variant filters: {[f.filter_type.value for f in filters]}")
        return filters

    def make_gene_filters(self, settings: FilterSettings) -> list[GeneFilter]:
        filters: list[GeneFilter] = []

        if settings.min_priority_score is not None:
            filters.append(
                PriorityScoreFilter(
                    min_priority_score=settings.min_priority_score,
                    priority_type=settings.priority_type,
                )
            )

        if settings.desired_inheritance_modes is not None:
            filters.append(InheritanceFilter(modes=settings.desired_inheritance_modes))

        logger.debug(f"Built gene filters: {[f.filter_type.value for f in filters]}")
        return filters

    def _require_data_service(self, variant_filter: VariantFilter) -> VariantDataService:
        if self.data_service is None:
            raise FilterConfigurationError(
                f"{variant_filter.filter_type.value} filter requires a variant data service"
            )
        return self.data_service

    def _with_frequency_data(self, variant_filter: VariantFilter, settings: FilterSettings) -> VariantFilter:
        data_service = self._require_data_service(variant_filter)
        if not settings.frequency_sources:
            raise FilterConfigurationError(
                f"{variant_filter.filter_type.value} filter requires at least one frequency source"
            )
        provider = FrequencyDataProvider(data_service=data_service, sources=settings.frequency_sources)
        return DataProvidedVariantFilter(steps=(provider,), variant_filter=variant_filter)

    def _with_pathogenicity_data(self, variant_filter: VariantFilter, settings: FilterSettings) -> VariantFilter:
        data_service = self._require_data_service(variant_filter)
        provider = PathogenicityDataProvider(data_service=data_service, sources=settings.pathogenicity_sources)
        return DataProvidedVariantFilter(steps=(provider,), variant_filter=variant_filter)
