"""Attach external annotation to a variant before a filter reads it.

A provided filter is an ordered tuple of annotation steps followed by a pure
predicate. Steps only write the annotation fields of the variant they are
given.

Each step remembers which sources the variant's annotation was restricted
to. Re-running with the same sources does nothing and a narrower request
trims the existing data without fetching. Annotation supplied on the variant
before any step ran is kept, trimmed to the requested sources. Anything else
fetches again.
"""

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from variantfilter.api.data_service import VariantDataService, VariantDataServiceError
from variantfilter.filters.base import VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.frequency import ALL_FREQUENCY_SOURCES, FrequencySource
from variantfilter.models.pathogenicity import ALL_PATHOGENICITY_SOURCES, PathogenicitySource
from variantfilter.models.variant import VariantEvaluation

logger = logging.getLogger(__name__)


class FrequencyDataProvider(BaseModel):
    """Annotation step attaching frequency data for ``sources``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data_service: VariantDataService
    sources: frozenset[FrequencySource] = Field(default=ALL_FREQUENCY_SOURCES)

    def annotate(self, variant_evaluation: VariantEvaluation) -> None:
        previous = variant_evaluation.frequency_request
        if previous == self.sources:
            return
        if variant_evaluation.frequency_data is not None and (previous is None or previous > self.sources):
            variant_evaluation.set_frequency_data(
                variant_evaluation.frequency_data.restricted_to(self.sources), self.sources
            )
            return
        try:
            frequency_data = self.data_service.fetch_frequency_data(variant_evaluation, self.sources)
        except VariantDataServiceError as e:
            logger.warning(
                f"Frequency data unavailable for {variant_evaluation.variant_key()}, treating as absent: {e}"
            )
            variant_evaluation.set_frequency_data(None)
            return
        variant_evaluation.set_frequency_data(frequency_data.restricted_to(self.sources), self.sources)


class PathogenicityDataProvider(BaseModel):
    """Annotation step attaching pathogenicity predictions for ``sources``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data_service: VariantDataService
    sources: frozenset[PathogenicitySource] = Field(default=ALL_PATHOGENICITY_SOURCES)

    def annotate(self, variant_evaluation: VariantEvaluation) -> None:
        previous = variant_evaluation.pathogenicity_request
        if previous == self.sources:
            return
        if variant_evaluation.pathogenicity_data is not None and (previous is None or previous > self.sources):
            variant_evaluation.set_pathogenicity_data(
                variant_evaluation.pathogenicity_data.restricted_to(self.sources), self.sources
            )
            return
        try:
            pathogenicity_data = self.data_service.fetch_pathogenicity_data(variant_evaluation, self.sources)
        except VariantDataServiceError as e:
            logger.warning(
                f"Pathogenicity data unavailable for {variant_evaluation.variant_key()}, treating as absent: {e}"
            )
            variant_evaluation.set_pathogenicity_data(None)
            return
        variant_evaluation.set_pathogenicity_data(
            pathogenicity_data.restricted_to(self.sources), self.sources
        )


AnnotationStep = FrequencyDataProvider | PathogenicityDataProvider


class DataProvidedVariantFilter(VariantFilter):
    """Runs annotation steps in order, then delegates to ``variant_filter``.

    Reports the wrapped filter's type and returns its result unchanged.
    """

    FILTER_TYPE: ClassVar[FilterType | None] = None

    steps: tuple[AnnotationStep, ...]
    variant_filter: VariantFilter

    @property
    def filter_type(self) -> FilterType:
        return self.variant_filter.filter_type

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        for step in self.steps:
            step.annotate(variant_evaluation)
        return self.variant_filter.run_filter(variant_evaluation)


def unwrap(variant_filter: VariantFilter) -> VariantFilter:
    """The predicate inside a provided filter, or the filter itself."""
    if isinstance(variant_filter, DataProvidedVariantFilter):
        return variant_filter.variant_filter
    return variant_filter
