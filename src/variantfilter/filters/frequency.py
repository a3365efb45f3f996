"""Filter variants by population frequency.

Both filters read ``VariantEvaluation.frequency_data`` and so must run after
a frequency data provider step has attached it.
"""

import logging
from typing import ClassVar

from pydantic import Field

from variantfilter.filters.base import VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.frequency import FrequencyData
from variantfilter.models.variant import VariantEvaluation

logger = logging.getLogger(__name__)


class FrequencyFilter(VariantFilter):
    """Fails variants more common than ``max_frequency`` percent in any source.

    Variants with no frequency data pass. With ``remove_known_variants`` set,
    any variant represented in a population database fails regardless of its
    frequency.
    """

    FILTER_TYPE: ClassVar[FilterType] = FilterType.FREQUENCY

    max_frequency: float = Field(..., ge=0.0, le=100.0)
    remove_known_variants: bool = False

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        frequency_data = variant_evaluation.frequency_data
        if frequency_data is None:
            logger.debug(f"{variant_evaluation.variant_key()} has no frequency data - passing")
            return self._result(True)
        return self._result(self.passes_filter(frequency_data))

    def passes_filter(self, frequency_data: FrequencyData) -> bool:
        if self.remove_known_variants and frequency_data.is_represented_in_database():
            return False
        return not frequency_data.has_frequency_over(self.max_frequency)


class KnownVariantFilter(VariantFilter):
    """Fails any variant with an rs id or a known population frequency."""

    FILTER_TYPE: ClassVar[FilterType] = FilterType.KNOWN_VARIANT

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        frequency_data = variant_evaluation.frequency_data
        if frequency_data is None:
            return self._result(True)
        return self._result(not frequency_data.is_represented_in_database())
