"""Interface to external variant annotation sources."""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping

from variantfilter.models.frequency import FrequencyData, FrequencySource
from variantfilter.models.pathogenicity import PathogenicityData, PathogenicitySource
from variantfilter.models.variant import VariantEvaluation


class VariantDataServiceError(Exception):
    """Raised when annotation for a variant cannot be retrieved."""

    pass


class VariantDataService(ABC):
    """Source of frequency and pathogenicity annotation.

    Implementations must not modify the variant they are given and must return
    data restricted to the requested sources.
    """

    @abstractmethod
    def fetch_frequency_data(
        self,
        variant_evaluation: VariantEvaluation,
        sources: frozenset[FrequencySource],
    ) -> FrequencyData:
        """Frequency data for the variant, limited to ``sources``."""

    @abstractmethod
    def fetch_pathogenicity_data(
        self,
        variant_evaluation: VariantEvaluation,
        sources: frozenset[PathogenicitySource],
    ) -> PathogenicityData:
        """Pathogenicity data for the variant, limited to ``sources``."""


VariantKey = tuple[str, int, str, str]


class InMemoryVariantDataService(VariantDataService):
    """Data service backed by pre-loaded annotation keyed on variant_key()."""

    def __init__(
        self,
        frequency_data: Mapping[VariantKey, FrequencyData] | None = None,
        pathogenicity_data: Mapping[VariantKey, PathogenicityData] | None = None,
    ) -> None:
        self._frequency_data: dict[VariantKey, FrequencyData] = dict(frequency_data or {})
        self._pathogenicity_data: dict[VariantKey, PathogenicityData] = dict(pathogenicity_data or {})

    def add_frequency_data(self, key: VariantKey, data: FrequencyData) -> None:
        self._frequency_data[key] = data

    def add_pathogenicity_data(self, key: VariantKey, data: PathogenicityData) -> None:
        self._pathogenicity_data[key] = data

    def fetch_frequency_data(
        self,
        variant_evaluation: VariantEvaluation,
        sources: Iterable[FrequencySource],
    ) -> FrequencyData:
        data = self._frequency_data.get(variant_evaluation.variant_key(), FrequencyData.empty())
        return data.restricted_to(sources)

    def fetch_pathogenicity_data(
        self,
        variant_evaluation: VariantEvaluation,
        sources: Iterable[PathogenicitySource],
    ) -> PathogenicityData:
        data = self._pathogenicity_data.get(variant_evaluation.variant_key(), PathogenicityData.empty())
        return data.restricted_to(sources)
