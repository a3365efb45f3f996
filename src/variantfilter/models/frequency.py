"""Population frequency annotation models.

Frequencies are expressed as percentages (0-100), not fractions.
"""

import math
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


class FrequencySource(str, Enum):
    """Population datasets a frequency can come from."""

    THOUSAND_GENOMES = "THOUSAND_GENOMES"
    TOPMED = "TOPMED"
    UK10K = "UK10K"

    ESP_AFRICAN_AMERICAN = "ESP_AFRICAN_AMERICAN"
    ESP_EUROPEAN_AMERICAN = "ESP_EUROPEAN_AMERICAN"
    ESP_ALL = "ESP_ALL"

    EXAC_AFRICAN_INC_AFRICAN_AMERICAN = "EXAC_AFRICAN_INC_AFRICAN_AMERICAN"
    EXAC_AMERICAN = "EXAC_AMERICAN"
    EXAC_EAST_ASIAN = "EXAC_EAST_ASIAN"
    EXAC_FINNISH = "EXAC_FINNISH"
    EXAC_NON_FINNISH_EUROPEAN = "EXAC_NON_FINNISH_EUROPEAN"
    EXAC_OTHER = "EXAC_OTHER"
    EXAC_SOUTH_ASIAN = "EXAC_SOUTH_ASIAN"

    GNOMAD_E_AFR = "GNOMAD_E_AFR"
    GNOMAD_E_AMR = "GNOMAD_E_AMR"
    GNOMAD_E_ASJ = "GNOMAD_E_ASJ"
    GNOMAD_E_EAS = "GNOMAD_E_EAS"
    GNOMAD_E_FIN = "GNOMAD_E_FIN"
    GNOMAD_E_NFE = "GNOMAD_E_NFE"
    GNOMAD_E_OTH = "GNOMAD_E_OTH"
    GNOMAD_E_SAS = "GNOMAD_E_SAS"

    GNOMAD_G_AFR = "GNOMAD_G_AFR"
    GNOMAD_G_AMR = "GNOMAD_G_AMR"
    GNOMAD_G_ASJ = "GNOMAD_G_ASJ"
    GNOMAD_G_EAS = "GNOMAD_G_EAS"
    GNOMAD_G_FIN = "GNOMAD_G_FIN"
    GNOMAD_G_NFE = "GNOMAD_G_NFE"
    GNOMAD_G_OTH = "GNOMAD_G_OTH"
    GNOMAD_G_SAS = "GNOMAD_G_SAS"

    def is_esp(self) -> bool:
        return self.name.startswith("ESP_")

    def is_exac(self) -> bool:
        return self.name.startswith("EXAC_")

    def is_gnomad(self) -> bool:
        return self.name.startswith("GNOMAD_")


ALL_FREQUENCY_SOURCES: frozenset[FrequencySource] = frozenset(FrequencySource)

_VERY_RARE_SCORE = 1.0
_NOT_RARE_SCORE = 0.0


class Frequency(BaseModel):
    """Allele frequency, as a percentage, observed in one population source."""

    model_config = ConfigDict(frozen=True)

    source: FrequencySource
    frequency: float = Field(..., ge=0.0, le=100.0)


class FrequencyData(BaseModel):
    """Known population frequencies and dbSNP identifier for a variant."""

    model_config = ConfigDict(frozen=True)

    rs_id: str | None = None
    frequencies: tuple[Frequency, ...] = ()

    @classmethod
    def empty(cls) -> "FrequencyData":
        return cls()

    @classmethod
    def of(cls, *frequencies: Frequency, rs_id: str | None = None) -> "FrequencyData":
        return cls(rs_id=rs_id, frequencies=tuple(frequencies))

    def is_represented_in_database(self) -> bool:
        """True if the variant has an rs id or any frequency, regardless of value."""
        return self.has_dbsnp_rs_id() or self.has_known_frequency()

    def has_known_frequency(self) -> bool:
        return len(self.frequencies) > 0

    def has_dbsnp_rs_id(self) -> bool:
        return bool(self.rs_id)

    def has_dbsnp_data(self) -> bool:
        return any(f.source is FrequencySource.THOUSAND_GENOMES for f in self.frequencies)

    def has_esp_data(self) -> bool:
        return any(f.source.is_esp() for f in self.frequencies)

    def has_exac_data(self) -> bool:
        return any(f.source.is_exac() for f in self.frequencies)

    def has_gnomad_data(self) -> bool:
        return any(f.source.is_gnomad() for f in self.frequencies)

    def sources(self) -> frozenset[FrequencySource]:
        return frozenset(f.source for f in self.frequencies)

    def frequency_for_source(self, source: FrequencySource) -> Frequency | None:
        for frequency in self.frequencies:
            if frequency.source is source:
                return frequency
        return None

    def max_freq(self) -> float:
        """Highest known frequency, or 0 when there is no frequency data."""
        return max((f.frequency for f in self.frequencies), default=0.0)

    def has_frequency_over(self, max_freq: float) -> bool:
        return any(f.frequency > max_freq for f in self.frequencies)

    def score(self) -> float:
        """Rarity score in [0, 1]; the rarer the variant, the closer to 1."""
        max_freq = self.max_freq()
        if max_freq <= 0:
            return _VERY_RARE_SCORE
        if max_freq > 2:
            return _NOT_RARE_SCORE
        return 1.13533 - (0.13533 * math.exp(max_freq))

    def restricted_to(self, sources: Iterable[FrequencySource]) -> "FrequencyData":
        """Copy of this data holding only frequencies from the given sources.

        The rs id is kept since it does not belong to any single source.
        """
        wanted = frozenset(sources)
        kept = tuple(f for f in self.frequencies if f.source in wanted)
        if len(kept) == len(self.frequencies):
            return self
        return FrequencyData(rs_id=self.rs_id, frequencies=kept)
