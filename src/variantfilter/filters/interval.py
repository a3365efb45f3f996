"""Restrict variants to a genomic interval."""

import re
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from variantfilter.filters.base import VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.variant import VariantEvaluation, normalize_chromosome

_INTERVAL_PATTERN = re.compile(r"^\s*(?:chr)?([0-9A-Za-z]+):([0-9,]+)-([0-9,]+)\s*$", re.IGNORECASE)


class GeneticInterval(BaseModel):
    """Closed interval [start, end] on one chromosome."""

    model_config = ConfigDict(frozen=True)

    chromosome: str
    start: int = Field(..., ge=1)
    end: int = Field(..., ge=1)

    @field_validator("chromosome", mode="before")
    @classmethod
    def _normalize_chromosome(cls, value: Any) -> str:
        return normalize_chromosome(value)

    @model_validator(mode="after")
    def _check_bounds(self) -> "GeneticInterval":
        if self.start > self.end:
            raise ValueError(f"Interval start {self.start} is after end {self.end}")
        return self

    @classmethod
    def parse(cls, interval: str) -> "GeneticInterval":
        """Parse an interval such as 'chr7:155595590-155604810'."""
        match = _INTERVAL_PATTERN.match(interval)
        if not match:
            raise ValueError(f"Unable to parse genetic interval '{interval}'")
        chromosome, start, end = match.groups()
        return cls(
            chromosome=chromosome,
            start=int(start.replace(",", "")),
            end=int(end.replace(",", "")),
        )

    def contains(self, chromosome: str, position: int) -> bool:
        return (
            normalize_chromosome(chromosome) == self.chromosome
            and self.start <= position <= self.end
        )

    def __str__(self) -> str:
        return f"chr{self.chromosome}:{self.start}-{self.end}"


class IntervalFilter(VariantFilter):
    """Passes variants located inside ``interval``."""

    FILTER_TYPE: ClassVar[FilterType] = FilterType.INTERVAL

    interval: GeneticInterval

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        return self._result(
            self.interval.contains(variant_evaluation.chromosome, variant_evaluation.position)
        )
