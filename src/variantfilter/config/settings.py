"""Filter settings and their YAML loader.

Only options that are set produce a filter; anything left as None is skipped.
Invalid values are rejected when the settings are built, before any variant
is seen.
"""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from variantfilter.filters.interval import GeneticInterval
from variantfilter.models.frequency import ALL_FREQUENCY_SOURCES, FrequencySource
from variantfilter.models.inheritance import ModeOfInheritance, as_mode_set
from variantfilter.models.pathogenicity import ALL_PATHOGENICITY_SOURCES, PathogenicitySource
from variantfilter.models.variant import VariantEffect


class RunMode(str, Enum):
    """Which variant runner to use.

    FULL keeps every variant with every result, PASS_ONLY drops variants at
    their first failure.
    """

    FULL = "full"
    PASS_ONLY = "pass_only"


class FilterSettings(BaseModel):
    """Options controlling which filters are built and how they run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_frequency: float | None = Field(
        None, ge=0.0, le=100.0, description="Maximum allele frequency, as a percentage"
    )
    remove_known_variants: bool = Field(
        False, description="Remove variants present in any population database"
    )
    frequency_sources: frozenset[FrequencySource] = Field(default=ALL_FREQUENCY_SOURCES)
    min_quality: float | None = Field(None, ge=0.0, description="Minimum PHRED quality")
    genetic_interval: GeneticInterval | None = None
    pathogenicity_pass_all: bool | None = Field(
        None, description="Score pathogenicity but keep non-pathogenic variants; None disables the filter"
    )
    pathogenicity_sources: frozenset[PathogenicitySource] = Field(default=ALL_PATHOGENICITY_SOURCES)
    off_target_effects: frozenset[VariantEffect] | None = None
    genes_to_keep: frozenset[int] | None = Field(None, min_length=1)
    remove_non_regulatory_non_coding: bool = False
    desired_inheritance_modes: frozenset[ModeOfInheritance] | None = Field(
        None, description="Keep genes compatible with any of these modes; a single mode is accepted"
    )
    min_priority_score: float | None = Field(None, ge=0.0, le=1.0)
    priority_type: str = "combined"
    run_mode: RunMode = RunMode.FULL

    @field_validator("genetic_interval", mode="before")
    @classmethod
    def _parse_interval(cls, value: Any) -> Any:
        if isinstance(value, str):
            return GeneticInterval.parse(value)
        return value

    @field_validator("desired_inheritance_modes", mode="before")
    @classmethod
    def _single_mode_as_set(cls, value: Any) -> Any:
        return as_mode_set(value)


def load_filter_settings(path: str | Path) -> FilterSettings:
    """Load filter settings from a YAML file.

    An empty file yields default settings, i.e. no filters.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If any option is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Filter settings file not found: {config_path}")

    with open(config_path) as f:
        config = yaml.safe_load(f)

    return FilterSettings(**(config or {}))
