"""Filter genes, or variants, by compatibility with a set of inheritance modes.

Compatibility sets are computed upstream. Until that has happened the
desired modes should be left empty and the filter reports NOT_RUN.
"""

from typing import Any, ClassVar

from pydantic import field_validator

from variantfilter.filters.base import GeneFilter, VariantFilter
from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.gene import Gene
from variantfilter.models.inheritance import ModeOfInheritance, as_mode_set
from variantfilter.models.variant import VariantEvaluation


def _inheritance_result(
    modes: frozenset[ModeOfInheritance],
    compatible_modes: set[ModeOfInheritance],
) -> FilterResult:
    specified = {mode for mode in modes if mode.is_specified()}
    if not specified:
        return FilterResult.not_run(FilterType.INHERITANCE)
    if specified & compatible_modes:
        return FilterResult.pass_result(FilterType.INHERITANCE)
    return FilterResult.fail_result(FilterType.INHERITANCE)


class InheritanceFilter(GeneFilter):
    """Passes genes compatible with any of ``modes``.

    ANY and UNINITIALIZED are ignored; with nothing else requested the
    filter is not run.
    """

    FILTER_TYPE: ClassVar[FilterType] = FilterType.INHERITANCE

    modes: frozenset[ModeOfInheritance]

    @field_validator("modes", mode="before")
    @classmethod
    def _as_set(cls, value: Any) -> Any:
        return as_mode_set(value)

    def run_filter(self, gene: Gene) -> FilterResult:
        return _inheritance_result(self.modes, gene.compatible_inheritance_modes)


class VariantInheritanceFilter(VariantFilter):
    """Passes variants compatible with any of ``modes``."""

    FILTER_TYPE: ClassVar[FilterType] = FilterType.INHERITANCE

    modes: frozenset[ModeOfInheritance]

    @field_validator("modes", mode="before")
    @classmethod
    def _as_set(cls, value: Any) -> Any:
        return as_mode_set(value)

    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        return _inheritance_result(self.modes, variant_evaluation.compatible_inheritance_modes)
