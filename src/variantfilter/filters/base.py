"""Filter capability shapes.

A filter is either a VariantFilter or a GeneFilter. Runners dispatch on the
``target`` tag rather than on class hierarchy.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from variantfilter.models.filter_result import FilterResult, FilterType
from variantfilter.models.gene import Gene
from variantfilter.models.variant import VariantEvaluation


class FilterTarget(str, Enum):
    """What kind of record a filter runs on."""

    VARIANT = "variant"
    GENE = "gene"


class VariantFilter(BaseModel, ABC):
    """Predicate over a single variant.

    Must depend only on the variant's own annotation state.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    target: ClassVar[FilterTarget] = FilterTarget.VARIANT
    FILTER_TYPE: ClassVar[FilterType]

    @property
    def filter_type(self) -> FilterType:
        return self.FILTER_TYPE

    @abstractmethod
    def run_filter(self, variant_evaluation: VariantEvaluation) -> FilterResult:
        """Evaluate the variant. Must not mutate other records."""

    def _result(self, passed: bool) -> FilterResult:
        if passed:
            return FilterResult.pass_result(self.filter_type)
        return FilterResult.fail_result(self.filter_type)


class GeneFilter(BaseModel, ABC):
    """Predicate over a gene whose variants have already been filtered.

    May read, but not modify, the gene's variants.
    """

    model_config = ConfigDict(frozen=True)

    target: ClassVar[FilterTarget] = FilterTarget.GENE
    FILTER_TYPE: ClassVar[FilterType]

    @property
    def filter_type(self) -> FilterType:
        return self.FILTER_TYPE

    @abstractmethod
    def run_filter(self, gene: Gene) -> FilterResult:
        """Evaluate the gene."""

    def _result(self, passed: bool) -> FilterResult:
        if passed:
            return FilterResult.pass_result(self.filter_type)
        return FilterResult.fail_result(self.filter_type)


Filter = VariantFilter | GeneFilter
