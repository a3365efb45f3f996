"""Per-record storage of filter results shared by variants and genes."""

from pydantic import BaseModel, PrivateAttr

from variantfilter.models.filter_result import (
    FILTER_TYPE_INDEX,
    FilterResult,
    FilterResultStatus,
    FilterType,
)


def _empty_results() -> list[FilterResult | None]:
    return [None] * len(FILTER_TYPE_INDEX)


class Filterable(BaseModel):
    """Base for records that filters write results onto.

    Results live in a fixed-size list indexed by FilterType. Each slot holds
    the latest result written for that type.
    """

    _filter_results: list[FilterResult | None] = PrivateAttr(default_factory=_empty_results)

    # records are mutable entities: equal only to themselves
    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def add_filter_result(self, filter_result: FilterResult) -> bool:
        """Record a result, replacing any earlier result of the same type.

        Returns True if the result was a pass.
        """
        self._filter_results[FILTER_TYPE_INDEX[filter_result.filter_type]] = filter_result
        return filter_result.passed()

    def filter_result(self, filter_type: FilterType) -> FilterResult | None:
        return self._filter_results[FILTER_TYPE_INDEX[filter_type]]

    def filter_results(self) -> dict[FilterType, FilterResult]:
        return {
            result.filter_type: result
            for result in self._filter_results
            if result is not None
        }

    def passed_filters(self) -> bool:
        """True unless a recorded result failed. No results at all counts as passed."""
        return not any(
            result is not None and result.status is FilterResultStatus.FAIL
            for result in self._filter_results
        )

    def passed_filter(self, filter_type: FilterType) -> bool:
        result = self.filter_result(filter_type)
        return result is not None and result.passed()

    def failed_filter(self, filter_type: FilterType) -> bool:
        result = self.filter_result(filter_type)
        return result is not None and result.failed()

    def passed_filter_types(self) -> set[FilterType]:
        return {r.filter_type for r in self._filter_results if r is not None and r.passed()}

    def failed_filter_types(self) -> set[FilterType]:
        return {r.filter_type for r in self._filter_results if r is not None and r.failed()}

    def is_unfiltered(self) -> bool:
        return all(result is None for result in self._filter_results)
