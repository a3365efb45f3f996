"""Filter report models."""

from pydantic import BaseModel, ConfigDict, Field

from variantfilter.models.filter_result import FilterType


class FilterResultCount(BaseModel):
    """Running pass/fail tally for one filter during a run."""

    filter_type: FilterType
    pass_count: int = 0
    fail_count: int = 0


class FilterReport(BaseModel):
    """Summary of how many records passed and failed one filter."""

    model_config = ConfigDict(frozen=True)

    filter_type: FilterType
    passed: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    messages: tuple[str, ...] = ()

    def __str__(self) -> str:
        lines = [f"{self.filter_type.value}: passed={self.passed} failed={self.failed}"]
        lines.extend(f"  {message}" for message in self.messages)
        return "\n".join(lines)
