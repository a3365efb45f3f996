"""Filter result value types."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FilterType(str, Enum):
    """Identity keys for each kind of filter.

    Iteration order defines the dense index used to store results on a record.
    TARGET is an alias of VARIANT_EFFECT.
    """

    VARIANT_EFFECT = "variant_effect"
    TARGET = "variant_effect"
    FREQUENCY = "frequency"
    KNOWN_VARIANT = "known_variant"
    QUALITY = "quality"
    PATHOGENICITY = "pathogenicity"
    INTERVAL = "interval"
    ENTREZ_GENE_ID = "entrez_gene_id"
    INHERITANCE = "inheritance"
    PRIORITY_SCORE = "priority_score"
    REGULATORY_FEATURE = "regulatory_feature"


FILTER_TYPE_INDEX: dict[FilterType, int] = {
    filter_type: index for index, filter_type in enumerate(FilterType)
}


class FilterResultStatus(str, Enum):
    """Outcome of running a filter. NOT_RUN is neither a pass nor a fail."""

    PASS = "PASS"
    FAIL = "FAIL"
    NOT_RUN = "NOT_RUN"


class FilterResult(BaseModel):
    """Immutable outcome of running one filter on one variant or gene."""

    model_config = ConfigDict(frozen=True)

    filter_type: FilterType
    score: float = Field(..., ge=0.0, le=1.0)
    status: FilterResultStatus

    @classmethod
    def pass_result(cls, filter_type: FilterType) -> "FilterResult":
        return cls(filter_type=filter_type, score=1.0, status=FilterResultStatus.PASS)

    @classmethod
    def fail_result(cls, filter_type: FilterType) -> "FilterResult":
        return cls(filter_type=filter_type, score=0.0, status=FilterResultStatus.FAIL)

    @classmethod
    def not_run(cls, filter_type: FilterType) -> "FilterResult":
        return cls(filter_type=filter_type, score=0.0, status=FilterResultStatus.NOT_RUN)

    def passed(self) -> bool:
        return self.status is FilterResultStatus.PASS

    def failed(self) -> bool:
        return self.status is FilterResultStatus.FAIL

    def was_run(self) -> bool:
        return self.status is not FilterResultStatus.NOT_RUN
