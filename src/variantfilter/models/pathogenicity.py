"""Pathogenicity prediction models."""

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


class PathogenicitySource(str, Enum):
    """Predictors a pathogenicity score can come from."""

    POLYPHEN = "POLYPHEN"
    MUTATION_TASTER = "MUTATION_TASTER"
    SIFT = "SIFT"
    CADD = "CADD"
    REVEL = "REVEL"
    MVP = "MVP"
    REMM = "REMM"


ALL_PATHOGENICITY_SOURCES: frozenset[PathogenicitySource] = frozenset(PathogenicitySource)


def cadd_phred_to_score(phred: float) -> float:
    """Convert a CADD phred-scaled score to a probability-like value in [0, 1]."""
    return 1 - 10 ** (-phred / 10)


class PathogenicityScore(BaseModel):
    """Score from a single predictor.

    SIFT is stored as the raw SIFT value (lower is more damaging); every other
    source is stored so that higher is more pathogenic.
    """

    model_config = ConfigDict(frozen=True)

    source: PathogenicitySource
    score: float = Field(..., ge=0.0, le=1.0)

    def normalized(self) -> float:
        """Score on a common scale where 1.0 is the most pathogenic."""
        if self.source is PathogenicitySource.SIFT:
            return 1.0 - self.score
        return self.score


class PathogenicityData(BaseModel):
    """Collection of predictor scores for one variant."""

    model_config = ConfigDict(frozen=True)

    scores: tuple[PathogenicityScore, ...] = ()

    @classmethod
    def empty(cls) -> "PathogenicityData":
        return cls()

    @classmethod
    def of(cls, *scores: PathogenicityScore) -> "PathogenicityData":
        return cls(scores=tuple(scores))

    def has_predicted_score(self) -> bool:
        return len(self.scores) > 0

    def sources(self) -> frozenset[PathogenicitySource]:
        return frozenset(s.source for s in self.scores)

    def predicted_score(self, source: PathogenicitySource) -> PathogenicityScore | None:
        for score in self.scores:
            if score.source is source:
                return score
        return None

    def most_pathogenic_score(self) -> float | None:
        """Highest normalized score across predictors, or None with no predictors."""
        if not self.scores:
            return None
        return max(score.normalized() for score in self.scores)

    def restricted_to(self, sources: Iterable[PathogenicitySource]) -> "PathogenicityData":
        wanted = frozenset(sources)
        kept = tuple(s for s in self.scores if s.source in wanted)
        if len(kept) == len(self.scores):
            return self
        return PathogenicityData(scores=kept)
