"""
Progress schemas for FishGraph.

Defines Pydantic models for learner progress including:
- Per-skill mastery status
- Readiness metrics derived from the prerequisite model
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ProgressStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    MASTERED = "mastered"

    @classmethod
    def normalize(cls, value: object) -> "ProgressStatus":
        """Map a stored value to a status; anything unrecognized is NOT_STARTED."""
        if isinstance(value, cls):
            return value
        if value == cls.MASTERED.value:
            return cls.MASTERED
        if value == cls.IN_PROGRESS.value:
            return cls.IN_PROGRESS
        return cls.NOT_STARTED


class ProgressCounts(BaseModel):
    """Tally over the three statuses plus the ready-now count."""
    not_started: int = 0
    in_progress: int = 0
    mastered: int = 0
    ready_now: int = 0

    model_config = ConfigDict(frozen=True)

    def for_status(self, status: ProgressStatus) -> int:
        return {
            ProgressStatus.NOT_STARTED: self.not_started,
            ProgressStatus.IN_PROGRESS: self.in_progress,
            ProgressStatus.MASTERED: self.mastered,
        }[status]


class ProgressMetrics(BaseModel):
    """Readiness snapshot for every node, recomputed on each call."""
    state_by_id: dict[str, ProgressStatus]
    readiness_by_id: dict[str, float]        # satisfied groups / total groups
    satisfied_by_id: dict[str, int]
    total_by_id: dict[str, int]
    ready_now_ids: list[str]                 # not mastered, readiness == 1
    counts: ProgressCounts

    model_config = ConfigDict(frozen=True)

    def readiness(self, skill_id: str) -> float:
        return self.readiness_by_id.get(skill_id, 0.0)

    def score_label(self, skill_id: str) -> str:
        """'satisfied/total' label as shown next to ready-now entries."""
        return f"{self.satisfied_by_id.get(skill_id, 0)}/{self.total_by_id.get(skill_id, 0)}"


class ProgressionResult(BaseModel):
    """Output of the progression scorer, keyed by node ID."""
    score_by_id: dict[str, float]
    depth_by_id: dict[str, int]
    max_depth: int = Field(default=1, ge=1)

    model_config = ConfigDict(frozen=True)
