from __future__ import annotations

import math
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case fields in Python, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def round_half_up(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("expected a number, got a boolean")
    if isinstance(value, str):
        value = float(value.strip())
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"expected a finite number, got {value!r}")
    return int(math.floor(value + 0.5))


class Task(CamelModel):
    name: str = Field("", alias="task")
    status: str = ""
    deadline: Optional[str] = None
    hours_estimate: float = 0
    category: str = ""
    completion: float = 0

    @field_validator("completion")
    @classmethod
    def clamp_completion(cls, v: float) -> float:
        # keeps completed/in-progress/not-started an exact partition
        return min(max(v, 0.0), 1.0)


class OverallProgress(CamelModel):
    completion: float = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    in_progress_tasks: int = 0
    not_started_tasks: int = 0
    tasks_with_deadlines: int = 0


class Recommendation(CamelModel):
    task_name: str
    session_duration: int
    priority: int
    reason: Optional[str] = None
    # passed through as the model wrote them, e.g. 50 or "50%"
    current_completion: Optional[Any] = None
    target_completion: Optional[Any] = None
    deadline: Optional[str] = None
    time_remaining: Optional[str] = None

    @field_validator("session_duration", "priority", mode="before")
    @classmethod
    def to_nearest_int(cls, v: Any) -> int:
        return round_half_up(v)

    @field_validator("reason", "deadline", "time_remaining", mode="before")
    @classmethod
    def text_or_none(cls, v: Any) -> Optional[str]:
        if v is None or isinstance(v, str):
            return v
        return str(v)


class RecommendationResponse(CamelModel):
    overall_progress: OverallProgress
    recommendations: List[Recommendation] = Field(default_factory=list)


class CommitStats(CamelModel):
    additions: int = 0
    deletions: int = 0


class CommitSummary(CamelModel):
    """Head commit of the most recently active branch."""

    repo: str
    message: str
    branch: str
    stats: CommitStats


class DetailedCommitStats(CommitStats):
    total: int = 0


class LatestCommit(CamelModel):
    repo: str
    message: str
    date: Optional[str] = None
    stats: DetailedCommitStats
    url: Optional[str] = None
    author: Optional[str] = None


class NftToken(CamelModel):
    token_id: str
    token_uri: str = Field(..., alias="tokenURI")
    metadata: Optional[Any] = None


class NftHoldings(CamelModel):
    wallet_address: str
    contract_address: str
    balance: str
    tokens: List[NftToken] = Field(default_factory=list)
    explorer_url: str
