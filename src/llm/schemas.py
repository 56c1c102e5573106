from __future__ import annotations
from typing import List
from pydantic import BaseModel, ConfigDict, Field

from addy.models import Recommendation

class RecommendationReply(BaseModel):
    """Shape the completion model must answer with for /recommend-session."""

    model_config = ConfigDict(extra="ignore")

    recommendations: List[Recommendation] = Field(...)
