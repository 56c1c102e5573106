from __future__ import annotations

import json
import logging
from datetime import date
from typing import Optional, Sequence

from pydantic import ValidationError as SchemaError

from addy.errors import ModelError
from addy.models import Recommendation, Task
from llm.llm_client import LLMClient
from llm.schemas import RecommendationReply
from recommendation.prompts import SYSTEM_PROMPT, USER_PROMPT

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """Asks the completion model for the next focus sessions.

    Ranking lives entirely in the prompt. The only thing enforced on the
    reply is its shape, with sessionDuration and priority rounded to ints.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm = llm_client or LLMClient()

    @property
    def provider_name(self) -> str:
        return self.llm.provider_name

    def build_messages(self, tasks: Sequence[Task], today: Optional[date] = None) -> tuple[str, str]:
        today = today or date.today()
        tasks_json = json.dumps([t.to_wire() for t in tasks], indent=2)
        system = SYSTEM_PROMPT.format(today=today.isoformat())
        user = USER_PROMPT.format(tasks_json=tasks_json)
        return system, user

    def recommend(self, tasks: Sequence[Task], today: Optional[date] = None) -> list[Recommendation]:
        system, user = self.build_messages(tasks, today=today)
        data = self.llm.complete_json(system=system, user=user)

        try:
            reply = RecommendationReply.model_validate(data)
        except SchemaError as e:
            logger.warning(f"Model reply failed schema validation: {e.error_count()} errors")
            raise ModelError(f"Model reply does not match the recommendation schema: {e}") from e

        logger.info(f"Model returned {len(reply.recommendations)} recommendations")
        return reply.recommendations
