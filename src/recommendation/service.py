from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from addy.models import RecommendationResponse
from recommendation.engine import RecommendationEngine
from recommendation.stats import compute_overall_progress
from sources.notion_source import NotionTaskSource
from storage.response_cache import RECOMMENDATIONS_KEY, ResponseCache

logger = logging.getLogger(__name__)


@dataclass
class RecommendationResult:
    payload: dict
    cached: bool
    provider: Optional[str] = None


class RecommendationService:
    """Central orchestration of the /recommend-session pipeline."""

    def __init__(
        self,
        task_source: NotionTaskSource,
        engine: RecommendationEngine,
        cache: ResponseCache,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.task_source = task_source
        self.engine = engine
        self.cache = cache
        self.clock = clock

    def get_recommendations(self, now: Optional[float] = None) -> RecommendationResult:
        now = self.clock() if now is None else now

        cached = self.cache.get(RECOMMENDATIONS_KEY, now)
        if cached is not None:
            logger.info("Serving recommendations from cache")
            return RecommendationResult(payload=cached, cached=True)

        # 1. Fetch tasks
        tasks = self.task_source.fetch_tasks()

        # 2. Aggregate stats
        progress = compute_overall_progress(tasks)

        # 3. Ask the model
        recommendations = self.engine.recommend(tasks)

        # 4. Cache the JSON-ready payload
        payload = RecommendationResponse(
            overall_progress=progress,
            recommendations=recommendations,
        ).to_wire()
        self.cache.set(RECOMMENDATIONS_KEY, payload, now)
        logger.info(
            f"Computed recommendations for {progress.total_tasks} tasks "
            f"({len(recommendations)} sessions)"
        )
        return RecommendationResult(
            payload=payload, cached=False, provider=self.engine.provider_name
        )
