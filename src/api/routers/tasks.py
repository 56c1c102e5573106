import asyncio
import logging
import time

from fastapi import APIRouter, Depends

from api.dependencies import get_recommendation_service, get_task_source
from api.metrics import (
    CACHE_EVENTS_TOTAL,
    MODEL_CALLS_TOTAL,
    TASKS_FETCHED_TOTAL,
    observe_request,
)
from recommendation.service import RecommendationService
from sources.notion_source import NotionTaskSource

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/notion-data")
async def get_notion_data(
    task_source: NotionTaskSource = Depends(get_task_source),
) -> list:
    """Normalized task rows straight from the task database."""
    start = time.time()
    try:
        tasks = await asyncio.to_thread(task_source.fetch_tasks)
    except Exception as e:
        logger.error(f"Error fetching from Notion: {e}")
        observe_request("/notion-data", "error", start)
        raise

    TASKS_FETCHED_TOTAL.inc(len(tasks))
    observe_request("/notion-data", "ok", start)
    return [t.to_wire() for t in tasks]


@router.get("/recommend-session")
async def recommend_session(
    service: RecommendationService = Depends(get_recommendation_service),
) -> dict:
    """
    Overall progress plus the model's top focus sessions.
    Served from the recommendation cache while it is fresh.
    """
    start = time.time()
    try:
        result = await asyncio.to_thread(service.get_recommendations)
    except Exception as e:
        logger.error(f"Error getting task recommendations: {e}")
        observe_request("/recommend-session", "error", start)
        raise

    CACHE_EVENTS_TOTAL.labels(result="hit" if result.cached else "miss").inc()
    if not result.cached:
        MODEL_CALLS_TOTAL.labels(provider=result.provider or "unknown").inc()
        TASKS_FETCHED_TOTAL.inc(result.payload["overallProgress"]["totalTasks"])

    observe_request("/recommend-session", "cached" if result.cached else "ok", start)
    return result.payload
