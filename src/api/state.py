import time
from typing import Optional

from api.config import CACHE_SWEEP_INTERVAL_S, RECOMMENDATION_CACHE_TTL_S
from llm.llm_client import LLMClient
from scheduling.periodic import PeriodicTask
from storage.response_cache import ResponseCache

# Process-wide recommendation cache (single key, TTL only)
response_cache = ResponseCache(ttl_s=RECOMMENDATION_CACHE_TTL_S)

# Provider is resolved on first use, so importing the app needs no API key
llm_client = LLMClient()

cache_sweeper: Optional[PeriodicTask] = None


def build_cache_sweeper() -> PeriodicTask:
    return PeriodicTask(
        "cache-sweeper",
        CACHE_SWEEP_INTERVAL_S,
        lambda: response_cache.purge_expired(time.monotonic()),
    )
