from fastapi import Depends

from api import state
from integration.github_feed import GitHubCommitFeed
from integration.nft_holdings import NftHoldingsReader
from recommendation.engine import RecommendationEngine
from recommendation.service import RecommendationService
from sources.notion_source import NotionTaskSource
from storage.response_cache import ResponseCache


def get_response_cache() -> ResponseCache:
    return state.response_cache


def get_task_source() -> NotionTaskSource:
    return NotionTaskSource()


def get_recommendation_engine() -> RecommendationEngine:
    return RecommendationEngine(state.llm_client)


def get_recommendation_service(
    task_source: NotionTaskSource = Depends(get_task_source),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
    cache: ResponseCache = Depends(get_response_cache),
) -> RecommendationService:
    return RecommendationService(task_source=task_source, engine=engine, cache=cache)


def get_commit_feed() -> GitHubCommitFeed:
    return GitHubCommitFeed()


def get_nft_reader() -> NftHoldingsReader:
    return NftHoldingsReader()
