import logging
import time

from fastapi import APIRouter, Depends

from api.dependencies import get_commit_feed
from api.metrics import observe_request
from integration.github_feed import GitHubCommitFeed

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/github-commits")
async def github_commits(feed: GitHubCommitFeed = Depends(get_commit_feed)) -> dict:
    """Newest commit across all branches of the most recently pushed repo."""
    start = time.time()
    try:
        summary = await feed.latest_branch_commit()
    except Exception as e:
        logger.error(f"Error fetching from GitHub: {e}")
        observe_request("/github-commits", "error", start)
        raise

    observe_request("/github-commits", "ok", start)
    return summary.to_wire()


@router.get("/github-latest")
async def github_latest(feed: GitHubCommitFeed = Depends(get_commit_feed)) -> dict:
    start = time.time()
    try:
        commit = await feed.latest_commit()
    except Exception as e:
        logger.error(f"Error fetching from GitHub: {e}")
        observe_request("/github-latest", "error", start)
        raise

    observe_request("/github-latest", "ok", start)
    return commit.to_wire()
