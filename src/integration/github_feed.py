"""
GitHub commit feed for the focus screen.

Finds the most recently pushed repository of one user and reports the
newest commit across its branches, with line stats.
"""

from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Optional

import httpx

from addy.errors import UpstreamError
from addy.models import CommitStats, CommitSummary, DetailedCommitStats, LatestCommit

logger = logging.getLogger(__name__)


def _commit_date(commit: dict) -> datetime:
    try:
        raw = commit["commit"]["committer"]["date"]
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise UpstreamError(f"GitHub commit {commit.get('sha')} has no committer date") from e


def _commit_message(detailed: dict) -> str:
    try:
        return detailed["commit"]["message"]
    except (KeyError, TypeError) as e:
        raise UpstreamError(f"GitHub commit {detailed.get('sha')} has no message") from e


class GitHubCommitFeed:
    def __init__(
        self,
        token: Optional[str] = None,
        username: Optional[str] = None,
        api_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.token = (token if token is not None else os.getenv("GITHUB_TOKEN", "")).strip()
        self.username = (
            username if username is not None else os.getenv("GITHUB_USERNAME", "")
        ).strip()
        self.api_url = (
            api_url or os.getenv("GITHUB_API_URL", "https://api.github.com")
        ).strip().rstrip("/")
        self._client = client

    @property
    def headers(self) -> dict:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=30.0) as client:
            yield client

    async def _get(self, client: httpx.AsyncClient, path: str, params: Optional[dict] = None) -> Any:
        try:
            r = await client.get(f"{self.api_url}{path}", headers=self.headers, params=params)
        except httpx.HTTPError as e:
            raise UpstreamError(f"GitHub API request failed: {e}") from e
        if not r.is_success:
            raise UpstreamError(
                f"GitHub API responded with status: {r.status_code}",
                status_code=r.status_code,
            )
        try:
            return r.json()
        except ValueError as e:
            raise UpstreamError("GitHub API returned a non-JSON body") from e

    async def _latest_repo(self, client: httpx.AsyncClient) -> dict:
        repos = await self._get(
            client,
            f"/users/{self.username}/repos",
            {"sort": "pushed", "direction": "desc", "per_page": 1},
        )
        if not repos:
            raise UpstreamError("No repositories found")
        return repos[0]

    async def _branch_head(self, client: httpx.AsyncClient, full_name: str, branch: str) -> Optional[dict]:
        commits = await self._get(
            client, f"/repos/{full_name}/commits", {"sha": branch, "per_page": 1}
        )
        if not commits:
            return None
        return {"branch": branch, "commit": commits[0]}

    async def latest_branch_commit(self) -> CommitSummary:
        async with self._session() as client:
            repo = await self._latest_repo(client)
            full_name = f"{repo['owner']['login']}/{repo['name']}"

            branches = await self._get(client, f"/repos/{full_name}/branches")
            heads = await asyncio.gather(
                *(self._branch_head(client, full_name, b["name"]) for b in branches)
            )
            heads = [h for h in heads if h is not None]
            if not heads:
                raise UpstreamError("No commits found in repository")

            latest = max(heads, key=lambda h: _commit_date(h["commit"]))
            detailed = await self._get(
                client, f"/repos/{full_name}/commits/{latest['commit']['sha']}"
            )

        stats = detailed.get("stats") or {}
        logger.info(f"Latest commit on {full_name}@{latest['branch']}")
        return CommitSummary(
            repo=full_name,
            message=_commit_message(detailed),
            branch=latest["branch"],
            stats=CommitStats(
                additions=stats.get("additions", 0),
                deletions=stats.get("deletions", 0),
            ),
        )

    async def latest_commit(self) -> LatestCommit:
        """Newest commit on the default branch of the most recently pushed repo."""
        async with self._session() as client:
            repo = await self._latest_repo(client)
            full_name = f"{repo['owner']['login']}/{repo['name']}"

            commits = await self._get(client, f"/repos/{full_name}/commits", {"per_page": 1})
            if not commits:
                raise UpstreamError("No commits found in repository")

            detailed = await self._get(client, f"/repos/{full_name}/commits/{commits[0]['sha']}")

        message = _commit_message(detailed)
        commit = detailed["commit"]
        stats = detailed.get("stats") or {}
        return LatestCommit(
            repo=full_name,
            message=message,
            date=(commit.get("committer") or {}).get("date"),
            stats=DetailedCommitStats(
                additions=stats.get("additions", 0),
                deletions=stats.get("deletions", 0),
                total=stats.get("total", 0),
            ),
            url=detailed.get("html_url"),
            author=(commit.get("author") or {}).get("name"),
        )
