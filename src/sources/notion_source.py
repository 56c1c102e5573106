from __future__ import annotations

import logging
import os
from typing import Any, Optional

import httpx

from addy.errors import UpstreamError
from addy.models import Task

logger = logging.getLogger(__name__)

NOTION_VERSION = "2022-06-28"
PAGE_SIZE = 100


def _prop(properties: dict, name: str) -> dict:
    return properties.get(name) or {}


def task_from_page(page: dict) -> Task:
    """Map one Notion database row onto a Task, defaulting absent fields."""
    props = page.get("properties") or {}

    title = _prop(props, "Task").get("title") or []
    status = _prop(props, "Status").get("status") or {}
    deadline = _prop(props, "Deadline").get("date") or {}
    category = _prop(props, "Category").get("select") or {}

    return Task(
        name=(title[0].get("plain_text") if title else None) or "",
        status=status.get("name") or "",
        deadline=deadline.get("start") or None,
        hours_estimate=_prop(props, "Hours estimate").get("number") or 0,
        category=category.get("name") or "",
        completion=_prop(props, "Completion").get("number") or 0,
    )


class NotionTaskSource:
    def __init__(
        self,
        api_key: Optional[str] = None,
        database_id: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.api_key = (api_key if api_key is not None else os.getenv("NOTION_KEY", "")).strip()
        self.database_id = (
            database_id if database_id is not None else os.getenv("NOTION_DATABASE_ID", "")
        ).strip()
        self.base_url = (
            base_url or os.getenv("NOTION_BASE_URL", "https://api.notion.com/v1")
        ).strip().rstrip("/")
        self._client = client

    def _query(self) -> dict[str, Any]:
        url = f"{self.base_url}/databases/{self.database_id}/query"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": NOTION_VERSION,
            "Content-Type": "application/json",
        }
        payload = {"page_size": PAGE_SIZE}

        try:
            if self._client is not None:
                r = self._client.post(url, headers=headers, json=payload)
            else:
                with httpx.Client(timeout=30.0) as client:
                    r = client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Notion API request failed: {e}") from e

        if not r.is_success:
            raise UpstreamError(
                f"Notion API responded with status: {r.status_code}",
                status_code=r.status_code,
            )
        try:
            return r.json()
        except ValueError as e:
            raise UpstreamError("Notion API returned a non-JSON body") from e

    def fetch_tasks(self) -> list[Task]:
        data = self._query()
        tasks = [task_from_page(page) for page in data.get("results") or []]
        logger.info(f"Fetched {len(tasks)} tasks from Notion")
        return tasks
