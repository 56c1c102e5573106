import httpx
import pytest


class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.calls = []

    def generate(self, *, system: str, user: str, json_mode: bool = False) -> str:
        self.calls.append({"system": system, "user": user, "json_mode": json_mode})
        return self._response_text


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


def notion_page(
    name="Write report",
    status="In progress",
    deadline="2026-10-20",
    hours=4,
    category="Work",
    completion=0.5,
) -> dict:
    """One row of a Notion database query result."""
    return {
        "object": "page",
        "properties": {
            "Task": {"title": [{"plain_text": name}] if name is not None else []},
            "Status": {"status": {"name": status} if status is not None else None},
            "Deadline": {"date": {"start": deadline} if deadline is not None else None},
            "Hours estimate": {"number": hours},
            "Category": {"select": {"name": category} if category is not None else None},
            "Completion": {"number": completion},
        },
    }


@pytest.fixture
def notion_client_factory():
    """Build an httpx.Client whose Notion query returns `pages` (or `status`)."""
    def _make(pages=None, status: int = 200, seen: list | None = None):
        def handler(request: httpx.Request) -> httpx.Response:
            if seen is not None:
                seen.append(request)
            if status != 200:
                return httpx.Response(status, json={"message": "nope"})
            return httpx.Response(200, json={"results": pages or []})
        return httpx.Client(transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def page():
    return notion_page
