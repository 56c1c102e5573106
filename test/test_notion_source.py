import json

import httpx
import pytest

from addy.errors import UpstreamError
from sources.notion_source import NotionTaskSource, task_from_page


def test_fetch_tasks_maps_properties(page, notion_client_factory):
    seen = []
    client = notion_client_factory(
        pages=[page(), page(name="Read paper", deadline=None, completion=1)], seen=seen
    )
    source = NotionTaskSource(api_key="secret", database_id="db123", client=client)

    tasks = source.fetch_tasks()

    assert [t.name for t in tasks] == ["Write report", "Read paper"]
    assert tasks[0].status == "In progress"
    assert tasks[0].deadline == "2026-10-20"
    assert tasks[0].hours_estimate == 4
    assert tasks[0].category == "Work"
    assert tasks[1].deadline is None
    assert tasks[1].completion == 1

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path.endswith("/databases/db123/query")
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Notion-Version"] == "2022-06-28"
    assert json.loads(request.content) == {"page_size": 100}


def test_absent_fields_get_defaults(page):
    t = task_from_page(
        page(name=None, status=None, deadline=None, hours=None, category=None, completion=None)
    )
    assert t.name == ""
    assert t.status == ""
    assert t.deadline is None
    assert t.hours_estimate == 0
    assert t.category == ""
    assert t.completion == 0


def test_missing_properties_block():
    assert task_from_page({"properties": {}}).name == ""
    assert task_from_page({}).completion == 0


def test_non_success_status_raises_upstream_error(notion_client_factory):
    source = NotionTaskSource(api_key="k", database_id="d", client=notion_client_factory(status=401))
    with pytest.raises(UpstreamError) as exc:
        source.fetch_tasks()
    assert exc.value.status_code == 401
    assert "401" in str(exc.value)


def test_transport_failure_raises_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    source = NotionTaskSource(api_key="k", database_id="d", client=client)
    with pytest.raises(UpstreamError):
        source.fetch_tasks()
