"""
Tests for the orchestrator against a mocked cluster.
"""

import asyncio
import json

import httpx
import pytest

from opensearch_navigator import NavigatorOrchestrator
from opensearch_navigator.core.models import ConnectionProfile, FilterState


NODE = "https://search.example.com"


def _profile(**overrides):
    values = {"nodes": [NODE], "auth_mode": "none", "index": "logs-v1"}
    values.update(overrides)
    return ConnectionProfile(**values)


def _run(handler, call):
    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            orchestrator = NavigatorOrchestrator.from_http_client(client)
            return await call(orchestrator)
    
    return asyncio.run(scenario())


def test_search_posts_compiled_query():
    requests = []
    
    def handler(request):
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "took": 3,
                "hits": {
                    "total": {"value": 2, "relation": "eq"},
                    "hits": [
                        {"_id": "1", "_index": "logs-v1", "_score": 1.5, "_source": {"status": "ERROR"}},
                        {"_id": "2", "_index": "logs-v1", "_score": 1.1, "_source": {"status": "ERROR"}},
                    ],
                },
            },
        )
    
    profile = _profile()
    filters = FilterState(
        query="timeout",
        fieldFilters=[{"id": "f1", "field": "status", "operator": "eq", "value": "ERROR"}],
    )
    page = _run(handler, lambda orchestrator: orchestrator.search(profile, filters))
    
    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/logs-v1/_search"
    assert json.loads(request.content) == NavigatorOrchestrator().compile(filters, profile)
    assert page.total == 2
    assert page.took == 3
    assert [hit.id for hit in page.hits] == ["1", "2"]


def test_search_returns_approximate_totals():
    def handler(request):
        return httpx.Response(
            200, json={"hits": {"total": {"value": 10000, "relation": "gte"}, "hits": []}}
        )
    
    page = _run(handler, lambda orchestrator: orchestrator.search(_profile(), FilterState()))
    
    assert page.total == 10000
    assert page.total_relation == "approximate"


def test_mapping_is_flattened():
    def handler(request):
        assert request.url.path == "/logs-v1/_mapping"
        return httpx.Response(
            200,
            json={
                "logs-v1": {
                    "mappings": {
                        "properties": {
                            "status": {"type": "keyword"},
                            "metadata": {"properties": {"latency_ms": {"type": "integer"}}},
                        }
                    }
                }
            },
        )
    
    fields = _run(handler, lambda orchestrator: orchestrator.get_mapping(_profile()))
    
    assert [(f.path, f.type) for f in fields] == [
        ("status", "keyword"),
        ("metadata.latency_ms", "integer"),
    ]


def test_list_indices_hides_system_indices():
    def handler(request):
        assert request.url.path == "/_cat/indices"
        assert request.url.params["format"] == "json"
        return httpx.Response(
            200,
            json=[
                {"index": "logs-v2", "health": "green", "docs.count": "7"},
                {"index": ".kibana_1", "health": "green", "docs.count": "1"},
                {"index": "logs-v1", "health": "yellow", "docs.count": "12"},
            ],
        )
    
    indices = _run(handler, lambda orchestrator: orchestrator.list_indices(_profile()))
    
    assert [(i.index, i.docs_count) for i in indices] == [("logs-v1", 12), ("logs-v2", 7)]


def test_proxy_keeps_path_and_query():
    requests = []
    
    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"cluster_name": "demo"})
    
    response = _run(
        handler,
        lambda orchestrator: orchestrator.proxy(
            f"{NODE}/_cluster/health?level=indices", auth_mode="none"
        ),
    )
    
    assert response.status == 200
    assert response.data == {"cluster_name": "demo"}
    assert requests[0].url.path == "/_cluster/health"
    assert requests[0].url.params["level"] == "indices"


def test_proxy_rejects_relative_url():
    with pytest.raises(ValueError):
        asyncio.run(NavigatorOrchestrator().proxy("/_cat/indices", auth_mode="none"))


def test_demo_mode_makes_no_network_calls():
    def handler(request):
        raise AssertionError(f"unexpected request to {request.url}")
    
    profile = _profile(demo_mode=True, nodes=[])
    
    page = _run(handler, lambda orchestrator: orchestrator.search(profile, FilterState(size=5)))
    fields = _run(handler, lambda orchestrator: orchestrator.get_mapping(profile))
    
    assert page.total == 1250
    assert len(page.hits) == 5
    assert "metadata.latency_ms" in [f.path for f in fields]


def test_search_with_non_object_body_returns_empty_page():
    def handler(request):
        return httpx.Response(200, json=[{"unexpected": True}])
    
    page = _run(handler, lambda orchestrator: orchestrator.search(_profile(), FilterState(offset=20)))
    
    assert page.total == 0
    assert page.hits == []
    assert page.offset == 20
