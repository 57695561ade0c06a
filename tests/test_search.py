"""Tests for the trend-search function."""

import httpx

TAVILY_URL = "http://tavily.test/search"


def test_trend_search(client, providers):
    providers.add(TAVILY_URL, httpx.Response(200, json={
        "answer": "AI agents are trending",
        "query": "ai trends",
        "results": [
            {"title": "Agents", "url": "https://example.com/a", "content": "lots of agents", "score": 0.92},
            {"title": "Voice", "url": "https://example.com/v", "content": "voice apps"},
        ],
        "follow_up_questions": ["What about voice?"],
    }))

    resp = client.post("/functions/v1/trend-search", json={"query": "ai trends", "search_depth": "advanced"})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["answer"] == "AI agents are trending"
    assert [r["title"] for r in data["results"]] == ["Agents", "Voice"]
    assert data["results"][1]["score"] is None
    assert data["follow_up_questions"] == ["What about voice?"]

    sent = providers.json_body()
    assert sent["api_key"] == "tavily-key"
    assert sent["search_depth"] == "advanced"
    assert sent["max_results"] == 5


def test_empty_results(client, providers):
    providers.add(TAVILY_URL, httpx.Response(200, json={"results": []}))

    resp = client.post("/functions/v1/trend-search", json={"query": "nothing"})

    data = resp.json()["data"]
    assert data["results"] == []
    assert data["query"] == "nothing"
    assert data["answer"] is None


def test_invalid_depth(client, providers):
    resp = client.post("/functions/v1/trend-search", json={"query": "x", "search_depth": "deep"})

    assert resp.status_code == 400
    assert providers.requests == []


def test_provider_rate_limit(client, providers):
    providers.add(TAVILY_URL, httpx.Response(429, json={"detail": "too many"}))

    resp = client.post("/functions/v1/trend-search", json={"query": "ai"})

    assert resp.status_code == 429
    assert resp.json()["retry_after"] == 60
