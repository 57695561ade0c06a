"""Tests for the huggingface-inference function."""

import base64

import httpx

GPT_URL = "http://hf.test/models/gpt2"


def test_text_generation_defaults(client, providers, fake_db):
    providers.add(GPT_URL, httpx.Response(200, json=[{"generated_text": "once upon a time"}]))

    resp = client.post("/functions/v1/huggingface-inference", json={
        "model_id": "gpt2",
        "task": "text-generation",
        "inputs": "Tell me a story",
    })

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["result"] == [{"generated_text": "once upon a time"}]
    assert data["task"] == "text-generation"

    sent = providers.json_body()
    assert sent["parameters"]["max_new_tokens"] == 512
    assert sent["parameters"]["temperature"] == 0.7
    assert sent["parameters"]["top_p"] == 0.9
    assert sent["parameters"]["return_full_text"] is False
    assert sent["options"] == {"use_cache": True, "wait_for_model": True}
    assert providers.requests[0].headers["Authorization"] == "Bearer hf-key"
    # anonymous callers leave no analytics trail
    assert fake_db.rows("llm_observations") == []


def test_parameters_override_defaults(client, providers):
    providers.add(GPT_URL, httpx.Response(200, json=[{"generated_text": "x"}]))

    client.post("/functions/v1/huggingface-inference", json={
        "model_id": "gpt2",
        "task": "text-generation",
        "inputs": "hi",
        "parameters": {"max_tokens": 20, "temperature": 0.1},
    })

    params = providers.json_body()["parameters"]
    assert params["max_new_tokens"] == 20
    assert params["temperature"] == 0.1
    assert "max_tokens" not in params


def test_zero_shot_classification(client, auth_header, providers, fake_db):
    providers.add("http://hf.test/models/facebook/bart-large-mnli", httpx.Response(200, json={
        "sequence": "book a flight", "labels": ["travel", "cooking"], "scores": [0.9, 0.1],
    }))

    resp = client.post("/functions/v1/huggingface-inference", json={
        "model_id": "facebook/bart-large-mnli",
        "task": "zero-shot-classification",
        "inputs": "book a flight",
        "candidate_labels": ["travel", "cooking"],
    }, headers=auth_header)

    assert resp.status_code == 200
    assert resp.json()["data"]["result"]["labels"] == ["travel", "cooking"]
    assert providers.json_body()["parameters"] == {"candidate_labels": ["travel", "cooking"]}

    rows = fake_db.rows("llm_observations")
    assert len(rows) == 1
    assert rows[0]["user_id"] == "user-1"
    assert rows[0]["agent_type"] == "huggingface"
    assert rows[0]["metadata"] == {"task": "zero-shot-classification"}


def test_text_to_image_returns_data_url(client, providers):
    providers.add("http://hf.test/models/sdxl", httpx.Response(200, content=b"PNGDATA"))

    resp = client.post("/functions/v1/huggingface-inference", json={
        "model_id": "sdxl",
        "task": "text-to-image",
        "inputs": "a lighthouse",
    })

    assert resp.status_code == 200
    result = resp.json()["data"]["result"]
    assert result == "data:image/png;base64," + base64.b64encode(b"PNGDATA").decode()
    sent = providers.json_body()
    assert sent["parameters"] == {"num_inference_steps": 50, "guidance_scale": 7.5}
    assert sent["options"]["use_cache"] is False


def test_unknown_task_is_rejected(client, providers):
    resp = client.post("/functions/v1/huggingface-inference", json={
        "model_id": "gpt2",
        "task": "summarize-everything",
        "inputs": "hi",
    })

    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_INPUT"
    assert providers.requests == []


def test_classification_requires_labels(client):
    resp = client.post("/functions/v1/huggingface-inference", json={
        "model_id": "facebook/bart-large-mnli",
        "task": "zero-shot-classification",
        "inputs": "hi",
    })
    assert resp.status_code == 400


def test_model_loading(client, providers):
    providers.add(GPT_URL, httpx.Response(503, json={"error": "loading"}))

    resp = client.post("/functions/v1/huggingface-inference", json={
        "model_id": "gpt2", "task": "text-generation", "inputs": "hi",
    })

    assert resp.status_code == 502
    assert resp.json()["error"] == "Model is loading. Please try again in a few seconds."
