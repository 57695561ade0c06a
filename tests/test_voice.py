"""Tests for the text-to-voice function."""

import base64

import httpx

TTS_URL = "http://tts.test/v1/text-to-speech/9BWtsMINqrJLrRacOk9x"
AUDIO = b"\x00\x01fake-mp3-bytes" * 200


def test_text_to_voice(client, auth_header, fake_db, providers):
    providers.add(TTS_URL, httpx.Response(200, content=AUDIO, headers={"Content-Type": "audio/mpeg"}))

    resp = client.post("/functions/v1/text-to-voice", json={"text": "Hello there"}, headers=auth_header)

    assert resp.status_code == 200
    audio = resp.json()["data"]["audio_content"]
    assert base64.b64decode(audio) == AUDIO

    sent = providers.json_body()
    assert sent["model_id"] == "eleven_turbo_v2_5"
    assert sent["voice_settings"] == {"stability": 0.5, "similarity_boost": 0.75}
    assert providers.requests[0].headers["xi-api-key"] == "tts-key"

    rows = fake_db.rows("voice_interactions")
    assert len(rows) == 1
    assert rows[0]["input_text"] == "Hello there"
    assert rows[0]["audio_data"] == audio[:1000]


def test_custom_voice(client, auth_header, providers):
    providers.add("http://tts.test/v1/text-to-speech/voice-42", httpx.Response(200, content=b"abc"))

    resp = client.post("/functions/v1/text-to-voice", json={"text": "Hi", "voice": "voice-42"}, headers=auth_header)

    assert resp.status_code == 200


def test_requires_auth(client, fake_db, providers):
    resp = client.post("/functions/v1/text-to-voice", json={"text": "Hello"})

    assert resp.status_code == 401
    assert providers.requests == []
    assert fake_db.rows("voice_interactions") == []


def test_provider_failure(client, auth_header, fake_db, providers):
    providers.add(TTS_URL, httpx.Response(500, text="boom"))

    resp = client.post("/functions/v1/text-to-voice", json={"text": "Hello"}, headers=auth_header)

    assert resp.status_code == 502
    assert resp.json()["code"] == "UPSTREAM_ERROR"
    assert fake_db.rows("voice_interactions") == []


def test_interaction_log_failure_still_returns_audio(client, auth_header, fake_db, providers):
    providers.add(TTS_URL, httpx.Response(200, content=AUDIO))
    fake_db.fail_tables.add("voice_interactions")

    resp = client.post("/functions/v1/text-to-voice", json={"text": "Hello"}, headers=auth_header)

    assert resp.status_code == 200
    assert base64.b64decode(resp.json()["data"]["audio_content"]) == AUDIO
