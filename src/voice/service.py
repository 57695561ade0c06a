"""Speech synthesis via ElevenLabs."""

import base64
import logging

from src.config.settings import get_settings
from src.db.models import VOICE_INTERACTIONS
from src.observations.repository import insert_row
from src.providers.http import post, require_key

logger = logging.getLogger(__name__)

# Only a preview of the audio is kept in the interaction log
AUDIO_PREVIEW_CHARS = 1000

VOICE_SETTINGS = {"stability": 0.5, "similarity_boost": 0.75}


async def synthesize(text: str, voice: str | None = None) -> str:
    """Return base64-encoded audio for `text`."""
    settings = get_settings()
    voice_id = voice or settings.DEFAULT_VOICE_ID
    url = f"{settings.ELEVENLABS_URL.rstrip('/')}/v1/text-to-speech/{voice_id}"
    headers = {
        "xi-api-key": require_key(settings.ELEVENLABS_API_KEY, "ELEVENLABS_API_KEY"),
        "Content-Type": "application/json",
        "Accept": "audio/mpeg",
    }
    logger.debug("Converting %d characters to speech with voice %s", len(text), voice_id)
    response = await post("elevenlabs", url, json={
        "text": text,
        "model_id": settings.TTS_MODEL,
        "voice_settings": VOICE_SETTINGS,
    }, headers=headers)
    return base64.b64encode(response.content).decode("ascii")


async def text_to_voice(user_id: str, text: str, voice: str | None = None) -> dict:
    audio = await synthesize(text, voice)
    try:
        insert_row(VOICE_INTERACTIONS, {
            "user_id": user_id,
            "interaction_type": "text_to_speech",
            "input_text": text,
            "audio_data": audio[:AUDIO_PREVIEW_CHARS],
            "model_used": get_settings().TTS_MODEL,
        })
    except Exception:
        logger.exception("Failed to log voice interaction for user %s", user_id)
    logger.info("Text-to-speech completed: %dKB", round(len(audio) / 1024))
    return {"audio_content": audio}
