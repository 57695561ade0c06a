"""Edge function: text-to-voice."""

from fastapi import APIRouter, Depends, Request

from src.auth.dependencies import CurrentUser, require_user
from src.utils.responses import success
from src.voice.schemas import TextToVoiceRequest
from src.voice.service import text_to_voice

router = APIRouter(prefix="/functions/v1", tags=["Voice"])


@router.post("/text-to-voice", summary="Synthesize speech", description="Convert text to speech; returns base64-encoded audio.")
async def speak(body: TextToVoiceRequest, request: Request, user: CurrentUser = Depends(require_user)):
    return success(request, await text_to_voice(user.id, body.text, body.voice))
