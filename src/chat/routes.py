"""Edge function: chat-completion."""

from fastapi import APIRouter, Depends, Request

from src.auth.dependencies import CurrentUser, optional_user
from src.chat.schemas import ChatCompletionRequest
from src.chat.service import complete
from src.utils.responses import success

router = APIRouter(prefix="/functions/v1", tags=["Chat"])


@router.post("/chat-completion", summary="Chat completion", description="Answer a conversation; falls back to the secondary provider when the primary fails.")
async def chat(body: ChatCompletionRequest, request: Request, user: CurrentUser | None = Depends(optional_user)):
    completion = await complete(
        [m.model_dump() for m in body.messages],
        model=body.model,
        system_prompt=body.system_prompt,
        user_id=user.id if user else None,
    )
    return success(request, completion.model_dump())
