"""Edge function: generate-image."""

from fastapi import APIRouter, Depends, Request

from src.auth.dependencies import CurrentUser, require_user
from src.images.schemas import GenerateImageRequest
from src.images.service import generate_image
from src.utils.responses import success

router = APIRouter(prefix="/functions/v1", tags=["Images"])


@router.post("/generate-image", summary="Generate an image", description="Generate an image from a prompt and optional style. Requires a bearer token.")
async def generate(body: GenerateImageRequest, request: Request, user: CurrentUser = Depends(require_user)):
    image = await generate_image(user.id, body.prompt, body.style)
    return success(request, image.model_dump())
