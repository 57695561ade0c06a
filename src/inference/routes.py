"""Edge function: huggingface-inference."""

from fastapi import APIRouter, Depends, Request

from src.auth.dependencies import CurrentUser, optional_user
from src.inference.schemas import InferenceBody
from src.inference.service import run_inference
from src.utils.responses import success

router = APIRouter(prefix="/functions/v1", tags=["Inference"])


@router.post("/huggingface-inference", summary="Run a hosted model", description="Run one Hugging Face task; the `task` field selects the request shape.")
async def infer(body: InferenceBody, request: Request, user: CurrentUser | None = Depends(optional_user)):
    result = await run_inference(body.root, user.id if user else None)
    return success(request, result)
