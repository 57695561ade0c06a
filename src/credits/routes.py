"""Edge function: credits."""

from fastapi import APIRouter, Depends, Request

from src.auth.dependencies import CurrentUser, require_user
from src.credits.schemas import CreditsBody
from src.credits.service import handle
from src.utils.responses import success

router = APIRouter(prefix="/functions/v1", tags=["Credits"])


@router.post("/credits", summary="Check or deduct credits", description="`action` is `check_only` or `deduct`.")
async def credits(body: CreditsBody, request: Request, user: CurrentUser = Depends(require_user)):
    return success(request, handle(user.id, body.root).model_dump())
