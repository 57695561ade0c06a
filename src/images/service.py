"""Image generation through the AI gateway's image modality."""

import logging
import time

from src.config.settings import get_settings
from src.db.models import GENERATED_IMAGES
from src.images.schemas import GeneratedImage
from src.llm.client import get_llm_client
from src.llm.prompts import build_image_prompt
from src.observations.repository import insert_row

logger = logging.getLogger(__name__)


async def generate_image(user_id: str, prompt: str, style: str | None = None) -> GeneratedImage:
    settings = get_settings()
    model = settings.GATEWAY_IMAGE_MODEL
    start = time.time()

    logger.info("Generating image for user %s: %s", user_id, prompt[:100])
    image_url = await get_llm_client("gateway").generate_image(build_image_prompt(prompt, style), model)
    generation_time_ms = int((time.time() - start) * 1000)

    saved = None
    try:
        saved = insert_row(GENERATED_IMAGES, {
            "user_id": user_id,
            "prompt": prompt,
            "image_data": image_url,
            "model_used": model,
            "generation_time_ms": generation_time_ms,
            "metadata": {"style": style},
        })
    except Exception:
        logger.exception("Failed to save generated image for user %s", user_id)

    logger.info("Image generated in %dms", generation_time_ms)
    return GeneratedImage(
        image=image_url,
        id=saved["id"] if saved else None,
        generation_time_ms=generation_time_ms,
    )
