"""Hugging Face inference: request shaping and response extraction per task."""

import base64
import logging
import time
from typing import Any

from src.config.settings import get_settings
from src.inference.schemas import (
    FeatureExtractionRequest,
    ImageToTextRequest,
    InferenceRequest,
    ObjectDetectionRequest,
    TextGenerationRequest,
    TextToImageRequest,
    ZeroShotClassificationRequest,
)
from src.observations.repository import record_observation_quietly
from src.providers.http import post, require_key
from src.utils.errors import EdgeFunctionError, ErrorCode, ProviderError

logger = logging.getLogger(__name__)


def _options(req: InferenceRequest, use_cache_default: bool = True) -> dict:
    use_cache = req.options.use_cache
    return {
        "use_cache": use_cache_default if use_cache is None else use_cache,
        "wait_for_model": req.options.wait_for_model,
    }


def _text_generation(req: TextGenerationRequest) -> dict:
    params = req.parameters
    return {
        "inputs": req.inputs,
        "parameters": {
            "max_new_tokens": params.get("max_tokens", 512),
            "temperature": 0.7,
            "top_p": 0.9,
            "return_full_text": False,
            **{k: v for k, v in params.items() if k != "max_tokens"},
        },
        "options": _options(req),
    }


def _text_to_image(req: TextToImageRequest) -> dict:
    return {
        "inputs": req.inputs,
        "parameters": {"num_inference_steps": 50, "guidance_scale": 7.5, **req.parameters},
        "options": _options(req, use_cache_default=False),
    }


def _zero_shot(req: ZeroShotClassificationRequest) -> dict:
    return {
        "inputs": req.inputs,
        "parameters": {"candidate_labels": req.candidate_labels},
        "options": _options(req),
    }


def _plain(req: FeatureExtractionRequest | ImageToTextRequest | ObjectDetectionRequest) -> dict:
    return {"inputs": req.inputs, "options": _options(req)}


_BUILDERS = {
    TextGenerationRequest: _text_generation,
    FeatureExtractionRequest: _plain,
    ZeroShotClassificationRequest: _zero_shot,
    ImageToTextRequest: _plain,
    ObjectDetectionRequest: _plain,
    TextToImageRequest: _text_to_image,
}


def build_payload(req: InferenceRequest) -> dict:
    return _BUILDERS[type(req)](req)


async def run_inference(req: InferenceRequest, user_id: str | None = None) -> dict[str, Any]:
    settings = get_settings()
    url = f"{settings.HUGGINGFACE_URL.rstrip('/')}/models/{req.model_id}"
    headers = {"Authorization": f"Bearer {require_key(settings.HUGGINGFACE_API_KEY, 'HUGGINGFACE_API_KEY')}"}

    logger.info("Calling Hugging Face model %s (%s)", req.model_id, req.task)
    start = time.time()
    try:
        response = await post("huggingface", url, json=build_payload(req), headers=headers)
    except ProviderError as exc:
        if exc.upstream_status == 503:
            raise EdgeFunctionError(ErrorCode.UPSTREAM_ERROR, "Model is loading. Please try again in a few seconds.")
        raise
    latency_ms = int((time.time() - start) * 1000)

    if isinstance(req, TextToImageRequest):
        encoded = base64.b64encode(response.content).decode("ascii")
        result: Any = f"data:image/png;base64,{encoded}"
    else:
        try:
            result = response.json()
        except ValueError:
            raise EdgeFunctionError(ErrorCode.UPSTREAM_ERROR, "huggingface returned invalid JSON")

    if user_id:
        record_observation_quietly(
            user_id, "huggingface", req.model_id,
            latency_ms=latency_ms,
            metadata={"task": req.task},
        )

    return {"result": result, "model_id": req.model_id, "task": req.task}
