"""In-process inference with transformers pipelines.

This is the local counterpart of the hosted `huggingface-inference` function.
Availability is best-effort: if the library is not installed the runtime
reports itself unavailable rather than failing. Pipelines are synchronous, so
every call runs in a worker thread and the event loop stays free while a model
is busy.
"""

import asyncio
import importlib.util
import logging
from typing import Any

logger = logging.getLogger(__name__)

TEXT_GENERATION_MODEL = "gpt2"
EMBEDDINGS_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
CLASSIFICATION_MODEL = "facebook/bart-large-mnli"
CAPTIONING_MODEL = "nlpconnect/vit-gpt2-image-captioning"
DETECTION_MODEL = "facebook/detr-resnet-50"


class RuntimeUnavailable(RuntimeError):
    pass


def _mean_pool(tokens: list[list[float]]) -> list[float]:
    width = len(tokens[0])
    return [sum(t[i] for t in tokens) / len(tokens) for i in range(width)]


def _as_image_input(image_base64: str) -> str:
    # transformers' image loader accepts base64 data URLs
    if image_base64.startswith("data:"):
        return image_base64
    return f"data:image/png;base64,{image_base64}"


class LocalRuntime:
    def __init__(self, device: str | None = None):
        self.device = device
        self._pipelines: dict[str, Any] = {}

    def is_available(self) -> bool:
        try:
            return importlib.util.find_spec("transformers") is not None
        except (ImportError, ValueError):
            return False

    def _pipeline(self, task: str, model: str):
        key = f"{task}:{model}"
        if key not in self._pipelines:
            if not self.is_available():
                raise RuntimeUnavailable("transformers is not installed")
            from transformers import pipeline
            logger.info("Loading local %s pipeline %s", task, model)
            self._pipelines[key] = pipeline(task, model=model, device=self.device)
        return self._pipelines[key]

    async def _call(self, task: str, model: str, *args: Any, **kwargs: Any) -> Any:
        def run() -> Any:
            return self._pipeline(task, model)(*args, **kwargs)

        return await asyncio.to_thread(run)

    async def generate_text(self, prompt: str, max_new_tokens: int = 50) -> str:
        output = await self._call("text-generation", TEXT_GENERATION_MODEL, prompt, max_new_tokens=max_new_tokens)
        first = output[0] if isinstance(output, list) else output
        return first.get("generated_text", "")

    async def embed(self, texts: list[str]) -> list[list[float]]:
        vectors = []
        for text in texts:
            output = await self._call("feature-extraction", EMBEDDINGS_MODEL, text)
            vectors.append(_mean_pool(output[0]))
        return vectors

    async def classify(self, text: str, labels: list[str]) -> dict:
        result = await self._call("zero-shot-classification", CLASSIFICATION_MODEL, text, candidate_labels=labels)
        return {"labels": list(result["labels"]), "scores": list(result["scores"])}

    async def caption_image(self, image_base64: str) -> str:
        output = await self._call("image-to-text", CAPTIONING_MODEL, _as_image_input(image_base64))
        first = output[0] if isinstance(output, list) and output else {}
        return first.get("generated_text", "") if isinstance(first, dict) else ""

    async def detect_objects(self, image_base64: str) -> list[dict]:
        return list(await self._call("object-detection", DETECTION_MODEL, _as_image_input(image_base64)))
