"""Hybrid AI: run work locally when possible, on the server otherwise."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Literal, TypeVar

from src.client.functions import FunctionsClient
from src.client.local_runtime import LocalRuntime, RuntimeUnavailable
from src.utils.fallback import execute_with_fallback

logger = logging.getLogger(__name__)

T = TypeVar("T")

AIProvider = Literal["browser", "server"]

SERVER_TEXT_MODEL = "meta-llama/Llama-3.2-3B-Instruct"
SERVER_EMBEDDINGS_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
SERVER_CLASSIFICATION_MODEL = "facebook/bart-large-mnli"
SERVER_CAPTIONING_MODEL = "nlpconnect/vit-gpt2-image-captioning"
SERVER_DETECTION_MODEL = "facebook/detr-resnet-50"


class HybridAI:
    """Chooses between the local runtime and the inference function per call.

    `provider` is an in-memory preference. After each call `last_used_server`
    says which path produced the result, so callers can tell the user.
    """

    def __init__(
        self,
        functions: FunctionsClient,
        runtime: LocalRuntime | None = None,
        provider: AIProvider = "browser",
        notify: Callable[[str], None] | None = None,
    ):
        self.functions = functions
        self.runtime = runtime
        self.provider: AIProvider = provider
        self.notify = notify
        self.last_used_server: bool | None = None

    async def detect_capabilities(self) -> bool:
        if self.runtime is None:
            return False
        try:
            return self.runtime.is_available()
        except Exception:
            logger.debug("Local capability check failed", exc_info=True)
            return False

    def _announce(self, message: str) -> None:
        logger.info(message)
        if self.notify is not None:
            self.notify(message)

    async def _run(
        self,
        task: str,
        local: Callable[[], Awaitable[T]],
        server: Callable[[], Awaitable[T]],
        preferred: AIProvider | None,
    ) -> T:
        use = preferred or self.provider

        async def local_path() -> T:
            if not await self.detect_capabilities():
                raise RuntimeUnavailable("Local inference is not available")
            return await local()

        if use == "browser":
            primary, fallback, fallback_label = local_path, server, "server"
        else:
            primary, fallback, fallback_label = server, local_path, "browser"

        outcome = await execute_with_fallback(
            primary, fallback,
            task=task,
            on_fallback=lambda exc: self._announce(f"Falling back to {fallback_label} for {task}"),
        )
        ran_server = outcome.used_fallback if use == "browser" else not outcome.used_fallback
        self.last_used_server = ran_server
        return outcome.result

    async def _server(self, body: dict[str, Any]) -> Any:
        data = (await self.functions.invoke("huggingface-inference", body)).unwrap()
        return data["result"]

    async def generate_text(self, prompt: str, preferred: AIProvider | None = None) -> str:
        async def server() -> str:
            result = await self._server({
                "model_id": SERVER_TEXT_MODEL,
                "task": "text-generation",
                "inputs": prompt,
                "parameters": {"max_new_tokens": 100},
            })
            first = result[0] if isinstance(result, list) and result else result
            return first.get("generated_text", "") if isinstance(first, dict) else str(first)

        return await self._run("text-generation", lambda: self.runtime.generate_text(prompt), server, preferred)

    async def embed(self, texts: list[str], preferred: AIProvider | None = None) -> list[list[float]]:
        async def server() -> list[list[float]]:
            return await self._server({
                "model_id": SERVER_EMBEDDINGS_MODEL,
                "task": "feature-extraction",
                "inputs": texts,
            })

        return await self._run("embeddings", lambda: self.runtime.embed(texts), server, preferred)

    async def classify_intent(self, text: str, labels: list[str], preferred: AIProvider | None = None) -> dict:
        async def server() -> dict:
            result = await self._server({
                "model_id": SERVER_CLASSIFICATION_MODEL,
                "task": "zero-shot-classification",
                "inputs": text,
                "candidate_labels": labels,
            })
            return {"labels": list(result["labels"]), "scores": list(result["scores"])}

        return await self._run("classification", lambda: self.runtime.classify(text, labels), server, preferred)

    async def caption_image(self, image_base64: str, preferred: AIProvider | None = None) -> str:
        async def server() -> str:
            result = await self._server({
                "model_id": SERVER_CAPTIONING_MODEL,
                "task": "image-to-text",
                "inputs": image_base64,
            })
            first = result[0] if isinstance(result, list) and result else {}
            return first.get("generated_text", "") if isinstance(first, dict) else ""

        return await self._run("image-captioning", lambda: self.runtime.caption_image(image_base64), server, preferred)

    async def detect_objects(self, image_base64: str, preferred: AIProvider | None = None) -> list[dict]:
        async def server() -> list[dict]:
            return list(await self._server({
                "model_id": SERVER_DETECTION_MODEL,
                "task": "object-detection",
                "inputs": image_base64,
            }))

        return await self._run("object-detection", lambda: self.runtime.detect_objects(image_base64), server, preferred)
