"""LLM client abstraction: AI gateway, Groq (primary chat) and Google AI (fallback chat)."""

import logging
from abc import ABC, abstractmethod

from src.config.settings import get_settings
from src.db.models import ROLE_SYSTEM, ROLE_USER
from src.providers.http import post_json, require_key
from src.utils.errors import EdgeFunctionError, ErrorCode

logger = logging.getLogger(__name__)

CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 1024


class LLMClient(ABC):
    @abstractmethod
    async def generate(self, messages: list[dict], model: str) -> dict:
        """Return {"content": str, "finish_reason": str, "input_tokens": int, "output_tokens": int}."""
        ...


class GatewayClient(LLMClient):
    """OpenAI-compatible chat completions gateway."""

    provider = "ai-gateway"

    def __init__(self):
        settings = get_settings()
        self._url = settings.AI_GATEWAY_URL.rstrip("/") + "/v1/chat/completions"
        self._api_key = settings.AI_GATEWAY_API_KEY

    def _headers(self) -> dict[str, str]:
        key = require_key(self._api_key, "AI_GATEWAY_API_KEY")
        return {"Authorization": f"Bearer {key}", "Content-Type": "application/json"}

    async def _complete(self, payload: dict) -> dict:
        data = await post_json(self.provider, self._url, json=payload, headers=self._headers())
        choices = data.get("choices") or []
        if not choices:
            raise EdgeFunctionError(ErrorCode.UPSTREAM_ERROR, "AI gateway returned no choices")
        return data

    async def generate(self, messages: list[dict], model: str) -> dict:
        data = await self._complete({"model": model, "messages": messages})
        choice = data["choices"][0]
        usage = data.get("usage") or {}
        return {
            "content": (choice.get("message") or {}).get("content") or "",
            "finish_reason": choice.get("finish_reason") or "stop",
            "input_tokens": usage.get("prompt_tokens") or 0,
            "output_tokens": usage.get("completion_tokens") or 0,
        }

    async def generate_image(self, prompt: str, model: str) -> str:
        """Return the first image URL (usually a data: URL) from an image-modality completion."""
        data = await self._complete({
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "modalities": ["image", "text"],
        })
        message = data["choices"][0].get("message") or {}
        images = message.get("images") or []
        url = ((images[0] if images else {}).get("image_url") or {}).get("url")
        if not url:
            raise EdgeFunctionError(ErrorCode.UPSTREAM_ERROR, "No image generated")
        return url


class GroqClient(LLMClient):
    """Primary chat provider."""

    def __init__(self, temperature: float = CHAT_TEMPERATURE, max_tokens: int = CHAT_MAX_TOKENS):
        from groq import AsyncGroq
        self._client = AsyncGroq(api_key=require_key(get_settings().GROQ_API_KEY, "GROQ_API_KEY"))
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(self, messages: list[dict], model: str) -> dict:
        response = await self._client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        usage = response.usage
        choice = response.choices[0]
        return {
            "content": choice.message.content or "",
            "finish_reason": choice.finish_reason or "stop",
            "input_tokens": getattr(usage, "prompt_tokens", 0) or 0,
            "output_tokens": getattr(usage, "completion_tokens", 0) or 0,
        }


def to_gemini_history(messages: list[dict]) -> tuple[str | None, list[dict]]:
    """Split chat messages into a Gemini system instruction and turn history.

    Gemini names the assistant role `model`; the last system message wins.
    """
    system = None
    turns = []
    for msg in messages:
        if msg["role"] == ROLE_SYSTEM:
            system = msg["content"]
            continue
        role = ROLE_USER if msg["role"] == ROLE_USER else "model"
        turns.append({"role": role, "parts": [msg["content"]]})
    return system, turns


class GoogleAIClient(LLMClient):
    """Fallback chat provider."""

    def __init__(self, temperature: float = CHAT_TEMPERATURE, max_tokens: int = CHAT_MAX_TOKENS):
        import google.generativeai as genai
        genai.configure(api_key=require_key(get_settings().GOOGLE_AI_API_KEY, "GOOGLE_AI_API_KEY"))
        self._genai = genai
        self._generation_config = {"temperature": temperature, "max_output_tokens": max_tokens}

    async def generate(self, messages: list[dict], model: str) -> dict:
        system, turns = to_gemini_history(messages)
        if not turns:
            raise EdgeFunctionError(ErrorCode.INVALID_INPUT, "No user message to answer")

        gen_model = self._genai.GenerativeModel(
            model,
            system_instruction=system,
            generation_config=self._generation_config,
        )
        session = gen_model.start_chat(history=turns[:-1])
        response = await session.send_message_async(turns[-1]["parts"][0])
        usage = response.usage_metadata
        return {
            "content": response.text,
            "finish_reason": "stop",
            "input_tokens": getattr(usage, "prompt_token_count", 0) or 0,
            "output_tokens": getattr(usage, "candidates_token_count", 0) or 0,
        }


# Singletons
_clients: dict[str, LLMClient] = {}


def get_llm_client(provider: str = "groq") -> LLMClient:
    if provider not in _clients:
        if provider == "groq":
            _clients[provider] = GroqClient()
        elif provider == "google":
            _clients[provider] = GoogleAIClient()
        elif provider == "gateway":
            _clients[provider] = GatewayClient()
        else:
            raise ValueError(f"Unknown LLM provider: {provider}")
    return _clients[provider]
