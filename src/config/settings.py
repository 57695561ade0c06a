"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Supabase
    SUPABASE_URL: str
    SUPABASE_SERVICE_ROLE_KEY: str
    FUNCTIONS_BASE_URL: str = "http://localhost:8000/functions/v1"

    # LLM
    GROQ_API_KEY: str = ""
    GOOGLE_AI_API_KEY: str = ""
    DEFAULT_MODEL: str = "llama-3.1-8b-instant"
    FALLBACK_MODEL: str = "gemini-1.5-flash"

    # AI gateway (chat completions + image modality)
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev"
    AI_GATEWAY_API_KEY: str = ""
    GATEWAY_TEXT_MODEL: str = "google/gemini-2.5-flash"
    GATEWAY_IMAGE_MODEL: str = "google/gemini-2.5-flash-image"

    # Speech, inference and search providers
    ELEVENLABS_URL: str = "https://api.elevenlabs.io"
    ELEVENLABS_API_KEY: str = ""
    DEFAULT_VOICE_ID: str = "9BWtsMINqrJLrRacOk9x"
    TTS_MODEL: str = "eleven_turbo_v2_5"
    HUGGINGFACE_URL: str = "https://api-inference.huggingface.co"
    HUGGINGFACE_API_KEY: str = ""
    TAVILY_URL: str = "https://api.tavily.com"
    TAVILY_API_KEY: str = ""
    PROVIDER_TIMEOUT_SECONDS: float = 60.0

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Rate limiting
    RATE_LIMIT_STANDARD: int = 60
    RATE_LIMIT_AI: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache()
def get_settings() -> Settings:
    return Settings()
