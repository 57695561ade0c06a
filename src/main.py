"""Oneiros Edge API: FastAPI application entry point."""

from fastapi import FastAPI

from src.agents.routes import router as agents_router
from src.chat.routes import router as chat_router
from src.config.cors import SecurityHeadersMiddleware, configure_cors
from src.config.logging import configure_logging
from src.credits.routes import router as credits_router
from src.images.routes import router as images_router
from src.inference.routes import router as inference_router
from src.middleware.error_handler import register_error_handlers
from src.middleware.rate_limiter import RateLimiterMiddleware
from src.middleware.request_id import RequestIDMiddleware
from src.observations.routes import router as observations_router
from src.search.routes import router as search_router
from src.voice.routes import router as voice_router

configure_logging()

app = FastAPI(
    title="Oneiros Edge API",
    description=(
        "Stateless edge functions that proxy AI providers and record usage.\n\n"
        "## Functions\n"
        "Every function is `POST /functions/v1/<name>` with a JSON body. Successful calls return "
        "`{status, data, request_id}`; failures return `{error, code, request_id}` with a non-2xx status.\n\n"
        "## Authentication\n"
        "Send `Authorization: Bearer <access token>`. Functions that write per-user data require it; "
        "others accept anonymous callers and skip analytics writes."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Images", "description": "Image generation"},
        {"name": "Voice", "description": "Speech synthesis"},
        {"name": "Inference", "description": "Hosted model inference (server fallback for local models)"},
        {"name": "Chat", "description": "Chat completion with provider fallback"},
        {"name": "Agents", "description": "Single agents and the multi-agent orchestrator"},
        {"name": "Search", "description": "Web and social trend search"},
        {"name": "Credits", "description": "Credit balance checks and deductions"},
        {"name": "Analytics", "description": "LLM usage observations"},
    ],
)

# --- Middleware (last added runs first) ---
app.add_middleware(RateLimiterMiddleware)
configure_cors(app)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIDMiddleware)

# --- Error handlers ---
register_error_handlers(app)

# --- Routes ---
app.include_router(images_router)
app.include_router(voice_router)
app.include_router(inference_router)
app.include_router(chat_router)
app.include_router(agents_router)
app.include_router(search_router)
app.include_router(credits_router)
app.include_router(observations_router)


@app.get("/health", tags=["Health"], summary="Health check", description="Returns OK if the service is running.")
async def health_check():
    return {"status": "ok"}
