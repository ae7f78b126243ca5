"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization
2. Router registration
3. Middleware configuration (audit & security headers)
4. Exception handlers (custom exceptions)
5. Startup/shutdown events

Run with: uvicorn src.api.main:app --reload
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from src import __version__
from src.core.config import get_settings
from src.core.logging_config import setup_logging, get_logger
from src.core.exceptions import ChatbotException, ConfigurationError, ValidationError
from src.core.audit import AuditMiddleware, SecurityHeadersMiddleware
from src.api.routes import chat_router, health_router
from src.api.routes.chat import close_chat_service


# Initialize logging before anything else
settings = get_settings()
setup_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: report configuration (never the key itself)
    - Shutdown: close the gateway connection pool
    """
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"Gateway: {settings.ai_gateway_base_url}")
    logger.info(f"Default model: {settings.default_model}, search model: {settings.search_model}")
    logger.info(f"Audit Logging: {settings.enable_audit_logging}")

    if not settings.has_gateway_credentials():
        logger.error("AI_GATEWAY_API_KEY is not set; /api/chat will answer 500")

    yield  # Application runs here

    logger.info(f"Shutting down {settings.app_name}")
    try:
        await close_chat_service()
    except Exception as e:
        logger.error(f"Error closing gateway client: {e}")


app = FastAPI(
    title="Gateway Chat API",
    description="""
    A streaming chat backend that proxies conversations to an AI model gateway.

    ## Features

    - **Any gateway model**: pass `model` as `provider/model`
    - **Web search**: `webSearch=true` routes to a search-capable model
    - **Streaming**: replies arrive as a UI message stream with text,
      reasoning traces and source citations
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# Middleware Configuration (Order matters!)
# ============================================================

app.add_middleware(SecurityHeadersMiddleware)

if settings.enable_audit_logging:
    app.add_middleware(AuditMiddleware)
    logger.info("Audit logging middleware enabled")

if settings.is_development():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.warning("CORS configured for development (all origins allowed)")


# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Handle request body validation errors."""
    logger.warning(f"Validation error on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    """Handle server misconfiguration (missing gateway key)."""
    logger.error(f"Configuration error on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(ChatbotException)
async def chatbot_exception_handler(request: Request, exc: ChatbotException):
    """Handle all custom chatbot exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions globally.

    Detailed error information is only included in development mode.
    """
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "details": str(exc) if settings.is_development() else None,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(chat_router)


# ============================================================
# Root Endpoint
# ============================================================

@app.get("/", include_in_schema=False)
async def root():
    """Point clients at the documentation."""
    return {
        "message": "Gateway Chat API",
        "version": __version__,
        "documentation": "/docs",
        "health": "/health",
        "chat": "/api/chat"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development()
    )
