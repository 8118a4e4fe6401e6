"""
FastAPI Application Entry Point
===============================
Main application with lifecycle management, middleware, and route mounting.
"""

from contextlib import asynccontextmanager
from datetime import datetime
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from citro.config import get_settings
from citro.core.exceptions import CitroException
from citro.core.pipeline import PipelineOrchestrator, set_pipeline
from citro.api.routes import voice, health
from citro.db.database import init_db, close_db
from citro.logging.command_logger import CommandLogger
from citro.resolvers import build_registry

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info("Starting Citro Voice Service")
    logger.info("=" * 60)

    # ==================
    # STARTUP
    # ==================

    command_logger = None
    if settings.ENABLE_COMMAND_LOG:
        logger.info("Initializing command logger...")
        command_logger = CommandLogger(str(settings.COMMAND_LOG_PATH))
        command_logger.start()
        await command_logger.log_system_event("Application starting", {
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT
        })
    app.state.command_logger = command_logger

    # Initialize database
    logger.info("Initializing database...")
    await init_db()

    logger.info("Initializing resolver registry...")
    app.state.resolver_registry = build_registry()

    app.state.pipeline = PipelineOrchestrator(app.state.resolver_registry, command_logger)
    set_pipeline(app.state.pipeline)

    logger.info("=" * 60)
    logger.info("Citro Voice Service Ready!")
    logger.info(f"Server: http://{settings.HOST}:{settings.PORT}")
    logger.info(f"Docs: http://{settings.HOST}:{settings.PORT}/docs")
    logger.info("=" * 60)

    if command_logger:
        await command_logger.log_system_event("Application started successfully", {
            "host": settings.HOST,
            "port": settings.PORT
        })

    yield  # Application runs here

    # ==================
    # SHUTDOWN
    # ==================

    logger.info("Shutting down Citro Voice Service...")

    if command_logger:
        await command_logger.log_system_event("Application shutting down", {})
        await command_logger.close()

    set_pipeline(None)
    await close_db()

    logger.info("Shutdown complete.")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    ## Citro Voice Command Service

    Deterministic voice-command NLU for the Citronics 2K26 fest website.

    ### Features:
    - 🗣️ Hinglish / Hindi transcript normalization
    - 🎯 Pattern-based intent detection with entity extraction
    - 📚 Built-in event knowledge base (35 events, 14 departments)
    - 🛒 Cart actions backed by the live event table

    ### Pipeline:
    ```
    Transcript → Normalize → Intent → Resolve → Render
    ```
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# ==================
# MIDDLEWARE
# ==================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_timing_header(request: Request, call_next):
    """Add request timing information to response headers."""
    start_time = datetime.now()
    response = await call_next(request)
    process_time = (datetime.now() - start_time).total_seconds() * 1000
    response.headers["X-Process-Time-Ms"] = f"{process_time:.2f}"
    return response


# ==================
# EXCEPTION HANDLERS
# ==================

@app.exception_handler(CitroException)
async def citro_exception_handler(request: Request, exc: CitroException):
    """Handle Citro exceptions."""
    logger.error(f"CitroException: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Voice processing failed",
            "details": str(exc) if settings.DEBUG else None
        }
    )


# ==================
# ROUTES
# ==================

app.include_router(health.router, tags=["Health"])
app.include_router(voice.router, prefix="/api/voice", tags=["Voice"])


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health"
    }


# ==================
# DEBUG ENDPOINTS
# ==================

if settings.DEBUG:
    @app.get("/debug/config")
    async def debug_config():
        """Debug endpoint to view configuration (DEBUG mode only)."""
        return {
            "environment": settings.ENVIRONMENT,
            "intent_min_confidence": settings.INTENT_MIN_CONFIDENCE,
            "pipeline_confidence_gate": settings.PIPELINE_CONFIDENCE_GATE,
            "kb_match_min_confidence": settings.KB_MATCH_MIN_CONFIDENCE,
            "max_transcript_length": settings.MAX_TRANSCRIPT_LENGTH
        }
