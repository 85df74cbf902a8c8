"""Main FastAPI application."""
import json
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from tinysparks.settings import settings
from tinysparks.api.activity import router as activity_router
from tinysparks.api.deps import build_favorites_store
from tinysparks.domain.activity.services import PlanRequestTracker
from tinysparks.domain.common.errors import (
    ConfigurationError,
    ConflictError,
    GenerationError,
    PersistenceError,
    ValidationError as DomainValidationError,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Favorites are loaded once per process; a corrupt store starts empty instead of failing startup
    app.state.favorites_store = build_favorites_store()
    app.state.plan_tracker = PlanRequestTracker()

    if (settings.gemini_api_key or "").strip():
        logger.info("Gemini API key configured (model %s)", settings.llm_default_text_model)
    else:
        logger.error(
            "GEMINI_API_KEY is not set. Plan generation will fail with a configuration error; "
            "favorites still work. Set GEMINI_API_KEY (or API_KEY) in the environment or .env."
        )

    yield

    logger.info("Shutting down (%s favorites saved)", len(app.state.favorites_store))


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests and responses."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        logger.info(f"[REQUEST] {request.method} {request.url.path}")
        logger.debug(f"   Query params: {dict(request.query_params)}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(f"[RESPONSE] {request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)")
        return response


# Add logging middleware AFTER CORS (CORS must be first)
app.add_middleware(LoggingMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with detailed logging."""
    logger.error(f"[VALIDATION ERROR] {request.method} {request.url.path}")
    if getattr(exc, "body", None):
        try:
            body_str = exc.body.decode("utf-8") if isinstance(exc.body, bytes) else json.dumps(exc.body, default=str)
            logger.error(f"   Request body: {body_str}")
        except Exception as e:
            logger.error(f"   Could not decode request body: {e}")
    errors = exc.errors()
    logger.error(f"   Validation errors ({len(errors)}):")
    for i, error in enumerate(errors, 1):
        logger.error(f"   Error {i}: {json.dumps(error, default=str)}")
    return JSONResponse(
        status_code=422,
        content={"detail": json.loads(json.dumps(errors, default=str))},
    )


# Domain error handlers: map domain exceptions to HTTP status
@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    """Return 503 with the configuration message shown verbatim."""
    logger.error("Configuration error on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    """Return 502 with the generic retry message; the cause was already logged."""
    return JSONResponse(status_code=502, content={"detail": exc.message})


@app.exception_handler(ConflictError)
async def conflict_error_handler(request: Request, exc: ConflictError):
    """Return 409 for conflict errors (e.g. a plan is already being generated)."""
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(DomainValidationError)
async def domain_validation_handler(request: Request, exc: DomainValidationError):
    """Return 422 for domain validation errors."""
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    """Return 500 when favorites could not be written."""
    logger.error("Persistence error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": exc.message})


# Health check (root and under /v1)
@app.get("/health")
@app.get(f"{settings.api_v1_prefix}/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/ready")
async def readiness():
    """Readiness endpoint: run all checks and return 200 if ready, 503 otherwise."""
    from tinysparks.readiness import run_all_checks, is_ready
    checks = run_all_checks()
    ready, summary = is_ready(checks)
    if ready:
        return {"ready": True, "checks": summary}
    return JSONResponse(
        status_code=503,
        content={"ready": False, "checks": summary},
    )


# API v1 routes
app.include_router(activity_router, prefix=f"{settings.api_v1_prefix}/activity", tags=["activity"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tinysparks.main:app", host="0.0.0.0", port=8000, reload=True)
