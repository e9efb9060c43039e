"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from jobfinder.api.deps import build_services
from jobfinder.api.limiter import limiter
from jobfinder.config import settings
from jobfinder.errors import ConfigurationError, MalformedUpstreamResponse, UpstreamError

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create external-service clients on startup, close them on shutdown."""
    logging.basicConfig(level=settings.log_level.upper())
    app.state.services = build_services(settings)
    try:
        yield
    finally:
        await app.state.services.aclose()
        app.state.services = None


app = FastAPI(
    title="Job Finder API",
    description="Job search proxy with CV upload, parsing and job scoring",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(MalformedUpstreamResponse)
async def malformed_response_handler(request: Request, exc: MalformedUpstreamResponse):
    logger.error("Malformed response from %s: %s", exc.service, exc.message)
    return JSONResponse(
        status_code=502,
        content={"detail": "Malformed upstream response", "service": exc.service},
    )


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    return JSONResponse(
        status_code=502,
        content={"detail": f"{exc.service} call failed", "service": exc.service},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)


# Import and include routers
from jobfinder.api.routes import cv, score, search  # noqa: E402

app.include_router(search.router, prefix="/api", tags=["Search"])
app.include_router(cv.router, prefix="/api", tags=["CV"])
app.include_router(score.router, prefix="/api", tags=["Scoring"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
