"""FastAPI backend for Review-to-Ad Studio."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from rta.config import get_settings

settings = get_settings()

logger = logging.getLogger(__name__)
logging.basicConfig(level=settings.rta_log_level.upper())

app = FastAPI(
    title="Review-to-Ad Studio API",
    description="Turns customer reviews and a short business questionnaire into ad copy and an ad image.",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
cors_origins = settings.cors_origin_list
cors_origin_regex = settings.cors_origin_regex
logger.info("CORS configured for origins: %s", cors_origins)
if cors_origin_regex:
    logger.info("CORS origin regex: %s", cors_origin_regex)

logger.info(
    "Pipeline: llm=%s, review source=%s, images=%s",
    settings.rta_llm_provider,
    settings.rta_review_source,
    "on" if settings.rta_enable_images else "off",
)

cors_kw: dict = {
    "allow_origins": cors_origins,
    "allow_credentials": True,
    "allow_methods": ["*"],
    "allow_headers": ["*"],
}
if cors_origin_regex:
    cors_kw["allow_origin_regex"] = cors_origin_regex
app.add_middleware(CORSMiddleware, **cors_kw)


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------
class HealthResponse(BaseModel):
    status: str
    review_source: str


@app.get("/health", response_model=HealthResponse)
@app.get("/api/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok", review_source=settings.rta_review_source)


@app.get("/api/")
async def root():
    """API root."""
    return {"message": "Review-to-Ad Studio API", "version": "0.1.0"}


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
from backend.routes import process  # noqa: E402

app.include_router(process.router, prefix="/api", tags=["process"])
