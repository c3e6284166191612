import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from resume_parser.api.routes.parse import router as parse_router
from resume_parser.core.config import settings

logging.basicConfig(level=settings.log_level, format="%(message)s")

app = FastAPI(
    title="Resume Parser (Free-Text Resume Extraction Service)",
    description="Deterministic resume parsing service that turns plain resume text into a structured record with a completeness score",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(parse_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "resume-parser", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Resume Parser API",
        version="0.1.0",
        description="Heuristic resume text parsing with confidence scoring",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
