#!/usr/bin/env python3
"""
TalentScout API - FastAPI Application

Jobs, candidate applications, proactive candidate matches, video
screenings and candidate profiles. Scoring and matching run as background
tasks; see pipeline/tasks.py.

Usage:
    python -m web.backend.app
    uvicorn web.backend.app:app --port 8080

Docs are served at /docs (Swagger UI) and /redoc.
"""

import logging

from fastapi import FastAPI

from .exceptions import register_exception_handlers
from .rate_limit import add_rate_limit_handlers
from .routers import (
    jobs_router,
    applications_router,
    matches_router,
    screenings_router,
    users_router,
    email_router
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "talentscout-api"


def create_app() -> FastAPI:
    """Build the FastAPI application with handlers and routers attached."""
    api = FastAPI(
        title="TalentScout API",
        description="Candidate scoring, matching and screening",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    add_rate_limit_handlers(api)
    register_exception_handlers(api)

    for router in (jobs_router, applications_router, matches_router, screenings_router, users_router, email_router):
        api.include_router(router)

    @api.get("/health")
    def health_check():
        return {"status": "healthy", "service": SERVICE_NAME}

    return api


app = create_app()


def main(host: str = None, port: int = None):
    """Serve the API with uvicorn; host and port default to the web config."""
    import uvicorn
    from core.config_loader import load_config

    web = load_config().web
    host = host or web.host
    port = port or web.port
    logger.info(f"Starting TalentScout API on {host}:{port} (docs at /docs)")
    uvicorn.run("web.backend.app:app", host=host, port=port, reload=False, log_level="info")


if __name__ == "__main__":
    main()
