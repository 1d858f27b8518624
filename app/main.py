"""Evolution Mock API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GatewayError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One InstanceGateway per app, built in lifespan, pending completions cancelled on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Gateway on app.state rather than a module global: tests swap it per test
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.security_headers import register_security_headers
from app.infrastructure.observability import setup_logging
from app.config import get_settings
from app.services.instance_gateway import InstanceGateway
from app.api.routes import health, instances, manager, messages, webhooks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.gateway = InstanceGateway.from_settings(settings)
    logger.info(f"Evolution API running on port {settings.port}")
    logger.info(f"Manager: http://localhost:{settings.port}/manager")
    yield
    await app.state.gateway.shutdown()
    logger.info("Evolution API shutting down")


settings = get_settings()

app = FastAPI(
    title="Evolution Mock API", version=settings.api_version, lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_security_headers(app)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(manager.router)
app.include_router(instances.router)
app.include_router(webhooks.router)
app.include_router(messages.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
