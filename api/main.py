import logging
from contextlib import asynccontextmanager
from typing import Optional

from dependency_injector.errors import Error as ResolutionError
from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse
from prometheus_client import make_asgi_app

from api.dependencies import Container, build_container, verify_registrations
from api.routes import data
from api.schemas import HealthResponse
from config import API_HOST, API_PORT, LOG_JSON, LOG_LEVEL, SERVICE_NAME
from src.observability import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: Container = app.state.container
    # Misconfigured wiring must stop the process before any request is served
    verify_registrations(container)
    logger.info("DI container verified, serving requests")
    yield
    container.shutdown_resources()


async def resolution_error_handler(request: Request, exc: ResolutionError):
    logger.error("Dependency resolution failed for %s: %s", request.url.path, exc)
    return ORJSONResponse(
        status_code=500,
        content={"detail": f"Dependency resolution failed: {exc}"},
    )


def create_app(container: Optional[Container] = None) -> FastAPI:
    if container is None:
        container = build_container()

    app = FastAPI(
        title="Sample Data API",
        description="Seeded sample records served through a DI-resolved repository.",
        version="1.0.0",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_exception_handler(ResolutionError, resolution_error_handler)

    # Register Routers
    app.include_router(data.router, prefix="/data", tags=["Data"])
    app.mount("/metrics", make_asgi_app())

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """
        Simple health check endpoint.
        """
        return {"status": "ok", "service": SERVICE_NAME}

    return app


app = create_app()


def main():
    import uvicorn
    configure_logging(LOG_LEVEL, json_output=LOG_JSON)
    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, log_config=None)


if __name__ == "__main__":
    main()
