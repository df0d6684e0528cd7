from contextlib import asynccontextmanager

from fastapi import FastAPI

from openapi_validation import ValidatorFactory, install
from openapi_validation.core.config import settings
from openapi_validation.core.logging import configure_logging, get_logger

from samples.api import images

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    log.info("startup", message="Sample API starting up")
    yield
    log.info("shutdown", message="Sample API shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Sample API",
        description="Sample API whose OpenAPI document carries validator-derived constraints",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(images.router, prefix="/api/image", tags=["image"])

    install(app, ValidatorFactory(images.VALIDATORS))
    return app


app = create_app()


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": "0.1.0"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("samples.main:app", host="127.0.0.1", port=8000, log_config=None)
