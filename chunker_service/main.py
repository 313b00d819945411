"""FastAPI app entry: config, logging, health, registration and the chunk route."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from chunker_service.config.chunking.models import ChunkerConfig
from chunker_service.config.logging import configure_logging, get_logger
from chunker_service.config.settings import get_settings
from chunker_service.controllers.routes.chunk import build_chunk_response
from chunker_service.controllers.routes.chunk import router as chunk_router
from chunker_service.controllers.schema.chunk import ChunkRequest, DocumentPayload, RegistrationResponse

logger = get_logger(__name__)

SAMPLE_DOCUMENT = DocumentPayload(
    doc_id="health-check",
    title="Preamble",
    body=(
        "We the People of the United States, in Order to form a more perfect Union, establish Justice, "
        "insure domestic Tranquility, provide for the common defence, promote the general Welfare, and "
        "secure the Blessings of Liberty to ourselves and our Posterity, do ordain and establish this "
        "Constitution for the United States of America. See https://www.archives.gov/founding-docs for more."
    ),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: config and logging. Shutdown: log only; the chunker holds no resources."""
    settings = get_settings()
    configure_logging()
    logger.info("Application starting", extra={"app_name": settings.app_name, "environment": settings.environment})
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Chunker Service",
    description="Split document text into overlapping chunks with metadata for embedding",
    version=get_settings().module_version,
    lifespan=lifespan,
)
app.include_router(chunk_router)


def _check_sample_document() -> dict[str, Any]:
    """Run the sample document through the chunker; ok when it yields chunks."""
    try:
        response = build_chunk_response(
            ChunkRequest(document=SAMPLE_DOCUMENT, stream_id="health", step_id="health-check", is_test=True)
        )
    except Exception as e:
        logger.error("Health check failed with exception", extra={"error": str(e)})
        return {"ok": False, "error": f"Health check failed with exception: {e}"}
    if not response.success or not response.chunks:
        return {"ok": False, "error": "; ".join(response.processor_logs)}
    return {"ok": True, "error": None}


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up. Does not exercise the chunker."""
    return {"status": "ok"}


@app.get("/ready")
async def ready() -> JSONResponse:
    """Readiness: the chunker can process the built-in sample document."""
    check = _check_sample_document()
    body = {
        "status": "ok" if check["ok"] else "degraded",
        "chunker": check,
    }
    return JSONResponse(content=body, status_code=200 if check["ok"] else 503)


@app.get("/registration", response_model=RegistrationResponse)
async def registration() -> RegistrationResponse:
    """Module identity plus the ChunkerConfig JSON schema for config forms."""
    settings = get_settings()
    return RegistrationResponse(
        module_name=settings.module_name,
        version=settings.module_version,
        json_config_schema=ChunkerConfig.model_json_schema(by_alias=True),
    )


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Centralized error handling: unexpected failures get a non-leaking message."""
    logger.exception("Unhandled error", extra={"error_type": type(exc).__name__})
    return JSONResponse(
        content={"detail": "An internal error occurred."},
        status_code=500,
    )
