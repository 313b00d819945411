"""POST /chunk: chunk one document's source field. Config inline or from the active profile in static.json."""

import re
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from chunker_service.config.chunking.models import ChunkerConfig
from chunker_service.config.chunking.static import get_active_profile_name, resolve_chunking_config
from chunker_service.config.logging import get_logger
from chunker_service.controllers.schema.chunk import ChunkPayload, ChunkRequest, ChunkResponse
from chunker_service.services.chunking.chunker import chunk_text, extract_source_text
from chunker_service.services.chunking.errors import ConfigurationError
from chunker_service.services.chunking.validation import validate_chunker_config

logger = get_logger(__name__)

router = APIRouter(prefix="/chunk", tags=["chunking"])

_RESULT_SET_UNSAFE = re.compile(r"[^a-zA-Z0-9_\-]")


def result_set_name(step_id: str) -> str:
    """Name of the result set the chunks are stored under, safe for index field names."""
    return _RESULT_SET_UNSAFE.sub("_", f"{step_id}_chunks_{step_id}")


def _resolve_config(body: ChunkRequest) -> ChunkerConfig:
    """Inline config wins; otherwise the active profile. Raises ConfigurationError when invalid or unknown."""
    try:
        config = resolve_chunking_config(get_active_profile_name(), body.config)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration format: {e.errors()[0]['msg']}") from e
    except ValueError as e:
        # Unknown or missing profile
        raise ConfigurationError(str(e)) from e
    error = validate_chunker_config(config)
    if error is not None:
        raise ConfigurationError(error)
    return config


def build_chunk_response(body: ChunkRequest) -> ChunkResponse:
    """
    Process a chunk request into a response. Raises ConfigurationError for an
    invalid config; a missing source field is reported in the response body.
    """
    log_prefix = "[TEST] " if body.is_test else ""
    if body.document is None:
        logger.info(f"{log_prefix}No document provided in request")
        return ChunkResponse(
            success=True,
            processor_logs=["Chunker service: no document to process. Chunker service successfully processed request."],
        )

    config = _resolve_config(body)
    doc = body.document
    logger.info(
        f"{log_prefix}Processing document",
        extra={"doc_id": doc.doc_id, "step_id": body.step_id, "stream_id": body.stream_id},
    )
    if not config.source_field:
        message = "Missing 'sourceField' in ChunkerConfig"
        return ChunkResponse(
            success=False,
            processor_logs=[message],
            doc_id=doc.doc_id,
            error_details={"error_message": message},
        )

    source_text = extract_source_text(doc.model_dump(), config.source_field) or ""
    result = chunk_text(
        source_text,
        config,
        stream_id=body.stream_id,
        step_id=body.step_id,
        document_id=doc.doc_id,
    )
    set_name = result_set_name(body.step_id)
    response = ChunkResponse(
        success=True,
        doc_id=doc.doc_id,
        source_field=config.source_field,
        result_set_name=set_name,
        chunk_config_id=body.step_id,
        url_count=result.url_count,
        processed_at=datetime.now(timezone.utc),
    )
    if not result.chunks:
        response.processor_logs.append(
            f"{log_prefix}No content in '{config.source_field}' to chunk for document ID: {doc.doc_id}"
        )
        return response

    response.chunks.extend(
        ChunkPayload(
            chunk_id=chunk.id,
            chunk_number=chunk.sequence_number,
            text_content=chunk.text,
            original_char_start_offset=chunk.original_char_start,
            original_char_end_offset=chunk.original_char_end,
            chunk_config_id=body.step_id,
            metadata=chunk.metadata,
        )
        for chunk in result.chunks
    )
    algorithm = config.algorithm.value
    if body.is_test:
        message = (
            f"{log_prefix}Successfully created and added metadata to {len(result.chunks)} chunks "
            f"for testing using {algorithm} algorithm. Chunker service validated successfully."
        )
    else:
        message = (
            f"Successfully created and added metadata to {len(result.chunks)} chunks from source field "
            f"'{config.source_field}' into result set '{set_name}' using {algorithm} algorithm "
            f"({config.chunk_size_description()}, {config.chunk_overlap_description()} overlap). "
            "Chunker service successfully processed document."
        )
    response.processor_logs.append(message)
    return response


@router.post("", response_model=ChunkResponse)
def chunk_document(body: ChunkRequest) -> ChunkResponse:
    """
    Chunk the request's document. Invalid configs are rejected with 422 and the
    validator's message; nothing is chunked in that case. Any other
    error is an internal fault and reaches the global handler.
    """
    try:
        return build_chunk_response(body)
    except ConfigurationError as e:
        logger.warning("Rejected chunker configuration", extra={"error": str(e)})
        raise HTTPException(status_code=422, detail=str(e)) from e
