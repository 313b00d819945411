"""
Chunker: takes source text + config and returns chunks with offsets and metadata.
Deterministic and stateless. Pipeline: validate → clean → protect URLs → segment →
restore URLs → sanitize → metadata.
"""

from collections.abc import Mapping
from typing import Any

from chunker_service.config.chunking.models import ChunkerConfig
from chunker_service.config.logging import get_logger
from chunker_service.services.chunking.cleaners import clean_for_chunking
from chunker_service.services.chunking.errors import ChunkingInvariantError
from chunker_service.services.chunking.metadata import extract_chunk_metadata
from chunker_service.services.chunking.models import Chunk, ChunkingResult, SourceText, TextSpan
from chunker_service.services.chunking.sanitizer import sanitize_unicode
from chunker_service.services.chunking.strategies import get_strategy_fn
from chunker_service.services.chunking.urls import ProtectedText, contains_placeholder, protect_urls, restore_urls
from chunker_service.services.chunking.validation import ensure_valid_config
from chunker_service.utils.ids import generate_chunk_id

logger = get_logger(__name__)


def _check_spans(spans: list[TextSpan], text_length: int) -> None:
    """Raise ChunkingInvariantError if spans are empty, out of bounds or move backwards."""
    prev_start = -1
    for i, (start, end) in enumerate(spans):
        if not 0 <= start < end <= text_length:
            raise ChunkingInvariantError(
                f"Chunk {i} has invalid span [{start}, {end}) for text of length {text_length}"
            )
        if start < prev_start:
            raise ChunkingInvariantError(f"Chunk {i} starts at {start}, before previous start {prev_start}")
        prev_start = start


def chunk_text(
    source_text: str,
    config: ChunkerConfig,
    stream_id: str,
    step_id: str,
    document_id: str = "",
) -> ChunkingResult:
    """
    Chunk one document's text. Raises ConfigurationError for an invalid config
    before touching the text. Empty or whitespace-only text yields zero chunks.
    Chunk offsets index the cleaned text (or the raw text when cleaning is off).
    """
    ensure_valid_config(config)
    strategy_fn = get_strategy_fn(config.algorithm)
    if strategy_fn is None:
        raise ValueError(f"Unknown chunking algorithm: {config.algorithm!r}")

    if not source_text or not source_text.strip():
        return ChunkingResult()

    cleaned = clean_for_chunking(source_text, clean=config.clean_text)
    protected = protect_urls(cleaned) if config.preserve_urls else ProtectedText(text=cleaned)
    placeholder_to_url = protected.placeholder_to_url

    spans = strategy_fn(protected.text, config, protected.atomic_spans)
    _check_spans(spans, len(protected.text))

    total = len(spans)
    chunks: list[Chunk] = []
    for i, (start, end) in enumerate(spans):
        raw = protected.text[start:end]
        has_placeholder = bool(placeholder_to_url) and contains_placeholder(raw, placeholder_to_url)
        text = sanitize_unicode(restore_urls(raw, placeholder_to_url))
        chunks.append(
            Chunk(
                id=generate_chunk_id(stream_id, step_id, document_id, i),
                text=text,
                sequence_number=i,
                original_char_start=protected.to_original(start),
                original_char_end=protected.to_original(end),
                metadata=extract_chunk_metadata(text, i, total, has_placeholder),
            )
        )

    logger.debug(
        "Chunked text",
        extra={
            "document_id": document_id,
            "algorithm": config.algorithm.value,
            "chunk_count": total,
            "url_count": len(placeholder_to_url),
        },
    )
    return ChunkingResult(chunks=chunks, placeholder_to_url=dict(placeholder_to_url))


def chunk_source(source: SourceText, config: ChunkerConfig) -> ChunkingResult:
    """Chunk a SourceText; ids come from the source's stream, step and document."""
    return chunk_text(
        source.text,
        config,
        stream_id=source.stream_id,
        step_id=source.step_id,
        document_id=source.document_id,
    )


def extract_source_text(document: Mapping[str, Any], source_field: str) -> str | None:
    """
    Read the field to chunk from a document. Dotted paths walk nested mappings
    ('metadata.summary'). Returns None when the path is missing or not a string.
    """
    value: Any = document
    for part in source_field.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return None
        value = value[part]
    return value if isinstance(value, str) else None
