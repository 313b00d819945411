"""Chunker config validation. Runs before any text is touched."""

from chunker_service.config.chunking.models import ChunkerConfig, ChunkingAlgorithm
from chunker_service.services.chunking.errors import ConfigurationError

MIN_CHUNK_SIZE = 50
MAX_CHUNK_SIZE = 10000
MIN_CHUNK_OVERLAP = 0
MAX_CHUNK_OVERLAP = 5000


def validate_chunker_config(config: ChunkerConfig) -> str | None:
    """
    Return None if the config is valid, otherwise a single error message.
    Rules are checked in order and the first failure wins.
    """
    if not MIN_CHUNK_SIZE <= config.chunk_size <= MAX_CHUNK_SIZE:
        return f"chunkSize must be between {MIN_CHUNK_SIZE} and {MAX_CHUNK_SIZE}"
    if not MIN_CHUNK_OVERLAP <= config.chunk_overlap <= MAX_CHUNK_OVERLAP:
        return f"chunkOverlap must be between {MIN_CHUNK_OVERLAP} and {MAX_CHUNK_OVERLAP}"
    if config.chunk_overlap >= config.chunk_size:
        return "chunkOverlap must be less than chunkSize"
    if config.algorithm == ChunkingAlgorithm.SEMANTIC:
        return "Semantic chunking is not yet implemented"
    return None


def ensure_valid_config(config: ChunkerConfig) -> ChunkerConfig:
    """Return the config unchanged, or raise ConfigurationError with the validator's message."""
    error = validate_chunker_config(config)
    if error is not None:
        raise ConfigurationError(error)
    return config
