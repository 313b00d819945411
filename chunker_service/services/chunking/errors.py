"""Chunking engine errors."""


class ConfigurationError(ValueError):
    """Raised when a ChunkerConfig fails validation. The message is user-facing."""


class ChunkingInvariantError(RuntimeError):
    """
    Raised when a segmenter produces spans that break the offset invariant.
    Signals a bug in window or overlap arithmetic; never recovered locally.
    """
