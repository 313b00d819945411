"""Chunking configuration models. Read-only; no business logic."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ChunkingAlgorithm(str, Enum):
    """Algorithm used to split text; selects the unit of chunk_size and chunk_overlap."""

    CHARACTER = "character"
    TOKEN = "token"
    SENTENCE = "sentence"
    SEMANTIC = "semantic"


DEFAULT_ALGORITHM = ChunkingAlgorithm.TOKEN
DEFAULT_SOURCE_FIELD = "body"
DEFAULT_CHUNK_SIZE = 500
DEFAULT_CHUNK_OVERLAP = 50
DEFAULT_PRESERVE_URLS = True
DEFAULT_CLEAN_TEXT = True

_UNITS = {
    ChunkingAlgorithm.CHARACTER: "characters",
    ChunkingAlgorithm.TOKEN: "tokens",
    ChunkingAlgorithm.SENTENCE: "sentences",
}


class ChunkerConfig(BaseModel):
    """
    Chunking parameters for one processing request. Immutable once built.
    Ranges are advertised in the schema but enforced by the validator, not here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    algorithm: ChunkingAlgorithm = Field(
        default=DEFAULT_ALGORITHM,
        description="Chunking algorithm to use for splitting text",
    )
    source_field: str = Field(
        default=DEFAULT_SOURCE_FIELD,
        alias="sourceField",
        description="Document field to extract text from (dotted paths allowed)",
    )
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        alias="chunkSize",
        description="Target size for each chunk, in algorithm units",
        json_schema_extra={"minimum": 50, "maximum": 10000},
    )
    chunk_overlap: int = Field(
        default=DEFAULT_CHUNK_OVERLAP,
        alias="chunkOverlap",
        description="Overlap between consecutive chunks, same units as chunkSize",
        json_schema_extra={"minimum": 0, "maximum": 5000},
    )
    preserve_urls: bool = Field(
        default=DEFAULT_PRESERVE_URLS,
        alias="preserveUrls",
        description="Keep URLs as atomic units during chunking",
    )
    clean_text: bool = Field(
        default=DEFAULT_CLEAN_TEXT,
        alias="cleanText",
        description="Normalize whitespace and line endings before chunking",
    )

    def chunk_size_description(self) -> str:
        """Chunk size with units, e.g. '500 tokens'."""
        if self.algorithm == ChunkingAlgorithm.SEMANTIC:
            return f"{self.chunk_size} characters (semantic boundaries)"
        return f"{self.chunk_size} {_UNITS[self.algorithm]}"

    def chunk_overlap_description(self) -> str:
        """Chunk overlap with units, e.g. '50 tokens'."""
        if self.algorithm == ChunkingAlgorithm.SEMANTIC:
            return f"{self.chunk_overlap} characters (semantic overlap)"
        return f"{self.chunk_overlap} {_UNITS[self.algorithm]}"
