"""Chunking engine data model: inputs, chunks and the per-call result."""

from typing import NamedTuple, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

MetadataValue: TypeAlias = str | int | float | bool
ChunkMetadata: TypeAlias = dict[str, MetadataValue]
PlaceholderMap: TypeAlias = dict[str, str]


class TextSpan(NamedTuple):
    """Half-open [start, end) character range produced by a segmenter."""

    start: int
    end: int


class SourceText(BaseModel):
    """Extracted field content of one document plus the ids folded into chunk ids."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    document_id: str = ""
    stream_id: str = ""
    step_id: str = ""


class Chunk(BaseModel):
    """
    One output chunk. Offsets index the cleaned source text (URLs in place),
    half-open. Text is URL-restored and sanitized.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    sequence_number: int = Field(..., ge=0)
    original_char_start: int = Field(..., ge=0)
    original_char_end: int = Field(..., ge=0)
    metadata: ChunkMetadata = Field(default_factory=dict)


class ChunkingResult(BaseModel):
    """Ordered chunks from one call plus the placeholder map used while processing."""

    model_config = ConfigDict(frozen=True)

    chunks: list[Chunk] = Field(default_factory=list)
    placeholder_to_url: PlaceholderMap = Field(default_factory=dict)

    @property
    def url_count(self) -> int:
        """Number of distinct URLs protected during chunking."""
        return len(self.placeholder_to_url)
