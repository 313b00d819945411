"""Request/response schemas for POST /chunk."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentPayload(BaseModel):
    """Document to chunk. Any extra field (nested objects included) can be a source field."""

    model_config = ConfigDict(extra="allow")

    doc_id: str = Field(..., min_length=1, description="Document id, folded into chunk ids")
    title: str | None = Field(default=None)
    body: str | None = Field(default=None)


class ChunkRequest(BaseModel):
    """POST /chunk request body. Config is inline or taken from the active profile in static.json."""

    document: DocumentPayload | None = Field(default=None, description="Document to chunk; may be absent")
    config: dict[str, Any] | None = Field(
        default=None,
        description="Inline ChunkerConfig (camelCase keys); overrides the active profile",
    )
    stream_id: str = Field(default="", description="Stream id, folded into chunk ids")
    step_id: str = Field(default="chunker", description="Pipeline step name, folded into chunk ids")
    is_test: bool = Field(default=False, description="Marks a test request; prefixes processor logs")


class ChunkPayload(BaseModel):
    """One chunk in the response."""

    chunk_id: str
    chunk_number: int = Field(..., ge=0)
    text_content: str
    original_char_start_offset: int = Field(..., ge=0)
    original_char_end_offset: int = Field(..., ge=0)
    chunk_config_id: str
    metadata: dict[str, str | int | float | bool] = Field(default_factory=dict)


class ChunkResponse(BaseModel):
    """POST /chunk response body."""

    success: bool
    processor_logs: list[str] = Field(default_factory=list)
    doc_id: str | None = None
    source_field: str | None = None
    result_set_name: str | None = None
    chunk_config_id: str | None = None
    chunks: list[ChunkPayload] = Field(default_factory=list)
    url_count: int = Field(default=0, ge=0, description="Distinct URLs protected during chunking")
    processed_at: datetime | None = None
    error_details: dict[str, Any] | None = None


class RegistrationResponse(BaseModel):
    """GET /registration response body: module identity and config schema."""

    module_name: str
    version: str
    json_config_schema: dict[str, Any]
