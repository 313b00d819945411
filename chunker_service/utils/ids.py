"""Id generation for chunks. Deterministic so reprocessing is idempotent."""

import hashlib


def generate_chunk_id(stream_id: str, step_id: str, document_id: str, sequence_number: int) -> str:
    """Generate a deterministic chunk_id from stream, step, document and position."""
    payload = f"{stream_id}:{step_id}:{document_id}:{sequence_number}"
    digest = hashlib.sha256(payload.encode("utf-8", "surrogatepass")).hexdigest()[:24]
    return f"chunk_{digest}"
