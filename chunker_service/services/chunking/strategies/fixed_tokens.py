"""Fixed-size token chunking. Groups chunk_size word/punctuation tokens with token overlap."""

from collections.abc import Sequence

from chunker_service.config.chunking.models import ChunkerConfig
from chunker_service.services.chunking.models import TextSpan
from chunker_service.services.chunking.tokenizer import tokenize_with_offsets
from chunker_service.services.chunking.windows import window_ranges


def fixed_token_chunks(
    text: str,
    config: ChunkerConfig,
    atomic_spans: Sequence[TextSpan] = (),
) -> list[TextSpan]:
    """
    Split text into groups of chunk_size tokens; each group repeats the trailing
    chunk_overlap tokens of the previous one. A chunk spans from its first token's
    start to its last token's end. URL placeholders tokenize as one token, so
    atomic_spans needs no extra handling here.
    """
    if not text or not text.strip():
        return []
    tokens_with_offsets = tokenize_with_offsets(text)
    out: list[TextSpan] = []
    for first, last in window_ranges(len(tokens_with_offsets), config.chunk_size, config.chunk_overlap):
        out.append(TextSpan(tokens_with_offsets[first][1], tokens_with_offsets[last - 1][2]))
    return out
