"""Sentence-boundary chunking. Groups chunk_size sentences with sentence overlap."""

from collections.abc import Sequence

from chunker_service.config.chunking.models import ChunkerConfig
from chunker_service.services.chunking.models import TextSpan
from chunker_service.services.chunking.tokenizer import split_sentence_spans
from chunker_service.services.chunking.windows import window_ranges


def sentence_boundary_chunks(
    text: str,
    config: ChunkerConfig,
    atomic_spans: Sequence[TextSpan] = (),
) -> list[TextSpan]:
    """
    Split on sentence boundaries, then group chunk_size sentences per chunk with
    chunk_overlap sentences shared between neighbours. Placeholders carry no
    sentence punctuation, so a URL never ends a sentence.
    """
    if not text or not text.strip():
        return []
    sentences = split_sentence_spans(text)
    out: list[TextSpan] = []
    for first, last in window_ranges(len(sentences), config.chunk_size, config.chunk_overlap):
        out.append(TextSpan(sentences[first].start, sentences[last - 1].end))
    return out
