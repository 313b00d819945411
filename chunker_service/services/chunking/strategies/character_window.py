"""Character sliding-window chunking. Windows of chunk_size characters stepping chunk_size - overlap."""

from bisect import bisect_right
from collections.abc import Sequence

from chunker_service.config.chunking.models import ChunkerConfig
from chunker_service.services.chunking.models import TextSpan
from chunker_service.services.chunking.windows import window_ranges


def _span_containing(offset: int, atomic_spans: Sequence[TextSpan], starts: list[int]) -> TextSpan | None:
    """Atomic span strictly containing offset (start < offset < end), if any."""
    idx = bisect_right(starts, offset) - 1
    if idx < 0:
        return None
    span = atomic_spans[idx]
    if span.start < offset < span.end:
        return span
    return None


def character_chunks(
    text: str,
    config: ChunkerConfig,
    atomic_spans: Sequence[TextSpan] = (),
) -> list[TextSpan]:
    """
    Slide a window of chunk_size characters with step (chunk_size - overlap); the
    last window is truncated to the text. A boundary that would cut an atomic span
    (URL placeholder) moves so the span stays whole: window ends extend forward to
    the span end, window starts move back to the span start.
    """
    if not text or not text.strip():
        return []
    starts = [s.start for s in atomic_spans]
    out: list[TextSpan] = []
    for start, end in window_ranges(len(text), config.chunk_size, config.chunk_overlap):
        cut = _span_containing(end, atomic_spans, starts)
        if cut is not None:
            end = cut.end
        cut = _span_containing(start, atomic_spans, starts)
        if cut is not None:
            start = cut.start
            if out and start <= out[-1].start:
                start = cut.end
        if out:
            if end <= out[-1].end:
                # Already covered by the previous, extended window
                continue
        if start >= end:
            continue
        out.append(TextSpan(start, end))
        if end >= len(text):
            break
    return out
