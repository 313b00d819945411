"""Overlapping window arithmetic shared by the unit-based segmenters."""

from collections.abc import Iterator


def window_ranges(count: int, size: int, overlap: int) -> Iterator[tuple[int, int]]:
    """
    Yield half-open [first, last) unit index ranges of at most `size` units, each
    sharing `overlap` units with the previous one. Stops once a range reaches the
    final unit, so the last range is truncated rather than padded and no range is
    contained in its predecessor.
    """
    if count <= 0:
        return
    step = size - overlap
    if step <= 0:
        raise ValueError(f"overlap ({overlap}) must be smaller than size ({size})")
    first = 0
    while True:
        last = min(first + size, count)
        yield first, last
        if last >= count:
            return
        first += step
