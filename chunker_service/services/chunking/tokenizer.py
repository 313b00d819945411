"""
Word/punctuation tokenizer and sentence-boundary detector used by the segmenters
and by metadata extraction. Locale-independent; works on any Unicode text.
"""

import re

from chunker_service.services.chunking.models import TextSpan

# Words keep inner apostrophes ("don't"); every other non-space, non-word char is its own token.
# URL placeholders are all word characters, so each one is a single token.
_TOKEN_PATTERN = re.compile(r"\w+(?:['’]\w+)*|[^\w\s]")

_SENTENCE_END = re.compile(r"[.!?…]+[\"'”’)\]]*(?=\s|$)")
_ABBREVIATIONS = frozenset(
    {
        "mr", "mrs", "ms", "dr", "prof", "sr", "jr", "st", "vs", "etc", "inc", "ltd",
        "co", "corp", "no", "fig", "al", "approx", "dept", "est", "e.g", "i.e", "cf",
    }
)


def tokenize_with_offsets(text: str) -> list[tuple[str, int, int]]:
    """Return list of (token, start, end) for the text in order."""
    if not text:
        return []
    return [(m.group(), m.start(), m.end()) for m in _TOKEN_PATTERN.finditer(text)]


def count_tokens(text: str) -> int:
    """Number of word/punctuation tokens in text."""
    if not text:
        return 0
    return sum(1 for _ in _TOKEN_PATTERN.finditer(text))


def _preceding_word(text: str, end: int) -> str:
    start = end
    while start > 0 and not text[start - 1].isspace():
        start -= 1
    return text[start:end].strip("\"'([{").rstrip(".").lower()


def _is_boundary(text: str, punct_start: int, punct_end: int) -> bool:
    """Terminal punctuation ends a sentence unless it closes an abbreviation or lowercase text follows."""
    if text[punct_start] == "." and punct_end - punct_start == 1:
        word = _preceding_word(text, punct_start)
        if word in _ABBREVIATIONS or (len(word) == 1 and word.isalpha()):
            return False
    rest = text[punct_end:].lstrip()
    if not rest:
        return True
    return not rest[0].islower()


def split_sentence_spans(text: str) -> list[TextSpan]:
    """
    Return sentence spans, trimmed of surrounding whitespace. A sentence ends at
    terminal punctuation (., !, ?, ellipsis, plus closing quotes/brackets) that is
    followed by whitespace and then something other than a lowercase letter.
    Trailing text without terminal punctuation is the last sentence.
    """
    if not text or not text.strip():
        return []
    spans: list[TextSpan] = []
    start = 0
    for m in _SENTENCE_END.finditer(text):
        if not _is_boundary(text, m.start(), m.end()):
            continue
        span = _trimmed(text, start, m.end())
        if span is not None:
            spans.append(span)
        start = m.end()
    tail = _trimmed(text, start, len(text))
    if tail is not None:
        spans.append(tail)
    return spans


def _trimmed(text: str, start: int, end: int) -> TextSpan | None:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    if start >= end:
        return None
    return TextSpan(start, end)


def count_sentences(text: str) -> int:
    """Number of sentences per split_sentence_spans."""
    return len(split_sentence_spans(text))
