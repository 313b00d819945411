"""
Per-chunk descriptive metadata: counts, position, punctuation tallies and a few
text-shape heuristics. Every key is always present so downstream consumers can
rely on a fixed shape.
"""

import re
import string

from chunker_service.services.chunking.models import ChunkMetadata
from chunker_service.services.chunking.tokenizer import split_sentence_spans

PUNCTUATION_MARKS: dict[str, str] = {
    ".": "period",
    ",": "comma",
    "?": "question_mark",
    "!": "exclamation_mark",
    ":": "colon",
    ";": "semicolon",
}

_LIST_ITEM = re.compile(r"^(?:[-*+•‣◦▪●·]\s|\(?\d{1,3}[.)](?:\s|$))")
_TERMINAL_PUNCTUATION = ".!?;:,"
_EDGE_PUNCTUATION = string.punctuation + "“”‘’«»…"

# Heading heuristic: at or below this many words counts as fully short
_HEADING_SHORT_WORDS = 10
_HEADING_MAX_WORDS = 30


def _ratio(part: int, whole: int) -> float:
    return part / whole if whole else 0.0


def heading_score(text: str, words: list[str]) -> float:
    """
    Heuristic in [0, 1]: weighs shortness (0.4), no terminal punctuation (0.3)
    and the share of capitalized words (0.3).
    """
    stripped = text.strip()
    if not stripped or not words:
        return 0.0
    count = len(words)
    if count <= _HEADING_SHORT_WORDS:
        shortness = 1.0
    elif count >= _HEADING_MAX_WORDS:
        shortness = 0.0
    else:
        shortness = (_HEADING_MAX_WORDS - count) / (_HEADING_MAX_WORDS - _HEADING_SHORT_WORDS)
    no_terminal = 0.0 if stripped[-1] in _TERMINAL_PUNCTUATION else 1.0
    cleaned = [w.strip(_EDGE_PUNCTUATION) for w in words]
    alpha_words = [w for w in cleaned if w and w[0].isalpha()]
    capitalized = _ratio(sum(1 for w in alpha_words if w[0].isupper()), len(alpha_words))
    score = 0.4 * shortness + 0.3 * no_terminal + 0.3 * capitalized
    return round(min(1.0, max(0.0, score)), 4)


def is_list_item(text: str) -> bool:
    """True if the trimmed text starts with a bullet marker or a number followed by '.' or ')'."""
    return bool(_LIST_ITEM.match(text.strip()))


def vocabulary_density(words: list[str]) -> float:
    """Distinct case-folded words over total words; 0 for no words."""
    if not words:
        return 0.0
    distinct = {w.strip(_EDGE_PUNCTUATION).casefold() or w for w in words}
    return len(distinct) / len(words)


def extract_chunk_metadata(
    text: str,
    sequence_number: int,
    total_chunks: int,
    contains_url_placeholder: bool,
) -> ChunkMetadata:
    """Compute the metadata for one chunk. Pure function of its arguments."""
    text = text or ""
    words = text.split()
    word_count = len(words)
    char_count = len(text)
    sentence_count = len(split_sentence_spans(text))

    metadata: ChunkMetadata = {
        "chunk_number": sequence_number,
        "total_chunks": total_chunks,
        "word_count": word_count,
        "character_count": char_count,
        "sentence_count": sentence_count,
        "avg_word_length": _ratio(sum(len(w) for w in words), word_count),
        "avg_sentence_length": _ratio(word_count, sentence_count),
        "vocabulary_density": vocabulary_density(words),
        "is_first_chunk": sequence_number == 0,
        "is_last_chunk": total_chunks > 0 and sequence_number == total_chunks - 1,
        "relative_position": sequence_number / max(1, total_chunks - 1),
        "whitespace_percentage": _ratio(sum(1 for c in text if c.isspace()), char_count),
        "alphanumeric_percentage": _ratio(sum(1 for c in text if c.isalnum()), char_count),
        "digit_percentage": _ratio(sum(1 for c in text if c.isdigit()), char_count),
        "uppercase_percentage": _ratio(sum(1 for c in text if c.isupper()), char_count),
        "potential_heading_score": heading_score(text, words),
        "list_item_indicator": is_list_item(text),
        "contains_urlplaceholder": bool(contains_url_placeholder),
    }
    for mark, name in PUNCTUATION_MARKS.items():
        metadata[f"punctuation_{name}"] = text.count(mark)
    return metadata
