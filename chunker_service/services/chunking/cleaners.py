"""Text cleaners for chunking input. Normalize line endings and whitespace per config."""

import re

_LINE_ENDINGS = re.compile(r"\r\n?")
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return _LINE_ENDINGS.sub("\n", text)


def clean_text(text: str) -> str:
    """
    Normalize line endings, collapse every whitespace run (newlines included)
    to a single space, and trim. Offsets reported downstream index this result.
    """
    if not text or not isinstance(text, str):
        return ""
    return _WHITESPACE_RUN.sub(" ", normalize_line_endings(text)).strip()


def clean_for_chunking(text: str, clean: bool = True) -> str:
    """Clean raw content before chunking. Returns text untouched when clean is False."""
    if not text or not isinstance(text, str):
        return ""
    if not clean:
        return text
    return clean_text(text)
