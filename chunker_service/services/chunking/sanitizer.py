"""Unicode sanitization of final chunk text so it is safe to serialize and index."""

import re

from chunker_service.config.logging import get_logger

logger = get_logger(__name__)

REPLACEMENT_CHARACTER = "\ufffd"

_SURROGATE_PAIR = re.compile(r"[\ud800-\udbff][\udc00-\udfff]")
_LONE_SURROGATE = re.compile(r"[\ud800-\udfff]")
# U+FDD0..U+FDEF and the last two code points of every plane
_NONCHARACTER = re.compile(
    r"[\ufdd0-\ufdef\ufffe\uffff"
    + "".join(f"{chr(plane << 16 | 0xFFFE)}{chr(plane << 16 | 0xFFFF)}" for plane in range(1, 17))
    + "]"
)
# C0 controls except tab, LF and CR; DEL; C1 controls
_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def _join_pair(match: re.Match) -> str:
    high, low = match.group()
    return chr(0x10000 + ((ord(high) - 0xD800) << 10) + (ord(low) - 0xDC00))


def sanitize_unicode(text: str | bytes | None) -> str:
    """
    Return text with invalid Unicode repaired. Bytes are decoded as UTF-8 with
    replacement. Surrogate pairs are joined into the real code point; lone
    surrogates and noncharacters become U+FFFD; control characters other than
    tab, newline and carriage return are removed. Idempotent; never raises.
    """
    if text is None:
        return ""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    if not text:
        return ""
    if text.isascii() and not _CONTROL.search(text):
        return text

    cleaned = _SURROGATE_PAIR.sub(_join_pair, text)
    cleaned = _LONE_SURROGATE.sub(REPLACEMENT_CHARACTER, cleaned)
    cleaned = _NONCHARACTER.sub(REPLACEMENT_CHARACTER, cleaned)
    cleaned = _CONTROL.sub("", cleaned)
    if cleaned != text:
        logger.debug(
            "Repaired invalid Unicode in chunk text",
            extra={"original_length": len(text), "sanitized_length": len(cleaned)},
        )
    return cleaned
