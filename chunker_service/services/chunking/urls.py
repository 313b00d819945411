"""
URL protection for chunking. URLs are swapped for fixed-width placeholders before
segmentation so no window, token group or sentence split can cut through one,
then swapped back into each chunk afterwards.
"""

import hashlib
import re
from bisect import bisect_right
from dataclasses import dataclass, field

from chunker_service.services.chunking.models import PlaceholderMap, TextSpan

_TLDS = (
    "com|org|net|edu|gov|mil|int|io|co|ai|dev|app|info|biz|me|tv|ly|"
    "us|uk|de|fr|es|it|nl|ca|au|jp|cn|ru|in|br|eu|ch|se|no"
)
_URL_CHARS = r"[^\s<>\"'`]"
_URL_PATTERN = re.compile(
    r"(?i:[a-z][a-z0-9+.\-]*://|www\.)" + _URL_CHARS + r"+"
    # Bare domains: lowercase labels starting with a letter, so "end.It" and "2.in" stay prose
    r"|(?<![@\w.\-])(?:[a-z](?:[a-z0-9\-]{0,61}[a-z0-9])?\.)+(?:" + _TLDS + r")\b"
    r"(?::\d{1,5})?(?:/" + _URL_CHARS + r"*)?"
)
_TRAILING_PUNCTUATION = ".,;:!?'\""
_BRACKETS = {")": "(", "]": "[", "}": "{"}

PLACEHOLDER_PREFIX = "__url_"
PLACEHOLDER_PATTERN = re.compile(r"__url_[0-9a-f]{8}_\d{5}__")
PLACEHOLDER_WIDTH = 22


@dataclass(frozen=True)
class PlaceholderSpan:
    """One placeholder occurrence: where it sits in protected text and what it covered originally."""

    protected_start: int
    protected_end: int
    original_start: int
    original_end: int


@dataclass
class ProtectedText:
    """Text with URLs replaced by placeholders, plus what is needed to undo it."""

    text: str
    placeholder_to_url: PlaceholderMap = field(default_factory=dict)
    spans: list[PlaceholderSpan] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._starts = [s.protected_start for s in self.spans]

    @property
    def atomic_spans(self) -> list[TextSpan]:
        """Protected-text ranges that a chunk boundary must not fall inside."""
        return [TextSpan(s.protected_start, s.protected_end) for s in self.spans]

    def to_original(self, offset: int) -> int:
        """Map an offset in protected text to the same position in the unprotected text."""
        idx = bisect_right(self._starts, offset) - 1
        if idx < 0:
            return offset
        span = self.spans[idx]
        if offset >= span.protected_end:
            return offset + (span.original_end - span.protected_end)
        # Inside a placeholder; only reachable for its start or via a segmenter bug
        return span.original_start + min(offset - span.protected_start, span.original_end - span.original_start)


def _trim_url(candidate: str) -> str:
    """Drop trailing sentence punctuation and closing brackets that the URL never opened."""
    url = candidate
    while url:
        last = url[-1]
        if last in _TRAILING_PUNCTUATION:
            url = url[:-1]
        elif last in _BRACKETS and url.count(_BRACKETS[last]) < url.count(last):
            url = url[:-1]
        else:
            break
    return url


def _placeholder_nonce(text: str) -> str:
    """Deterministic 8-hex nonce such that no placeholder with it can already occur in text."""
    digest = hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()
    nonce = digest[:8]
    while f"{PLACEHOLDER_PREFIX}{nonce}" in text:
        digest = hashlib.sha256(digest.encode("ascii")).hexdigest()
        nonce = digest[:8]
    return nonce


def make_placeholder(nonce: str, index: int) -> str:
    """Placeholder token: word characters only, so tokenizers keep it whole."""
    return f"{PLACEHOLDER_PREFIX}{nonce}_{index:05d}__"


def find_urls(text: str) -> list[tuple[int, int]]:
    """Return (start, end) spans of URL-shaped substrings in text, in order."""
    found: list[tuple[int, int]] = []
    for m in _URL_PATTERN.finditer(text):
        url = _trim_url(m.group())
        if url:
            found.append((m.start(), m.start() + len(url)))
    return found


def protect_urls(text: str) -> ProtectedText:
    """
    Replace every URL with a placeholder. Repeated URLs share one placeholder.
    Returns the protected text, placeholder -> URL map (first-seen order) and spans.
    """
    if not text:
        return ProtectedText(text="")
    matches = find_urls(text)
    if not matches:
        return ProtectedText(text=text)

    nonce = _placeholder_nonce(text)
    url_to_placeholder: dict[str, str] = {}
    pieces: list[str] = []
    spans: list[PlaceholderSpan] = []
    cursor = 0
    out_len = 0
    for start, end in matches:
        url = text[start:end]
        placeholder = url_to_placeholder.get(url)
        if placeholder is None:
            placeholder = make_placeholder(nonce, len(url_to_placeholder))
            url_to_placeholder[url] = placeholder
        between = text[cursor:start]
        pieces.append(between)
        out_len += len(between)
        spans.append(PlaceholderSpan(out_len, out_len + len(placeholder), start, end))
        pieces.append(placeholder)
        out_len += len(placeholder)
        cursor = end
    pieces.append(text[cursor:])

    placeholder_to_url = {ph: url for url, ph in url_to_placeholder.items()}
    return ProtectedText(text="".join(pieces), placeholder_to_url=placeholder_to_url, spans=spans)


def contains_placeholder(text: str, placeholder_to_url: PlaceholderMap) -> bool:
    """True if any placeholder from the map occurs in text."""
    return any(ph in text for ph in placeholder_to_url)


def restore_urls(text: str, placeholder_to_url: PlaceholderMap) -> str:
    """Replace every placeholder occurrence with its original URL."""
    if not text or not placeholder_to_url:
        return text
    for placeholder, url in placeholder_to_url.items():
        text = text.replace(placeholder, url)
    return text
