from chunker_service.services.chunking.cleaners import clean_for_chunking, clean_text, normalize_line_endings
from chunker_service.services.chunking.urls import (
    PLACEHOLDER_PATTERN,
    PLACEHOLDER_WIDTH,
    contains_placeholder,
    find_urls,
    make_placeholder,
    protect_urls,
    restore_urls,
)


def test_clean_text_collapses_whitespace_and_trims():
    assert clean_text("  Hello \r\n\r\n world\t\tagain  ") == "Hello world again"


def test_clean_text_empty():
    assert clean_text("") == ""
    assert clean_text("   \n\t") == ""


def test_normalize_line_endings():
    assert normalize_line_endings("a\r\nb\rc\n") == "a\nb\nc\n"


def test_clean_for_chunking_can_be_disabled():
    raw = "  keep   this\r\n"
    assert clean_for_chunking(raw, clean=False) == raw
    assert clean_for_chunking(raw, clean=True) == "keep this"


def _urls(text):
    return [text[s:e] for s, e in find_urls(text)]


def test_find_urls_with_scheme_drops_trailing_punctuation():
    assert _urls("Visit https://example.com/path?q=1. Thanks") == ["https://example.com/path?q=1"]


def test_find_urls_www_inside_parentheses():
    assert _urls("(see www.example.org/docs) for details") == ["www.example.org/docs"]


def test_find_urls_keeps_balanced_parentheses():
    assert _urls("https://en.wikipedia.org/wiki/Python_(language), ok") == [
        "https://en.wikipedia.org/wiki/Python_(language)"
    ]


def test_find_urls_bare_domain_but_not_email():
    assert _urls("Go to example.com/start now") == ["example.com/start"]
    assert _urls("mail me@example.com today") == []


def test_find_urls_ignores_plain_prose():
    assert _urls("The value is 3.14 and e.g. this is fine.") == []
    assert _urls("This is the end.It was fine") == []
    assert _urls("Version 2.in rollout") == []
    assert _urls("Read HTTPS://Example.COM/x today") == ["HTTPS://Example.COM/x"]


def test_placeholder_shape():
    placeholder = make_placeholder("0123abcd", 7)
    assert placeholder == "__url_0123abcd_00007__"
    assert len(placeholder) == PLACEHOLDER_WIDTH
    assert PLACEHOLDER_PATTERN.fullmatch(placeholder)


def test_protect_urls_shares_placeholder_for_repeated_url():
    text = "A https://a.example.com/x and https://b.example.com/y then https://a.example.com/x again"
    protected = protect_urls(text)

    assert list(protected.placeholder_to_url.values()) == ["https://a.example.com/x", "https://b.example.com/y"]
    assert len(protected.spans) == 3
    assert "https://" not in protected.text
    for placeholder in protected.placeholder_to_url:
        assert len(placeholder) == PLACEHOLDER_WIDTH
        assert placeholder not in text
    assert restore_urls(protected.text, protected.placeholder_to_url) == text


def test_protect_urls_is_deterministic():
    text = "Docs at https://docs.example.io/guide and more."
    assert protect_urls(text).placeholder_to_url == protect_urls(text).placeholder_to_url


def test_protect_urls_without_urls_is_identity():
    protected = protect_urls("nothing to see here")
    assert protected.text == "nothing to see here"
    assert protected.placeholder_to_url == {}
    assert protected.atomic_spans == []


def test_offsets_map_back_to_unprotected_text():
    url = "https://x.io/y"
    text = f"a {url} b"
    protected = protect_urls(text)

    assert protected.text.startswith("a __url_")
    assert protected.atomic_spans == [(2, 2 + PLACEHOLDER_WIDTH)]
    assert protected.to_original(0) == 0
    assert protected.to_original(2) == 2
    assert protected.to_original(2 + PLACEHOLDER_WIDTH) == 2 + len(url)
    assert protected.to_original(len(protected.text)) == len(text)


def test_contains_and_restore():
    protected = protect_urls("see www.example.com")
    (placeholder,) = protected.placeholder_to_url
    assert contains_placeholder(f"x {placeholder}", protected.placeholder_to_url)
    assert not contains_placeholder("x", protected.placeholder_to_url)
    assert restore_urls(f"[{placeholder}]", protected.placeholder_to_url) == "[www.example.com]"
    assert restore_urls("untouched", {}) == "untouched"
