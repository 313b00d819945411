import pytest

from chunker_service.config.chunking.models import ChunkerConfig, ChunkingAlgorithm
from chunker_service.config.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    monkeypatch.delenv("CHUNKING_PROFILE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_config():
    def _make(algorithm="token", chunk_size=500, chunk_overlap=50, **kwargs) -> ChunkerConfig:
        return ChunkerConfig(
            algorithm=ChunkingAlgorithm(algorithm),
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            **kwargs,
        )

    return _make


@pytest.fixture
def alphabet_120() -> str:
    """120 characters, no whitespace or punctuation."""
    return "".join(chr(ord("a") + i % 26) for i in range(120))
