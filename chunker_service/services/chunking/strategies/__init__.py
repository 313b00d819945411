"""Chunking strategy implementations, one per algorithm."""

from collections.abc import Sequence
from typing import Callable

from chunker_service.config.chunking.models import ChunkerConfig, ChunkingAlgorithm
from chunker_service.services.chunking.models import TextSpan
from chunker_service.services.chunking.strategies.character_window import character_chunks
from chunker_service.services.chunking.strategies.fixed_tokens import fixed_token_chunks
from chunker_service.services.chunking.strategies.sentence_boundary import sentence_boundary_chunks

StrategyFn = Callable[[str, ChunkerConfig, Sequence[TextSpan]], list[TextSpan]]

# Semantic chunking is rejected by the validator and has no entry here.
STRATEGY_REGISTRY: dict[ChunkingAlgorithm, StrategyFn] = {
    ChunkingAlgorithm.CHARACTER: character_chunks,
    ChunkingAlgorithm.TOKEN: fixed_token_chunks,
    ChunkingAlgorithm.SENTENCE: sentence_boundary_chunks,
}


def get_strategy_fn(algorithm: ChunkingAlgorithm | str) -> StrategyFn | None:
    """Return the chunking function for the given algorithm, or None."""
    try:
        return STRATEGY_REGISTRY.get(ChunkingAlgorithm(algorithm))
    except ValueError:
        return None
