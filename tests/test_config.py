import logging

import pytest
from pydantic import ValidationError

from chunker_service.config.chunking.models import ChunkerConfig, ChunkingAlgorithm
from chunker_service.config.chunking.static import (
    get_active_profile_name,
    load_chunking_profiles,
    normalize_chunker_config,
    resolve_chunking_config,
)
from chunker_service.config.logging import ExtraFieldsFormatter
from chunker_service.config.settings import get_settings
from chunker_service.services.chunking.errors import ConfigurationError
from chunker_service.services.chunking.validation import ensure_valid_config, validate_chunker_config


def test_normalize_applies_defaults():
    config = normalize_chunker_config(None)
    assert config.algorithm == ChunkingAlgorithm.TOKEN
    assert config.source_field == "body"
    assert config.chunk_size == 500
    assert config.chunk_overlap == 50
    assert config.preserve_urls is True
    assert config.clean_text is True


def test_normalize_treats_null_as_absent():
    config = normalize_chunker_config({"algorithm": "character", "chunkSize": None, "cleanText": None})
    assert config.algorithm == ChunkingAlgorithm.CHARACTER
    assert config.chunk_size == 500
    assert config.clean_text is True


def test_normalize_accepts_snake_case_keys():
    config = normalize_chunker_config({"chunk_size": 120, "preserve_urls": False})
    assert config.chunk_size == 120
    assert config.preserve_urls is False


def test_normalize_keeps_out_of_range_values_for_the_validator():
    config = normalize_chunker_config({"chunkSize": 10})
    assert config.chunk_size == 10
    assert validate_chunker_config(config) == "chunkSize must be between 50 and 10000"


def test_unknown_algorithm_is_rejected_at_parse_time():
    with pytest.raises(ValidationError):
        normalize_chunker_config({"algorithm": "paragraph"})


def test_config_is_immutable():
    config = ChunkerConfig()
    with pytest.raises(ValidationError):
        config.chunk_size = 100


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ({"chunkSize": 10, "chunkOverlap": 9000}, "chunkSize must be between 50 and 10000"),
        ({"chunkSize": 10001}, "chunkSize must be between 50 and 10000"),
        ({"chunkSize": 8000, "chunkOverlap": 6000}, "chunkOverlap must be between 0 and 5000"),
        ({"chunkOverlap": -1}, "chunkOverlap must be between 0 and 5000"),
        ({"chunkSize": 500, "chunkOverlap": 500}, "chunkOverlap must be less than chunkSize"),
        ({"algorithm": "semantic"}, "Semantic chunking is not yet implemented"),
        ({"algorithm": "semantic", "chunkSize": 20}, "chunkSize must be between 50 and 10000"),
    ],
)
def test_validator_first_failure_wins(raw, expected):
    assert validate_chunker_config(normalize_chunker_config(raw)) == expected


@pytest.mark.parametrize("algorithm", ["character", "token", "sentence"])
def test_validator_accepts_supported_algorithms(algorithm):
    assert validate_chunker_config(normalize_chunker_config({"algorithm": algorithm})) is None


def test_ensure_valid_config_raises_with_message():
    with pytest.raises(ConfigurationError, match="less than chunkSize"):
        ensure_valid_config(normalize_chunker_config({"chunkSize": 100, "chunkOverlap": 100}))


def test_size_descriptions_use_algorithm_units():
    assert normalize_chunker_config({"algorithm": "character", "chunkSize": 1000}).chunk_size_description() == (
        "1000 characters"
    )
    assert normalize_chunker_config({}).chunk_overlap_description() == "50 tokens"
    assert normalize_chunker_config({"algorithm": "sentence", "chunkOverlap": 3}).chunk_overlap_description() == (
        "3 sentences"
    )
    assert normalize_chunker_config({"algorithm": "semantic"}).chunk_size_description() == (
        "500 characters (semantic boundaries)"
    )


def test_json_dump_uses_camel_case():
    dumped = ChunkerConfig().model_dump(mode="json", by_alias=True)
    assert dumped == {
        "algorithm": "token",
        "sourceField": "body",
        "chunkSize": 500,
        "chunkOverlap": 50,
        "preserveUrls": True,
        "cleanText": True,
    }


def test_static_profiles_are_normalized():
    profiles = load_chunking_profiles()
    assert {"default", "character", "sentence"} <= set(profiles)
    character = profiles["character"]
    assert character.algorithm == ChunkingAlgorithm.CHARACTER
    assert character.source_field == "body"
    for profile in profiles.values():
        assert validate_chunker_config(profile) is None


def test_active_profile_from_static_json():
    assert get_active_profile_name() == "default"
    assert resolve_chunking_config("active") == load_chunking_profiles()["default"]


def test_active_profile_setting_overrides_static_json(monkeypatch):
    monkeypatch.setenv("CHUNKING_PROFILE", "sentence")
    get_settings.cache_clear()
    assert get_active_profile_name() == "sentence"
    assert resolve_chunking_config("active").algorithm == ChunkingAlgorithm.SENTENCE


def test_inline_config_wins_over_profile():
    config = resolve_chunking_config("default", {"algorithm": "character", "chunkSize": 80})
    assert config.algorithm == ChunkingAlgorithm.CHARACTER
    assert config.chunk_size == 80


def test_unknown_profile_raises():
    with pytest.raises(ValueError, match="Unknown chunking profile"):
        resolve_chunking_config("nope")


def test_log_formatter_appends_extra_fields():
    formatter = ExtraFieldsFormatter(fmt="%(levelname)s %(message)s")
    record = logging.makeLogRecord({"msg": "Chunked document", "levelname": "INFO", "doc_id": "d1", "chunks": 3})
    assert formatter.format(record) == "INFO Chunked document | chunks=3 doc_id=d1"

    plain = logging.makeLogRecord({"msg": "No extras", "levelname": "INFO"})
    assert formatter.format(plain) == "INFO No extras"
