"""Static chunking config loader and default normalization. Read-only; no business logic."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from chunker_service.config.chunking.models import (
    DEFAULT_ALGORITHM,
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CLEAN_TEXT,
    DEFAULT_PRESERVE_URLS,
    DEFAULT_SOURCE_FIELD,
    ChunkerConfig,
)
from chunker_service.config.settings import get_settings

_config_dir = Path(__file__).resolve().parent
_config_path = _config_dir / "static.json"

_cached: dict[str, ChunkerConfig] | None = None
_active_profile: str | None = None

# (attribute, JSON key, default)
_FIELDS: tuple[tuple[str, str, Any], ...] = (
    ("algorithm", "algorithm", DEFAULT_ALGORITHM),
    ("source_field", "sourceField", DEFAULT_SOURCE_FIELD),
    ("chunk_size", "chunkSize", DEFAULT_CHUNK_SIZE),
    ("chunk_overlap", "chunkOverlap", DEFAULT_CHUNK_OVERLAP),
    ("preserve_urls", "preserveUrls", DEFAULT_PRESERVE_URLS),
    ("clean_text", "cleanText", DEFAULT_CLEAN_TEXT),
)


def normalize_chunker_config(raw: Mapping[str, Any] | None) -> ChunkerConfig:
    """
    Build a ChunkerConfig from a raw mapping, applying defaults field by field.
    Accepts camelCase or snake_case keys; absent and null values both take the default.
    Unknown keys are ignored. Raises pydantic.ValidationError for unparseable values
    (unknown algorithm, non-integer sizes); range checks are left to the validator.
    """
    raw = raw or {}
    values: dict[str, Any] = {}
    for attr, alias, default in _FIELDS:
        value = raw.get(alias)
        if value is None:
            value = raw.get(attr)
        values[attr] = default if value is None else value
    return ChunkerConfig.model_validate(values)


def _load_raw_data() -> dict:
    """Load raw JSON; used to read both profiles and active."""
    raw = _config_path.read_text(encoding="utf-8")
    return json.loads(raw)


def load_chunking_profiles() -> dict[str, ChunkerConfig]:
    """Load chunking profiles from static.json. Keys are profile names."""
    global _cached
    if _cached is not None:
        return _cached
    data = _load_raw_data()
    profiles = data.get("profiles", {})
    _cached = {k: normalize_chunker_config(v) for k, v in profiles.items()}
    return _cached


def get_chunking_config(profile_name: str) -> ChunkerConfig | None:
    """Return chunking config for the given profile, or None if missing."""
    return load_chunking_profiles().get(profile_name)


def get_active_profile_name() -> str:
    """
    Return the active profile name. The CHUNKING_PROFILE setting wins over the
    'active' entry of static.json; defaults to 'default' if neither is set.
    """
    global _active_profile
    configured = get_settings().chunking_profile
    if configured:
        return configured
    if _active_profile is not None:
        return _active_profile
    data = _load_raw_data()
    _active_profile = data.get("active", "default")
    return _active_profile


def get_active_chunking_config() -> ChunkerConfig:
    """Return the chunking config for the active profile. Uses get_active_profile_name()."""
    name = get_active_profile_name()
    cfg = get_chunking_config(name)
    if cfg is None:
        raise ValueError(f"Active profile {name!r} not found in profiles")
    return cfg


def resolve_chunking_config(profile_name: str, inline_config: Mapping[str, Any] | None = None) -> ChunkerConfig:
    """
    Resolve chunking config by profile name or inline config.
    If inline_config is provided and non-empty, normalize and return it.
    If profile_name is "active", use the active profile.
    Otherwise load by profile_name. Raises ValueError if profile is missing when no inline_config given.
    """
    if inline_config:
        return normalize_chunker_config(inline_config)
    if profile_name == "active":
        return get_active_chunking_config()
    cfg = get_chunking_config(profile_name)
    if cfg is None:
        raise ValueError(f"Unknown chunking profile: {profile_name!r}")
    return cfg
