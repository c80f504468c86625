"""Configuration helpers for changelog-entry."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, MutableMapping, Optional

import yaml

CONFIG_FILENAME = ".changelog-entry.yaml"

DEFAULT_ISSUE_BASE_URL = "http://gitlab/repo/-/issues/"
DEFAULT_MERGE_REQUEST_BASE_URL = "http://gitlab/repo/-/merge_requests"
DEFAULT_TITLE = "Changelog"

_KNOWN_KEYS = ("issue_base_url", "merge_request_base_url", "title")


def default_config_path(directory: Path) -> Path:
    """Return the default config path inside a working directory."""
    return directory / CONFIG_FILENAME


@dataclass(frozen=True)
class Config:
    """Deployment settings for link rendering and report output."""

    issue_base_url: str = DEFAULT_ISSUE_BASE_URL
    merge_request_base_url: str = DEFAULT_MERGE_REQUEST_BASE_URL
    title: str = DEFAULT_TITLE


def _read_string_option(raw: MutableMapping[str, Any], key: str, default: str) -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"Config option '{key}' must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"Config option '{key}' must not be empty.")
    return stripped


def load_config(path: Path) -> Config:
    """Load the configuration from disk."""
    with path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, MutableMapping):
        raise ValueError("Config root must be a mapping")

    unknown = sorted(str(key) for key in raw if key not in _KNOWN_KEYS)
    if unknown:
        allowed = ", ".join(_KNOWN_KEYS)
        raise ValueError(f"Unknown config option(s): {', '.join(unknown)}. Allowed options: {allowed}")

    return Config(
        issue_base_url=_read_string_option(raw, "issue_base_url", DEFAULT_ISSUE_BASE_URL),
        merge_request_base_url=_read_string_option(
            raw, "merge_request_base_url", DEFAULT_MERGE_REQUEST_BASE_URL
        ),
        title=_read_string_option(raw, "title", DEFAULT_TITLE),
    )


def resolve_config(path: Optional[Path] = None, *, search_dir: Optional[Path] = None) -> Config:
    """Load an explicit config, the working-directory config, or the defaults."""

    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return load_config(path)
    candidate = default_config_path(search_dir if search_dir is not None else Path.cwd())
    if candidate.is_file():
        return load_config(candidate)
    return Config()

