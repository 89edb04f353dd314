"""Persistent JSON config helpers.

Stores decoder settings: source-error policy, escape timeout, log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "termevents"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_ESCAPE_TIMEOUT_MS = 25
MAX_ESCAPE_TIMEOUT_MS = 5000
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class DecoderSettings:
    """Knobs shared by ``parse_event`` and the fd reader.

    ``propagate_source_errors`` makes ``parse_event`` raise ``ByteSourceError``
    when the byte source itself fails instead of reporting ``Unsupported``.
    ``escape_timeout_ms`` is how long the fd reader waits for the rest of an
    escape sequence.
    """

    propagate_source_errors: bool = False
    escape_timeout_ms: int = DEFAULT_ESCAPE_TIMEOUT_MS
    log_level: str = DEFAULT_LOG_LEVEL


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def normalize_log_level(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    level = value.strip().upper()
    return level if level in LOG_LEVELS else None


def load_settings() -> DecoderSettings:
    """Build ``DecoderSettings`` from config, skipping ill-typed values."""
    data = load_config()
    defaults = DecoderSettings()

    propagate = data.get("propagate_source_errors")
    if not isinstance(propagate, bool):
        propagate = defaults.propagate_source_errors

    timeout = data.get("escape_timeout_ms")
    if isinstance(timeout, bool) or not isinstance(timeout, int) or not 0 <= timeout <= MAX_ESCAPE_TIMEOUT_MS:
        timeout = defaults.escape_timeout_ms

    level = normalize_log_level(data.get("log_level")) or defaults.log_level

    return DecoderSettings(
        propagate_source_errors=propagate,
        escape_timeout_ms=timeout,
        log_level=level,
    )


def save_settings(settings: DecoderSettings) -> None:
    config = load_config()
    config["propagate_source_errors"] = settings.propagate_source_errors
    config["escape_timeout_ms"] = settings.escape_timeout_ms
    config["log_level"] = settings.log_level
    save_config(config)
