"""Environment-driven configuration and env file loading."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from broadside.core.models import Difficulty

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Immutable runtime settings."""

    difficulty: Difficulty = Difficulty.NORMAL
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "text"
    log_dir: str | None = None


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = Path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load ``.env`` then ``.env.local``; later files win."""
    for path in paths if paths is not None else (".env", ".env.local"):
        load_env_file(path, override_existing=override_existing)


def load_engine_settings() -> EngineSettings:
    """Build settings from ``BROADSIDE_*`` variables, falling back to defaults."""
    log_dir = os.getenv("BROADSIDE_LOG_DIR", "").strip()
    return EngineSettings(
        difficulty=_difficulty("BROADSIDE_DIFFICULTY", Difficulty.NORMAL),
        seed=_optional_int("BROADSIDE_SEED"),
        log_level=resolve_log_level_name(),
        log_format=os.getenv("LOG_FORMAT", "text").strip().lower() or "text",
        log_dir=log_dir or None,
    )


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with app-prefixed override."""
    value = os.getenv("BROADSIDE_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def _difficulty(name: str, default: Difficulty) -> Difficulty:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return Difficulty(raw.strip().lower())
    except ValueError:
        logger.warning("invalid_setting name=%s value=%r default=%s", name, raw, default)
        return default


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("invalid_setting name=%s value=%r", name, raw)
        return None
