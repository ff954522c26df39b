from __future__ import annotations

import os

from broadside.core.models import Difficulty
from broadside.infra.config import (
    EngineSettings,
    load_default_env_files,
    load_engine_settings,
    load_env_file,
    resolve_log_level_name,
)


def test_load_env_file_sets_values_with_overwrite_by_default(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "A=1\nB='two'\n#comment\nINVALID\nC=three\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("C", "already")
    monkeypatch.delenv("A", raising=False)
    monkeypatch.delenv("B", raising=False)
    load_env_file(str(env_file))
    assert os.environ.get("A") == "1"
    assert os.environ.get("B") == "two"
    assert os.environ.get("C") == "three"


def test_load_env_file_can_preserve_existing_values(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("C=three\n", encoding="utf-8")
    monkeypatch.setenv("C", "already")
    load_env_file(str(env_file), override_existing=False)
    assert os.environ.get("C") == "already"


def test_load_env_file_missing_is_noop(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("A", raising=False)
    load_env_file(str(tmp_path / ".env.missing"))
    assert "A" not in os.environ


def test_load_default_env_files_honors_order(tmp_path, monkeypatch) -> None:
    base = tmp_path / ".env"
    local = tmp_path / ".env.local"
    base.write_text("A=base\nB=base\n", encoding="utf-8")
    local.write_text("B=local\n", encoding="utf-8")
    monkeypatch.delenv("A", raising=False)
    monkeypatch.delenv("B", raising=False)

    load_default_env_files(paths=(str(base), str(local)))

    assert os.environ.get("A") == "base"
    assert os.environ.get("B") == "local"


def test_load_engine_settings_defaults(monkeypatch) -> None:
    for name in ("BROADSIDE_DIFFICULTY", "BROADSIDE_SEED", "BROADSIDE_LOG_LEVEL", "LOG_LEVEL", "LOG_FORMAT", "BROADSIDE_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
    assert load_engine_settings() == EngineSettings()


def test_load_engine_settings_reads_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("BROADSIDE_DIFFICULTY", "Probability")
    monkeypatch.setenv("BROADSIDE_SEED", "42")
    monkeypatch.setenv("BROADSIDE_LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    monkeypatch.setenv("BROADSIDE_LOG_DIR", str(tmp_path))

    settings = load_engine_settings()

    assert settings.difficulty is Difficulty.PROBABILITY
    assert settings.seed == 42
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"
    assert settings.log_dir == str(tmp_path)


def test_invalid_settings_fall_back_to_defaults(monkeypatch, caplog) -> None:
    monkeypatch.setenv("BROADSIDE_DIFFICULTY", "impossible")
    monkeypatch.setenv("BROADSIDE_SEED", "abc")
    with caplog.at_level("WARNING"):
        settings = load_engine_settings()
    assert settings.difficulty is Difficulty.NORMAL
    assert settings.seed is None
    assert "invalid_setting" in caplog.text


def test_log_level_prefers_prefixed_variable(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.delenv("BROADSIDE_LOG_LEVEL", raising=False)
    assert resolve_log_level_name() == "WARNING"
    monkeypatch.setenv("BROADSIDE_LOG_LEVEL", "error")
    assert resolve_log_level_name() == "ERROR"
