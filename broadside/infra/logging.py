"""Logging pipeline configuration."""

from __future__ import annotations

import json
import logging
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from broadside.infra.config import EngineSettings, load_engine_settings

__all__ = [
    "JsonFormatter",
    "LoggingConfig",
    "build_logging_config",
    "configure_logging",
    "setup_logging",
    "shutdown_logging",
]

_QUEUE_LISTENER: QueueListener | None = None

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}
_LEVELS = logging.getLevelNamesMapping()


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Where log records go and how each sink renders them."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` values are nested under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Install console (and optional file) handlers on the root logger.

    With a file sink, the root logger only enqueues records and a
    ``QueueListener`` thread does the writing.
    """
    global _QUEUE_LISTENER

    shutdown_logging()
    sinks = [_sink(logging.StreamHandler(), config.console_format)]
    if config.file_path:
        path = Path(config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        sinks.append(_sink(logging.FileHandler(path, encoding="utf-8", delay=True), config.file_format))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(_LEVELS.get(config.level_name.upper(), logging.INFO))

    if len(sinks) == 1:
        root.addHandler(sinks[0])
        return
    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _QUEUE_LISTENER = QueueListener(records, *sinks, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Stop the file queue listener, flushing pending records."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        for handler in _QUEUE_LISTENER.handlers:
            handler.close()
        _QUEUE_LISTENER = None


def build_logging_config(settings: EngineSettings | None = None) -> LoggingConfig:
    """Derive logging configuration from settings (environment by default)."""
    resolved = settings if settings is not None else load_engine_settings()
    file_path = None
    if resolved.log_dir:
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
        file_path = str(Path(resolved.log_dir) / f"broadside_run_{stamp}.jsonl")
    return LoggingConfig(
        level_name=resolved.log_level,
        console_format=resolved.log_format,
        file_path=file_path,
        file_format="json",
    )


def setup_logging(settings: EngineSettings | None = None) -> None:
    """Configure application logging from settings."""
    config = build_logging_config(settings)
    configure_logging(config)
    if config.file_path:
        logging.getLogger(__name__).info("logging_file=%s", config.file_path)


def _sink(handler: logging.Handler, kind: str) -> logging.Handler:
    if kind.strip().lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    return handler
