"""Logging setup for the c2cs command line.

Library modules only call ``get_logger(__name__)``; handlers are installed
once per run by ``configure_logging`` from the ``[logging]`` config table.
Console output is split so that warnings about skipped declarations stay on
stdout next to progress, while errors go to stderr.
"""

import datetime as _dt
import json
import logging as _logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

_LOGGER_NAMESPACE = "c2cs"

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

_LEVEL_COLORS = {
    _logging.DEBUG: "\033[36m",
    _logging.INFO: "\033[37m",
    _logging.WARNING: "\033[33m",
    _logging.ERROR: "\033[31m",
    _logging.CRITICAL: "\033[41m",
}
_RESET = "\033[0m"


@dataclass(frozen=True)
class LoggingState:
    console_level: int
    file_level: int
    log_dir: Optional[str] = None
    text_log_path: Optional[str] = None
    jsonl_log_path: Optional[str] = None


def _parse_level(value, default: int) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    name = str(value).upper()
    if name.isdigit():
        return int(name)
    level = _logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level


class _ColorFormatter(_logging.Formatter):
    def __init__(self, use_color: bool) -> None:
        super().__init__(fmt=_FORMAT, datefmt=_DATEFMT)
        self.use_color = use_color

    def format(self, record: _logging.LogRecord) -> str:
        message = super().format(record)
        color = _LEVEL_COLORS.get(record.levelno) if self.use_color else None
        return f"{color}{message}{_RESET}" if color else message


class _BelowLevelFilter(_logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: _logging.LogRecord) -> bool:
        return record.levelno < self.level


class _JsonLinesFormatter(_logging.Formatter):
    def format(self, record: _logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, _DATEFMT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "lineno": record.lineno,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def get_logger(name: Optional[str] = None) -> _logging.Logger:
    if not name:
        return _logging.getLogger(_LOGGER_NAMESPACE)
    if name == _LOGGER_NAMESPACE or name.startswith(_LOGGER_NAMESPACE + "."):
        return _logging.getLogger(name)
    return _logging.getLogger(f"{_LOGGER_NAMESPACE}.{name}")


def _console_handlers(level: int, use_color: bool) -> list[_logging.Handler]:
    stdout_handler = _logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.addFilter(_BelowLevelFilter(_logging.ERROR))
    stdout_handler.setFormatter(_ColorFormatter(use_color and sys.stdout.isatty()))

    stderr_handler = _logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(max(level, _logging.ERROR))
    stderr_handler.setFormatter(_ColorFormatter(use_color and sys.stderr.isatty()))
    return [stdout_handler, stderr_handler]


def _log_file_name(logging_cfg: Dict[str, Any], suffix: str) -> str:
    stamp = _dt.datetime.now().strftime(logging_cfg.get("timestamp_format", "%Y%m%dT%H%M%S"))
    pattern = logging_cfg.get("filename_pattern", "c2cs-{timestamp}.log")
    name = pattern.format(timestamp=stamp)
    root, _ = os.path.splitext(name)
    return root + suffix


def configure_logging(
    config: Dict[str, Any],
    *,
    console_level_override: Optional[str] = None,
    log_dir_override: Optional[str] = None,
) -> LoggingState:
    """Replace the handlers of the ``c2cs`` logger according to ``config``.

    File logging is enabled only when ``log_dir_override`` or
    ``logging.dir`` is set; ``logging.jsonl`` adds a JSON-lines file beside
    the text log.
    """
    logging_cfg: Dict[str, Any] = config.get("logging", {}) if config else {}

    console_level = _parse_level(console_level_override, _parse_level(logging_cfg.get("console_level"), _logging.INFO))
    file_level = _parse_level(logging_cfg.get("file_level"), _logging.DEBUG)
    log_dir = log_dir_override or logging_cfg.get("dir") or None

    logger = get_logger()
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = False

    for handler in _console_handlers(console_level, bool(logging_cfg.get("color", True))):
        logger.addHandler(handler)

    if not log_dir:
        logger.setLevel(console_level)
        return LoggingState(console_level=console_level, file_level=file_level)

    log_dir = os.path.abspath(log_dir)
    os.makedirs(log_dir, exist_ok=True)
    logger.setLevel(min(console_level, file_level))

    text_log_path = os.path.join(log_dir, _log_file_name(logging_cfg, ".log"))
    file_handler = _logging.FileHandler(text_log_path, encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(_logging.Formatter(_FORMAT, _DATEFMT))
    logger.addHandler(file_handler)

    jsonl_log_path = None
    if logging_cfg.get("jsonl", False):
        jsonl_log_path = os.path.join(log_dir, _log_file_name(logging_cfg, ".jsonl"))
        json_handler = _logging.FileHandler(jsonl_log_path, encoding="utf-8")
        json_handler.setLevel(file_level)
        json_handler.setFormatter(_JsonLinesFormatter())
        logger.addHandler(json_handler)

    return LoggingState(
        console_level=console_level,
        file_level=file_level,
        log_dir=log_dir,
        text_log_path=text_log_path,
        jsonl_log_path=jsonl_log_path,
    )
