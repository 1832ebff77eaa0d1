"""Centralized logging configuration using Loguru.

Usage:
    from imports_detector.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if IMPORTS_DETECTOR_LOG_LEVEL=DEBUG

Environment Variables:
    IMPORTS_DETECTOR_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: WARNING)
    IMPORTS_DETECTOR_LOG_JSON: 0|1 (default: 0, human-readable)
    IMPORTS_DETECTOR_LOG_FILE: path to log file (optional)
"""

import json
import os
import sys

from loguru import logger

# Remove default handler
logger.remove()

_log_level = os.environ.get("IMPORTS_DETECTOR_LOG_LEVEL", "WARNING").upper()
_json_mode = os.environ.get("IMPORTS_DETECTOR_LOG_JSON", "0") == "1"
_log_file = os.environ.get("IMPORTS_DETECTOR_LOG_FILE")


def _ndjson_record(message) -> str:
    record = message.record
    payload = {
        "level": record["level"].name,
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
    }
    for key, value in record["extra"].items():
        payload[key] = value
    if record["exception"]:
        payload["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }
    return json.dumps(payload, default=str)


def ndjson_sink(message):
    """Write one NDJSON line per record to stderr.

    CRITICAL: Never call logger.* inside a sink - causes infinite recursion
    """
    sys.stderr.write(_ndjson_record(message) + "\n")
    sys.stderr.flush()


# Human-readable format (no emojis - Windows CP1252 compatibility)
_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")

_console_handler_id: int | None = None


def _add_console_handler(level: str) -> int:
    if _json_mode:
        return logger.add(ndjson_sink, level=level, colorize=False)
    return logger.add(
        sys.stderr,
        level=level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )


_console_handler_id = _add_console_handler(_log_level)

if _log_file:
    def _file_sink(message):
        """Append NDJSON records to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_ndjson_record(message) + "\n")

    logger.add(_file_sink, level="DEBUG")


def set_log_level(level: str) -> None:
    """Swap the console handler for one at ``level`` (used by --verbose)."""
    global _console_handler_id

    if _console_handler_id is not None:
        try:
            logger.remove(_console_handler_id)
        except ValueError:
            pass  # Already removed

    _console_handler_id = _add_console_handler(level.upper())


__all__ = [
    "logger",
    "set_log_level",
]
