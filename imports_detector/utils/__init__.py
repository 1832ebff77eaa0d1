"""imports-detector utilities package."""

from .error_handler import handle_exceptions
from .exit_codes import ExitCodes
from .logging import logger, set_log_level

__all__ = [
    "handle_exceptions",
    "ExitCodes",
    "logger",
    "set_log_level",
]
