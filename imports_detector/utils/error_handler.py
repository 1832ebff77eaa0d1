"""Centralized error handler for imports-detector commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from imports_detector.utils.exit_codes import ExitCodes
from imports_detector.utils.logging import logger


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that turns unexpected failures into a one-line CLI error."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as e:
            logger.opt(exception=True).debug(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=str(e),
            )
            error = click.ClickException(str(e))
            error.exit_code = ExitCodes.ERROR
            raise error from e

    return wrapper
