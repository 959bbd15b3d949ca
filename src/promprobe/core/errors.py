"""
Error types and exit codes for promprobe.

Exit Codes:
- 0: Success
- 10: Configuration error
- 11: Provider error (metrics backend failure)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog
from rich.console import Console

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    PROVIDER_ERROR = 11
    UNKNOWN_ERROR = 127


class ProbeError(Exception):
    """Base exception for promprobe errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ProbeError):
    """Raised when the target configuration cannot be loaded or is invalid."""

    exit_code = ExitCode.CONFIG_ERROR


class ProviderError(ProbeError):
    """Raised when the metrics backend fails."""

    exit_code = ExitCode.PROVIDER_ERROR


class EntityBuildError(ProbeError):
    """Raised by DTO builders when an entity or commodity is malformed."""


F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI entrypoints that converts exceptions to exit codes.

    ProbeError messages are printed to stderr with their details.

    Args:
        show_traceback: If True, print the traceback for every error
        log_errors: If True, log errors through structlog

    Exit codes:
        - ProbeError subclasses: the error's exit_code
        - KeyboardInterrupt: 130
        - Other exceptions: 127
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except ProbeError as e:
                print_error(e)
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=int(e.exit_code),
                        **e.details,
                    )
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=int(ExitCode.UNKNOWN_ERROR),
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: ProbeError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg


def print_error(error: ProbeError) -> None:
    """Print an error to stderr for the user."""
    Console(stderr=True).print(
        f"Error: {format_error_message(error)}",
        style="bold red",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
