"""Standardized CLI exit codes for goprofiler.

Exit code scheme:

    0  SUCCESS        -- analysis completed (findings alone do not fail a run)
    1  GENERAL_ERROR  -- target unreadable, aborted batch, unexpected failure
    2  USAGE_ERROR    -- invalid arguments or malformed .goprofiler.yml
    5  GATE_FAILURE   -- an issue at or above the ``fail_on`` impact was found
    6  PARTIAL        -- some files could not be analyzed and were skipped
"""

from __future__ import annotations

import click

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_GATE_FAILURE: int = 5
EXIT_PARTIAL: int = 6

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments, flags or config)",
    EXIT_GATE_FAILURE: "impact gate failed",
    EXIT_PARTIAL: "partial results (some files were skipped)",
}


class GoprofilerError(click.ClickException):
    """Base class for CLI errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class ConfigError(GoprofilerError):
    """Raised when .goprofiler.yml cannot be parsed or has bad values."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_USAGE)


class GateFailureError(GoprofilerError):
    """Raised when findings reach the configured ``fail_on`` impact."""

    def __init__(self, message: str = "Impact gate failed."):
        super().__init__(message, EXIT_GATE_FAILURE)

