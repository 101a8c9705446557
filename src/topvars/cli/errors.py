# topmark:header:start
#
#   project      : TopVars
#   file         : errors.py
#   file_relpath : src/topvars/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for TopVars CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Frontend-agnostic errors from `topvars.core.errors`
    are translated into these at the command boundary.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from topvars.cli.exit_codes import ExitCode


class TopvarsCliError(click.ClickException):
    """Base class for all TopVars CLI errors."""

    exit_code = ExitCode.UNEXPECTED_ERROR

    def format_message(self) -> str:
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class TopvarsUsageError(TopvarsCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class TopvarsConfigError(TopvarsCliError):
    """Error for configuration errors (malformed config, invalid rule options)."""

    exit_code = ExitCode.CONFIG_ERROR


class TopvarsUnexpectedError(TopvarsCliError):
    """Error for unhandled/unknown errors (last-resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR
