# topmark:header:start
#
#   project      : TopVars
#   file         : test_logging_flags.py
#   file_relpath : tests/cli/test_logging_flags.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for group-level verbosity, color and help handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.cli.conftest import (
    assert_SUCCESS,
    assert_USAGE_ERROR,
    assert_VIOLATIONS,
    parse_json_output,
    run_cli,
    run_cli_in,
    write_js,
)
from tests.conftest import parametrize
from topvars.cli.errors import TopvarsUsageError
from topvars.cli.options import ColorMode, resolve_color_mode, resolve_verbosity
from topvars.config import logging
from topvars.core.formats import OutputFormat

pytestmark: pytest.MarkDecorator = pytest.mark.cli


def test_verbose_and_quiet_are_exclusive() -> None:
    result = run_cli(["-v", "-q", "version"])

    assert_USAGE_ERROR(result)
    assert "mutually exclusive" in result.output


@parametrize(
    ("verbose", "quiet", "expected"),
    [(0, 0, 0), (2, 0, 2), (0, 1, -1), (0, 3, -1)],
)
def test_resolve_verbosity(verbose: int, quiet: int, expected: int) -> None:
    assert resolve_verbosity(verbose, quiet) == expected


def test_resolve_verbosity_conflict() -> None:
    with pytest.raises(TopvarsUsageError):
        resolve_verbosity(1, 1)


def test_color_mode_resolution(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_color_mode(cli_mode=ColorMode.ALWAYS, output_format=None)
    assert not resolve_color_mode(cli_mode=ColorMode.ALWAYS, output_format=OutputFormat.JSON)
    assert not resolve_color_mode(cli_mode=ColorMode.NEVER, output_format=None, stdout_isatty=True)
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, output_format=None, stdout_isatty=True)

    monkeypatch.setenv("NO_COLOR", "1")
    assert not resolve_color_mode(cli_mode=None, output_format=None, stdout_isatty=True)
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(cli_mode=None, output_format=None, stdout_isatty=False)


def test_color_always_styles_text_output(isolation: Path) -> None:
    write_js(isolation, "a.js", "let a;\n")

    colored = run_cli_in(isolation, ["--color", "always", "check", "a.js"])
    plain = run_cli_in(isolation, ["--no-color", "check", "a.js"])

    assert "\x1b[" in colored.stdout
    assert "\x1b[" not in plain.stdout


def test_invalid_color_value() -> None:
    result = run_cli(["--color", "sometimes", "version"])
    assert result.exit_code != 0
    assert "Must be one of: auto, always, never" in result.output


def test_no_subcommand_prints_help() -> None:
    result = run_cli([])

    assert_SUCCESS(result)
    assert "Hint: use 'topvars check [PATHS...]'" in result.output
    assert "check" in result.output


def test_env_log_level_does_not_break_output(
    isolation: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(logging.ENV_LOG_LEVEL, "DEBUG")
    write_js(isolation, "a.js", "const a = 1;\n")

    try:
        result = run_cli_in(isolation, ["check", "a.js"])
    finally:
        # the CLI bound the root handler to the runner's stream
        logging.setup_logging(level=logging.TRACE_LEVEL)

    assert_SUCCESS(result)
    assert "[DEBUG]" in result.output
    assert "0 problems" in result.output


def test_env_log_level_keeps_json_stdout_clean(
    isolation: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(logging.ENV_LOG_LEVEL, "DEBUG")
    write_js(isolation, "a.js", "let a = 1;\n")

    try:
        result = run_cli_in(isolation, ["check", "--format", "json", "a.js"])
    finally:
        logging.setup_logging(level=logging.TRACE_LEVEL)

    assert_VIOLATIONS(result)
    payload = parse_json_output(result)
    assert payload["summary"]["problems"] == 1
    assert "[DEBUG]" in result.stderr
    assert "[DEBUG]" not in result.stdout
