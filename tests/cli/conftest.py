# topmark:header:start
#
#   project      : TopVars
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running TopVars in a controlled working directory.

`run_cli_in()` changes the process working directory to the given directory
before invoking the Click CLI, so relative paths, globs and config discovery
resolve against the test's project directory.
"""

from __future__ import annotations

import json
import os
from typing import IO, TYPE_CHECKING, Any

from click.testing import CliRunner, Result

from topvars.cli.exit_codes import ExitCode
from topvars.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def run_cli_in(
    cwd_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with ``cwd_path`` as the working directory.

    Args:
        cwd_path (Path): Directory used as the CWD for the command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["check", "src"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.

    Example:
        ```python
        res = run_cli_in(tmp_path, ["check", "*.js"])  # relative glob in tmp_path
        assert res.exit_code == ExitCode.SUCCESS
        ```
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(cwd_path)
        return runner.invoke(cli, argv, input=input_text, obj={})
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does not depend on files (``--help``,
    ``version``, ``rules``). Tests creating files should use `run_cli_in`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text, obj={})


def write_js(root: Path, name: str, text: str) -> Path:
    """Create ``root / name`` (and parents) with ``text`` and return its path."""
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def parse_json_output(result: Result) -> Any:
    """Parse the stdout of a ``--format json`` run."""
    return json.loads(result.stdout)


def parse_ndjson_output(result: Result) -> list[dict[str, Any]]:
    """Parse the stdout of a ``--format ndjson`` run into a list of records."""
    return [json.loads(line) for line in result.stdout.splitlines() if line.strip()]


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_VIOLATIONS(result: Result) -> None:
    """Assert that the command exited with VIOLATIONS (code 1)."""
    # VIOLATIONS is a *normal* outcome; do not assert on exception.
    assert result.exit_code == ExitCode.VIOLATIONS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert that the command exited with CONFIG_ERROR (code 78)."""
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
