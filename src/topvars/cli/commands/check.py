# topmark:header:start
#
#   project      : TopVars
#   file         : check.py
#   file_relpath : src/topvars/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TopVars `check` command.

Lints JavaScript/TypeScript files for disallowed top-level variables.

Input modes supported:
  * Paths: files, directories (recursive) and globs given as arguments.
  * No arguments: the current directory.

Exit status:
  * 0 when no error-level problem was found;
  * 1 when at least one error-level problem was found;
  * a sysexits code when configuration is invalid or a file cannot be read.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from topvars.cli.cli_types import EnumChoiceParam
from topvars.cli.console import get_console_safely
from topvars.cli.emitters import emit_json, emit_ndjson, emit_text
from topvars.cli.errors import TopvarsConfigError, TopvarsUsageError
from topvars.cli.exit_codes import ExitCode
from topvars.cli.options import common_config_options, output_format_option
from topvars.config.logging import get_logger
from topvars.config.model import MutableConfig
from topvars.config.types import Severity
from topvars.core.errors import ConfigError
from topvars.core.formats import OutputFormat
from topvars.file_resolver import resolve_file_list
from topvars.linter import FileStatus, activate_rules, lint_file
from topvars.rules.no_top_level_variables import (
    CONST_ALLOWED_VALUES,
    KIND_VALUES,
    OPTION_CONST_ALLOWED,
    OPTION_KIND,
    RULE_ID,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from topvars.cli.emitters import RunSummary
    from topvars.config.logging import TopvarsLogger
    from topvars.config.model import Config
    from topvars.linter import ActiveRule, LintResult

logger: TopvarsLogger = get_logger(__name__)

# First read error wins, in this order of precedence.
_STATUS_EXIT_CODES: dict[FileStatus, ExitCode] = {
    FileStatus.NOT_FOUND: ExitCode.FILE_NOT_FOUND,
    FileStatus.PERMISSION_DENIED: ExitCode.PERMISSION_DENIED,
    FileStatus.ENCODING_ERROR: ExitCode.ENCODING_ERROR,
    FileStatus.IO_ERROR: ExitCode.IO_ERROR,
}


def build_config(
    *,
    config_paths: Sequence[str],
    no_config: bool,
    include_patterns: Sequence[str],
    exclude_patterns: Sequence[str],
    kinds: Sequence[str],
    const_allowed: Sequence[str],
    no_const_allowed: bool,
    severity: Severity | None,
) -> Config:
    """Merge discovered/explicit config files with the command-line overrides.

    Raises:
        ConfigError: If a config file or an override is invalid.
    """
    draft: MutableConfig = MutableConfig.load_merged(
        anchor=Path.cwd(),
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    )
    options: dict[str, Any] = {}
    if kinds:
        options[OPTION_KIND] = list(kinds)
    if const_allowed or no_const_allowed:
        options[OPTION_CONST_ALLOWED] = list(const_allowed)
    draft.apply_overrides(
        rule_id=RULE_ID,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        severity=severity,
        options=options,
    )
    return draft.freeze()


def exit_code_for(results: Sequence[LintResult], summary: RunSummary) -> ExitCode:
    """Return the exit code of a run: read errors first, then error-level problems."""
    for status, code in _STATUS_EXIT_CODES.items():
        if any(r.status is status for r in results):
            return code
    if summary.errors:
        return ExitCode.VIOLATIONS
    return ExitCode.SUCCESS


@click.command(
    name="check",
    help="Report disallowed top-level variables in JavaScript and TypeScript files.",
)
@click.argument("paths", nargs=-1, metavar="[PATHS]...")
@common_config_options
@click.option(
    "--include",
    "include_patterns",
    multiple=True,
    metavar="GLOB",
    help="Only lint files matching this gitignore-style pattern (repeatable).",
)
@click.option(
    "--exclude",
    "exclude_patterns",
    multiple=True,
    metavar="GLOB",
    help="Skip files matching this gitignore-style pattern (repeatable).",
)
@click.option(
    "--kind",
    "kinds",
    multiple=True,
    metavar="KIND",
    help=f"Declaration kind to check (repeatable; {', '.join(KIND_VALUES)}).",
)
@click.option(
    "--const-allowed",
    "const_allowed",
    multiple=True,
    metavar="SHAPE",
    help="Initializer shape allowed for top-level const (repeatable; "
    f"{', '.join(CONST_ALLOWED_VALUES)}).",
)
@click.option(
    "--no-const-allowed",
    "no_const_allowed",
    is_flag=True,
    help="Allow no optional const shapes (Literal stays allowed).",
)
@click.option(
    "--severity",
    "severity",
    type=EnumChoiceParam(Severity),
    default=None,
    help="Severity of the rule (error, warning, off).",
)
@output_format_option
@click.option(
    "--summary",
    "summary_only",
    is_flag=True,
    help="Print only the summary line (text format).",
)
def check_command(
    *,
    paths: tuple[str, ...],
    config_paths: tuple[str, ...],
    no_config: bool,
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    kinds: tuple[str, ...],
    const_allowed: tuple[str, ...],
    no_const_allowed: bool,
    severity: Severity | None,
    output_format: OutputFormat | None,
    summary_only: bool,
) -> None:
    """Lint files and report disallowed top-level variables."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console = get_console_safely()
    verbosity: int = int(ctx.obj.get("verbosity_level", 0))
    fmt: OutputFormat = output_format or OutputFormat.TEXT

    if const_allowed and no_const_allowed:
        raise TopvarsUsageError(
            "The '--const-allowed' and '--no-const-allowed' options are mutually exclusive."
        )

    try:
        config: Config = build_config(
            config_paths=config_paths,
            no_config=no_config,
            include_patterns=include_patterns,
            exclude_patterns=exclude_patterns,
            kinds=kinds,
            const_allowed=const_allowed,
            no_const_allowed=no_const_allowed,
            severity=severity,
        )
        rules: tuple[ActiveRule, ...] = activate_rules(config)
    except ConfigError as e:
        raise TopvarsConfigError(str(e)) from e

    files: list[Path] = resolve_file_list(paths, config)
    if not files:
        raise TopvarsUsageError("No files to lint.")
    logger.info("Linting %d file(s) with %d rule(s)", len(files), len(rules))

    results: list[LintResult] = [lint_file(path, config, rules=rules) for path in files]

    if fmt is OutputFormat.JSON:
        summary = emit_json(console, results)
    elif fmt is OutputFormat.NDJSON:
        summary = emit_ndjson(console, results)
    else:
        summary = emit_text(console, results, verbosity=verbosity, summary_only=summary_only)

    code: ExitCode = exit_code_for(results, summary)
    logger.debug("check: exit code %s", code.name)
    ctx.exit(int(code))
