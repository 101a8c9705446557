# topmark:header:start
#
#   project      : TopVars
#   file         : linter.py
#   file_relpath : src/topvars/linter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lint JavaScript and TypeScript sources with the registered rules.

The linter is the rule host: it activates every enabled rule (validating its
options against the rule's schema first), parses the source with tree-sitter,
walks the tree once and collects the diagnostics of all rules in a
per-file `DiagnosticLog`.

Typical usage:
    ```python
    from pathlib import Path

    from topvars.config.model import MutableConfig
    from topvars.linter import lint_file

    config = MutableConfig.load_merged().freeze()
    result = lint_file(Path("src/index.js"), config)
    for diag in result.diagnostics:
        print(diag.span, diag.message)
    ```
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from topvars.config.logging import get_logger
from topvars.config.model import Config
from topvars.diagnostic.model import DiagnosticLevel, DiagnosticLog
from topvars.rules.base import RuleContext
from topvars.rules.registry import iter_rules
from topvars.syntax.parser import Grammar, grammar_for_path, parse_source
from topvars.syntax.walker import walk

if TYPE_CHECKING:
    from tree_sitter import Tree

    from topvars.config.logging import TopvarsLogger
    from topvars.rules.base import Rule
    from topvars.syntax.walker import Listeners

logger: TopvarsLogger = get_logger(__name__)

SYNTAX_ERROR_MESSAGE: Final[str] = "File contains syntax errors; results may be incomplete."


class FileStatus(str, Enum):
    """Outcome of linting one file."""

    OK = "ok"
    UNSUPPORTED = "unsupported"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    ENCODING_ERROR = "encoding_error"
    IO_ERROR = "io_error"

    @property
    def is_error(self) -> bool:
        """Return True if the file could not be linted because of a read error."""
        return self not in (FileStatus.OK, FileStatus.UNSUPPORTED)


@dataclass(frozen=True)
class ActiveRule:
    """A rule ready to run: options validated and severity resolved.

    Attributes:
        rule (Rule): The rule instance.
        options (Mapping[str, tuple[str, ...]]): Options validated against the
            rule's schema.
        level (DiagnosticLevel): Level of the diagnostics the rule reports.
    """

    rule: Rule
    options: Mapping[str, tuple[str, ...]]
    level: DiagnosticLevel


@dataclass
class LintResult:
    """Result of linting one source.

    Attributes:
        path (Path | None): Linted file, None for anonymous sources.
        status (FileStatus): Read/parse outcome.
        diagnostics (DiagnosticLog): Diagnostics in report order.
        grammar (Grammar | None): Grammar the source was parsed with.
        error (str | None): Read error message when ``status.is_error``.
    """

    path: Path | None
    status: FileStatus = FileStatus.OK
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    grammar: Grammar | None = None
    error: str | None = None

    @property
    def has_error(self) -> bool:
        """Return True if any error-level diagnostic was reported."""
        return self.diagnostics.has_error()

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this result."""
        out: dict[str, Any] = {
            "path": str(self.path) if self.path is not None else None,
            "status": self.status.value,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
        if self.error is not None:
            out["error"] = self.error
        return out


def activate_rules(config: Config | None = None) -> tuple[ActiveRule, ...]:
    """Return the enabled rules with validated options, sorted by rule id.

    Args:
        config (Config | None): Runtime configuration (defaults if None).

    Returns:
        tuple[ActiveRule, ...]: Rules whose severity is not ``off``.

    Raises:
        RuleOptionsError: If a rule's options do not satisfy its schema.
    """
    config = config or Config()
    active: list[ActiveRule] = []
    for rule in iter_rules():
        settings = config.rule_settings(rule.rule_id)
        level: DiagnosticLevel | None = settings.severity.level
        if level is None:
            logger.debug("Rule '%s' is off", rule.rule_id)
            continue
        options = rule.meta.schema.validate(rule.rule_id, dict(settings.options))
        logger.debug("Activated rule '%s' (level=%s)", rule.rule_id, level.value)
        active.append(ActiveRule(rule=rule, options=options, level=level))
    return tuple(active)


def lint_tree(
    tree: Tree,
    *,
    path: Path | None = None,
    rules: Sequence[ActiveRule],
    log: DiagnosticLog | None = None,
) -> DiagnosticLog:
    """Run ``rules`` over an already parsed tree and return the diagnostics."""
    log = log if log is not None else DiagnosticLog()
    listeners: list[Listeners] = []
    for active in rules:
        context = RuleContext(
            meta=active.rule.meta,
            options=active.options,
            level=active.level,
            log=log,
            path=path,
        )
        listeners.append(active.rule.create(context))
    walk(tree, listeners)
    return log


def lint_source(
    text: str,
    *,
    path: Path | None = None,
    config: Config | None = None,
    grammar: Grammar | None = None,
    rules: Sequence[ActiveRule] | None = None,
) -> LintResult:
    """Lint source text.

    The grammar is ``grammar`` if given, else derived from ``path``'s suffix,
    else JavaScript for anonymous sources. A path with an unsupported suffix
    yields an ``UNSUPPORTED`` result without diagnostics.

    Args:
        text (str): Source text.
        path (Path | None): Path the text was read from (used for grammar
            selection and reporting).
        config (Config | None): Runtime configuration (defaults if None).
        grammar (Grammar | None): Explicit grammar.
        rules (Sequence[ActiveRule] | None): Pre-activated rules; activated from
            ``config`` if None.

    Returns:
        LintResult: The lint result.

    Raises:
        RuleOptionsError: If ``rules`` is None and a rule's options are invalid.
    """
    if grammar is None:
        grammar = grammar_for_path(path) if path is not None else Grammar.JAVASCRIPT
    if grammar is None:
        logger.debug("Skipping %s: unsupported file type", path)
        return LintResult(path=path, status=FileStatus.UNSUPPORTED)

    if rules is None:
        rules = activate_rules(config)

    result = LintResult(path=path, grammar=grammar)
    tree: Tree = parse_source(text.encode("utf-8"), grammar)
    if tree.root_node.has_error:
        logger.info("%s: syntax errors found", path or "<source>")
        result.diagnostics.add_warning(SYNTAX_ERROR_MESSAGE)

    lint_tree(tree, path=path, rules=rules, log=result.diagnostics)
    logger.debug(
        "Linted %s (%s): %d diagnostic(s)",
        path or "<source>",
        grammar.value,
        len(result.diagnostics),
    )
    return result


def lint_file(
    path: Path,
    config: Config | None = None,
    *,
    rules: Sequence[ActiveRule] | None = None,
) -> LintResult:
    """Read ``path`` as UTF-8 and lint it.

    Read errors do not raise: they are logged and recorded on the result's
    ``status`` and ``error`` so that the caller can keep processing other files.

    Raises:
        RuleOptionsError: If ``rules`` is None and a rule's options are invalid.
    """
    if grammar_for_path(path) is None:
        logger.debug("Skipping %s: unsupported file type", path)
        return LintResult(path=path, status=FileStatus.UNSUPPORTED)

    try:
        text: str = path.read_bytes().decode("utf-8")
    except FileNotFoundError as e:
        logger.error("File not found: %s", path)
        return LintResult(path=path, status=FileStatus.NOT_FOUND, error=str(e))
    except PermissionError as e:
        logger.error("Permission denied: %s", path)
        return LintResult(path=path, status=FileStatus.PERMISSION_DENIED, error=str(e))
    except UnicodeDecodeError as e:
        logger.error("Cannot decode %s as UTF-8: %s", path, e)
        return LintResult(path=path, status=FileStatus.ENCODING_ERROR, error=str(e))
    except OSError as e:
        logger.error("Error reading %s: %s", path, e)
        return LintResult(path=path, status=FileStatus.IO_ERROR, error=str(e))

    # A leading BOM is not part of the program text
    return lint_source(text.removeprefix("\ufeff"), path=path, config=config, rules=rules)
