# topmark:header:start
#
#   project      : TopVars
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the TopVars test suite.

This file sets up global fixtures and customizes the logging configuration for test runs.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `topvars.config.model.MutableConfig` (mutable), then
      `freeze()` into a `topvars.config.model.Config` for linter calls.
    - Do **not** mutate a frozen `Config`; build a new draft instead.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest
from hypothesis import settings

from topvars.config import logging
from topvars.config.model import MutableConfig
from topvars.config.types import Severity
from topvars.linter import lint_source
from topvars.rules.no_top_level_variables import RULE_ID

if TYPE_CHECKING:
    from topvars.config.model import Config
    from topvars.linter import LintResult

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]

settings.register_profile("default", max_examples=100, deadline=None)
settings.register_profile("ci", max_examples=1000, deadline=None)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_topvars_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the environment never forces log levels or colors during tests.

    A developer may have exported TOPVARS_LOG_LEVEL or FORCE_COLOR in their shell;
    both would change what the CLI prints.
    """
    monkeypatch.delenv(logging.ENV_LOG_LEVEL, raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test in an isolated project directory (CWD) without config files.

    Returns:
        Path: The project directory; it contains an empty ``src/`` folder.
    """
    cwd: Path = tmp_path / "proj"
    (cwd / "src").mkdir(parents=True)
    monkeypatch.chdir(cwd)
    return cwd


def make_config(
    *,
    severity: Severity | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    **options: Any,
) -> Config:
    """Return a frozen `Config` with ``no-top-level-variables`` settings applied.

    Keyword arguments other than ``severity``/``include``/``exclude`` become rule
    options, e.g. ``make_config(kind=["let"], constAllowed=[])``.
    """
    draft = MutableConfig()
    draft.apply_overrides(
        rule_id=RULE_ID,
        include_patterns=include or (),
        exclude_patterns=exclude or (),
        severity=severity,
        options=options,
    )
    return draft.freeze()


def lint_js(text: str, *, filename: str = "input.js", **options: Any) -> LintResult:
    """Lint ``text`` as if read from ``filename`` with the given rule options."""
    return lint_source(text, path=Path(filename), config=make_config(**options))


def rule_lines(result: LintResult) -> list[int]:
    """Return the 1-based lines of the rule diagnostics of ``result``."""
    return [d.span.line for d in result.diagnostics if d.rule_id == RULE_ID and d.span]
