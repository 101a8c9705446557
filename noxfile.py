# topmark:header:start
#
#   project      : TopVars
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TopVars project automation via Nox.

Sessions:
  - `lint`: Ruff lint on the sources and tests.
  - `format_check`: Verify formatting with Ruff.
  - `qa`: Per-Python session that runs pytest and pyright.
  - `property_test`: Property tests with the larger `ci` Hypothesis profile.

Common invocations:
  - `nox -s lint`
  - `nox -s qa`
  - `nox -s property_test`
"""

from __future__ import annotations

import nox

PYTHON_VERSIONS: list[str] = ["3.10", "3.11", "3.12", "3.13"]
LINT_TARGETS: tuple[str, ...] = ("src", "tests", "noxfile.py")

nox.options.sessions = ["lint", "qa"]
nox.options.reuse_existing_virtualenvs = True


@nox.session
def lint(session: nox.Session) -> None:
    """Run Ruff lint checks."""
    session.install("ruff")
    session.run("ruff", "check", *LINT_TARGETS)


@nox.session
def format_check(session: nox.Session) -> None:
    """Verify formatting with Ruff."""
    session.install("ruff")
    session.run("ruff", "format", "--check", *LINT_TARGETS)


@nox.session(python=PYTHON_VERSIONS)
def qa(session: nox.Session) -> None:
    """Run the test suite and the type checker."""
    session.install("-e", ".[test]", "pyright")
    session.run("pytest", *session.posargs)
    session.run("pyright")


@nox.session
def property_test(session: nox.Session) -> None:
    """Run the property tests with the `ci` Hypothesis profile."""
    session.install("-e", ".[test]")
    session.env["HYPOTHESIS_PROFILE"] = "ci"
    session.run("pytest", "tests/rules/test_classifier_property.py", *session.posargs)
