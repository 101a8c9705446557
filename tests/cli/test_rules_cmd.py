# topmark:header:start
#
#   project      : TopVars
#   file         : test_rules_cmd.py
#   file_relpath : tests/cli/test_rules_cmd.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for ``topvars rules``."""

from __future__ import annotations

import json

import pytest

from tests.cli.conftest import assert_SUCCESS, parse_json_output, run_cli
from topvars.rules.no_top_level_variables import RULE_ID, VIOLATION_MESSAGE

pytestmark: pytest.MarkDecorator = pytest.mark.cli


def test_rules_text() -> None:
    result = run_cli(["rules"])

    assert_SUCCESS(result)
    assert RULE_ID in result.output
    assert "[problem]" in result.output
    assert "constAllowed" not in result.output


def test_rules_verbose_lists_options() -> None:
    result = run_cli(["-v", "rules"])

    assert_SUCCESS(result)
    assert "kind: const, let, var (default: const, let, var)" in result.output
    assert "constAllowed:" in result.output


def test_rules_json() -> None:
    result = run_cli(["rules", "--format", "json"])

    assert_SUCCESS(result)
    (rule,) = [r for r in parse_json_output(result) if r["id"] == RULE_ID]
    assert rule["type"] == "problem"
    assert rule["messages"] == {"message": VIOLATION_MESSAGE}
    assert rule["schema"]["additionalProperties"] is False
    assert rule["schema"]["properties"]["kind"]["minItems"] == 1


def test_rules_ndjson() -> None:
    result = run_cli(["rules", "--format", "ndjson"])

    assert_SUCCESS(result)
    ids = [json.loads(line)["id"] for line in result.stdout.splitlines() if line.strip()]
    assert RULE_ID in ids
