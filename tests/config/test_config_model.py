# topmark:header:start
#
#   project      : TopVars
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the layered configuration model.

Covered:
    - parsing TOML tables into drafts (and rejecting malformed ones);
    - last-wins merging of layers and CLI overrides;
    - discovery of ``topvars.toml`` / ``pyproject.toml``;
    - freezing and unknown rule ids.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from tests.conftest import parametrize
from topvars.config.model import Config, MutableConfig, MutableRuleSettings, RuleSettings
from topvars.config.types import Severity
from topvars.core.errors import ConfigError, UnknownRuleError
from topvars.rules.no_top_level_variables import RULE_ID


def test_empty_draft_freezes_to_defaults() -> None:
    config = MutableConfig().freeze()

    assert config == Config()
    assert config.rule_settings(RULE_ID) == RuleSettings()
    assert config.rule_settings(RULE_ID).enabled


def test_from_toml_dict() -> None:
    draft = MutableConfig.from_toml_dict(
        {
            "files": {"include": ["src/**"], "exclude": ["**/*.test.js"]},
            "rules": {RULE_ID: {"severity": "Warning", "kind": ["let"]}},
        },
        config_file=Path("topvars.toml"),
    )

    assert draft.config_files == [Path("topvars.toml")]
    assert draft.include_patterns == ["src/**"]
    assert draft.exclude_patterns == ["**/*.test.js"]
    assert draft.rules[RULE_ID] == MutableRuleSettings(
        severity=Severity.WARNING, options={"kind": ["let"]}
    )


@parametrize(
    ("data", "fragment"),
    [
        ({"files": {"include": "src"}}, "'include' must be a list of strings"),
        ({"files": {"exclude": [1]}}, "'exclude' must be a list of strings"),
        ({"rules": ["x"]}, "[rules] must be a table"),
        ({"rules": {RULE_ID: "error"}}, f"[rules.{RULE_ID}] must be a table"),
        ({"rules": {RULE_ID: {"severity": "fatal"}}}, "invalid severity 'fatal'"),
    ],
)
def test_from_toml_dict_rejects_malformed_tables(data: dict[str, Any], fragment: str) -> None:
    with pytest.raises(ConfigError) as exc_info:
        MutableConfig.from_toml_dict(data)
    assert fragment in str(exc_info.value)


def test_merge_is_last_wins() -> None:
    base = MutableConfig(
        include_patterns=["a/**"],
        exclude_patterns=["x"],
        rules={RULE_ID: MutableRuleSettings(severity=Severity.WARNING, options={"kind": ["let"]})},
    )
    layer = MutableConfig(
        include_patterns=["b/**"],
        rules={RULE_ID: MutableRuleSettings(options={"constAllowed": []})},
    )

    merged = base.merge_with(layer)

    assert merged.include_patterns == ["b/**"]
    assert merged.exclude_patterns == ["x"]
    assert merged.rules[RULE_ID].severity is Severity.WARNING
    assert merged.rules[RULE_ID].options == {"kind": ["let"], "constAllowed": []}


def test_apply_overrides() -> None:
    draft = MutableConfig(include_patterns=["a/**"])
    draft.apply_overrides(
        rule_id=RULE_ID, exclude_patterns=["b"], severity=Severity.OFF, options={"kind": ["var"]}
    )
    config = draft.freeze()

    assert config.include_patterns == ("a/**",)
    assert config.exclude_patterns == ("b",)
    settings = config.rule_settings(RULE_ID)
    assert settings.severity is Severity.OFF
    assert not settings.enabled
    assert dict(settings.options) == {"kind": ["var"]}


def test_freeze_rejects_unknown_rule() -> None:
    draft = MutableConfig(rules={"no-such-rule": MutableRuleSettings()})
    with pytest.raises(UnknownRuleError) as exc_info:
        draft.freeze()
    assert isinstance(exc_info.value, ConfigError)
    assert exc_info.value.rule_id == "no-such-rule"


def test_frozen_config_is_read_only() -> None:
    config = MutableConfig(rules={RULE_ID: MutableRuleSettings(options={"kind": ["let"]})}).freeze()
    with pytest.raises(TypeError):
        config.rules[RULE_ID] = RuleSettings()  # type: ignore[index]


def test_to_toml_dict() -> None:
    config = MutableConfig(
        rules={RULE_ID: MutableRuleSettings(options={"kind": ["let"]})}
    ).freeze()

    assert config.to_toml_dict() == {
        "files": {"include": [], "exclude": []},
        "rules": {RULE_ID: {"severity": "error", "kind": ["let"]}},
    }


# --- Files and discovery ---


def test_from_toml_file(tmp_path: Path) -> None:
    path = tmp_path / "topvars.toml"
    path.write_text('[rules.no-top-level-variables]\nseverity = "off"\n', encoding="utf-8")

    draft = MutableConfig.from_toml_file(path)

    assert draft is not None
    assert draft.rules[RULE_ID].severity is Severity.OFF


def test_from_pyproject(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text(
        '[project]\nname = "x"\n\n[tool.topvars.files]\ninclude = ["src/**"]\n',
        encoding="utf-8",
    )

    draft = MutableConfig.from_toml_file(path)

    assert draft is not None
    assert draft.include_patterns == ["src/**"]


def test_pyproject_without_section(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "x"\n', encoding="utf-8")
    assert MutableConfig.from_toml_file(path) is None


def test_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "topvars.toml"
    path.write_text("[rules\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        MutableConfig.from_toml_file(path)


def test_discovery_walks_up(isolation: Path) -> None:
    (isolation / "topvars.toml").write_text("", encoding="utf-8")
    nested = isolation / "src" / "deep"
    nested.mkdir()

    assert MutableConfig.discover_config_file(nested) == (isolation / "topvars.toml").resolve()


def test_discovery_prefers_topvars_toml(isolation: Path) -> None:
    (isolation / "pyproject.toml").write_text("[tool.topvars]\n", encoding="utf-8")
    (isolation / "topvars.toml").write_text("", encoding="utf-8")

    assert MutableConfig.discover_config_file(isolation) == (isolation / "topvars.toml").resolve()


def test_discovery_skips_unrelated_pyproject(isolation: Path) -> None:
    (isolation / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
    (isolation.parent / "topvars.toml").write_text("", encoding="utf-8")

    found = MutableConfig.discover_config_file(isolation / "src")

    assert found == (isolation.parent / "topvars.toml").resolve()


def test_load_merged_layers(isolation: Path) -> None:
    (isolation / "topvars.toml").write_text(
        '[files]\nexclude = ["a"]\n\n[rules.no-top-level-variables]\nkind = ["let"]\n',
        encoding="utf-8",
    )
    extra = isolation / "extra.toml"
    extra.write_text('[rules.no-top-level-variables]\nseverity = "warning"\n', encoding="utf-8")

    config = MutableConfig.load_merged(extra_config_files=[extra]).freeze()

    assert config.exclude_patterns == ("a",)
    assert config.rule_settings(RULE_ID).severity is Severity.WARNING
    assert dict(config.rule_settings(RULE_ID).options) == {"kind": ["let"]}
    assert len(config.config_files) == 2


def test_load_merged_no_config(isolation: Path) -> None:
    (isolation / "topvars.toml").write_text("[files]\nexclude = ['a']\n", encoding="utf-8")
    assert MutableConfig.load_merged(no_config=True).freeze() == Config()


def test_explicit_pyproject_without_section_is_an_error(isolation: Path) -> None:
    path = isolation / "pyproject.toml"
    path.write_text('[project]\nname = "x"\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="no \\[tool.topvars\\] section"):
        MutableConfig.load_merged(extra_config_files=[path], no_config=True)
