# topmark:header:start
#
#   project      : TopVars
#   file         : model.py
#   file_relpath : src/topvars/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Layered configuration model for TopVars.

`MutableConfig` is a builder: layers (defaults, discovered files, explicit
``--config`` files, CLI overrides) are merged into it with last-wins
semantics and the result is frozen into an immutable `Config` that the linter
consumes.

Rule option *values* are kept raw here. They are validated against each rule's
option schema when the rule is activated (see `topvars.linter`), so the config
layer only checks structure: table shapes, string lists, severities and rule ids.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from topvars.config.guards import get_str_list, get_table_value, is_toml_table
from topvars.config.keys import Toml
from topvars.config.loaders import extract_pyproject_section, load_toml_dict
from topvars.config.logging import get_logger
from topvars.config.types import Severity
from topvars.constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME
from topvars.core.errors import ConfigError, UnknownRuleError

if TYPE_CHECKING:
    from topvars.config.logging import TopvarsLogger
    from topvars.config.types import TomlTable

logger: TopvarsLogger = get_logger(__name__)


@dataclass(frozen=True)
class RuleSettings:
    """Immutable per-rule settings.

    Attributes:
        severity (Severity): Configured severity (``off`` disables the rule).
        options (Mapping[str, Any]): Raw, not yet validated, option values.
    """

    severity: Severity = Severity.ERROR
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def enabled(self) -> bool:
        """Return True unless the rule is switched off."""
        return self.severity is not Severity.OFF


@dataclass
class MutableRuleSettings:
    """Mutable per-rule settings; ``None`` severity means "not set in this layer"."""

    severity: Severity | None = None
    options: dict[str, Any] = field(default_factory=lambda: {})

    def merge_with(self, other: MutableRuleSettings) -> MutableRuleSettings:
        """Return new settings where values set in ``other`` win (options key-wise)."""
        return MutableRuleSettings(
            severity=other.severity if other.severity is not None else self.severity,
            options={**self.options, **other.options},
        )

    def freeze(self) -> RuleSettings:
        """Return an immutable `RuleSettings`; unset severity defaults to ``error``."""
        return RuleSettings(
            severity=self.severity if self.severity is not None else Severity.ERROR,
            options=MappingProxyType(dict(self.options)),
        )


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        config_files (tuple[Path, ...]): Files that contributed to this config, in
            merge order.
        include_patterns (tuple[str, ...]): Gitignore-style include patterns.
        exclude_patterns (tuple[str, ...]): Gitignore-style exclude patterns.
        rules (Mapping[str, RuleSettings]): Settings per rule id. Rules missing
            from the mapping run with default settings.
    """

    config_files: tuple[Path, ...] = ()
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    rules: Mapping[str, RuleSettings] = field(default_factory=lambda: MappingProxyType({}))

    def rule_settings(self, rule_id: str) -> RuleSettings:
        """Return the settings of ``rule_id`` (defaults if not configured)."""
        return self.rules.get(rule_id, RuleSettings())

    def to_toml_dict(self) -> TomlTable:
        """Return a TOML-serializable dict of this configuration."""
        return {
            Toml.SECTION_FILES: {
                Toml.KEY_INCLUDE: list(self.include_patterns),
                Toml.KEY_EXCLUDE: list(self.exclude_patterns),
            },
            Toml.SECTION_RULES: {
                rule_id: {Toml.KEY_SEVERITY: s.severity.value, **dict(s.options)}
                for rule_id, s in sorted(self.rules.items())
            },
        }


@dataclass
class MutableConfig:
    """Mutable configuration draft used while merging layers.

    Empty lists mean "not set in this layer" for pattern fields, so a later
    layer only overrides what it actually specifies.
    """

    config_files: list[Path] = field(default_factory=lambda: [])
    include_patterns: list[str] = field(default_factory=lambda: [])
    exclude_patterns: list[str] = field(default_factory=lambda: [])
    rules: dict[str, MutableRuleSettings] = field(default_factory=lambda: {})

    # ------------------------------ Building ------------------------------

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, config_file: Path | None = None) -> MutableConfig:
        """Build a draft from a parsed TopVars TOML table.

        Args:
            data (TomlTable): The ``topvars.toml`` document, or the
                ``[tool.topvars]`` table of a ``pyproject.toml``.
            config_file (Path | None): Source file, used in error messages.

        Returns:
            MutableConfig: The draft for this layer.

        Raises:
            ConfigError: If a section or key has the wrong type, or a severity is invalid.
        """
        source: str = str(config_file) if config_file is not None else "<config>"
        draft = cls(config_files=[config_file] if config_file is not None else [])

        files_tbl: TomlTable = get_table_value(data, Toml.SECTION_FILES)
        try:
            draft.include_patterns = (
                get_str_list(files_tbl, Toml.KEY_INCLUDE, where=Toml.SECTION_FILES) or []
            )
            draft.exclude_patterns = (
                get_str_list(files_tbl, Toml.KEY_EXCLUDE, where=Toml.SECTION_FILES) or []
            )
        except TypeError as e:
            raise ConfigError(f"{source}: {e}") from e

        rules_raw: Any = data.get(Toml.SECTION_RULES, {})
        if not is_toml_table(rules_raw):
            raise ConfigError(f"{source}: [{Toml.SECTION_RULES}] must be a table")

        for rule_id, section in rules_raw.items():
            where = f"{Toml.SECTION_RULES}.{rule_id}"
            if not is_toml_table(section):
                raise ConfigError(f"{source}: [{where}] must be a table")
            options: dict[str, Any] = dict(section)
            severity: Severity | None = None
            if Toml.KEY_SEVERITY in options:
                try:
                    severity = Severity.parse(options.pop(Toml.KEY_SEVERITY))
                except ValueError as e:
                    raise ConfigError(f"{source}: [{where}] {e}") from e
            draft.rules[rule_id] = MutableRuleSettings(severity=severity, options=options)

        logger.trace("Parsed config layer from %s: %s", source, draft)
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load a draft from a single TOML file.

        For ``pyproject.toml`` the ``[tool.topvars]`` table is used; a
        ``pyproject.toml`` without that table yields None.

        Raises:
            ConfigError: If the file cannot be read or holds invalid configuration.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        data: TomlTable = load_toml_dict(path)
        if path.name == PYPROJECT_FILE_NAME:
            section: TomlTable | None = extract_pyproject_section(data)
            if section is None:
                logger.debug("No [tool.topvars] section in %s", path)
                return None
            data = section
        return cls.from_toml_dict(data, config_file=path)

    @classmethod
    def discover_config_file(cls, start: Path) -> Path | None:
        """Return the nearest config file, walking up from ``start``.

        In a given directory ``topvars.toml`` wins over ``pyproject.toml``; a
        ``pyproject.toml`` only counts when it holds a ``[tool.topvars]`` table.
        """
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent
        while True:
            candidate: Path = cur / CONFIG_FILE_NAME
            if candidate.is_file():
                logger.debug("Discovered config file: %s", candidate)
                return candidate
            candidate = cur / PYPROJECT_FILE_NAME
            if candidate.is_file():
                try:
                    section: TomlTable | None = extract_pyproject_section(
                        load_toml_dict(candidate)
                    )
                except ConfigError as e:
                    # Unrelated pyproject files must not break discovery.
                    logger.debug("Ignoring unreadable %s: %s", candidate, e)
                    section = None
                if section is not None:
                    logger.debug("Discovered config file: %s", candidate)
                    return candidate
            parent: Path = cur.parent
            if parent == cur:
                return None
            cur = parent

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Merge order (lowest to highest precedence):
            1) Built-in defaults (an empty draft)
            2) The nearest discovered project config, unless ``no_config``
            3) Explicit ``--config`` files, in the given order

        Args:
            anchor (Path | None): Directory discovery starts from (CWD if None).
            extra_config_files (Iterable[Path] | None): Explicit config files.
            no_config (bool): Skip discovery.

        Returns:
            MutableConfig: The merged draft.
        """
        draft = cls()
        if not no_config:
            found: Path | None = cls.discover_config_file(anchor or Path.cwd())
            if found is not None:
                layer: MutableConfig | None = cls.from_toml_file(found)
                if layer is not None:
                    draft = draft.merge_with(layer)

        for extra in extra_config_files or ():
            layer = cls.from_toml_file(Path(extra))
            if layer is None:
                raise ConfigError(f"{extra}: no [tool.topvars] section found")
            draft = draft.merge_with(layer)

        return draft

    # ------------------------------ Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        merged_rules: dict[str, MutableRuleSettings] = {}
        for rule_id in self.rules.keys() | other.rules.keys():
            base: MutableRuleSettings | None = self.rules.get(rule_id)
            override: MutableRuleSettings | None = other.rules.get(rule_id)
            if base is None:
                assert override is not None
                merged_rules[rule_id] = override
            elif override is None:
                merged_rules[rule_id] = base
            else:
                merged_rules[rule_id] = base.merge_with(override)

        return MutableConfig(
            config_files=self.config_files + other.config_files,
            include_patterns=other.include_patterns or self.include_patterns,
            exclude_patterns=other.exclude_patterns or self.exclude_patterns,
            rules=merged_rules,
        )

    def apply_overrides(
        self,
        *,
        rule_id: str,
        include_patterns: Iterable[str] = (),
        exclude_patterns: Iterable[str] = (),
        severity: Severity | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> MutableConfig:
        """Apply CLI overrides in place and return ``self``.

        Patterns given on the command line replace configured ones; rule
        ``severity`` and ``options`` apply to ``rule_id``.
        """
        include = list(include_patterns)
        exclude = list(exclude_patterns)
        if include:
            self.include_patterns = include
        if exclude:
            self.exclude_patterns = exclude
        if severity is not None or options:
            override = MutableRuleSettings(severity=severity, options=dict(options or {}))
            current: MutableRuleSettings = self.rules.get(rule_id, MutableRuleSettings())
            self.rules[rule_id] = current.merge_with(override)
        return self

    # ------------------------------ Freezing ------------------------------

    def freeze(self) -> Config:
        """Return an immutable `Config`.

        Raises:
            UnknownRuleError: If a rule section names a rule that is not registered.
        """
        # Imported here: the registry imports rule modules, which import config helpers.
        from topvars.rules.registry import RuleRegistry

        for rule_id in self.rules:
            if not RuleRegistry.is_registered(rule_id):
                raise UnknownRuleError(rule_id)

        return Config(
            config_files=tuple(self.config_files),
            include_patterns=tuple(self.include_patterns),
            exclude_patterns=tuple(self.exclude_patterns),
            rules=MappingProxyType({k: v.freeze() for k, v in sorted(self.rules.items())}),
        )
