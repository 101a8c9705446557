# topmark:header:start
#
#   project      : TopVars
#   file         : config.py
#   file_relpath : src/topvars/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TopVars `config` command group.

Subcommands:
  * ``defaults``: print the built-in default configuration as TOML.
  * ``dump``: print the effective configuration (defaults, discovered and
    explicit config files merged) as TOML.
"""

from __future__ import annotations

from pathlib import Path

import click

from topvars.cli.console import get_console_safely
from topvars.cli.errors import TopvarsConfigError
from topvars.cli.options import common_config_options
from topvars.config.keys import Toml
from topvars.config.loaders import (
    load_defaults_dict,
    render_runtime_defaults_toml_text,
    to_toml,
)
from topvars.config.model import Config, MutableConfig
from topvars.core.errors import ConfigError


@click.group(name="config", help="Inspect TopVars configuration.")
def config_command() -> None:
    """Configuration subcommands."""


@config_command.command(name="defaults", help="Print the default configuration as TOML.")
@click.option(
    "--pyproject",
    "for_pyproject",
    is_flag=True,
    help="Nest the output under [tool.topvars] for pyproject.toml.",
)
def defaults_command(*, for_pyproject: bool = False) -> None:
    """Print the default configuration."""
    console = get_console_safely()
    console.print(render_runtime_defaults_toml_text(for_pyproject=for_pyproject), nl=False)


@config_command.command(name="dump", help="Print the effective configuration as TOML.")
@common_config_options
def dump_command(*, config_paths: tuple[str, ...], no_config: bool) -> None:
    """Print the merged configuration, including rule defaults."""
    console = get_console_safely()
    try:
        config: Config = MutableConfig.load_merged(
            anchor=Path.cwd(),
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        ).freeze()
    except ConfigError as e:
        raise TopvarsConfigError(str(e)) from e

    data = load_defaults_dict()
    effective = config.to_toml_dict()
    data[Toml.SECTION_FILES] = effective[Toml.SECTION_FILES]
    for rule_id, section in effective[Toml.SECTION_RULES].items():
        data[Toml.SECTION_RULES].setdefault(rule_id, {}).update(section)

    for path in config.config_files:
        console.print(console.styled(f"# source: {path}", dim=True))
    console.print(to_toml(data), nl=False)
