# topmark:header:start
#
#   project      : TopVars
#   file         : rules.py
#   file_relpath : src/topvars/cli/commands/rules.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TopVars `rules` command.

Lists the registered rules with their type and description. With ``-v`` the
options of each rule and their allowed values are shown as well.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from topvars.cli.console import get_console_safely
from topvars.cli.options import output_format_option
from topvars.core.formats import OutputFormat
from topvars.rules.registry import RuleRegistry

if TYPE_CHECKING:
    from topvars.rules.base import RuleMeta


def rule_meta_to_dict(meta: RuleMeta) -> dict[str, Any]:
    """Return a JSON-friendly mapping of a rule's metadata."""
    return {
        "id": meta.rule_id,
        "type": meta.type.value,
        "description": meta.description,
        "messages": dict(meta.messages),
        "schema": meta.schema.to_json_schema(),
    }


@click.command(name="rules", help="List the available rules.")
@output_format_option
def rules_command(*, output_format: OutputFormat | None = None) -> None:
    """List registered rules."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console = get_console_safely()
    verbosity: int = int(ctx.obj.get("verbosity_level", 0))
    fmt: OutputFormat = output_format or OutputFormat.TEXT

    metas: list[RuleMeta] = list(RuleRegistry.iter_meta())

    if fmt is OutputFormat.JSON:
        console.print(json.dumps([rule_meta_to_dict(m) for m in metas], indent=2))
        return
    if fmt is OutputFormat.NDJSON:
        for meta in metas:
            console.print(json.dumps(rule_meta_to_dict(meta)))
        return

    width: int = max((len(m.rule_id) for m in metas), default=0)
    for meta in metas:
        rule_id = console.styled(meta.rule_id.ljust(width), bold=True)
        console.print(f"{rule_id}  [{meta.type.value}]  {meta.description}")
        if verbosity > 0:
            for key, prop in meta.schema.properties.items():
                default = f" (default: {', '.join(prop.default)})" if prop.default else ""
                console.print(f"    {key}: {', '.join(prop.enum)}{default}")
