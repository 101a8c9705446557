# topmark:header:start
#
#   project      : TopVars
#   file         : __init__.py
#   file_relpath : src/topvars/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click command-line interface for TopVars.

The entry point is `topvars.cli.main.cli`. Commands live in
`topvars.cli.commands`; user-facing output goes through
`topvars.cli.console.ClickConsole`, never through logging.
"""
