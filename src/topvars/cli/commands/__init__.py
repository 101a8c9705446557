# topmark:header:start
#
#   project      : TopVars
#   file         : __init__.py
#   file_relpath : src/topvars/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TopVars CLI commands (one module per command or command group)."""
