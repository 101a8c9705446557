# topmark:header:start
#
#   project      : TopVars
#   file         : __init__.py
#   file_relpath : src/topvars/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TopVars package.

TopVars is a linter for JavaScript and TypeScript sources that reports
module-level variable declarations, except for module imports, unique symbols,
aliases and an allow-list of cheap constant initializer shapes. It exposes a
CLI (``topvars check``) and a small typed API (`topvars.linter`).
"""

from __future__ import annotations
