# topmark:header:start
#
#   project      : TopVars
#   file         : __init__.py
#   file_relpath : src/topvars/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, frontend-agnostic building blocks shared across TopVars (errors, formats)."""

from __future__ import annotations
