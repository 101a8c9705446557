# topmark:header:start
#
#   project      : TopVars
#   file         : __init__.py
#   file_relpath : src/topvars/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for TopVars.

Submodules:
    - `topvars.config.model`: layered `MutableConfig` builder and frozen `Config`.
    - `topvars.config.loaders`: TOML I/O with `tomlkit`.
    - `topvars.config.logging`: project logger with a TRACE level.

Import from the submodules directly; this package does not re-export them so
that low-level modules (logging, guards) stay free of import cycles.
"""
