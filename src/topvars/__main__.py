# topmark:header:start
#
#   project      : TopVars
#   file         : __main__.py
#   file_relpath : src/topvars/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running TopVars via ``python -m topvars``.

Equivalent to running the ``topvars`` console script.

Examples:
    Lint the current directory::

        python -m topvars check .
"""

from __future__ import annotations

from topvars.cli.main import cli

if __name__ == "__main__":
    cli()
