# topmark:header:start
#
#   project      : TopVars
#   file         : constants.py
#   file_relpath : src/topvars/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TopVars Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    TOPVARS_VERSION: str = get_version("topvars")
except PackageNotFoundError:
    TOPVARS_VERSION = "0.0.0+unknown"

CONFIG_FILE_NAME: str = "topvars.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
