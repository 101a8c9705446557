# topmark:header:start
#
#   project      : TopVars
#   file         : exit_codes.py
#   file_relpath : src/topvars/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for TopVars CLI.

TopVars aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently. ``VIOLATIONS=1`` is the ordinary
"lint failed" result: at least one error-level diagnostic was reported.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for TopVars CLI.

    Attributes:
        SUCCESS: No error-level diagnostics and no read errors.
        VIOLATIONS: At least one error-level diagnostic was reported.
        USAGE_ERROR: Command-line invocation error (invalid flags/args, nothing to
            lint). Mirrors BSD ``EX_USAGE (64)``.
        ENCODING_ERROR: A file is not valid UTF-8. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: Other I/O error reading a file. Mirrors BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: A file cannot be read. Mirrors BSD ``EX_NOPERM (77)``.
        CONFIG_ERROR: Configuration error (malformed TOML, invalid rule options,
            unknown rule). Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    VIOLATIONS = 1

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
