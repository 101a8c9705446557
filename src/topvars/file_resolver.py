# topmark:header:start
#
#   project      : TopVars
#   file         : file_resolver.py
#   file_relpath : src/topvars/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve input files for TopVars based on paths and include/exclude patterns.

Positional arguments are expanded (files, directories recursively, and globs
relative to the current working directory), filtered by the configured
gitignore-style patterns and by the suffixes TopVars can parse. The result is a
deterministic, sorted list of files to lint.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from topvars.config.logging import get_logger
from topvars.syntax.parser import supported_suffixes

if TYPE_CHECKING:
    from topvars.config.logging import TopvarsLogger
    from topvars.config.model import Config


logger: TopvarsLogger = get_logger(__name__)

# Directory names never descended into when expanding a directory argument.
SKIPPED_DIR_NAMES: Final[frozenset[str]] = frozenset({".git", ".hg", ".svn", "node_modules"})


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def _is_skipped(path: Path, root: Path) -> bool:
    try:
        parts: tuple[str, ...] = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    return any(part in SKIPPED_DIR_NAMES for part in parts[:-1])


def expand_path(p: Path) -> list[Path]:
    """Expand a positional argument into candidate files.

    Globs are expanded relative to the current working directory, directories
    recursively (skipping VCS and ``node_modules`` directories). A literal path
    that does not exist is returned as-is so the linter can report it.
    """
    if any(ch in str(p) for ch in "*?["):
        return sorted(x for x in Path(".").glob(str(p)) if x.is_file())
    if p.is_dir():
        return sorted(x for x in p.rglob("*") if x.is_file() and not _is_skipped(x, p))
    return [p]


def resolve_file_list(
    paths: Iterable[str | Path],
    config: Config,
    *,
    workspace_root: Path | None = None,
) -> list[Path]:
    """Return the list of input files to lint.

    Semantics:
      1. **Candidate set**: expand ``paths`` (files, directories, globs). With no
         paths, the current directory is used.
      2. **Include intersection**: if include patterns are configured, keep only
         files matching any of them.
      3. **Exclude subtraction**: drop files matching any exclude pattern.
      4. **Language filter**: files found by expansion are kept only if their
         suffix is supported; explicitly named files are always kept (the linter
         reports unsupported or missing ones).
      5. Return a **sorted**, de-duplicated list.

    Args:
        paths (Iterable[str | Path]): Positional arguments.
        config (Config): Configuration holding include/exclude patterns.
        workspace_root (Path | None): Base for pattern matching (CWD if None).

    Returns:
        list[Path]: Sorted list of files selected for linting.
    """
    root: Path = workspace_root if workspace_root is not None else Path.cwd()
    input_paths: list[Path] = [Path(p) for p in paths] or [Path(".")]
    suffixes: frozenset[str] = frozenset(supported_suffixes())

    explicit: set[Path] = set()
    candidates: set[Path] = set()
    for p in input_paths:
        expanded: list[Path] = expand_path(p)
        if expanded == [p]:
            if not p.exists():
                logger.warning("No such file or directory: %s", p)
            explicit.add(p)
            candidates.add(p)
            continue
        if not expanded:
            logger.warning("No matches for: %s", p)
        candidates.update(x for x in expanded if x.suffix.lower() in suffixes)

    if config.include_patterns:
        include_spec: PathSpec = PathSpec.from_lines(
            GitWildMatchPattern, list(config.include_patterns)
        )
        candidates = {
            p
            for p in candidates
            if p in explicit or include_spec.match_file(_rel_for_match(p, root))
        }

    if config.exclude_patterns:
        exclude_spec: PathSpec = PathSpec.from_lines(
            GitWildMatchPattern, list(config.exclude_patterns)
        )
        candidates = {
            p for p in candidates if not exclude_spec.match_file(_rel_for_match(p, root))
        }

    files: list[Path] = sorted(candidates)
    logger.trace("Files to process: %d -- %s", len(files), files)
    return files
