# SPDX-License-Identifier: AGPL-3.0-only
#
# Copyright (c) 2026 Diffcov Contributors
#
# This file is part of Diffcov.
#
# Diffcov is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 only.
#
# Diffcov is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.

"""
Collection of the per-module file sets fed to the report engine.

Glob patterns are matched against paths relative to the walked directory:
``**`` spans any number of directories, ``*`` and ``?`` stay inside one
path segment, and a pattern ending in ``/`` means everything below that
directory. A pattern list may also arrive as one comma-separated string.
Version-control and editor leftovers (DEFAULT_EXCLUDES) are never collected.
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Final

from wcmatch import glob

from diffcov.core.config import ALL_FILES_PATTERN
from diffcov.core.errors import EmptyResultError, FilesystemError
from diffcov.reactor.types import Module

logger = logging.getLogger(__name__)

GLOB_FLAGS: Final[int] = glob.GLOBSTAR | glob.DOTGLOB | glob.FORCEUNIX

DEFAULT_EXCLUDES: Final[tuple[str, ...]] = (
    # editors and OS
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/%*%",
    "**/._*",
    "**/.DS_Store",
    # version control
    "**/CVS/**",
    "**/.cvsignore",
    "**/RCS/**",
    "**/SCCS/**",
    "**/vssver.scc",
    "**/.svn/**",
    "**/.git/**",
    "**/.gitattributes",
    "**/.gitignore",
    "**/.gitmodules",
    "**/.hg/**",
    "**/.hgignore",
    "**/.hgsub",
    "**/.hgsubstate",
    "**/.hgtags",
    "**/.bzr/**",
    "**/.bzrignore",
)


def split_patterns(value: str | Sequence[str] | None) -> tuple[str, ...]:
    """
    Normalize a pattern list: accepts a comma-separated string or a sequence
    (whose items may themselves be comma-separated). Blank entries are dropped
    and a trailing ``/`` is expanded to ``/**``.
    """
    if value is None:
        return ()
    items: Iterable[str] = (value,) if isinstance(value, str) else value
    out: list[str] = []
    for item in items:
        for p in item.split(","):
            p = p.strip().replace("\\", "/")
            if not p:
                continue
            out.append(p + "**" if p.endswith("/") else p)
    return tuple(out)


def matches(rel_path: str, includes: Sequence[str], excludes: Sequence[str] = ()) -> bool:
    """
    True if ``rel_path`` (posix, relative) matches any include and no exclude.
    """
    if not glob.globmatch(rel_path, list(includes), flags=GLOB_FLAGS):
        return False
    return not glob.globmatch(rel_path, [*DEFAULT_EXCLUDES, *excludes], flags=GLOB_FLAGS)


def list_matching_files(base_dir: Path, includes: Sequence[str], excludes: Sequence[str] = ()) -> set[Path]:
    """
    Recursively list files under ``base_dir`` matching ``includes`` and not ``excludes``.
    """
    matched: set[Path] = set()
    try:
        for path in base_dir.rglob("*"):
            if not path.is_file():
                continue
            if matches(path.relative_to(base_dir).as_posix(), includes, excludes):
                matched.add(path)
    except OSError as e:
        raise FilesystemError(
            f"Failed to scan directory '{base_dir}': {e}",
            details={"path": str(base_dir)},
        ) from e
    return matched


class DefaultFileSetCollector:
    """
    Resolves class files, source directories and execution-data files
    across all reactor modules.
    """

    def collect_class_files(
        self,
        modules: Sequence[Module],
        includes: Sequence[str] | str = (ALL_FILES_PATTERN,),
        excludes: Sequence[str] | str = (),
    ) -> frozenset[Path]:
        include_patterns = split_patterns(includes) or (ALL_FILES_PATTERN,)
        exclude_patterns = split_patterns(excludes)
        include_pattern = ",".join(include_patterns)
        exclude_pattern = ",".join(exclude_patterns)

        if not exclude_pattern and include_pattern == ALL_FILES_PATTERN:
            # Whole output directories, no walk
            result = frozenset(m.output_dir for m in modules)
        else:
            result = self._collect_filtered_files(modules, include_patterns, exclude_patterns)

        if not result:
            raise EmptyResultError(
                "Classes collection passed to Diff-Coverage is empty",
                details={"includes": include_pattern, "excludes": exclude_pattern},
            )
        return result

    def collect_exec_files(
        self,
        root_dir: Path,
        data_file: Path,
        includes: Sequence[str] | str | None = None,
        excludes: Sequence[str] | str | None = None,
    ) -> frozenset[Path]:
        include_patterns = split_patterns(includes)
        if not include_patterns:
            # Existence is the report engine's concern
            return frozenset({data_file})

        if not root_dir.is_dir():
            raise FilesystemError(
                f"Execution data root is not a directory: {root_dir}",
                details={"path": str(root_dir)},
            )
        return frozenset(list_matching_files(root_dir, include_patterns, split_patterns(excludes)))

    def collect_source_dirs(self, modules: Sequence[Module]) -> frozenset[Path]:
        return frozenset(root for m in modules for root in m.source_roots)

    def _collect_filtered_files(
        self,
        modules: Sequence[Module],
        includes: Sequence[str],
        excludes: Sequence[str],
    ) -> frozenset[Path]:
        collected: set[Path] = set()
        for m in modules:
            if not m.output_dir.exists():
                logger.debug("Skipping module '%s': output directory %s does not exist", m.id, m.output_dir)
                continue
            collected |= list_matching_files(m.output_dir, includes, excludes)
        return frozenset(collected)
