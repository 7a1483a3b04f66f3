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

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Module:
    """
    One buildable unit of the reactor.

    Created by the host build (or the reactor loader) and never mutated here.
    """

    id: str
    output_dir: Path
    base_dir: Path
    source_roots: tuple[Path, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class BuildSession:
    """
    Explicit stand-in for the host build session.

    ``modules`` is the dependency-resolved ordering of every module taking
    part in the current build; ``current_module_id`` names the one executing.
    """

    root_dir: Path
    modules: tuple[Module, ...]
    current_module_id: str

    def current_module(self) -> Module | None:
        wanted = self.current_module_id.casefold()
        for m in self.modules:
            if m.id.casefold() == wanted:
                return m
        return None

    def module_ids(self) -> tuple[str, ...]:
        return tuple(m.id for m in self.modules)
