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

from pathlib import Path
from typing import Any

from diffcov.config._files import read_mapping
from diffcov.core.errors import ConfigLoadError
from diffcov.reactor.types import BuildSession, Module

REACTOR_FILE_NAMES = ("reactor.yaml", "reactor.yml", "reactor.json")

DEFAULT_OUTPUT_DIR = "target/classes"
DEFAULT_SOURCE_ROOT = "src/main/java"


class DefaultReactorLoader:
    """
    Loads the dependency-ordered module list exported by the host build.

    Example reactor.yaml:

        root: .
        modules:
          - id: core
            baseDir: core
          - id: app
            baseDir: app
            outputDir: build/classes
            sourceRoots: [src/main/java, src/generated/java]

    The order of ``modules`` is the reactor order; the last entry triggers
    aggregation. Relative ``root`` resolves against the file's directory,
    ``baseDir`` against ``root``, and module paths against ``baseDir``.
    """

    def load(self, path: Path, current_module_id: str) -> BuildSession:
        if not isinstance(path, Path):
            path = Path(path)

        data = read_mapping(path, what="Reactor")
        root_dir = self._resolve(path.parent.resolve(), data.get("root", "."), "root")
        modules = self._parse_modules(root_dir, data.get("modules"))

        return BuildSession(root_dir=root_dir, modules=modules, current_module_id=current_module_id)

    def _parse_modules(self, root_dir: Path, raw: Any) -> tuple[Module, ...]:
        if not isinstance(raw, list) or not raw:
            raise ConfigLoadError("'modules' must be a non-empty list.", code="invalid_modules")

        seen: set[str] = set()
        out: list[Module] = []
        for idx, spec in enumerate(raw):
            if not isinstance(spec, dict):
                raise ConfigLoadError(f"modules[{idx}] must be an object.", code="invalid_module")

            module_id = spec.get("id")
            if not isinstance(module_id, str) or not module_id.strip():
                raise ConfigLoadError(f"modules[{idx}].id must be a non-empty string.", code="invalid_module")
            module_id = module_id.strip()

            key = module_id.casefold()
            if key in seen:
                raise ConfigLoadError(
                    f"Duplicate module id '{module_id}'.",
                    code="duplicate_module",
                    details={"id": module_id},
                )
            seen.add(key)

            base_dir = self._resolve(root_dir, spec.get("baseDir", module_id), f"modules[{idx}].baseDir")
            output_dir = self._resolve(base_dir, spec.get("outputDir", DEFAULT_OUTPUT_DIR), f"{module_id}.outputDir")

            raw_roots = spec.get("sourceRoots", [DEFAULT_SOURCE_ROOT])
            if isinstance(raw_roots, str):
                raw_roots = [raw_roots]
            if not isinstance(raw_roots, list):
                raise ConfigLoadError(f"'{module_id}.sourceRoots' must be a list.", code="invalid_module")
            source_roots = tuple(self._resolve(base_dir, r, f"{module_id}.sourceRoots") for r in raw_roots)

            out.append(Module(id=module_id, output_dir=output_dir, base_dir=base_dir, source_roots=source_roots))

        return tuple(out)

    @staticmethod
    def _resolve(base: Path, value: Any, key: str) -> Path:
        if not isinstance(value, str) or not value.strip():
            raise ConfigLoadError(f"'{key}' must be a non-empty string path.", code="invalid_path")
        p = Path(value.strip())
        return p if p.is_absolute() else base / p


def find_reactor_file(repo_root: Path) -> Path | None:
    for name in REACTOR_FILE_NAMES:
        candidate = repo_root / name
        if candidate.exists():
            return candidate
    return None
