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

import logging
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Final

from diffcov.core.errors import DiffCoverageError
from diffcov.plugins.interfaces import ReportEngine

ENTRYPOINT_GROUP: Final[str] = "diffcov.report_engines"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadedEngine:
    """
    Engine instance together with its provenance (useful for debugging).
    """

    engine: ReportEngine
    source: str  # e.g. "jacoco_diff.engine:JacocoReportEngine"


@dataclass(frozen=True, slots=True)
class PluginLoadError:
    """
    Represents a failure to load a plugin (kept non-fatal).
    """

    source: str
    error: str


class ReportEngineRegistry:
    """
    Discovers and stores report engine plugins.

    Typical lifecycle:
      reg = ReportEngineRegistry()
      reg.register_builtins()
      reg.load_entrypoints()
      engine = reg.get("manifest")
    """

    def __init__(self) -> None:
        self._loaded: list[LoadedEngine] = []
        self._load_errors: list[PluginLoadError] = []
        self._entrypoints_loaded: bool = False

    def register_builtins(self) -> None:
        from diffcov.engines.manifest import ManifestReportEngine

        self.register(ManifestReportEngine(), source="builtin")

    def load_entrypoints(self) -> None:
        """
        Discover engines registered under entrypoint group 'diffcov.report_engines'.

        Rules:
        - Plugin import errors are recorded, never raised.
        - Accept both a class (callable) and a ready engine instance.
        - Names already registered keep their first registration.
        - Calling it again after the first time does nothing.
        """
        if self._entrypoints_loaded:
            return

        for ep in entry_points(group=ENTRYPOINT_GROUP):
            source = f"{ep.module}:{ep.attr}"
            try:
                loaded_obj = ep.load()
                engine = loaded_obj() if callable(loaded_obj) else loaded_obj
                name = engine.name  # may throw if missing
            except Exception as e:
                logger.warning("Failed to load report engine %s: %r", source, e)
                self._load_errors.append(PluginLoadError(source=source, error=repr(e)))
                continue

            if self._find(name) is not None:
                logger.debug("Report engine '%s' from %s shadowed by earlier registration", name, source)
                continue
            self._loaded.append(LoadedEngine(engine=engine, source=source))

        self._entrypoints_loaded = True

    def register(self, engine: ReportEngine, *, source: str = "manual") -> None:
        """
        Manual registration (useful for unit tests or embedding).
        """
        self._loaded.append(LoadedEngine(engine=engine, source=source))

    def all(self) -> tuple[LoadedEngine, ...]:
        return tuple(self._loaded)

    def load_errors(self) -> tuple[PluginLoadError, ...]:
        return tuple(self._load_errors)

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(le.engine.name for le in self._loaded))

    def get(self, name: str) -> ReportEngine:
        found = self._find(name)
        if found is None:
            available = ", ".join(self.names()) or "none"
            raise DiffCoverageError(
                f"Unknown report engine '{name}' (available: {available})",
                code="engine_not_found",
                details={"name": name, "available": list(self.names())},
            )
        return found.engine

    def _find(self, name: str) -> LoadedEngine | None:
        for le in self._loaded:
            if le.engine.name == name:
                return le
        return None
