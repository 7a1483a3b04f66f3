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
from pathlib import Path

from diffcov.collect.filesets import DefaultFileSetCollector
from diffcov.core.config import (
    OUTPUT_SUBDIR,
    AggregatedConfig,
    DiffCoverageConfig,
    DiffSourceConfig,
    ReportsConfig,
    ResolvedDiffSource,
)
from diffcov.core.errors import FilesystemError
from diffcov.plugins.interfaces import ReportEngine
from diffcov.reactor.gate import is_last_module
from diffcov.reactor.types import BuildSession
from diffcov.thresholds.resolver import DefaultThresholdResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregationResult:
    config: AggregatedConfig
    diff_path: Path


class AggregationOrchestrator:
    """
    Wires the collectors and the threshold resolver, assembles the
    AggregatedConfig and hands it to a report engine.

    Either the configuration is assembled completely and the engine is
    invoked, or an error is raised and the engine is never touched.
    """

    def __init__(
        self,
        *,
        collector: DefaultFileSetCollector | None = None,
        threshold_resolver: DefaultThresholdResolver | None = None,
    ) -> None:
        self.collector = collector or DefaultFileSetCollector()
        self.threshold_resolver = threshold_resolver or DefaultThresholdResolver()

    def execute(
        self,
        session: BuildSession,
        config: DiffCoverageConfig,
        engine: ReportEngine,
    ) -> AggregationResult | None:
        """
        Full pipeline: gate, assemble, invoke. Returns None when the
        current module is not the last one of the reactor.
        """
        aggregated = self.run(session, config)
        if aggregated is None:
            return None
        diff_path = self.invoke(aggregated, engine)
        return AggregationResult(config=aggregated, diff_path=diff_path)

    def run(self, session: BuildSession, config: DiffCoverageConfig) -> AggregatedConfig | None:
        if not is_last_module(session.modules, session.current_module_id):
            logger.debug(
                "Module '%s' is not the last of the reactor; skipping aggregation",
                session.current_module_id,
            )
            return None
        return self.build(session, config)

    def build(self, session: BuildSession, config: DiffCoverageConfig) -> AggregatedConfig:
        """
        Assemble the AggregatedConfig without consulting the trigger gate.
        """
        root_dir = session.root_dir
        output_dir = root_dir / OUTPUT_SUBDIR
        _ensure_dir(output_dir)

        diff_source = resolve_diff_source(root_dir, config.diff_source)
        thresholds = self.threshold_resolver.resolve_violations(config.violations)

        modules = session.modules
        exec_files = self.collector.collect_exec_files(
            root_dir,
            self._data_file(session, config),
            config.exec_data.includes,
            config.exec_data.excludes,
        )
        class_files = self.collector.collect_class_files(modules, config.classes.includes, config.classes.excludes)
        source_dirs = self.collector.collect_source_dirs(modules)

        aggregated = AggregatedConfig(
            report_name=config.report_name,
            output_dir=output_dir,
            diff_source=diff_source,
            reports=ReportsConfig.from_formats(output_dir, config.reports),
            thresholds=thresholds,
            exec_files=exec_files,
            class_files=class_files,
            source_dirs=source_dirs,
        )
        _log_properties(root_dir, aggregated)
        return aggregated

    def invoke(self, aggregated: AggregatedConfig, engine: ReportEngine) -> Path:
        report_dir = aggregated.reports.base_report_dir
        _ensure_dir(report_dir)
        logger.info("Saving diff to %s", report_dir)

        diff_path = engine.save_diff_to_dir(aggregated, report_dir)
        logger.info("Diff content saved to '%s'", diff_path.absolute())

        engine.create(aggregated)
        logger.info("Reports generated by '%s' engine in %s", engine.name, report_dir)
        return diff_path

    @staticmethod
    def _data_file(session: BuildSession, config: DiffCoverageConfig) -> Path:
        data_file = config.exec_data.data_file
        if data_file.is_absolute():
            return data_file
        # relative paths follow the executing module's build directory
        current = session.current_module()
        base = current.base_dir if current is not None else session.root_dir
        return base / data_file


def resolve_diff_source(root_dir: Path, source: DiffSourceConfig) -> ResolvedDiffSource:
    """
    Pick the configured diff source: file (resolved against ``root_dir``),
    then URL, then git revision. Nothing configured yields an empty descriptor.
    """
    if source.file:
        return ResolvedDiffSource(file=str((root_dir / source.file).absolute()))
    if source.url:
        return ResolvedDiffSource(url=str(source.url))
    if source.git:
        return ResolvedDiffSource(git=source.git)
    return ResolvedDiffSource()


def _ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Failed to create directory '{path}': {e}", details={"path": str(path)}) from e


def _log_properties(root_dir: Path, aggregated: AggregatedConfig) -> None:
    logger.debug("Root dir: %s", root_dir)
    logger.debug("Classes dirs: %s", sorted(str(p) for p in aggregated.class_files))
    logger.debug("Sources: %s", sorted(str(p) for p in aggregated.source_dirs))
    logger.debug("Exec files: %s", sorted(str(p) for p in aggregated.exec_files))
