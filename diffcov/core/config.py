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
from typing import Any, Final

from diffcov.core.errors import ConfigLoadError, EmptyResultError
from diffcov.thresholds.types import ThresholdSet

ALL_FILES_PATTERN: Final[str] = "**"
MIN_COVERAGE_DEFAULT: Final[float] = 0.0
DEFAULT_DATA_FILE: Final[str] = "target/jacoco.exec"
OUTPUT_SUBDIR: Final[str] = "target/diffCoverage"
DEFAULT_REPORT_NAME: Final[str] = "diff-coverage"

# User-supplied configuration


@dataclass(frozen=True, slots=True)
class DiffSourceConfig:
    """
    Where the diff comes from. Exactly one of the three should be configured;
    when several are, ``file`` wins over ``url`` which wins over ``git``.
    """

    file: str | None = None
    url: str | None = None
    git: str | None = None

    def configured(self) -> tuple[str, ...]:
        return tuple(name for name in ("file", "url", "git") if getattr(self, name))


@dataclass(frozen=True, slots=True)
class ViolationsConfig:
    min_coverage: float = MIN_COVERAGE_DEFAULT
    min_lines: float = 0.0
    min_branches: float = 0.0
    min_instructions: float = 0.0
    fail_on_violation: bool = False


@dataclass(frozen=True, slots=True)
class FileSetConfig:
    """
    Include/exclude glob filters, relative to each walked base directory.

    An empty ``includes`` tuple is rejected: leaving includes out means
    "match everything", which is what the default expresses.
    """

    includes: tuple[str, ...] = (ALL_FILES_PATTERN,)
    excludes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.includes:
            raise ConfigLoadError(
                "'includes' must not be empty. Omit it to match all files.",
                code="empty_includes",
            )

    def is_match_all(self) -> bool:
        return ",".join(self.includes) == ALL_FILES_PATTERN and not self.excludes


@dataclass(frozen=True, slots=True)
class ExecDataConfig:
    """
    Coverage execution data location.

    Without ``includes`` the single ``data_file`` is used as-is; with
    ``includes`` the files are globbed under the top-level project directory.
    """

    data_file: Path = Path(DEFAULT_DATA_FILE)
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()

    def uses_globs(self) -> bool:
        return bool(self.includes)


@dataclass(frozen=True, slots=True)
class ReportFormats:
    html: bool = True
    csv: bool = True
    xml: bool = True


@dataclass(frozen=True, slots=True)
class DiffCoverageConfig:
    """
    Everything the user configures for one aggregation run.
    Assembled once at entry and never mutated.
    """

    diff_source: DiffSourceConfig
    exec_data: ExecDataConfig = field(default_factory=ExecDataConfig)
    classes: FileSetConfig = field(default_factory=FileSetConfig)
    violations: ViolationsConfig = field(default_factory=ViolationsConfig)
    reports: ReportFormats = field(default_factory=ReportFormats)
    report_name: str = DEFAULT_REPORT_NAME


# Aggregated configuration (handed to the report engine)


@dataclass(frozen=True, slots=True)
class ResolvedDiffSource:
    """Diff-source descriptor with exactly one field populated (or none)."""

    file: str = ""
    url: str = ""
    git: str = ""

    @property
    def kind(self) -> str | None:
        for name in ("file", "url", "git"):
            if getattr(self, name):
                return name
        return None

    def to_dict(self) -> dict[str, str]:
        return {"file": self.file, "url": self.url, "git": self.git}


@dataclass(frozen=True, slots=True)
class ReportTarget:
    enabled: bool
    destination: str


@dataclass(frozen=True, slots=True)
class ReportsConfig:
    base_report_dir: Path
    html: ReportTarget = ReportTarget(enabled=True, destination="html")
    csv: ReportTarget = ReportTarget(enabled=True, destination="diff-coverage.csv")
    xml: ReportTarget = ReportTarget(enabled=True, destination="diff-coverage.xml")

    @staticmethod
    def from_formats(base_report_dir: Path, formats: ReportFormats) -> "ReportsConfig":
        return ReportsConfig(
            base_report_dir=base_report_dir,
            html=ReportTarget(enabled=formats.html, destination="html"),
            csv=ReportTarget(enabled=formats.csv, destination="diff-coverage.csv"),
            xml=ReportTarget(enabled=formats.xml, destination="diff-coverage.xml"),
        )

    def enabled_targets(self) -> dict[str, Path]:
        targets = {"html": self.html, "csv": self.csv, "xml": self.xml}
        return {name: self.base_report_dir / t.destination for name, t in targets.items() if t.enabled}

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseReportDir": str(self.base_report_dir),
            "html": {"enabled": self.html.enabled, "destination": self.html.destination},
            "csv": {"enabled": self.csv.enabled, "destination": self.csv.destination},
            "xml": {"enabled": self.xml.enabled, "destination": self.xml.destination},
        }


def _sorted_paths(paths: frozenset[Path]) -> list[str]:
    return sorted(str(p) for p in paths)


@dataclass(frozen=True, slots=True)
class AggregatedConfig:
    """
    Final, immutable input of the report engine.

    Built once per build by the orchestrator, consumed once, then discarded.
    """

    report_name: str
    output_dir: Path
    diff_source: ResolvedDiffSource
    reports: ReportsConfig
    thresholds: ThresholdSet
    exec_files: frozenset[Path]
    class_files: frozenset[Path]
    source_dirs: frozenset[Path]

    def __post_init__(self) -> None:
        if not self.class_files:
            raise EmptyResultError("Classes collection passed to Diff-Coverage is empty")

    def to_dict(self) -> dict[str, Any]:
        return {
            "reportName": self.report_name,
            "outputDir": str(self.output_dir),
            "diffSource": self.diff_source.to_dict(),
            "reports": self.reports.to_dict(),
            "violations": self.thresholds.to_dict(),
            "execFiles": _sorted_paths(self.exec_files),
            "classFiles": _sorted_paths(self.class_files),
            "sourceFiles": _sorted_paths(self.source_dirs),
        }
