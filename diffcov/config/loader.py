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

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from diffcov.collect.filesets import split_patterns
from diffcov.config._files import read_mapping
from diffcov.core.config import (
    DEFAULT_DATA_FILE,
    DEFAULT_REPORT_NAME,
    DiffCoverageConfig,
    DiffSourceConfig,
    ExecDataConfig,
    FileSetConfig,
    ReportFormats,
    ViolationsConfig,
)
from diffcov.core.errors import ConfigLoadError

CONFIG_FILE_NAMES = ("diffcov.yaml", "diffcov.yml", "diffcov.json")


class DefaultConfigLoader:
    """
    Loads a DiffCoverageConfig from diffcov.yaml / diffcov.yml / diffcov.json

    Keys mirror the build-plugin parameter names (camelCase).
    """

    def load(self, path: Path) -> DiffCoverageConfig:
        if not isinstance(path, Path):
            path = Path(path)
        return self.from_mapping(read_mapping(path, what="Configuration"))

    def from_mapping(self, data: Mapping[str, Any]) -> DiffCoverageConfig:
        return DiffCoverageConfig(
            diff_source=self._parse_diff_source(data.get("diffSource")),
            exec_data=self._parse_exec_data(data),
            classes=self._parse_classes(data),
            violations=self._parse_violations(data.get("violations")),
            reports=self._parse_reports(data.get("reports")),
            report_name=_str(data.get("reportName"), "reportName") or DEFAULT_REPORT_NAME,
        )

    def _parse_diff_source(self, raw: Any) -> DiffSourceConfig:
        if not isinstance(raw, dict):
            raise ConfigLoadError(
                "'diffSource' is required and must be an object with one of: file, url, git.",
                code="missing_diff_source",
            )
        source = DiffSourceConfig(
            file=_str(raw.get("file"), "diffSource.file"),
            url=_str(raw.get("url"), "diffSource.url"),
            git=_str(raw.get("git"), "diffSource.git"),
        )
        configured = source.configured()
        if len(configured) != 1:
            raise ConfigLoadError(
                f"'diffSource' must configure exactly one of [file, url, git], got: {list(configured)}",
                code="invalid_diff_source",
                details={"configured": list(configured)},
            )
        return source

    def _parse_exec_data(self, data: Mapping[str, Any]) -> ExecDataConfig:
        data_file = _str(data.get("dataFile"), "dataFile") or DEFAULT_DATA_FILE
        return ExecDataConfig(
            data_file=Path(data_file),
            includes=_patterns(data.get("dataFileIncludes"), "dataFileIncludes"),
            excludes=_patterns(data.get("dataFileExcludes"), "dataFileExcludes"),
        )

    def _parse_classes(self, data: Mapping[str, Any]) -> FileSetConfig:
        excludes = _patterns(data.get("excludes"), "excludes")
        if data.get("includes") is None:
            return FileSetConfig(excludes=excludes)
        return FileSetConfig(includes=_patterns(data["includes"], "includes"), excludes=excludes)

    def _parse_violations(self, raw: Any) -> ViolationsConfig:
        if raw is None:
            return ViolationsConfig()
        if not isinstance(raw, dict):
            raise ConfigLoadError("'violations' must be a mapping/object.", code="invalid_violations")

        fail = raw.get("failOnViolation", False)
        if not isinstance(fail, bool):
            raise ConfigLoadError("'violations.failOnViolation' must be a boolean.", code="invalid_violations")

        return ViolationsConfig(
            min_coverage=_fraction(raw, "minCoverage"),
            min_lines=_fraction(raw, "minLines"),
            min_branches=_fraction(raw, "minBranches"),
            min_instructions=_fraction(raw, "minInstructions"),
            fail_on_violation=fail,
        )

    def _parse_reports(self, raw: Any) -> ReportFormats:
        if raw is None:
            return ReportFormats()
        if not isinstance(raw, dict):
            raise ConfigLoadError("'reports' must be a mapping/object.", code="invalid_reports")

        flags: dict[str, bool] = {}
        for name in ("html", "csv", "xml"):
            value = raw.get(name, True)
            if not isinstance(value, bool):
                raise ConfigLoadError(f"'reports.{name}' must be a boolean.", code="invalid_reports")
            flags[name] = value
        return ReportFormats(**flags)


def find_config_file(repo_root: Path) -> Path | None:
    for name in CONFIG_FILE_NAMES:
        candidate = repo_root / name
        if candidate.exists():
            return candidate
    return None


def _str(value: Any, key: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigLoadError(f"'{key}' must be a string.", code="invalid_value", details={"key": key})
    return value.strip() or None


def _patterns(value: Any, key: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return split_patterns(value)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return split_patterns(value)
    raise ConfigLoadError(
        f"'{key}' must be a string or a list of strings.",
        code="invalid_patterns",
        details={"key": key},
    )


def _fraction(raw: Mapping[str, Any], key: str) -> float:
    value = raw.get(key, 0.0)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigLoadError(f"'violations.{key}' must be a number.", code="invalid_threshold")
    if not 0.0 <= value <= 1.0:
        raise ConfigLoadError(
            f"'violations.{key}' must be within [0.0, 1.0], got {value}.",
            code="invalid_threshold",
            details={"key": key, "value": value},
        )
    return float(value)
