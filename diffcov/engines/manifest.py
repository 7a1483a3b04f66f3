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
Built-in report engine that records the aggregated configuration.

Layout written into the report directory:
  <report_dir>/
  ├── diff-coverage-config.json   # Deterministic dump of AggregatedConfig
  └── diff.patch | diff-source.txt

It computes no coverage; it lets the aggregation pipeline run end-to-end and
leaves an inspectable record of exactly what a real engine would receive.
"""

import hashlib
import shutil
from pathlib import Path
from typing import Final

from diffcov.core.config import AggregatedConfig
from diffcov.core.errors import FilesystemError
from diffcov.reporting._json import dumps_deterministic, dumps_pretty

MANIFEST_FILE: Final[str] = "diff-coverage-config.json"
DIFF_COPY_FILE: Final[str] = "diff.patch"
DIFF_SOURCE_FILE: Final[str] = "diff-source.txt"


class ManifestReportEngine:
    name = "manifest"

    def save_diff_to_dir(self, config: AggregatedConfig, report_dir: Path) -> Path:
        source = config.diff_source
        try:
            report_dir.mkdir(parents=True, exist_ok=True)
            if source.file:
                target = report_dir / DIFF_COPY_FILE
                shutil.copyfile(source.file, target)
                return target

            target = report_dir / DIFF_SOURCE_FILE
            descriptor = f"url: {source.url}" if source.url else f"git: {source.git}"
            target.write_text(descriptor + "\n", encoding="utf-8")
            return target
        except OSError as e:
            raise FilesystemError(
                f"Failed to save diff into '{report_dir}': {e}",
                details={"path": str(report_dir)},
            ) from e

    def create(self, config: AggregatedConfig) -> None:
        data = config.to_dict()
        data["_hash"] = hashlib.sha256(dumps_deterministic(config.to_dict()).encode("utf-8")).hexdigest()
        data["enabledReports"] = {k: str(v) for k, v in config.reports.enabled_targets().items()}

        path = config.reports.base_report_dir / MANIFEST_FILE
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dumps_pretty(data), encoding="utf-8")
        except OSError as e:
            raise FilesystemError(f"Failed to write manifest '{path}': {e}", details={"path": str(path)}) from e
