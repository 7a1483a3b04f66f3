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
from typing import Protocol

from diffcov.core.config import AggregatedConfig


class ReportEngine(Protocol):
    """
    Report engine plugin contract.

    The engine owns everything past aggregation: computing the diff against
    its source, reading execution data and rendering the enabled reports.
    It receives a fully assembled AggregatedConfig and must not mutate it.
    """

    @property
    def name(self) -> str:
        """
        Stable engine name used for selection, e.g. "manifest".
        """
        raise NotImplementedError()

    def save_diff_to_dir(self, config: AggregatedConfig, report_dir: Path) -> Path:
        """
        Persist a copy of the diff content into ``report_dir``.

        Returns:
            Path of the written file
        """
        raise NotImplementedError()

    def create(self, config: AggregatedConfig) -> None:
        """
        Generate every enabled report under ``config.reports.base_report_dir``.
        """
        raise NotImplementedError()
