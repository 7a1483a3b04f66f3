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

from typing import Literal

from diffcov.core.config import AggregatedConfig
from diffcov.thresholds.types import ThresholdSet

Verbosity = Literal["quiet", "normal", "verbose"]


def _fmt_threshold(value: float) -> str:
    return "-" if value <= 0.0 else f"{value:.0%}"


class TextSummaryRenderer:
    """
    Human-readable CLI output. Pure rendering: does not sort or mutate.

    Verbosity levels:
    - quiet: one-line summary only
    - normal: summary + thresholds + enabled reports
    - verbose: everything, including every collected path
    """

    def __init__(self, verbosity: Verbosity = "normal"):
        self.verbosity = verbosity

    def render(self, config: AggregatedConfig) -> str:
        head = (
            f"Aggregated {len(config.class_files)} class entries, "
            f"{len(config.source_dirs)} source dirs, {len(config.exec_files)} exec files\n"
        )
        if self.verbosity == "quiet":
            return head

        lines = [head.rstrip("\n")]
        lines.append(f"Output: {config.output_dir}")
        kind = config.diff_source.kind
        if kind is not None:
            lines.append(f"Diff source ({kind}): {getattr(config.diff_source, kind)}")
        lines.append(self.render_thresholds(config.thresholds).rstrip("\n"))

        targets = config.reports.enabled_targets()
        if targets:
            lines.append("Reports:")
            lines.extend(f"  {name}: {path}" for name, path in sorted(targets.items()))

        if self.verbosity == "verbose":
            for title, paths in (
                ("Class files", config.class_files),
                ("Source dirs", config.source_dirs),
                ("Exec files", config.exec_files),
            ):
                lines.append(f"{title}:")
                lines.extend(f"  {p}" for p in sorted(str(p) for p in paths))

        return "\n".join(lines) + "\n"

    def render_thresholds(self, thresholds: ThresholdSet) -> str:
        mode = "fail" if thresholds.fail_on_violation else "warn"
        return (
            f"Thresholds: lines {_fmt_threshold(thresholds.min_lines)}, "
            f"branches {_fmt_threshold(thresholds.min_branches)}, "
            f"instructions {_fmt_threshold(thresholds.min_instructions)} "
            f"(on violation: {mode})\n"
        )
