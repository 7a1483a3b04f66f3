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

from diffcov.core.config import MIN_COVERAGE_DEFAULT, ViolationsConfig
from diffcov.core.errors import ConfigurationConflictError, InvalidThresholdError
from diffcov.thresholds.types import ThresholdSet


class DefaultThresholdResolver:
    """
    Reconciles the aggregate ``minCoverage`` with the per-metric minimums.

    The two styles are mutually exclusive: configuring ``minCoverage`` together
    with any of ``minLines`` / ``minBranches`` / ``minInstructions`` is rejected
    up-front instead of silently preferring one of them.
    """

    def resolve(
        self,
        min_coverage: float,
        *,
        min_lines: float = 0.0,
        min_branches: float = 0.0,
        min_instructions: float = 0.0,
        fail_on_violation: bool = False,
    ) -> ThresholdSet:
        self._check_range(
            minCoverage=min_coverage,
            minLines=min_lines,
            minBranches=min_branches,
            minInstructions=min_instructions,
        )

        is_min_coverage_set = min_coverage != MIN_COVERAGE_DEFAULT
        configured = self._configured_metrics(min_lines, min_branches, min_instructions)

        if is_min_coverage_set and configured:
            conflicting = "\n".join(f"violations.{name} = {value}" for name, value in configured)
            raise ConfigurationConflictError(
                "Simultaneous configuration of 'minCoverage' and any of "
                "[minLines, minBranches, minInstructions] is not allowed.\n"
                f"violations.minCoverage = {min_coverage}\n"
                f"{conflicting}",
                details={"minCoverage": min_coverage, **dict(configured)},
            )

        if is_min_coverage_set:
            return ThresholdSet(
                min_lines=min_coverage,
                min_branches=min_coverage,
                min_instructions=min_coverage,
                fail_on_violation=fail_on_violation,
            )

        return ThresholdSet(
            min_lines=min_lines,
            min_branches=min_branches,
            min_instructions=min_instructions,
            fail_on_violation=fail_on_violation,
        )

    def resolve_violations(self, violations: ViolationsConfig) -> ThresholdSet:
        return self.resolve(
            violations.min_coverage,
            min_lines=violations.min_lines,
            min_branches=violations.min_branches,
            min_instructions=violations.min_instructions,
            fail_on_violation=violations.fail_on_violation,
        )

    @staticmethod
    def _check_range(**values: float) -> None:
        for name, value in values.items():
            # NaN fails both comparisons
            if not 0.0 <= value <= 1.0:
                raise InvalidThresholdError(
                    f"'violations.{name}' must be within [0.0, 1.0], got {value}.",
                    details={"key": name, "value": value},
                )

    @staticmethod
    def _configured_metrics(
        min_lines: float,
        min_branches: float,
        min_instructions: float,
    ) -> tuple[tuple[str, float], ...]:
        # order is part of the error message contract
        candidates = (
            ("minLines", min_lines),
            ("minBranches", min_branches),
            ("minInstructions", min_instructions),
        )
        return tuple((name, value) for name, value in candidates if value > 0.0)
