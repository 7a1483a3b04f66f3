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

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ThresholdSet:
    """
    Resolved violation rules handed to the report engine.

    Every minimum is a fraction in [0.0, 1.0]; 0.0 means "not enforced".
    """

    min_lines: float = 0.0
    min_branches: float = 0.0
    min_instructions: float = 0.0
    fail_on_violation: bool = False

    def is_enforced(self) -> bool:
        return self.min_lines > 0.0 or self.min_branches > 0.0 or self.min_instructions > 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "minLines": self.min_lines,
            "minBranches": self.min_branches,
            "minInstructions": self.min_instructions,
            "failOnViolation": self.fail_on_violation,
        }
