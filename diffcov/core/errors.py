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
from typing import Any, ClassVar


class DiffCoverageError(Exception):
    """
    Base class for all aggregation errors.

    Every subclass is fatal for the current build step: nothing is retried,
    and the report engine is never invoked once one of these is raised.
    """

    default_code: ClassVar[str] = "diffcov_error"

    code: str
    message: str
    details: Mapping[str, Any] | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationConflictError(DiffCoverageError):
    """Raised when the aggregate threshold and per-metric thresholds are both set."""

    default_code = "configuration_conflict"


class EmptyResultError(DiffCoverageError):
    """Raised when a mandatory file collection turns out empty."""

    default_code = "empty_result"


class FilesystemError(DiffCoverageError):
    """Raised when directory creation or a directory walk fails."""

    default_code = "filesystem_error"


class ConfigLoadError(DiffCoverageError):
    """Raised when a configuration or reactor file cannot be read or is malformed."""

    default_code = "config_load_error"


class InvalidThresholdError(DiffCoverageError):
    """Raised when a coverage threshold is not a fraction in [0.0, 1.0]."""

    default_code = "invalid_threshold"
