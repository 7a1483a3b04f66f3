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

from diffcov.cli._io import config_file, ensure_repo_root
from diffcov.cli.exitcodes import EXIT_OK
from diffcov.config.loader import DefaultConfigLoader
from diffcov.reporting._json import dumps_pretty
from diffcov.reporting.summary import TextSummaryRenderer
from diffcov.thresholds.resolver import DefaultThresholdResolver


def show(*, path: str, config: str | None, fmt: str) -> int:
    """
    Validate the violations section and print the resolved thresholds.
    """
    repo_root = ensure_repo_root(path)
    cfg = DefaultConfigLoader().load(config_file(repo_root, config))

    thresholds = DefaultThresholdResolver().resolve_violations(cfg.violations)

    if fmt == "json":
        print(dumps_pretty(thresholds.to_dict()), end="")
    else:
        print(TextSummaryRenderer().render_thresholds(thresholds), end="")
    return EXIT_OK
