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
import sys
from pathlib import Path

from diffcov.config.loader import CONFIG_FILE_NAMES, find_config_file
from diffcov.core.errors import ConfigLoadError
from diffcov.reactor.loader import REACTOR_FILE_NAMES, find_reactor_file

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def ensure_repo_root(path: str) -> Path:
    p = Path(path).resolve()
    if not p.exists():
        raise FileNotFoundError(f"Path does not exist: {p}")
    return p


def _pick(repo_root: Path, explicit: str | None, found: Path | None, names: tuple[str, ...], what: str) -> Path:
    if explicit is not None:
        p = Path(explicit)
        return p if p.is_absolute() else repo_root / p
    if found is None:
        raise ConfigLoadError(f"No {what} file found in {repo_root} (looked for: {', '.join(names)})")
    return found


def config_file(repo_root: Path, explicit: str | None) -> Path:
    return _pick(repo_root, explicit, find_config_file(repo_root), CONFIG_FILE_NAMES, "configuration")


def reactor_file(repo_root: Path, explicit: str | None) -> Path:
    return _pick(repo_root, explicit, find_reactor_file(repo_root), REACTOR_FILE_NAMES, "reactor")


def configure_logging(verbosity: str) -> None:
    level = {"quiet": logging.WARNING, "verbose": logging.DEBUG}.get(verbosity, logging.INFO)

    logger = logging.getLogger("diffcov")
    logger.setLevel(level)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
