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

import json
from pathlib import Path
from typing import Any

import yaml

from diffcov.core.errors import ConfigLoadError


def read_mapping(path: Path, *, what: str) -> dict[str, Any]:
    """
    Read a YAML or JSON file whose root must be a mapping.
    Unknown extensions are tried as JSON first, then YAML.
    """
    if not path.exists():
        raise ConfigLoadError(f"{what} file does not exist: {path}", code="file_not_found")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(f"Cannot read {what} file {path}: {e}", code="file_unreadable") from e

    data = _parse(path, raw)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"{what} root must be a mapping/object: {path}", code="invalid_root")
    return data


def _parse(path: Path, raw: str) -> Any:
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            return json.loads(raw)
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(raw)
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigLoadError(
            f"Failed to parse {path}: {e}",
            code="parse_error",
            details={"path": str(path)},
        ) from e
