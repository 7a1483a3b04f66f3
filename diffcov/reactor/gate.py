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
from collections.abc import Sequence

from diffcov.reactor.types import Module

logger = logging.getLogger(__name__)


def is_last_module(ordered_modules: Sequence[Module], current_module_id: str) -> bool:
    """
    True iff ``current_module_id`` names the final module of the
    dependency-ordered reactor (case-insensitive).

    This is the single point deciding whether aggregation runs, so it fires
    exactly once per build no matter how many modules participate.
    Assumes modules finish strictly in order on one thread; a parallel
    reactor may evaluate it for several modules at once.
    """
    if not ordered_modules:
        logger.warning("Empty reactor ordering; treating module '%s' as not last", current_module_id)
        return False
    return ordered_modules[-1].id.casefold() == current_module_id.casefold()
