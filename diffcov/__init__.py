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

from diffcov._version import _detect_version

__version__ = _detect_version()
