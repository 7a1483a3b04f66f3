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

from diffcov.cli._io import config_file, ensure_repo_root, reactor_file
from diffcov.cli.exitcodes import EXIT_OK
from diffcov.config.loader import DefaultConfigLoader
from diffcov.core.engine import AggregationOrchestrator
from diffcov.plugins.registry import ReportEngineRegistry
from diffcov.reactor.loader import DefaultReactorLoader
from diffcov.reporting._json import dumps_pretty
from diffcov.reporting.summary import TextSummaryRenderer, Verbosity


def run(
    *,
    path: str,
    module: str,
    reactor: str | None,
    config: str | None,
    engine: str,
    fmt: str,
    verbosity: Verbosity = "normal",
) -> int:
    """
    Run the aggregation step for the module currently finishing.

    Does nothing unless ``module`` is the last one of the reactor ordering;
    otherwise assembles the aggregated configuration and hands it to the
    selected report engine.
    """
    repo_root = ensure_repo_root(path)

    session = DefaultReactorLoader().load(reactor_file(repo_root, reactor), current_module_id=module)
    cfg = DefaultConfigLoader().load(config_file(repo_root, config))

    # Resolve the engine before any work so a typo fails fast
    registry = ReportEngineRegistry()
    registry.register_builtins()
    registry.load_entrypoints()
    report_engine = registry.get(engine)

    result = AggregationOrchestrator().execute(session, cfg, report_engine)
    if result is None:
        if verbosity != "quiet":
            print(f"Module '{module}' is not the last in the reactor; nothing to aggregate.")
        return EXIT_OK

    if fmt == "json":
        out = dumps_pretty(result.config.to_dict())
    else:
        out = TextSummaryRenderer(verbosity=verbosity).render(result.config)
    print(out, end="")

    return EXIT_OK
