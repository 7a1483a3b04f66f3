import argparse
import sys

from diffcov._version import _detect_version
from diffcov.cli import aggregate, thresholds
from diffcov.cli._io import configure_logging
from diffcov.cli.exitcodes import EXIT_ENGINE_ERROR
from diffcov.core.errors import DiffCoverageError
from diffcov.reporting.summary import Verbosity


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="diffcov", description="Diffcov — multi-module diff-coverage aggregation")
    p.add_argument("--version", action="version", version=f"%(prog)s {_detect_version()}")

    sub = p.add_subparsers(dest="cmd", required=True)

    # aggregate
    agg = sub.add_parser("aggregate", help="Aggregate module artifacts and generate diff-coverage reports.")
    agg.add_argument("path", nargs="?", default=".", help="Top-level project directory (default: .)")
    agg.add_argument("--module", required=True, help="Id of the module currently finishing its build.")
    agg.add_argument("--reactor", default=None, help="Reactor description file (reactor.yaml).")
    agg.add_argument("--config", default=None, help="Configuration file (diffcov.yaml).")
    agg.add_argument("--engine", default="manifest", help="Report engine name (default: manifest).")
    agg.add_argument("--format", choices=["text", "json"], default="text", help="Output format.")
    verbosity = agg.add_mutually_exclusive_group()
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Minimal output (summary only).")
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Verbose output (include all paths).")

    # thresholds
    thr = sub.add_parser("thresholds", help="Validate and show the resolved violation thresholds.")
    thr.add_argument("path", nargs="?", default=".", help="Top-level project directory (default: .)")
    thr.add_argument("--config", default=None, help="Configuration file (diffcov.yaml).")
    thr.add_argument("--format", choices=["text", "json"], default="text", help="Output format.")

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    verbosity: Verbosity = "quiet" if getattr(args, "quiet", False) else ("verbose" if getattr(args, "verbose", False) else "normal")
    configure_logging(verbosity)

    try:
        if args.cmd == "aggregate":
            return aggregate.run(
                path=args.path,
                module=args.module,
                reactor=args.reactor,
                config=args.config,
                engine=args.engine,
                fmt=args.format,
                verbosity=verbosity,
            )

        if args.cmd == "thresholds":
            return thresholds.show(path=args.path, config=args.config, fmt=args.format)

        print("Unknown command.", file=sys.stderr)
        return EXIT_ENGINE_ERROR

    except DiffCoverageError as e:
        print(f"diffcov: error: [{e.code}] {e}", file=sys.stderr)
        return EXIT_ENGINE_ERROR
    except Exception as e:
        print(f"diffcov: error: {e}", file=sys.stderr)
        return EXIT_ENGINE_ERROR
