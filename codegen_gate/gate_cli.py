"""Command-line entry point for the code generation build gate."""

import argparse
import logging
import sys
from collections.abc import Sequence

from codegen_gate.errors import GateError
from codegen_gate.run_gate import (
    run_check,
    run_fingerprint,
    run_normalize_sql,
    run_resolve,
)

logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = {
    "minimal": logging.WARNING,
    "normal": logging.INFO,
    "detailed": logging.DEBUG,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    ap = argparse.ArgumentParser(
        prog="codegen-gate",
        description=(
            "Resolve code generation inputs and decide, by fingerprint, whether "
            "generation can be skipped."
        ),
    )
    ap.add_argument("--config", help="Path to a YAML gate settings file")
    ap.add_argument(
        "--verbosity",
        choices=sorted(VERBOSITY_LEVELS),
        default="minimal",
        help="Logging detail (default: minimal)",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    resolve = sub.add_parser("resolve", help="Resolve inputs and print them as JSON")
    _add_resolve_args(resolve)
    resolve.set_defaults(func=run_resolve)

    fingerprint = sub.add_parser(
        "fingerprint", help="Fingerprint already-resolved inputs"
    )
    fingerprint.add_argument("--project-dir", default=".", help="Project directory")
    fingerprint.add_argument("--config-file", help="Generator configuration JSON")
    fingerprint.add_argument("--renaming-file", help="Renaming rules JSON")
    fingerprint.add_argument("--template-dir", help="Template directory")
    _add_fingerprint_args(fingerprint)
    fingerprint.add_argument(
        "--connection-string-mode",
        action="store_true",
        help="Use --schema-fingerprint instead of a schema artifact",
    )
    fingerprint.set_defaults(func=run_fingerprint)

    check = sub.add_parser("check", help="Resolve inputs, then fingerprint them")
    _add_resolve_args(check)
    _add_fingerprint_args(check)
    check.set_defaults(func=run_check)

    normalize = sub.add_parser("normalize-sql", help="Print normalized SQL text")
    normalize.add_argument("sql_file", help="SQL file to normalize")
    normalize.set_defaults(func=run_normalize_sql)

    return ap


def _add_resolve_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--project-dir", default=".", help="Project directory")
    ap.add_argument("--solution-dir", help="Solution directory to probe")
    ap.add_argument(
        "--no-probe-solution-dir",
        action="store_true",
        help="Skip the solution directory tier",
    )
    ap.add_argument("--defaults-root", help="Packaged defaults directory")
    ap.add_argument("--sql-project", help="Explicit SQL project path")
    ap.add_argument(
        "--reference",
        action="append",
        help="Project reference (repeatable); one .sqlproj is expected",
    )
    ap.add_argument("--config-override", help="Generator configuration override")
    ap.add_argument("--renaming-override", help="Renaming rules override")
    ap.add_argument("--template-override", help="Template directory override")
    ap.add_argument("--connection-string", help="Explicit connection string")
    ap.add_argument("--app-settings", help="Explicit appsettings JSON file")
    ap.add_argument("--app-config", help="Explicit app.config/web.config file")
    ap.add_argument("--connection-string-name", help="Connection string name")
    ap.add_argument("--dump-dir", help="Write resolved-inputs.json here")


def _add_fingerprint_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--schema-artifact", help="Zip-packaged schema artifact")
    ap.add_argument(
        "--schema-fingerprint", help="Schema fingerprint supplied by extraction"
    )
    ap.add_argument("--cache-file", help="Fingerprint cache file")
    ap.add_argument(
        "--fail-if-changed",
        action="store_true",
        help="Exit with status 3 when the fingerprint changed",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, configure logging and run the chosen subcommand."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=VERBOSITY_LEVELS[args.verbosity],
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return args.func(args)
    except GateError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
