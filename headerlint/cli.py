"""CLI entrypoints for headerlint commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .fixer import FixerError
from .formatters import FORMATTERS
from .identity import IdentityError
from .logging import configure_logging
from .runner import Runner

EXIT_PROBLEMS = 1
EXIT_SETUP = 2


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    def _default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    levels = parser.add_mutually_exclusive_group()
    levels.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=_default(False),
        help="Log rule dispatch and fixer passes for troubleshooting.",
    )
    levels.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=_default(False),
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=_default(None),
        help="Also write debug logs to this file.",
    )


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        help="Path to the source file to inspect.",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Project root holding composer.json and .headerlint.yml (defaults to current directory).",
    )
    parser.add_argument(
        "--repository",
        default=None,
        help="Repository identity as owner/name (overrides composer.json).",
    )
    parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        default="text",
        help="Output format for the report.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="headerlint",
        description="Check and fix the file-level DocBlock of source files.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Report file-level DocBlock problems without changing the file.",
    )
    _add_logging_options(check_parser, suppress_default=True)
    _add_project_options(check_parser)

    fix_parser = subparsers.add_parser(
        "fix",
        help="Apply automatic fixes and report what remains.",
    )
    _add_logging_options(fix_parser, suppress_default=True)
    _add_project_options(fix_parser)
    fix_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the fix as a diff without writing any file.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument(
        "--root",
        default=".",
        help="Project root holding composer.json and .headerlint.yml (defaults to current directory).",
    )
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for headerlint commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    if args.command == "serve":
        try:
            from .service import run_service
        except ModuleNotFoundError as exc:
            parser.exit(
                EXIT_SETUP,
                f"Service mode needs the optional dependencies ({exc.name}). "
                "Install them with `pip install headerlint[service]`.\n",
            )

        try:
            run_service(root=Path(args.root), host=args.host, port=args.port)
        except (ConfigError, IdentityError, RuntimeError) as exc:
            parser.exit(EXIT_SETUP, f"headerlint serve failed: {exc}\n")
        return

    try:
        runner = Runner(args.root, repository=args.repository)
    except (ConfigError, IdentityError) as exc:
        parser.exit(EXIT_SETUP, f"{exc}\n")

    formatter = FORMATTERS[args.format]
    try:
        if args.command == "check":
            report = runner.check(args.path)
        elif args.command == "fix":
            dry_run = bool(getattr(args, "dry_run", False))
            report = runner.fix(args.path, dry_run=dry_run)
            if dry_run and args.format == "text":
                sys.stdout.write(report.diff or "(no changes)\n")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(EXIT_SETUP, "Unknown command\n")
    except (OSError, UnicodeDecodeError) as exc:
        parser.exit(EXIT_SETUP, f"headerlint cannot read {args.path}: {exc}\n")
    except FixerError as exc:
        parser.exit(EXIT_PROBLEMS, f"headerlint fix failed: {exc}\n")

    sys.stdout.write(formatter([report]))
    if report.diagnostics:
        parser.exit(EXIT_PROBLEMS)


if __name__ == "__main__":
    main(sys.argv[1:])
