"""Command line entry point.

Usage:
    polyconst check FILE [FILE ...]
    polyconst generate FILE -o OUT.py
    python -m polyconst ...

Both commands print one diagnostic line per error and exit with status 1
when any declaration fails; ``generate`` writes nothing in that case.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import Settings
from .errors import BuildError
from .generator import Generator
from .logging_config import setup_logging
from .parser import ParseError
from .reporter import format_error

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polyconst",
        description="Validate numeric constants and generate multi-representation Python types.",
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--log-level", help="Logging level (default: from settings)")
    parser.add_argument(
        "--pointer-width", type=int, choices=(32, 64), help="Width of isize/usize in bits"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Validate declaration files")
    check.add_argument("files", nargs="+", type=Path)

    gen = sub.add_parser("generate", help="Generate a Python module from a declaration file")
    gen.add_argument("file", type=Path)
    gen.add_argument("-o", "--output", type=Path, help="Output path (default: stdout)")

    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.pointer_width is not None:
        overrides["pointer_width"] = args.pointer_width
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.config is not None:
        return Settings.from_yaml(args.config, **overrides)
    return Settings(**overrides)


def _build(path: Path, settings: Settings) -> Generator | None:
    """Validate one file, printing diagnostics. None if it failed."""
    if not path.exists():
        print(f"{path}: error: file not found", file=sys.stderr)
        return None
    try:
        return Generator.from_file(path, settings)
    except ParseError as exc:
        print(f"{path}:{exc.line}:{exc.col}: error: {exc.msg}", file=sys.stderr)
    except BuildError as exc:
        for err in exc.errors:
            print(format_error(err, str(path)), file=sys.stderr)
        noun = "error" if len(exc.errors) == 1 else "errors"
        print(f"{path}: {len(exc.errors)} {noun}", file=sys.stderr)
    return None


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = _load_settings(args)
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    setup_logging(settings.log_level)
    logger.debug("settings: %s", settings.model_dump())

    if args.command == "check":
        failed = 0
        for path in args.files:
            generator = _build(path, settings)
            if generator is None:
                failed += 1
            else:
                print(f"{path}: {len(generator.constants)} constant(s) ok")
        return 1 if failed else 0

    generator = _build(args.file, settings)
    if generator is None:
        return 1
    if args.output is None:
        sys.stdout.write(generator.render())
    else:
        generator.write(args.output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
