"""CLI entrypoints for gowalker commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .config import ConfigError, load_config
from .errors import WalkError
from .logging import configure_logging, get_logger
from .models import Source, WalkDepth, WalkMode, WalkRequest, WalkType
from .walker import Walker

logger = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gowalker",
        description="Extract documentation from the sources of a Go package.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Build the documentation of one package directory and print it as JSON.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the package directory (defaults to current directory).",
    )
    build_parser.add_argument(
        "--import-path",
        required=True,
        help="Import path of the package, e.g. github.com/user/project.",
    )
    build_parser.add_argument("--tag", default="", help="Version tag being documented.")
    build_parser.add_argument(
        "--browse-url",
        default="",
        help="Base URL for source links; the file name is appended to it.",
    )
    build_parser.add_argument(
        "--all",
        dest="build_all",
        action="store_true",
        help="Include unexported declarations.",
    )
    build_parser.add_argument(
        "--imports-only",
        action="store_true",
        help="Stop after resolving imports.",
    )
    build_parser.add_argument("--no-readme", action="store_true", help="Skip readme files.")
    build_parser.add_argument("--no-examples", action="store_true", help="Skip example extraction.")
    build_parser.add_argument(
        "--config",
        default=None,
        help="Path to a .gowalker.yml file (defaults to the package directory).",
    )
    build_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file.",
    )

    return parser


def read_sources(directory: Path, browse_url: str = "", tag: str = "") -> List[Source]:
    """Read the top-level files of ``directory`` into in-memory sources."""
    sources: List[Source] = []
    for path in sorted(directory.iterdir()):
        if not path.is_file():
            continue
        url = f"{browse_url.rstrip('/')}/{path.name}" if browse_url else ""
        sources.append(Source(name=path.name, data=path.read_bytes(), browse_url=url, tag=tag))
    return sources


def _request_from_args(args: argparse.Namespace, directory: Path) -> WalkRequest:
    mode = WalkMode.ALL
    if args.no_readme:
        mode |= WalkMode.NO_README
    if args.no_examples:
        mode |= WalkMode.NO_EXAMPLE
    return WalkRequest(
        import_path=args.import_path,
        sources=read_sources(directory, args.browse_url, args.tag),
        depth=WalkDepth.IMPORTS if args.imports_only else WalkDepth.ALL,
        walk_type=WalkType.MEMORY,
        mode=mode,
        tag=args.tag,
        build_all=bool(args.build_all),
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for gowalker commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "build":
        directory = Path(args.path)
        if not directory.is_dir():
            parser.exit(1, f"{directory} is not a directory\n")
        try:
            config = load_config(Path(args.config) if args.config else directory)
            request = _request_from_args(args, directory)
            package = Walker(config).build(request)
        except (ConfigError, WalkError, OSError) as exc:
            parser.exit(1, f"gowalker build failed: {exc}\nRun with --verbose for more details.\n")
        logger.debug("Writing %s as JSON", package.import_path)
        json.dump(package.to_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":  # pragma: no cover
    main()
