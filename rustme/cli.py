"""CLI entrypoints for rustme commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import load_config
from .errors import NoConfigurationError, RustmeError
from .logging import configure_logging
from .orchestrator import Orchestrator


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


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to search for configurations, or a configuration file (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rustme",
        description="Generate README-like files from sections, snippets and glossaries.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate every configured file.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_path_argument(generate_parser)
    generate_parser.add_argument(
        "--release",
        action="store_true",
        help="Render glossary terms with their release values.",
    )

    release_parser = subparsers.add_parser(
        "release",
        help="Generate every configured file in release mode.",
    )
    _add_verbose_option(release_parser, suppress_default=True)
    _add_path_argument(release_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for rustme commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    release = args.command == "release" or bool(getattr(args, "release", False))
    target = Path(args.path)
    orchestrator = Orchestrator()

    try:
        written = _run(orchestrator, target, release=release)
    except NoConfigurationError as exc:
        parser.exit(1, f"{exc}\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except RustmeError as exc:
        parser.exit(1, f"rustme {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    for path in written:
        print(f"Generated {_relativize(path)}")


def _run(orchestrator: Orchestrator, target: Path, *, release: bool) -> List[Path]:
    if target.is_file():
        return orchestrator.generate(load_config(target), release=release)
    return orchestrator.generate_in_directory(target, release=release)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
