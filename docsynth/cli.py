"""CLI entrypoints for docsynth commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import MODES, PROVIDERS, ConfigError, load_config
from .discovery import FileDiscoverer
from .errors import DocsynthError, EmptyCorpusError, StageFailedError
from .filters import PathFilter
from .logging import configure_logging
from .orchestrator import GenerationOptions, Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project directory (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsynth",
        description="Generate README files from a codebase using LLMs.",
    )
    _add_verbose_option(parser)
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    readme_parser = subparsers.add_parser("readme", help="Generate README.md for a project.")
    _add_verbose_option(readme_parser, suppress_default=True)
    _add_path_argument(readme_parser)
    readme_parser.add_argument(
        "-p",
        "--provider",
        choices=PROVIDERS,
        default=None,
        help="LLM provider to use (default: gemini, or llm.provider from .docsynth.yml).",
    )
    readme_parser.add_argument("-a", "--api-key", default=None, help="API key for the selected provider.")
    readme_parser.add_argument("--model", default=None, help="Override the provider's default model.")
    readme_parser.add_argument(
        "-s",
        "--streaming",
        action="store_true",
        help="Write README sections one by one as they are generated.",
    )
    readme_parser.add_argument(
        "--mode",
        choices=MODES,
        default=None,
        help="Generation mode; --streaming is shorthand for --mode incremental.",
    )
    readme_parser.add_argument("--prompt", default=None, help="Custom prompt that replaces the default style prefix.")
    readme_parser.add_argument(
        "--prompt-file",
        type=Path,
        default=None,
        help="File containing a custom prompt that replaces the default style prefix.",
    )
    readme_parser.add_argument(
        "--instructions",
        default=None,
        help="Additional instructions appended to the default or custom prompt.",
    )
    readme_parser.add_argument("--max-bytes", type=int, default=None, help="Maximum context size in bytes.")
    readme_parser.add_argument("-o", "--output", type=Path, default=None, help="Output file (default: <path>/README.md).")
    readme_parser.add_argument(
        "--section",
        dest="sections",
        action="append",
        default=[],
        help="Generate only this section in incremental mode (repeatable).",
    )
    readme_parser.add_argument("-f", "--force", action="store_true", help="Overwrite an existing output file.")

    files_parser = subparsers.add_parser("files", help="List the files that would be sent as context.")
    _add_verbose_option(files_parser, suppress_default=True)
    _add_path_argument(files_parser)
    files_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Additional gitignore-style pattern to exclude (repeatable).",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def _options_from_args(args: argparse.Namespace) -> GenerationOptions:
    mode = args.mode
    if mode is None and args.streaming:
        mode = "incremental"
    return GenerationOptions(
        provider=args.provider,
        api_key=args.api_key,
        model=args.model,
        mode=mode,
        prompt=args.prompt,
        prompt_file=args.prompt_file,
        instructions=args.instructions,
        max_bytes=args.max_bytes,
        output=args.output,
        sections=list(args.sections),
        force=bool(args.force),
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docsynth commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "readme":
        orchestrator = Orchestrator()
        try:
            outcome = orchestrator.run(args.path, _options_from_args(args))
        except FileExistsError as exc:
            parser.exit(1, f"{exc}\n")
        except EmptyCorpusError as exc:
            parser.exit(1, f"{exc}; nothing to document.\n")
        except StageFailedError as exc:
            parser.exit(
                1,
                f"docsynth readme failed during '{exc.stage}': {exc.cause}\n"
                "Sections generated before the failure were kept.\n",
            )
        except (ConfigError, DocsynthError, OSError) as exc:
            parser.exit(1, f"docsynth readme failed: {exc}\nRun with --verbose for more details.\n")
        print(f"README generated at {_relativize(outcome.path)}")
    elif args.command == "files":
        root = Path(args.path)
        try:
            exclude_paths = load_config(root).context.exclude_paths if root.is_dir() else []
        except ConfigError as exc:
            parser.exit(1, f"docsynth files failed: {exc}\n")
        discoverer = FileDiscoverer(PathFilter([*exclude_paths, *args.exclude]))
        try:
            result = discoverer.discover(root)
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        for record in result.records:
            print(f"{record.priority:>4}  {record.relative_path}")
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
