import argparse
from pathlib import Path
from typing import List, Optional

from .core.fields import SEARCHABLE_FIELDS
from .core.models import MODE_CONTAINS, SEARCH_MODES, SearchConfig
from .core.reporting import ConsoleReporter
from .core.scanner import DirectoryScanner, SingleFileScanner, configure_logging


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _add_search_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("-s", "--search", dest="term", required=True, help="String to search for (case-insensitive).")
    p.add_argument("-m", "--mode", dest="search_mode", choices=SEARCH_MODES, default=MODE_CONTAINS, help="Search mode: 'exact' or 'contains' (default: contains).")
    p.add_argument("-f", "--field", default="", help="Dot-delimited field to search in, e.g. 'SourceMetadata.Data.Github.email'. Searches the whole record when omitted.")
    p.add_argument("--prefix", action="append", default=[], help="Extra field prefix tried after the built-in ones (repeatable).")
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging output.")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hogsearch",
        description="Search trufflehog newline-delimited JSON output for a term.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    # dir mode
    d = sub.add_parser("dir", help="Search every *.json file in a directory.")
    d.add_argument("path", type=Path, help="Directory containing trufflehog JSON output files.")
    _add_search_arguments(d)
    d.add_argument("-t", "--workers", type=_positive_int, default=1, help="Number of files searched in parallel (default 1).")
    d.add_argument("--progress", action="store_true", help="Show a progress bar on stderr.")

    # file mode
    f = sub.add_parser("file", help="Search a single newline-delimited JSON file.")
    f.add_argument("path", type=Path, help="File to search.")
    _add_search_arguments(f)

    # field catalog
    sub.add_parser("fields", help="List common searchable field names.")

    return p


def _build_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> SearchConfig:
    try:
        return SearchConfig.create(args.term, args.search_mode, args.field, args.prefix)
    except ValueError as exc:
        parser.error(str(exc))


def run_dir(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    config = _build_config(parser, args)
    logger = configure_logging(verbose=args.verbose)
    scanner = DirectoryScanner(
        root=args.path,
        config=config,
        reporter=ConsoleReporter(),
        workers=args.workers,
        logger=logger,
        verbose=args.verbose,
        show_progress=args.progress,
    )
    try:
        files = scanner.discover()
    except OSError as exc:
        logger.error("Error reading directory %s: %s", args.path, exc)
        return 1
    scanner.scan_files(files)
    return 0


def run_file(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    config = _build_config(parser, args)
    scanner = SingleFileScanner(
        file_path=args.path,
        config=config,
        reporter=ConsoleReporter(),
        logger=configure_logging(verbose=args.verbose),
        verbose=args.verbose,
    )
    scanner.scan()
    return 0


def run_fields(args: argparse.Namespace) -> int:
    ConsoleReporter().field_catalog(SEARCHABLE_FIELDS)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.command == "dir":
        return run_dir(parser, args)
    elif args.command == "file":
        return run_file(parser, args)
    elif args.command == "fields":
        return run_fields(args)
    else:
        parser.print_help()
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
