# src/codemerge/cli.py
import sys
import argparse
import logging
import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional

from codemerge.config import DEFAULT_TOP_COUNT, OUTPUT_ENV_VAR
from codemerge.core.report import format_ranking, top_files
from codemerge.core.tree import render_tree
from codemerge.core.walker import Walker
from codemerge.core.writer import MergeWriter


def get_version() -> str:
    try:
        return version("codemerge")
    except PackageNotFoundError:
        return "unknown"


def setup_logging(verbose: bool) -> None:
    """Per-file progress goes to stderr; results go to stdout."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _add_walk_arguments(parser: argparse.ArgumentParser, verbose: bool = True) -> None:
    parser.add_argument("path", type=str, nargs="?", default=None, help="Root directory (default: current directory)")
    parser.add_argument(
        "-i", "--ignores",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Extra gitignore-style pattern to exclude (repeatable, comma-separated)",
    )
    parser.add_argument(
        "-m", "--match",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Only include files matching this pattern (repeatable, comma-separated)",
    )
    if verbose:
        parser.add_argument(
            "-v", "--verbose",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="Log each processed file (default: on)",
        )


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codemerge",
        description="Merge a directory tree's files into one file and count their tokens.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge_parser = subparsers.add_parser("merge", aliases=["m"], help="Merge files into a single output file")
    merge_parser.add_argument(
        "-o", "--output",
        type=str,
        default=os.environ.get(OUTPUT_ENV_VAR),
        help=f"Output file, relative to the working directory (env: {OUTPUT_ENV_VAR})",
    )
    _add_walk_arguments(merge_parser)
    merge_parser.set_defaults(func=run_merge)

    tokens_parser = subparsers.add_parser("tokens", aliases=["t"], help="Show the files with the most tokens")
    tokens_parser.add_argument(
        "-c", "--count",
        type=int,
        default=DEFAULT_TOP_COUNT,
        help=f"Number of files to list (default: {DEFAULT_TOP_COUNT})",
    )
    _add_walk_arguments(tokens_parser)
    tokens_parser.set_defaults(func=run_tokens)

    tree_parser = subparsers.add_parser("tree", help="Show the tree of files that would be merged")
    _add_walk_arguments(tree_parser, verbose=False)
    tree_parser.set_defaults(func=run_tree, verbose=False)

    return parser


def split_patterns(values: List[str]) -> List[str]:
    """Flattens repeated and comma-separated pattern options."""
    patterns = []
    for value in values:
        patterns.extend(p.strip() for p in value.split(",") if p.strip())
    return patterns


def resolve_root(args: argparse.Namespace, cwd: Path) -> Path:
    root_dir = Path(args.path) if args.path else cwd
    if not root_dir.is_dir():
        raise NotADirectoryError(f"Invalid directory '{root_dir}'")
    return root_dir


def run_merge(args: argparse.Namespace) -> None:
    cwd = Path.cwd()
    root_dir = resolve_root(args, cwd)
    output_file = cwd / args.output

    with MergeWriter.open(output_file) as writer:
        walker = Walker(
            root_dir,
            ignores=split_patterns(args.ignores),
            writer=writer,
            verbose=args.verbose,
            matches=split_patterns(args.match),
        )
        walker.walk()

    if args.verbose:
        print(f"Files merged into {args.output}")
        print(f"Tokens: {walker.total_tokens()}")


def run_tokens(args: argparse.Namespace) -> None:
    if args.count < 0:
        raise ValueError(f"--count must be non-negative, got {args.count}")

    root_dir = resolve_root(args, Path.cwd())
    walker = Walker(
        root_dir,
        ignores=split_patterns(args.ignores),
        verbose=args.verbose,
        matches=split_patterns(args.match),
    )
    walker.walk()

    if not walker.files:
        print("No files found.")

    ranked = top_files(walker.files, args.count)
    print(format_ranking(ranked, walker.total_tokens()))


def run_tree(args: argparse.Namespace) -> None:
    root_dir = resolve_root(args, Path.cwd())
    walker = Walker(
        root_dir,
        ignores=split_patterns(args.ignores),
        matches=split_patterns(args.match),
    )
    print(render_tree(walker.iter_paths(), walker.root_dir.name or "."), end="")


def main(argv: Optional[List[str]] = None):
    try:
        parser = create_arg_parser()
        args = parser.parse_args(argv)

        if args.func is run_merge and not args.output:
            parser.error(f"the following arguments are required: -o/--output (or set {OUTPUT_ENV_VAR})")

        setup_logging(args.verbose)
        args.func(args)

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)

    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
