# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser
from contextlib import suppress
from pathlib import Path

from gitfollow.appconsts import *
from gitfollow.history import History, HistoryError
from gitfollow.porcelain import *
from gitfollow.settings import HistoryOptions
from gitfollow.toolbox import BENCHMARK_LOGGING_LEVEL, Benchmark


def makeParser() -> ArgumentParser:
    parser = ArgumentParser(prog=APP_SYSTEM_NAME, description="List the commits that changed a file, following renames")
    parser.add_argument("path", help="File path")
    parser.add_argument("-r", "--repo", default="", help="Repository (default: discovered from the file's location)")
    parser.add_argument("-s", "--seed", default="", help="Start from this revision instead of HEAD")
    parser.add_argument("-t", "--threshold", type=int, default=None, help="Similarity threshold for renames (percent)")
    parser.add_argument("--no-renames", action="store_true", help="Don't follow renames")
    parser.add_argument("--timeout", type=float, default=None, help="Give up after this many seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each relevant commit")
    parser.add_argument("-b", "--benchmark", action="store_true", help="Report time spent tracing")
    parser.add_argument("--version", action="version", version=f"{APP_DISPLAY_NAME} {APP_VERSION}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = makeParser().parse_args(argv)

    if args.benchmark:
        level = BENCHMARK_LOGGING_LEVEL
    elif args.verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")
    logging.captureWarnings(True)

    overrides = {}
    if args.threshold is not None:
        overrides["similarityThreshold"] = args.threshold
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.no_renames:
        overrides["followRenames"] = False

    try:
        options = HistoryOptions.fromEnvironment(**overrides)
    except ValueError as exc:
        print(f"{APP_SYSTEM_NAME}: {exc}", file=sys.stderr)
        return 2

    try:
        repoContext = RepoContext(args.repo or str(Path(args.path).parent.resolve()))
    except GitError as exc:
        print(f"{APP_SYSTEM_NAME}: {exc}", file=sys.stderr)
        return 1

    with repoContext as repo:
        relPath = Path(args.path)
        with suppress(ValueError):
            relPath = relPath.resolve().relative_to(repo.workdir)

        try:
            seed = repo.resolve_commit(args.seed) if args.seed else None
        except (KeyError, ValueError):
            # ValueError: malformed revision, or not a commit
            print(f"{APP_SYSTEM_NAME}: unknown revision '{args.seed}'", file=sys.stderr)
            return 1

        try:
            with Benchmark("History"):
                history = History(repo, relPath.as_posix(), seed, options)
        except HistoryError as exc:
            print(f"{APP_SYSTEM_NAME}: {exc}", file=sys.stderr)
            return 1

        sys.stdout.write(history.toPlainText())

    return 0


if __name__ == '__main__':
    sys.exit(main())
