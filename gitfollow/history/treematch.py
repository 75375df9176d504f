# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Look for a file in a tree, either by identity (same blob or same path) or by
resemblance (line overlap with a reference blob).

Both searches visit every subtree, depth first, in the tree's natural order,
and return the first entry that qualifies.
"""

from __future__ import annotations

import logging
from collections.abc import Generator

from gitfollow.history.identity import EntryKind
from gitfollow.porcelain import *
from gitfollow.settings import DEFAULT_SIMILARITY_THRESHOLD

_logger = logging.getLogger(__name__)


def walkTree(tree: Tree, prefix: str = "") -> Generator[tuple[str, EntryKind, Object], None, None]:
    """
    Yield (full path, kind, entry) for every non-tree entry in `tree`,
    descending into subtrees as soon as they're encountered.
    """
    stack = [(prefix, iter(tree))]

    while stack:
        dirPath, entries = stack[-1]

        entry = next(entries, None)
        if entry is None:
            stack.pop()
            continue

        path = dirPath + entry.name
        kind = EntryKind.fromFileMode(entry.filemode)

        if kind == EntryKind.Tree:
            stack.append((path + "/", iter(entry)))
        else:
            yield path, kind, entry


def findExact(tree: Tree, blobId: Oid, path: str) -> str | None:
    for entryPath, kind, entry in walkTree(tree):
        if kind != EntryKind.Blob:
            continue
        if entry.id == blobId or entryPath == path:
            return entryPath
    return None


def countLines(blob: Blob) -> int:
    """ Number of lines that a blob adds to an empty snapshot. """
    patch = Patch.create_from(None, blob)
    _context, added, _deleted = patch.line_stats
    return added


def similarityScore(referenceLineCount: int, linesAdded: int, linesDeleted: int) -> float:
    """
    Percentage of the reference that survives the edit turning a candidate
    into the reference.
    """
    denominator = linesAdded + linesDeleted + referenceLineCount
    if denominator == 0:
        return 0.0
    return 100 * referenceLineCount / denominator


def findBySimilarity(
        tree: Tree,
        referenceBlob: Blob,
        referenceLineCount: int,
        threshold: int = DEFAULT_SIMILARITY_THRESHOLD,
) -> str | None:
    """
    Return the path of the first blob in `tree` that resembles
    `referenceBlob` closely enough.

    This is a cheap heuristic, not an optimal assignment: the first candidate
    that meets the threshold wins, even if a better one comes later.
    Unrelated files that happen to share most of their lines will be linked.
    """

    for entryPath, kind, entry in walkTree(tree):
        if kind != EntryKind.Blob:
            continue

        patch = Patch.create_from(entry, referenceBlob)

        # Binary content has no meaningful line similarity
        if patch.delta.is_binary:
            continue

        _context, added, deleted = patch.line_stats
        score = similarityScore(referenceLineCount, added, deleted)

        if score >= threshold:
            _logger.debug(f"{entryPath} resembles {id7(referenceBlob)} ({score:.0f}%)")
            return entryPath

    return None
