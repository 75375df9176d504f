# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses

from gitfollow.appconsts import *
from gitfollow.history.identity import EntryKind
from gitfollow.porcelain import *


@dataclasses.dataclass(frozen=True)
class PathChange:
    """
    How a single path changed between a parent tree (below) and a child
    tree (above).

    Without rename detection, `oldPath` is always the same as `path`; the
    commit walker is in charge of finding the file's former name.
    """

    path: str
    oldPath: str
    blobId: Oid
    oldBlobId: Oid
    status: DeltaStatus

    _diff: Diff | None = dataclasses.field(default=None, compare=False, repr=False)
    _deltaIndices: tuple[int, ...] = dataclasses.field(default=(), compare=False, repr=False)

    @property
    def isStrictAdd(self) -> bool:
        return self.status == DeltaStatus.ADDED

    @property
    def isStrictDelete(self) -> bool:
        return self.status == DeltaStatus.DELETED

    @property
    def lineStats(self) -> tuple[int, int]:
        """ (lines added, lines deleted), summed over the deltas that touch the path. """
        if self._diff is None:
            return 0, 0
        added, deleted = 0, 0
        for i in self._deltaIndices:
            _context, a, d = self._diff[i].line_stats
            added += a
            deleted += d
        return added, deleted

    @property
    def linesAdded(self) -> int:
        return self.lineStats[0]

    @property
    def linesDeleted(self) -> int:
        return self.lineStats[1]


def lookUpBlobId(tree: Tree, path: str) -> Oid:
    """ Blob id at `path` in `tree`, or NULL_OID if there's no file there. """
    try:
        entry = tree[path]
    except KeyError:
        return NULL_OID
    if EntryKind.fromFileMode(entry.filemode) != EntryKind.Blob:
        return NULL_OID
    return entry.id


def diffPath(treeBelow: Tree, treeAbove: Tree, path: str) -> PathChange | None:
    """
    Diff two trees, keeping only what happened to `path`.
    Returns None if the path is unchanged (or absent from both trees).
    """

    # Most common case: same blob at both ends, no need to compute a diff.
    idBelow = lookUpBlobId(treeBelow, path)
    idAbove = lookUpBlobId(treeAbove, path)
    if idBelow == idAbove:
        return None

    diff = treeBelow.diff_to_tree(treeAbove, DiffOption.NORMAL, 0, 0)

    indices = []
    deltaStatus = None
    for i, delta in enumerate(diff.deltas):
        if path not in (delta.old_file.path, delta.new_file.path):
            continue
        indices.append(i)
        if deltaStatus is None:
            deltaStatus = delta.status
        else:
            # A file turned into a symlink (or vice versa) is reported as a
            # deletion followed by an addition of the same path.
            deltaStatus = DeltaStatus.TYPECHANGE

    # The path may also have gone from a file to a directory or submodule
    # (or vice versa). As far as we're concerned, the file is gone.
    if idBelow == NULL_OID:
        status = DeltaStatus.ADDED
    elif idAbove == NULL_OID:
        status = DeltaStatus.DELETED
    else:
        status = deltaStatus or DeltaStatus.MODIFIED

    if APP_DEBUG and len(indices) == 1:
        assert deltaStatus == status, f"'{path}': diff says {deltaStatus.name}, trees say {status.name}"

    return PathChange(path, path, idAbove, idBelow, status, diff, tuple(indices))
