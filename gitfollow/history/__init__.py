# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Reconstruct the list of commits that changed a file, following the file
across renames even when git didn't record them as such.

Renames are resolved first by looking for the same blob (or the same path)
in the parent tree, then by looking for a blob whose lines overlap enough
with the file. Merge commits are never blamed for a change themselves;
each side of the merge is explored instead.

CAVEAT: Copies aren't detected, only renames.
"""

from gitfollow.history.errors import HistoryError, HistoryTimeout, PathNotFoundError
from gitfollow.history.history import History, fileHistory
from gitfollow.history.identity import EntryKind, TrackedIdentity
from gitfollow.history.pathdiff import PathChange, diffPath, lookUpBlobId
from gitfollow.history.treematch import countLines, findBySimilarity, findExact, similarityScore, walkTree
from gitfollow.history.walker import CommitWalker
