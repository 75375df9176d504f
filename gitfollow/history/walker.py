# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from gitfollow.history.errors import HistoryTimeout
from gitfollow.history.identity import TrackedIdentity
from gitfollow.history.pathdiff import PathChange, diffPath, lookUpBlobId
from gitfollow.history.treematch import countLines, findBySimilarity, findExact
from gitfollow.porcelain import *
from gitfollow.settings import HistoryOptions

_logger = logging.getLogger(__name__)


def dummyProgressCallback(n: int):
    pass


class CommitWalker:
    """
    Walk a commit graph backward from a top commit, collecting the commits
    that changed a file.

    The walk keeps a frontier of (commit, identity) pairs. Each branch carries
    its own TrackedIdentity, so the file may be rediscovered under different
    former names along different lines of descent.
    """

    recorded: dict[Oid, Commit]
    numVisited: int

    def __init__(
            self,
            repo: Repo,
            options: HistoryOptions | None = None,
            progressCallback: Callable[[int], None] = dummyProgressCallback,
    ):
        self.repo = repo
        self.options = options or HistoryOptions()
        self.progressCallback = progressCallback
        self.recorded = {}
        self.numVisited = 0

    def walk(self, topCommit: Commit, identity: TrackedIdentity) -> dict[Oid, Commit]:
        options = self.options
        frontier: list[tuple[Commit, TrackedIdentity]] = [(topCommit, identity)]
        visited: set[tuple[Oid, TrackedIdentity]] = set()

        self.progressCallback(0)
        timeStart = time.perf_counter()

        while frontier:
            commit, identity = frontier.pop()

            # Don't process a commit twice for the same identity
            key = (commit.id, identity)
            if key in visited:
                continue
            visited.add(key)

            if self.numVisited % options.progressInterval == 0:
                self.progressCallback(len(self.recorded))
            self.numVisited += 1

            if options.timeout and time.perf_counter() - timeStart > options.timeout:
                raise HistoryTimeout(identity.path, options.timeout, self.numVisited)

            parents = commit.parents

            # Initial commit: nothing to diff against, just see if the file is there.
            if not parents:
                if findExact(commit.tree, identity.blobId, identity.path) is not None:
                    self._record(commit, identity)
                continue

            # Merge commit: don't attribute the change to the merge itself.
            # Explore each parent branch with the same path, bound to the blob
            # that's live in that parent, so that branches meeting again at a
            # common ancestor share a single visit.
            # (Push in reverse order so that the first parent comes out first.)
            if len(parents) > 1:
                for parent in reversed(parents):
                    frontier.append((parent, identity.rebound(lookUpBlobId(parent.tree, identity.path))))
                continue

            parent = parents[0]
            identityBelow = self._stepDown(commit, parent, identity)
            if identityBelow is not None:
                frontier.append((parent, identityBelow))

        timeTaken = int(1000 * (time.perf_counter() - timeStart))
        _logger.debug(f"{self.numVisited} commits visited, {len(self.recorded)} were relevant ({timeTaken} ms)")

        return self.recorded

    def _stepDown(self, commit: Commit, parent: Commit, identity: TrackedIdentity) -> TrackedIdentity | None:
        """
        Compare a non-merge commit to its parent. Return the identity to look
        for in the parent, or None to stop exploring this branch.
        """

        change = diffPath(parent.tree, commit.tree, identity.path)

        if change is None:
            return identity

        self._record(commit, identity, change)

        # Edited in place, or deleted here: the file is still at the same path in the parent
        if not change.isStrictAdd:
            return TrackedIdentity(change.oldPath, change.oldBlobId)

        if not self.options.followRenames:
            return None

        # The path appeared here: this is probably a rename.
        parentTree = parent.tree
        formerPath = findExact(parentTree, change.blobId, change.path)

        if formerPath is None:
            trackedBlob = self.repo.peel_blob(change.blobId)
            formerPath = findBySimilarity(parentTree, trackedBlob, countLines(trackedBlob),
                                          self.options.similarityThreshold)

        if formerPath is None:
            _logger.debug(f"{id7(commit)}: no former path for {identity}, stopping here")
            return None

        if formerPath != change.path:
            _logger.debug(f"{id7(commit)}: {formerPath} -> {change.path}")

        return TrackedIdentity(formerPath, lookUpBlobId(parentTree, formerPath))

    def _record(self, commit: Commit, identity: TrackedIdentity, change: PathChange | None = None):
        if commit.id in self.recorded:
            return
        self.recorded[commit.id] = commit

        if not _logger.isEnabledFor(logging.DEBUG):
            return
        if change is None:
            _logger.debug(f"{id7(commit)} root {identity}")
        else:
            added, deleted = change.lineStats
            _logger.debug(f"{id7(commit)} {change.status.name[0]} {identity} +{added} -{deleted}")
