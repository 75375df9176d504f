# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime, timezone

from gitfollow.history.errors import PathNotFoundError
from gitfollow.history.identity import TrackedIdentity
from gitfollow.history.pathdiff import lookUpBlobId
from gitfollow.history.walker import CommitWalker, dummyProgressCallback
from gitfollow.porcelain import *
from gitfollow.settings import HistoryOptions

_logger = logging.getLogger(__name__)


class History:
    """
    Commits that changed a file, oldest first.

    Without a seed, the file is looked up in the index and history is walked
    from HEAD. With a seed commit, both the lookup and the walk start there,
    which lets you trace a file that has since been deleted.

    The result is a lower bound: if a rename can't be resolved, older commits
    along that line of descent are silently left out.
    """

    path: str
    commits: list[Commit]
    numVisited: int

    def __init__(
            self,
            repo: Repo,
            path: str,
            seed: Commit | None = None,
            options: HistoryOptions | None = None,
            progressCallback: Callable[[int], None] = dummyProgressCallback,
    ):
        self.path = path
        self.commits = []
        self.numVisited = 0

        if seed is None:
            try:
                repo.index_blob_id(path)
            except KeyError as exc:
                raise PathNotFoundError(path) from exc

            if repo.head_is_unborn:
                _logger.debug(f"No commits yet, '{path}' has no history")
                return

            seed = repo.head_commit
        elif lookUpBlobId(seed.tree, path) == NULL_OID:
            raise PathNotFoundError(path, f"commit {id7(seed)}")

        # Follow the blob as committed in the seed, not as staged in the index.
        # A file that's staged but not committed yet has no history to speak of.
        blobId = lookUpBlobId(seed.tree, path)
        if blobId == NULL_OID:
            _logger.warning(f"'{path}' isn't in {id7(seed)}, it has no history yet")
            return

        identity = TrackedIdentity(path, blobId)
        walker = CommitWalker(repo, options, progressCallback)
        recorded = walker.walk(seed, identity)

        self.numVisited = walker.numVisited
        self.commits = sorted(recorded.values(), key=lambda commit: commit.author.time)

    def __len__(self):
        return len(self.commits)

    def __iter__(self) -> Iterator[Commit]:
        return iter(self.commits)

    def __getitem__(self, i: int) -> Commit:
        return self.commits[i]

    @property
    def first(self) -> Commit:
        return self.commits[0]

    @property
    def last(self) -> Commit:
        return self.commits[-1]

    def toPlainText(self) -> str:
        """ One line per commit, oldest first: short id, author date, author, subject. """

        result = ""

        for commit in self.commits:
            author = commit.author
            date = datetime.fromtimestamp(author.time, timezone.utc).strftime("%Y-%m-%d %H:%M")
            subject = commit.message.split("\n", 1)[0]
            result += f"{id7(commit)} {date} {author.name:20} {subject}\n"

        return result


def fileHistory(
        repo: Repo,
        path: str,
        seed: Commit | None = None,
        options: HistoryOptions | None = None,
) -> list[Commit]:
    """ Chronologically ordered list of commits that changed `path`. """
    return History(repo, path, seed, options).commits
