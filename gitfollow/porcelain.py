# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Object model layer on top of pygit2.

Everything the history resolver needs from libgit2 goes through the names
exported here, so that the rest of the package can simply do
`from gitfollow.porcelain import *`.
"""

from __future__ import annotations

import pygit2
from pygit2 import (
    Blob,
    Commit,
    Diff,
    GitError,
    IndexEntry,
    Object,
    Oid,
    Patch,
    Signature,
    Tree,
)
from pygit2.enums import DeltaStatus, DiffOption, FileMode

__all__ = [
    "Blob",
    "Commit",
    "DeltaStatus",
    "Diff",
    "DiffOption",
    "FileMode",
    "GitError",
    "IndexEntry",
    "NULL_OID",
    "Object",
    "Oid",
    "Patch",
    "Repo",
    "RepoContext",
    "Signature",
    "Tree",
    "id7",
]

NULL_OID = Oid(raw=b'\0' * 20)


def id7(obj: Oid | Object) -> str:
    """ Abbreviated hex id of an Oid or of a git object. """
    if isinstance(obj, Oid):
        return str(obj)[:7]
    return str(obj.id)[:7]


class Repo(pygit2.Repository):
    """
    pygit2 repository with a few read-only conveniences.
    """

    @property
    def head_commit(self) -> Commit:
        return self.head.peel(Commit)

    def peel_commit(self, oid: Oid | str) -> Commit:
        return self[oid].peel(Commit)

    def peel_blob(self, oid: Oid | str) -> Blob:
        return self[oid].peel(Blob)

    def resolve_commit(self, rev: str) -> Commit:
        """ Resolve any revision expression (branch, tag, hex, HEAD~2...) to a commit. """
        return self.revparse_single(rev).peel(Commit)

    def index_blob_id(self, path: str) -> Oid:
        """
        Blob id of a path in the staged snapshot.
        Raises KeyError if the path isn't in the index.
        """
        return self.index[path].id


class RepoContext:
    """ Open a Repo and free its file handles when leaving the context. """

    def __init__(self, path: str):
        self.repo = Repo(path)

    def __enter__(self) -> Repo:
        return self.repo

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.repo.free()
