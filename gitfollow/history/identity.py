# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
import enum

from gitfollow.porcelain import *


class EntryKind(enum.Enum):
    Tree = enum.auto()
    Blob = enum.auto()
    Submodule = enum.auto()

    @classmethod
    def fromFileMode(cls, mode: FileMode) -> EntryKind:
        if mode == FileMode.TREE:
            return cls.Tree
        elif mode == FileMode.COMMIT:
            return cls.Submodule
        elif mode in (FileMode.BLOB, FileMode.BLOB_EXECUTABLE, FileMode.LINK):
            return cls.Blob
        raise ValueError(f"unsupported tree entry mode: {mode:o}")


@dataclasses.dataclass(frozen=True)
class TrackedIdentity:
    """
    What we're looking for as we move backward in history: the file's path
    at this point, and the blob it was last seen with.
    """

    path: str
    blobId: Oid

    def __str__(self):
        return f"{self.path}@{id7(self.blobId)}"

    def rebound(self, blobId: Oid) -> TrackedIdentity:
        """ Same path, bound to the blob that's live there in another commit. """
        return dataclasses.replace(self, blobId=blobId)
