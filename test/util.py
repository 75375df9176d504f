# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses

import pygit2
import pytest

from gitfollow.porcelain import *

TEST_SIGNATURE = Signature("Test Person", "toto@example.com", 1672600000, 0)


@dataclasses.dataclass(frozen=True)
class Symlink:
    target: str


def signatureAt(time: int) -> Signature:
    return Signature(TEST_SIGNATURE.name, TEST_SIGNATURE.email, time, 0)


class RepoBuilder:
    """
    Write commits straight into the object database, without going through
    the working directory. Each new commit is one minute younger than the
    previous one.

    File dicts map paths to:
    - str or bytes: regular file contents;
    - Symlink: a symbolic link;
    - Oid: a submodule pointing to this commit;
    - None: remove the file.
    """

    def __init__(self, repo: Repo):
        self.repo = repo
        self.time = TEST_SIGNATURE.time
        self.lastCommit: Commit | None = None
        self.numCommits = 0

    def blobId(self, contents: str | bytes) -> Oid:
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        return self.repo.create_blob(contents)

    def makeIndex(self, files: dict, base: Tree | None = None) -> pygit2.Index:
        index = pygit2.Index()
        if base is not None:
            index.read_tree(base)

        for path, value in files.items():
            if value is None:
                index.remove(path)
            elif isinstance(value, Oid):
                index.add(IndexEntry(path, value, FileMode.COMMIT))
            elif isinstance(value, Symlink):
                index.add(IndexEntry(path, self.blobId(value.target), FileMode.LINK))
            else:
                index.add(IndexEntry(path, self.blobId(value), FileMode.BLOB))

        return index

    def tree(self, files: dict) -> Tree:
        treeId = self.makeIndex(files).write_tree(self.repo)
        return self.repo[treeId].peel(Tree)

    def commit(
            self,
            files: dict,
            parents: list[Commit] | None = None,
            message: str = "",
            keep: bool = True,
    ) -> Commit:
        """
        Create a commit. By default, the new commit's parent is the previous
        commit, and its tree starts out as a copy of the first parent's tree
        (pass keep=False to start from an empty tree).
        """

        if parents is None:
            parents = [self.lastCommit] if self.lastCommit is not None else []

        base = parents[0].tree if parents and keep else None
        treeId = self.makeIndex(files, base).write_tree(self.repo)

        self.time += 60
        self.numCommits += 1
        signature = signatureAt(self.time)
        message = message or f"commit #{self.numCommits}"
        commitId = self.repo.create_commit(None, signature, signature, message, treeId, [p.id for p in parents])

        commit = self.repo.peel_commit(commitId)
        self.lastCommit = commit
        return commit

    def checkout(self, commit: Commit):
        """ Point master at the commit and stage its tree (the workdir isn't touched). """
        self.repo.references.create("refs/heads/master", commit.id, force=True)
        self.repo.set_head("refs/heads/master")
        index = self.repo.index
        index.read_tree(commit.tree)
        index.write()

    def stage(self, path: str, contents: str | bytes):
        index = self.repo.index
        index.add(IndexEntry(path, self.blobId(contents), FileMode.BLOB))
        index.write()


def parseGraphDefinition(definition: str) -> tuple[list[str], dict[str, list[str]]]:
    """
    Parse a compact commit graph definition.

    Chains of commits are separated by spaces. Within a chain, "a-b" means
    that b is a's parent. A colon spells out a commit's parents explicitly:
    "m:b,p" is a merge of b and p. A commit that ends a chain without a colon
    is a root commit, unless its parents are given somewhere else.

    Returns commit names in order of appearance (newest first), and each
    commit's parent names.
    """

    sequence = []
    parents: dict[str, list[str]] = {}

    for chain in definition.split():
        links = chain.split("-")
        for i, link in enumerate(links):
            name, colon, explicitParents = link.partition(":")

            if colon:
                parentNames = explicitParents.split(",")
            elif i + 1 < len(links):
                parentNames = [links[i + 1].partition(":")[0]]
            else:
                parentNames = None

            if name not in parents:
                sequence.append(name)
                parents[name] = []

            if parentNames is not None:
                assert not parents[name] or parents[name] == parentNames, f"conflicting parents for {name}"
                parents[name] = parentNames

    return sequence, parents


def buildGraph(builder: RepoBuilder, definition: str, contents: str, path: str) -> dict[str, Commit]:
    """
    Create the commits described by a graph definition. `contents` gives the
    file's text in each commit, in the same order as the definition; an
    underscore means the file doesn't exist in that commit.

    Parents are always created before their children, so author times
    increase from the roots up.
    """

    sequence, parentNames = parseGraphDefinition(definition)
    texts = contents.split()
    assert len(texts) == len(sequence), f"{len(sequence)} commits but {len(texts)} contents"
    textOf = dict(zip(sequence, texts, strict=True))

    commits: dict[str, Commit] = {}
    pending = list(reversed(sequence))

    while pending:
        for name in pending:
            if all(p in commits for p in parentNames[name]):
                break
        else:
            raise ValueError(f"cycle in graph definition: {definition}")
        pending.remove(name)

        text = textOf[name]
        files = {} if text == "_" else {path: f"{text}\n"}
        parents = [commits[p] for p in parentNames[name]]
        commits[name] = builder.commit(files, parents, message=name, keep=False)

    return commits


def commitNames(commits) -> list[str]:
    return [commit.message for commit in commits]


def assertChronological(commits):
    times = [commit.author.time for commit in commits]
    assert times == sorted(set(times)), "commits must be in strictly increasing author time"
    ids = [commit.id for commit in commits]
    assert len(ids) == len(set(ids)), "a commit appears twice"
