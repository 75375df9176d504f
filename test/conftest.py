# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator

import pygit2
import pytest

from gitfollow.porcelain import Repo, RepoContext


def maskGitConfigSearchPaths():
    """
    Prevent unit tests from accessing the host system's git config files.
    This modifies libgit2 search paths.
    """
    ConfigLevel = pygit2.enums.ConfigLevel

    levels = [
        ConfigLevel.GLOBAL,
        ConfigLevel.XDG,
        ConfigLevel.SYSTEM,
        ConfigLevel.PROGRAMDATA,
    ]

    for level in levels:
        pygit2.settings.search_path[level] = ""


@pytest.fixture(scope='session', autouse=True)
def maskHostGitConfig():
    maskGitConfigSearchPaths()


@pytest.fixture(scope='session', autouse=True)
def setUpLogging():
    rootLogger = logging.root
    rootLogger.setLevel(logging.DEBUG)

    yield

    # Work around https://github.com/pytest-dev/pytest/issues/5502
    for handler in rootLogger.handlers:
        rootLogger.removeHandler(handler)


@pytest.fixture
def tempDir() -> Generator[tempfile.TemporaryDirectory, None, None]:
    location = os.environ.get("GITFOLLOW_TEMPDIR", None)

    td = tempfile.TemporaryDirectory(prefix="gitfollowtest-", dir=location)
    yield td
    td.cleanup()


@pytest.fixture
def tempRepo(tempDir) -> Generator[Repo, None, None]:
    # realpath: compare cleanly with the workdir path produced by libgit2
    path = os.path.realpath(os.path.join(tempDir.name, "repo"))
    pygit2.init_repository(path, initial_head="master")

    with RepoContext(path) as repo:
        yield repo
