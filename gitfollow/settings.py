# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import logging
import os

from gitfollow.appconsts import *

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 50
DEFAULT_PROGRESS_INTERVAL = 200 if not APP_TESTMODE else 1


@dataclasses.dataclass
class HistoryOptions:
    similarityThreshold: int = DEFAULT_SIMILARITY_THRESHOLD
    """ Minimum line overlap percentage to accept a heuristic rename match. """

    followRenames: bool = True
    """ Look for the file's former path when it appears or disappears in a commit. """

    timeout: float = 0.0
    """ Give up walking history after this many seconds (0: no limit). """

    progressInterval: int = DEFAULT_PROGRESS_INTERVAL
    """ Report progress every N visited commits. """

    def __post_init__(self):
        if not 0 <= self.similarityThreshold <= 100:
            raise ValueError(f"similarity threshold out of range: {self.similarityThreshold}")
        if self.timeout < 0:
            raise ValueError(f"negative timeout: {self.timeout}")
        if self.progressInterval < 1:
            raise ValueError(f"progress interval must be positive: {self.progressInterval}")

    @classmethod
    def fromEnvironment(cls, **overrides):
        """
        Build options from GITFOLLOW_* environment variables.
        Keyword arguments take precedence over the environment.
        """
        kwargs = {}

        if "GITFOLLOW_SIMILARITY" in os.environ:
            kwargs["similarityThreshold"] = int(os.environ["GITFOLLOW_SIMILARITY"])
        if "GITFOLLOW_TIMEOUT" in os.environ:
            kwargs["timeout"] = float(os.environ["GITFOLLOW_TIMEOUT"])
        if os.environ.get("GITFOLLOW_NO_RENAMES", "") not in ["", "0"]:
            kwargs["followRenames"] = False

        kwargs.update(overrides)
        logger.debug(f"History options: {kwargs}")
        return cls(**kwargs)
