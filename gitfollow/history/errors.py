# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of gitfollow, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

class HistoryError(Exception):
    pass


class PathNotFoundError(HistoryError, LookupError):
    def __init__(self, path: str, where: str = "the current index"):
        super().__init__(f"Can't find file named '{path}' in {where}.")
        self.path = path


class HistoryTimeout(HistoryError, TimeoutError):
    def __init__(self, path: str, seconds: float, numVisited: int):
        super().__init__(f"Gave up tracing '{path}' after {seconds:g} s ({numVisited} commits visited).")
        self.path = path
        self.numVisited = numVisited
