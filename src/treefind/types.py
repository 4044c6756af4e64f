"""Shared types for the treefind walker."""

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import NamedTuple, Protocol

from treefind.gitignore import IgnoreScope

# A file path that passed every filter
MatchResult = Path

# Receives per-directory failures the walker recovered from
ErrorHandler = Callable[[Path, OSError], None]


class TraversalNode(NamedTuple):
    """A directory waiting in the BFS queue.

    Attributes:
        path: Absolute path of the directory
        depth: Depth in the tree (0 = search root)
        scope: Ignore rules inherited from ancestors

    """

    path: Path
    depth: int
    scope: IgnoreScope


class FilesystemInterface(Protocol):
    """Protocol for filesystem operations to enable dependency injection."""

    def scandir(self, path: Path) -> Iterator[os.DirEntry[str]]:
        """List the immediate entries of a directory.

        Args:
            path: Directory path to scan

        Returns:
            Iterator over the directory's entries

        Raises:
            OSError: If the directory cannot be listed.

        """
        ...
