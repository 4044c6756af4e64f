"""Breadth-first file search with gitignore, hidden and name filtering."""

import logging
import os
from collections import deque
from collections.abc import Iterator
from pathlib import Path

from treefind.config import SearchConfig
from treefind.gitignore import EMPTY_SCOPE, IgnoreResolver
from treefind.matcher import NamePattern, match_extension
from treefind.types import ErrorHandler, FilesystemInterface, MatchResult, TraversalNode
from treefind.visibility import IS_WINDOWS, entry_attributes, is_visible

logger = logging.getLogger(__name__)


class RealFilesystem:
    """Real filesystem implementation using os module."""

    def scandir(self, path: Path) -> Iterator[os.DirEntry[str]]:
        """Scan directory using os.scandir, closing the handle when exhausted."""
        with os.scandir(path) as it:
            yield from it


class TreeWalker:
    """Iterative BFS file search.

    Each directory is listed once, its ignore scope is computed once, and
    every entry runs through the visibility, ignore, extension and name
    filters. Matching files are yielded lazily, all files at depth d
    before any file at depth d+1.
    """

    def __init__(
        self,
        config: SearchConfig,
        resolver: IgnoreResolver | None = None,
        filesystem: FilesystemInterface | None = None,
        on_error: ErrorHandler | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            config: Validated search configuration
            resolver: Optional ignore resolver (built from config if omitted)
            filesystem: Optional filesystem implementation for testing
            on_error: Optional callback for directories that could not be listed

        """
        self.config = config
        self.resolver = (
            resolver
            if resolver is not None
            else IgnoreResolver(
                enabled=not config.include_gitignored,
                filename=config.ignore_filename,
            )
        )
        self.filesystem = filesystem if filesystem is not None else RealFilesystem()
        self.on_error = on_error
        self.name_pattern = NamePattern.parse(config.pattern)

    def _report(self, path: Path, error: OSError) -> None:
        if self.on_error is None:
            logger.warning(f"Cannot access directory {path}: {error}")
            return
        logger.debug(f"Cannot access directory {path}: {error}")
        self.on_error(path, error)

    def _within_depth(self, depth: int) -> bool:
        return self.config.max_depth is None or depth <= self.config.max_depth

    def _file_matches(self, name: str) -> bool:
        """Apply the extension filter, then the name pattern."""
        if not match_extension(name, self.config.extensions):
            return False
        return self.name_pattern.matches(name)

    def _classify(self, entry: os.DirEntry[str]) -> bool | None:
        """Decide how to treat an entry.

        Returns:
            True for a directory to descend into, False for a file,
            None for a symlinked directory that must not be followed

        Raises:
            OSError: If the entry's type cannot be read.

        """
        if entry.is_symlink():
            # is_dir() follows the link; broken links count as files
            if entry.is_dir():
                return True if self.config.follow_symlinks else None
            return False
        return entry.is_dir(follow_symlinks=False)

    def _match_root_file(self, root: Path) -> Iterator[MatchResult]:
        """Handle a search root that is a single file."""
        attributes = 0
        if IS_WINDOWS:
            try:
                attributes = getattr(root.stat(), "st_file_attributes", 0)
            except OSError as e:
                logger.debug(f"Cannot stat {root}: {e}")
        if is_visible(root.name, self.config.show_hidden, attributes) and self._file_matches(
            root.name
        ):
            yield root

    def walk(self) -> Iterator[MatchResult]:
        """Walk the search root breadth-first.

        Yields:
            Absolute paths of files that pass every filter

        """
        root = self.config.root_path
        if not root.is_dir():
            yield from self._match_root_file(root)
            return

        show_hidden = self.config.show_hidden

        # Real paths of listed directories; only needed when following symlinks
        visited: set[Path] = set()

        queue: deque[TraversalNode] = deque()
        queue.append(TraversalNode(root, 0, EMPTY_SCOPE))

        while queue:
            node = queue.popleft()

            if not self._within_depth(node.depth):
                continue

            if self.config.follow_symlinks:
                try:
                    real_path = node.path.resolve()
                except (OSError, RuntimeError) as e:
                    logger.warning(f"Cannot resolve path {node.path}: {e}")
                    continue
                if real_path in visited:
                    logger.debug("Skipping already visited directory %s", node.path)
                    continue
                visited.add(real_path)

            try:
                entries = sorted(self.filesystem.scandir(node.path), key=lambda e: e.name)
            except OSError as e:
                self._report(node.path, e)
                continue

            scope = self.resolver.extend(node.path, node.scope)

            for entry in entries:
                name = entry.name
                if not is_visible(name, show_hidden, entry_attributes(entry)):
                    continue

                try:
                    is_dir = self._classify(entry)
                except OSError as e:
                    logger.debug(f"Error processing entry {entry.path}: {e}")
                    continue
                if is_dir is None:
                    logger.debug("Not following directory symlink %s", entry.path)
                    continue

                entry_path = node.path / name
                if self.resolver.is_ignored(entry_path, is_dir, scope):
                    continue

                if is_dir:
                    if self._within_depth(node.depth + 1):
                        queue.append(TraversalNode(entry_path, node.depth + 1, scope))
                elif self._file_matches(name):
                    yield entry_path


def search_files(
    config: SearchConfig,
    filesystem: FilesystemInterface | None = None,
    on_error: ErrorHandler | None = None,
) -> Iterator[MatchResult]:
    """Search for files matching config.

    Args:
        config: Validated search configuration
        filesystem: Optional filesystem implementation for testing
        on_error: Optional callback for directories that could not be listed

    Returns:
        Lazy iterator over matching absolute file paths

    """
    return TreeWalker(config, filesystem=filesystem, on_error=on_error).walk()
