"""Pytest configuration and fixtures for treefind tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from treefind.config import SearchConfig
from treefind.walker import search_files


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str | None]], Path]:
    """Create files and directories under tmp_path.

    Keys are POSIX paths relative to tmp_path. A value of None creates a
    directory, a string creates a file with that content.
    """

    def _make(layout: dict[str, str | None]) -> Path:
        for rel, content in layout.items():
            target = tmp_path / rel
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content)
        return tmp_path

    return _make


@pytest.fixture
def run_search(tmp_path: Path) -> Callable[..., list[str]]:
    """Run a search under tmp_path and return matches relative to it, in order."""

    def _run(root: Path | None = None, **fields: Any) -> list[str]:
        search_root = root if root is not None else tmp_path
        config = SearchConfig(root_path=search_root, **fields)
        base = config.root_path if config.root_path.is_dir() else config.root_path.parent
        return [p.relative_to(base).as_posix() for p in search_files(config)]

    return _run
