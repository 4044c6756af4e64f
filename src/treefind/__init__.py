"""Breadth-first file search with .gitignore support.

The walker lists each directory once, merges nested .gitignore rules as it
descends, and lazily yields files that pass the hidden, extension and name
filters.

Usage:
    from treefind import build_search_config, search_files

    config = build_search_config(root_path="src", extensions="py", pattern="test_*")
    for path in search_files(config):
        print(path)
"""

from treefind.config import SearchConfig, build_search_config, load_config_file
from treefind.exceptions import ConfigError, TreefindError
from treefind.walker import TreeWalker, search_files

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "SearchConfig",
    "TreeWalker",
    "TreefindError",
    "__version__",
    "build_search_config",
    "load_config_file",
    "search_files",
]
