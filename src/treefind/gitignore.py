"""Hierarchical .gitignore handling for the tree walker.

Rules are collected per directory as the walker descends. Each directory
gets an immutable IgnoreScope: the parent's scope plus the rules from the
directory's own ignore file. Sibling subtrees never see each other's rules.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILENAME = ".gitignore"


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Compiled patterns from one ignore file.

    Attributes:
        base_dir: Directory holding the ignore file; patterns are relative to it
        spec: Compiled gitignore patterns
        source: Path of the ignore file (for logging)

    """

    base_dir: Path
    spec: GitIgnoreSpec
    source: Path

    def check(self, path: Path, is_dir: bool) -> bool | None:
        """Check a path against this file's rules.

        Args:
            path: Absolute path inside base_dir
            is_dir: Whether the path is a directory

        Returns:
            True if the last matching rule ignores the path, False if it is
            a negation, None if no rule matches

        """
        try:
            rel = path.relative_to(self.base_dir).as_posix()
        except ValueError:
            return None
        if is_dir:
            # Trailing slash lets "build/" style patterns match directories
            rel += "/"
        return self.spec.check_file(rel).include


@dataclass(frozen=True)
class IgnoreScope:
    """Ordered rule sets from the root down to the current directory.

    Later rule sets come from deeper directories and take precedence.
    """

    rule_sets: tuple[IgnoreRuleSet, ...] = ()

    def extended(self, rule_set: IgnoreRuleSet) -> "IgnoreScope":
        """Return a new scope with rule_set appended."""
        return IgnoreScope(self.rule_sets + (rule_set,))

    def __len__(self) -> int:
        return len(self.rule_sets)


EMPTY_SCOPE = IgnoreScope()


def parse_ignore_lines(lines: list[str]) -> list[str]:
    """Drop blank lines and comments from ignore file content."""
    patterns: list[str] = []
    for line in lines:
        stripped = line.rstrip("\r\n")
        if not stripped.strip() or stripped.startswith("#"):
            continue
        patterns.append(stripped)
    return patterns


class IgnoreResolver:
    """Loads ignore files per directory and answers ignore decisions.

    A disabled resolver (gitignored files included) never reads ignore
    files and never excludes anything.
    """

    def __init__(self, enabled: bool = True, filename: str = DEFAULT_IGNORE_FILENAME) -> None:
        """Initialize the resolver.

        Args:
            enabled: False to bypass ignore handling entirely
            filename: Name of the per-directory ignore file

        """
        self.enabled = enabled
        self.filename = filename

    def load_rule_set(self, directory: Path) -> IgnoreRuleSet | None:
        """Load the ignore file for a single directory.

        Args:
            directory: Directory to look in

        Returns:
            IgnoreRuleSet, or None if the file is absent, empty,
            unreadable or malformed

        """
        ignore_path = directory / self.filename
        try:
            content = ignore_path.read_text(encoding="utf-8-sig", errors="replace")
        except FileNotFoundError:
            return None
        except OSError as e:
            if ignore_path.is_dir():
                return None
            logger.warning(f"Failed to read {ignore_path}: {e}")
            return None

        patterns = parse_ignore_lines(content.splitlines())
        if not patterns:
            return None

        try:
            spec = GitIgnoreSpec.from_lines(patterns)
        except ValueError as e:
            # pathspec raises GitWildMatchPatternError (a ValueError) on bad patterns
            logger.warning(f"Ignoring malformed {ignore_path}: {e}")
            return None

        logger.debug("Loaded %d ignore rules from %s", len(patterns), ignore_path)
        return IgnoreRuleSet(base_dir=directory, spec=spec, source=ignore_path)

    def extend(self, directory: Path, scope: IgnoreScope) -> IgnoreScope:
        """Compute the scope that applies to a directory's entries.

        Args:
            directory: Directory about to be listed
            scope: Scope inherited from the parent directory

        Returns:
            The inherited scope, extended with this directory's rules if any

        """
        if not self.enabled:
            return scope
        rule_set = self.load_rule_set(directory)
        if rule_set is None:
            return scope
        return scope.extended(rule_set)

    def is_ignored(self, path: Path, is_dir: bool, scope: IgnoreScope) -> bool:
        """Decide whether a path is excluded by the rules in scope.

        Rule sets are evaluated root first; within each file the last
        matching rule decides, and a decision from a deeper file replaces
        one from an ancestor. Paths no rule matches are kept.

        Args:
            path: Absolute path of the entry
            is_dir: Whether the entry is a directory
            scope: Scope of the directory containing the entry

        Returns:
            True if the path is ignored

        """
        if not self.enabled:
            return False
        ignored = False
        for rule_set in scope.rule_sets:
            decision = rule_set.check(path, is_dir)
            if decision is not None:
                ignored = decision
        return ignored
