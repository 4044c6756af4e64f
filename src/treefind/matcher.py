"""File name and extension predicates."""

from collections.abc import Collection
from dataclasses import dataclass

from treefind.exceptions import ConfigError

WILDCARD = "*"


@dataclass(frozen=True)
class NamePattern:
    """Single-wildcard name pattern split into its fixed parts.

    Attributes:
        prefix: Text the name must start with
        suffix: Text the name must end with
        has_wildcard: False for literal patterns (exact match)

    """

    prefix: str
    suffix: str = ""
    has_wildcard: bool = False

    @classmethod
    def parse(cls, pattern: str) -> "NamePattern":
        """Split a pattern on its wildcard.

        Args:
            pattern: Pattern with zero or one wildcard

        Returns:
            Compiled NamePattern

        Raises:
            ConfigError: If the pattern contains more than one wildcard.

        """
        count = pattern.count(WILDCARD)
        if count > 1:
            raise ConfigError(
                f"Pattern {pattern!r} contains {count} wildcards; only one '*' is supported"
            )
        if count == 0:
            return cls(prefix=pattern)
        prefix, _, suffix = pattern.partition(WILDCARD)
        return cls(prefix=prefix, suffix=suffix, has_wildcard=True)

    def matches(self, name: str) -> bool:
        """Check a file name against the pattern (case-sensitive)."""
        if not self.has_wildcard:
            return name == self.prefix
        # Prefix and suffix must not overlap on short names
        if len(self.prefix) + len(self.suffix) > len(name):
            return False
        return name.startswith(self.prefix) and name.endswith(self.suffix)


def match_name(name: str, pattern: str) -> bool:
    """Check a file name against a single-wildcard pattern.

    Args:
        name: File name (no directory part)
        pattern: Pattern with zero or one '*'

    Returns:
        True if the name matches

    Raises:
        ConfigError: If the pattern contains more than one wildcard.

    """
    if pattern == WILDCARD:
        return True
    return NamePattern.parse(pattern).matches(name)


def file_extension(name: str) -> str | None:
    """Return the text after the last '.', ignoring a leading dot.

    ``"a.tar.gz"`` gives ``"gz"``, ``".hidden.rs"`` gives ``"rs"``, while
    ``".bashrc"``, ``"Makefile"`` and ``"notes."`` have no extension.
    """
    stem = name[1:] if name.startswith(".") else name
    if "." not in stem:
        return None
    ext = stem.rsplit(".", 1)[1]
    return ext or None


def normalize_extension(ext: str) -> str:
    """Lowercase an extension and drop surrounding whitespace and dots."""
    return ext.strip().lstrip(".").lower()


def match_extension(name: str, allowed: Collection[str]) -> bool:
    """Check a file name against an allow-set of normalized extensions.

    Args:
        name: File name
        allowed: Lowercase extensions without dots; empty allows everything

    Returns:
        True if allowed is empty or the name's extension is in it

    """
    if not allowed:
        return True
    ext = file_extension(name)
    if ext is None:
        return False
    return ext.lower() in allowed
