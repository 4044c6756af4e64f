"""Tests for name and extension matching."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from treefind.exceptions import ConfigError
from treefind.matcher import (
    NamePattern,
    file_extension,
    match_extension,
    match_name,
    normalize_extension,
)


class TestMatchName:
    """Test cases for the single-wildcard name matcher."""

    def test_lone_wildcard_matches_everything(self) -> None:
        """A pattern of just '*' matches any name."""
        assert match_name("anything.txt", "*")
        assert match_name(".env", "*")
        assert match_name("", "*")

    def test_literal_pattern_requires_exact_match(self) -> None:
        """Patterns without '*' match only the identical name."""
        assert match_name("Cargo.toml", "Cargo.toml")
        assert not match_name("Cargo.toml.bak", "Cargo.toml")
        assert not match_name("my_Cargo.toml", "Cargo.toml")

    def test_case_sensitive(self) -> None:
        """Matching is case-sensitive."""
        assert not match_name("README.md", "readme.md")
        assert not match_name("Main.rs", "main*")

    @pytest.mark.parametrize(
        ("name", "pattern", "expected"),
        [
            ("test_walker.py", "test_*", True),
            ("walker_test.py", "test_*", False),
            ("main.rs", "*.rs", True),
            ("main.rsx", "*.rs", False),
            ("prefix_mid_suffix", "prefix*suffix", True),
            ("prefixsuffix", "prefix*suffix", True),
            ("presuf", "pre*suf", True),
        ],
    )
    def test_prefix_suffix(self, name: str, pattern: str, expected: bool) -> None:
        """A single '*' splits the pattern into required prefix and suffix."""
        assert match_name(name, pattern) is expected

    def test_prefix_and_suffix_do_not_overlap(self) -> None:
        """Short names cannot satisfy prefix and suffix with shared characters."""
        # "aba" starts with "ab" and ends with "ba" but is only 3 chars long
        assert not match_name("aba", "ab*ba")
        assert match_name("abba", "ab*ba")

    def test_multiple_wildcards_rejected(self) -> None:
        """More than one '*' is a configuration error."""
        with pytest.raises(ConfigError, match="wildcards"):
            match_name("a.b.c", "*.*")


literal = st.text().map(lambda s: s.replace("*", ""))


class TestMatchNameProperties:
    """Property-based checks for match_name over arbitrary strings."""

    @given(st.text())
    def test_star_matches_all_strings(self, name: str) -> None:
        """The lone wildcard accepts every name."""
        assert match_name(name, "*")

    @given(literal, literal)
    def test_literal_pattern_is_equality(self, name: str, pattern: str) -> None:
        """Without a wildcard, matching is string equality."""
        assert match_name(name, pattern) == (name == pattern)

    @given(literal, literal, literal)
    def test_wildcard_equivalent_to_prefix_and_suffix(
        self, name: str, prefix: str, suffix: str
    ) -> None:
        """'prefix*suffix' matches exactly the names that can be split that way."""
        expected = (
            name.startswith(prefix)
            and name.endswith(suffix)
            and len(prefix) + len(suffix) <= len(name)
        )
        assert match_name(name, f"{prefix}*{suffix}") == expected

    @given(literal, literal, literal)
    def test_wildcard_accepts_any_middle(self, prefix: str, middle: str, suffix: str) -> None:
        """Whatever the wildcard stands in for, the composed name matches."""
        assert match_name(prefix + middle + suffix, f"{prefix}*{suffix}")


class TestNamePattern:
    """Test cases for precompiled NamePattern."""

    def test_parse_literal(self) -> None:
        """Literal patterns have no wildcard."""
        pattern = NamePattern.parse("Makefile")
        assert pattern == NamePattern(prefix="Makefile")
        assert pattern.matches("Makefile")

    def test_parse_wildcard(self) -> None:
        """Wildcard patterns are split once."""
        pattern = NamePattern.parse("*.rs")
        assert pattern == NamePattern(prefix="", suffix=".rs", has_wildcard=True)
        assert pattern.matches("lib.rs")
        assert not pattern.matches("lib.py")


class TestFileExtension:
    """Test cases for extension extraction."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("main.rs", "rs"),
            ("archive.tar.gz", "gz"),
            ("UPPER.TXT", "TXT"),
            (".hidden.rs", "rs"),
            (".bashrc", None),
            ("Makefile", None),
            ("notes.", None),
        ],
    )
    def test_extension(self, name: str, expected: str | None) -> None:
        """Extension is the text after the last dot, ignoring a leading dot."""
        assert file_extension(name) == expected

    def test_normalize_extension(self) -> None:
        """Normalization lowercases and strips dots and whitespace."""
        assert normalize_extension(" .RS ") == "rs"
        assert normalize_extension("Toml") == "toml"


class TestMatchExtension:
    """Test cases for the extension allow-set filter."""

    def test_empty_set_allows_all(self) -> None:
        """No allow-set means every file passes, even without extension."""
        assert match_extension("Makefile", frozenset())
        assert match_extension("main.rs", frozenset())

    def test_case_insensitive_membership(self) -> None:
        """Extensions compare case-insensitively."""
        allowed = frozenset({"rs", "toml"})
        assert match_extension("main.RS", allowed)
        assert match_extension("Cargo.toml", allowed)
        assert not match_extension("README.md", allowed)

    def test_no_extension_excluded_when_filtering(self) -> None:
        """Files without an extension fail a non-empty allow-set."""
        allowed = frozenset({"rs"})
        assert not match_extension("Makefile", allowed)
        assert not match_extension(".rs", allowed)
