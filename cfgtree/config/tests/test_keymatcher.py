"""Unit tests for cfgtree.config.keymatcher module."""

import copy

import pytest

from cfgtree.config.keymatcher import KeyMatcher, compile_pattern


class TestCompilePattern:
    """Tests for compile_pattern function."""

    def test_wildcard_matches_any_sequence(self) -> None:
        """Test that `*` matches across separators and indices."""
        expression = compile_pattern("a.*.b")

        assert expression.match("a.x.b")
        assert expression.match("a.x.y.b")
        assert expression.match("a.lst[0].b")
        assert not expression.match("a.x.c")

    @pytest.mark.parametrize(
        "pattern,key,expected",
        [
            ("a.*.b", "a.b", False),
            ("a.*.b", "a..b", True),
            ("a.*.b", "ab.b", False),
            ("a.*", "a", False),
            ("a.*", "a.", True),
            ("*.b", "b", False),
            ("a*", "a", True),
            ("lst[*]", "lst[12]", True),
            ("lst[*]", "lst", False),
        ],
    )
    def test_literal_parts_around_wildcards_are_required(
        self, pattern: str, key: str, expected: bool
    ) -> None:
        """Test that separators next to a wildcard must be present."""
        assert bool(compile_pattern(pattern).match(key)) is expected

    def test_special_characters_are_literal(self) -> None:
        """Test that regex metacharacters other than `*` are escaped."""
        expression = compile_pattern("lst[0]*")

        assert expression.match("lst[0]")
        assert expression.match("lst[0].name")
        assert not expression.match("lst0")


class TestKeyMatcher:
    """Tests for KeyMatcher class."""

    def test_empty_matcher_matches_nothing(self) -> None:
        """Test that a matcher without patterns never matches."""
        matcher = KeyMatcher()

        assert matcher.empty()
        assert len(matcher) == 0
        assert not matcher.match("a")

    def test_literal_patterns_are_exact_and_case_sensitive(self) -> None:
        """Test literal matching."""
        matcher = KeyMatcher(["paths.image", "paths.video"])

        assert matcher.match("paths.image")
        assert not matcher.match("paths.Image")
        assert not matcher.match("paths.image2")
        assert not matcher.match("paths")

    def test_single_pattern_string(self) -> None:
        """Test that a single string is a single pattern, not characters."""
        matcher = KeyMatcher("*.path")

        assert len(matcher) == 1
        assert matcher.match("camera.path")
        assert not matcher.match("camera.paths")

    def test_any_pattern_matches(self) -> None:
        """Test matching against several patterns."""
        matcher = KeyMatcher(["a", "b.*"])

        assert matcher.match("a")
        assert matcher.match("b.c")
        assert matcher.match("b.c[0].d")
        assert not matcher.match("c")

    def test_register_key_ignores_duplicates(self) -> None:
        """Test that patterns are registered only once, in order."""
        matcher = KeyMatcher()
        matcher.register_key("x")
        matcher.register_key("y*")
        matcher.register_key("x")

        assert matcher.patterns == ("x", "y*")
        assert matcher.match("yz")

    def test_copy_is_independent(self) -> None:
        """Test that copies do not share registered patterns."""
        matcher = KeyMatcher(["a"])

        duplicate = copy.copy(matcher)
        duplicate.register_key("b")

        assert not matcher.match("b")
        assert duplicate.match("a")
        assert duplicate.match("b")
        assert repr(matcher) == "KeyMatcher(['a'])"
