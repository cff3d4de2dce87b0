"""Unit tests for the path, placeholder and nesting utilities of Configuration."""

import os
from pathlib import Path

import pytest

from cfgtree.config.configuration import Configuration
from cfgtree.config.errors import (
    ConfigKeyError,
    ConfigParseError,
    ConfigTypeError,
    ConfigValueError,
)
from cfgtree.config.keymatcher import KeyMatcher
from cfgtree.config.node import ConfigType
from cfgtree.formats.policy import NullValuePolicy


@pytest.fixture
def path_config() -> Configuration:
    """Provide a configuration holding several kinds of paths."""
    config = Configuration()
    config.set_string("paths.image", "img/a.png")
    config.set_string("paths.absolute", "/data/b.png")
    config.set_string("paths.url", "file://c.png")
    config.set_string("paths.empty", "")
    config.set_string_list("paths.list", ["d.png", "/e.png"])
    config.set_string("other", "x.png")
    return config


class TestAdjustRelativePaths:
    """Tests for Configuration.adjust_relative_paths method."""

    def test_relative_paths_are_prefixed(self, path_config: Configuration) -> None:
        """Test that only matched, relative, non-empty paths change."""
        changed = path_config.adjust_relative_paths("/base", ["paths.*"])

        assert changed is True
        assert path_config.get_string("paths.image") == os.path.join("/base", "img/a.png")
        assert path_config.get_string("paths.absolute") == "/data/b.png"
        assert path_config.get_string("paths.url") == "file://" + os.path.join("/base", "c.png")
        assert path_config.get_string("paths.empty") == ""
        assert path_config.get_string_list("paths.list") == [
            os.path.join("/base", "d.png"),
            "/e.png",
        ]
        assert path_config.get_string("other") == "x.png"

    def test_literal_pattern(self, path_config: Configuration) -> None:
        """Test adjusting a single parameter."""
        changed = path_config.adjust_relative_paths("base", "other")

        assert changed is True
        assert path_config.get_string("other") == os.path.join("base", "x.png")
        assert path_config.get_string("paths.image") == "img/a.png"

    def test_key_matcher_and_no_change(self, path_config: Configuration) -> None:
        """Test that a KeyMatcher is accepted and unchanged trees report False."""
        matcher = KeyMatcher(["paths.absolute", "missing.*"])

        assert path_config.adjust_relative_paths("/base", matcher) is False

    def test_matched_non_string_raises(self) -> None:
        """Test that matched parameters must be strings."""
        config = Configuration()
        config.set_integer64("paths.count", 3)

        with pytest.raises(ConfigTypeError):
            config.adjust_relative_paths("/base", "paths.*")


class TestReplaceStringPlaceholders:
    """Tests for Configuration.replace_string_placeholders method."""

    def test_replacements_apply_to_all_strings(self) -> None:
        """Test replacing in scalars, list elements and nested groups."""
        # Arrange
        config = Configuration()
        config.set_string("dir", "$HOME/data")
        config.set_string("nested.file", "$HOME/$NAME.txt")
        config.set_string_list("list", ["$NAME", "plain"])
        config.set_integer64("count", 1)

        # Act
        changed = config.replace_string_placeholders(
            [("$HOME", "/home/user"), ("$NAME", "run")]
        )

        # Assert
        assert changed is True
        assert config.get_string("dir") == "/home/user/data"
        assert config.get_string("nested.file") == "/home/user/run.txt"
        assert config.get_string_list("list") == ["run", "plain"]
        assert config.get_integer64("count") == 1

    def test_replacements_are_applied_in_order(self) -> None:
        """Test that later pairs see the result of earlier ones."""
        config = Configuration()
        config.set_string("value", "a")

        config.replace_string_placeholders([("a", "b"), ("b", "c")])

        assert config.get_string("value") == "c"

    def test_no_match_returns_false(self) -> None:
        """Test the return value for unchanged configurations."""
        config = Configuration()
        config.set_string("value", "text")

        assert config.replace_string_placeholders([("$X", "y")]) is False

    def test_empty_search_string_raises(self) -> None:
        """Test that empty search strings are rejected before any change."""
        config = Configuration()
        config.set_string("value", "$X")

        with pytest.raises(ConfigValueError):
            config.replace_string_placeholders([("$X", "y"), ("", "z")])

        assert config.get_string("value") == "$X"


class TestLoadNestedConfiguration:
    """Tests for Configuration.load_nested_configuration method."""

    @pytest.fixture
    def nested_file(self, tmp_path: Path) -> Path:
        """Write a nested JSON configuration."""
        path = tmp_path / "nested.json"
        path.write_text('{"value": 1, "sub": {"name": "x"}, "empty": null}', encoding="utf-8")
        return path

    def test_string_is_replaced_by_group(self, nested_file: Path) -> None:
        """Test loading a file into the configuration."""
        config = Configuration()
        config.set_string("nested", str(nested_file))

        config.load_nested_configuration("nested")

        assert config.type("nested") is ConfigType.GROUP
        assert config.get_integer64("nested.value") == 1
        assert config.get_string("nested.sub.name") == "x"
        assert not config.contains("nested.empty")

    def test_null_value_policy_is_forwarded(self, nested_file: Path) -> None:
        """Test that the policy applies to the nested file."""
        config = Configuration()
        config.set_string("nested", str(nested_file))

        config.load_nested_configuration("nested", NullValuePolicy.NULL_STRING)

        assert config.get_string("nested.empty") == "null"

    def test_missing_file_keeps_parameter(self, tmp_path: Path) -> None:
        """Test that a failed load leaves the file name in place."""
        config = Configuration()
        missing = str(tmp_path / "missing.json")
        config.set_string("nested", missing)

        with pytest.raises(ConfigParseError):
            config.load_nested_configuration("nested")

        assert config.get_string("nested") == missing

    def test_invalid_parameters_raise(self, nested_file: Path) -> None:
        """Test missing keys, non-strings and list elements."""
        config = Configuration()
        config.set_integer64("number", 1)
        config.set_string_list("files", [str(nested_file)])

        with pytest.raises(ConfigKeyError):
            config.load_nested_configuration("missing")
        with pytest.raises(ConfigTypeError):
            config.load_nested_configuration("number")
        with pytest.raises(ConfigTypeError):
            config.load_nested_configuration("files[0]")
