"""Unit tests for cfgtree.formats.builder module."""

from pathlib import Path

import pytest

from cfgtree.config.errors import ConfigParseError
from cfgtree.config.node import ConfigType
from cfgtree.config.temporal import Date, Time
from cfgtree.formats.builder import (
    check_integer,
    configuration_from_mapping,
    member_name,
    read_document,
)
from cfgtree.formats.policy import DEFAULT_NULL_VALUE_POLICY, NullValuePolicy


class TestReadDocument:
    """Tests for read_document function."""

    def test_reads_file_content(self, tmp_path: Path) -> None:
        """Test reading an existing file."""
        path = tmp_path / "config.json"
        path.write_text('{"a": 1}', encoding="utf-8")

        assert read_document(str(path)) == '{"a": 1}'

    def test_missing_file_raises_parse_error(self, tmp_path: Path) -> None:
        """Test the message for files that cannot be opened."""
        path = tmp_path / "missing.json"

        with pytest.raises(ConfigParseError) as exc_info:
            read_document(str(path))

        assert str(exc_info.value) == f'Cannot open file. Check path: "{path}".'


class TestNamesAndIntegers:
    """Tests for member_name and check_integer functions."""

    def test_valid_names(self) -> None:
        """Test that valid names and integer names are accepted."""
        assert member_name("camera_1", "json") == "camera_1"
        assert member_name(42, "yaml") == "42"

    @pytest.mark.parametrize("name", ["", "a b", "a.b", "a[0]", True, None])
    def test_invalid_names_raise_parse_error(self, name: object) -> None:
        """Test that names violating the key grammar are rejected."""
        with pytest.raises(ConfigParseError):
            member_name(name, "yaml")

    def test_check_integer(self) -> None:
        """Test the 64-bit range of document integers."""
        assert check_integer(-(2**63), "a", "json") == -(2**63)
        with pytest.raises(ConfigParseError):
            check_integer(2**63, "a", "json")


class TestConfigurationFromMapping:
    """Tests for configuration_from_mapping function."""

    def test_scalars_lists_and_groups(self) -> None:
        """Test that every node kind is inserted with its type."""
        document = {
            "flag": True,
            "count": 3,
            "ratio": 0.5,
            "name": "x",
            "day": Date(2023, 1, 2),
            "clock": Time(8, 0),
            "matrix": [[1, 2], [3]],
            "items": [{"id": 1}, {"id": 2}],
            "mixed": (1, "a", 2.5),
            "group": {"inner": {"value": 1}},
        }

        config = configuration_from_mapping(document, DEFAULT_NULL_VALUE_POLICY, "json")

        assert config.type("flag") is ConfigType.BOOLEAN
        assert config.type("count") is ConfigType.INTEGER
        assert config.type("ratio") is ConfigType.FLOATING_POINT
        assert config.get_date("day") == Date(2023, 1, 2)
        assert config.get_time("clock") == Time(8, 0)
        assert config.get_integer64_list("matrix[0]") == [1, 2]
        assert config.get_integer64_list("matrix[1]") == [3]
        assert config.get_integer64("items[1].id") == 2
        assert config.size("mixed") == 3
        assert config.get_integer64("group.inner.value") == 1
        assert config.list_parameter_names(recursive=False) == list(document)

    def test_integers_out_of_range_raise(self) -> None:
        """Test that document integers must fit into 64 bits."""
        with pytest.raises(ConfigParseError):
            configuration_from_mapping({"a": [2**64]}, DEFAULT_NULL_VALUE_POLICY, "json")

    def test_unsupported_values_raise(self) -> None:
        """Test that values without a configuration type are rejected."""
        with pytest.raises(ConfigParseError):
            configuration_from_mapping({"a": b"bytes"}, DEFAULT_NULL_VALUE_POLICY, "yaml")
        with pytest.raises(ConfigParseError):
            configuration_from_mapping({"a": {1, 2}}, DEFAULT_NULL_VALUE_POLICY, "yaml")


class TestNullValuePolicies:
    """Tests for the handling of null values."""

    document = {"a": None, "b": [1, None, 2], "c": {"d": None}}

    def test_skip(self) -> None:
        """Test that null values are dropped."""
        config = configuration_from_mapping(self.document, NullValuePolicy.SKIP, "json")

        assert not config.contains("a")
        assert config.get_integer64_list("b") == [1, 2]
        assert config.size("c") == 0

    def test_null_string(self) -> None:
        """Test that null values become the string `null`."""
        config = configuration_from_mapping(self.document, NullValuePolicy.NULL_STRING, "json")

        assert config.get_string("a") == "null"
        assert config.get_string("b[1]") == "null"
        assert config.get_string("c.d") == "null"

    def test_empty_list(self) -> None:
        """Test that null values become empty lists."""
        config = configuration_from_mapping(self.document, NullValuePolicy.EMPTY_LIST, "json")

        assert config.type("a") is ConfigType.LIST
        assert config.size("a") == 0
        assert config.type("b[1]") is ConfigType.LIST
        assert config.size("c.d") == 0

    def test_fail(self) -> None:
        """Test that null values are rejected with the parameter name."""
        with pytest.raises(ConfigParseError) as exc_info:
            configuration_from_mapping({"a": None}, NullValuePolicy.FAIL, "json")

        assert str(exc_info.value) == "Null value occurred while parsing json parameter `a`!"

    def test_fail_in_list(self) -> None:
        """Test the message for null list elements."""
        with pytest.raises(ConfigParseError) as exc_info:
            configuration_from_mapping({"b": [1, None]}, NullValuePolicy.FAIL, "yaml")

        assert "yaml list `b`" in str(exc_info.value)
