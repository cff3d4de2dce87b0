"""Unit tests for cfgtree.config.node module."""

import datetime

import pytest

from cfgtree.config.errors import CastOverflowError, CastUnderflowError, ConfigTypeError
from cfgtree.config.node import (
    ConfigType,
    check_integer_range,
    clone_node,
    config_type_of,
    nodes_equal,
    to_node,
)
from cfgtree.config.temporal import Date, DateTime, Time


class TestConfigType:
    """Tests for ConfigType enum."""

    def test_str_returns_type_name(self) -> None:
        """Test the names used in messages."""
        assert str(ConfigType.FLOATING_POINT) == "floating_point"
        assert str(ConfigType.DATE_TIME) == "date_time"

    def test_is_scalar(self) -> None:
        """Test that only lists and groups are not scalar."""
        scalar_types = [t for t in ConfigType if t.is_scalar]

        assert ConfigType.LIST not in scalar_types
        assert ConfigType.GROUP not in scalar_types
        assert len(scalar_types) == 7


class TestConfigTypeOf:
    """Tests for config_type_of function."""

    @pytest.mark.parametrize(
        "node,expected",
        [
            (True, ConfigType.BOOLEAN),
            (0, ConfigType.INTEGER),
            (0.0, ConfigType.FLOATING_POINT),
            ("", ConfigType.STRING),
            (Date(2023, 1, 1), ConfigType.DATE),
            (Time(8, 0), ConfigType.TIME),
            (DateTime(Date(2023, 1, 1), Time(8, 0)), ConfigType.DATE_TIME),
            ([], ConfigType.LIST),
            ({}, ConfigType.GROUP),
        ],
    )
    def test_supported_nodes(self, node: object, expected: ConfigType) -> None:
        """Test the type of every supported node."""
        assert config_type_of(node) is expected

    def test_unsupported_node_raises_type_error(self) -> None:
        """Test that other Python values are rejected."""
        with pytest.raises(ConfigTypeError):
            config_type_of(None)
        with pytest.raises(ConfigTypeError):
            config_type_of((1, 2))


class TestToNode:
    """Tests for to_node and check_integer_range functions."""

    def test_scalars_are_returned_unchanged(self) -> None:
        """Test that canonical scalars pass through."""
        assert to_node(True) is True
        assert to_node(3) == 3
        assert to_node("x") == "x"
        assert to_node(Date(2023, 1, 1)) == Date(2023, 1, 1)

    def test_standard_library_temporal_values(self) -> None:
        """Test the conversion of datetime module values."""
        assert to_node(datetime.date(2023, 1, 2)) == Date(2023, 1, 2)
        assert to_node(datetime.time(8, 30)) == Time(8, 30)
        converted = to_node(datetime.datetime(2023, 1, 2, 8, 30))
        assert isinstance(converted, DateTime)
        assert converted.date == Date(2023, 1, 2)

    def test_containers_are_rejected(self) -> None:
        """Test that lists and dicts cannot be stored as scalars."""
        with pytest.raises(ConfigTypeError):
            to_node([1])
        with pytest.raises(ConfigTypeError):
            to_node({"a": 1})

    def test_integer_range(self) -> None:
        """Test the 64-bit limits."""
        assert check_integer_range(2**63 - 1) == 2**63 - 1
        with pytest.raises(CastOverflowError):
            to_node(2**63)
        with pytest.raises(CastUnderflowError):
            check_integer_range(-(2**63) - 1)


class TestNodesEqual:
    """Tests for nodes_equal and clone_node functions."""

    def test_numeric_types_differ(self) -> None:
        """Test that 1, 1.0 and True are different nodes."""
        assert not nodes_equal(1, 1.0)
        assert not nodes_equal(1, True)
        assert nodes_equal(1.5, 1.5)

    def test_group_member_order_is_ignored(self) -> None:
        """Test that groups compare by member names."""
        assert nodes_equal({"a": 1, "b": [2, {"c": 3}]}, {"b": [2, {"c": 3}], "a": 1})
        assert not nodes_equal({"a": 1}, {"a": 1, "b": 2})

    def test_list_order_matters(self) -> None:
        """Test that lists compare element-wise."""
        assert not nodes_equal([1, 2], [2, 1])
        assert not nodes_equal([1], [1, 1])

    def test_clone_is_deep(self) -> None:
        """Test that cloned trees are independent."""
        tree = {"a": {"b": [1, 2]}}

        clone = clone_node(tree)
        clone["a"]["b"].append(3)

        assert tree == {"a": {"b": [1, 2]}}
