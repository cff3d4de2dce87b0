"""Node types of a configuration tree and helpers operating on raw nodes."""

import copy
import datetime as _dt
from enum import Enum
from typing import Any

from cfgtree.config.casts import INT64
from cfgtree.config.errors import CastOverflowError, CastUnderflowError, ConfigTypeError
from cfgtree.config.temporal import Date, DateTime, Time


class ConfigType(Enum):
    """Type of a node in the configuration tree."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOATING_POINT = "floating_point"
    STRING = "string"
    DATE = "date"
    TIME = "time"
    DATE_TIME = "date_time"
    LIST = "list"
    GROUP = "group"

    def __str__(self) -> str:
        return self.value

    @property
    def is_scalar(self) -> bool:
        """Whether nodes of this type are leaves of the tree."""
        return self not in (ConfigType.LIST, ConfigType.GROUP)


def config_type_of(node: Any) -> ConfigType:
    """
    Return the configuration type of a raw node.

    :param node: Raw node, i.e. a scalar, a temporal value, a list or a dict
    :type node: Any
    :return: The node's type
    :rtype: ConfigType
    :raises ConfigTypeError: If the node is not a supported Python value
    """
    # bool is a subclass of int and must be checked first
    if isinstance(node, bool):
        return ConfigType.BOOLEAN
    if isinstance(node, int):
        return ConfigType.INTEGER
    if isinstance(node, float):
        return ConfigType.FLOATING_POINT
    if isinstance(node, str):
        return ConfigType.STRING
    if isinstance(node, DateTime):
        return ConfigType.DATE_TIME
    if isinstance(node, Date):
        return ConfigType.DATE
    if isinstance(node, Time):
        return ConfigType.TIME
    if isinstance(node, list):
        return ConfigType.LIST
    if isinstance(node, dict):
        return ConfigType.GROUP
    raise ConfigTypeError(
        f"Values of Python type `{type(node).__name__}` are not supported!"
    )


def check_integer_range(value: int) -> int:
    """Return ``value`` if it fits into a signed 64-bit integer."""
    if value > INT64.max_value:  # type: ignore[operator]
        raise CastOverflowError(
            f"Integer {value} exceeds the maximum of `int64` ({INT64.max_value})!"
        )
    if value < INT64.min_value:  # type: ignore[operator]
        raise CastUnderflowError(
            f"Integer {value} is below the minimum of `int64` ({INT64.min_value})!"
        )
    return value


def to_node(value: Any) -> Any:
    """
    Convert a Python value to its canonical scalar node.

    Standard library dates and times become :class:`Date`, :class:`Time` and
    :class:`DateTime`; integers are range checked. Lists and dicts are
    rejected, use the list and group accessors for those.

    :param value: Value to store
    :type value: Any
    :return: Canonical node
    :rtype: Any
    :raises ConfigTypeError: If the value is not a supported scalar
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return check_integer_range(int(value))
    if isinstance(value, (float, str, Date, Time, DateTime)):
        return value
    # datetime.datetime is a subclass of datetime.date
    if isinstance(value, _dt.datetime):
        return DateTime.from_datetime(value)
    if isinstance(value, _dt.date):
        return Date.from_date(value)
    if isinstance(value, _dt.time):
        return Time.from_time(value)
    raise ConfigTypeError(
        f"Values of Python type `{type(value).__name__}` cannot be stored as a "
        f"scalar parameter!"
    )


def nodes_equal(first: Any, second: Any) -> bool:
    """
    Compare two raw nodes structurally.

    Unlike ``==`` on plain Python values, the comparison is type-aware:
    ``1``, ``1.0`` and ``True`` are three different values. Group members
    are compared by name, independent of their order.
    """
    first_type = config_type_of(first)
    if first_type is not config_type_of(second):
        return False

    if first_type is ConfigType.LIST:
        return len(first) == len(second) and all(
            nodes_equal(a, b) for a, b in zip(first, second)
        )
    if first_type is ConfigType.GROUP:
        return first.keys() == second.keys() and all(
            nodes_equal(child, second[name]) for name, child in first.items()
        )
    return first == second


def clone_node(node: Any) -> Any:
    """Return a deep copy of a raw node. Scalars are immutable and shared."""
    return copy.deepcopy(node)
