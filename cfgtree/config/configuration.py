"""
Strongly-typed, format-agnostic configuration tree.

A :class:`Configuration` owns a tree of groups (ordered ``dict``), lists and
scalar leaves. Parameters are addressed by fully-qualified names such as
``"camera.resolution[0]"``. Accessors are typed: reading a value as another
type only succeeds if the conversion is lossless, and writing a value never
changes the type of an existing parameter.

Example:
    >>> config = Configuration()
    >>> config.set_integer32("camera.fps", 30)
    >>> config.get_double("camera.fps")
    30.0
    >>> config.type("camera")
    <ConfigType.GROUP: 'group'>
"""

from __future__ import annotations

import difflib
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Any

from cfgtree.config.casts import FLOAT64, INT32, INT64, NumericType, checked_cast
from cfgtree.config.constants import (
    FILE_URL_PREFIX,
    KEY_SUGGESTION_CUTOFF,
    MAX_KEY_SUGGESTIONS,
)
from cfgtree.config.errors import (
    ConfigKeyError,
    ConfigTypeError,
    ConfigValueError,
)
from cfgtree.config.keymatcher import KeyMatcher
from cfgtree.config.keys import KeySegment, join_key, key_for_list_element, split_key
from cfgtree.config.node import (
    ConfigType,
    check_integer_range,
    clone_node,
    config_type_of,
    nodes_equal,
    to_node,
)
from cfgtree.config.points import Point2D, Point3D
from cfgtree.config.temporal import Date, DateTime, Time
from cfgtree.utils.files import full_file, is_absolute_path
from cfgtree.utils.logging_config import get_logger

if TYPE_CHECKING:
    from cfgtree.formats.policy import NullValuePolicy

logger = get_logger(__name__)

_MISSING = object()
_NUMERIC_TYPES = (ConfigType.INTEGER, ConfigType.FLOATING_POINT)
_POINT_COORDINATES = ("x", "y", "z")


def _type_mismatch(key: str, value: Any, expected: ConfigType) -> ConfigTypeError:
    return ConfigTypeError(
        f"Cannot set parameter `{key}` of type `{expected}` from a value of "
        f"Python type `{type(value).__name__}`!"
    )


def _as_boolean(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise _type_mismatch(key, value, ConfigType.BOOLEAN)
    return value


def _as_integer32(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _type_mismatch(key, value, ConfigType.INTEGER)
    try:
        return checked_cast(value, INT32, INT64)
    except ConfigTypeError as e:
        raise type(e)(f"Cannot set parameter `{key}`: {e}") from e


def _as_integer64(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _type_mismatch(key, value, ConfigType.INTEGER)
    try:
        return check_integer_range(int(value))
    except ConfigTypeError as e:
        raise type(e)(f"Cannot set parameter `{key}`: {e}") from e


def _as_double(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _type_mismatch(key, value, ConfigType.FLOATING_POINT)
    return float(value)


def _as_string(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise _type_mismatch(key, value, ConfigType.STRING)
    return value


def _as_temporal(key: str, value: Any, expected: ConfigType) -> Any:
    try:
        node = to_node(value)
    except ConfigTypeError as e:
        raise _type_mismatch(key, value, expected) from e
    if config_type_of(node) is not expected:
        raise _type_mismatch(key, value, expected)
    return node


def _as_date(key: str, value: Any) -> Date:
    return _as_temporal(key, value, ConfigType.DATE)


def _as_time(key: str, value: Any) -> Time:
    return _as_temporal(key, value, ConfigType.TIME)


def _as_date_time(key: str, value: Any) -> DateTime:
    return _as_temporal(key, value, ConfigType.DATE_TIME)


class Configuration:
    """
    A hierarchical configuration of typed parameters.

    The root is always a group. Groups map names to nodes in insertion
    order, lists hold nodes of arbitrary (possibly mixed) types, and leaves
    are booleans, 64-bit integers, floats, strings, :class:`Date`,
    :class:`Time` or :class:`DateTime` values.

    Instances are plain values without shared state: :meth:`copy` and
    :meth:`get_group` return deep copies. Concurrent mutation of a single
    instance requires external synchronization.
    """

    def __init__(self) -> None:
        self._root: dict[str, Any] = {}

    @classmethod
    def _from_root(cls, root: dict[str, Any]) -> Configuration:
        config = cls()
        config._root = root
        return config

    # =========================================================================
    # Identity and structure
    # =========================================================================

    def copy(self) -> Configuration:
        """Return a deep copy of this configuration."""
        return Configuration._from_root(clone_node(self._root))

    def __copy__(self) -> Configuration:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Configuration:
        return self.copy()

    def take(self) -> Configuration:
        """Move the tree into a new configuration, leaving this one empty."""
        taken = Configuration._from_root(self._root)
        self._root = {}
        return taken

    def to_dict(self) -> dict[str, Any]:
        """
        Return a deep copy of the tree as plain Python containers.

        Groups become ``dict``, lists become ``list``, and leaves keep their
        node values (``bool``, ``int``, ``float``, ``str``, :class:`Date`,
        :class:`Time` or :class:`DateTime`).
        """
        return clone_node(self._root)

    def empty(self) -> bool:
        """Return whether the configuration holds no parameters at all."""
        return not self._root

    def size(self, key: str | None = None) -> int:
        """
        Return the number of entries of the root, or of a list or group.

        :param key: FQN of a list or group, or None for the root group
        :type key: str | None
        :return: Number of direct children
        :rtype: int
        :raises ConfigKeyError: If the key does not exist
        :raises ConfigTypeError: If the parameter is a scalar
        """
        if key is None:
            return len(self._root)
        node = self._lookup(key)
        if not isinstance(node, (list, dict)):
            raise ConfigTypeError(
                f"Parameter `{key}` of type `{config_type_of(node)}` has no size, "
                f"only lists and groups do!"
            )
        return len(node)

    def contains(self, key: str) -> bool:
        """Return whether a scalar, list or group exists at ``key``."""
        try:
            return self._find(split_key(key)) is not _MISSING
        except ConfigKeyError:
            return False

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def type(self, key: str) -> ConfigType:
        """Return the type of the parameter at ``key``."""
        return config_type_of(self._lookup(key))

    def equals(self, other: Configuration) -> bool:
        """
        Compare two configurations structurally.

        Both must hold the same parameter names with equal values of equal
        types. In particular, ``1``, ``1.0`` and ``True`` differ.
        """
        return nodes_equal(self._root, other._root)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Configuration({self._root!r})"

    def list_parameter_names(
        self,
        include_array_entries: bool = False,
        recursive: bool = True,
        key: str | None = None,
    ) -> list[str]:
        """
        List the fully-qualified names of all parameters.

        Names are listed in pre-order: a group member is followed by the
        names of its children. Elements of lists are only listed if
        ``include_array_entries`` is set, but groups and lists nested
        inside list elements are always visited in recursive mode, e.g.
        ``"cameras[1].name"``.

        :param include_array_entries: Whether to list ``key[i]`` names
        :type include_array_entries: bool
        :param recursive: Whether to descend into nested groups and lists
        :type recursive: bool
        :param key: Optional group to list, names are then relative to it
        :type key: str | None
        :return: Parameter names
        :rtype: list[str]
        :raises ConfigKeyError: If ``key`` does not exist
        :raises ConfigTypeError: If ``key`` is not a group
        """
        if key is None:
            group = self._root
        else:
            group = self._lookup(key)
            if not isinstance(group, dict):
                raise ConfigTypeError(
                    f"Cannot list the parameters of `{key}`, because it is a "
                    f"`{config_type_of(group)}` and not a group!"
                )

        names: list[str] = []
        self._collect_group_names(group, "", names, include_array_entries, recursive)
        return names

    def _collect_group_names(
        self,
        group: dict[str, Any],
        prefix: str,
        names: list[str],
        include_array_entries: bool,
        recursive: bool,
    ) -> None:
        for name, child in group.items():
            fqn = join_key(prefix, name)
            names.append(fqn)
            if recursive:
                self._collect_child_names(child, fqn, names, include_array_entries)

    def _collect_child_names(
        self, node: Any, fqn: str, names: list[str], include_array_entries: bool
    ) -> None:
        if isinstance(node, dict):
            self._collect_group_names(node, fqn, names, include_array_entries, True)
        elif isinstance(node, list):
            for index, element in enumerate(node):
                element_fqn = key_for_list_element(fqn, index)
                if include_array_entries:
                    names.append(element_fqn)
                self._collect_child_names(
                    element, element_fqn, names, include_array_entries
                )

    # =========================================================================
    # Tree traversal
    # =========================================================================

    def _find(self, segments: Sequence[KeySegment]) -> Any:
        node: Any = self._root
        for segment in segments:
            if isinstance(segment, int):
                if not isinstance(node, list) or segment >= len(node):
                    return _MISSING
            elif not isinstance(node, dict) or segment not in node:
                return _MISSING
            node = node[segment]
        return node

    def _lookup(self, key: str) -> Any:
        node = self._find(split_key(key))
        if node is _MISSING:
            raise self._key_error(key)
        return node

    def _key_error(self, key: str) -> ConfigKeyError:
        candidates = self.list_parameter_names(include_array_entries=True)
        suggestions = difflib.get_close_matches(
            key, candidates, n=MAX_KEY_SUGGESTIONS, cutoff=KEY_SUGGESTION_CUTOFF
        )
        message = f"Key `{key}` does not exist!"
        if suggestions:
            message += " Did you mean: " + ", ".join(f"`{s}`" for s in suggestions) + "?"
        return ConfigKeyError(message)

    def _resolve_for_write(self, key: str) -> tuple[Any, KeySegment]:
        """
        Return the container and member/index that ``key`` refers to.

        Missing intermediate groups are created. Nothing is created if the
        key cannot be resolved, i.e. if it passes through a scalar or needs
        a list element that does not exist.
        """
        segments = split_key(key)
        node: Any = self._root
        for position, segment in enumerate(segments[:-1]):
            if isinstance(segment, int):
                if not isinstance(node, list) or segment >= len(node):
                    raise self._key_error(key)
            elif not isinstance(node, dict):
                raise ConfigKeyError(
                    f"Cannot create parameter `{key}`, because one of its parents "
                    f"is not a group!"
                )
            elif segment not in node:
                # Lists are never created implicitly
                if any(isinstance(s, int) for s in segments[position + 1:]):
                    raise self._key_error(key)
                node[segment] = {}
            node = node[segment]

        leaf = segments[-1]
        if isinstance(leaf, int):
            if not isinstance(node, list) or leaf >= len(node):
                raise self._key_error(key)
        elif not isinstance(node, dict):
            raise ConfigKeyError(
                f"Cannot create parameter `{key}`, because its parent is a "
                f"`{config_type_of(node)}` and not a group!"
            )
        return node, leaf

    def _transform_leaves(
        self, node: Any, prefix: str, transform: Callable[[str, Any], Any]
    ) -> bool:
        if isinstance(node, dict):
            children = [(join_key(prefix, n), n, c) for n, c in node.items()]
        else:
            children = [
                (key_for_list_element(prefix, i), i, c) for i, c in enumerate(node)
            ]

        changed = False
        for fqn, slot, child in children:
            if isinstance(child, (dict, list)):
                changed |= self._transform_leaves(child, fqn, transform)
                continue
            replacement = transform(fqn, child)
            if replacement is not None:
                node[slot] = replacement
                changed = True
        return changed

    # =========================================================================
    # Scalar conversion
    # =========================================================================

    @staticmethod
    def _convert_scalar(
        key: str, node: Any, target: ConfigType, descriptor: NumericType | None
    ) -> Any:
        node_type = config_type_of(node)
        if descriptor is not None and node_type in _NUMERIC_TYPES:
            try:
                return checked_cast(node, descriptor)
            except ConfigTypeError as e:
                raise type(e)(
                    f"Cannot convert numeric parameter `{key}` to `{descriptor}`: {e}"
                ) from e
        if node_type is target:
            return node
        raise ConfigTypeError(
            f"Cannot convert parameter `{key}` of type `{node_type}` to `{target}`!"
        )

    @staticmethod
    def _convert_to_type(key: str, existing_type: ConfigType, value: Any) -> Any:
        value_type = config_type_of(value)
        if value_type is existing_type:
            return value
        if not existing_type.is_scalar:
            raise ConfigTypeError(
                f"Cannot replace parameter `{key}` of type `{existing_type}` by a "
                f"`{value_type}`!"
            )
        if existing_type in _NUMERIC_TYPES and value_type in _NUMERIC_TYPES:
            target = INT64 if existing_type is ConfigType.INTEGER else FLOAT64
            try:
                return checked_cast(value, target)
            except ConfigTypeError as e:
                raise type(e)(
                    f"Cannot set numeric parameter `{key}` of type `{existing_type}`: {e}"
                ) from e
        raise ConfigTypeError(
            f"Changing the type of parameter `{key}` from `{existing_type}` to "
            f"`{value_type}` is not supported!"
        )

    def _get_scalar(
        self, key: str, target: ConfigType, descriptor: NumericType | None = None
    ) -> Any:
        return self._convert_scalar(key, self._lookup(key), target, descriptor)

    def _get_scalar_or(
        self,
        key: str,
        default: Any,
        target: ConfigType,
        descriptor: NumericType | None = None,
    ) -> Any:
        try:
            return self._get_scalar(key, target, descriptor)
        except ConfigKeyError:
            return default

    def _set_scalar(self, key: str, value: Any) -> None:
        existing = self._find(split_key(key))
        if existing is not _MISSING:
            value = self._convert_to_type(key, config_type_of(existing), value)
        container, slot = self._resolve_for_write(key)
        container[slot] = value

    # =========================================================================
    # Scalar accessors
    # =========================================================================

    def get_boolean(self, key: str) -> bool:
        """Return the boolean parameter at ``key``."""
        return self._get_scalar(key, ConfigType.BOOLEAN)

    def get_boolean_or(self, key: str, default: bool) -> bool:
        return self._get_scalar_or(key, default, ConfigType.BOOLEAN)

    def get_optional_boolean(self, key: str) -> bool | None:
        return self._get_scalar_or(key, None, ConfigType.BOOLEAN)

    def set_boolean(self, key: str, value: bool) -> None:
        """Set (or create) the boolean parameter at ``key``."""
        self._set_scalar(key, _as_boolean(key, value))

    def get_integer32(self, key: str) -> int:
        """
        Return the parameter at ``key`` as a 32-bit integer.

        Floating point values without fractional part are converted.

        :raises ConfigKeyError: If the key does not exist
        :raises ConfigTypeError: If the value is no number, has a fractional
            part or exceeds the 32-bit range
        """
        return self._get_scalar(key, ConfigType.INTEGER, INT32)

    def get_integer32_or(self, key: str, default: int) -> int:
        return self._get_scalar_or(key, default, ConfigType.INTEGER, INT32)

    def get_optional_integer32(self, key: str) -> int | None:
        return self._get_scalar_or(key, None, ConfigType.INTEGER, INT32)

    def set_integer32(self, key: str, value: int) -> None:
        """Set (or create) an integer parameter from a 32-bit value."""
        self._set_scalar(key, _as_integer32(key, value))

    def get_integer64(self, key: str) -> int:
        """Return the parameter at ``key`` as a 64-bit integer."""
        return self._get_scalar(key, ConfigType.INTEGER, INT64)

    def get_integer64_or(self, key: str, default: int) -> int:
        return self._get_scalar_or(key, default, ConfigType.INTEGER, INT64)

    def get_optional_integer64(self, key: str) -> int | None:
        return self._get_scalar_or(key, None, ConfigType.INTEGER, INT64)

    def set_integer64(self, key: str, value: int) -> None:
        self._set_scalar(key, _as_integer64(key, value))

    def get_double(self, key: str) -> float:
        """
        Return the parameter at ``key`` as a float.

        Integers are converted if they are exactly representable.
        """
        return self._get_scalar(key, ConfigType.FLOATING_POINT, FLOAT64)

    def get_double_or(self, key: str, default: float) -> float:
        return self._get_scalar_or(key, default, ConfigType.FLOATING_POINT, FLOAT64)

    def get_optional_double(self, key: str) -> float | None:
        return self._get_scalar_or(key, None, ConfigType.FLOATING_POINT, FLOAT64)

    def set_double(self, key: str, value: float) -> None:
        """
        Set (or create) a floating point parameter.

        If ``key`` already holds an integer, the value is stored as an
        integer if that conversion is lossless (``3.0`` becomes ``3``).
        """
        self._set_scalar(key, _as_double(key, value))

    def get_string(self, key: str) -> str:
        """Return the string parameter at ``key``. Other types are not converted."""
        return self._get_scalar(key, ConfigType.STRING)

    def get_string_or(self, key: str, default: str) -> str:
        return self._get_scalar_or(key, default, ConfigType.STRING)

    def get_optional_string(self, key: str) -> str | None:
        return self._get_scalar_or(key, None, ConfigType.STRING)

    def set_string(self, key: str, value: str) -> None:
        self._set_scalar(key, _as_string(key, value))

    def get_date(self, key: str) -> Date:
        return self._get_scalar(key, ConfigType.DATE)

    def get_date_or(self, key: str, default: Date) -> Date:
        return self._get_scalar_or(key, default, ConfigType.DATE)

    def get_optional_date(self, key: str) -> Date | None:
        return self._get_scalar_or(key, None, ConfigType.DATE)

    def set_date(self, key: str, value: Any) -> None:
        """Set a date from a :class:`Date` or a :class:`datetime.date`."""
        self._set_scalar(key, _as_date(key, value))

    def get_time(self, key: str) -> Time:
        return self._get_scalar(key, ConfigType.TIME)

    def get_time_or(self, key: str, default: Time) -> Time:
        return self._get_scalar_or(key, default, ConfigType.TIME)

    def get_optional_time(self, key: str) -> Time | None:
        return self._get_scalar_or(key, None, ConfigType.TIME)

    def set_time(self, key: str, value: Any) -> None:
        """Set a time of day from a :class:`Time` or a :class:`datetime.time`."""
        self._set_scalar(key, _as_time(key, value))

    def get_date_time(self, key: str) -> DateTime:
        return self._get_scalar(key, ConfigType.DATE_TIME)

    def get_date_time_or(self, key: str, default: DateTime) -> DateTime:
        return self._get_scalar_or(key, default, ConfigType.DATE_TIME)

    def get_optional_date_time(self, key: str) -> DateTime | None:
        return self._get_scalar_or(key, None, ConfigType.DATE_TIME)

    def set_date_time(self, key: str, value: Any) -> None:
        """Set a date-time from a :class:`DateTime` or a :class:`datetime.datetime`."""
        self._set_scalar(key, _as_date_time(key, value))

    # =========================================================================
    # Lists
    # =========================================================================

    def _get_list_node(self, key: str) -> list[Any]:
        node = self._lookup(key)
        if not isinstance(node, list):
            raise ConfigTypeError(
                f"Parameter `{key}` is a `{config_type_of(node)}` and not a list!"
            )
        return node

    def _get_list(
        self, key: str, target: ConfigType, descriptor: NumericType | None = None
    ) -> list[Any]:
        return [
            self._convert_scalar(key_for_list_element(key, index), element, target, descriptor)
            for index, element in enumerate(self._get_list_node(key))
        ]

    def _set_list(
        self, key: str, values: Iterable[Any], convert: Callable[[str, Any], Any]
    ) -> None:
        nodes = [
            convert(key_for_list_element(key, index), value)
            for index, value in enumerate(values)
        ]
        existing = self._find(split_key(key))
        if existing is not _MISSING:
            nodes = self._convert_list_for_existing(key, existing, nodes)
        container, slot = self._resolve_for_write(key)
        container[slot] = nodes

    @staticmethod
    def _convert_list_for_existing(
        key: str, existing: Any, nodes: list[Any]
    ) -> list[Any]:
        if not isinstance(existing, list):
            raise ConfigTypeError(
                f"Cannot replace parameter `{key}` of type `{config_type_of(existing)}` "
                f"by a list!"
            )
        if not nodes or not existing:
            return nodes

        element_types = {config_type_of(element) for element in existing}
        if element_types == set(_NUMERIC_TYPES):
            element_type = ConfigType.FLOATING_POINT
        elif len(element_types) == 1:
            (element_type,) = element_types
        else:
            element_type = ConfigType.LIST

        if not element_type.is_scalar:
            raise ConfigTypeError(
                f"Cannot replace list `{key}`, because it holds mixed or nested "
                f"elements!"
            )
        return [
            Configuration._convert_to_type(key_for_list_element(key, index), element_type, node)
            for index, node in enumerate(nodes)
        ]

    def get_boolean_list(self, key: str) -> list[bool]:
        """Return a list of booleans. Every element must be a boolean."""
        return self._get_list(key, ConfigType.BOOLEAN)

    def set_boolean_list(self, key: str, values: Iterable[bool]) -> None:
        self._set_list(key, values, _as_boolean)

    def get_integer32_list(self, key: str) -> list[int]:
        """Return a list of 32-bit integers, converting integral floats."""
        return self._get_list(key, ConfigType.INTEGER, INT32)

    def set_integer32_list(self, key: str, values: Iterable[int]) -> None:
        """
        Create or replace a list of integers.

        Writing integers to an existing list of floating point (or mixed
        numeric) values stores them as floats.
        """
        self._set_list(key, values, _as_integer32)

    def get_integer64_list(self, key: str) -> list[int]:
        return self._get_list(key, ConfigType.INTEGER, INT64)

    def set_integer64_list(self, key: str, values: Iterable[int]) -> None:
        self._set_list(key, values, _as_integer64)

    def get_double_list(self, key: str) -> list[float]:
        """Return a list of floats, converting exactly representable integers."""
        return self._get_list(key, ConfigType.FLOATING_POINT, FLOAT64)

    def set_double_list(self, key: str, values: Iterable[float]) -> None:
        self._set_list(key, values, _as_double)

    def get_string_list(self, key: str) -> list[str]:
        return self._get_list(key, ConfigType.STRING)

    def set_string_list(self, key: str, values: Iterable[str]) -> None:
        self._set_list(key, values, _as_string)

    def get_date_list(self, key: str) -> list[Date]:
        return self._get_list(key, ConfigType.DATE)

    def set_date_list(self, key: str, values: Iterable[Any]) -> None:
        self._set_list(key, values, _as_date)

    def get_time_list(self, key: str) -> list[Time]:
        return self._get_list(key, ConfigType.TIME)

    def set_time_list(self, key: str, values: Iterable[Any]) -> None:
        self._set_list(key, values, _as_time)

    def get_date_time_list(self, key: str) -> list[DateTime]:
        return self._get_list(key, ConfigType.DATE_TIME)

    def set_date_time_list(self, key: str, values: Iterable[Any]) -> None:
        self._set_list(key, values, _as_date_time)

    def create_list(self, key: str) -> None:
        """
        Create an empty list at ``key``.

        :raises ConfigKeyError: If the key is invalid or already exists
        """
        if self.contains(key):
            raise ConfigKeyError(f"Cannot create list `{key}`, because it already exists!")
        container, slot = self._resolve_for_write(key)
        container[slot] = []

    def clear_list(self, key: str) -> None:
        """Remove all elements of the list at ``key``."""
        self._get_list_node(key).clear()

    def append(self, key: str, value: Any) -> None:
        """
        Append a scalar, a temporal value or a group to the list at ``key``.

        :param key: FQN of an existing list
        :type key: str
        :param value: Scalar, date/time value or :class:`Configuration`
        :type value: Any
        :raises ConfigKeyError: If the list does not exist
        :raises ConfigTypeError: If ``key`` is not a list or the value is
            not supported
        """
        node = self._get_list_node(key)
        if isinstance(value, Configuration):
            node.append(clone_node(value._root))
        else:
            node.append(to_node(value))

    def append_list(self, key: str) -> None:
        """Append an empty nested list to the list at ``key``."""
        self._get_list_node(key).append([])

    def is_homogeneous_scalar_list(self, key: str) -> bool:
        """
        Return whether the list at ``key`` holds scalars of a single type.

        Empty lists are homogeneous. Lists mixing integers and floats, or
        holding nested lists or groups, are not.
        """
        element_types = {config_type_of(element) for element in self._get_list_node(key)}
        if not element_types:
            return True
        return len(element_types) == 1 and next(iter(element_types)).is_scalar

    # =========================================================================
    # Compound accessors
    # =========================================================================

    def _get_pair(
        self, key: str, target: ConfigType, descriptor: NumericType
    ) -> tuple[Any, Any]:
        values = self._get_list(key, target, descriptor)
        if len(values) != 2:
            raise ConfigTypeError(
                f"Parameter `{key}` must be a list of exactly 2 values, but it "
                f"holds {len(values)}!"
            )
        return values[0], values[1]

    def _point_from_node(
        self,
        key: str,
        node: Any,
        dimension: int,
        target: ConfigType,
        descriptor: NumericType,
    ) -> Point2D | Point3D:
        if isinstance(node, list):
            if len(node) < dimension:
                raise ConfigTypeError(
                    f"Cannot convert parameter `{key}` to a {dimension}D point, "
                    f"because it holds only {len(node)} values!"
                )
            coordinates = [
                self._convert_scalar(key_for_list_element(key, i), node[i], target, descriptor)
                for i in range(dimension)
            ]
        elif isinstance(node, dict):
            names = _POINT_COORDINATES[:dimension]
            missing = [name for name in names if name not in node]
            if missing:
                raise ConfigTypeError(
                    f"Cannot convert group `{key}` to a {dimension}D point, because "
                    f"it lacks `{'`, `'.join(missing)}`!"
                )
            coordinates = [
                self._convert_scalar(join_key(key, name), node[name], target, descriptor)
                for name in names
            ]
        else:
            raise ConfigTypeError(
                f"Cannot convert parameter `{key}` of type `{config_type_of(node)}` "
                f"to a {dimension}D point!"
            )

        if dimension == 2:
            return Point2D(*coordinates)
        return Point3D(*coordinates)

    def _get_point(
        self, key: str, dimension: int, target: ConfigType, descriptor: NumericType
    ) -> Any:
        return self._point_from_node(key, self._lookup(key), dimension, target, descriptor)

    def _get_points(
        self, key: str, dimension: int, target: ConfigType, descriptor: NumericType
    ) -> list[Any]:
        return [
            self._point_from_node(
                key_for_list_element(key, index), element, dimension, target, descriptor
            )
            for index, element in enumerate(self._get_list_node(key))
        ]

    def get_integer32_pair(self, key: str) -> tuple[int, int]:
        """Return a list of exactly two 32-bit integers as a tuple."""
        return self._get_pair(key, ConfigType.INTEGER, INT32)

    def get_integer64_pair(self, key: str) -> tuple[int, int]:
        return self._get_pair(key, ConfigType.INTEGER, INT64)

    def get_double_pair(self, key: str) -> tuple[float, float]:
        return self._get_pair(key, ConfigType.FLOATING_POINT, FLOAT64)

    def get_integer64_point2d(self, key: str) -> Point2D:
        """
        Return a 2D point with 64-bit integer coordinates.

        The parameter may be a list of at least two numbers or a group with
        ``x`` and ``y`` entries.
        """
        return self._get_point(key, 2, ConfigType.INTEGER, INT64)

    def get_integer64_point3d(self, key: str) -> Point3D:
        return self._get_point(key, 3, ConfigType.INTEGER, INT64)

    def get_double_point2d(self, key: str) -> Point2D:
        return self._get_point(key, 2, ConfigType.FLOATING_POINT, FLOAT64)

    def get_double_point3d(self, key: str) -> Point3D:
        return self._get_point(key, 3, ConfigType.FLOATING_POINT, FLOAT64)

    def get_integer64_points2d(self, key: str) -> list[Point2D]:
        """Return a list of 2D points, e.g. the vertices of a polygon."""
        return self._get_points(key, 2, ConfigType.INTEGER, INT64)

    def get_integer64_points3d(self, key: str) -> list[Point3D]:
        return self._get_points(key, 3, ConfigType.INTEGER, INT64)

    def get_double_points2d(self, key: str) -> list[Point2D]:
        return self._get_points(key, 2, ConfigType.FLOATING_POINT, FLOAT64)

    def get_double_points3d(self, key: str) -> list[Point3D]:
        return self._get_points(key, 3, ConfigType.FLOATING_POINT, FLOAT64)

    def get_indices2d(self, key: str) -> list[Point2D]:
        """
        Return a list of 2D pixel indices with 32-bit integer coordinates.

        Points with more than two coordinates are truncated to their first
        two.
        """
        return self._get_points(key, 2, ConfigType.INTEGER, INT32)

    def get_indices3d(self, key: str) -> list[Point3D]:
        return self._get_points(key, 3, ConfigType.INTEGER, INT32)

    # =========================================================================
    # Groups
    # =========================================================================

    def get_group(self, key: str) -> Configuration:
        """
        Return a deep copy of the group at ``key``.

        :raises ConfigKeyError: If the key does not exist
        :raises ConfigTypeError: If the parameter is not a group
        """
        node = self._lookup(key)
        if not isinstance(node, dict):
            raise ConfigTypeError(
                f"Parameter `{key}` is a `{config_type_of(node)}` and not a group!"
            )
        return Configuration._from_root(clone_node(node))

    def set_group(self, key: str, group: Configuration) -> None:
        """
        Insert a copy of ``group`` at ``key``, replacing an existing group.

        :raises ConfigKeyError: If the key is invalid (including ``""``)
        :raises ConfigTypeError: If ``key`` holds a list or scalar
        """
        if not isinstance(group, Configuration):
            raise ConfigTypeError(
                f"Cannot set group `{key}` from a value of Python type "
                f"`{type(group).__name__}`!"
            )
        existing = self._find(split_key(key))
        if existing is not _MISSING and not isinstance(existing, dict):
            raise ConfigTypeError(
                f"Cannot replace parameter `{key}` of type `{config_type_of(existing)}` "
                f"by a group!"
            )
        container, slot = self._resolve_for_write(key)
        container[slot] = clone_node(group._root)

    def delete(self, key: str) -> None:
        """
        Remove the parameter at ``key`` and everything below it.

        :raises ConfigKeyError: If the key is invalid, does not exist or
            refers to a list element
        """
        segments = split_key(key)
        leaf = segments[-1]
        if isinstance(leaf, int):
            raise ConfigKeyError(
                f"Cannot delete `{key}`, because removing list elements is not "
                f"supported!"
            )
        parent = self._find(segments[:-1])
        if not isinstance(parent, dict) or leaf not in parent:
            raise self._key_error(key)
        del parent[leaf]

    # =========================================================================
    # Utilities
    # =========================================================================

    def adjust_relative_paths(
        self, base_path: str, patterns: str | Iterable[str] | KeyMatcher
    ) -> bool:
        """
        Prepend ``base_path`` to relative file paths.

        Every string parameter whose FQN matches one of the patterns and
        which holds a relative path is replaced by ``base_path`` joined with
        that path. A ``file://`` prefix is kept in front of the result.

        :param base_path: Directory to resolve relative paths against
        :type base_path: str
        :param patterns: Literal or wildcard FQN patterns, or a KeyMatcher
        :type patterns: str | Iterable[str] | KeyMatcher
        :return: Whether any parameter was changed
        :rtype: bool
        :raises ConfigTypeError: If a matched parameter is not a string
        """
        matcher = patterns if isinstance(patterns, KeyMatcher) else KeyMatcher(patterns)

        def adjust(fqn: str, value: Any) -> str | None:
            if not matcher.match(fqn):
                return None
            if not isinstance(value, str):
                raise ConfigTypeError(
                    f"Parameter `{fqn}` matches a path pattern, but is a "
                    f"`{config_type_of(value)}` and not a string!"
                )
            prefix = ""
            path = value
            if path.startswith(FILE_URL_PREFIX):
                prefix = FILE_URL_PREFIX
                path = path[len(FILE_URL_PREFIX):]
            if not path or is_absolute_path(path):
                return None
            adjusted = prefix + full_file(base_path, path)
            logger.debug(f"Adjusted path `{fqn}`: {value!r} -> {adjusted!r}")
            return adjusted

        return self._transform_leaves(self._root, "", adjust)

    def replace_string_placeholders(
        self, replacements: Iterable[tuple[str, str]]
    ) -> bool:
        """
        Replace substrings in every string parameter.

        The ``(search, replace)`` pairs are applied in order to each string
        leaf, including string elements of lists.

        :param replacements: Pairs of search and replacement strings
        :type replacements: Iterable[tuple[str, str]]
        :return: Whether any parameter was changed
        :rtype: bool
        :raises ConfigValueError: If a search string is empty
        """
        pairs = list(replacements)
        for search, _ in pairs:
            if not search:
                raise ConfigValueError("Search string for placeholder replacement must not be empty!")

        def replace(fqn: str, value: Any) -> str | None:
            if not isinstance(value, str):
                return None
            replaced = value
            for search, replacement in pairs:
                replaced = replaced.replace(search, replacement)
            return replaced if replaced != value else None

        return self._transform_leaves(self._root, "", replace)

    def load_nested_configuration(
        self, key: str, null_value_policy: NullValuePolicy | None = None
    ) -> None:
        """
        Replace a file name parameter by the configuration loaded from it.

        The file format is inferred from the extension. Relative paths are
        resolved against the working directory, see
        :meth:`adjust_relative_paths`.

        :param key: FQN of a string parameter holding the file name
        :type key: str
        :param null_value_policy: How to handle null values of JSON/YAML
            files, defaults to the loader's default
        :type null_value_policy: NullValuePolicy | None
        :raises ConfigKeyError: If the key does not exist
        :raises ConfigTypeError: If the parameter is not a string or is an
            element of a list
        :raises ConfigParseError: If the file cannot be loaded; the parameter
            keeps its file name
        """
        from cfgtree.formats.loader import load_file

        segments = split_key(key)
        file_name = self._lookup(key)
        if not isinstance(file_name, str):
            raise ConfigTypeError(
                f"Cannot load a nested configuration from `{key}`, because it is "
                f"a `{config_type_of(file_name)}` and not a string!"
            )
        if isinstance(segments[-1], int):
            raise ConfigTypeError(
                f"Cannot load a nested configuration into list element `{key}`!"
            )

        if null_value_policy is None:
            nested = load_file(file_name)
        else:
            nested = load_file(file_name, null_value_policy)
        logger.debug(f"Loaded nested configuration `{key}` from {file_name!r}")

        container = self._find(segments[:-1])
        container[segments[-1]] = nested._root

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_toml(self) -> str:
        """Serialize the configuration as a TOML document."""
        from cfgtree.formats.toml_format import dump_toml_string

        return dump_toml_string(self)

    def to_json(self) -> str:
        """Serialize the configuration as a JSON object."""
        from cfgtree.formats.json_format import dump_json_string

        return dump_json_string(self)

    def to_yaml(self) -> str:
        """Serialize the configuration as a YAML document."""
        from cfgtree.formats.yaml_format import dump_yaml_string

        return dump_yaml_string(self)

    def to_libconfig(self) -> str:
        """
        Serialize the configuration in libconfig syntax.

        :raises FeatureNotAvailableError: If ``libconf`` is not installed
        """
        from cfgtree.formats.libconfig_format import dump_libconfig_string

        return dump_libconfig_string(self)
