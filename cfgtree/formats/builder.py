"""
Conversion of parsed documents into a :class:`Configuration`.

The JSON, YAML and libconfig parsers all produce plain Python containers.
This module walks such a tree and inserts every value through the typed
setters of a configuration, so the loaders share one set of rules for
names, integer ranges and null values. Files are read through
:func:`read_document`.
"""

from collections.abc import Mapping
from typing import Any

from cfgtree.config.casts import INT64
from cfgtree.config.configuration import Configuration
from cfgtree.config.errors import ConfigParseError
from cfgtree.config.keys import is_valid_key_name, key_for_list_element
from cfgtree.config.temporal import Date, DateTime, Time
from cfgtree.formats.constants import NULL_STRING
from cfgtree.formats.policy import NullValuePolicy
from cfgtree.utils.files import cat_ascii_file


def read_document(path: str) -> str:
    """
    Read a configuration file.

    :param path: Path to the file
    :type path: str
    :return: File content
    :rtype: str
    :raises ConfigParseError: If the file cannot be opened or decoded
    """
    try:
        return cat_ascii_file(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"Cannot open file. Check path: \"{path}\".") from e


def member_name(name: Any, format_name: str) -> str:
    """
    Validate the name of a document member.

    Integer names (as YAML allows them) are converted to strings.

    :param name: Member name as returned by the parser
    :type name: Any
    :param format_name: Document format, used in error messages
    :type format_name: str
    :return: Valid parameter name
    :rtype: str
    :raises ConfigParseError: If the name is not a valid parameter name
    """
    if isinstance(name, int) and not isinstance(name, bool):
        name = str(name)
    if not is_valid_key_name(name):
        raise ConfigParseError(
            f"Invalid parameter name `{name}` in {format_name} document! Names "
            f"may only contain alphanumeric characters, `_` and `-`."
        )
    return name


def check_integer(value: int, key: str, format_name: str) -> int:
    """Return ``value`` if it is a 64-bit integer, else raise a parse error."""
    if not INT64.min_value <= value <= INT64.max_value:  # type: ignore[operator]
        raise ConfigParseError(
            f"Integer parameter `{key}` in {format_name} document exceeds the "
            f"64-bit range: {value}"
        )
    return value


def configuration_from_mapping(
    mapping: Mapping[Any, Any],
    null_value_policy: NullValuePolicy,
    format_name: str,
) -> Configuration:
    """
    Build a configuration from a parsed document mapping.

    :param mapping: Parsed document or nested mapping
    :type mapping: Mapping[Any, Any]
    :param null_value_policy: How to handle null values
    :type null_value_policy: NullValuePolicy
    :param format_name: Document format, used in error messages
    :type format_name: str
    :return: The configuration
    :rtype: Configuration
    :raises ConfigParseError: On invalid names, out-of-range integers,
        unsupported values or null values with :attr:`NullValuePolicy.FAIL`
    """
    config = Configuration()
    for name, value in mapping.items():
        key = member_name(name, format_name)
        _handle_node(value, config, key, False, null_value_policy, format_name)
    return config


def _handle_null(
    config: Configuration,
    key: str,
    append: bool,
    null_value_policy: NullValuePolicy,
    format_name: str,
) -> None:
    if null_value_policy is NullValuePolicy.SKIP:
        return
    if null_value_policy is NullValuePolicy.NULL_STRING:
        if append:
            config.append(key, NULL_STRING)
        else:
            config.set_string(key, NULL_STRING)
    elif null_value_policy is NullValuePolicy.EMPTY_LIST:
        if append:
            config.append_list(key)
        else:
            config.create_list(key)
    else:
        location = "list" if append else "parameter"
        raise ConfigParseError(
            f"Null value occurred while parsing {format_name} {location} `{key}`!"
        )


def _handle_node(
    node: Any,
    config: Configuration,
    key: str,
    append: bool,
    null_value_policy: NullValuePolicy,
    format_name: str,
) -> None:
    """
    Insert a parsed value into ``config``.

    If ``append`` is set, ``key`` names an existing list and the value is
    appended to it. Otherwise, ``key`` is the name of a new parameter.
    """
    if node is None:
        _handle_null(config, key, append, null_value_policy, format_name)
        return

    if isinstance(node, (list, tuple)):
        if append:
            list_key = key_for_list_element(key, config.size(key))
            config.append_list(key)
        else:
            list_key = key
            config.create_list(key)
        for element in node:
            _handle_node(element, config, list_key, True, null_value_policy, format_name)
        return

    if isinstance(node, Mapping):
        group = configuration_from_mapping(node, null_value_policy, format_name)
        if append:
            config.append(key, group)
        else:
            config.set_group(key, group)
        return

    if isinstance(node, int) and not isinstance(node, bool):
        node = check_integer(node, key, format_name)
    elif not isinstance(node, (bool, float, str, Date, Time, DateTime)):
        raise ConfigParseError(
            f"Unsupported value of Python type `{type(node).__name__}` for "
            f"parameter `{key}` in {format_name} document!"
        )

    if append:
        config.append(key, node)
    elif isinstance(node, bool):
        config.set_boolean(key, node)
    elif isinstance(node, int):
        config.set_integer64(key, node)
    elif isinstance(node, float):
        config.set_double(key, node)
    elif isinstance(node, str):
        config.set_string(key, node)
    elif isinstance(node, DateTime):
        config.set_date_time(key, node)
    elif isinstance(node, Date):
        config.set_date(key, node)
    else:
        config.set_time(key, node)
