"""
TOML import and export of configurations.

Documents are parsed with ``tomlkit``. Date and time values are re-parsed
from their source text, since the standard library types ``tomlkit``
returns only hold microseconds.
"""

import datetime as _dt
from collections.abc import Mapping
from typing import Any

import tomlkit
from tomlkit import items
from tomlkit.exceptions import TOMLKitError

from cfgtree.config.configuration import Configuration
from cfgtree.config.errors import ConfigParseError, ConfigValueError
from cfgtree.config.keys import join_key, key_for_list_element
from cfgtree.config.temporal import Date, DateTime, Time
from cfgtree.formats.builder import configuration_from_mapping, read_document
from cfgtree.formats.constants import FORMAT_TOML
from cfgtree.formats.policy import NullValuePolicy
from cfgtree.utils.logging_config import get_logger

logger = get_logger(__name__)


def _parse_temporal(node: Any, key: str) -> Date | Time | DateTime:
    text = node.as_string() if isinstance(node, items.Item) else node.isoformat()
    try:
        # datetime is a subclass of date
        if isinstance(node, _dt.datetime):
            return DateTime.from_string(text)
        if isinstance(node, _dt.date):
            return Date.from_string(text)
        return Time.from_string(text)
    except ConfigValueError as e:
        raise ConfigParseError(f"Invalid date/time parameter `{key}`: {e}") from e


def _to_native(node: Any, key: str) -> Any:
    """Convert a ``tomlkit`` item into plain containers and cfgtree values."""
    # Containers unwrap booleans, arrays hold them as items
    if isinstance(node, bool):
        return node
    if isinstance(node, items.Bool):
        return node.value
    if isinstance(node, Mapping):
        return {
            name: _to_native(child, join_key(key, name))
            for name, child in node.items()
        }
    if isinstance(node, list):
        return [
            _to_native(element, key_for_list_element(key, index))
            for index, element in enumerate(node)
        ]
    if isinstance(node, (_dt.date, _dt.time)):
        return _parse_temporal(node, key)
    if isinstance(node, int):
        return int(node)
    if isinstance(node, float):
        return float(node)
    if isinstance(node, str):
        return str(node)
    raise ConfigParseError(
        f"Unsupported TOML value of type `{type(node).__name__}` for parameter `{key}`!"
    )


def load_toml_string(toml_string: str) -> Configuration:
    """
    Load a configuration from a TOML string.

    :param toml_string: TOML document
    :type toml_string: str
    :return: The loaded configuration
    :rtype: Configuration
    :raises ConfigParseError: If the document is invalid
    """
    try:
        document = tomlkit.parse(toml_string)
    except (TOMLKitError, ValueError) as e:
        raise ConfigParseError(f"Parsing TOML string failed: {e}") from e

    # TOML has no null values
    return configuration_from_mapping(
        _to_native(document, ""), NullValuePolicy.FAIL, FORMAT_TOML
    )


def load_toml_file(path: str) -> Configuration:
    """Load a configuration from a TOML file."""
    logger.debug(f"Loading TOML configuration from {path!r}")
    return load_toml_string(read_document(path))


def _temporal_item(node: Date | Time | DateTime, key: str) -> items.Item:
    """
    Create a ``tomlkit`` item that renders the full-precision string of ``node``.

    The standard library value carried by the item is truncated to
    microseconds; only the raw text is written.
    """
    text = str(node)
    try:
        if isinstance(node, DateTime):
            stamp = node.to_datetime()
            return items.DateTime(
                stamp.year, stamp.month, stamp.day, stamp.hour, stamp.minute,
                stamp.second, stamp.microsecond, stamp.tzinfo, items.Trivia(), text,
            )
        if isinstance(node, Date):
            day = node.to_date()
            return items.Date(day.year, day.month, day.day, items.Trivia(), text)
        clock = node.to_time()
        return items.Time(
            clock.hour, clock.minute, clock.second, clock.microsecond, None,
            items.Trivia(), text,
        )
    except ValueError as e:
        raise ConfigValueError(
            f"Cannot write parameter `{key}` = {text} as TOML, only the years "
            f"1 to 9999 and seconds up to 59 are supported!"
        ) from e


def _to_item(node: Any, key: str) -> Any:
    """Convert a value node into a ``tomlkit`` item; groups become inline tables."""
    if isinstance(node, (Date, Time, DateTime)):
        return _temporal_item(node, key)
    if isinstance(node, dict):
        table = tomlkit.inline_table()
        for name, child in node.items():
            table.append(name, _to_item(child, join_key(key, name)))
        return table
    if isinstance(node, list):
        array = tomlkit.array()
        for index, element in enumerate(node):
            array.append(_to_item(element, key_for_list_element(key, index)))
        return array
    return tomlkit.item(node)


def _fill_table(container: Any, group: dict[str, Any], key: str) -> None:
    # Values must precede sub-tables, otherwise they would belong to the
    # last table header
    for name, child in group.items():
        if not isinstance(child, dict):
            container.append(name, _to_item(child, join_key(key, name)))
    for name, child in group.items():
        if isinstance(child, dict):
            table = tomlkit.table()
            _fill_table(table, child, join_key(key, name))
            container.append(name, table)


def dump_toml_string(config: Configuration) -> str:
    """
    Serialize a configuration as a TOML document.

    Within each table, scalars and lists are written before sub-tables.
    Groups inside lists become inline tables. Dates and times keep their
    sub-microsecond digits.

    :param config: Configuration to serialize
    :type config: Configuration
    :return: TOML document
    :rtype: str
    :raises ConfigValueError: If a date lies outside the years 1 to 9999,
        which ``tomlkit`` cannot represent
    """
    document = tomlkit.document()
    _fill_table(document, config.to_dict(), "")
    return tomlkit.dumps(document)
