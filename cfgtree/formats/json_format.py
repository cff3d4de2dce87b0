"""JSON import and export of configurations."""

import json
from typing import Any

from cfgtree.config.configuration import Configuration
from cfgtree.config.errors import ConfigParseError
from cfgtree.config.temporal import Date, DateTime, Time
from cfgtree.formats.builder import configuration_from_mapping, read_document
from cfgtree.formats.constants import FORMAT_JSON, JSON_INDENT, JSON_ROOT_LIST_KEY
from cfgtree.formats.policy import DEFAULT_NULL_VALUE_POLICY, NullValuePolicy
from cfgtree.utils.logging_config import get_logger

logger = get_logger(__name__)


def load_json_string(
    json_string: str,
    null_value_policy: NullValuePolicy = DEFAULT_NULL_VALUE_POLICY,
) -> Configuration:
    """
    Load a configuration from a JSON string.

    A top-level array is stored as the list ``json``.

    :param json_string: JSON document
    :type json_string: str
    :param null_value_policy: How to handle ``null`` values
    :type null_value_policy: NullValuePolicy
    :return: The loaded configuration
    :rtype: Configuration
    :raises ConfigParseError: If the document is invalid
    """
    try:
        document = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Parsing JSON string failed: {e}") from e

    if isinstance(document, list):
        document = {JSON_ROOT_LIST_KEY: document}
    elif not isinstance(document, dict):
        raise ConfigParseError(
            f"The root of a JSON document must be an object or an array, not "
            f"`{type(document).__name__}`!"
        )
    return configuration_from_mapping(document, null_value_policy, FORMAT_JSON)


def load_json_file(
    path: str,
    null_value_policy: NullValuePolicy = DEFAULT_NULL_VALUE_POLICY,
) -> Configuration:
    """Load a configuration from a JSON file."""
    logger.debug(f"Loading JSON configuration from {path!r}")
    return load_json_string(read_document(path), null_value_policy)


def _to_json_value(node: Any) -> Any:
    if isinstance(node, dict):
        return {name: _to_json_value(child) for name, child in node.items()}
    if isinstance(node, list):
        return [_to_json_value(element) for element in node]
    if isinstance(node, (Date, Time, DateTime)):
        return str(node)
    return node


def dump_json_string(config: Configuration) -> str:
    """
    Serialize a configuration as a JSON object.

    JSON has no date/time types, so dates and times are written as their
    RFC 3339 strings and load back as strings.

    :param config: Configuration to serialize
    :type config: Configuration
    :return: Indented JSON document
    :rtype: str
    """
    return json.dumps(
        _to_json_value(config.to_dict()), indent=JSON_INDENT, ensure_ascii=False
    )
