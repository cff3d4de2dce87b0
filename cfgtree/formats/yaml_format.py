"""
YAML import and export of configurations.

Plain YAML timestamps load as :class:`Date` or :class:`DateTime`. A time of
day has no standard YAML type, it is written with the local tag ``!time``.
The local tags ``!date`` and ``!datetime`` may be used to mark values
explicitly.
"""

from typing import Any

import yaml

from cfgtree.config.configuration import Configuration
from cfgtree.config.errors import ConfigParseError, ConfigValueError
from cfgtree.config.temporal import Date, DateTime, Time
from cfgtree.formats.builder import configuration_from_mapping, read_document
from cfgtree.formats.constants import (
    FORMAT_YAML,
    YAML_DATE_TAG,
    YAML_DATE_TIME_TAG,
    YAML_ROOT_LIST_KEY,
    YAML_TIME_TAG,
    YAML_TIMESTAMP_TAG,
)
from cfgtree.formats.policy import DEFAULT_NULL_VALUE_POLICY, NullValuePolicy
from cfgtree.utils.logging_config import get_logger

logger = get_logger(__name__)


class ConfigLoader(yaml.SafeLoader):
    """Safe YAML loader constructing cfgtree date and time values."""


class ConfigDumper(yaml.SafeDumper):
    """Safe YAML dumper representing cfgtree date and time values."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _construct_timestamp(loader: ConfigLoader, node: yaml.ScalarNode) -> Date | DateTime:
    text = loader.construct_scalar(node)
    try:
        if len(text) > 10:
            return DateTime.from_string(text)
        return Date.from_string(text)
    except (ConfigParseError, ConfigValueError):
        # YAML allows spellings RFC 3339 does not, e.g. `2001-12-14 21:59:43.10 -5`
        value = yaml.constructor.SafeConstructor.construct_yaml_timestamp(loader, node)

    if hasattr(value, "hour"):
        return DateTime.from_datetime(value)
    return Date.from_date(value)


def _construct_date(loader: ConfigLoader, node: yaml.ScalarNode) -> Date:
    return Date.from_string(loader.construct_scalar(node))


def _construct_time(loader: ConfigLoader, node: yaml.ScalarNode) -> Time:
    return Time.from_string(loader.construct_scalar(node))


def _construct_date_time(loader: ConfigLoader, node: yaml.ScalarNode) -> DateTime:
    return DateTime.from_string(loader.construct_scalar(node))


ConfigLoader.add_constructor(YAML_TIMESTAMP_TAG, _construct_timestamp)
ConfigLoader.add_constructor(YAML_DATE_TAG, _construct_date)
ConfigLoader.add_constructor(YAML_TIME_TAG, _construct_time)
ConfigLoader.add_constructor(YAML_DATE_TIME_TAG, _construct_date_time)


def _represent_timestamp(dumper: ConfigDumper, data: Date | DateTime) -> yaml.ScalarNode:
    return dumper.represent_scalar(YAML_TIMESTAMP_TAG, str(data))


def _represent_time(dumper: ConfigDumper, data: Time) -> yaml.ScalarNode:
    return dumper.represent_scalar(YAML_TIME_TAG, str(data))


ConfigDumper.add_representer(Date, _represent_timestamp)
ConfigDumper.add_representer(DateTime, _represent_timestamp)
ConfigDumper.add_representer(Time, _represent_time)


def load_yaml_string(
    yaml_string: str,
    null_value_policy: NullValuePolicy = DEFAULT_NULL_VALUE_POLICY,
) -> Configuration:
    """
    Load a configuration from a YAML string.

    An empty document yields an empty configuration, a top-level sequence
    is stored as the list ``yaml``.

    :param yaml_string: YAML document
    :type yaml_string: str
    :param null_value_policy: How to handle ``null``/``~`` values
    :type null_value_policy: NullValuePolicy
    :return: The loaded configuration
    :rtype: Configuration
    :raises ConfigParseError: If the document is invalid
    """
    try:
        document = yaml.load(yaml_string, Loader=ConfigLoader)  # noqa: S506
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigParseError(f"Parsing YAML string failed: {e}") from e

    if document is None:
        return Configuration()
    if isinstance(document, list):
        document = {YAML_ROOT_LIST_KEY: document}
    elif not isinstance(document, dict):
        raise ConfigParseError(
            f"The root of a YAML document must be a mapping or a sequence, not "
            f"`{type(document).__name__}`!"
        )
    return configuration_from_mapping(document, null_value_policy, FORMAT_YAML)


def load_yaml_file(
    path: str,
    null_value_policy: NullValuePolicy = DEFAULT_NULL_VALUE_POLICY,
) -> Configuration:
    """Load a configuration from a YAML file."""
    logger.debug(f"Loading YAML configuration from {path!r}")
    return load_yaml_string(read_document(path), null_value_policy)


def dump_yaml_string(config: Configuration) -> str:
    """
    Serialize a configuration as a block-style YAML document.

    Parameters keep their order. Dates and date-times are written as YAML
    timestamps, times of day with the ``!time`` tag.
    """
    return yaml.dump(
        config.to_dict(),
        Dumper=ConfigDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
