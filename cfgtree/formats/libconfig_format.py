"""
libconfig import and export of configurations.

The bridge requires the optional ``libconf`` package. libconfig has two
sequence types: *arrays* (``[...]``) hold scalars of a single type, *lists*
(``(...)``) hold arbitrary values. Both load as cfgtree lists. On export,
homogeneous scalar lists become arrays and all other lists become lists.
"""

from typing import Any

try:
    import libconf
except ImportError:
    libconf = None

from cfgtree.config.configuration import Configuration
from cfgtree.config.errors import (
    ConfigParseError,
    ConfigValueError,
    FeatureNotAvailableError,
)
from cfgtree.config.keys import join_key, key_for_list_element
from cfgtree.config.node import ConfigType, config_type_of
from cfgtree.config.temporal import Date, DateTime, Time
from cfgtree.formats.builder import configuration_from_mapping, read_document
from cfgtree.formats.constants import FORMAT_LIBCONFIG
from cfgtree.formats.policy import NullValuePolicy
from cfgtree.utils.logging_config import get_logger

logger = get_logger(__name__)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _require_backend() -> None:
    if libconf is None:
        raise FeatureNotAvailableError(
            "libconfig support requires the optional `libconf` package, install "
            "it via `pip install cfgtree[libconfig]`!"
        )


def _check_arrays(node: Any, key: str) -> None:
    """Verify that every libconfig array holds scalars of a single type."""
    if isinstance(node, dict):
        for name, child in node.items():
            _check_arrays(child, join_key(key, name))
    elif isinstance(node, tuple):
        for index, element in enumerate(node):
            _check_arrays(element, key_for_list_element(key, index))
    elif isinstance(node, list):
        element_types = {config_type_of(element) for element in node}
        if len(element_types) > 1 or any(not t.is_scalar for t in element_types):
            raise ConfigParseError(
                f"Parsing libconfig string failed: mismatched element type in "
                f"array `{key}`!"
            )


def load_libconfig_string(libconfig_string: str) -> Configuration:
    """
    Load a configuration from a libconfig string.

    :param libconfig_string: libconfig document
    :type libconfig_string: str
    :return: The loaded configuration
    :rtype: Configuration
    :raises FeatureNotAvailableError: If ``libconf`` is not installed
    :raises ConfigParseError: If the document is invalid
    """
    _require_backend()
    try:
        document = libconf.loads(libconfig_string)
    except (libconf.ConfigParseError, ValueError) as e:
        raise ConfigParseError(f"Parsing libconfig string failed: {e}") from e

    _check_arrays(document, "")
    # libconfig has no null values
    return configuration_from_mapping(document, NullValuePolicy.FAIL, FORMAT_LIBCONFIG)


def load_libconfig_file(path: str) -> Configuration:
    """Load a configuration from a libconfig file."""
    _require_backend()
    logger.debug(f"Loading libconfig configuration from {path!r}")
    return load_libconfig_string(read_document(path))


def _to_libconfig_value(node: Any, key: str) -> Any:
    if isinstance(node, dict):
        return {
            name: _to_libconfig_value(child, join_key(key, name))
            for name, child in node.items()
        }
    if isinstance(node, list):
        elements = [
            _to_libconfig_value(element, key_for_list_element(key, index))
            for index, element in enumerate(node)
        ]
        element_types = {config_type_of(element) for element in node}
        if len(element_types) != 1 or not next(iter(element_types)).is_scalar:
            return tuple(elements)
        if element_types == {ConfigType.INTEGER} and any(
            not _INT32_MIN <= element <= _INT32_MAX for element in elements
        ):
            # Array elements must share a type, so all become 64-bit
            return [libconf.LibconfInt64(element) for element in elements]
        return elements
    if isinstance(node, (Date, Time, DateTime)):
        logger.warning(
            f"libconfig has no date/time type, parameter `{key}` is written as "
            f"a string"
        )
        return str(node)
    return node


def dump_libconfig_string(config: Configuration) -> str:
    """
    Serialize a configuration in libconfig syntax.

    Dates and times are written as strings, since libconfig has no such
    types.

    :param config: Configuration to serialize
    :type config: Configuration
    :return: libconfig document
    :rtype: str
    :raises FeatureNotAvailableError: If ``libconf`` is not installed
    :raises ConfigValueError: If a parameter name is not a valid libconfig
        setting name (e.g. it starts with a digit)
    """
    _require_backend()
    document = _to_libconfig_value(config.to_dict(), "")
    try:
        return libconf.dumps(document)
    except libconf.ConfigSerializeError as e:
        raise ConfigValueError(f"Cannot serialize configuration as libconfig: {e}") from e
