"""Loading of configuration files with a format inferred from the extension."""

import os

from cfgtree.config.configuration import Configuration
from cfgtree.config.errors import ConfigParseError
from cfgtree.formats.constants import (
    FORMAT_EXTENSIONS,
    FORMAT_JSON,
    FORMAT_LIBCONFIG,
    FORMAT_TOML,
    FORMAT_YAML,
)
from cfgtree.formats.json_format import dump_json_string, load_json_file
from cfgtree.formats.libconfig_format import dump_libconfig_string, load_libconfig_file
from cfgtree.formats.policy import DEFAULT_NULL_VALUE_POLICY, NullValuePolicy
from cfgtree.formats.toml_format import dump_toml_string, load_toml_file
from cfgtree.formats.yaml_format import dump_yaml_string, load_yaml_file

_DUMPERS = {
    FORMAT_TOML: dump_toml_string,
    FORMAT_JSON: dump_json_string,
    FORMAT_YAML: dump_yaml_string,
    FORMAT_LIBCONFIG: dump_libconfig_string,
}


def infer_format(path: str) -> str:
    """
    Return the configuration format of a file based on its extension.

    :param path: File name or path
    :type path: str
    :return: One of ``toml``, ``json``, ``yaml`` or ``libconfig``
    :rtype: str
    :raises ConfigParseError: If the extension is unknown

    Example:
        >>> infer_format("settings/camera.yml")
        'yaml'
    """
    extension = os.path.splitext(path)[1].lower()
    try:
        return FORMAT_EXTENSIONS[extension]
    except KeyError as e:
        supported = ", ".join(sorted(FORMAT_EXTENSIONS))
        raise ConfigParseError(
            f"Cannot infer the configuration format of \"{path}\". Supported "
            f"extensions are: {supported}."
        ) from e


def load_file(
    path: str,
    null_value_policy: NullValuePolicy = DEFAULT_NULL_VALUE_POLICY,
) -> Configuration:
    """
    Load a configuration file in any supported format.

    :param path: Path to a TOML, JSON, YAML or libconfig file
    :type path: str
    :param null_value_policy: How to handle null values (JSON and YAML only)
    :type null_value_policy: NullValuePolicy
    :return: The loaded configuration
    :rtype: Configuration
    :raises ConfigParseError: If the format is unknown, or the file cannot
        be read or parsed
    :raises FeatureNotAvailableError: For libconfig files if ``libconf`` is
        not installed
    """
    file_format = infer_format(path)
    if file_format == FORMAT_TOML:
        return load_toml_file(path)
    if file_format == FORMAT_JSON:
        return load_json_file(path, null_value_policy)
    if file_format == FORMAT_YAML:
        return load_yaml_file(path, null_value_policy)
    return load_libconfig_file(path)


def dump_string(config: Configuration, file_format: str) -> str:
    """
    Serialize a configuration in the given format.

    :param config: Configuration to serialize
    :type config: Configuration
    :param file_format: One of ``toml``, ``json``, ``yaml`` or ``libconfig``
    :type file_format: str
    :return: Serialized configuration
    :rtype: str
    :raises ValueError: If the format is unknown
    """
    try:
        dumper = _DUMPERS[file_format]
    except KeyError as e:
        raise ValueError(f"Unknown configuration format '{file_format}'") from e
    return dumper(config)
