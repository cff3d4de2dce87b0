"""
cfgtree: a strongly-typed, format-agnostic configuration engine.

Configurations are loaded from TOML, JSON, YAML or libconfig documents into a
single typed tree, queried and modified through fully-qualified parameter
names, and written back in any of these formats.

Example:
    >>> from cfgtree import load_toml_string
    >>> config = load_toml_string("[camera]\\nfps = 30")
    >>> config.get_integer32("camera.fps")
    30
"""

# Local application imports
from .config import (
    CastOverflowError,
    CastUnderflowError,
    ConfigError,
    ConfigKeyError,
    ConfigParseError,
    ConfigType,
    ConfigTypeError,
    Configuration,
    ConfigValueError,
    Date,
    DateTime,
    FeatureNotAvailableError,
    KeyMatcher,
    Point2D,
    Point3D,
    Time,
    TimeOffset,
)
from .formats import (
    NullValuePolicy,
    dump_json_string,
    dump_libconfig_string,
    dump_toml_string,
    dump_yaml_string,
    infer_format,
    load_file,
    load_json_file,
    load_json_string,
    load_libconfig_file,
    load_libconfig_string,
    load_toml_file,
    load_toml_string,
    load_yaml_file,
    load_yaml_string,
)

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Configuration",
    "ConfigType",
    "KeyMatcher",
    "Date",
    "Time",
    "TimeOffset",
    "DateTime",
    "Point2D",
    "Point3D",
    "NullValuePolicy",
    # Loading and serialization
    "load_file",
    "infer_format",
    "load_toml_string",
    "load_toml_file",
    "dump_toml_string",
    "load_json_string",
    "load_json_file",
    "dump_json_string",
    "load_yaml_string",
    "load_yaml_file",
    "dump_yaml_string",
    "load_libconfig_string",
    "load_libconfig_file",
    "dump_libconfig_string",
    # Error classes
    "ConfigError",
    "ConfigKeyError",
    "ConfigTypeError",
    "CastOverflowError",
    "CastUnderflowError",
    "ConfigParseError",
    "ConfigValueError",
    "FeatureNotAvailableError",
]
