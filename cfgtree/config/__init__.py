"""
Configuration value engine for cfgtree.

This package provides the typed configuration tree, its key grammar and
matcher, checked numeric casts, and the date/time value types.
"""

# Local application imports
from .casts import NumericType, checked_cast
from .configuration import Configuration
from .errors import (
    CastOverflowError,
    CastUnderflowError,
    ConfigError,
    ConfigKeyError,
    ConfigParseError,
    ConfigTypeError,
    ConfigValueError,
    FeatureNotAvailableError,
)
from .keymatcher import KeyMatcher
from .keys import is_valid_key_name, join_key, key_for_list_element, split_key
from .node import ConfigType
from .points import Point2D, Point3D
from .temporal import Date, DateTime, Time, TimeOffset

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
    "NumericType",
    # Functions
    "checked_cast",
    "split_key",
    "join_key",
    "key_for_list_element",
    "is_valid_key_name",
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
