"""
Format bridges for cfgtree.

This package converts between configurations and TOML, JSON, YAML and
libconfig documents. libconfig support requires the optional ``libconf``
package.
"""

# Local application imports
from .json_format import dump_json_string, load_json_file, load_json_string
from .libconfig_format import (
    dump_libconfig_string,
    load_libconfig_file,
    load_libconfig_string,
)
from .loader import dump_string, infer_format, load_file
from .policy import NullValuePolicy
from .toml_format import dump_toml_string, load_toml_file, load_toml_string
from .yaml_format import dump_yaml_string, load_yaml_file, load_yaml_string

__all__ = [
    "NullValuePolicy",
    # TOML
    "load_toml_string",
    "load_toml_file",
    "dump_toml_string",
    # JSON
    "load_json_string",
    "load_json_file",
    "dump_json_string",
    # YAML
    "load_yaml_string",
    "load_yaml_file",
    "dump_yaml_string",
    # libconfig
    "load_libconfig_string",
    "load_libconfig_file",
    "dump_libconfig_string",
    # Any format
    "load_file",
    "infer_format",
    "dump_string",
]
