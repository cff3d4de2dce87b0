"""Constants of the cfgtree format bridges."""

FORMAT_TOML: str = "toml"
FORMAT_JSON: str = "json"
FORMAT_YAML: str = "yaml"
FORMAT_LIBCONFIG: str = "libconfig"

SUPPORTED_FORMATS: tuple[str, ...] = (
    FORMAT_TOML,
    FORMAT_JSON,
    FORMAT_YAML,
    FORMAT_LIBCONFIG,
)

# Lower-case file extensions mapped to their format
FORMAT_EXTENSIONS: dict[str, str] = {
    ".toml": FORMAT_TOML,
    ".json": FORMAT_JSON,
    ".yaml": FORMAT_YAML,
    ".yml": FORMAT_YAML,
    ".cfg": FORMAT_LIBCONFIG,
    ".conf": FORMAT_LIBCONFIG,
    ".libconfig": FORMAT_LIBCONFIG,
}

# A document whose root is a list is stored as a list with this name
JSON_ROOT_LIST_KEY: str = "json"
YAML_ROOT_LIST_KEY: str = "yaml"

NULL_STRING: str = "null"

JSON_INDENT: int = 2

# Local YAML tags for temporal values
YAML_DATE_TAG: str = "!date"
YAML_TIME_TAG: str = "!time"
YAML_DATE_TIME_TAG: str = "!datetime"
YAML_TIMESTAMP_TAG: str = "tag:yaml.org,2002:timestamp"
