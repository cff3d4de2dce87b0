"""Exception classes raised by the cfgtree configuration engine."""


class ConfigError(Exception):
    """Base exception of cfgtree.

    Every error raised while loading, querying, modifying or writing a
    configuration derives from this class.
    """


class ConfigKeyError(ConfigError, KeyError):
    """Raised when a parameter key does not exist or is invalid.

    This exception is raised when looking up a key which is not part of
    the configuration, when a key violates the key grammar, or when a
    write would require an intermediate node (e.g. a list element) that
    does not exist.
    """

    def __str__(self) -> str:
        # KeyError would return the repr of the message
        return Exception.__str__(self)


class ConfigTypeError(ConfigError, TypeError):
    """Raised when a parameter exists but holds an incompatible type.

    This exception is raised by typed accessors if the stored value cannot
    be converted losslessly to the requested type, and by setters which
    would change the type of an existing parameter.
    """


class CastOverflowError(ConfigTypeError):
    """Raised when a checked cast exceeds the target type's maximum."""


class CastUnderflowError(ConfigTypeError):
    """Raised when a checked cast falls below the target type's minimum."""


class ConfigParseError(ConfigError):
    """Raised when a configuration document or literal cannot be parsed.

    This exception is raised for malformed TOML, JSON, YAML or libconfig
    input, for files which cannot be read, and for malformed date/time
    literals.
    """


class ConfigValueError(ConfigError, ValueError):
    """Raised when a well-typed value violates a domain constraint.

    Examples are invalid calendar dates, invalid times of day (including
    leap seconds), time offsets of 24 hours or more, and empty search
    strings for placeholder replacement.
    """


class FeatureNotAvailableError(ConfigError, RuntimeError):
    """Raised when an optional format backend is not installed.

    The libconfig bridge requires the optional ``libconf`` package. Using
    it without the package installed raises this exception.
    """
