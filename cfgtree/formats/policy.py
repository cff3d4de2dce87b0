"""Handling of null values in JSON, YAML and libconfig documents."""

from enum import Enum


class NullValuePolicy(Enum):
    """
    How a loader treats null (``null``/``~``/``None``) values.

    A configuration has no null type, so null values must be dropped,
    replaced or rejected while loading.
    """

    SKIP = "skip"
    """Ignore the parameter (or list element)."""

    NULL_STRING = "null_string"
    """Store the string ``"null"`` instead."""

    EMPTY_LIST = "empty_list"
    """Store an empty list instead."""

    FAIL = "fail"
    """Raise a :class:`ConfigParseError`."""

    def __str__(self) -> str:
        return self.value


DEFAULT_NULL_VALUE_POLICY: NullValuePolicy = NullValuePolicy.SKIP
