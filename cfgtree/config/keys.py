"""Parsing and construction of fully-qualified parameter names (FQNs)."""

import re

from cfgtree.config.constants import KEY_INDEX_PATTERN, KEY_NAME_PATTERN, KEY_SEPARATOR
from cfgtree.config.errors import ConfigKeyError

KeySegment = str | int

_NAME_RE = re.compile(KEY_NAME_PATTERN)
_INDEX_RE = re.compile(KEY_INDEX_PATTERN)
_SEGMENT_RE = re.compile(rf"({KEY_NAME_PATTERN})((?:{KEY_INDEX_PATTERN})*)")


def split_key(key: str) -> list[KeySegment]:
    """
    Split a fully-qualified name into its segments.

    Group members are returned as strings, list indices as integers, e.g.
    ``"a.b[0][1].c"`` yields ``["a", "b", 0, 1, "c"]``.

    :param key: Fully-qualified parameter name
    :type key: str
    :return: Name and index segments in traversal order
    :rtype: list[KeySegment]
    :raises ConfigKeyError: If the key is empty or violates the key grammar
    """
    if not isinstance(key, str) or not key:
        raise ConfigKeyError(f"Invalid parameter name `{key}`!")

    segments: list[KeySegment] = []
    for part in key.split(KEY_SEPARATOR):
        match = _SEGMENT_RE.fullmatch(part)
        if match is None:
            raise ConfigKeyError(f"Invalid parameter name `{key}`!")
        segments.append(match.group(1))
        segments.extend(int(index) for index in _INDEX_RE.findall(match.group(2)))
    return segments


def is_valid_key_name(name: str) -> bool:
    """Return whether ``name`` is a valid single group member name."""
    return isinstance(name, str) and _NAME_RE.fullmatch(name) is not None


def join_key(parent: str, name: str) -> str:
    """Return the FQN of the group member ``name`` below ``parent``."""
    if not parent:
        return name
    return f"{parent}{KEY_SEPARATOR}{name}"


def key_for_list_element(key: str, index: int) -> str:
    """Return the FQN of the list element at ``index``, i.e. ``key[index]``."""
    return f"{key}[{index}]"
