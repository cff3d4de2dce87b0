"""Wildcard matching of fully-qualified parameter names."""

import re
from collections.abc import Iterable

from cfgtree.config.constants import LITERAL_KEY_PATTERN, WILDCARD

_LITERAL_RE = re.compile(LITERAL_KEY_PATTERN)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """
    Translate a key pattern into an anchored regular expression.

    Every character is matched literally, except for ``*`` which matches
    any (possibly empty) sequence of characters, including ``.`` and
    ``[``/``]``. Thus, ``"a.*.b"`` matches ``"a.x.b"`` and ``"a.x.y.b"``.

    :param pattern: Key pattern, optionally containing ``*`` wildcards
    :type pattern: str
    :return: Compiled expression matching the whole key
    :rtype: re.Pattern[str]
    """
    expression = "".join(".*" if char == WILDCARD else re.escape(char) for char in pattern)
    return re.compile(f"^{expression}$")


class KeyMatcher:
    """
    Matches keys against a set of literal or wildcard patterns.

    Patterns consisting only of key characters (alphanumerics, ``.``, ``_``
    and ``-``) are compared exactly and case-sensitively. All other
    patterns are compiled once, at registration. A key matches if any
    registered pattern matches.

    The matcher does not parse the key grammar, so a wildcard may match
    keys which could never exist. It is meant to select keys of an
    existing configuration.
    """

    def __init__(self, patterns: str | Iterable[str] | None = None):
        """
        Initialize the matcher.

        :param patterns: A single pattern, several patterns, or None
        """
        self._patterns: list[str] = []
        self._literals: set[str] = set()
        self._expressions: list[re.Pattern[str]] = []

        if patterns is None:
            return
        if isinstance(patterns, str):
            patterns = [patterns]
        for pattern in patterns:
            self.register_key(pattern)

    @property
    def patterns(self) -> tuple[str, ...]:
        """Registered patterns in registration order."""
        return tuple(self._patterns)

    def register_key(self, pattern: str) -> None:
        """Add a literal or wildcard pattern."""
        if pattern in self._patterns:
            return
        self._patterns.append(pattern)
        if _LITERAL_RE.match(pattern):
            self._literals.add(pattern)
        else:
            self._expressions.append(compile_pattern(pattern))

    def match(self, key: str) -> bool:
        """Return whether ``key`` matches any registered pattern."""
        if key in self._literals:
            return True
        return any(expression.match(key) for expression in self._expressions)

    def empty(self) -> bool:
        """Return whether no pattern has been registered."""
        return not self._patterns

    def copy(self) -> "KeyMatcher":
        return KeyMatcher(self._patterns)

    __copy__ = copy

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"KeyMatcher({self._patterns!r})"
