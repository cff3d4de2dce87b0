"""Constants shared by the cfgtree configuration engine."""

# Key grammar
KEY_NAME_PATTERN: str = r"[A-Za-z0-9_-]+"
KEY_INDEX_PATTERN: str = r"\[([0-9]+)\]"
KEY_SEPARATOR: str = "."

# Characters which a key matcher pattern may contain without being
# compiled into a regular expression
LITERAL_KEY_PATTERN: str = r"^[A-Za-z0-9._-]*$"
WILDCARD: str = "*"

# Missing-key suggestions
MAX_KEY_SUGGESTIONS: int = 3
KEY_SUGGESTION_CUTOFF: float = 0.75

# Calendar and clock limits
MIN_YEAR: int = 0
MAX_YEAR: int = 9999
MAX_DATE_YEAR: int = 65535
MINUTES_PER_DAY: int = 24 * 60
NANOSECONDS_PER_SECOND: int = 1_000_000_000
SUBSECOND_DIGITS: tuple[int, ...] = (1, 2, 3, 6, 9)
DATE_TIME_SEPARATORS: str = "Tt _"
TIME_OFFSET_START: str = "zZ+-"

# Path handling
FILE_URL_PREFIX: str = "file://"
