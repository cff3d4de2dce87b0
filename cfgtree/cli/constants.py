"""Constants of the cfgtree command line tools.

Exit codes, output defaults and the syntax of option values.
"""

# Exit codes
SUCCESS_EXIT_CODE: int = 0
"""The configuration was converted and written."""

ERROR_EXIT_CODE: int = 1
"""Loading, transforming or writing the configuration failed."""

INTERRUPT_EXIT_CODE: int = 1
"""The conversion was interrupted with Ctrl+C."""

# Error display
DEFAULT_MAX_TRACEBACK_LINES: int = 3
"""Number of stack frames shown for configuration errors."""

# Conversion settings
DEFAULT_OUTPUT_FORMAT: str = "toml"
"""Output format used if neither --to nor a known --output extension is given."""

DEFAULT_LOG_LEVEL: str = "WARNING"
"""Log level of the cfgtree loggers while converting."""

REPLACEMENT_SEPARATOR: str = "="
"""Separates search and replacement string of a --replace argument."""
