"""Argument parser of the cfgtree-convert command line tool."""

from argparse import ArgumentParser, ArgumentTypeError

from cfgtree.cli.constants import DEFAULT_LOG_LEVEL, REPLACEMENT_SEPARATOR
from cfgtree.formats.constants import SUPPORTED_FORMATS
from cfgtree.formats.policy import DEFAULT_NULL_VALUE_POLICY, NullValuePolicy
from cfgtree.utils.logging_config import LOG_LEVELS


def parse_replacement(text: str) -> tuple[str, str]:
    """
    Parse a ``SEARCH=REPLACE`` argument.

    The first separator splits the argument, so the replacement may itself
    contain ``=``.

    :param text: Command line argument
    :type text: str
    :return: Search and replacement string
    :rtype: tuple[str, str]
    :raises ArgumentTypeError: If the separator is missing or the search
        string is empty
    """
    search, separator, replacement = text.partition(REPLACEMENT_SEPARATOR)
    if not separator or not search:
        raise ArgumentTypeError(
            f"Invalid replacement '{text}', expected SEARCH{REPLACEMENT_SEPARATOR}REPLACE"
        )
    return search, replacement


def build_convert_argument_parser() -> ArgumentParser:
    """
    Build the argument parser of the conversion tool.

    :return: Configured argument parser
    :rtype: ArgumentParser
    """
    parser = ArgumentParser(
        prog="cfgtree-convert",
        description=(
            "Load a TOML, JSON, YAML or libconfig file and write it in another "
            "configuration format."
        ),
    )
    parser.add_argument(
        "input",
        help="Configuration file, the format is inferred from its extension",
    )
    parser.add_argument(
        "--to",
        choices=SUPPORTED_FORMATS,
        default=None,
        help="Output format (defaults to the format of --output, or toml)",
    )
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Output file (defaults to standard output)",
    )
    parser.add_argument(
        "--null-policy",
        choices=[policy.value for policy in NullValuePolicy],
        default=DEFAULT_NULL_VALUE_POLICY.value,
        help="How to handle null values of JSON and YAML input",
    )
    parser.add_argument(
        "--replace",
        type=parse_replacement,
        action="append",
        default=[],
        metavar="SEARCH=REPLACE",
        help="Replace a placeholder in all string parameters (repeatable)",
    )
    parser.add_argument(
        "--path-key",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Parameter name or wildcard pattern of a relative path (repeatable)",
    )
    parser.add_argument(
        "--base-path",
        default=None,
        help="Base directory for --path-key parameters (defaults to the input's directory)",
    )
    parser.add_argument(
        "--load-nested",
        action="append",
        default=[],
        metavar="KEY",
        help="Replace a file name parameter by the configuration it names (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default=DEFAULT_LOG_LEVEL,
        help="Log level of the cfgtree loggers",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log messages to this file (rotated at 1MB)",
    )
    return parser
