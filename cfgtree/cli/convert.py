"""CLI entry point for converting configuration files between formats.

This module loads a configuration in any supported format, optionally
rewrites placeholders, relative paths and nested configuration files, and
writes the result in the requested format.
"""

import sys
import traceback
from argparse import Namespace

from cfgtree.cli.constants import (
    DEFAULT_MAX_TRACEBACK_LINES,
    DEFAULT_OUTPUT_FORMAT,
    ERROR_EXIT_CODE,
    INTERRUPT_EXIT_CODE,
    SUCCESS_EXIT_CODE,
)
from cfgtree.cli.main_parser import build_convert_argument_parser
from cfgtree.config.errors import (
    ConfigError,
    ConfigParseError,
    FeatureNotAvailableError,
)
from cfgtree.formats.loader import dump_string, infer_format, load_file
from cfgtree.formats.policy import NullValuePolicy
from cfgtree.utils.files import create_directory, dir_name
from cfgtree.utils.logging_config import configure_logging, get_logger, log_function_call

logger = get_logger(__name__)


def _output_format(arguments: Namespace) -> str:
    if arguments.to:
        return arguments.to
    if arguments.output:
        return infer_format(arguments.output)
    return DEFAULT_OUTPUT_FORMAT


@log_function_call(logger)
def run_conversion(arguments: Namespace) -> str:
    """
    Load, transform and serialize a configuration.

    Placeholders are replaced first, then relative paths are adjusted, and
    finally nested configurations are loaded, so that nested file names may
    use both.

    :param arguments: Parsed command line arguments
    :type arguments: Namespace
    :return: The serialized configuration
    :rtype: str
    :raises ConfigError: If loading or transforming the configuration fails
    """
    config = load_file(arguments.input, NullValuePolicy(arguments.null_policy))

    if arguments.replace:
        config.replace_string_placeholders(arguments.replace)

    if arguments.path_key:
        base_path = arguments.base_path
        if base_path is None:
            base_path = dir_name(arguments.input)
        config.adjust_relative_paths(base_path, arguments.path_key)

    for key in arguments.load_nested:
        config.load_nested_configuration(key, NullValuePolicy(arguments.null_policy))

    output_format = _output_format(arguments)
    logger.info(f"Converting {arguments.input!r} to {output_format}")
    return dump_string(config, output_format)


def _write_output(text: str, output: str | None) -> None:
    if output is None:
        print(text, end="" if text.endswith("\n") else "\n")
        return

    output_directory = dir_name(output)
    if output_directory:
        create_directory(output_directory)
    with open(output, "w", encoding="utf-8") as output_file:
        output_file.write(text)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point of the cfgtree-convert tool.

    :param argv: Command line arguments, defaults to ``sys.argv[1:]``
    :type argv: list[str] | None
    :return: Exit code (0 for success, 1 for error or interruption)
    :rtype: int
    :raises SystemExit: On argument parsing errors (handled by argparse)
    """
    try:
        parser = build_convert_argument_parser()
        arguments = parser.parse_args(argv)
        configure_logging(arguments.log_level, arguments.log_file)

        _write_output(run_conversion(arguments), arguments.output)

    except KeyboardInterrupt:
        print("\n🛑 Conversion interrupted by user")
        return INTERRUPT_EXIT_CODE
    except FeatureNotAvailableError as e:
        print(f"❌ Missing optional dependency: {e}")
        print("💡 Try installing the extras with: pip install -e .[libconfig]")
        return ERROR_EXIT_CODE
    except ConfigParseError as e:
        print(f"❌ Cannot load configuration: {e}")
        print("💡 Check the file path and the syntax of the configuration file")
        return ERROR_EXIT_CODE
    except ConfigError as e:
        print(f"❌ Configuration error: {e}")
        print("💡 Check the parameter names given on the command line")
        _display_detailed_error_info(e)
        return ERROR_EXIT_CODE
    except OSError as e:
        print(f"❌ File system error: {e}")
        print("💡 Check file permissions and available disk space")
        return ERROR_EXIT_CODE

    return SUCCESS_EXIT_CODE


def _display_detailed_error_info(exception: Exception) -> None:
    """
    Display detailed error information for debugging purposes.

    :param exception: The exception to analyze and display
    :type exception: Exception
    """
    if exception.__cause__ is not None:
        print(f"  ↳ Caused by: {exception.__cause__}")

    print(f"  Exception type: {type(exception).__name__}")

    print("  Last few calls:")
    traceback_lines = traceback.format_tb(exception.__traceback__)
    for line in traceback_lines[-DEFAULT_MAX_TRACEBACK_LINES:]:
        print(f"    {line.strip()}")


def convert_main() -> None:
    """
    Execute the conversion main function and exit with its code.

    :raises SystemExit: Always exits with code from main() function
    """
    sys.exit(main())


if __name__ == "__main__":
    convert_main()
