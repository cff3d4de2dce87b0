"""
Utility modules for cfgtree.

This package provides the logging setup and file system helpers used
across the cfgtree codebase. Import directly from specific modules to avoid
circular dependencies.

Example:
    from cfgtree.utils.logging_config import get_logger
    from cfgtree.utils.files import cat_ascii_file
"""

from cfgtree.utils.logging_config import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
