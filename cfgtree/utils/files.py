"""File system helpers used by the format bridges and path utilities."""

import os


def read_ascii_file(path: str) -> list[str]:
    """
    Read a text file line by line.

    Line endings are stripped. Failures to open or decode the file propagate
    as :class:`OSError` (or :class:`UnicodeDecodeError`) to the caller.

    :param path: Path to the file
    :type path: str
    :return: Lines of the file without line endings
    :rtype: list[str]
    """
    with open(path, encoding="utf-8") as file_handle:
        return file_handle.read().splitlines()


def cat_ascii_file(path: str) -> str:
    """Return the whole content of a text file."""
    with open(path, encoding="utf-8") as file_handle:
        return file_handle.read()


def full_file(*parts: str) -> str:
    """
    Join path components.

    Example:
        >>> full_file("configs", "nested", "values.toml")
        'configs/nested/values.toml'
    """
    return os.path.join(*parts)


def is_absolute_path(path: str) -> bool:
    """Return whether ``path`` is absolute on the current platform."""
    return os.path.isabs(path)


def dir_name(path: str) -> str:
    """Return the parent directory of ``path`` (empty for a bare file name)."""
    return os.path.dirname(path)


def create_directory(directory_path: str) -> None:
    """
    Create ``directory_path`` including missing parents.

    Existing directories are accepted.

    :param directory_path: Directory to create
    :type directory_path: str
    :raises ValueError: If directory_path is None
    """
    if directory_path is None:
        raise ValueError("Directory path cannot be None")

    os.makedirs(os.path.abspath(directory_path), exist_ok=True)
