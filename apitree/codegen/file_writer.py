"""File writing utilities for generated Python code.

This module provides utilities for validating generated client source and
writing it to local or remote (``upath``) destinations.
"""

from pathlib import Path

from upath import UPath

from apitree.exceptions import OutputError

__all__ = ['PythonFileWriter', 'validate_python_syntax']


def validate_python_syntax(content: str, name: str = '<generated>') -> None:
    """Validate that the content is valid Python code.

    Args:
        content: Python source code as a string.
        name: File name used in error messages.

    Raises:
        SyntaxError: If the code is not valid Python.
    """
    compile(content, name, 'exec')


class PythonFileWriter:
    """Writes generated Python source to files with validation.

    Example:
        >>> writer = PythonFileWriter()
        >>> writer.write(source, 'client/kubernetes.py')
    """

    def __init__(self, validate_syntax: bool = True):
        """Initialize the writer.

        Args:
            validate_syntax: Whether to compile the source before writing.
        """
        self.validate_syntax = validate_syntax

    def write(self, source: str, path: UPath | Path | str) -> str:
        """Write source text to a Python file.

        Args:
            source: The complete module source.
            path: Path where the file should be written.

        Returns:
            The path of the written file.

        Raises:
            SyntaxError: If the source is not valid Python.
            OutputError: If the file cannot be written.
        """
        path = UPath(path)

        if self.validate_syntax:
            validate_python_syntax(source, path.name)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding='utf-8')
        except OSError as e:
            raise OutputError(str(path), cause=e) from e

        return str(path)
