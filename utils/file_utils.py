from __future__ import annotations

import os
from pathlib import Path

from models.conversion_models import LANGUAGE_TEMPLATES

__all__: list[str] = [
    "FileMissingError",
    "FileUtils",
    "FileUtilsError",
    "InvalidFileTypeError",
    "UnsupportedFileFormatError",
]


class FileUtils:
    """Utility class for file operations with safety checks.

    Provides methods to resolve paths, validate source files and map them to languages.
    """

    @staticmethod
    def resolve_path(path: str | Path, *, strict: bool = False) -> Path:
        """Convert a user-input path to an absolute path safely.

        Expands environment variables (e.g., $HOME, %APPDATA%), expands ~ to the home directory,
        and resolves relative paths based on the current working directory.

        Args:
            path (str | Path): The input path (e.g., "~/src/$PROJECT/main.ts").
            strict (bool): Whether to raise an exception if the path does not exist. Defaults to False.

        Returns:
            Path: The converted absolute `Path` object.
        """
        path_str = str(path)
        expanded: str = os.path.expandvars(path_str)
        user_expanded: Path = Path(expanded).expanduser()

        resolved_path: Path
        if user_expanded.is_absolute():
            resolved_path = user_expanded.resolve(strict=strict)
        else:
            resolved_path = (Path.cwd() / user_expanded).resolve(strict=strict)
        return resolved_path

    @staticmethod
    def detect_language(file_path: Path) -> str | None:
        """Return the language code matching the file extension, or None."""
        suffix: str = file_path.suffix.lower()
        for code, template in LANGUAGE_TEMPLATES.items():
            if template.extension == suffix:
                return code
        return None

    @staticmethod
    def read_source(file_path: Path) -> str:
        """Read a UTF-8 source file after validating it.

        Args:
            file_path (Path): The path of the source file.

        Returns:
            str: The file contents.

        Raises:
            FileMissingError: If the file does not exist.
            InvalidFileTypeError: If the path is a directory.
            UnsupportedFileFormatError: If the file cannot be decoded as UTF-8.
        """
        if not file_path.exists():
            msg = f"File does not exist: {file_path}"
            raise FileMissingError(msg)
        if file_path.is_dir():
            msg = f"Invalid file type (directory): {file_path}"
            raise InvalidFileTypeError(msg)
        try:
            return file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as err:
            msg = f"Source file is not valid UTF-8: {file_path}"
            raise UnsupportedFileFormatError(msg) from err


class FileUtilsError(Exception):
    """Custom exception for FileUtils-related errors."""


class FileMissingError(FileUtilsError):
    """Custom exception for file missing errors."""


class InvalidFileTypeError(FileUtilsError):
    """Custom exception for invalid file type errors."""


class UnsupportedFileFormatError(FileUtilsError):
    """Custom exception for unsupported file format errors."""
