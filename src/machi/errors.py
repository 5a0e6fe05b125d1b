"""Exception types raised by machi."""

import os
from typing import Optional, Union


class MachiError(Exception):
    """Base class for every error machi raises on purpose."""


class SchemaError(MachiError, ValueError):
    """A decoded document does not have the todo-list shape."""


class LoadError(MachiError):
    """Loading the collection of lists failed."""


class DirectoryError(LoadError):
    """The lists directory is missing or cannot be read."""

    def __init__(self, directory: Union[str, "os.PathLike[str]"], reason: str):
        self.directory = os.fspath(directory)
        self.reason = reason
        super().__init__(f"cannot read directory {self.directory}: {reason}")


class ListFileError(LoadError):
    """A single list file cannot be read or does not match the schema."""

    def __init__(
        self,
        path: Union[str, "os.PathLike[str]"],
        reason: str,
        cause: Optional[BaseException] = None,
    ):
        self.path = os.fspath(path)
        self.reason = reason
        self.cause = cause
        super().__init__(f"{self.path}: {reason}")


class InputError(MachiError):
    """Reading a key from the terminal failed."""
