"""File I/O for machi list files."""

import json
import logging
import os
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from .errors import DirectoryError, ListFileError, SchemaError
from .models import TodoList

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading one directory entry: a list or the error it raised."""

    path: str
    todo_list: Optional[TodoList] = None
    error: Optional[ListFileError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def read_list(path: PathLike) -> TodoList:
    """Load one list file.

    Raises ListFileError if the file cannot be read, is not valid JSON,
    or does not match the todo-list schema.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ListFileError(path, e.strerror or str(e), e) from e
    except UnicodeDecodeError as e:
        raise ListFileError(path, "not valid UTF-8", e) from e
    except json.JSONDecodeError as e:
        raise ListFileError(path, f"invalid JSON ({e.msg} at line {e.lineno} column {e.colno})", e) from e

    try:
        todo_list = TodoList.from_dict(data)
    except SchemaError as e:
        raise ListFileError(path, str(e), e) from e
    logger.debug("loaded %s (%d items) from %s", todo_list.name, len(todo_list.items), os.fspath(path))
    return todo_list


def write_list(path: PathLike, todo_list: TodoList) -> None:
    """Write a list in the on-disk JSON shape (pretty-printed)."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(todo_list.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")


def iter_entries(directory: PathLike) -> Iterator[str]:
    """Yield the paths of every entry in directory, in enumeration order.

    Non-recursive, unsorted and unfiltered: every entry is expected to be a
    list file.
    """
    try:
        with os.scandir(directory) as it:
            entries = [entry.path for entry in it]
    except FileNotFoundError as e:
        raise DirectoryError(directory, "no such directory") from e
    except NotADirectoryError as e:
        raise DirectoryError(directory, "not a directory") from e
    except OSError as e:
        raise DirectoryError(directory, e.strerror or str(e)) from e
    yield from entries


def load_results(directory: PathLike) -> List[LoadResult]:
    """Attempt every entry in directory and report each outcome separately."""
    results: List[LoadResult] = []
    for path in iter_entries(directory):
        try:
            todo_list = read_list(path)
        except ListFileError as e:
            results.append(LoadResult(path=path, error=e))
            continue
        results.append(LoadResult(path=path, todo_list=todo_list))
    return results


def load_lists(directory: PathLike, skip_invalid: bool = False) -> List[TodoList]:
    """Load the whole collection from directory.

    By default any unreadable or malformed entry aborts the load (the first
    error is raised). With skip_invalid=True bad entries are logged and left
    out instead.
    """
    lists: List[TodoList] = []
    if not skip_invalid:
        for path in iter_entries(directory):
            lists.append(read_list(path))
    else:
        for result in load_results(directory):
            if not result.ok:
                logger.warning("skipping %s", result.error)
                continue
            lists.append(result.todo_list)
    logger.debug("loaded %d list(s) from %s", len(lists), os.fspath(directory))
    return lists
