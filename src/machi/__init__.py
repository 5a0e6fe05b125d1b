"""machi - terminal viewer for a directory of todo lists."""

__version__ = "0.1.0"

from .models import TodoItem, TodoList, DEFAULT_DIR
from .errors import MachiError, LoadError, DirectoryError, ListFileError, SchemaError, InputError
from .storage import read_list, write_list, load_lists, load_results
from .core import Event, Selector, transition, next_index, previous_index

__all__ = [
    "TodoItem",
    "TodoList",
    "DEFAULT_DIR",
    "MachiError",
    "LoadError",
    "DirectoryError",
    "ListFileError",
    "SchemaError",
    "InputError",
    "read_list",
    "write_list",
    "load_lists",
    "load_results",
    "Event",
    "Selector",
    "transition",
    "next_index",
    "previous_index",
]
