"""Data models, on-disk schema and constants for machi."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from .errors import SchemaError

DEFAULT_DIR = ".machi"
DIR_ENV_VAR = "MACHI_DIR"

DONE_MARKER = "[x]"
OPEN_MARKER = "[ ]"


def default_dir() -> str:
    """Return the lists directory: $MACHI_DIR if set, else ./.machi"""
    return os.environ.get(DIR_ENV_VAR) or DEFAULT_DIR


@dataclass(frozen=True)
class TodoItem:
    """A single checkbox entry."""

    done: bool
    title: str

    @property
    def marker(self) -> str:
        return DONE_MARKER if self.done else OPEN_MARKER

    @property
    def label(self) -> str:
        """Line shown in the detail pane, e.g. '[x] Eggs'."""
        return f"{self.marker} {self.title}"

    @classmethod
    def from_dict(cls, data: Any, position: int = 0) -> "TodoItem":
        where = f"todo_list[{position}]"
        if not isinstance(data, Mapping):
            raise SchemaError(f"{where}: expected an object, got {_kind(data)}")
        if "done" not in data:
            raise SchemaError(f"{where}: missing field 'done'")
        if "title" not in data:
            raise SchemaError(f"{where}: missing field 'title'")
        done, title = data["done"], data["title"]
        if not isinstance(done, bool):
            raise SchemaError(f"{where}.done: expected a boolean, got {_kind(done)}")
        if not isinstance(title, str):
            raise SchemaError(f"{where}.title: expected a string, got {_kind(title)}")
        return cls(done=done, title=title)

    def to_dict(self) -> Dict[str, Any]:
        return {"done": self.done, "title": self.title}


@dataclass(frozen=True)
class TodoList:
    """A named, ordered list of items; one per file in the lists directory."""

    name: str
    items: Tuple[TodoItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable of items but store a tuple so the list stays immutable.
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def from_dict(cls, data: Any) -> "TodoList":
        """Build a TodoList from the decoded JSON document.

        Expected shape::

            {"name": "<string>", "todo_list": [{"done": <bool>, "title": "<string>"}, ...]}

        Unknown keys are ignored. Raises SchemaError on any other mismatch.
        """
        if not isinstance(data, Mapping):
            raise SchemaError(f"expected an object at top level, got {_kind(data)}")
        if "name" not in data:
            raise SchemaError("missing field 'name'")
        if "todo_list" not in data:
            raise SchemaError("missing field 'todo_list'")
        name, raw_items = data["name"], data["todo_list"]
        if not isinstance(name, str):
            raise SchemaError(f"name: expected a string, got {_kind(name)}")
        if not isinstance(raw_items, list):
            raise SchemaError(f"todo_list: expected an array, got {_kind(raw_items)}")
        items = [TodoItem.from_dict(raw, i) for i, raw in enumerate(raw_items)]
        return cls(name=name, items=tuple(items))

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "todo_list": [item.to_dict() for item in self.items]}


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__
