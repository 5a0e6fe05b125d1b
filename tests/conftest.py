import curses
import json
import unicodedata

import pytest

from machi.models import TodoItem, TodoList
from machi.tui import Palette

LIST_HL = 1001
ITEM_HL = 1002
DIM = 1003


class FakeScreen:
    """Stand-in for a curses window: a character grid plus scripted keys."""

    def __init__(self, height=12, width=60, keys=()):
        self.height = height
        self.width = width
        self.keys = list(keys)
        self.refreshed = 0
        self.keypad_enabled = False
        self.erase()

    def getmaxyx(self):
        return self.height, self.width

    def erase(self):
        self.cells = [[" "] * self.width for _ in range(self.height)]
        self.attrs = [[0] * self.width for _ in range(self.height)]

    def _write(self, y, x, text, attr):
        if "\x00" in text:
            raise ValueError("embedded null character")
        col = x
        for ch in text:
            if unicodedata.category(ch) == "Cc":
                # curses moves the cursor on control characters; mimic by clearing the row
                self.cells[y][col:] = [" "] * (self.width - col)
                raise curses.error("control character in output")
            span = 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
            if not (0 <= y < self.height and 0 <= col and col + span <= self.width):
                raise curses.error("write outside the window")
            self.cells[y][col] = ch
            self.attrs[y][col] = attr
            if span == 2:
                self.cells[y][col + 1] = ""
                self.attrs[y][col + 1] = attr
            col += span

    def addnstr(self, y, x, text, n, attr=0):
        self._write(y, x, text[:n], attr)

    def insstr(self, y, x, text, attr=0):
        self._write(y, x, text, attr)

    def refresh(self):
        self.refreshed += 1

    def keypad(self, flag):
        self.keypad_enabled = flag

    def getch(self):
        if not self.keys:
            return -1
        return self.keys.pop(0)

    def row(self, y, start=0, end=None):
        return "".join(self.cells[y][start:end])

    def attr_at(self, y, x):
        return self.attrs[y][x]


def make_list(name, items=()):
    return TodoList(name=name, items=tuple(TodoItem(done=d, title=t) for d, t in items))


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def palette():
    return Palette(border=0, list_highlight=LIST_HL, item_highlight=ITEM_HL, dim=DIM)


@pytest.fixture
def groceries_doc():
    return {
        "name": "Groceries",
        "todo_list": [
            {"done": False, "title": "Milk"},
            {"done": True, "title": "Eggs"},
        ],
    }


@pytest.fixture
def lists_dir(tmp_path):
    """A .machi directory with three list files."""
    d = tmp_path / ".machi"
    d.mkdir()
    for name, titles in [("Work", ["Report"]), ("Home", ["Dishes", "Laundry"]), ("Books", [])]:
        write_json(
            d / f"{name.lower()}.json",
            {"name": name, "todo_list": [{"done": False, "title": t} for t in titles]},
        )
    return d
