"""machi curses-based terminal user interface."""

import curses
import os
import unicodedata
from dataclasses import dataclass
from typing import Optional, Sequence

from .core import Event, Selector, selected, transition
from .errors import InputError
from .models import TodoList

KEY_ESC = 27
COMMANDS_HEIGHT = 4
MAIN_MIN_HEIGHT = 5
LIST_PANE_WIDTH = 20
DETAIL_MIN_WIDTH = 10
ESC_DELAY_MS = 25

# Thick box-drawing set: horizontal, vertical, corners (tl, tr, bl, br).
H, V, TL, TR, BL, BR = "━", "┃", "┏", "┓", "┗", "┛"

LISTS_TITLE = "global"
EMPTY_TITLE = "empty"
REPLACEMENT = "\ufffd"

KEYMAP = {
    KEY_ESC: Event.QUIT,
    curses.KEY_DOWN: Event.DOWN,
    curses.KEY_UP: Event.UP,
}


def key_to_event(ch: int) -> Event:
    """Map a curses key code to an input event; unknown keys are OTHER."""
    return KEYMAP.get(ch, Event.OTHER)


@dataclass(frozen=True)
class Rect:
    y: int
    x: int
    height: int
    width: int

    @property
    def inner(self) -> "Rect":
        """Area inside the border."""
        return Rect(self.y + 1, self.x + 1, max(0, self.height - 2), max(0, self.width - 2))


@dataclass(frozen=True)
class Layout:
    lists: Rect
    detail: Rect
    commands: Rect


def compute_layout(height: int, width: int) -> Layout:
    """Split the screen: lists | detail on top, a commands strip below.

    The commands strip is 4 rows tall and the list pane 20 columns wide;
    both shrink first when the terminal is too small for the main area
    (5 rows) and the detail pane (10 columns).
    """
    height, width = max(0, height), max(0, width)
    commands_h = max(0, min(COMMANDS_HEIGHT, height - MAIN_MIN_HEIGHT))
    main_h = height - commands_h
    lists_w = max(0, min(LIST_PANE_WIDTH, width - DETAIL_MIN_WIDTH))
    return Layout(
        lists=Rect(0, 0, main_h, lists_w),
        detail=Rect(0, lists_w, main_h, width - lists_w),
        commands=Rect(main_h, 0, commands_h, width),
    )


def printable(text: str) -> str:
    """Replace control characters (NUL, newline, tab, C1 codes) with U+FFFD."""
    return "".join(REPLACEMENT if unicodedata.category(ch) in ("Cc", "Cs") else ch for ch in text)


def char_width(ch: str) -> int:
    """Terminal columns taken by ch: 2 for East Asian wide, 0 for combining marks."""
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def text_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def clip(text: str, width: int) -> str:
    """Printable prefix of text that fits in `width` columns."""
    out = []
    used = 0
    for ch in printable(text):
        w = char_width(ch)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out)


def fit(text: str, width: int) -> str:
    """clip() padded with spaces to exactly `width` columns."""
    clipped = clip(text, width)
    return clipped + " " * (width - text_width(clipped))


def scroll_offset(selected_row: int, visible_rows: int) -> int:
    """First row to show so that selected_row is on screen."""
    if visible_rows <= 0:
        return 0
    return max(0, selected_row - visible_rows + 1)


@dataclass(frozen=True)
class Palette:
    border: int = curses.A_NORMAL
    list_highlight: int = curses.A_REVERSE
    item_highlight: int = curses.A_BOLD
    dim: int = curses.A_DIM

    @classmethod
    def from_curses(cls) -> "Palette":
        """Blue borders, cyan/green highlights; attribute fallback without colors."""
        if not curses.has_colors():
            return cls(
                border=curses.A_NORMAL,
                list_highlight=curses.A_BOLD | curses.A_REVERSE,
                item_highlight=curses.A_BOLD | curses.A_UNDERLINE,
            )
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        curses.init_pair(1, curses.COLOR_BLUE, background)
        curses.init_pair(2, curses.COLOR_CYAN, background)
        curses.init_pair(3, curses.COLOR_GREEN, background)
        return cls(
            border=curses.color_pair(1),
            list_highlight=curses.color_pair(2) | curses.A_BOLD,
            item_highlight=curses.color_pair(3) | curses.A_BOLD,
        )


class Viewer:
    """Read-only two-pane viewer over a fixed collection of lists."""

    def __init__(
        self,
        stdscr,
        lists: Sequence[TodoList],
        directory: str = "",
        palette: Optional[Palette] = None,
    ):
        self.stdscr = stdscr
        self.lists = list(lists)
        self.directory = directory
        self.palette = palette or Palette()
        self._auto_palette = palette is None
        self.state = Selector(count=len(self.lists))

    def setup(self) -> None:
        """Terminal setup that needs an initialized screen."""
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # terminal cannot hide the cursor
        self.stdscr.keypad(True)
        if self._auto_palette:
            self.palette = Palette.from_curses()

    # -------------------- drawing --------------------
    def _note(self, rect: Rect, text: str) -> None:
        """Dimmed message on the first inner row of rect."""
        area = rect.inner
        if area.height > 0:
            self._put(area.y, area.x, text, area.width, self.palette.dim)

    def _put(self, y: int, x: int, text: str, width: int, attr: int = curses.A_NORMAL) -> None:
        """Write text clipped to `width` terminal columns, control characters replaced."""
        text = clip(text, width) if width > 0 else ""
        if not text:
            return
        self.stdscr.addnstr(y, x, text, len(text), attr)

    def _box(self, rect: Rect, title: str = "") -> None:
        """Thick border around rect with a centered title on the top edge."""
        if rect.height < 2 or rect.width < 2:
            return
        attr = self.palette.border
        inner_w = rect.width - 2
        self._put(rect.y, rect.x, TL + H * inner_w + TR, rect.width, attr)
        for row in range(rect.y + 1, rect.y + rect.height - 1):
            self._put(row, rect.x, V, 1, attr)
            self._put(row, rect.x + rect.width - 1, V, 1, attr)
        bottom = rect.y + rect.height - 1
        self._put(bottom, rect.x, BL + H * inner_w, rect.width - 1, attr)
        right = rect.x + rect.width - 1
        if right == self.stdscr.getmaxyx()[1] - 1:
            # addnstr fails on the screen's last cell; insstr does not move the cursor.
            self.stdscr.insstr(bottom, right, BR, attr)
        else:
            self._put(bottom, right, BR, 1, attr)
        if title and inner_w > 0:
            label = clip(f" {title} ", inner_w)
            label_w = text_width(label)
            self._put(rect.y, rect.x + 1 + (inner_w - label_w) // 2, label, label_w, attr)

    def _rows(self, rect: Rect, lines: Sequence[str], highlight: Optional[int], attr: int) -> None:
        """Fill rect's interior with lines, scrolled to keep `highlight` visible."""
        area = rect.inner
        if area.height <= 0 or area.width <= 0:
            return
        start = scroll_offset(highlight, area.height) if highlight is not None else 0
        for row, idx in enumerate(range(start, min(len(lines), start + area.height))):
            text = lines[idx]
            if idx == highlight:
                self._put(area.y + row, area.x, fit(text, area.width), area.width, attr)
            else:
                self._put(area.y + row, area.x, text, area.width)

    def render(self) -> None:
        """Draw the list pane, the detail pane and the commands strip."""
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()
        layout = compute_layout(height, width)

        current = selected(self.lists, self.state)
        if current is None:
            self._box(layout.lists, LISTS_TITLE)
            self._note(layout.lists, "(no lists)")
            self._box(layout.detail, EMPTY_TITLE)
            where = self.directory or "the lists directory"
            self._note(layout.detail, f"No list files in {where}. Press ESC to quit.")
        else:
            self._box(layout.lists, LISTS_TITLE)
            self._rows(layout.lists, [t.name for t in self.lists],
                       self.state.index, self.palette.list_highlight)
            self._box(layout.detail, current.name)
            # The first item is always highlighted; items are not navigable.
            self._rows(layout.detail, [item.label for item in current.items],
                       0, self.palette.item_highlight)

        self._box(layout.commands)
        self.stdscr.refresh()

    def draw(self) -> None:
        try:
            self.render()
        except curses.error:
            pass  # a frame that does not fit is dropped; the next key redraws

    # -------------------- input --------------------
    def handle_key(self, ch: int) -> Event:
        event = key_to_event(ch)
        self.state = transition(self.state, event)
        return event

    def read_key(self) -> int:
        ch = self.stdscr.getch()
        if ch == -1:
            raise InputError("reading from the terminal failed (input closed?)")
        return ch

    def run(self) -> Selector:
        """Render, wait for a key, update the selection; repeat until ESC."""
        while self.state.running:
            self.draw()
            self.handle_key(self.read_key())
        return self.state


def start_curses(lists: Sequence[TodoList], directory: str = "") -> Selector:
    """Run the viewer on the real terminal.

    curses.wrapper restores the terminal (echo, cooked mode, primary
    screen, cursor) on every exit path, exceptions included.
    """
    # Short ESC delay so ESC quits without the default one second pause.
    os.environ.setdefault("ESCDELAY", str(ESC_DELAY_MS))

    def _main(stdscr) -> Selector:
        viewer = Viewer(stdscr, lists, directory)
        viewer.setup()
        return viewer.run()

    return curses.wrapper(_main)
