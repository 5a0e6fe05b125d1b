"""Selection state machine (pure functions, no I/O)."""

import enum
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from .models import TodoList


class Event(enum.Enum):
    """Input events the viewer reacts to."""

    QUIT = "quit"
    DOWN = "down"
    UP = "up"
    OTHER = "other"


@dataclass(frozen=True)
class Selector:
    """Cursor over a fixed collection of `count` lists.

    index is always in [0, count) when count > 0, and 0 when the
    collection is empty.
    """

    count: int
    index: int = 0
    running: bool = True

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"count must be >= 0, got {self.count}")
        if self.count == 0 and self.index != 0:
            raise ValueError("index must be 0 for an empty collection")
        if self.count and not 0 <= self.index < self.count:
            raise ValueError(f"index {self.index} out of range for {self.count} list(s)")


def next_index(index: int, count: int) -> int:
    """Index below `index`, wrapping to the top; 0 if count is 0."""
    if count <= 0:
        return 0
    return (index + 1) % count


def previous_index(index: int, count: int) -> int:
    """Index above `index`, wrapping to the bottom; 0 if count is 0."""
    if count <= 0:
        return 0
    return count - 1 if index == 0 else index - 1


def transition(state: Selector, event: Event) -> Selector:
    """Apply one input event.

    QUIT stops the loop, DOWN/UP move with wrap-around, anything else is a
    no-op. A stopped selector ignores further events.
    """
    if not state.running:
        return state
    if event is Event.QUIT:
        return replace(state, running=False)
    if event is Event.DOWN:
        return replace(state, index=next_index(state.index, state.count))
    if event is Event.UP:
        return replace(state, index=previous_index(state.index, state.count))
    return state


def selected(lists: Sequence[TodoList], state: Selector) -> Optional[TodoList]:
    """Return the list under the cursor, or None for an empty collection."""
    if not lists:
        return None
    return lists[state.index]
