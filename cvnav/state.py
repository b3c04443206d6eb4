"""Observable state cells and the current page pointer."""

import logging
from collections.abc import Callable
from typing import Any

from cvnav.graph import NavigationGraph

logger = logging.getLogger(__name__)

Subscriber = Callable[[Any, Any], None]


class State:
    """A value cell that notifies subscribers with ``(old, new)`` on change."""

    def __init__(self, value: Any = None) -> None:
        self._value = value
        self._subscribers: list[Subscriber] = []

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new: Any) -> None:
        old = self._value
        if self.store(new):
            self.notify(old, new)

    def store(self, new: Any) -> bool:
        """Replace the value without notifying. Returns True if it changed."""
        if new == self._value:
            return False
        self._value = new
        return True

    def notify(self, old: Any, new: Any) -> None:
        for callback in list(self._subscribers):
            callback(old, new)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change callback. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def __repr__(self) -> str:
        return f"State({self._value!r})"


class PagePointer:
    """The ``(chapter_id, subchapter_id)`` pair currently on display.

    Each half is its own ``State`` so views can follow just one of them.
    Both halves are updated before any subscriber runs. Subscribers
    registered on the pointer itself are called once per ``set``.
    """

    def __init__(self, chapter_id: str, subchapter_id: str) -> None:
        self.chapter = State(chapter_id)
        self.subchapter = State(subchapter_id)
        self._subscribers: list[Subscriber] = []

    @property
    def current(self) -> tuple[str, str]:
        return self.chapter.value, self.subchapter.value

    def set(self, chapter_id: str, subchapter_id: str) -> bool:
        """Point at a new page. Returns False if nothing changed."""
        old = self.current
        new = (chapter_id, subchapter_id)
        if new == old:
            return False
        # both halves are stored before any cell subscriber runs
        chapter_changed = self.chapter.store(chapter_id)
        subchapter_changed = self.subchapter.store(subchapter_id)
        if chapter_changed:
            self.chapter.notify(old[0], chapter_id)
        if subchapter_changed:
            self.subchapter.notify(old[1], subchapter_id)
        for callback in list(self._subscribers):
            callback(old, new)
        return True

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def is_valid(self, graph: NavigationGraph) -> bool:
        chapter_id, subchapter_id = self.current
        return graph.contains(chapter_id, subchapter_id)

    def ensure_valid(
        self,
        graph: NavigationGraph,
        default: tuple[str, str] | None = None,
    ) -> bool:
        """Snap a stale pointer onto an existing page.

        Falls back to ``default`` when it names a page of ``graph``, otherwise
        to the graph's first page. Returns True if the pointer was moved.
        """
        if self.is_valid(graph):
            return False

        if default is not None and graph.contains(*default):
            target = default
        else:
            first = graph.first_page()
            target = (first.chapter_id, first.node_id)

        logger.info("Page %s/%s not in graph, resetting to %s/%s", *self.current, *target)
        self.set(*target)
        return True

    def __repr__(self) -> str:
        return f"PagePointer({self.chapter.value!r}, {self.subchapter.value!r})"
