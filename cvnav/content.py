"""Scrollable content panes, one per sub-chapter."""

import abc
import logging
from collections.abc import Callable

from cvnav.graph import NavigationGraph

logger = logging.getLogger(__name__)


class MissingContentError(KeyError):
    """No content pane is registered for a sub-chapter."""


class ScrollableContent(abc.ABC):
    """Scroll metrics of a sub-chapter's content pane.

    Mirrors the DOM element fields the navigator needs. Only ``scroll_top``
    is writable.
    """

    @property
    @abc.abstractmethod
    def scroll_top(self) -> float:
        ...

    @scroll_top.setter
    @abc.abstractmethod
    def scroll_top(self, value: float) -> None:
        ...

    @property
    @abc.abstractmethod
    def scroll_height(self) -> float:
        ...

    @property
    @abc.abstractmethod
    def client_height(self) -> float:
        ...

    @property
    def offset_height(self) -> float:
        return self.client_height

    @property
    def scroll_width(self) -> float:
        return 0.0

    @property
    def client_width(self) -> float:
        return 0.0

    @property
    def bottom(self) -> float:
        """Offset at which the pane is pressed against its bottom edge."""
        return self.scroll_height - self.offset_height

    @property
    def is_scrollable(self) -> bool:
        return self.scroll_height > self.client_height or self.scroll_width > self.client_width


class ContentPane(ScrollableContent):
    """In-memory pane. ``scroll_top`` is clamped the way a browser clamps it."""

    def __init__(
        self,
        scroll_height: float,
        client_height: float,
        offset_height: float | None = None,
        scroll_width: float = 0.0,
        client_width: float = 0.0,
        scroll_top: float = 0.0,
    ) -> None:
        self._scroll_height = scroll_height
        self._client_height = client_height
        self._offset_height = client_height if offset_height is None else offset_height
        self._scroll_width = scroll_width
        self._client_width = client_width
        self._scroll_top = 0.0
        self.scroll_top = scroll_top

    @property
    def scroll_top(self) -> float:
        return self._scroll_top

    @scroll_top.setter
    def scroll_top(self, value: float) -> None:
        max_top = max(0.0, self._scroll_height - self._client_height)
        self._scroll_top = min(max(0.0, value), max_top)

    @property
    def scroll_height(self) -> float:
        return self._scroll_height

    @property
    def client_height(self) -> float:
        return self._client_height

    @property
    def offset_height(self) -> float:
        return self._offset_height

    @property
    def scroll_width(self) -> float:
        return self._scroll_width

    @property
    def client_width(self) -> float:
        return self._client_width

    def __repr__(self) -> str:
        return (
            f"ContentPane(top={self._scroll_top}, height={self._scroll_height}, "
            f"client={self._client_height})"
        )


class ContentRegistry:
    """Lookup from sub-chapter id to its content pane."""

    def __init__(self, panes: dict[str, ScrollableContent] | None = None) -> None:
        self._panes: dict[str, ScrollableContent] = dict(panes or {})

    @classmethod
    def for_graph(
        cls,
        graph: NavigationGraph,
        factory: Callable[[str], ScrollableContent],
    ) -> "ContentRegistry":
        """Create one pane per page of ``graph`` using ``factory(subchapter_id)``."""
        registry = cls()
        for page in graph.pages():
            registry.register(page.node_id, factory(page.node_id))
        return registry

    def register(self, subchapter_id: str, pane: ScrollableContent) -> None:
        if subchapter_id in self._panes:
            logger.debug("Replacing content pane for %s", subchapter_id)
        self._panes[subchapter_id] = pane

    def get(self, subchapter_id: str) -> ScrollableContent:
        try:
            return self._panes[subchapter_id]
        except KeyError:
            raise MissingContentError(subchapter_id) from None

    def __contains__(self, subchapter_id: object) -> bool:
        return subchapter_id in self._panes

    def __len__(self) -> int:
        return len(self._panes)
