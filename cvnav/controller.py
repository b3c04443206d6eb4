"""Scroll-driven page navigation with border stickiness.

A ``ScrollNavigator`` is fed one scroll-speed sample per wheel event. While
the active page's content can still move, samples scroll it. Samples that
push against the top or bottom edge are counted; once
``chapter_border_stickiness`` of them pile up the navigator turns the page.
After a page turn (or after leaving an edge) the first
``chapter_after_border_stickiness`` in-bounds samples on scrollable content
are swallowed so a long flick does not skip through several pages.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from cvnav.config import Config
from cvnav.content import ContentRegistry, MissingContentError
from cvnav.graph import DEFAULT_MAX_HOPS, NavigationGraph
from cvnav.models import Direction, NodeRef
from cvnav.state import PagePointer

logger = logging.getLogger(__name__)


class PreventableEvent(Protocol):
    """Anything with a browser-style ``prevent_default()``."""

    def prevent_default(self) -> None:
        ...


class ScrollOutcome(str, Enum):
    SCROLLED = "scrolled"    # content moved
    ABSORBED = "absorbed"    # sample swallowed, default scroll suppressed
    STUCK = "stuck"          # pressed against an edge, page not yet turned
    TURNED = "turned"        # current page changed
    ABORTED = "aborted"      # page turn wanted but no target page found
    IGNORED = "ignored"      # no content pane for the current page


@dataclass
class ScrollEvent:
    """Minimal stand-in for a browser wheel event."""
    delta: float = 0.0
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


class ScrollNavigator:
    """Stateful wheel-to-page-turn state machine for one CV view."""

    def __init__(
        self,
        graph: NavigationGraph,
        pointer: PagePointer,
        contents: ContentRegistry,
        chapter_border_stickiness: int,
        chapter_after_border_stickiness: int,
        max_boundary_hops: int = DEFAULT_MAX_HOPS,
        scroll_speed_scale: float = 1.0,
        strict: bool = False,
    ) -> None:
        self.graph = graph
        self.pointer = pointer
        self.contents = contents
        self.chapter_border_stickiness = chapter_border_stickiness
        self.chapter_after_border_stickiness = chapter_after_border_stickiness
        self.max_boundary_hops = max_boundary_hops
        self.scroll_speed_scale = scroll_speed_scale
        self.strict = strict
        self._border_left = chapter_border_stickiness
        self._after_border_left = chapter_after_border_stickiness

    @classmethod
    def from_config(
        cls,
        config: Config,
        graph: NavigationGraph,
        pointer: PagePointer,
        contents: ContentRegistry,
    ) -> "ScrollNavigator":
        nav = config.resolved_navigation
        return cls(
            graph, pointer, contents,
            chapter_border_stickiness=nav.chapter_border_stickiness,
            chapter_after_border_stickiness=nav.chapter_after_border_stickiness,
            max_boundary_hops=nav.max_boundary_hops,
            scroll_speed_scale=nav.scroll_speed_scale,
            strict=config.debug,
        )

    @property
    def border_hits_left(self) -> int:
        return self._border_left

    @property
    def after_border_hits_left(self) -> int:
        return self._after_border_left

    def reset(self) -> None:
        self._border_left = self.chapter_border_stickiness
        self._after_border_left = self.chapter_after_border_stickiness

    def on_wheel(self, event: PreventableEvent, wheel_delta: float) -> ScrollOutcome:
        """Scale a sampled wheel delta to content pixels and handle it."""
        return self.handle(event, wheel_delta * self.scroll_speed_scale)

    def handle(self, event: PreventableEvent, scroll_speed: float) -> ScrollOutcome:
        """Process one scroll sample.

        Args:
            event: Originating UI event. Only ``prevent_default()`` is used.
            scroll_speed: Signed delta, positive towards the next page.

        Returns:
            What the sample did.
        """
        chapter_id, subchapter_id = self.pointer.current
        try:
            pane = self.contents.get(subchapter_id)
        except MissingContentError:
            if self.strict:
                raise
            logger.warning("No content pane for %s/%s, ignoring scroll", chapter_id, subchapter_id)
            return ScrollOutcome.IGNORED

        direction = Direction.from_speed(scroll_speed)
        outcome = ScrollOutcome.STUCK

        if self._border_left > 0:
            if pane.scroll_top + scroll_speed <= 0:
                # top edge
                self._border_left -= 1
                pane.scroll_top = 0
            elif pane.scroll_top + scroll_speed >= pane.bottom:
                # bottom edge
                self._border_left -= 1
                pane.scroll_top = pane.bottom
            else:
                # moving freely inside the content, edge released
                self._border_left = self.chapter_border_stickiness
                if pane.is_scrollable and self._after_border_left > 0:
                    self._after_border_left -= 1
                    logger.debug("After-border hits left: %d", self._after_border_left)
                    event.prevent_default()
                    outcome = ScrollOutcome.ABSORBED
                else:
                    pane.scroll_top += scroll_speed
                    outcome = ScrollOutcome.SCROLLED

        logger.debug("Border hits left: %d", self._border_left)
        if self._border_left > 0:
            return outcome

        return self._turn_page(NodeRef(chapter_id, subchapter_id), direction)

    def _turn_page(self, origin: NodeRef, direction: Direction) -> ScrollOutcome:
        target = self.graph.resolve(origin, direction, max_hops=self.max_boundary_hops)
        if target is None:
            return ScrollOutcome.ABORTED

        self.pointer.set(target.chapter_id, target.node_id)
        if target.node_id in self.contents:
            self.contents.get(target.node_id).scroll_top = 0
        self.reset()
        logger.info("Page turn %s: %s -> %s", direction.value, origin, target)
        return ScrollOutcome.TURNED

    def select_chapter(self, chapter_id: str) -> NodeRef:
        """Jump to the first page of a chapter, as a click on its title does."""
        if chapter_id not in self.graph.chapters:
            raise KeyError(chapter_id)
        target = self.graph.first_page(chapter_id)
        self.pointer.set(target.chapter_id, target.node_id)
        self.reset()
        return target

    def select_subchapter(self, chapter_id: str, subchapter_id: str) -> NodeRef:
        """Jump straight to one page."""
        if not self.graph.contains(chapter_id, subchapter_id):
            raise KeyError(f"{chapter_id}/{subchapter_id}")
        self.pointer.set(chapter_id, subchapter_id)
        self.reset()
        return NodeRef(chapter_id, subchapter_id)

    def rebuild(
        self,
        graph: NavigationGraph,
        default: tuple[str, str] | None = None,
        contents: ContentRegistry | None = None,
    ) -> None:
        """Swap in a rebuilt graph and keep the pointer on a page that exists.

        Pass ``contents`` when the new graph has pages the current registry
        has no pane for; otherwise the existing registry is kept.
        """
        self.graph = graph
        if contents is not None:
            self.contents = contents
        missing = [p.node_id for p in graph.pages() if p.node_id not in self.contents]
        if missing:
            logger.warning("No content pane for %d pages after rebuild: %s", len(missing), ", ".join(missing))
        self.pointer.ensure_valid(graph, default)
        self.reset()
