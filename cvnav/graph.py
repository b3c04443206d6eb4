"""Build and walk the chapter/sub-chapter navigation graph."""

import logging
from collections.abc import Iterable, Mapping

from cvnav.models import Boundary, ChapterSpec, Direction, Link, NodeRef

logger = logging.getLogger(__name__)

DEFAULT_MAX_HOPS = 64


class GraphError(ValueError):
    """Raised when a chapter list cannot be turned into a navigation graph."""


class NavigationGraph:
    """Immutable chapter -> node -> Link mapping.

    Every sub-chapter node links to its neighbours. Each chapter also has a
    ``__begin__`` and ``__end__`` node chaining it to the adjacent chapters.
    The very first ``__begin__.prev`` and the very last ``__end__.next`` point
    to themselves.
    """

    def __init__(
        self,
        links: Mapping[str, Mapping[Boundary | str, Link]],
        order: Iterable[str] | None = None,
    ) -> None:
        self._links: dict[str, dict[Boundary | str, Link]] = {
            chapter_id: dict(nodes) for chapter_id, nodes in links.items()
        }
        self._order: tuple[str, ...] = tuple(order) if order is not None else tuple(self._links)

    @property
    def chapters(self) -> tuple[str, ...]:
        return self._order

    def subchapters(self, chapter_id: str) -> list[str]:
        """Sub-chapter ids of a chapter, in declared order."""
        nodes = self._links.get(chapter_id)
        if nodes is None:
            raise KeyError(chapter_id)
        return [node for node in nodes if not isinstance(node, Boundary)]

    def contains(self, chapter_id: str, subchapter_id: str) -> bool:
        if subchapter_id in (b.value for b in Boundary):
            return False
        return subchapter_id in self._links.get(chapter_id, {})

    def link(self, ref: NodeRef) -> Link | None:
        return self._links.get(ref.chapter_id, {}).get(ref.node)

    def step(self, ref: NodeRef, direction: Direction) -> NodeRef | None:
        """Follow one ``next``/``prev`` edge without skipping boundaries."""
        link = self.link(ref)
        if link is None:
            return None
        return link.toward(direction)

    def first_page(self, chapter_id: str | None = None) -> NodeRef:
        """The sub-chapter reached from a chapter's ``__begin__`` node."""
        if chapter_id is None:
            if not self._order:
                raise GraphError("graph has no chapters")
            chapter_id = self._order[0]
        target = self.step(NodeRef(chapter_id, Boundary.BEGIN), Direction.NEXT)
        if target is None or target.is_boundary:
            raise KeyError(chapter_id)
        return target

    def pages(self) -> list[NodeRef]:
        """All sub-chapters across all chapters, in reading order."""
        return [
            NodeRef(chapter_id, sub_id)
            for chapter_id in self._order
            for sub_id in self.subchapters(chapter_id)
        ]

    def resolve(
        self,
        ref: NodeRef,
        direction: Direction,
        max_hops: int = DEFAULT_MAX_HOPS,
    ) -> NodeRef | None:
        """Find the neighbouring sub-chapter of ``ref``, skipping boundary nodes.

        A boundary that links to itself is a global extremity; the walk wraps
        around to the opposite extremity so the pages form a single cycle.
        Returns None if a link is missing or no sub-chapter is reached within
        ``max_hops`` boundary hops.
        """
        target = self.step(ref, direction)
        hops = 0
        while target is not None and target.is_boundary:
            if hops >= max_hops:
                logger.warning(
                    "Weird chapter graph: no page within %d hops %s of %s",
                    max_hops, direction.value, ref,
                )
                return None
            following = self.step(target, direction)
            if following == target:
                following = self._wrap(direction)
            target = following
            hops += 1

        if target is None:
            logger.warning("Dangling %s link while leaving %s", direction.value, ref)
            return None
        return target

    def _wrap(self, direction: Direction) -> NodeRef | None:
        if not self._order:
            return None
        if direction is Direction.NEXT:
            return NodeRef(self._order[0], Boundary.BEGIN)
        return NodeRef(self._order[-1], Boundary.END)

    def to_dict(self) -> dict[str, dict[str, dict[str, list[str]]]]:
        """Plain nested dict view, ``[chapter_id, node_id]`` pairs for edges."""
        out: dict[str, dict[str, dict[str, list[str]]]] = {}
        for chapter_id in self._order:
            chapter_out: dict[str, dict[str, list[str]]] = {}
            for node, link in self._links[chapter_id].items():
                entry: dict[str, list[str]] = {}
                if link.next is not None:
                    entry["next"] = [link.next.chapter_id, link.next.node_id]
                if link.prev is not None:
                    entry["prev"] = [link.prev.chapter_id, link.prev.node_id]
                chapter_out[node.value if isinstance(node, Boundary) else node] = entry
            out[chapter_id] = chapter_out
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NavigationGraph):
            return NotImplemented
        return self._order == other._order and self._links == other._links

    def __repr__(self) -> str:
        pages = sum(len(self.subchapters(c)) for c in self._order)
        return f"NavigationGraph({len(self._order)} chapters, {pages} pages)"


def build_graph(chapters: Iterable[ChapterSpec]) -> NavigationGraph:
    """Build a fresh navigation graph from an ordered chapter list.

    Chapters are chained through their boundary nodes: each ``__end__``
    leads to the next chapter's ``__begin__`` and each ``__begin__`` back to
    the previous chapter's ``__end__``.
    """
    specs = list(chapters)
    if not specs:
        raise GraphError("cannot build a navigation graph without chapters")

    seen: set[str] = set()
    for spec in specs:
        if spec.id in seen:
            raise GraphError(f"duplicate chapter id {spec.id!r}")
        if not spec.subchapters:
            raise GraphError(f"chapter {spec.id!r} has no sub-chapters")
        seen.add(spec.id)

    links: dict[str, dict[Boundary | str, Link]] = {}
    last = len(specs) - 1
    for i, spec in enumerate(specs):
        # Boundaries: chain to neighbouring chapters, self-loop at the extremities
        begin_prev = NodeRef(specs[i - 1].id, Boundary.END) if i > 0 else NodeRef(spec.id, Boundary.BEGIN)
        end_next = NodeRef(specs[i + 1].id, Boundary.BEGIN) if i < last else NodeRef(spec.id, Boundary.END)

        subs = spec.subchapters
        nodes: dict[Boundary | str, Link] = {
            Boundary.BEGIN: Link(next=NodeRef(spec.id, subs[0]), prev=begin_prev),
            Boundary.END: Link(next=end_next, prev=NodeRef(spec.id, subs[-1])),
        }
        for j, sub_id in enumerate(subs):
            nxt = subs[j + 1] if j < len(subs) - 1 else Boundary.END
            prv = subs[j - 1] if j > 0 else Boundary.BEGIN
            nodes[sub_id] = Link(next=NodeRef(spec.id, nxt), prev=NodeRef(spec.id, prv))
        links[spec.id] = nodes

    graph = NavigationGraph(links, order=[s.id for s in specs])
    logger.debug("Built %r", graph)
    return graph
