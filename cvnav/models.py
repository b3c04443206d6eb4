"""Data types for the CV page navigation engine."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Boundary(str, Enum):
    """Synthetic nodes marking the edges of a chapter's sub-chapter list."""
    BEGIN = "__begin__"
    END = "__end__"


class Direction(str, Enum):
    NEXT = "next"
    PREV = "prev"

    @classmethod
    def from_speed(cls, scroll_speed: float) -> "Direction":
        """Classify a signed scroll speed. Zero counts as PREV."""
        return cls.NEXT if scroll_speed > 0 else cls.PREV


RESERVED_NODE_IDS = frozenset(b.value for b in Boundary)


# --- Input models ---


class ChapterSpec(BaseModel):
    """A chapter and its ordered sub-chapter ids, as declared by the site."""
    id: str = Field(min_length=1)
    subchapters: list[str] = Field(min_length=1)

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        if value in RESERVED_NODE_IDS:
            raise ValueError(f"chapter id {value!r} is reserved")
        return value

    @field_validator("subchapters")
    @classmethod
    def _check_subchapters(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        for sub_id in value:
            if not sub_id:
                raise ValueError("sub-chapter id must not be empty")
            if sub_id in RESERVED_NODE_IDS:
                raise ValueError(f"sub-chapter id {sub_id!r} is reserved")
            if sub_id in seen:
                raise ValueError(f"duplicate sub-chapter id {sub_id!r}")
            seen.add(sub_id)
        return value


# --- Graph node models ---


@dataclass(frozen=True)
class NodeRef:
    """Position in the navigation graph.

    ``node`` is either a ``Boundary`` member or a plain sub-chapter id.
    """
    chapter_id: str
    node: Boundary | str

    @property
    def is_boundary(self) -> bool:
        return isinstance(self.node, Boundary)

    @property
    def node_id(self) -> str:
        if isinstance(self.node, Boundary):
            return self.node.value
        return self.node

    def __str__(self) -> str:
        return f"{self.chapter_id}/{self.node_id}"


@dataclass(frozen=True)
class Link:
    next: NodeRef | None = None
    prev: NodeRef | None = None

    def toward(self, direction: Direction) -> NodeRef | None:
        return self.next if direction is Direction.NEXT else self.prev
