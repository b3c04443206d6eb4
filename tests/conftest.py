"""Shared test fixtures for cvnav tests."""

import pytest

from cvnav.config import Config
from cvnav.content import ContentPane, ContentRegistry
from cvnav.controller import ScrollNavigator
from cvnav.graph import build_graph
from cvnav.models import ChapterSpec
from cvnav.state import PagePointer


@pytest.fixture()
def config():
    return Config()


@pytest.fixture()
def cv_graph(config):
    """Graph of the default four-chapter CV."""
    return build_graph(config.chapters)


@pytest.fixture()
def small_graph():
    """Two chapters: a -> [a1, a2], b -> [b1]."""
    return build_graph([
        ChapterSpec(id="a", subchapters=["a1", "a2"]),
        ChapterSpec(id="b", subchapters=["b1"]),
    ])


@pytest.fixture()
def flat_contents(small_graph):
    """Panes whose content fits the viewport (nothing to scroll)."""
    return ContentRegistry.for_graph(small_graph, lambda _sub_id: ContentPane(200, 200))


@pytest.fixture()
def tall_contents(small_graph):
    """Panes with 800px of content behind a 200px viewport."""
    return ContentRegistry.for_graph(small_graph, lambda _sub_id: ContentPane(1000, 200))


@pytest.fixture()
def make_navigator(small_graph):
    """Factory for a navigator over ``small_graph`` starting at a/a1."""

    def _make(contents, border=3, after_border=2, **kwargs):
        pointer = PagePointer("a", "a1")
        return ScrollNavigator(
            small_graph, pointer, contents,
            chapter_border_stickiness=border,
            chapter_after_border_stickiness=after_border,
            **kwargs,
        )

    return _make
