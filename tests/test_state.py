"""Tests for observable state cells and the page pointer."""

from cvnav.state import PagePointer, State


class TestState:
    def test_notifies_on_change(self):
        cell = State(1)
        seen = []
        cell.subscribe(lambda old, new: seen.append((old, new)))
        cell.value = 2
        assert seen == [(1, 2)]

    def test_no_notification_when_unchanged(self):
        cell = State("x")
        seen = []
        cell.subscribe(lambda old, new: seen.append(new))
        cell.value = "x"
        assert seen == []

    def test_unsubscribe(self):
        cell = State(0)
        seen = []
        unsubscribe = cell.subscribe(lambda old, new: seen.append(new))
        unsubscribe()
        unsubscribe()
        cell.value = 5
        assert seen == []


class TestPagePointer:
    def test_set_updates_both_cells(self):
        pointer = PagePointer("a", "a1")
        assert pointer.set("b", "b1")
        assert pointer.chapter.value == "b"
        assert pointer.subchapter.value == "b1"

    def test_set_same_page_is_noop(self):
        pointer = PagePointer("a", "a1")
        seen = []
        pointer.subscribe(lambda old, new: seen.append(new))
        assert not pointer.set("a", "a1")
        assert seen == []

    def test_pointer_subscriber_sees_consistent_pair(self):
        pointer = PagePointer("a", "a1")
        seen = []
        pointer.subscribe(lambda old, new: seen.append(pointer.current))
        pointer.set("b", "b1")
        assert seen == [("b", "b1")]

    def test_cell_subscribers_fire_per_cell(self):
        pointer = PagePointer("a", "a1")
        chapters, subchapters = [], []
        pointer.chapter.subscribe(lambda old, new: chapters.append(new))
        pointer.subchapter.subscribe(lambda old, new: subchapters.append(new))
        pointer.set("a", "a2")
        assert chapters == []
        assert subchapters == ["a2"]

    def test_chapter_subscriber_sees_valid_page(self, small_graph):
        pointer = PagePointer("a", "a1")
        seen = []
        pointer.chapter.subscribe(lambda old, new: seen.append((pointer.current, pointer.is_valid(small_graph))))
        pointer.set("b", "b1")
        assert seen == [(("b", "b1"), True)]

    def test_subchapter_subscriber_sees_valid_page(self, small_graph):
        pointer = PagePointer("b", "b1")
        seen = []
        pointer.subchapter.subscribe(lambda old, new: seen.append((old, new, pointer.current)))
        pointer.set("a", "a2")
        assert seen == [("b1", "a2", ("a", "a2"))]

    def test_store_does_not_notify(self):
        cell = State("x")
        seen = []
        cell.subscribe(lambda old, new: seen.append(new))
        assert cell.store("y")
        assert not cell.store("y")
        assert cell.value == "y"
        assert seen == []


class TestEnsureValid:
    def test_valid_pointer_untouched(self, small_graph):
        pointer = PagePointer("a", "a2")
        assert not pointer.ensure_valid(small_graph)
        assert pointer.current == ("a", "a2")

    def test_stale_pointer_uses_default(self, small_graph):
        pointer = PagePointer("a", "gone")
        assert pointer.ensure_valid(small_graph, default=("b", "b1"))
        assert pointer.current == ("b", "b1")

    def test_bad_default_falls_back_to_first_page(self, small_graph):
        pointer = PagePointer("old_chapter", "old_page")
        assert pointer.ensure_valid(small_graph, default=("nope", "nope"))
        assert pointer.current == ("a", "a1")

    def test_page_under_wrong_chapter_is_invalid(self, small_graph):
        pointer = PagePointer("b", "a1")
        assert not pointer.is_valid(small_graph)
