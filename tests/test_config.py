"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from cvnav.config import Config, load_config


class TestDefaults:
    def test_release_navigation(self):
        nav = Config().resolved_navigation
        assert nav.chapter_border_stickiness == 5
        assert nav.chapter_after_border_stickiness == 3
        assert nav.max_boundary_hops == 64

    def test_debug_navigation(self):
        nav = Config(debug=True).resolved_navigation
        assert nav.chapter_border_stickiness == 3
        assert nav.chapter_after_border_stickiness == 0
        assert nav.scroll_speed_scale == pytest.approx(0.3)

    def test_default_catalog(self):
        config = Config()
        assert [c.id for c in config.chapters] == [
            "chapter_career", "chapter_publications", "chapter_projects", "chapter_education",
        ]
        assert config.default_page == ("chapter_career", "career_huawei")


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.yaml") == Config()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_overrides(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "debug: true\n"
            "default_chapter: intro\n"
            "default_subchapter: hello\n"
            "chapters:\n"
            "  - id: intro\n"
            "    subchapters: [hello, about]\n"
            "debug_navigation:\n"
            "  chapter_border_stickiness: 7\n"
        )
        config = load_config(path)
        assert config.debug
        assert config.chapters[0].subchapters == ["hello", "about"]
        assert config.resolved_navigation.chapter_border_stickiness == 7
        assert config.default_page == ("intro", "hello")

    def test_empty_chapter_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("chapters:\n  - id: intro\n    subchapters: []\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_negative_stickiness_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("navigation:\n  chapter_border_stickiness: -1\n")
        with pytest.raises(ValidationError):
            load_config(path)
