"""Configuration loading for the CV navigator."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from cvnav.models import ChapterSpec


class NavigationConfig(BaseModel):
    chapter_border_stickiness: int = Field(default=5, ge=0)  # edge hits before a page turn
    chapter_after_border_stickiness: int = Field(default=3, ge=0)  # in-bounds samples swallowed after release
    scroll_speed_scale: float = 0.15  # wheel delta -> content pixels
    max_boundary_hops: int = Field(default=64, ge=1)


def _debug_navigation() -> NavigationConfig:
    return NavigationConfig(
        chapter_border_stickiness=3,
        chapter_after_border_stickiness=0,
        scroll_speed_scale=0.3,
    )


def _default_chapters() -> list[ChapterSpec]:
    return [
        ChapterSpec(id="chapter_career", subchapters=["career_huawei", "career_samsung"]),
        ChapterSpec(id="chapter_publications", subchapters=["publications_wacv_2024"]),
        ChapterSpec(id="chapter_projects", subchapters=[
            "project_this_cv", "project_image_processing_tool", "project_will_and_reason",
        ]),
        ChapterSpec(id="chapter_education", subchapters=["education_master", "education_bachelor"]),
    ]


class Config(BaseModel):
    debug: bool = False
    default_chapter: str = "chapter_career"
    default_subchapter: str = "career_huawei"
    chapters: list[ChapterSpec] = Field(default_factory=_default_chapters)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)
    debug_navigation: NavigationConfig = Field(default_factory=_debug_navigation)

    @property
    def resolved_navigation(self) -> NavigationConfig:
        """Navigation tuning for the current build mode."""
        return self.debug_navigation if self.debug else self.navigation

    @property
    def default_page(self) -> tuple[str, str]:
        return self.default_chapter, self.default_subchapter


def _project_root() -> Path:
    """Return the cvnav project root directory."""
    return Path(__file__).parent.parent


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing."""
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if config_path.exists():
        raw: dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        return Config(**raw)

    return Config()
