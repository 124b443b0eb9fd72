from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from postkit.config import PostkitConfig
from tests.helpers.post_factory import make_post_text


@dataclass(slots=True)
class SiteFixture:
    """A throwaway repository root with posts and drafts directories."""

    root: Path
    config: PostkitConfig
    written: list[Path] = field(default_factory=list)

    @property
    def posts_dir(self) -> Path:
        return self.config.paths.posts_dir

    @property
    def drafts_dir(self) -> Path:
        return self.config.paths.drafts_dir

    def add_post(
        self, filename: str, text: str | None = None, *, draft: bool = False, **overrides: Any
    ) -> Path:
        directory = self.drafts_dir if draft else self.posts_dir
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(text if text is not None else make_post_text(**overrides), encoding="utf-8")
        self.written.append(path)
        return path


@pytest.fixture(autouse=True)
def _clean_postkit_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("POSTKIT_"):
            monkeypatch.delenv(key)


@pytest.fixture
def config(tmp_path) -> PostkitConfig:
    return PostkitConfig().resolve(tmp_path)


@pytest.fixture
def site(tmp_path, monkeypatch) -> SiteFixture:
    monkeypatch.chdir(tmp_path)
    fixture = SiteFixture(root=tmp_path, config=PostkitConfig().resolve(tmp_path))
    fixture.posts_dir.mkdir()
    fixture.drafts_dir.mkdir()
    return fixture
