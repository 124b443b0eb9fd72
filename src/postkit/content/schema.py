"""Typed front matter record for a blog post."""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

DEFAULT_LAYOUT = "post"


class PostFrontmatter(BaseModel):
    """Front matter keys read by the site generator.

    Unknown keys are kept in ``model_extra`` so they survive a round trip;
    the linter decides whether to report them.
    """

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    layout: str = Field(default=DEFAULT_LAYOUT, min_length=1)
    title: str = Field(min_length=1)
    date: dt.date
    category: str | None = Field(default=None, min_length=1)
    banner_emoji: str | None = None
    banner_bg: str | None = None
    read_time: PositiveInt | None = None
    tags: list[str] = Field(min_length=1)
    excerpt: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_datetime(cls, value: Any) -> Any:
        # YAML turns "2024-03-12 09:30:00" into a datetime; posts are dated by day.
        if isinstance(value, dt.datetime):
            return value.date()
        return value

    @field_validator("tags")
    @classmethod
    def _reject_blank_tags(cls, value: list[str]) -> list[str]:
        if any(not tag for tag in value):
            msg = "tags must not contain blank entries"
            raise ValueError(msg)
        return value

    @property
    def extra_keys(self) -> list[str]:
        """Keys present in the source that the schema does not define."""
        return list(self.model_extra or {})

    def to_yaml_dict(self) -> dict[str, Any]:
        """Return the keys in canonical order, dropping unset optional values."""
        data: dict[str, Any] = {}
        for name in SCHEMA_KEYS:
            value = getattr(self, name)
            if value is None:
                continue
            data[name] = list(value) if isinstance(value, list) else value
        data.update(self.model_extra or {})
        return data


SCHEMA_KEYS: tuple[str, ...] = tuple(PostFrontmatter.model_fields)
REQUIRED_KEYS: frozenset[str] = frozenset(
    name for name, field in PostFrontmatter.model_fields.items() if field.is_required()
)
