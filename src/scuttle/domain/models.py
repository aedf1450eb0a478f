"""Value objects exchanged with the backend stats service.

All models are frozen; none of them are persisted by scuttle.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Identity(BaseModel):
    """A player's display name plus tag (``Name #TAG``)."""

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    tag: str = Field(min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("tag", mode="before")
    @classmethod
    def _strip_tag(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lstrip("#").strip()
        return value

    @classmethod
    def parse(cls, text: str) -> Identity:
        """Parse ``Name#TAG`` or ``Name #TAG``.

        Raises:
            ValueError: *text* has no ``#`` separator.
        """
        name, sep, tag = text.rpartition("#")
        if not sep:
            msg = f"Expected 'Name #TAG', got {text!r}"
            raise ValueError(msg)
        return cls(name=name, tag=tag)

    @property
    def riot_id(self) -> str:
        return f"{self.name} #{self.tag}"

    def __str__(self) -> str:
        return self.riot_id


class CacheStatus(BaseModel):
    """Whether match data for a player is cached for a lookback window."""

    model_config = {"frozen": True}

    is_cached: bool


class RankingEntry(BaseModel):
    """One row of a rankings leaderboard."""

    model_config = {"frozen": True}

    rank: int = Field(ge=1)
    name: str
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        return value


class BroadcastTarget(BaseModel):
    """A guild and the channel announcements are delivered to."""

    model_config = {"frozen": True}

    guild_id: str
    name: str
    channel_id: str
