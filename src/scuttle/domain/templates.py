"""Broadcast message templates and their Discord embed rendering."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class TemplateField(BaseModel):
    """One embed field."""

    model_config = {"frozen": True}

    name: str
    value: str
    inline: bool = False


class BroadcastTemplate(BaseModel):
    """An announcement rendered as a single embed."""

    model_config = {"frozen": True}

    title: str
    description: str
    fields: tuple[TemplateField, ...] = ()
    color: int = Field(default=0x9D4EDD, ge=0, le=0xFFFFFF)
    footer: str | None = None

    def to_embed(self) -> dict[str, Any]:
        """Render as a Discord embed object."""
        embed: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "color": self.color,
        }
        if self.fields:
            embed["fields"] = [f.model_dump() for f in self.fields]
        if self.footer:
            embed["footer"] = {"text": self.footer}
        return embed

    def to_payload(self) -> dict[str, Any]:
        """Render as a message-create payload."""
        return {"embeds": [self.to_embed()]}


ARENA_ANNOUNCEMENT = BroadcastTemplate(
    title="⚔️ New Feature: Arena Game Mode Support!",
    description="We're excited to announce that Scuttle now supports Arena game mode tracking!",
    fields=(
        TemplateField(
            name="📊 Arena Stats",
            value=(
                "Track your arena performance with:\n"
                "• `/arena stats daily` - Last 24 hours\n"
                "• `/arena stats weekly` - Last 7 days\n"
                "• `/arena stats monthly` - Last 30 days"
            ),
        ),
        TemplateField(
            name="🏆 Arena Rankings",
            value=(
                "Compete with your guild members:\n"
                "• `/arena rankings weekly`\n"
                "• `/arena rankings monthly`"
            ),
        ),
        TemplateField(
            name="📈 Arena Metrics Tracked",
            value=(
                "• Average Placement\n"
                "• Win Rate\n"
                "• K/D/A Stats\n"
                "• Damage to Champions\n"
                "• Placement Finishes (1st, 2nd, 3rd, 4th)"
            ),
        ),
    ),
    color=0x9D4EDD,
    footer="Start tracking your arena stats today!",
)

BUILTIN_TEMPLATES: dict[str, BroadcastTemplate] = {
    "arena_announcement": ARENA_ANNOUNCEMENT,
}
