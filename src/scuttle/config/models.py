"""Pydantic configuration sections with code-baked defaults.

Sparse TOML contract: defaults live here, ``scuttle.toml`` holds overrides
only. A working deployment needs ``[api] api_key`` and ``[discord] bot_token``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from scuttle.domain.periods import SUNDAY


class ApiConfig(BaseModel):
    """[api] section — the stats backend."""

    model_config = {"frozen": True}

    base_url: str = "http://localhost:4000"
    api_key: str = ""
    timeout: float = Field(default=10.0, gt=0)


class DiscordConfig(BaseModel):
    """[discord] section — the delivery channel."""

    model_config = {"frozen": True}

    api_base: str = "https://discord.com/api/v10"
    bot_token: str = ""
    timeout: float = Field(default=10.0, gt=0)


class StatsConfig(BaseModel):
    """[stats] section."""

    model_config = {"frozen": True}

    queue_type: str = "arena"


class RankingsConfig(BaseModel):
    """[rankings] section."""

    model_config = {"frozen": True}

    # 0 = Monday … 6 = Sunday
    anchor_weekday: int = Field(default=SUNDAY, ge=0, le=6)


class BroadcastConfig(BaseModel):
    """[broadcast] section."""

    model_config = {"frozen": True}

    owner_id: str = ""
    concurrency: int = Field(default=1, ge=1, le=16)
