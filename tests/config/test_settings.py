"""Tests for ScuttleSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from scuttle.config.settings import ScuttleSettings


class TestScuttleSettingsDefaults:
    def test_all_defaults(self) -> None:
        settings = ScuttleSettings.from_cli()
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.api.base_url == "http://localhost:4000"
        assert settings.api.timeout == 10.0
        assert settings.discord.bot_token == ""
        assert settings.stats.queue_type == "arena"
        assert settings.rankings.anchor_weekday == 6
        assert settings.broadcast.owner_id == ""
        assert settings.broadcast.concurrency == 1

    def test_frozen(self) -> None:
        settings = ScuttleSettings.from_cli()
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_discovered_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "scuttle.toml"
        toml.write_text(
            '[api]\nbase_url = "https://api.scuttle.test"\n'
            '[broadcast]\nowner_id = "42"\nconcurrency = 4\n'
        )
        settings = ScuttleSettings.from_cli()
        assert settings.config_path == toml
        assert settings.api.base_url == "https://api.scuttle.test"
        assert settings.api.timeout == 10.0
        assert settings.broadcast.owner_id == "42"
        assert settings.broadcast.concurrency == 4

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "bot.toml"
        custom.parent.mkdir()
        custom.write_text('[stats]\nqueue_type = "ranked_solo"\n')
        settings = ScuttleSettings.from_cli(config_path=str(custom))
        assert settings.stats.queue_type == "ranked_solo"
        assert settings.config_path == custom

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            ScuttleSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "scuttle.toml").write_text("[api\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ScuttleSettings.from_cli()

    def test_out_of_range_value(self, tmp_path: Path) -> None:
        (tmp_path / "scuttle.toml").write_text("[rankings]\nanchor_weekday = 9\n")
        with pytest.raises(ValidationError):
            ScuttleSettings.from_cli()


class TestEnvAndFlags:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "scuttle.toml").write_text('[discord]\nbot_token = "from-file"\n')
        monkeypatch.setenv("SCUTTLE_DISCORD__BOT_TOKEN", "from-env")
        settings = ScuttleSettings.from_cli()
        assert settings.discord.bot_token == "from-env"

    def test_cli_flags_override(self) -> None:
        settings = ScuttleSettings.from_cli(json_output=True, quiet=True, verbose=True)
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True

    def test_cli_flags_override_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCUTTLE_VERBOSE", "true")
        settings = ScuttleSettings.from_cli(verbose=False)
        assert settings.verbose is False
