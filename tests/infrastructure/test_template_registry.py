"""Tests for TemplateRegistry and build_registry."""

from __future__ import annotations

import pytest

from scuttle.domain.templates import ARENA_ANNOUNCEMENT, BroadcastTemplate
from scuttle.infrastructure.templates import TemplateRegistry, build_registry
from scuttle.plugins.hookspecs import hookimpl
from scuttle.plugins.manager import PluginManager

EXTRA = BroadcastTemplate(title="Patch", description="Notes")


class _TemplatePlugin:
    @hookimpl
    def register_broadcast_templates(self) -> dict[str, object]:
        return {"patch_notes": EXTRA, "": EXTRA, "bogus": "not a template"}


class TestTemplateRegistry:
    def test_unknown_key_returns_none(self) -> None:
        assert TemplateRegistry().get("missing") is None

    def test_register_and_get(self) -> None:
        registry = TemplateRegistry()
        registry.register("patch_notes", EXTRA)
        assert registry.get("patch_notes") is EXTRA
        assert "patch_notes" in registry
        assert len(registry) == 1

    def test_register_rejects_empty_key(self) -> None:
        with pytest.raises(ValueError):
            TemplateRegistry().register("", EXTRA)

    def test_register_rejects_non_template(self) -> None:
        with pytest.raises(TypeError):
            TemplateRegistry().register("x", {"title": "t"})  # type: ignore[arg-type]

    def test_keys_sorted(self) -> None:
        registry = TemplateRegistry({"b": EXTRA, "a": EXTRA})
        assert registry.keys() == ["a", "b"]


class TestBuildRegistry:
    def test_builtins_only(self) -> None:
        registry = build_registry()
        assert registry.keys() == ["arena_announcement"]
        assert registry.get("arena_announcement") is ARENA_ANNOUNCEMENT

    def test_plugin_templates_merged_and_invalid_skipped(self) -> None:
        plugins = PluginManager()
        plugins.register_plugin(_TemplatePlugin())
        registry = build_registry(plugins)
        assert registry.keys() == ["arena_announcement", "patch_notes"]
