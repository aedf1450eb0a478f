"""Template registry — key lookup for broadcast templates.

Seeded with the built-in templates and extended by plugins through the
``register_broadcast_templates`` hook. Lookup never raises: an unknown key
returns None and the broadcast service reports ``TEMPLATE_NOT_FOUND``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from scuttle.domain.templates import BUILTIN_TEMPLATES, BroadcastTemplate

if TYPE_CHECKING:
    from scuttle.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class TemplateRegistry:
    """Mapping of template key to :class:`BroadcastTemplate`."""

    def __init__(self, templates: Mapping[str, BroadcastTemplate] | None = None) -> None:
        self._templates: dict[str, BroadcastTemplate] = dict(templates or {})

    def get(self, key: str) -> BroadcastTemplate | None:
        return self._templates.get(key)

    def register(self, key: str, template: BroadcastTemplate) -> None:
        """Add or replace the template stored under *key*."""
        if not key:
            raise ValueError("Template key must be non-empty")
        if not isinstance(template, BroadcastTemplate):
            msg = f"Expected BroadcastTemplate for {key!r}, got {type(template).__name__}"
            raise TypeError(msg)
        self._templates[key] = template

    def keys(self) -> list[str]:
        return sorted(self._templates)

    def __contains__(self, key: object) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)


def build_registry(plugins: PluginManager | None = None) -> TemplateRegistry:
    """Built-in templates plus any contributed by *plugins*."""
    registry = TemplateRegistry(BUILTIN_TEMPLATES)
    if plugins is None:
        return registry

    for key, template in plugins.collect_templates().items():
        try:
            registry.register(key, template)
        except (TypeError, ValueError):
            logger.warning("Skipping plugin template %r", key, exc_info=True)
    return registry
