"""Action name -> handler kind registry with view-template mapping."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from core.errors import ActionNotMapped, ConfigError

logger = logging.getLogger("crud.registry")


class HandlerKind(str, Enum):
    """The five generic CRUD handlers."""

    INDEX = "index"
    ADD = "add"
    EDIT = "edit"
    VIEW = "view"
    DELETE = "delete"

    @classmethod
    def coerce(cls, value: HandlerKind | str) -> HandlerKind:
        if isinstance(value, HandlerKind):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise ConfigError(f"Unknown handler kind: {value!r}") from exc


DEFAULT_ACTION_MAP: dict[str, HandlerKind] = {
    "index": HandlerKind.INDEX,
    "add": HandlerKind.ADD,
    "edit": HandlerKind.EDIT,
    "view": HandlerKind.VIEW,
    "delete": HandlerKind.DELETE,
    "admin_index": HandlerKind.INDEX,
    "admin_add": HandlerKind.ADD,
    "admin_edit": HandlerKind.EDIT,
    "admin_view": HandlerKind.VIEW,
    "admin_delete": HandlerKind.DELETE,
}

DEFAULT_VIEW_MAP: dict[str, str] = {
    "index": "index",
    "add": "form",
    "edit": "form",
    "view": "view",
    "admin_index": "admin_index",
    "admin_add": "admin_form",
    "admin_edit": "admin_form",
    "admin_view": "admin_view",
}


@dataclass
class RegisteredAction:
    """Metadata for action listing output."""

    name: str
    handler_kind: HandlerKind | None
    enabled: bool
    view_template: str | None


class ActionRegistry:
    """Owns the action map, the view map and the enabled-action set."""

    def __init__(
        self,
        action_map: Mapping[str, HandlerKind | str] | None = None,
        view_map: Mapping[str, str] | None = None,
        enabled: Iterable[str] = (),
    ) -> None:
        self._actions: dict[str, HandlerKind] = dict(DEFAULT_ACTION_MAP)
        self._views: dict[str, str] = dict(DEFAULT_VIEW_MAP)
        self._enabled: list[str] = []
        for name, kind in (action_map or {}).items():
            self.map_action(name, kind, enable=False)
        self.map_views(view_map or {})
        for name in enabled:
            self.enable(name)

    def map_action(self, name: str, handler_kind: HandlerKind | str, enable: bool = True) -> None:
        """Install or overwrite the handler kind for ``name``."""
        self._actions[name] = HandlerKind.coerce(handler_kind)
        if enable:
            self.enable(name)

    def map_view(self, name: str, template: str) -> None:
        self._views[name] = template

    def map_views(self, mapping: Mapping[str, str]) -> None:
        """Merge view mappings; unspecified entries are kept."""
        self._views.update(mapping)

    def enable(self, name: str) -> None:
        if name in self._enabled:
            return
        if name not in self._actions:
            logger.warning("Enabling unmapped action '%s'; dispatch will fail until it is mapped", name)
        self._enabled.append(name)

    def disable(self, name: str) -> None:
        if name in self._enabled:
            self._enabled.remove(name)

    def is_enabled(self, name: str) -> bool:
        return name in self._enabled

    def is_mapped(self, name: str) -> bool:
        return name in self._actions

    def enabled_actions(self) -> list[str]:
        return list(self._enabled)

    def resolve(self, name: str) -> HandlerKind:
        """Return the handler kind for ``name`` regardless of enabled status."""
        kind = self._actions.get(name)
        if kind is None:
            raise ActionNotMapped(name)
        return kind

    def view_for(self, name: str) -> str | None:
        return self._views.get(name)

    def list_actions(self) -> list[RegisteredAction]:
        names = sorted(set(self._actions) | set(self._enabled))
        return [
            RegisteredAction(
                name=name,
                handler_kind=self._actions.get(name),
                enabled=name in self._enabled,
                view_template=self._views.get(name),
            )
            for name in names
        ]
