"""Handler kind -> handler class lookup."""

from __future__ import annotations

from collections.abc import Mapping

from handlers.add_handler import AddHandler
from handlers.base_handler import BaseHandler
from handlers.delete_handler import DeleteHandler
from handlers.edit_handler import EditHandler
from handlers.index_handler import IndexHandler
from handlers.view_handler import ViewHandler
from registry.action_registry import HandlerKind

DEFAULT_HANDLERS: dict[HandlerKind, type[BaseHandler]] = {
    HandlerKind.INDEX: IndexHandler,
    HandlerKind.ADD: AddHandler,
    HandlerKind.EDIT: EditHandler,
    HandlerKind.VIEW: ViewHandler,
    HandlerKind.DELETE: DeleteHandler,
}


class HandlerRegistry:
    """In-memory handler registry; defaults may be overridden per kind."""

    def __init__(self, overrides: Mapping[HandlerKind, type[BaseHandler]] | None = None) -> None:
        self._handlers: dict[HandlerKind, type[BaseHandler]] = dict(DEFAULT_HANDLERS)
        for kind, handler_cls in (overrides or {}).items():
            self.register(kind, handler_cls)

    def register(self, kind: HandlerKind | str, handler_cls: type[BaseHandler]) -> None:
        if not (isinstance(handler_cls, type) and issubclass(handler_cls, BaseHandler)):
            raise TypeError(f"{handler_cls!r} is not a BaseHandler subclass.")
        self._handlers[HandlerKind.coerce(kind)] = handler_cls

    def get(self, kind: HandlerKind) -> type[BaseHandler]:
        return self._handlers[kind]
