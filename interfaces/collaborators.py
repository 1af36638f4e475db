"""Contracts the host provides to the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from interfaces.messages import Response


@dataclass
class SaveResult:
    """Outcome of a create/update call against the data store."""

    success: bool
    id: str | None = None
    errors: dict[str, str] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)


class DataStore(Protocol):
    """Persistence for one record kind."""

    def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None: ...

    def count(self, query: dict[str, Any]) -> int: ...

    def paginate(self, query: dict[str, Any]) -> list[dict[str, Any]]: ...

    def create(self, payload: dict[str, Any]) -> SaveResult: ...

    def update(self, record_id: str, payload: dict[str, Any]) -> SaveResult: ...

    def delete(self, record_id: str) -> bool: ...


class FlashSink(Protocol):
    """Session-style notice storage."""

    def set_flash(
        self,
        message: str,
        element: str = "default",
        params: dict[str, Any] | None = None,
        key: str = "flash",
    ) -> None: ...


class Renderer(Protocol):
    """Turns a template name and view variables into a response."""

    def render(self, template: str, view_vars: dict[str, Any]) -> Response: ...


class Router(Protocol):
    """Builds urls for actions of the current resource."""

    def url_for(self, action: str, *args: Any) -> str: ...
