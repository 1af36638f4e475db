"""Request and response models exchanged with the host."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Request(BaseModel):
    """Inbound request as seen by the pipeline."""

    method: str = "GET"
    action: str = "index"
    args: list[str] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    query: dict[str, Any] = Field(default_factory=dict)
    referer: str | None = None

    def is_method(self, *methods: str) -> bool:
        """True when the request method matches any of ``methods``."""
        current = self.method.upper()
        return any(current == method.upper() for method in methods)

    def first_arg(self) -> str | None:
        if not self.args or not self.args[0]:
            return None
        return self.args[0]


class Response(BaseModel):
    """Generic response; listeners may build any subclass of this."""

    status: int = 200
    body: Any = None
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def kind(self) -> str:
        return "custom"


class RedirectResponse(Response):
    """Redirect instruction."""

    url: str
    status: int = 302

    @property
    def kind(self) -> str:
        return "redirect"


class RenderResponse(Response):
    """Render instruction for the host's template engine."""

    template: str
    view_vars: dict[str, Any] = Field(default_factory=dict)

    @property
    def kind(self) -> str:
        return "render"
