"""Default renderer producing render instructions."""

from __future__ import annotations

from typing import Any

from interfaces.messages import RenderResponse


class ViewRenderer:
    """Hands the template and view variables back to the host unrendered."""

    def __init__(self, layout: str | None = None) -> None:
        self.layout = layout

    def render(self, template: str, view_vars: dict[str, Any]) -> RenderResponse:
        headers = {"X-Layout": self.layout} if self.layout else {}
        return RenderResponse(template=template, view_vars=dict(view_vars), headers=headers)
