"""Request-scoped context handed to every handler call."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from interfaces.collaborators import DataStore
from interfaces.messages import Request


def humanize(name: str) -> str:
    """``blog_post`` / ``BlogPost`` -> ``Blog post``."""
    spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name).replace("_", " ")
    words = spaced.split()
    if not words:
        return ""
    return " ".join([words[0].capitalize()] + [w.lower() for w in words[1:]])


@dataclass
class RequestContext:
    """Live state for a single dispatch.

    ``view`` is the template used by the default render step; listeners may
    replace it (``subject.context.view = "custom"``) before rendering.
    """

    action: str
    request: Request
    store: DataStore
    model_name: str = "Record"
    view: str | None = None
    view_vars: dict[str, Any] = field(default_factory=dict)

    @property
    def human_name(self) -> str:
        return humanize(self.model_name)

    def set(self, **view_vars: Any) -> None:
        """Expose variables to the view."""
        self.view_vars.update(view_vars)
