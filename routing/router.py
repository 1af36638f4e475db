"""URL building for a single resource."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote


class PrefixRouter:
    """Builds ``<base_path>/<action>/<arg>...`` style urls.

    The ``index`` action maps to the base path itself.
    """

    def __init__(self, base_path: str = "/") -> None:
        self.base_path = "/" + base_path.strip("/") if base_path.strip("/") else ""

    def url_for(self, action: str, *args: Any) -> str:
        parts = [self.base_path]
        if action != "index" or args:
            parts.append(quote(action))
        parts.extend(quote(str(arg), safe="") for arg in args)
        return "/".join(parts) or "/"
