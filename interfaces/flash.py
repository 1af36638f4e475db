"""Session-backed flash notices."""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from pydantic import BaseModel, Field


class FlashMessage(BaseModel):
    """Single flash notice."""

    message: str
    element: str = "default"
    params: dict[str, Any] = Field(default_factory=dict)


class SessionFlash:
    """Keeps flash notices per key until they are consumed."""

    def __init__(self) -> None:
        self._messages: dict[str, list[FlashMessage]] = defaultdict(list)

    def set_flash(
        self,
        message: str,
        element: str = "default",
        params: dict[str, Any] | None = None,
        key: str = "flash",
    ) -> None:
        self._messages[key].append(
            FlashMessage(message=message, element=element, params=params or {})
        )

    def peek(self, key: str = "flash") -> list[FlashMessage]:
        return list(self._messages.get(key, []))

    def consume(self, key: str = "flash") -> list[FlashMessage]:
        """Return and clear notices stored under ``key``."""
        return self._messages.pop(key, [])
