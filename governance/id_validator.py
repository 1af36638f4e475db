"""Identifier format policy."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from core.errors import ConfigError

_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_NUMERIC_RE = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


class IdPolicy(str, Enum):
    """Accepted identifier formats."""

    UUID = "uuid"
    NUMERIC = "numeric"
    NONE = "none"

    @classmethod
    def coerce(cls, value: Any) -> IdPolicy:
        if isinstance(value, IdPolicy):
            return value
        if value is None or value is False:
            return cls.NONE
        text = str(value).strip().lower()
        if text in {"integer", "int", "number"}:
            return cls.NUMERIC
        if text in {"", "false", "off"}:
            return cls.NONE
        try:
            return cls(text)
        except ValueError as exc:
            raise ConfigError(f"Unknown validate_id policy: {value!r}") from exc


class IdValidator:
    """Checks raw identifiers against the configured policy."""

    def __init__(self, policy: IdPolicy | str = IdPolicy.UUID) -> None:
        self.policy = IdPolicy.coerce(policy)

    def validate(self, record_id: Any, policy: IdPolicy | str | None = None) -> bool:
        effective = self.policy if policy is None else IdPolicy.coerce(policy)
        if effective is IdPolicy.NONE:
            return True
        if record_id is None:
            return False
        if effective is IdPolicy.UUID:
            return bool(_UUID_RE.fullmatch(str(record_id)))
        if isinstance(record_id, bool):
            return False
        if isinstance(record_id, (int, float)):
            return True
        return bool(_NUMERIC_RE.fullmatch(str(record_id)))
