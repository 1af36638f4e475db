"""JSONL trail of dispatched actions."""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


class AuditLogger:
    """Writes one JSON line per dispatch."""

    def __init__(self, log_path: Path) -> None:
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger("crud.audit")

    @staticmethod
    def _hash_payload(payload: dict[str, Any]) -> str:
        encoded = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
        return hashlib.sha256(encoded).hexdigest()

    def log(
        self,
        *,
        action: str,
        handler_kind: str | None,
        payload: dict[str, Any],
        outcome: str,
        status: int | None = None,
        target: str | None = None,
        reason: str = "",
    ) -> None:
        """Append one audit record; the payload is stored only as a hash."""
        event = {
            "timestamp": datetime.now(UTC).isoformat(),
            "action": action,
            "handler_kind": handler_kind,
            "payload_hash": self._hash_payload(payload),
            "outcome": outcome,
            "status": status,
            "target": target,
            "reason": reason,
        }
        line = json.dumps(event, ensure_ascii=True)
        with self.log_path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        self.logger.info(line)

    def read(self) -> list[dict[str, Any]]:
        if not self.log_path.exists():
            return []
        with self.log_path.open("r", encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
