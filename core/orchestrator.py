"""Top-level runtime wiring for CLI use."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.dispatcher import Dispatcher
from core.policy_runtime import (
    PipelineSettings,
    ensure_runtime_dirs,
    load_effective_config,
    load_settings,
    merge_dicts,
)
from governance.audit_logger import AuditLogger
from governance.id_validator import IdPolicy
from interfaces.flash import SessionFlash
from interfaces.renderer import ViewRenderer
from routing.router import PrefixRouter
from storage.record_store import RecordStore
from storage.sql_store import SQLStore


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    settings: PipelineSettings
    store: RecordStore
    flash: SessionFlash
    audit_logger: AuditLogger
    dispatcher: Dispatcher


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(self, root: Path | None = None, overrides: dict[str, Any] | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self.overrides = overrides or {}

    def build(self) -> RuntimeBundle:
        config = merge_dicts(load_effective_config(self.root), self.overrides)
        settings = load_settings(config)
        logging.getLogger("crud").setLevel(settings.log_level.upper())
        paths = ensure_runtime_dirs(self.root, settings)

        sql_store = SQLStore(paths["db_path"])
        store = RecordStore(
            sql_store,
            resource=settings.resource,
            id_format="numeric" if settings.validate_id is IdPolicy.NUMERIC else "uuid",
            required_fields=settings.required_fields,
        )

        flash = SessionFlash()
        audit_logger = AuditLogger(paths["audit_log_path"])
        dispatcher = Dispatcher.from_settings(
            settings,
            flash=flash,
            router=PrefixRouter(f"/{settings.resource}"),
            renderer=ViewRenderer(),
            audit_logger=audit_logger,
        )
        return RuntimeBundle(
            config=config,
            settings=settings,
            store=store,
            flash=flash,
            audit_logger=audit_logger,
            dispatcher=dispatcher,
        )
