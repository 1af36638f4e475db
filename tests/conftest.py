"""Shared fixtures for pipeline tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from core.dispatcher import Dispatcher
from core.event_subject import EventSubject
from core.policy_runtime import load_settings
from interfaces.flash import SessionFlash
from interfaces.renderer import ViewRenderer
from routing.router import PrefixRouter
from storage.record_store import RecordStore
from storage.sql_store import SQLStore

EVENT_CATALOG = [
    "init",
    "beforePaginate",
    "afterPaginate",
    "beforeSave",
    "afterSave",
    "beforeFind",
    "recordNotFound",
    "afterFind",
    "beforeRender",
    "beforeDelete",
    "afterDelete",
    "beforeRedirect",
    "setFlash",
    "invalidId",
]


@pytest.fixture
def store(tmp_path: Path) -> RecordStore:
    return RecordStore(SQLStore(tmp_path / "crud.db"), resource="posts", required_fields=["title"])


@pytest.fixture
def flash() -> SessionFlash:
    return SessionFlash()


@pytest.fixture
def make_dispatcher(flash: SessionFlash) -> Callable[..., Dispatcher]:
    def _make(**config: Any) -> Dispatcher:
        settings = load_settings(
            {"actions": ["index", "add", "edit", "view", "delete"], "model_name": "Post", **config}
        )
        return Dispatcher.from_settings(
            settings,
            flash=flash,
            router=PrefixRouter("/posts"),
            renderer=ViewRenderer(),
        )

    return _make


@pytest.fixture
def record_events() -> Callable[[Dispatcher], list[tuple[str, dict[str, Any]]]]:
    """Subscribe a recorder to every catalog event; returns the live log."""

    def _record(dispatcher: Dispatcher) -> list[tuple[str, dict[str, Any]]]:
        log: list[tuple[str, dict[str, Any]]] = []

        def listener_for(name: str) -> Callable[[EventSubject], None]:
            def _listener(subject: EventSubject) -> None:
                log.append((name, dict(subject.fields)))

            return _listener

        for name in EVENT_CATALOG:
            dispatcher.on(name, listener_for(name))
        return log

    return _record
