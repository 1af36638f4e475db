"""Handler registry extension tests."""

from __future__ import annotations

from typing import Any

import pytest

from core.context import RequestContext
from core.dispatcher import Dispatcher
from core.errors import ConfigError
from core.policy_runtime import load_settings
from handlers.base_handler import BaseHandler
from handlers.edit_handler import EditHandler
from handlers.handler_registry import DEFAULT_HANDLERS, HandlerRegistry
from handlers.index_handler import IndexHandler
from interfaces.flash import SessionFlash
from interfaces.messages import Request, Response
from interfaces.renderer import ViewRenderer
from registry.action_registry import HandlerKind
from routing.router import PrefixRouter
from storage.record_store import RecordStore


class PublishHandler(BaseHandler):
    kind = HandlerKind.EDIT

    def execute(self, ctx: RequestContext, *args: Any) -> Response | None:
        record_id = self._record_id(ctx, args)
        ctx.store.update(record_id, {"state": "published"})
        return Response(status=202, body={"published": record_id})


def _dispatcher(handlers: HandlerRegistry) -> Dispatcher:
    settings = load_settings({"actions": ["index", "edit"], "model_name": "Post"})
    return Dispatcher.from_settings(
        settings,
        flash=SessionFlash(),
        router=PrefixRouter("/posts"),
        renderer=ViewRenderer(),
        handlers=handlers,
    )


def test_defaults_cover_every_kind() -> None:
    registry = HandlerRegistry()

    assert set(DEFAULT_HANDLERS) == set(HandlerKind)
    assert registry.get(HandlerKind.EDIT) is EditHandler


def test_override_handler_receives_dispatch(store: RecordStore) -> None:
    created = store.create({"title": "draft"})
    dispatcher = _dispatcher(HandlerRegistry({HandlerKind.EDIT: PublishHandler}))

    response = dispatcher.execute(
        dispatcher.context(Request(method="PUT", action="edit", args=[created.id]), store)
    )

    assert response.status == 202
    assert response.body == {"published": created.id}
    assert store.find_one({"conditions": {"id": created.id}})["state"] == "published"


def test_register_accepts_kind_names() -> None:
    registry = HandlerRegistry()

    registry.register("edit", PublishHandler)

    assert registry.get(HandlerKind.EDIT) is PublishHandler
    assert registry.get(HandlerKind.INDEX) is IndexHandler


@pytest.mark.parametrize("handler_cls", [object, dict, "EditHandler"])
def test_register_rejects_non_handlers(handler_cls: Any) -> None:
    registry = HandlerRegistry()

    with pytest.raises(TypeError):
        registry.register(HandlerKind.INDEX, handler_cls)

    assert registry.get(HandlerKind.INDEX) is IndexHandler


def test_overrides_are_validated_on_construction() -> None:
    with pytest.raises(TypeError):
        HandlerRegistry({HandlerKind.VIEW: object})

    with pytest.raises(ConfigError):
        HandlerRegistry({"publish": PublishHandler})
