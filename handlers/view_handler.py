"""Read-only single record handler."""

from __future__ import annotations

from typing import Any

from core.context import RequestContext
from handlers.base_handler import BaseHandler
from interfaces.messages import Response
from registry.action_registry import HandlerKind


class ViewHandler(BaseHandler):
    kind = HandlerKind.VIEW

    def execute(self, ctx: RequestContext, *args: Any) -> Response | None:
        record_id = self._record_id(ctx, args)
        halt = self._check_id(ctx, record_id)
        if halt is not None:
            return halt

        query = self._find_query(record_id)
        subject = self._trigger(ctx, "beforeFind", {"id": record_id, "query": query})
        if subject.halted:
            return subject.response

        item = ctx.store.find_one(subject.get("query", query))
        if not item:
            return self._not_found(ctx, record_id)

        subject = self._trigger(ctx, "afterFind", {"id": record_id, "item": item})
        if subject.halted:
            return subject.response
        item = subject.get("item", item)

        ctx.set(item=item)
        return self._trigger(ctx, "beforeRender", {"id": record_id, "item": item}).response
