"""Listing handler."""

from __future__ import annotations

import logging
from typing import Any

from core.context import RequestContext
from handlers.base_handler import BaseHandler
from interfaces.messages import Response
from registry.action_registry import HandlerKind

logger = logging.getLogger("crud.handlers.index")


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


class IndexHandler(BaseHandler):
    """beforePaginate -> paginate -> afterPaginate -> beforeRender."""

    kind = HandlerKind.INDEX

    def execute(self, ctx: RequestContext, *args: Any) -> Response | None:
        query = {
            "conditions": {},
            "page": _positive_int(ctx.request.query.get("page"), 1),
            "limit": _positive_int(ctx.request.query.get("limit"), self.pagination_limit),
        }
        subject = self._trigger(ctx, "beforePaginate", {"query": query})
        if subject.halted:
            return subject.response

        items = ctx.store.paginate(subject.get("query", query))

        subject = self._trigger(ctx, "afterPaginate", {"items": items})
        if subject.halted:
            return subject.response
        items = subject.get("items", items)
        logger.debug("Listing %d %s records", len(items), ctx.model_name)

        ctx.set(items=items)
        return self._trigger(ctx, "beforeRender", {"items": items}).response
