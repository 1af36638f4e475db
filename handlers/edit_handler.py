"""Update handler."""

from __future__ import annotations

import logging
from typing import Any

from core.context import RequestContext
from core.policy_runtime import merge_dicts
from handlers.base_handler import BaseHandler
from interfaces.messages import Response
from registry.action_registry import HandlerKind

logger = logging.getLogger("crud.handlers.edit")


class EditHandler(BaseHandler):
    """Loads the record into the form on read, updates it on PUT/PATCH.

    The write path checks existence by id alone and does not fire
    ``beforeFind``, so query scoping added there only limits reads. Scope
    writes from ``beforeSave``, where the record id is available and
    ``stop()`` vetoes the update.
    """

    kind = HandlerKind.EDIT
    write_methods: tuple[str, ...] = ("PUT", "PATCH")

    def execute(self, ctx: RequestContext, *args: Any) -> Response | None:
        record_id = self._record_id(ctx, args)
        halt = self._check_id(ctx, record_id)
        if halt is not None:
            return halt

        if ctx.request.is_method(*self.write_methods):
            halt = self._save(ctx, record_id)
        else:
            halt = self._load(ctx, record_id)
        if halt is not None:
            return halt

        return self._trigger(ctx, "beforeRender", {"id": record_id}).response

    def _save(self, ctx: RequestContext, record_id: str | None) -> Response | None:
        if not ctx.store.count(self._find_query(record_id)):
            return self._not_found(ctx, record_id)

        subject = self._trigger(ctx, "beforeSave", {"id": record_id})
        if subject.halted:
            return subject.response

        result = ctx.store.update(record_id, ctx.request.data)
        if result.success:
            logger.info("Updated %s %s", ctx.model_name, record_id)
            halt = self._set_flash(ctx, f"{ctx.human_name} was successfully updated", "success")
            if halt is not None:
                return halt
            subject = self._trigger(ctx, "afterSave", {"id": record_id, "success": True})
            if subject.halted:
                return subject.response
            return self._redirect(subject, self._index_url())

        logger.warning("Could not update %s %s: %s", ctx.model_name, record_id, result.errors)
        halt = self._set_flash(ctx, f"Could not update {ctx.human_name}", "error")
        if halt is not None:
            return halt
        subject = self._trigger(
            ctx, "afterSave", {"id": record_id, "success": False, "errors": result.errors}
        )
        if subject.halted:
            return subject.response

        ctx.request.data = merge_dicts(ctx.request.data, result.data)
        ctx.set(errors=result.errors)
        return None

    def _load(self, ctx: RequestContext, record_id: str | None) -> Response | None:
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

        ctx.request.data = merge_dicts(subject.get("item") or item, ctx.request.data)
        return None
