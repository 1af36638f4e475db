"""Create handler."""

from __future__ import annotations

import logging
from typing import Any

from core.context import RequestContext
from core.policy_runtime import merge_dicts
from handlers.base_handler import BaseHandler
from interfaces.messages import Response
from registry.action_registry import HandlerKind

logger = logging.getLogger("crud.handlers.add")


class AddHandler(BaseHandler):
    """Shows the form on read, creates the record on POST."""

    kind = HandlerKind.ADD
    write_methods: tuple[str, ...] = ("POST",)

    def execute(self, ctx: RequestContext, *args: Any) -> Response | None:
        if ctx.request.is_method(*self.write_methods):
            halt = self._save(ctx)
            if halt is not None:
                return halt

        return self._trigger(ctx, "beforeRender", {"success": False}).response

    def _save(self, ctx: RequestContext) -> Response | None:
        subject = self._trigger(ctx, "beforeSave")
        if subject.halted:
            return subject.response

        result = ctx.store.create(ctx.request.data)
        if result.success:
            logger.info("Created %s %s", ctx.model_name, result.id)
            halt = self._set_flash(ctx, f"Successfully created {ctx.human_name}", "success")
            if halt is not None:
                return halt
            subject = self._trigger(ctx, "afterSave", {"success": True, "id": result.id})
            if subject.halted:
                return subject.response
            return self._redirect(subject, self._index_url())

        logger.warning("Could not create %s: %s", ctx.model_name, result.errors)
        halt = self._set_flash(ctx, f"Could not create {ctx.human_name}", "error")
        if halt is not None:
            return halt
        subject = self._trigger(ctx, "afterSave", {"success": False, "errors": result.errors})
        if subject.halted:
            return subject.response

        ctx.request.data = merge_dicts(ctx.request.data, result.data)
        ctx.set(errors=result.errors)
        return None
