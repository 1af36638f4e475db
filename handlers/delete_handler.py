"""Delete handler."""

from __future__ import annotations

import logging
from typing import Any

from core.context import RequestContext
from handlers.base_handler import BaseHandler
from interfaces.messages import Response
from registry.action_registry import HandlerKind

logger = logging.getLogger("crud.handlers.delete")


class DeleteHandler(BaseHandler):
    """Deletes a record on a DELETE request; always ends in a redirect.

    A ``beforeDelete`` listener vetoes the delete by calling
    ``subject.stop()``.
    """

    kind = HandlerKind.DELETE
    write_methods: tuple[str, ...] = ("DELETE",)

    def execute(self, ctx: RequestContext, *args: Any) -> Response | None:
        record_id = self._record_id(ctx, args)
        halt = self._check_id(ctx, record_id)
        if halt is not None:
            return halt

        query = self._find_query(record_id)
        subject = self._trigger(ctx, "beforeFind", {"id": record_id, "query": query})
        if subject.halted:
            return subject.response

        if not ctx.store.count(subject.get("query", query)):
            return self._not_found(ctx, record_id)

        subject = self._trigger(ctx, "beforeDelete", {"id": record_id})
        if subject.halted:
            return subject.response
        if subject.stopped:
            logger.warning("Delete of %s %s vetoed by listener", ctx.model_name, record_id)
            return self._notice_and_redirect(
                ctx, subject, f"Could not delete {ctx.human_name}", "error", self._index_url()
            )

        if not ctx.request.is_method(*self.write_methods):
            halt = self._set_flash(ctx, "Invalid HTTP request", "error")
            if halt is not None:
                return halt
            return self._redirect(subject, self._referer(ctx))

        if ctx.store.delete(record_id):
            logger.info("Deleted %s %s", ctx.model_name, record_id)
            halt = self._set_flash(ctx, f"Successfully deleted {ctx.human_name}", "success")
            success = True
        else:
            halt = self._set_flash(ctx, f"Could not delete {ctx.human_name}", "error")
            success = False
        if halt is not None:
            return halt

        subject = self._trigger(ctx, "afterDelete", {"id": record_id, "success": success})
        if subject.halted:
            return subject.response
        return self._redirect(subject, self._referer(ctx))
