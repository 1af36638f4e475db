"""Shared plumbing for the generic CRUD handlers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, ClassVar

from core.context import RequestContext
from core.event_bus import EventBus
from core.event_subject import EventSubject
from governance.id_validator import IdValidator
from interfaces.collaborators import FlashSink, Router
from interfaces.messages import RedirectResponse, Response
from registry.action_registry import HandlerKind
from routing.redirect_resolver import RedirectResolver

logger = logging.getLogger("crud.handlers")


class BaseHandler(ABC):
    """Base class for the handler state machines.

    ``execute`` returns a terminal response, or ``None`` to let the
    dispatcher fall through to the default render step. Every helper that
    triggers an event hands back the listener's response when one was set,
    so a short-circuit is returned the moment it happens.
    """

    kind: ClassVar[HandlerKind]

    def __init__(
        self,
        *,
        event_bus: EventBus,
        id_validator: IdValidator,
        redirect_resolver: RedirectResolver,
        router: Router,
        flash: FlashSink,
        pagination_limit: int = 20,
    ) -> None:
        self.event_bus = event_bus
        self.id_validator = id_validator
        self.redirect_resolver = redirect_resolver
        self.router = router
        self.flash = flash
        self.pagination_limit = pagination_limit

    @abstractmethod
    def execute(self, ctx: RequestContext, *args: Any) -> Response | None:
        """Run the handler for one request."""

    # -- events ----------------------------------------------------------

    def _trigger(
        self,
        ctx: RequestContext,
        event_name: str,
        data: dict[str, Any] | EventSubject | None = None,
    ) -> EventSubject:
        """Trigger ``event_name``; an existing subject is reused as-is."""
        if isinstance(data, EventSubject):
            subject = data
        else:
            subject = EventSubject(
                action=ctx.action,
                request=ctx.request,
                context=ctx,
                fields=dict(data or {}),
            )
        return self.event_bus.trigger(event_name, subject)

    def _set_flash(
        self,
        ctx: RequestContext,
        message: str,
        element: str = "default",
        params: dict[str, Any] | None = None,
        key: str = "flash",
    ) -> Response | None:
        """Route a notice through ``setFlash`` listeners into the flash sink."""
        subject = self._trigger(
            ctx,
            "setFlash",
            {"message": message, "element": element, "params": params or {}, "key": key},
        )
        if subject.halted:
            return subject.response
        self.flash.set_flash(
            subject["message"], subject["element"], subject["params"], subject["key"]
        )
        return None

    def _redirect(self, subject: EventSubject, default_url: str) -> Response:
        url = self.redirect_resolver.resolve(subject, default_url)
        if subject.halted:
            return subject.response
        return RedirectResponse(url=url)

    def _notice_and_redirect(
        self,
        ctx: RequestContext,
        subject: EventSubject,
        message: str,
        element: str,
        default_url: str,
    ) -> Response:
        halt = self._set_flash(ctx, message, element)
        if halt is not None:
            return halt
        return self._redirect(subject, default_url)

    # -- urls and identifiers --------------------------------------------

    def _index_url(self) -> str:
        return self.router.url_for("index")

    def _referer(self, ctx: RequestContext) -> str:
        return ctx.request.referer or self._index_url()

    @staticmethod
    def _record_id(ctx: RequestContext, args: Sequence[Any]) -> str | None:
        if args and args[0] not in (None, ""):
            return str(args[0])
        return ctx.request.first_arg()

    @staticmethod
    def _find_query(record_id: str | None) -> dict[str, Any]:
        return {"conditions": {"id": record_id}}

    def _check_id(self, ctx: RequestContext, record_id: str | None) -> Response | None:
        """Return a redirect when ``record_id`` fails the id policy."""
        if self.id_validator.validate(record_id):
            return None
        logger.warning("Invalid id %r for action '%s'", record_id, ctx.action)
        subject = self._trigger(ctx, "invalidId", {"id": record_id})
        if subject.halted:
            return subject.response
        return self._notice_and_redirect(ctx, subject, "Invalid id", "error", self._referer(ctx))

    def _not_found(self, ctx: RequestContext, record_id: str | None) -> Response:
        logger.warning("%s %r not found for action '%s'", ctx.model_name, record_id, ctx.action)
        subject = self._trigger(ctx, "recordNotFound", {"id": record_id})
        if subject.halted:
            return subject.response
        return self._notice_and_redirect(
            ctx, subject, f"Could not find {ctx.human_name}", "error", self._index_url()
        )
