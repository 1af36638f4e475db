"""Dispatcher - entry point that runs one CRUD action."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from core.context import RequestContext
from core.errors import ActionNotMapped
from core.event_bus import EventBus, Listener
from core.event_subject import EventSubject
from core.policy_runtime import PipelineSettings
from governance.audit_logger import AuditLogger
from governance.id_validator import IdValidator
from handlers.handler_registry import HandlerRegistry
from interfaces.collaborators import DataStore, FlashSink, Renderer, Router
from interfaces.messages import RedirectResponse, RenderResponse, Request, Response
from registry.action_registry import ActionRegistry, HandlerKind
from routing.redirect_resolver import RedirectResolver

logger = logging.getLogger("crud.dispatcher")


class Dispatcher:
    """
    Resolves an action to its handler, runs it and renders the fallback view.

    Usage:
        dispatcher = Dispatcher(registry=ActionRegistry(enabled=["index"]), ...)
        dispatcher.on("beforeFind", scope_to_owner)
        ctx = dispatcher.context(request, store, model_name="Post")
        response = dispatcher.execute(ctx)
    """

    def __init__(
        self,
        *,
        registry: ActionRegistry,
        event_bus: EventBus,
        flash: FlashSink,
        router: Router,
        renderer: Renderer,
        id_validator: IdValidator | None = None,
        handlers: HandlerRegistry | None = None,
        audit_logger: AuditLogger | None = None,
        pagination_limit: int = 20,
        model_name: str = "Record",
    ) -> None:
        self.registry = registry
        self.event_bus = event_bus
        self.flash = flash
        self.router = router
        self.renderer = renderer
        self.id_validator = id_validator or IdValidator()
        self.handlers = handlers or HandlerRegistry()
        self.audit_logger = audit_logger
        self.pagination_limit = pagination_limit
        self.model_name = model_name
        self.redirect_resolver = RedirectResolver(event_bus)

    @classmethod
    def from_settings(
        cls,
        settings: PipelineSettings,
        *,
        flash: FlashSink,
        router: Router,
        renderer: Renderer,
        handlers: HandlerRegistry | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> Dispatcher:
        """Build a dispatcher with its own registry and event bus."""
        registry = ActionRegistry(
            action_map=settings.action_map,
            view_map=settings.view_map,
            enabled=sorted(settings.actions),
        )
        return cls(
            registry=registry,
            event_bus=EventBus(prefix=settings.event_prefix),
            flash=flash,
            router=router,
            renderer=renderer,
            id_validator=IdValidator(settings.validate_id),
            handlers=handlers,
            audit_logger=audit_logger,
            pagination_limit=settings.pagination.limit,
            model_name=settings.model_name,
        )

    def on(self, event_name: str, listener: Listener) -> None:
        """Attach a listener; un-namespaced names get the event prefix."""
        self.event_bus.subscribe(event_name, listener)

    def can_dispatch(self, action: str) -> bool:
        """True when ``action`` is both enabled and mapped."""
        return self.registry.is_enabled(action) and self.registry.is_mapped(action)

    def context(
        self, request: Request, store: DataStore, model_name: str | None = None
    ) -> RequestContext:
        return RequestContext(
            action=request.action,
            request=request,
            store=store,
            model_name=model_name or self.model_name,
        )

    def execute(
        self,
        ctx: RequestContext,
        action: str | None = None,
        args: Sequence[Any] = (),
    ) -> Response:
        """Run ``action`` (default: the context's action) and return its response.

        Raises:
            ActionNotMapped: If the action has no handler-kind mapping.
        """
        name = action or ctx.action
        ctx.action = name
        ctx.view = name

        subject = self.event_bus.trigger(
            "init", EventSubject(action=name, request=ctx.request, context=ctx)
        )
        if subject.halted:
            return self._finish(ctx, None, subject.response)

        try:
            kind = self.registry.resolve(name)
        except ActionNotMapped as exc:
            logger.error("Dispatch failed: %s", exc)
            self._audit(ctx, None, outcome="error", reason=str(exc))
            raise

        view = self.registry.view_for(name)
        if view:
            ctx.view = view

        handler = self.handlers.get(kind)(
            event_bus=self.event_bus,
            id_validator=self.id_validator,
            redirect_resolver=self.redirect_resolver,
            router=self.router,
            flash=self.flash,
            pagination_limit=self.pagination_limit,
        )
        logger.info("Dispatching '%s' to %s handler", name, kind.value)
        response = handler.execute(ctx, *args)
        if response is None:
            response = self.renderer.render(
                ctx.view or name, {**ctx.view_vars, "data": ctx.request.data}
            )
        return self._finish(ctx, kind, response)

    def _finish(
        self, ctx: RequestContext, kind: HandlerKind | None, response: Response
    ) -> Response:
        self._audit(ctx, kind, outcome=response.kind, response=response)
        return response

    def _audit(
        self,
        ctx: RequestContext,
        kind: HandlerKind | None,
        *,
        outcome: str,
        response: Response | None = None,
        reason: str = "",
    ) -> None:
        if self.audit_logger is None:
            return
        target = None
        if isinstance(response, RedirectResponse):
            target = response.url
        elif isinstance(response, RenderResponse):
            target = response.template
        self.audit_logger.log(
            action=ctx.action,
            handler_kind=kind.value if kind else None,
            payload=ctx.request.data,
            outcome=outcome,
            status=response.status if response is not None else None,
            target=target,
            reason=reason,
        )
