"""Typer command handlers."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import typer

from core.errors import ActionNotMapped, ConfigError
from core.orchestrator import Orchestrator, RuntimeBundle
from interfaces.messages import Request


def _runtime(root: Path | None = None) -> RuntimeBundle:
    if root is None and os.environ.get("CRUD_PIPELINE_ROOT"):
        root = Path(os.environ["CRUD_PIPELINE_ROOT"])
    try:
        bundle = Orchestrator(root=root).build()
    except ConfigError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    logging.basicConfig(level=bundle.settings.log_level.upper())
    return bundle


def _pairs(items: list[str]) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{item}'")
        parsed[key] = value
    return parsed


def config_show() -> None:
    """Print effective configuration."""
    bundle = _runtime()
    typer.echo(bundle.settings.model_dump_json(indent=2))


def actions_list() -> None:
    """Print action registry state."""
    bundle = _runtime()
    for entry in bundle.dispatcher.registry.list_actions():
        kind = entry.handler_kind.value if entry.handler_kind else "-"
        status = "enabled" if entry.enabled else "disabled"
        typer.echo(f"{entry.name:<16} {kind:<8} {status:<9} {entry.view_template or '-'}")


def dispatch(
    action: str,
    args: list[str],
    method: str,
    data: list[str],
    query: list[str],
    referer: str | None,
) -> None:
    """Dispatch one request and print the response and flash notices."""
    bundle = _runtime()
    request = Request(
        method=method.upper(),
        action=action,
        args=args,
        data=_pairs(data),
        query=_pairs(query),
        referer=referer,
    )
    dispatcher = bundle.dispatcher
    if not dispatcher.can_dispatch(action):
        typer.echo(f"Action '{action}' is not enabled.", err=True)
        raise typer.Exit(code=1)

    ctx = dispatcher.context(request, bundle.store)
    try:
        response = dispatcher.execute(ctx)
    except ActionNotMapped as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(json.dumps({"kind": response.kind, **response.model_dump(mode="json")}, indent=2))
    for notice in bundle.flash.consume():
        typer.echo(f"[{notice.element}] {notice.message}")
