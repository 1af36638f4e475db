"""CLI entrypoint for the CRUD pipeline."""

from __future__ import annotations

from typing import Optional

import typer

from ui.cli import commands

app = typer.Typer(help="Event-driven CRUD request pipeline")
config_app = typer.Typer(help="Configuration commands")
actions_app = typer.Typer(help="Action registry commands")


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


@actions_app.command("list")
def actions_list_cmd() -> None:
    """List mapped and enabled actions."""
    commands.actions_list()


@app.command("dispatch")
def dispatch_cmd(
    action: str = typer.Argument(..., help="Action to execute, e.g. index or edit"),
    args: Optional[list[str]] = typer.Argument(None, help="Positional request arguments (record id)"),
    method: str = typer.Option("GET", "--method", "-X", help="HTTP method"),
    data: list[str] = typer.Option([], "--data", "-d", help="Body field as key=value"),
    query: list[str] = typer.Option([], "--query", "-q", help="Query parameter as key=value"),
    referer: Optional[str] = typer.Option(None, "--referer", help="Referring url"),
) -> None:
    """Run one request through the pipeline against the local store."""
    commands.dispatch(
        action=action,
        args=args or [],
        method=method,
        data=data,
        query=query,
        referer=referer,
    )


app.add_typer(config_app, name="config")
app.add_typer(actions_app, name="actions")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
