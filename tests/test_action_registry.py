"""Action registry tests."""

from __future__ import annotations

import pytest

from core.errors import ActionNotMapped, ConfigError
from registry.action_registry import ActionRegistry, HandlerKind


def test_default_maps_cover_plain_and_admin_actions() -> None:
    registry = ActionRegistry()

    assert registry.resolve("edit") is HandlerKind.EDIT
    assert registry.resolve("admin_delete") is HandlerKind.DELETE
    assert registry.view_for("add") == "form"
    assert registry.view_for("admin_edit") == "admin_form"
    assert registry.view_for("delete") is None
    assert registry.enabled_actions() == []


def test_map_action_enables_by_default() -> None:
    registry = ActionRegistry()

    registry.map_action("publish", "edit")
    registry.map_action("archive", HandlerKind.DELETE, enable=False)

    assert registry.resolve("publish") is HandlerKind.EDIT
    assert registry.is_enabled("publish")
    assert registry.resolve("archive") is HandlerKind.DELETE
    assert not registry.is_enabled("archive")


def test_enable_disable_round_trip_is_idempotent() -> None:
    registry = ActionRegistry(enabled=["index"])
    before = registry.enabled_actions()

    registry.enable("view")
    registry.enable("view")
    assert registry.enabled_actions() == ["index", "view"]

    registry.disable("view")
    assert registry.enabled_actions() == before

    registry.disable("never_mapped")
    assert registry.enabled_actions() == before


def test_resolve_fails_for_unmapped_action_even_when_enabled() -> None:
    registry = ActionRegistry()
    registry.enable("ghost")

    with pytest.raises(ActionNotMapped) as exc_info:
        registry.resolve("ghost")

    assert exc_info.value.action == "ghost"
    assert 'Action "ghost" has not been mapped' in str(exc_info.value)


def test_map_views_merges_without_clearing() -> None:
    registry = ActionRegistry()

    registry.map_views({"index": "listing", "publish": "publish_form"})
    registry.map_view("view", "detail")

    assert registry.view_for("index") == "listing"
    assert registry.view_for("publish") == "publish_form"
    assert registry.view_for("view") == "detail"
    assert registry.view_for("add") == "form"


def test_unknown_handler_kind_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        ActionRegistry().map_action("publish", "publish")


def test_list_actions_reports_state() -> None:
    registry = ActionRegistry(action_map={"publish": "edit"}, enabled=["publish"])

    entries = {entry.name: entry for entry in registry.list_actions()}

    assert entries["publish"].handler_kind is HandlerKind.EDIT
    assert entries["publish"].enabled is True
    assert entries["index"].enabled is False
    assert entries["index"].view_template == "index"
