"""Event bus and subject behavior tests."""

from __future__ import annotations

from core.event_bus import EventBus, qualify_event_name
from core.event_subject import EventSubject
from interfaces.messages import RedirectResponse, Response


def test_event_names_are_prefixed_unless_namespaced() -> None:
    assert qualify_event_name("beforeSave", "crud") == "crud.beforeSave"
    assert qualify_event_name("app.beforeSave", "crud") == "app.beforeSave"

    bus = EventBus(prefix="crud")
    calls: list[str] = []
    bus.subscribe("beforeSave", lambda subject: calls.append("short"))
    bus.subscribe("crud.beforeSave", lambda subject: calls.append("qualified"))

    bus.trigger("beforeSave", EventSubject(action="add"))

    assert calls == ["short", "qualified"]
    assert len(bus.listeners("crud.beforeSave")) == 2


def test_listeners_run_in_registration_order_and_share_state() -> None:
    bus = EventBus()
    bus.subscribe("beforeFind", lambda s: s.set(order=["first"]))
    bus.subscribe("beforeFind", lambda s: s["order"].append("second"))
    bus.subscribe("beforeFind", lambda s: s["order"].append("third"))

    subject = bus.trigger("beforeFind", EventSubject(action="view"))

    assert subject["order"] == ["first", "second", "third"]
    assert not subject.halted
    assert subject.stopped is False


def test_response_ends_dispatch_for_later_listeners() -> None:
    bus = EventBus()
    calls: list[str] = []
    terminal = RedirectResponse(url="/login")

    def deny(subject: EventSubject) -> Response:
        calls.append("deny")
        return terminal

    bus.subscribe("init", deny)
    bus.subscribe("init", lambda s: calls.append("late"))

    subject = bus.trigger("init", EventSubject(action="index"))

    assert calls == ["deny"]
    assert subject.response is terminal
    assert subject.halted


def test_assigned_response_is_equivalent_to_returned_one() -> None:
    bus = EventBus()
    calls: list[str] = []
    bus.subscribe("init", lambda s: s.respond(Response(status=204)))
    bus.subscribe("init", lambda s: calls.append("late"))

    subject = bus.trigger("init", EventSubject(action="index"))

    assert calls == []
    assert subject.response is not None
    assert subject.response.status == 204


def test_stop_sets_flag_without_a_response() -> None:
    bus = EventBus()
    calls: list[str] = []
    bus.subscribe("beforeDelete", lambda s: s.stop())
    bus.subscribe("beforeDelete", lambda s: calls.append("late"))

    subject = bus.trigger("beforeDelete", EventSubject(action="delete", fields={"id": "1"}))

    assert subject.stopped is True
    assert subject.response is None
    assert calls == []


def test_reused_subject_resets_stopped_per_trigger() -> None:
    bus = EventBus()
    bus.subscribe("first", lambda s: s.stop())
    subject = bus.trigger("first", EventSubject(action="edit"))
    assert subject.stopped is True

    again = bus.trigger("second", subject)

    assert again is subject
    assert again.stopped is False


def test_unsubscribe_removes_listener() -> None:
    bus = EventBus()
    calls: list[str] = []

    def listener(subject: EventSubject) -> None:
        calls.append("hit")

    bus.subscribe("init", listener)
    assert bus.unsubscribe("init", listener) is True
    assert bus.unsubscribe("init", listener) is False

    bus.trigger("init", EventSubject(action="index"))

    assert calls == []
