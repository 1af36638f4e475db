"""Index and view handler tests."""

from __future__ import annotations

from interfaces.messages import RedirectResponse, RenderResponse, Request
from storage.record_store import RecordStore


def _names(log: list[tuple[str, dict]]) -> list[str]:
    return [name for name, _ in log]


def test_index_lists_records(make_dispatcher, record_events, store: RecordStore) -> None:
    for title in ("a", "b", "c"):
        store.create({"title": title})
    dispatcher = make_dispatcher()
    log = record_events(dispatcher)

    response = dispatcher.execute(dispatcher.context(Request(action="index"), store))

    assert isinstance(response, RenderResponse)
    assert response.template == "index"
    assert [item["title"] for item in response.view_vars["items"]] == ["a", "b", "c"]
    assert _names(log) == ["init", "beforePaginate", "afterPaginate", "beforeRender"]


def test_index_paginates_from_query(make_dispatcher, store: RecordStore) -> None:
    for title in ("a", "b", "c"):
        store.create({"title": title})
    dispatcher = make_dispatcher()
    request = Request(action="index", query={"page": "2", "limit": "2"})

    response = dispatcher.execute(dispatcher.context(request, store))

    assert [item["title"] for item in response.view_vars["items"]] == ["c"]


def test_index_listeners_rewrite_query_and_items(make_dispatcher, store: RecordStore) -> None:
    store.create({"title": "draft", "state": "draft"})
    store.create({"title": "live", "state": "published"})
    dispatcher = make_dispatcher()
    dispatcher.on("beforePaginate", lambda s: s["query"]["conditions"].update(state="published"))
    dispatcher.on(
        "afterPaginate",
        lambda s: s.set(items=[{**item, "title": item["title"].upper()} for item in s["items"]]),
    )

    response = dispatcher.execute(dispatcher.context(Request(action="index"), store))

    assert [item["title"] for item in response.view_vars["items"]] == ["LIVE"]


def test_view_renders_found_record(make_dispatcher, record_events, store: RecordStore) -> None:
    created = store.create({"title": "hello"})
    dispatcher = make_dispatcher()
    log = record_events(dispatcher)

    response = dispatcher.execute(
        dispatcher.context(Request(action="view", args=[created.id]), store)
    )

    assert isinstance(response, RenderResponse)
    assert response.template == "view"
    assert response.view_vars["item"]["title"] == "hello"
    assert _names(log) == ["init", "beforeFind", "afterFind", "beforeRender"]
    before_find = dict(log)["beforeFind"]
    assert before_find["query"] == {"conditions": {"id": created.id}}


def test_view_after_find_may_replace_item(make_dispatcher, store: RecordStore) -> None:
    created = store.create({"title": "hello"})
    dispatcher = make_dispatcher()
    dispatcher.on("afterFind", lambda s: s.set(item={**s["item"], "title": "decorated"}))

    response = dispatcher.execute(
        dispatcher.context(Request(action="view", args=[created.id]), store)
    )

    assert response.view_vars["item"]["title"] == "decorated"


def test_view_missing_record_redirects_to_index(
    make_dispatcher, record_events, store: RecordStore, flash
) -> None:
    dispatcher = make_dispatcher()
    log = record_events(dispatcher)
    missing = "123e4567-e89b-12d3-a456-426614174000"

    response = dispatcher.execute(
        dispatcher.context(Request(action="view", args=[missing]), store)
    )

    assert isinstance(response, RedirectResponse)
    assert response.url == "/posts"
    assert _names(log).count("recordNotFound") == 1
    assert dict(log)["recordNotFound"] == {"id": missing}
    assert "afterFind" not in _names(log)
    assert "beforeRender" not in _names(log)
    assert [(n.element, n.message) for n in flash.consume()] == [("error", "Could not find Post")]


def test_stopping_before_find_does_not_abort_view(make_dispatcher, store: RecordStore) -> None:
    created = store.create({"title": "hello"})
    dispatcher = make_dispatcher()
    dispatcher.on("beforeFind", lambda s: s.stop())

    response = dispatcher.execute(
        dispatcher.context(Request(action="view", args=[created.id]), store)
    )

    assert isinstance(response, RenderResponse)
    assert response.view_vars["item"]["title"] == "hello"
