"""Final redirect target resolution."""

from __future__ import annotations

import logging

from core.event_bus import EventBus
from core.event_subject import EventSubject

logger = logging.getLogger("crud.redirect")

REDIRECT_KEY = "redirect_url"


class RedirectResolver:
    """Applies request overrides and the ``beforeRedirect`` event to a url."""

    def __init__(self, event_bus: EventBus) -> None:
        self.event_bus = event_bus

    def resolve(self, subject: EventSubject, default_url: str) -> str:
        """Pick the redirect target for ``subject``.

        Precedence: ``redirect_url`` in the request body, then in the query
        string, then ``default_url``. ``beforeRedirect`` listeners may rewrite
        ``subject["url"]``, and whatever they leave there is used as is. If one
        sets a response instead, the caller must return that response.
        """
        url = default_url
        request = subject.request
        if request is not None:
            if request.data.get(REDIRECT_KEY):
                url = str(request.data[REDIRECT_KEY])
            elif request.query.get(REDIRECT_KEY):
                url = str(request.query[REDIRECT_KEY])

        subject["url"] = url
        self.event_bus.trigger("beforeRedirect", subject)
        final_url = str(subject.get("url", url))
        logger.debug("Redirect for %s resolved to %s", subject.action, final_url)
        return final_url
