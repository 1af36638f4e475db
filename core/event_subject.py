"""Mutable payload passed to listeners of a lifecycle event."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from core.context import RequestContext
    from interfaces.messages import Request, Response


@dataclass
class EventSubject:
    """Shared state for one trigger point (or several, when reused).

    Event-specific fields (``query``, ``items``, ``item``, ``id``, ``success``,
    ``url``...) live in ``fields`` and are reachable with item access::

        def scope_to_owner(subject):
            subject["query"]["conditions"]["owner_id"] = 7

    Two signals are independent:

    * ``response``: a terminal response. Once set, the pipeline aborts and
      that response is returned to the caller unchanged.
    * ``stopped``: the listener asked to skip the default continuation of
      the current trigger point only (e.g. veto a delete).
    """

    action: str
    request: Request | None = None
    context: RequestContext | None = None
    fields: dict[str, Any] = field(default_factory=dict)
    response: Response | None = None
    stopped: bool = False

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.fields[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def set(self, data: dict[str, Any] | None = None, **kwargs: Any) -> None:
        """Merge fields into the subject."""
        self.fields.update(data or {})
        self.fields.update(kwargs)

    def stop(self) -> None:
        """Skip the default continuation of the current trigger point."""
        self.stopped = True

    def respond(self, response: Response) -> None:
        """Terminate the pipeline with ``response``."""
        self.response = response

    @property
    def halted(self) -> bool:
        return self.response is not None
