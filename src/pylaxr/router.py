"""Topic-filtered fan-out from one message source to many consumers.

Consumers live in an arena keyed by the integer handle returned from
:meth:`TopicRouter.register`. A consumer matches a message when its topic
filter is a case-sensitive substring of the message topic; the empty
filter matches every topic.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from pylaxr.exceptions import DispatchError
from pylaxr.models.message import TopicMessage

_logger = logging.getLogger(__name__)

MessageHandler = Callable[[TopicMessage], None]


class Subscriber(Protocol):
    """Anything the router can deliver messages to."""

    @property
    def name(self) -> str: ...

    @property
    def topic_filter(self) -> str: ...

    def handle_message(self, message: TopicMessage) -> None: ...


@dataclass(frozen=True, slots=True)
class Registration:
    handle: int
    name: str
    topic_filter: str
    handler: MessageHandler

    def matches(self, topic: str) -> bool:
        return self.topic_filter in topic


class TopicRouter:
    """Dispatch ``(topic, payload)`` deliveries to matching consumers.

    The router keeps no message history. Dispatch is synchronous, so a
    consumer unregistered from inside another consumer's handler is
    skipped for the remainder of that dispatch.
    """

    def __init__(self, tag: str = "", *, logger: logging.Logger | None = None) -> None:
        self._tag = tag
        self._logger = logger or _logger
        self._registrations: dict[int, Registration] = {}
        self._handles = itertools.count(1)

    @property
    def tag(self) -> str:
        return self._tag

    def __len__(self) -> int:
        return len(self._registrations)

    def __contains__(self, handle: object) -> bool:
        return handle in self._registrations

    def subscribe(self, topic_filter: str, handler: MessageHandler, *, name: str = "") -> int:
        """Register a bare handler under *topic_filter* and return its handle."""
        handle = next(self._handles)
        self._registrations[handle] = Registration(
            handle=handle,
            name=name or getattr(handler, "__qualname__", repr(handler)),
            topic_filter=topic_filter,
            handler=handler,
        )
        self._logger.debug(
            "Router %r registered handle=%s name=%s filter=%r",
            self._tag,
            handle,
            self._registrations[handle].name,
            topic_filter,
        )
        return handle

    def register(self, consumer: Subscriber) -> int:
        """Register *consumer*; registering the same consumer twice delivers twice."""
        return self.subscribe(consumer.topic_filter, consumer.handle_message, name=consumer.name)

    def unregister(self, handle: int) -> bool:
        """Remove a registration. Returns ``False`` if the handle is unknown."""
        registration = self._registrations.pop(handle, None)
        if registration is None:
            return False
        self._logger.debug("Router %r unregistered handle=%s name=%s", self._tag, handle, registration.name)
        return True

    def dispatch(self, message: TopicMessage) -> int:
        """Deliver *message* to every matching consumer.

        Returns the number of handlers invoked. A handler that raises is
        logged and skipped; the remaining consumers still receive the
        message.
        """
        delivered = 0
        for handle, registration in list(self._registrations.items()):
            if handle not in self._registrations:
                continue
            if not registration.matches(message.topic):
                continue
            delivered += 1
            try:
                registration.handler(message)
            except Exception as exc:
                error = DispatchError(
                    f"Consumer {registration.name} failed on topic {message.topic}: {exc!r}",
                    consumer=registration.name,
                    topic=message.topic,
                )
                self._logger.error("%s", error)
                self._logger.debug("Dispatch failure detail", exc_info=True)
        return delivered

    def on_message(self, topic: str, payload: bytes) -> int:
        """Transport-facing ingress."""
        return self.dispatch(TopicMessage(topic=topic, payload=payload))
