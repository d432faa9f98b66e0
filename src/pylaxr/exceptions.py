"""Custom exception hierarchy for pylaxr."""

from __future__ import annotations

from enum import StrEnum


class LaxrError(Exception):
    """Base exception for all pylaxr errors."""


class ConfigurationError(LaxrError):
    """Invalid consumer calibration or no router available for a consumer.

    A consumer that hits this error at startup stays inert: it never
    receives messages and its dial never moves.
    """


class DecodeFailure(StrEnum):
    MALFORMED_PAYLOAD = "malformed_payload"


class DecodeError(LaxrError):
    """Telemetry payload could not be decoded into a sensor record."""

    def __init__(
        self,
        message: str,
        *,
        reason: DecodeFailure = DecodeFailure.MALFORMED_PAYLOAD,
        payload: bytes | str | None = None,
    ) -> None:
        self.reason = reason
        self.payload = payload
        super().__init__(message)


class DispatchError(LaxrError):
    """A consumer handler raised while a message was being dispatched.

    The router builds this to log the failure; it is never raised to the
    transport.
    """

    def __init__(
        self,
        message: str,
        *,
        consumer: str = "",
        topic: str = "",
    ) -> None:
        self.consumer = consumer
        self.topic = topic
        super().__init__(message)
