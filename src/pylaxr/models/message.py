"""Transport message model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TopicMessage(BaseModel):
    """A single ``(topic, payload)`` delivery from the transport."""

    model_config = ConfigDict(frozen=True)

    topic: str
    payload: bytes
