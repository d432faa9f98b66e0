"""Tracked-entity models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TrackingState(StrEnum):
    """Tracking confidence reported by the tracking subsystem.

    Values the subsystem sends that have no mapped member resolve to
    ``NONE`` instead of raising ``ValueError``.
    """

    NONE = "None"
    LIMITED = "Limited"
    TRACKING = "Tracking"

    @classmethod
    def _missing_(cls, value: object) -> TrackingState:
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return cls.NONE


class ChangeKind(StrEnum):
    ADDED = "ADDED"
    UPDATED = "UPDATED"
    REMOVED = "REMOVED"


class TrackedEntity(BaseModel):
    """An entity (e.g. a recognised reference image) seen by the tracker."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    entity_id: str = Field(..., alias="id")
    name: str = ""
    tracking_state: TrackingState = Field(default=TrackingState.NONE, alias="trackingState")

    @field_validator("tracking_state", mode="before")
    @classmethod
    def _coerce_state(cls, value: Any) -> TrackingState:
        return value if isinstance(value, TrackingState) else TrackingState(value)

    @property
    def display_name(self) -> str:
        return self.name or self.entity_id


class TrackingChange(BaseModel):
    """A single added/updated/removed transition."""

    model_config = ConfigDict(frozen=True)

    kind: ChangeKind
    entity_id: str
    name: str
    tracking_state: TrackingState | None = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def message(self) -> str:
        """Human-readable log line for this change."""
        if self.kind == ChangeKind.REMOVED or self.tracking_state is None:
            return f"{self.kind.value} image: {self.name}"
        return f"{self.kind.value} image: {self.name}, trackingState={self.tracking_state.value}"
