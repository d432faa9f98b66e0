"""Base model for pylaxr records.

Every wire-facing model inherits from :class:`LaxrBaseModel` which
provides:

* frozen instances, so a decoded record cannot change after the
  consuming callback has seen it;
* ``extra="ignore"`` so unknown payload keys are dropped;
* ``populate_by_name`` so models can be built from either the wire
  aliases or the Python field names;
* a ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LaxrBaseModel(BaseModel):
    """Base for decoded telemetry and tracking records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        """Keep the original payload; a wire key named ``raw`` never reaches the field."""
        if not isinstance(values, dict):
            return values
        return {**values, "raw": dict(values)}
