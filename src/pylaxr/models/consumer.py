"""Consumer calibration and runtime state models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pylaxr.exceptions import ConfigurationError

EulerAngles = tuple[float, float, float]
"""Euler angles in degrees, ordered ``(x, y, z)``."""


class Axis(StrEnum):
    """Rotation axis of the controlled object."""

    X = "X"
    Y = "Y"
    Z = "Z"

    @property
    def index(self) -> int:
        return "XYZ".index(self.value)

    def apply_to(self, euler: EulerAngles, angle: float) -> EulerAngles:
        """Return *euler* with this axis replaced by *angle*.

        The two other components pass through untouched.
        """
        values = list(euler)
        values[self.index] = angle
        return (values[0], values[1], values[2])


class ConsumerConfig(BaseModel):
    """Per-consumer calibration, fixed at construction.

    Parameters
    ----------
    topic_filter : str
        Case-sensitive substring the incoming topic must contain. The
        empty string matches every topic.
    axis : Axis
        Rotation axis of the controlled object driven by this consumer.
    clockwise : bool
        Rotate clockwise (negative angles) as the reading grows.
    domain_min : float
        Lowest reading that drives the dial. Readings below it hold the
        dial where it is.
    domain_max : float
        Reading mapped to a full sweep. Must be greater than
        ``domain_min``. Readings above it extrapolate past the sweep.
    full_sweep_degrees : float
        Angular extent of the gauge across the domain.
    base_offset_degrees : float
        Origin of the scale, subtracted from every mapped angle.
    smoothing_rate : float
        Interpolation fraction per second applied on each tick.
    router_tag : str
        Tag of the router this consumer attaches to.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    topic_filter: str = ""
    axis: Axis = Axis.Z
    clockwise: bool = True
    domain_min: float = 30.0
    domain_max: float = 90.0
    full_sweep_degrees: float = 270.0
    base_offset_degrees: float = 135.0
    smoothing_rate: float = Field(default=1.5, ge=0.0)
    router_tag: str = ""

    @model_validator(mode="after")
    def _check_domain(self) -> ConsumerConfig:
        if not self.domain_max > self.domain_min:
            raise ConfigurationError(
                f"domain_max ({self.domain_max}) must be greater than domain_min ({self.domain_min})"
            )
        return self


class ConsumerState(BaseModel):
    """Mutable state owned by a single consumer."""

    model_config = ConfigDict(extra="forbid")

    current_angle: float = 0.0
    target_angle: float | None = None
    last_observed_value: float | None = None
