"""Sensor value to dial angle mapping.

All functions here are pure. Angles are in degrees and are not wrapped
unless a function says so.
"""

from __future__ import annotations

from pylaxr.models.consumer import ConsumerConfig


def map_to_angle(value: float, config: ConsumerConfig) -> float | None:
    """Map a sensor reading to a target dial angle.

    Returns ``None`` when *value* is below ``config.domain_min``: the dial
    holds its current position instead of being driven.

    Readings above ``domain_max`` are not clamped; they extrapolate past
    ``full_sweep_degrees`` the way a gauge needle runs into the redline.
    """
    if value < config.domain_min:
        return None
    normalized = (value - config.domain_min) / (config.domain_max - config.domain_min)
    direction = -1 if config.clockwise else 1
    return direction * normalized * config.full_sweep_degrees - config.base_offset_degrees


def wrap_degrees(angle: float) -> float:
    """Wrap *angle* into ``[0, 360)``."""
    wrapped = angle % 360.0
    # -1e-15 % 360 rounds to 360.0
    return 0.0 if wrapped == 360.0 else wrapped


def shortest_arc(current: float, target: float) -> float:
    """Signed rotation in ``[-180, 180)`` that takes *current* onto *target*."""
    return (target - current + 180.0) % 360.0 - 180.0


def angular_distance(a: float, b: float) -> float:
    """Unsigned shortest angular distance between two angles."""
    return abs(shortest_arc(a, b))
