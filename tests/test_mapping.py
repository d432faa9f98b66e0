from __future__ import annotations

import pytest

from pylaxr.mapping import angular_distance, map_to_angle, shortest_arc, wrap_degrees
from pylaxr.models.consumer import ConsumerConfig


def _config(**overrides: object) -> ConsumerConfig:
    values: dict[str, object] = {
        "topic_filter": "laxr",
        "domain_min": 30.0,
        "domain_max": 90.0,
        "full_sweep_degrees": 270.0,
        "base_offset_degrees": 135.0,
        "clockwise": True,
    }
    values.update(overrides)
    return ConsumerConfig(**values)  # type: ignore[arg-type]


# ------------------------------------------------------------------
# map_to_angle
# ------------------------------------------------------------------


class TestMapToAngle:
    def test_reference_gauge_midpoint(self) -> None:
        # normalized = 0.5 -> -1 * 0.5 * 270 - 135
        assert map_to_angle(60.0, _config()) == pytest.approx(-270.0)

    def test_counter_clockwise_midpoint(self) -> None:
        assert map_to_angle(60.0, _config(clockwise=False)) == pytest.approx(0.0)

    @pytest.mark.parametrize("value", [29.999, 0.0, -100.0])
    def test_below_domain_min_returns_none(self, value: float) -> None:
        assert map_to_angle(value, _config()) is None

    @pytest.mark.parametrize("clockwise", [True, False])
    def test_domain_min_maps_to_negative_offset(self, clockwise: bool) -> None:
        assert map_to_angle(30.0, _config(clockwise=clockwise)) == pytest.approx(-135.0)

    def test_domain_max_is_full_sweep(self) -> None:
        assert map_to_angle(90.0, _config()) == pytest.approx(-270.0 - 135.0)
        assert map_to_angle(90.0, _config(clockwise=False)) == pytest.approx(270.0 - 135.0)

    def test_above_domain_max_extrapolates(self) -> None:
        # 120 is one and a half domains above min.
        assert map_to_angle(120.0, _config(clockwise=False)) == pytest.approx(1.5 * 270.0 - 135.0)

    def test_mapping_is_linear(self) -> None:
        config = _config()
        steps = 8
        width = config.domain_max - config.domain_min
        angles = [map_to_angle(config.domain_min + k * width / steps, config) for k in range(steps + 1)]
        assert all(a is not None for a in angles)
        deltas = [b - a for a, b in zip(angles, angles[1:])]  # type: ignore[operator]
        for delta in deltas:
            assert delta == pytest.approx(deltas[0])
        assert deltas[0] == pytest.approx(-270.0 / steps)


# ------------------------------------------------------------------
# Angle helpers
# ------------------------------------------------------------------


def test_wrap_degrees() -> None:
    assert wrap_degrees(-270.0) == pytest.approx(90.0)
    assert wrap_degrees(720.0) == 0.0
    assert wrap_degrees(359.5) == pytest.approx(359.5)
    assert 0.0 <= wrap_degrees(-1e-15) < 360.0


def test_shortest_arc_takes_short_way_round() -> None:
    assert shortest_arc(350.0, 10.0) == pytest.approx(20.0)
    assert shortest_arc(10.0, 350.0) == pytest.approx(-20.0)
    assert shortest_arc(0.0, -270.0) == pytest.approx(90.0)
    assert shortest_arc(45.0, 45.0) == 0.0


def test_angular_distance_is_symmetric() -> None:
    assert angular_distance(350.0, 10.0) == pytest.approx(20.0)
    assert angular_distance(10.0, 350.0) == pytest.approx(20.0)
    assert angular_distance(-270.0, 90.0) == pytest.approx(0.0)
