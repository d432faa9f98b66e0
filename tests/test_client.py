from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass

import pytest

from pylaxr.client import LaxrClient
from pylaxr.config import LaxrConfig
from pylaxr.consumer import GaugeConsumer
from pylaxr.models.consumer import Axis, ConsumerConfig
from pylaxr.models.tracking import TrackedEntity, TrackingChange, TrackingState
from pylaxr.tracking import ChangeReporter


@dataclass
class _Dial:
    euler_angles: tuple[float, float, float] = (0.0, 0.0, 0.0)


def _offline_config(**overrides: object) -> LaxrConfig:
    values: dict[str, object] = {"mqtt_enabled": False, "tick_hz": 0.0}
    values.update(overrides)
    return LaxrConfig(**values)  # type: ignore[arg-type]


def _payload(sound_db: float) -> bytes:
    return json.dumps({"time": "t", "sound_db": sound_db, "wifi_rssi": -40}).encode()


def test_attach_without_matching_router_leaves_consumer_inert(caplog: pytest.LogCaptureFixture) -> None:
    client = LaxrClient(_offline_config())
    client.add_router("mqttManager")
    consumer = GaugeConsumer("lost", ConsumerConfig(topic_filter="laxr", router_tag="otherManager"))

    with caplog.at_level(logging.ERROR):
        assert client.attach(consumer) is False

    assert not consumer.is_active
    assert "otherManager" in caplog.text
    client.on_message("laxr/sound", _payload(60.0))
    client.tick(1.0)
    assert consumer.state.last_observed_value is None
    assert consumer.state.current_angle == 0.0


def test_messages_and_ticks_flow_through_routers() -> None:
    client = LaxrClient(_offline_config())
    client.add_router("mqttManager")
    dial = _Dial()
    consumer = GaugeConsumer(
        "Controller 1",
        ConsumerConfig(topic_filter="laxr/sound", router_tag="mqttManager", axis=Axis.X, clockwise=False),
        actuator=dial,
    )
    assert client.attach(consumer) is True

    assert client.on_message("home/laxr/sound", _payload(60.0)) == 1
    assert client.on_message("home/laxr/wifi", _payload(90.0)) == 0
    client.tick(1.0)

    # counter-clockwise, normalized 0.5: 0.5 * 270 - 135 = 0
    assert consumer.state.target_angle == pytest.approx(0.0)
    assert dial.euler_angles == pytest.approx((0.0, 0.0, 0.0))

    client.on_message("home/laxr/sound", _payload(90.0))
    client.tick(1.0)
    assert dial.euler_angles == pytest.approx((135.0, 0.0, 0.0))


def test_failing_tick_isolated(caplog: pytest.LogCaptureFixture) -> None:
    class _BrokenDial:
        @property
        def euler_angles(self) -> tuple[float, float, float]:
            raise RuntimeError("no transform")

    client = LaxrClient(_offline_config())
    client.add_router()
    broken = GaugeConsumer("broken", ConsumerConfig(topic_filter="t"), actuator=_BrokenDial())  # type: ignore[arg-type]
    healthy = GaugeConsumer("healthy", ConsumerConfig(topic_filter="t", clockwise=False))
    client.attach(broken)
    client.attach(healthy)
    client.on_message("t", _payload(90.0))

    with caplog.at_level(logging.ERROR, logger="pylaxr.client"):
        client.tick(1.0)

    assert healthy.state.current_angle == pytest.approx(135.0)
    assert "broken" in caplog.text


def test_detach_stops_consumer() -> None:
    client = LaxrClient(_offline_config())
    router = client.add_router()
    consumer = GaugeConsumer("c", ConsumerConfig(topic_filter="t"))
    client.attach(consumer)

    client.detach(consumer)

    assert client.consumers == []
    assert len(router) == 0


def test_tracking_changes_forwarded_to_reporter() -> None:
    sink: list[TrackingChange] = []
    client = LaxrClient(_offline_config(), reporter=ChangeReporter(sink=sink.append))

    changes = client.on_tracking_changed(
        added={TrackedEntity(entity_id="1", name="poster", tracking_state=TrackingState.TRACKING)},
    )

    assert len(changes) == 1
    assert sink == changes


@pytest.mark.asyncio
async def test_context_manager_runs_tick_loop() -> None:
    dial = _Dial()
    async with LaxrClient(_offline_config(tick_hz=200.0)) as client:
        client.add_router()
        consumer = GaugeConsumer("c", ConsumerConfig(topic_filter="t", clockwise=False), actuator=dial)
        client.attach(consumer)
        client.on_message("t", _payload(90.0))
        for _ in range(100):
            await asyncio.sleep(0.01)
            if consumer.state.current_angle != 0.0:
                break

    assert consumer.state.current_angle > 0.0
    assert dial.euler_angles[2] == consumer.state.current_angle
    assert not consumer.is_active


@pytest.mark.asyncio
async def test_mqtt_start_failure_is_logged_not_raised(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    import pylaxr.client as client_module

    class _Unreachable:
        def __init__(self, **kwargs: object) -> None:
            pass

        def start(self, settings: object) -> None:
            raise OSError("connection refused")

    monkeypatch.setattr(client_module, "LaxrMqttRuntime", _Unreachable)

    with caplog.at_level(logging.WARNING, logger="pylaxr.client"):
        async with LaxrClient(LaxrConfig(tick_hz=0.0)) as client:
            assert client.mqtt_runtime is None

    assert "MQTT runtime start failed" in caplog.text


def test_attach_twice_ticks_once() -> None:
    client = LaxrClient(_offline_config())
    router = client.add_router()
    consumer = GaugeConsumer("c", ConsumerConfig(topic_filter="t", clockwise=False, smoothing_rate=1.5))

    assert client.attach(consumer) is True
    assert client.attach(consumer) is True
    client.on_message("t", _payload(90.0))
    client.tick(0.2)

    assert client.consumers == [consumer]
    assert len(router) == 1
    assert consumer.state.current_angle == pytest.approx(135.0 * 0.3)
