"""Gauge consumer: turns telemetry on a topic into a smoothly rotating dial."""

from __future__ import annotations

import logging
from typing import Protocol

from pylaxr.decoder import decode
from pylaxr.exceptions import ConfigurationError, DecodeError
from pylaxr.mapping import map_to_angle
from pylaxr.models.consumer import ConsumerConfig, ConsumerState, EulerAngles
from pylaxr.models.message import TopicMessage
from pylaxr.router import TopicRouter
from pylaxr.smoothing import advance

_logger = logging.getLogger(__name__)


class Actuator(Protocol):
    """The object a consumer rotates.

    Only one consumer may drive a given axis of an actuator; this is not
    enforced.
    """

    euler_angles: EulerAngles


class GaugeConsumer:
    """Drive one axis of an actuator from the ``sound_db`` field of matching messages.

    The message callback only decodes and maps; it writes the latest target
    into :attr:`state`. :meth:`tick` is the only place the current angle
    moves. Both are expected on the same scheduling thread.
    """

    def __init__(
        self,
        name: str = "Controller 1",
        config: ConsumerConfig | None = None,
        *,
        actuator: Actuator | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._name = name
        self._config = config or ConsumerConfig()
        self._actuator = actuator
        self._logger = logger or _logger
        self._state = ConsumerState()
        self._router: TopicRouter | None = None
        self._handle: int | None = None

        if not self._config.topic_filter:
            self._logger.warning("%s has an empty topic filter and will receive every topic", name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> ConsumerConfig:
        return self._config

    @property
    def topic_filter(self) -> str:
        return self._config.topic_filter

    @property
    def state(self) -> ConsumerState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._router is not None and self._handle in self._router

    def start(self, router: TopicRouter | None) -> None:
        """Subscribe to *router*.

        Raises
        ------
        ConfigurationError
            When *router* is ``None``. The consumer stays inert.
        """
        if router is None:
            error = ConfigurationError(f"{self._name}: no router available, consumer stays inert")
            self._logger.error("%s", error)
            raise error
        self.stop()
        self._router = router
        self._handle = router.register(self)
        self._logger.debug("%s started on router %r filter=%r", self._name, router.tag, self.topic_filter)

    def stop(self) -> None:
        router = self._router
        handle = self._handle
        self._router = None
        self._handle = None
        if router is not None and handle is not None:
            router.unregister(handle)
            self._logger.debug("%s stopped", self._name)

    def handle_message(self, message: TopicMessage) -> None:
        """Router callback: decode, log, map and store the latest target."""
        try:
            record = decode(message.payload)
        except DecodeError as exc:
            self._logger.warning("%s dropped message on %s: %s", self._name, message.topic, exc)
            return

        self._logger.info(
            "%s soundLevel=%s, wifiSignal=%s",
            self._name,
            record.sound_level,
            record.wifi_signal,
        )
        self._state.last_observed_value = record.sound_level
        self._state.target_angle = map_to_angle(record.sound_level, self._config)

    def tick(self, elapsed_seconds: float) -> float:
        """Advance the dial toward the latest target and push it to the actuator."""
        state = self._state
        if not self.is_active or state.target_angle is None:
            return state.current_angle

        state.current_angle = advance(
            state.current_angle,
            state.target_angle,
            elapsed_seconds,
            self._config.smoothing_rate,
        )
        if self._actuator is not None:
            # Read-modify-write within one tick; other axes pass through.
            euler = self._actuator.euler_angles
            self._actuator.euler_angles = self._config.axis.apply_to(euler, state.current_angle)
        return state.current_angle
