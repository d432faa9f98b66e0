"""Internal MQTT transport runtime.

The runtime owns the paho-mqtt client and its network thread. Deliveries
are handed to the asyncio loop with ``call_soon_threadsafe`` so routers
and consumers only ever run on the loop thread.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, cast

import paho.mqtt.client as mqtt

from pylaxr._redact import redact_for_log
from pylaxr.config import LaxrConfig

MessageCallback = Callable[[str, bytes], None]


@dataclass(frozen=True)
class MqttBrokerSettings:
    """Resolved broker connection details."""

    broker_host: str
    broker_port: int
    topic: str
    client_id: str
    username: str | None
    password: str | None
    tls: bool


def _parse_broker(raw_broker: str, default_port: int) -> tuple[str, int]:
    value = raw_broker.strip()
    if not value:
        raise ValueError("Broker value is empty")

    if "://" in value:
        value = value.split("://", 1)[1]
    if "/" in value:
        value = value.split("/", 1)[0]

    host, _, maybe_port = value.rpartition(":")
    if host and maybe_port.isdigit():
        return host, int(maybe_port)
    return value, default_port


def broker_settings_from_config(config: LaxrConfig) -> MqttBrokerSettings:
    """Build broker settings, accepting ``host``, ``host:port`` or ``mqtt://host:port``."""
    host, port = _parse_broker(config.broker_host, config.broker_port)
    return MqttBrokerSettings(
        broker_host=host,
        broker_port=port,
        topic=config.topic,
        client_id=config.client_id,
        username=config.username,
        password=config.password,
        tls=config.mqtt_tls,
    )


class LaxrMqttRuntime:
    """Threaded paho-mqtt runtime that emits ``(topic, payload)`` onto an asyncio loop."""

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        on_message: MessageCallback,
        keepalive: int = 60,
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._on_message = on_message
        self._keepalive = keepalive
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False
        self._topic: str | None = None

    @property
    def is_running(self) -> bool:
        """Whether the MQTT runtime is actively running."""
        return self._running

    def _deliver(self, topic: str, payload: bytes) -> None:
        """Network-thread side of a delivery."""
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._on_message, topic, payload)

    def start(self, settings: MqttBrokerSettings) -> None:
        """Connect and subscribe with provided broker details."""
        self.stop()
        self._logger.debug(
            "MQTT runtime start requested settings=%s",
            redact_for_log(
                {
                    "host": settings.broker_host,
                    "port": settings.broker_port,
                    "topic": settings.topic,
                    "client_id": settings.client_id,
                    "username": settings.username,
                    "password": settings.password,
                }
            ),
        )

        client = mqtt.Client(
            callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
            client_id=settings.client_id,
        )
        client.enable_logger(self._logger)
        if settings.username is not None:
            client.username_pw_set(settings.username, settings.password)
        if settings.tls:
            client.tls_set()

        self._topic = settings.topic

        def on_connect(
            c: mqtt.Client,
            _userdata: Any,
            _flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if reason_code.value != 0:
                self._logger.warning("MQTT connect failed: %s", reason_code)
                return
            self._logger.debug("MQTT connected successfully reason=%s", reason_code)
            if self._topic:
                self._logger.debug("MQTT subscribing topic=%s", self._topic)
                c.subscribe(self._topic, qos=0)

        def on_message(_c: mqtt.Client, _userdata: Any, msg: mqtt.MQTTMessage) -> None:
            self._logger.debug(
                "Received PUBLISH topic=%s payload=%s",
                msg.topic,
                redact_for_log(msg.payload),
            )
            self._deliver(msg.topic, bytes(msg.payload))

        def on_disconnect(
            _client: mqtt.Client,
            _userdata: Any,
            _disconnect_flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if self._running:
                self._logger.debug("MQTT disconnected: %s", reason_code)

        client.on_connect = on_connect
        client.on_message = on_message
        client.on_disconnect = on_disconnect

        client.connect(settings.broker_host, settings.broker_port, keepalive=self._keepalive)
        client.loop_start()

        self._client = client
        self._running = True
        self._logger.debug("MQTT network loop started")

    def stop(self) -> None:
        """Stop and disconnect current MQTT client if running."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False
        self._topic = None

        if client is None:
            return
        try:
            if was_running:
                self._logger.debug("MQTT disconnect requested")
                client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("MQTT network loop stopped")
