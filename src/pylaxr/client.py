"""High-level async client wiring transport, routers, consumers and ticks."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Iterable

from pylaxr._mqtt import LaxrMqttRuntime, broker_settings_from_config
from pylaxr.config import LaxrConfig
from pylaxr.consumer import GaugeConsumer
from pylaxr.exceptions import ConfigurationError
from pylaxr.models.tracking import TrackedEntity, TrackingChange
from pylaxr.router import TopicRouter
from pylaxr.tracking import ChangeReporter

_logger = logging.getLogger(__name__)


class LaxrClient:
    """Async orchestrator for gauge consumers.

    Usage::

        async with LaxrClient(config) as client:
            client.add_router("mqttManager")
            client.attach(GaugeConsumer("Sound", ConsumerConfig(topic_filter="laxr/", router_tag="mqttManager")))
            await asyncio.Event().wait()
    """

    def __init__(
        self,
        config: LaxrConfig | None = None,
        *,
        reporter: ChangeReporter | None = None,
    ) -> None:
        self._config = config or LaxrConfig()
        self._reporter = reporter or ChangeReporter()
        self._routers: dict[str, TopicRouter] = {}
        self._consumers: list[GaugeConsumer] = []
        self._loop: asyncio.AbstractEventLoop | None = None
        self._mqtt_runtime: LaxrMqttRuntime | None = None
        self._tick_task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> LaxrClient:
        self._loop = asyncio.get_running_loop()
        if self._config.mqtt_enabled:
            await self._start_mqtt()
        if self._config.tick_hz > 0:
            self._tick_task = asyncio.create_task(self._tick_loop(1.0 / self._config.tick_hz))
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        task = self._tick_task
        self._tick_task = None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

        runtime = self._mqtt_runtime
        self._mqtt_runtime = None
        if runtime is not None and self._loop is not None:
            try:
                await self._loop.run_in_executor(None, runtime.stop)
            except Exception:
                _logger.debug("MQTT runtime stop failed", exc_info=True)

        for consumer in self._consumers:
            consumer.stop()

    async def _start_mqtt(self) -> None:
        assert self._loop is not None
        runtime = LaxrMqttRuntime(
            loop=self._loop,
            on_message=self.on_message,
            keepalive=self._config.mqtt_keepalive,
            logger=_logger,
        )
        try:
            settings = broker_settings_from_config(self._config)
            await self._loop.run_in_executor(None, runtime.start, settings)
        except Exception:
            # Consumers stay idle without a transport.
            _logger.warning("MQTT runtime start failed", exc_info=True)
            return
        self._mqtt_runtime = runtime

    @property
    def config(self) -> LaxrConfig:
        return self._config

    @property
    def consumers(self) -> list[GaugeConsumer]:
        return list(self._consumers)

    @property
    def mqtt_runtime(self) -> LaxrMqttRuntime | None:
        return self._mqtt_runtime

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def add_router(self, tag: str = "") -> TopicRouter:
        """Return the router for *tag*, creating it on first use."""
        router = self._routers.get(tag)
        if router is None:
            router = TopicRouter(tag)
            self._routers[tag] = router
        return router

    def router(self, tag: str = "") -> TopicRouter | None:
        return self._routers.get(tag)

    def attach(self, consumer: GaugeConsumer) -> bool:
        """Start *consumer* on the router named by its ``router_tag``.

        Returns ``False`` when no such router exists. The failure is logged
        and the consumer stays inert; it is not raised.
        """
        if consumer not in self._consumers:
            self._consumers.append(consumer)
        try:
            consumer.start(self._routers.get(consumer.config.router_tag))
        except ConfigurationError:
            _logger.error(
                "At least one router tagged %r is required for %s",
                consumer.config.router_tag,
                consumer.name,
            )
            return False
        return True

    def detach(self, consumer: GaugeConsumer) -> None:
        consumer.stop()
        self._consumers = [c for c in self._consumers if c is not consumer]

    def on_message(self, topic: str, payload: bytes) -> int:
        """Sole ingress for transport deliveries; fans out to every router."""
        delivered = 0
        for router in list(self._routers.values()):
            delivered += router.on_message(topic, payload)
        return delivered

    # ------------------------------------------------------------------
    # Ticks and tracking
    # ------------------------------------------------------------------

    def tick(self, elapsed_seconds: float) -> None:
        for consumer in list(self._consumers):
            if not consumer.is_active:
                continue
            try:
                consumer.tick(elapsed_seconds)
            except Exception:
                _logger.error("Tick failed for %s", consumer.name, exc_info=True)

    async def _tick_loop(self, interval: float) -> None:
        last = time.monotonic()
        while True:
            await asyncio.sleep(interval)
            now = time.monotonic()
            self.tick(max(0.0, now - last))
            last = now

    def on_tracking_changed(
        self,
        added: Iterable[TrackedEntity] = (),
        updated: Iterable[TrackedEntity] = (),
        removed: Iterable[TrackedEntity] = (),
    ) -> list[TrackingChange]:
        return self._reporter.report(added, updated, removed)
