"""Client configuration for pylaxr."""

from __future__ import annotations

import dataclasses
import os
from typing import Any


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class LaxrConfig:
    """Client configuration.

    Parameters
    ----------
    broker_host : str
        MQTT broker host name.
    broker_port : int
        MQTT broker port.
    topic : str
        Broker subscription pattern. Per-consumer filtering happens
        afterwards by substring match, so this is usually a wildcard.
    client_id : str
        MQTT client identifier. Empty lets the broker assign one.
    username : str or None
        Broker username, passed through to the transport untouched.
    password : str or None
        Broker password, passed through to the transport untouched.
    mqtt_enabled : bool
        Start the MQTT runtime when the client is entered.
    mqtt_tls : bool
        Enable TLS on the broker connection.
    mqtt_keepalive : int
        MQTT keepalive in seconds.
    tick_hz : float
        Frequency of the smoothing tick loop. ``0`` disables the loop and
        leaves ticking to the caller.
    """

    broker_host: str = "localhost"
    broker_port: int = 1883
    topic: str = "#"
    client_id: str = ""
    username: str | None = None
    password: str | None = None
    mqtt_enabled: bool = True
    mqtt_tls: bool = False
    mqtt_keepalive: int = 60
    tick_hz: float = 60.0

    @classmethod
    def from_env(cls, **overrides: Any) -> LaxrConfig:
        """Create configuration from environment variables.

        Reads optional ``LAXR_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        LaxrConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "LAXR_BROKER_HOST": "broker_host",
            "LAXR_TOPIC": "topic",
            "LAXR_CLIENT_ID": "client_id",
            "LAXR_USERNAME": "username",
            "LAXR_PASSWORD": "password",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        port_env = env.get("LAXR_BROKER_PORT")
        if port_env is not None and "broker_port" not in overrides:
            config_kwargs["broker_port"] = int(port_env)

        if "mqtt_enabled" not in overrides:
            config_kwargs["mqtt_enabled"] = _env_bool(env.get("LAXR_MQTT_ENABLED"), True)

        if "mqtt_tls" not in overrides:
            config_kwargs["mqtt_tls"] = _env_bool(env.get("LAXR_MQTT_TLS"), False)

        keepalive_env = env.get("LAXR_MQTT_KEEPALIVE")
        if keepalive_env is not None and "mqtt_keepalive" not in overrides:
            config_kwargs["mqtt_keepalive"] = int(keepalive_env)

        tick_env = env.get("LAXR_TICK_HZ")
        if tick_env is not None and "tick_hz" not in overrides:
            config_kwargs["tick_hz"] = float(tick_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
