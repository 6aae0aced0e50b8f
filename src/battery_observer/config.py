"""Observer configuration for battery_observer."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable
from typing import Any

from battery_observer._constants import (
    DEFAULT_MQTT_CLIENT_ID,
    DEFAULT_MQTT_TOPIC,
    DEFAULT_POLL_INTERVAL,
    INFO_RETRIES,
)
from battery_observer.exceptions import ObserverConfigError


def _env_bool(name: str, value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    raise ObserverConfigError(f"Invalid value for {name}: {value!r}")


@dataclasses.dataclass(frozen=True)
class ObserverConfig:
    """Observer configuration.

    Parameters
    ----------
    poll_interval : float
        Seconds to wait between two poll ticks.  Defaults to ten minutes.
    info_retries : int
        Attempts the device service makes for one battery read.
    mqtt_enabled : bool
        Publish observer events to an MQTT broker.
    mqtt_host : str
        Broker host name.
    mqtt_port : int
        Broker port.
    mqtt_topic : str
        Topic prefix; each event goes to ``{mqtt_topic}/{event type}``.
    mqtt_client_id : str
        MQTT client identifier.
    mqtt_keepalive : int
        MQTT keepalive in seconds.
    mqtt_qos : int
        QoS level used for published events.
    """

    poll_interval: float = DEFAULT_POLL_INTERVAL
    info_retries: int = INFO_RETRIES
    mqtt_enabled: bool = False
    mqtt_host: str = "localhost"
    mqtt_port: int = 1883
    mqtt_topic: str = DEFAULT_MQTT_TOPIC
    mqtt_client_id: str = DEFAULT_MQTT_CLIENT_ID
    mqtt_keepalive: int = 60
    mqtt_qos: int = 0

    def __post_init__(self) -> None:
        if self.poll_interval < 0:
            raise ObserverConfigError(f"poll_interval must be >= 0, got {self.poll_interval}")
        if self.info_retries < 0:
            raise ObserverConfigError(f"info_retries must be >= 0, got {self.info_retries}")
        if self.mqtt_qos not in (0, 1, 2):
            raise ObserverConfigError(f"mqtt_qos must be 0, 1 or 2, got {self.mqtt_qos}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ObserverConfig:
        """Create configuration from environment variables.

        Reads optional ``BATTERY_OBSERVER_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ObserverConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP: dict[str, tuple[str, Callable[[str], Any]]] = {
            "BATTERY_OBSERVER_POLL_INTERVAL": ("poll_interval", float),
            "BATTERY_OBSERVER_INFO_RETRIES": ("info_retries", int),
            "BATTERY_OBSERVER_MQTT_HOST": ("mqtt_host", str),
            "BATTERY_OBSERVER_MQTT_PORT": ("mqtt_port", int),
            "BATTERY_OBSERVER_MQTT_TOPIC": ("mqtt_topic", str),
            "BATTERY_OBSERVER_MQTT_CLIENT_ID": ("mqtt_client_id", str),
            "BATTERY_OBSERVER_MQTT_KEEPALIVE": ("mqtt_keepalive", int),
            "BATTERY_OBSERVER_MQTT_QOS": ("mqtt_qos", int),
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, (field_name, convert) in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = convert(val)
            except ValueError as exc:
                raise ObserverConfigError(f"Invalid value for {env_key}: {val!r}") from exc

        if "mqtt_enabled" not in overrides:
            config_kwargs["mqtt_enabled"] = _env_bool(
                "BATTERY_OBSERVER_MQTT_ENABLED",
                env.get("BATTERY_OBSERVER_MQTT_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
