"""Internal MQTT runtime that publishes observer events to a broker."""

from __future__ import annotations

import logging
from typing import Any, cast

import paho.mqtt.client as mqtt

from battery_observer.config import ObserverConfig
from battery_observer.state.events import ObserverEvent

STATUS_ONLINE = "online"
STATUS_OFFLINE = "offline"


def event_topic(prefix: str, event: ObserverEvent) -> str:
    return f"{prefix.rstrip('/')}/{event.type.value}"


class MqttEventPublisher:
    """Threaded paho-mqtt runtime that forwards observer events.

    Meant to be subscribed to :class:`ObserverStateStore`; publishing
    never raises back into the observer.
    """

    def __init__(self, config: ObserverConfig, *, logger: logging.Logger | None = None) -> None:
        self._config = config
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False

    @property
    def is_running(self) -> bool:
        """Whether the MQTT runtime is actively running."""
        return self._running

    @property
    def status_topic(self) -> str:
        return f"{self._config.mqtt_topic.rstrip('/')}/status"

    def start(self) -> None:
        """Connect, register the offline last-will and start the network loop."""
        self.stop()
        self._logger.debug(
            "MQTT publisher connecting host=%s port=%s topic=%s",
            self._config.mqtt_host,
            self._config.mqtt_port,
            self._config.mqtt_topic,
        )

        client = mqtt.Client(
            callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
            client_id=self._config.mqtt_client_id,
        )
        client.enable_logger(self._logger)
        # The broker flips availability to offline if the observer dies without stop().
        client.will_set(self.status_topic, STATUS_OFFLINE, qos=self._config.mqtt_qos, retain=True)

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
            # Re-announced on every reconnect; the will may have fired in between.
            c.publish(self.status_topic, STATUS_ONLINE, qos=self._config.mqtt_qos, retain=True)

        client.on_connect = on_connect
        client.connect(self._config.mqtt_host, self._config.mqtt_port, keepalive=self._config.mqtt_keepalive)
        client.loop_start()

        self._client = client
        self._running = True

    def stop(self) -> None:
        """Announce offline, disconnect and stop the network loop."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False

        if client is None:
            return
        try:
            if was_running:
                client.publish(self.status_topic, STATUS_OFFLINE, qos=self._config.mqtt_qos, retain=True)
                client.disconnect()
        finally:
            client.loop_stop()

    def publish(self, event: ObserverEvent) -> None:
        client = self._client
        if client is None or not self._running:
            return
        topic = event_topic(self._config.mqtt_topic, event)
        try:
            client.publish(topic, event.model_dump_json(), qos=self._config.mqtt_qos)
        except Exception:
            self._logger.debug("MQTT publish failed topic=%s", topic, exc_info=True)
