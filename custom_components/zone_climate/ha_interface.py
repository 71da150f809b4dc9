"""Home Assistant API interface layer.

This module provides a clean abstraction layer over Home Assistant's APIs,
encapsulating all direct interactions with the HA core system for the
zone climate integration:

- sensor state reads,
- the durable setpoint checkpoint (``helpers.storage.Store``),
- the MQTT status sink and command subscription,
- the update event on the HA bus.

The coordinator and the engine remain decoupled from HA implementation details.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from homeassistant.components import mqtt
from homeassistant.const import STATE_UNAVAILABLE, STATE_UNKNOWN
from homeassistant.core import callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.json import json_dumps
from homeassistant.helpers.storage import Store

from .climate_engine import StatusPublishError
from .const import (
    EVENT_CLIMATE_UPDATE,
    STORAGE_KEY,
    STORAGE_SAVE_DELAY_SECONDS,
    STORAGE_VERSION,
)
from .log import Log

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .climate_engine import ClimateUpdate


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# States considered unavailable
_UNAVAILABLE_STATES: frozenset[str] = frozenset({STATE_UNAVAILABLE, STATE_UNKNOWN})

# Name of the HA integration providing the transport
_MQTT_DOMAIN = "mqtt"


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------


#
# ZoneClimateHAError
#
class ZoneClimateHAError(Exception):
    """Base class for HA interface errors."""


#
# TransportUnavailableError
#
class TransportUnavailableError(ZoneClimateHAError, StatusPublishError):
    """The MQTT integration is not loaded."""

    #
    # __init__
    #
    def __init__(self, topic: str) -> None:
        """Initialize with the topic that could not be reached."""

        super().__init__(f"MQTT is not available, cannot use '{topic}'")
        self.topic = topic


# ---------------------------------------------------------------------------
# StoreCheckpoint
# ---------------------------------------------------------------------------


#
# StoreCheckpoint
#
class StoreCheckpoint:
    """Durable key-value checkpoint backed by a per-entry HA storage file.

    Reads are served from memory; writes update memory immediately and
    schedule a delayed save, so ``get`` and ``set`` never suspend.
    """

    #
    # __init__
    #
    def __init__(self, hass: HomeAssistant, entry_id: str) -> None:
        """Initialize the checkpoint.

        Args:
            hass: Home Assistant instance.
            entry_id: Config entry ID (suffix of the storage key).
        """

        self._store: Store[dict[str, Any]] = Store(hass, STORAGE_VERSION, f"{STORAGE_KEY}.{entry_id}")
        self._values: dict[str, Any] = {}

    #
    # async_load
    #
    async def async_load(self) -> None:
        """Load previously saved values (no-op when nothing was saved yet)."""

        stored = await self._store.async_load()
        if isinstance(stored, dict):
            self._values = dict(stored)

    #
    # async_flush
    #
    async def async_flush(self) -> None:
        """Write the current values to disk immediately."""

        await self._store.async_save(dict(self._values))

    #
    # async_remove
    #
    async def async_remove(self) -> None:
        """Delete the storage file."""

        await self._store.async_remove()

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
        self._store.async_delay_save(lambda: dict(self._values), STORAGE_SAVE_DELAY_SECONDS)


# ---------------------------------------------------------------------------
# MqttStatusSink
# ---------------------------------------------------------------------------


#
# MqttStatusSink
#
class MqttStatusSink:
    """Status sink publishing JSON payloads through HA's MQTT integration."""

    #
    # __init__
    #
    def __init__(self, hass: HomeAssistant, logger: Log) -> None:
        """Initialize the sink.

        Args:
            hass: Home Assistant instance.
            logger: Instance-specific logger with entry_id prefix.
        """

        self._hass = hass
        self._logger = logger

    #
    # publish
    #
    def publish(self, topic: str, payload: dict[str, Any]) -> None:
        """Hand *payload* to the MQTT integration.

        Raises:
            TransportUnavailableError: The MQTT integration is not loaded.
        """

        if _MQTT_DOMAIN not in self._hass.config.components:
            raise TransportUnavailableError(topic)

        self._hass.async_create_task(self._async_publish(topic, json_dumps(payload)))

    #
    # _async_publish
    #
    async def _async_publish(self, topic: str, message: str) -> None:
        try:
            await mqtt.async_publish(self._hass, topic, message)
        except HomeAssistantError as err:
            self._logger.warning("Failed to publish status to %s: %s", topic, err)


# ---------------------------------------------------------------------------
# HomeAssistantInterface
# ---------------------------------------------------------------------------


#
# HomeAssistantInterface
#
class HomeAssistantInterface:
    """Encapsulates all Home Assistant API interactions.

    Provides typed accessor methods for reading entity states, subscribing to
    transport topics, and firing events, keeping the coordinator decoupled
    from HA internals.
    """

    #
    # __init__
    #
    def __init__(self, hass: HomeAssistant, logger: Log) -> None:
        """Initialize the HA interface.

        Args:
            hass: Home Assistant instance.
            logger: Instance-specific logger with entry_id prefix.
        """

        self._hass = hass
        self._logger = logger

    # ------------------------------------------------------------------
    # State helpers (private)
    # ------------------------------------------------------------------

    #
    # _get_float_state
    #
    def _get_float_state(self, entity_id: str) -> float | None:
        """Read the main state of *entity_id* as a float.

        Returns:
            The numeric value, or ``None`` if the entity is missing, unavailable,
            or the state cannot be converted.
        """

        state_obj = self._hass.states.get(entity_id)
        if state_obj is None or state_obj.state in _UNAVAILABLE_STATES:
            return None
        try:
            return float(state_obj.state)
        except (ValueError, TypeError):
            self._logger.warning(
                "Cannot convert state of %s to float: %s",
                entity_id,
                state_obj.state,
            )
            return None

    # ------------------------------------------------------------------
    # Public API: temperature readings
    # ------------------------------------------------------------------

    #
    # get_temperature
    #
    def get_temperature(self, entity_id: str) -> float | None:
        """Read the current temperature from a sensor entity.

        Args:
            entity_id: Entity ID of a sensor with device_class temperature.

        Returns:
            Temperature as float, or ``None`` if unavailable.
        """

        return self._get_float_state(entity_id)

    # ------------------------------------------------------------------
    # Public API: transport
    # ------------------------------------------------------------------

    #
    # create_status_sink
    #
    def create_status_sink(self) -> MqttStatusSink:
        """Return a status sink publishing through MQTT."""

        return MqttStatusSink(self._hass, self._logger)

    #
    # async_subscribe_commands
    #
    async def async_subscribe_commands(
        self,
        base_topic: str,
        on_message: Callable[[str, str], None],
    ) -> Callable[[], None]:
        """Subscribe to every topic below *base_topic*.

        Args:
            base_topic: Topic prefix of this zone.
            on_message: Receives ``(topic, payload)`` for each message.

        Returns:
            Callable that removes the subscription.

        Raises:
            TransportUnavailableError: The MQTT integration is not loaded.
        """

        topic = f"{base_topic}/#"
        if _MQTT_DOMAIN not in self._hass.config.components:
            raise TransportUnavailableError(topic)

        @callback
        def _message_received(msg: mqtt.ReceiveMessage) -> None:
            on_message(msg.topic, msg.payload)

        unsubscribe = await mqtt.async_subscribe(self._hass, topic, _message_received)
        self._logger.debug("Subscribed to %s", topic)
        return unsubscribe

    # ------------------------------------------------------------------
    # Public API: events
    # ------------------------------------------------------------------

    #
    # fire_update_event
    #
    def fire_update_event(self, entry_id: str, update: ClimateUpdate) -> None:
        """Fire the update message on the HA event bus.

        Args:
            entry_id: Config entry ID, added to the event data.
            update: The engine's update message.
        """

        self._hass.bus.async_fire(EVENT_CLIMATE_UPDATE, {"entry_id": entry_id, **update.as_payload()})
