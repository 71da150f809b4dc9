"""Zone climate coordinator — evaluation loop and command dispatch.

Hosts the ``ClimateEngine``, feeds it sensor readings and commands, and returns
``CoordinatorData`` snapshots consumed by all entities.

The ``_async_update_data`` cycle runs every ``cycle_delay`` seconds:

1. Resolve configuration from config entry options.
2. Apply the runtime ``advertise`` setting (attach/detach the MQTT sink and
   command subscription).
3. Read the configured temperature sensor and offer the reading to the engine.
4. Run one evaluation tick (action, run-length cutoff, status publish).
5. Return ``CoordinatorData`` for consumption by all entities.

Commands (service calls, MQTT messages, entity writes) are applied to the engine
immediately and pushed to the entities without waiting for the next cycle.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.core import callback
from homeassistant.helpers.update_coordinator import (
    DataUpdateCoordinator as BaseCoordinator,
)
from homeassistant.helpers.update_coordinator import (
    UpdateFailed,
)
from homeassistant.util import dt as dt_util

from .climate_engine import ClimateEngine, ClimateUpdate
from .config import ResolvedConfig, build_engine_config, resolve_entry
from .const import DOMAIN
from .data import CoordinatorData
from .ha_interface import HomeAssistantInterface, StoreCheckpoint, TransportUnavailableError
from .log import Log

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .data import IntegrationConfigEntry


# ---------------------------------------------------------------------------
# DataUpdateCoordinator
# ---------------------------------------------------------------------------


#
# DataUpdateCoordinator
#
class DataUpdateCoordinator(BaseCoordinator[CoordinatorData]):
    """Zone climate update coordinator."""

    config_entry: IntegrationConfigEntry

    #
    # __init__
    #
    def __init__(self, hass: HomeAssistant, config_entry: IntegrationConfigEntry) -> None:
        """Initialize the coordinator.

        Args:
            hass: Home Assistant instance.
            config_entry: The integration's config entry.
        """

        # Instance-specific logger
        self._logger = Log(entry_id=config_entry.entry_id)

        resolved = resolve_entry(config_entry)

        super().__init__(
            hass,
            self._logger.underlying_logger,
            name=DOMAIN,
            update_interval=timedelta(seconds=resolved.cycle_delay),
            config_entry=config_entry,
        )
        self.config_entry = config_entry

        # Merged config dict for reload-comparison in __init__.py
        self._merged_config: dict[str, Any] = {}

        # HA abstraction layer
        self._ha = HomeAssistantInterface(hass, self._logger)
        self._checkpoint = StoreCheckpoint(hass, config_entry.entry_id)

        # Decision engine: configuration is immutable; structural changes reload the entry
        self._engine = ClimateEngine(
            build_engine_config(resolved, config_entry.title, config_entry.entry_id),
            self._checkpoint,
            on_update=self._on_engine_update,
            clock=dt_util.utcnow,
            logger=self._logger,
        )

        # Removes the MQTT command subscription
        self._unsubscribe: Callable[[], None] | None = None

        self._logger.info(
            "Coordinator initialized: device_id=%s, climate_type=%s, cycle_delay=%s s, topic=%s",
            self._engine.config.device_id,
            resolved.climate_type,
            resolved.cycle_delay,
            self._engine.config.base_topic,
        )

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    @property
    def engine(self) -> ClimateEngine:
        return self._engine

    #
    # async_start
    #
    async def async_start(self) -> None:
        """Restore checkpointed setpoints, connect the transport, and end the startup period."""

        await self._checkpoint.async_load()
        await self._async_apply_advertise(resolve_entry(self.config_entry))
        self._engine.start()

    #
    # async_shutdown
    #
    async def async_shutdown(self) -> None:
        """Drop the transport subscription and persist pending checkpoint writes."""

        self._async_unsubscribe()
        await self._checkpoint.async_flush()
        await super().async_shutdown()

    #
    # async_handle_command
    #
    async def async_handle_command(self, command: Mapping[str, Any]) -> None:
        """Apply an inbound command and push the new state to the entities.

        Args:
            command: Any of ``payload``, ``mode``, ``temperature``, ``setpoint``,
                ``override``, ``action``.
        """

        self._logger.debug("Command received: %s", dict(command))
        self._engine.handle_command(command)
        self._async_push_snapshot()

    #
    # async_set_heat_setpoint
    #
    async def async_set_heat_setpoint(self, value: float) -> bool:
        """Checkpoint a new heat setpoint. Returns whether it was accepted."""

        accepted = self._engine.set_heat_setpoint(value)
        self._async_push_snapshot()
        return accepted

    #
    # async_set_cool_setpoint
    #
    async def async_set_cool_setpoint(self, value: float) -> bool:
        """Checkpoint a new cool setpoint. Returns whether it was accepted."""

        accepted = self._engine.set_cool_setpoint(value)
        self._async_push_snapshot()
        return accepted

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    #
    # _snapshot
    #
    def _snapshot(self) -> CoordinatorData:
        """Return the engine state as ``CoordinatorData``."""

        engine = self._engine
        status = engine.display_status()
        return CoordinatorData(
            mode=engine.mode,
            effective_mode=engine.get_mode(),
            action=engine.get_action(),
            temperature=engine.temperature.value,
            target_temp=engine.get_setpoint(),
            heat_setpoint=engine.heat_setpoint,
            cool_setpoint=engine.cool_setpoint,
            override=engine.override,
            connected=engine.is_connected(),
            status_text=status.text,
            status_severity=status.severity,
        )

    #
    # _async_push_snapshot
    #
    @callback
    def _async_push_snapshot(self) -> None:
        """Publish a fresh snapshot without rescheduling the evaluation cycle."""

        self.data = self._snapshot()
        self.async_update_listeners()

    #
    # _on_engine_update
    #
    @callback
    def _on_engine_update(self, update: ClimateUpdate) -> None:
        """Forward the engine's update message to the event bus."""

        self._ha.fire_update_event(self.config_entry.entry_id, update)

    #
    # _handle_transport_message
    #
    @callback
    def _handle_transport_message(self, topic: str, payload: str) -> None:
        """Route an MQTT message to the engine."""

        self._logger.debug("MQTT message on %s: %s", topic, payload)
        self._engine.handle_transport_message(topic, payload)
        self._async_push_snapshot()

    #
    # _async_apply_advertise
    #
    async def _async_apply_advertise(self, resolved: ResolvedConfig) -> None:
        """Attach or detach the MQTT sink and subscription to match ``advertise``."""

        base_topic = self._engine.config.base_topic

        if not resolved.advertise or base_topic is None:
            if self._engine.advertising:
                self._logger.info("Advertising stopped")
            self._engine.attach_sink(None)
            self._async_unsubscribe()
            return

        if not self._engine.advertising:
            self._engine.attach_sink(self._ha.create_status_sink())
            self._logger.info("Advertising status on %s", base_topic)

        # Retried on every cycle until the MQTT integration is available
        if self._unsubscribe is None:
            try:
                self._unsubscribe = await self._ha.async_subscribe_commands(base_topic, self._handle_transport_message)
            except TransportUnavailableError as err:
                self._logger.warning("Command subscription failed: %s", err)

    #
    # _async_unsubscribe
    #
    @callback
    def _async_unsubscribe(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ------------------------------------------------------------------
    # Core update loop
    # ------------------------------------------------------------------

    #
    # _async_update_data
    #
    async def _async_update_data(self) -> CoordinatorData:
        """Run one evaluation cycle.

        This is called by HA's DataUpdateCoordinator on every update interval,
        on first refresh, and on manual refresh requests.

        Returns:
            ``CoordinatorData`` consumed by all entities.

        Raises:
            UpdateFailed: On critical configuration errors.
        """

        # ── Step 1: Resolve config ──────────────────────────────────────
        try:
            resolved = resolve_entry(self.config_entry)
        except Exception as err:
            self._logger.error("Configuration error: %s", err)
            raise UpdateFailed(f"Configuration error: {err}") from err

        # ── Step 2: Apply runtime advertise setting ─────────────────────
        await self._async_apply_advertise(resolved)

        # ── Step 3: Read the temperature sensor ─────────────────────────
        if resolved.temp_sensor:
            reading = self._ha.get_temperature(resolved.temp_sensor)
            if reading is not None:
                self._engine.update_temperature(reading)

        # ── Step 4: Evaluate ────────────────────────────────────────────
        self._engine.evaluate()

        # ── Step 5: Return CoordinatorData ──────────────────────────────
        return self._snapshot()
