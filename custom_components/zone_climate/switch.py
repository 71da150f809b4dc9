"""Switch platform for zone_climate.

Provides a single writable switch:

- **advertise** — Publish status to (and accept commands from) MQTT under the
  zone's base topic.

Advertising couples the evaluation cycle to liveness: while the switch is on,
the zone only acts after a recent successful status publish, and the
``connected`` binary sensor reports that state. With no MQTT topic configured
there is nowhere to advertise, so the switch is unavailable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.switch import SwitchEntity, SwitchEntityDescription
from homeassistant.const import EntityCategory

from .climate_engine import TOPIC_SUFFIX_STATUS
from .config import ConfKeys, resolve_entry
from .const import SWITCH_KEY_ADVERTISE
from .entity import IntegrationEntity

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import DataUpdateCoordinator
    from .data import IntegrationConfigEntry


# ---------------------------------------------------------------------------
# Switch descriptions
# ---------------------------------------------------------------------------

SWITCH_ADVERTISE = SwitchEntityDescription(
    key=SWITCH_KEY_ADVERTISE,
    translation_key=SWITCH_KEY_ADVERTISE,
    entity_category=EntityCategory.CONFIG,
    icon="mdi:access-point-network",
)


# ---------------------------------------------------------------------------
# Platform setup
# ---------------------------------------------------------------------------


#
# async_setup_entry
#
async def async_setup_entry(
    hass: HomeAssistant,  # noqa: ARG001
    entry: IntegrationConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Create the advertise switch for a config entry."""

    async_add_entities([AdvertiseSwitch(entry.runtime_data.coordinator)])


# ---------------------------------------------------------------------------
# Switch entity class
# ---------------------------------------------------------------------------


#
# AdvertiseSwitch
#
class AdvertiseSwitch(IntegrationEntity, SwitchEntity):  # pyright: ignore[reportIncompatibleVariableOverride]
    """Turns MQTT status publishing (and with it the liveness gate) on or off.

    The state lives in the ``advertise`` option. Writing it triggers the
    smart-reload listener in ``__init__.py``, which only refreshes the
    coordinator; the coordinator then attaches or detaches the status sink and
    the command subscription.
    """

    entity_description = SWITCH_ADVERTISE

    #
    # __init__
    #
    def __init__(self, coordinator: DataUpdateCoordinator) -> None:
        """Initialize the switch entity.

        Args:
            coordinator: The coordinator managing this integration instance.
        """

        super().__init__(coordinator)
        self._attr_unique_id = f"{coordinator.config_entry.entry_id}_{SWITCH_KEY_ADVERTISE}"

    #
    # available
    #
    @property
    def available(self) -> bool:  # pyright: ignore[reportIncompatibleVariableOverride]
        """Only offered when a base topic is configured."""

        return super().available and self.coordinator.engine.config.base_topic is not None

    #
    # is_on
    #
    @property
    def is_on(self) -> bool:  # pyright: ignore[reportIncompatibleVariableOverride]
        """Return the configured ``advertise`` option."""

        return bool(resolve_entry(self.coordinator.config_entry).get(ConfKeys.ADVERTISE))

    @property
    def extra_state_attributes(self) -> dict[str, Any]:  # pyright: ignore[reportIncompatibleVariableOverride]
        base_topic = self.coordinator.engine.config.base_topic
        return {"status_topic": f"{base_topic}{TOPIC_SUFFIX_STATUS}" if base_topic else None}

    async def async_turn_on(self, **_: Any) -> None:
        await self._async_persist_advertise(True)

    async def async_turn_off(self, **_: Any) -> None:
        await self._async_persist_advertise(False)

    #
    # _async_persist_advertise
    #
    async def _async_persist_advertise(self, value: bool) -> None:
        """Write the option to the config entry."""

        entry = self.coordinator.config_entry
        options = dict(entry.options or {})
        options[ConfKeys.ADVERTISE.value] = value
        self.coordinator.hass.config_entries.async_update_entry(entry, options=options)
