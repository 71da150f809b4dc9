"""Binary sensor platform for zone_climate.

Provides a single read-only binary sensor:

- **connected** — On while the last status publish is younger than the
  keep-alive window.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
    BinarySensorEntityDescription,
)
from homeassistant.const import EntityCategory

from .const import BINARY_SENSOR_KEY_CONNECTED
from .entity import IntegrationEntity

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import DataUpdateCoordinator
    from .data import IntegrationConfigEntry


# ---------------------------------------------------------------------------
# Binary sensor descriptions
# ---------------------------------------------------------------------------

BINARY_SENSOR_CONNECTED = BinarySensorEntityDescription(
    key=BINARY_SENSOR_KEY_CONNECTED,
    translation_key=BINARY_SENSOR_KEY_CONNECTED,
    device_class=BinarySensorDeviceClass.CONNECTIVITY,
    entity_category=EntityCategory.DIAGNOSTIC,
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
    """Create all binary sensor entities for a config entry."""

    coordinator = entry.runtime_data.coordinator

    async_add_entities(
        [
            ConnectedBinarySensor(coordinator),
        ]
    )


# ---------------------------------------------------------------------------
# Binary sensor entity class
# ---------------------------------------------------------------------------


#
# ConnectedBinarySensor
#
class ConnectedBinarySensor(IntegrationEntity, BinarySensorEntity):  # pyright: ignore[reportIncompatibleVariableOverride]
    """Binary sensor reflecting the controller's liveness.

    Reads ``connected`` from ``CoordinatorData``.
    """

    #
    # __init__
    #
    def __init__(self, coordinator: DataUpdateCoordinator) -> None:
        """Initialize the connected binary sensor.

        Args:
            coordinator: The coordinator providing data for this sensor.
        """

        super().__init__(coordinator)
        self.entity_description = BINARY_SENSOR_CONNECTED
        self._attr_unique_id = f"{coordinator.config_entry.entry_id}_{BINARY_SENSOR_CONNECTED.key}"

    #
    # is_on
    #
    @property
    # BinarySensorEntity.is_on is a cached_property; we intentionally override
    # with a regular @property so it re-evaluates from coordinator data each access.
    def is_on(self) -> bool | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        """Return ``True`` while the controller counts as connected."""

        if self.coordinator.data is None:
            return None
        return self.coordinator.data.connected
