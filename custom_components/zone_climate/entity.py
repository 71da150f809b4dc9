"""Base entity for zone_climate.

All platform entities derive from ``IntegrationEntity`` so they share the
coordinator subscription and are grouped under one device per zone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, INTEGRATION_NAME

if TYPE_CHECKING:
    from .coordinator import DataUpdateCoordinator


#
# IntegrationEntity
#
class IntegrationEntity(CoordinatorEntity["DataUpdateCoordinator"]):
    """Coordinator-backed entity attached to the zone's device."""

    _attr_has_entity_name = True

    #
    # __init__
    #
    def __init__(self, coordinator: DataUpdateCoordinator) -> None:
        """Initialize the entity.

        Args:
            coordinator: The coordinator managing this integration instance.
        """

        super().__init__(coordinator)

        entry = coordinator.config_entry
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry.entry_id)},
            name=entry.title or INTEGRATION_NAME,
            manufacturer=INTEGRATION_NAME,
            model=coordinator.engine.config.climate_type.value,
        )
