"""Sensor platform for zone_climate.

Provides read-only sensors exposing the engine's state:

- **action**: current action (heating / cooling / none).
- **status**: display status text, with the severity as an attribute.
- **temperature**: last temperature reading accepted by the tracker.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.const import EntityCategory, UnitOfTemperature

from .climate_engine import ClimateAction
from .const import SENSOR_KEY_ACTION, SENSOR_KEY_STATUS, SENSOR_KEY_TEMPERATURE
from .entity import IntegrationEntity

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import DataUpdateCoordinator
    from .data import IntegrationConfigEntry


# Status attribute carrying the severity
ATTR_SEVERITY = "severity"


# ---------------------------------------------------------------------------
# Sensor descriptions
# ---------------------------------------------------------------------------

SENSOR_ACTION = SensorEntityDescription(
    key=SENSOR_KEY_ACTION,
    translation_key=SENSOR_KEY_ACTION,
    device_class=SensorDeviceClass.ENUM,
    options=[action.value for action in ClimateAction],
    icon="mdi:hvac",
)

SENSOR_STATUS = SensorEntityDescription(
    key=SENSOR_KEY_STATUS,
    translation_key=SENSOR_KEY_STATUS,
    entity_category=EntityCategory.DIAGNOSTIC,
    icon="mdi:information-outline",
)

SENSOR_TEMPERATURE = SensorEntityDescription(
    key=SENSOR_KEY_TEMPERATURE,
    translation_key=SENSOR_KEY_TEMPERATURE,
    native_unit_of_measurement=UnitOfTemperature.CELSIUS,
    device_class=SensorDeviceClass.TEMPERATURE,
    state_class=SensorStateClass.MEASUREMENT,
    suggested_display_precision=1,
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
    """Create all sensor entities for a config entry."""

    coordinator = entry.runtime_data.coordinator

    async_add_entities(
        [
            ActionSensor(coordinator),
            StatusSensor(coordinator),
            TemperatureSensor(coordinator),
        ]
    )


# ---------------------------------------------------------------------------
# Sensor entity classes
# ---------------------------------------------------------------------------


#
# _ZoneSensor
#
class _ZoneSensor(IntegrationEntity, SensorEntity):  # pyright: ignore[reportIncompatibleVariableOverride]
    """Common base: description and unique ID."""

    _description: SensorEntityDescription

    def __init__(self, coordinator: DataUpdateCoordinator) -> None:
        super().__init__(coordinator)
        self.entity_description = self._description
        self._attr_unique_id = f"{coordinator.config_entry.entry_id}_{self._description.key}"


#
# ActionSensor
#
class ActionSensor(_ZoneSensor):
    """Current action, limited to the fitted equipment."""

    _description = SENSOR_ACTION

    @property
    def native_value(self) -> str | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        if self.coordinator.data is None:
            return None
        return self.coordinator.data.action.value


#
# StatusSensor
#
class StatusSensor(_ZoneSensor):
    """Display status text.

    Without a commanded mode the text is ``connected``/``disconnected``;
    otherwise it is the mode, with the severity reflecting the action.
    """

    _description = SENSOR_STATUS

    @property
    def native_value(self) -> str | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        if self.coordinator.data is None:
            return None
        return self.coordinator.data.status_text

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        if self.coordinator.data is None:
            return None
        return {ATTR_SEVERITY: self.coordinator.data.status_severity.value}


#
# TemperatureSensor
#
class TemperatureSensor(_ZoneSensor):
    """Last accepted temperature reading (jumps are filtered)."""

    _description = SENSOR_TEMPERATURE

    @property
    def native_value(self) -> float | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        if self.coordinator.data is None:
            return None
        return self.coordinator.data.temperature
