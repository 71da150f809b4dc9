"""Number platform for zone_climate.

Provides writable number entities for the checkpointed heat and cool
setpoints. Unlike config options, these values live in the per-entry
checkpoint store, so changing them neither reloads the entry nor refreshes
the coordinator; the new value is applied to the engine directly.

Entities:

- **heat_setpoint** — Heating rail; also loaded as the target on a change to heat mode.
- **cool_setpoint** — Cooling rail; also loaded as the target on a change to cool mode.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from homeassistant.components.number import (
    NumberDeviceClass,
    NumberEntity,
    NumberEntityDescription,
    NumberMode,
)
from homeassistant.const import UnitOfTemperature
from homeassistant.exceptions import HomeAssistantError

from .const import NUMBER_KEY_COOL_SETPOINT, NUMBER_KEY_HEAT_SETPOINT
from .entity import IntegrationEntity

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import DataUpdateCoordinator
    from .data import CoordinatorData, IntegrationConfigEntry


#
# SetpointNumberDescription
#
@dataclass(frozen=True, kw_only=True)
class SetpointNumberDescription(NumberEntityDescription):
    """Number description with accessors for one checkpointed setpoint."""

    value_fn: Callable[[CoordinatorData], float]
    set_fn: Callable[[DataUpdateCoordinator, float], Awaitable[bool]]


# ---------------------------------------------------------------------------
# Number descriptions
# ---------------------------------------------------------------------------

NUMBER_HEAT_SETPOINT = SetpointNumberDescription(
    key=NUMBER_KEY_HEAT_SETPOINT,
    translation_key=NUMBER_KEY_HEAT_SETPOINT,
    device_class=NumberDeviceClass.TEMPERATURE,
    icon="mdi:thermometer-chevron-up",
    native_step=0.1,
    mode=NumberMode.BOX,
    native_unit_of_measurement=UnitOfTemperature.CELSIUS,
    value_fn=lambda data: data.heat_setpoint,
    set_fn=lambda coordinator, value: coordinator.async_set_heat_setpoint(value),
)

NUMBER_COOL_SETPOINT = SetpointNumberDescription(
    key=NUMBER_KEY_COOL_SETPOINT,
    translation_key=NUMBER_KEY_COOL_SETPOINT,
    device_class=NumberDeviceClass.TEMPERATURE,
    icon="mdi:thermometer-chevron-down",
    native_step=0.1,
    mode=NumberMode.BOX,
    native_unit_of_measurement=UnitOfTemperature.CELSIUS,
    value_fn=lambda data: data.cool_setpoint,
    set_fn=lambda coordinator, value: coordinator.async_set_cool_setpoint(value),
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
    """Create the setpoint number entities the fitted equipment needs."""

    coordinator = entry.runtime_data.coordinator
    config = coordinator.engine.config

    descriptions: list[SetpointNumberDescription] = []
    if config.has_heating:
        descriptions.append(NUMBER_HEAT_SETPOINT)
    if config.has_cooling:
        descriptions.append(NUMBER_COOL_SETPOINT)

    async_add_entities([SetpointNumber(coordinator, desc) for desc in descriptions])


# ---------------------------------------------------------------------------
# Number entity class
# ---------------------------------------------------------------------------


#
# SetpointNumber
#
class SetpointNumber(IntegrationEntity, NumberEntity):  # pyright: ignore[reportIncompatibleVariableOverride]
    """Writable number entity backed by the setpoint checkpoint.

    Reading: the value from the latest ``CoordinatorData``.
    Writing: validated and checkpointed by the engine via the coordinator.
    """

    entity_description: SetpointNumberDescription

    #
    # __init__
    #
    def __init__(
        self,
        coordinator: DataUpdateCoordinator,
        entity_description: SetpointNumberDescription,
    ) -> None:
        """Initialize the number entity.

        Args:
            coordinator: The coordinator managing this integration instance.
            entity_description: Descriptor defining the entity's HA properties.
        """

        super().__init__(coordinator)
        self.entity_description = entity_description
        self._attr_unique_id = f"{coordinator.config_entry.entry_id}_{entity_description.key}"

        # The accepted range is the configured temperature range
        config = coordinator.engine.config
        self._attr_native_min_value = config.min_temp
        self._attr_native_max_value = config.max_temp

    #
    # native_value
    #
    @property
    def native_value(self) -> float | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        """Return the current setpoint."""

        if self.coordinator.data is None:
            return None
        return self.entity_description.value_fn(self.coordinator.data)

    #
    # async_set_native_value
    #
    async def async_set_native_value(self, value: float) -> None:
        """Checkpoint the new setpoint.

        Args:
            value: The new value set by the user.

        Raises:
            HomeAssistantError: The engine rejected the value.
        """

        if not await self.entity_description.set_fn(self.coordinator, value):
            raise HomeAssistantError(f"Setpoint {value} is outside the accepted range")
