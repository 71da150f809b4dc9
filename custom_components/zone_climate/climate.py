"""Climate platform for zone_climate.

Provides the zone's primary control surface:

- **hvac_mode** — commanded mode (off / heat / cool / auto), limited to the
  fitted equipment.
- **target_temperature** — commanded setpoint; falls back to the heat or cool
  setpoint once it expires.
- **preset** — ``away`` mirrors the latched override flag.
- **hvac_action** — the engine's current action.

All writes go through ``DataUpdateCoordinator.async_handle_command`` so they
follow the same path as service calls and MQTT messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.climate import (
    ATTR_HVAC_MODE,
    PRESET_AWAY,
    PRESET_NONE,
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature

from .climate_engine import ClimateAction, ClimateMode
from .const import CLIMATE_KEY_ZONE
from .entity import IntegrationEntity

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import DataUpdateCoordinator
    from .data import IntegrationConfigEntry


# Engine mode → HA HVAC mode
_HVAC_MODES: dict[ClimateMode, HVACMode] = {
    ClimateMode.OFF: HVACMode.OFF,
    ClimateMode.HEAT: HVACMode.HEAT,
    ClimateMode.COOL: HVACMode.COOL,
    ClimateMode.AUTO: HVACMode.AUTO,
}

# Engine action → HA HVAC action (``none`` depends on the mode)
_HVAC_ACTIONS: dict[ClimateAction, HVACAction] = {
    ClimateAction.HEATING: HVACAction.HEATING,
    ClimateAction.COOLING: HVACAction.COOLING,
}


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
    """Create the climate entity for a config entry."""

    coordinator = entry.runtime_data.coordinator

    async_add_entities([ZoneClimate(coordinator)])


# ---------------------------------------------------------------------------
# Climate entity class
# ---------------------------------------------------------------------------


#
# ZoneClimate
#
class ZoneClimate(IntegrationEntity, ClimateEntity):  # pyright: ignore[reportIncompatibleVariableOverride]
    """Climate entity exposing the zone's mode, setpoint, override, and action."""

    _attr_name = None  # Use the device name
    _attr_translation_key = CLIMATE_KEY_ZONE
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = 0.1
    _attr_preset_modes = [PRESET_NONE, PRESET_AWAY]

    #
    # __init__
    #
    def __init__(self, coordinator: DataUpdateCoordinator) -> None:
        """Initialize the climate entity.

        Args:
            coordinator: The coordinator managing this integration instance.
        """

        super().__init__(coordinator)
        self._attr_unique_id = f"{coordinator.config_entry.entry_id}_{CLIMATE_KEY_ZONE}"

        config = coordinator.engine.config
        self._attr_min_temp = config.min_temp
        self._attr_max_temp = config.max_temp

        # Modes offered follow the fitted equipment
        modes = [HVACMode.OFF]
        if config.has_heating:
            modes.append(HVACMode.HEAT)
        if config.has_cooling:
            modes.append(HVACMode.COOL)
        modes.append(HVACMode.AUTO)
        self._attr_hvac_modes = modes

        features = ClimateEntityFeature.PRESET_MODE | ClimateEntityFeature.TURN_ON | ClimateEntityFeature.TURN_OFF
        if config.has_setpoint:
            features |= ClimateEntityFeature.TARGET_TEMPERATURE
        self._attr_supported_features = features

    #
    # hvac_mode
    #
    @property
    def hvac_mode(self) -> HVACMode | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        """Return the commanded mode, or the default mode when none was set."""

        if self.coordinator.data is None:
            return None
        return _HVAC_MODES[self.coordinator.data.effective_mode]

    #
    # hvac_action
    #
    @property
    def hvac_action(self) -> HVACAction | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        """Return the current action."""

        data = self.coordinator.data
        if data is None:
            return None
        if data.action in _HVAC_ACTIONS:
            return _HVAC_ACTIONS[data.action]
        return HVACAction.OFF if data.effective_mode == ClimateMode.OFF else HVACAction.IDLE

    @property
    def current_temperature(self) -> float | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        if self.coordinator.data is None:
            return None
        return self.coordinator.data.temperature

    @property
    def target_temperature(self) -> float | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        if self.coordinator.data is None or not self.coordinator.engine.config.has_setpoint:
            return None
        return self.coordinator.data.target_temp

    @property
    def preset_mode(self) -> str | None:  # pyright: ignore[reportIncompatibleVariableOverride]
        if self.coordinator.data is None:
            return None
        return PRESET_AWAY if self.coordinator.data.override else PRESET_NONE

    #
    # async_set_hvac_mode
    #
    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Command a new mode."""

        await self.coordinator.async_handle_command({"mode": hvac_mode.value})

    #
    # async_set_temperature
    #
    async def async_set_temperature(self, **kwargs: Any) -> None:
        """Command a new setpoint (and optionally a mode)."""

        command: dict[str, Any] = {}
        if (hvac_mode := kwargs.get(ATTR_HVAC_MODE)) is not None:
            command["mode"] = HVACMode(hvac_mode).value
        if (temperature := kwargs.get(ATTR_TEMPERATURE)) is not None:
            command["setpoint"] = temperature
        if command:
            await self.coordinator.async_handle_command(command)

    #
    # async_set_preset_mode
    #
    async def async_set_preset_mode(self, preset_mode: str) -> None:
        """Latch or clear the override via the away preset."""

        await self.coordinator.async_handle_command({"override": preset_mode == PRESET_AWAY})

    #
    # async_turn_on
    #
    async def async_turn_on(self) -> None:
        """Switch to the default mode."""

        await self.coordinator.async_handle_command({"mode": "on"})

    #
    # async_turn_off
    #
    async def async_turn_off(self) -> None:
        """Switch off."""

        await self.coordinator.async_handle_command({"mode": ClimateMode.OFF.value})
