"""Runtime data types for zone_climate.

Defines the data structures used at runtime:
- CoordinatorData: snapshot of the engine after each cycle or command, consumed by entities.
- RuntimeData: stored on config_entry.runtime_data during the integration's lifetime.
- IntegrationConfigEntry: typed alias for ConfigEntry[RuntimeData].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .climate_engine import ClimateAction, ClimateMode, StatusSeverity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.loader import Integration

    from .coordinator import DataUpdateCoordinator


# Type safety: entry.runtime_data will be of type RuntimeData
type IntegrationConfigEntry = ConfigEntry[RuntimeData]


#
# CoordinatorData
#
@dataclass
class CoordinatorData:
    """Engine snapshot published to entities.

    Attributes:
        mode: Commanded mode, or ``None`` while no mode was commanded.
        effective_mode: Commanded mode, or the default mode when none was set.
        action: Capability-filtered action.
        temperature: Last accepted temperature reading.
        target_temp: Momentary target temperature.
        heat_setpoint: Checkpointed heat setpoint.
        cool_setpoint: Checkpointed cool setpoint.
        override: Latched override (away) flag.
        connected: Liveness derived from the last status publish.
        status_text: Display status text.
        status_severity: Display status severity.
    """

    mode: ClimateMode | None
    effective_mode: ClimateMode
    action: ClimateAction
    temperature: float | None
    target_temp: float
    heat_setpoint: float
    cool_setpoint: float
    override: bool = False
    connected: bool = False
    status_text: str = ""
    status_severity: StatusSeverity = StatusSeverity.INFO


#
# RuntimeData
#
@dataclass
class RuntimeData:
    """Data stored on config_entry.runtime_data during the integration's lifetime."""

    coordinator: DataUpdateCoordinator
    integration: Integration
    config: dict[str, Any]
