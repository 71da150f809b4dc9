"""Constants for zone_climate.

Central definitions for domain identity, default values, entity keys, and
service/event names. All magic numbers and strings used across the
integration are defined here.
"""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Domain identity
# ---------------------------------------------------------------------------

DOMAIN: Final[str] = "zone_climate"
INTEGRATION_NAME: Final[str] = "Zone Climate"

# Home Assistant string literals
HA_OPTIONS: Final[str] = "options"

# ---------------------------------------------------------------------------
# Controller defaults
# ---------------------------------------------------------------------------

DEFAULT_CLIMATE_TYPE: Final[str] = "both"
DEFAULT_TOLERANCE: Final[float] = 0.5  # Dead band in K
DEFAULT_MIN_TEMP: Final[float] = 5.0
DEFAULT_MAX_TEMP: Final[float] = 30.0
DEFAULT_HEAT_SETPOINT: Final[float] = 20.0
DEFAULT_COOL_SETPOINT: Final[float] = 24.0
DEFAULT_KEEP_ALIVE_MINUTES: Final[float] = 10.0
DEFAULT_CYCLE_DELAY_SECONDS: Final[int] = 60
DEFAULT_BOOST_DURATION_MINUTES: Final[float] = 60.0
DEFAULT_TEMP_VALID_MINUTES: Final[float] = 60.0
DEFAULT_SWAP_DELAY_MINUTES: Final[float] = 10.0
DEFAULT_TOPIC: Final[str] = "climate"

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

STORAGE_VERSION: Final[int] = 1
STORAGE_KEY: Final[str] = DOMAIN  # Suffixed with the entry ID
STORAGE_SAVE_DELAY_SECONDS: Final[int] = 5

# ---------------------------------------------------------------------------
# Entity keys: sensors (read-only, from coordinator data)
# ---------------------------------------------------------------------------

SENSOR_KEY_ACTION: Final[str] = "action"
SENSOR_KEY_STATUS: Final[str] = "status"
SENSOR_KEY_TEMPERATURE: Final[str] = "temperature"  # Last accepted reading

# ---------------------------------------------------------------------------
# Entity keys: binary sensors
# ---------------------------------------------------------------------------

BINARY_SENSOR_KEY_CONNECTED: Final[str] = "connected"

# ---------------------------------------------------------------------------
# Entity keys: number entities (writable, checkpointed)
# ---------------------------------------------------------------------------

NUMBER_KEY_HEAT_SETPOINT: Final[str] = "heat_setpoint"
NUMBER_KEY_COOL_SETPOINT: Final[str] = "cool_setpoint"

# ---------------------------------------------------------------------------
# Entity keys: switches and climate
# ---------------------------------------------------------------------------

SWITCH_KEY_ADVERTISE: Final[str] = "advertise"
CLIMATE_KEY_ZONE: Final[str] = "zone"

# ---------------------------------------------------------------------------
# Services and events
# ---------------------------------------------------------------------------

SERVICE_SEND_COMMAND: Final[str] = "send_command"
ATTR_ENTRY_ID: Final[str] = "entry_id"

# Inbound command fields, in dispatch order
COMMAND_FIELDS: Final[tuple[str, ...]] = (
    "payload",
    "mode",
    "temperature",
    "setpoint",
    "override",
    "action",
)

EVENT_CLIMATE_UPDATE: Final[str] = f"{DOMAIN}_update"

# ---------------------------------------------------------------------------
# Options flow error translation keys
# ---------------------------------------------------------------------------

ERROR_TEMP_RANGE: Final[str] = "temp_range"
ERROR_SETPOINT_OUT_OF_RANGE: Final[str] = "setpoint_out_of_range"
ERROR_ADVERTISE_REQUIRES_TOPIC: Final[str] = "advertise_requires_topic"
