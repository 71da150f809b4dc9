"""Settings registry and resolution for zone_climate.

This module defines a typo-safe enum of setting keys, a registry of specs with
defaults and coercion, helpers to resolve effective settings from a
ConfigEntry (options → defaults), and the conversion to the engine's
immutable ``EngineConfig``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import timedelta
from enum import StrEnum
from typing import Any, Callable, Generic, Mapping, TypeVar

from custom_components.zone_climate.climate_engine import ClimateType, EngineConfig
from custom_components.zone_climate.const import (
    DEFAULT_BOOST_DURATION_MINUTES,
    DEFAULT_CLIMATE_TYPE,
    DEFAULT_COOL_SETPOINT,
    DEFAULT_CYCLE_DELAY_SECONDS,
    DEFAULT_HEAT_SETPOINT,
    DEFAULT_KEEP_ALIVE_MINUTES,
    DEFAULT_MAX_TEMP,
    DEFAULT_MIN_TEMP,
    DEFAULT_SWAP_DELAY_MINUTES,
    DEFAULT_TEMP_VALID_MINUTES,
    DEFAULT_TOLERANCE,
    DEFAULT_TOPIC,
    HA_OPTIONS,
)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class _ConfSpec(Generic[T]):
    """Metadata for a configuration setting.

    Attributes:
    - default: The default value for the setting.
    - converter: A callable that converts a raw value to the desired type T.
    - runtime_configurable: Whether this setting can be changed at runtime via an entity
                           (switch) without requiring a full integration reload.
    """

    default: T
    converter: Callable[[Any], T]
    runtime_configurable: bool = False

    def __post_init__(self) -> None:
        """Validate that default is not None."""

        # Disallow None default values to ensure ResolvedConfig fields are always concrete.
        if self.default is None:
            raise ValueError("_ConfSpec.default must not be None")


#
# ConfKeys
#
class ConfKeys(StrEnum):
    """Configuration keys for the integration's settings.

    Each key corresponds to a setting that can be configured via options.
    """

    CLIMATE_TYPE = "climate_type"
    TEMP_SENSOR = "temp_sensor"
    TOLERANCE = "tolerance"
    MIN_TEMP = "min_temp"
    MAX_TEMP = "max_temp"
    DEFAULT_HEAT_SETPOINT = "default_heat_setpoint"
    DEFAULT_COOL_SETPOINT = "default_cool_setpoint"
    KEEP_ALIVE = "keep_alive"
    CYCLE_DELAY = "cycle_delay"
    BOOST_DURATION = "boost_duration"
    TEMP_VALID = "temp_valid"
    SWAP_DELAY = "swap_delay"
    ADVERTISE = "advertise"
    TOPIC = "topic"


class _Converters:
    """Coercion helpers used by _ConfSpec."""

    @staticmethod
    def to_bool(v: Any) -> bool:
        """Convert various boolean representations to bool.

        Handles native bools, integers, and common string representations
        (true/false, yes/no, on/off, 1/0).
        """

        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            normalized = v.lower().strip()
            if normalized in ("true", "yes", "on", "1"):
                return True
            if normalized in ("false", "no", "off", "0"):
                return False
        return bool(v)

    @staticmethod
    def to_int(v: Any) -> int:
        """Convert to int."""

        return int(v)

    @staticmethod
    def to_float(v: Any) -> float:
        """Convert to float."""

        return float(v)

    @staticmethod
    def to_str(v: Any) -> str:
        """Convert to str."""

        return str(v)

    @staticmethod
    def to_climate_type(v: Any) -> str:
        """Convert to a valid climate type string (raises on unknown values)."""

        return ClimateType(str(v).strip().lower()).value


# Central registry of settings with defaults and coercion (type conversion).
# This is the single source of truth for all settings keys and their types.
CONF_SPECS: dict[ConfKeys, _ConfSpec[Any]] = {
    ConfKeys.CLIMATE_TYPE: _ConfSpec(
        default=DEFAULT_CLIMATE_TYPE,
        converter=_Converters.to_climate_type,
    ),
    ConfKeys.TEMP_SENSOR: _ConfSpec(
        default="",
        converter=_Converters.to_str,
    ),
    ConfKeys.TOLERANCE: _ConfSpec(
        default=DEFAULT_TOLERANCE,
        converter=_Converters.to_float,
    ),
    ConfKeys.MIN_TEMP: _ConfSpec(
        default=DEFAULT_MIN_TEMP,
        converter=_Converters.to_float,
    ),
    ConfKeys.MAX_TEMP: _ConfSpec(
        default=DEFAULT_MAX_TEMP,
        converter=_Converters.to_float,
    ),
    ConfKeys.DEFAULT_HEAT_SETPOINT: _ConfSpec(
        default=DEFAULT_HEAT_SETPOINT,
        converter=_Converters.to_float,
    ),
    ConfKeys.DEFAULT_COOL_SETPOINT: _ConfSpec(
        default=DEFAULT_COOL_SETPOINT,
        converter=_Converters.to_float,
    ),
    ConfKeys.KEEP_ALIVE: _ConfSpec(
        default=DEFAULT_KEEP_ALIVE_MINUTES,
        converter=_Converters.to_float,
    ),
    ConfKeys.CYCLE_DELAY: _ConfSpec(
        default=DEFAULT_CYCLE_DELAY_SECONDS,
        converter=_Converters.to_int,
    ),
    ConfKeys.BOOST_DURATION: _ConfSpec(
        default=DEFAULT_BOOST_DURATION_MINUTES,
        converter=_Converters.to_float,
    ),
    ConfKeys.TEMP_VALID: _ConfSpec(
        default=DEFAULT_TEMP_VALID_MINUTES,
        converter=_Converters.to_float,
    ),
    ConfKeys.SWAP_DELAY: _ConfSpec(
        default=DEFAULT_SWAP_DELAY_MINUTES,
        converter=_Converters.to_float,
    ),
    ConfKeys.ADVERTISE: _ConfSpec(
        default=False,
        converter=_Converters.to_bool,
        runtime_configurable=True,
    ),
    ConfKeys.TOPIC: _ConfSpec(
        default=DEFAULT_TOPIC,
        converter=_Converters.to_str,
    ),
}

# Public API of this module (keep helper class internal)
__all__ = [
    "ConfKeys",
    "CONF_SPECS",
    "ResolvedConfig",
    "build_engine_config",
    "get_runtime_configurable_keys",
    "resolve",
    "resolve_entry",
]


#
# get_runtime_configurable_keys
#
def get_runtime_configurable_keys() -> set[str]:
    """Return the set of configuration keys that can be changed at runtime.

    These keys have corresponding entities (switches) and changes to them
    only require a coordinator refresh, not a full reload.

    Returns:
        Set of configuration key strings that are runtime configurable.
    """

    return {key.value for key, spec in CONF_SPECS.items() if spec.runtime_configurable}


#
# ResolvedConfig
#
@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    """Fully resolved configuration with typed fields.

    All values are guaranteed to be non-None and of the correct type.
    Durations keep the units users configure them in (minutes, or seconds
    for ``cycle_delay``).
    """

    climate_type: str
    temp_sensor: str
    tolerance: float
    min_temp: float
    max_temp: float
    default_heat_setpoint: float
    default_cool_setpoint: float
    keep_alive: float
    cycle_delay: int
    boost_duration: float
    temp_valid: float
    swap_delay: float
    advertise: bool
    topic: str

    #
    # get
    #
    def get(self, key: ConfKeys) -> Any:
        """Generic access: ConfKeys values match dataclass field names."""

        return getattr(self, key.value)

    #
    # as_enum_dict
    #
    def as_enum_dict(self) -> dict[ConfKeys, Any]:
        """Build dict keyed by ConfKeys without hard-coded names."""

        return {k: getattr(self, k.value) for k in ConfKeys}


#
# resolve
#
def resolve(options: Mapping[str, Any] | None) -> ResolvedConfig:
    """Resolve settings from options → defaults using ConfKeys.

    Only shallow keys are considered. Performs type coercion via each spec's converter.
    """

    options = options or {}

    def _val(key: ConfKeys) -> Any:
        spec = CONF_SPECS[key]
        if key.value in options:
            raw = options[key.value]
        else:
            raw = spec.default
        try:
            return spec.converter(raw)
        except Exception:
            # Fallback safely to default if coercion fails
            return spec.converter(spec.default)

    # Build kwargs dynamically by iterating over ConfKeys, applying coercion
    converted: dict[str, Any] = {k.value: _val(k) for k in ConfKeys}

    # Filter strictly to ResolvedConfig fields and fail clearly if anything is missing
    field_names = {f.name for f in fields(ResolvedConfig)}
    missing_for_dc = field_names - converted.keys()
    if missing_for_dc:
        raise RuntimeError(f"Missing values for ResolvedConfig fields: {missing_for_dc}")

    values: dict[str, Any] = {name: converted[name] for name in field_names}
    return ResolvedConfig(**values)


#
# resolve_entry
#
def resolve_entry(entry: Any) -> ResolvedConfig:
    """Resolve settings directly from a ConfigEntry-like object.

    All user settings are stored in options. Accepts any object with 'options'
    attribute (works with test mocks).
    """

    opts = getattr(entry, HA_OPTIONS, None) or {}
    return resolve(opts)


#
# build_engine_config
#
def build_engine_config(resolved: ResolvedConfig, name: str, fallback_id: str) -> EngineConfig:
    """Build the engine's immutable configuration.

    Args:
        resolved: Resolved integration settings.
        name: Zone name (the config entry title).
        fallback_id: Identity used when *name* is blank (the entry ID).

    Returns:
        ``EngineConfig`` with durations converted to ``timedelta``.
    """

    device_id, base_topic = EngineConfig.identity(name, fallback_id, resolved.topic)

    return EngineConfig(
        name=name or fallback_id,
        device_id=device_id,
        base_topic=base_topic,
        climate_type=ClimateType(resolved.climate_type),
        tolerance=resolved.tolerance,
        min_temp=resolved.min_temp,
        max_temp=resolved.max_temp,
        default_heat_setpoint=resolved.default_heat_setpoint,
        default_cool_setpoint=resolved.default_cool_setpoint,
        keep_alive=timedelta(minutes=resolved.keep_alive),
        cycle_delay=timedelta(seconds=resolved.cycle_delay),
        boost_duration=timedelta(minutes=resolved.boost_duration),
        temp_valid=timedelta(minutes=resolved.temp_valid),
        swap_delay=timedelta(minutes=resolved.swap_delay),
    )
