"""Config flow and options flow for the Zone Climate integration.

The config flow is minimal: it asks for the zone name only, which determines
the device ID and the MQTT topic. All other configuration happens in the
options flow.

The options flow has two steps:
  1. Equipment, Sensor & Temperatures
  2. Timing & Transport

The heat/cool setpoints and the advertise flag are adjusted at runtime via
number and switch entities.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.components.sensor import SensorDeviceClass
from homeassistant.const import CONF_NAME, Platform, UnitOfTemperature, UnitOfTime
from homeassistant.helpers import selector

from .climate_engine import ClimateType, EngineConfig
from .config import ConfKeys, resolve
from .const import (
    DOMAIN,
    ERROR_ADVERTISE_REQUIRES_TOPIC,
    ERROR_SETPOINT_OUT_OF_RANGE,
    ERROR_TEMP_RANGE,
    INTEGRATION_NAME,
)
from .log import Log

# ---------------------------------------------------------------------------
# Selector translation keys (used by SelectSelector to look up labels)
# ---------------------------------------------------------------------------

SELECTOR_KEY_CLIMATE_TYPE: str = "climate_type"

# Keys whose empty value is meaningful and must be saved
_KEEP_EMPTY_KEYS: frozenset[str] = frozenset({ConfKeys.TOPIC.value})


# ===========================================================================
# Schema builders
# ===========================================================================


#
# _number
#
def _number(minimum: float, maximum: float, step: float, unit: str) -> selector.NumberSelector:
    """Return a box-mode number selector."""

    return selector.NumberSelector(
        selector.NumberSelectorConfig(
            min=minimum,
            max=maximum,
            step=step,
            unit_of_measurement=unit,
            mode=selector.NumberSelectorMode.BOX,
        )
    )


#
# _build_schema_step_1
#
def _build_schema_step_1(defaults: dict[str, Any]) -> vol.Schema:
    """Build the voluptuous schema for step 1: Equipment, Sensor & Temperatures.

    Args:
        defaults: Current/default values keyed by ConfKeys string values.

    Returns:
        Schema for the step 1 form.
    """

    resolved = resolve(defaults)
    schema: dict[vol.Marker, Any] = {}

    # Fitted equipment
    schema[vol.Required(ConfKeys.CLIMATE_TYPE.value, default=resolved.climate_type)] = selector.SelectSelector(
        selector.SelectSelectorConfig(
            options=[t.value for t in ClimateType],
            translation_key=SELECTOR_KEY_CLIMATE_TYPE,
            mode=selector.SelectSelectorMode.DROPDOWN,
        )
    )

    # Temperature sensor (optional; readings can also arrive via the send_command service)
    schema[vol.Optional(ConfKeys.TEMP_SENSOR.value)] = selector.EntitySelector(
        selector.EntitySelectorConfig(
            domain=Platform.SENSOR,
            device_class=SensorDeviceClass.TEMPERATURE,
        )
    )

    celsius = UnitOfTemperature.CELSIUS
    schema[vol.Required(ConfKeys.TOLERANCE.value, default=resolved.tolerance)] = _number(0.0, 5.0, 0.1, "K")
    schema[vol.Required(ConfKeys.MIN_TEMP.value, default=resolved.min_temp)] = _number(-20.0, 50.0, 0.5, celsius)
    schema[vol.Required(ConfKeys.MAX_TEMP.value, default=resolved.max_temp)] = _number(-20.0, 50.0, 0.5, celsius)
    schema[vol.Required(ConfKeys.DEFAULT_HEAT_SETPOINT.value, default=resolved.default_heat_setpoint)] = _number(
        -20.0, 50.0, 0.1, celsius
    )
    schema[vol.Required(ConfKeys.DEFAULT_COOL_SETPOINT.value, default=resolved.default_cool_setpoint)] = _number(
        -20.0, 50.0, 0.1, celsius
    )

    return vol.Schema(schema)


#
# _build_schema_step_2
#
def _build_schema_step_2(defaults: dict[str, Any]) -> vol.Schema:
    """Build the voluptuous schema for step 2: Timing & Transport.

    Args:
        defaults: Current/default values keyed by ConfKeys string values.

    Returns:
        Schema for the step 2 form.
    """

    resolved = resolve(defaults)
    schema: dict[vol.Marker, Any] = {}

    minutes = UnitOfTime.MINUTES
    schema[vol.Required(ConfKeys.CYCLE_DELAY.value, default=resolved.cycle_delay)] = _number(5, 3600, 1, UnitOfTime.SECONDS)
    schema[vol.Required(ConfKeys.KEEP_ALIVE.value, default=resolved.keep_alive)] = _number(1, 1440, 1, minutes)
    schema[vol.Required(ConfKeys.BOOST_DURATION.value, default=resolved.boost_duration)] = _number(1, 1440, 1, minutes)
    schema[vol.Required(ConfKeys.TEMP_VALID.value, default=resolved.temp_valid)] = _number(1, 1440, 1, minutes)
    schema[vol.Required(ConfKeys.SWAP_DELAY.value, default=resolved.swap_delay)] = _number(0, 1440, 1, minutes)

    # MQTT transport
    schema[vol.Required(ConfKeys.TOPIC.value, default=resolved.topic)] = selector.TextSelector()
    schema[vol.Required(ConfKeys.ADVERTISE.value, default=resolved.advertise)] = selector.BooleanSelector()

    return vol.Schema(schema)


# ===========================================================================
# Validation helpers
# ===========================================================================


#
# _validate_step_1
#
def _validate_step_1(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate step 1 input: temperature range and default setpoints.

    Rules:
    - The minimum temperature must be below the maximum.
    - Both default setpoints must lie within the range.

    Args:
        user_input: Form data submitted by the user.

    Returns:
        Dictionary of field-key to error-key pairs (empty if valid).
    """

    errors: dict[str, str] = {}
    resolved = resolve(user_input)

    if resolved.min_temp >= resolved.max_temp:
        errors[ConfKeys.MAX_TEMP.value] = ERROR_TEMP_RANGE
        return errors

    for key in (ConfKeys.DEFAULT_HEAT_SETPOINT, ConfKeys.DEFAULT_COOL_SETPOINT):
        if not resolved.min_temp <= resolved.get(key) <= resolved.max_temp:
            errors[key.value] = ERROR_SETPOINT_OUT_OF_RANGE

    return errors


#
# _validate_step_2
#
def _validate_step_2(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate step 2 input: advertising needs a topic prefix.

    Args:
        user_input: Form data submitted by the user.

    Returns:
        Dictionary of field-key to error-key pairs (empty if valid).
    """

    errors: dict[str, str] = {}

    advertise = bool(user_input.get(ConfKeys.ADVERTISE.value, False))
    topic = str(user_input.get(ConfKeys.TOPIC.value, "")).strip().strip("/")

    if advertise and not topic:
        errors[ConfKeys.TOPIC.value] = ERROR_ADVERTISE_REQUIRES_TOPIC

    return errors


# ===========================================================================
# Config flow (initial setup)
# ===========================================================================


#
# FlowHandler
#
class FlowHandler(config_entries.ConfigFlow, domain=DOMAIN):
    """Config flow for the Zone Climate integration.

    Asks for the zone name. The entry is created with default options; the
    name's slug must be unique because it forms the device ID.
    """

    # Schema version -- increment and implement async_migrate_entry on changes
    VERSION = 1

    # Explicit domain attribute for tests referencing FlowHandler.domain
    domain = DOMAIN

    #
    # async_step_user
    #
    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> config_entries.ConfigFlowResult:
        """Handle initial setup -- create an entry for the named zone."""

        schema = vol.Schema({vol.Required(CONF_NAME, default=INTEGRATION_NAME): selector.TextSelector()})

        if user_input is None:
            return self.async_show_form(step_id="user", data_schema=schema)

        name = str(user_input[CONF_NAME]).strip() or INTEGRATION_NAME
        device_id, _ = EngineConfig.identity(name, name, "")

        await self.async_set_unique_id(device_id)
        self._abort_if_unique_id_configured()

        return self.async_create_entry(title=name, data={})

    #
    # async_get_options_flow
    #
    @staticmethod
    def async_get_options_flow(
        config_entry: config_entries.ConfigEntry,
    ) -> config_entries.OptionsFlow:
        """Create the options flow."""

        return OptionsFlowHandler(config_entry)


# ===========================================================================
# Options flow (post-setup configuration)
# ===========================================================================


#
# OptionsFlowHandler
#
class OptionsFlowHandler(config_entries.OptionsFlow):
    """Handle post-setup configuration for the Zone Climate integration.

    Two-step wizard:
      1. Equipment, Sensor & Temperatures
      2. Timing & Transport
    """

    #
    # __init__
    #
    def __init__(self, config_entry: config_entries.ConfigEntry) -> None:
        """Initialize options flow.

        Avoid assigning to OptionsFlow.config_entry directly to prevent
        frame-helper warnings in tests; keep a private reference instead.
        """

        self._config_entry = config_entry
        self._config_data: dict[str, Any] = {}
        self._logger = Log(entry_id=config_entry.entry_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _current_settings(self) -> dict[str, Any]:
        return dict(self._config_entry.options) if self._config_entry.options else {}

    #
    # _merged_defaults
    #
    def _merged_defaults(self) -> dict[str, Any]:
        """Merge current settings with data collected in earlier steps."""

        return {**self._current_settings(), **self._config_data}

    #
    # _finalize_and_save
    #
    def _finalize_and_save(self) -> config_entries.ConfigFlowResult:
        """Merge flow data with current settings, clean up, and persist.

        Empty-string values (cleared optional entity selectors) are stripped,
        except for the topic where an empty value disables the transport. The
        saved options trigger a reload via the update listener in __init__.py.

        Returns:
            ConfigFlowResult that completes the options flow.
        """

        merged = self._merged_defaults()
        cleaned = {k: v for k, v in merged.items() if v != "" or k in _KEEP_EMPTY_KEYS}

        self._logger.info("Options flow completed. Saving configuration: %s", cleaned)
        return self.async_create_entry(title="", data=cleaned)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    #
    # async_step_init
    #
    async def async_step_init(self, user_input: dict[str, Any] | None = None) -> config_entries.ConfigFlowResult:
        """Step 1: Equipment, Sensor & Temperatures."""

        defaults = self._merged_defaults()
        schema = _build_schema_step_1(defaults)

        if user_input is None:
            return self.async_show_form(
                step_id="init",
                data_schema=self.add_suggested_values_to_schema(schema, defaults),
            )

        errors = _validate_step_1(user_input)
        if errors:
            return self.async_show_form(
                step_id="init",
                data_schema=self.add_suggested_values_to_schema(schema, user_input),
                errors=errors,
            )

        # A cleared entity selector is omitted from the input; mark it for removal
        user_input.setdefault(ConfKeys.TEMP_SENSOR.value, "")

        self._logger.debug("Options flow step 1 input: %s", user_input)
        self._config_data.update(user_input)
        return await self.async_step_2()

    #
    # async_step_2
    #
    async def async_step_2(self, user_input: dict[str, Any] | None = None) -> config_entries.ConfigFlowResult:
        """Step 2: Timing & Transport."""

        defaults = self._merged_defaults()
        schema = _build_schema_step_2(defaults)

        if user_input is None:
            return self.async_show_form(
                step_id="2",
                data_schema=self.add_suggested_values_to_schema(schema, defaults),
            )

        errors = _validate_step_2(user_input)
        if errors:
            return self.async_show_form(
                step_id="2",
                data_schema=self.add_suggested_values_to_schema(schema, user_input),
                errors=errors,
            )

        self._logger.debug("Options flow step 2 input: %s", user_input)
        self._config_data.update(user_input)
        return self._finalize_and_save()
