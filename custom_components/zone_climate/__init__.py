"""
Custom integration for per-zone heating/cooling decisions with Home Assistant.

Each config entry is one zone controller: it tracks a mode, a target
temperature, and a filtered temperature reading, decides whether the zone
should heat, cool, or idle, and optionally mirrors its status over MQTT.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import voluptuous as vol
from homeassistant.config_entries import ConfigEntryState
from homeassistant.const import Platform
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers import entity_registry as er
from homeassistant.loader import async_get_loaded_integration

from .config import get_runtime_configurable_keys
from .config_flow import OptionsFlowHandler
from .const import (
    ATTR_ENTRY_ID,
    COMMAND_FIELDS,
    DOMAIN,
    HA_OPTIONS,
    INTEGRATION_NAME,
    NUMBER_KEY_COOL_SETPOINT,
    NUMBER_KEY_HEAT_SETPOINT,
    SERVICE_SEND_COMMAND,
)
from .coordinator import DataUpdateCoordinator
from .data import RuntimeData
from .ha_interface import StoreCheckpoint
from .log import Log

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant, ServiceCall

    from .data import IntegrationConfigEntry

# List of platforms provided by this integration
PLATFORMS: list[Platform] = [
    Platform.BINARY_SENSOR,
    Platform.CLIMATE,
    Platform.NUMBER,
    Platform.SENSOR,
    Platform.SWITCH,
]

# Values are validated by the engine; invalid ones are ignored there
_COMMAND_VALUE = vol.Any(None, cv.string)

SEND_COMMAND_SCHEMA = vol.Schema(
    {
        vol.Required(ATTR_ENTRY_ID): cv.string,
        vol.Optional("payload"): _COMMAND_VALUE,
        vol.Optional("mode"): _COMMAND_VALUE,
        vol.Optional("temperature"): _COMMAND_VALUE,
        vol.Optional("setpoint"): _COMMAND_VALUE,
        vol.Optional("override"): cv.boolean,
        vol.Optional("action"): _COMMAND_VALUE,
    }
)


#
# async_setup_entry
#
async def async_setup_entry(
    hass: HomeAssistant,
    entry: IntegrationConfigEntry,
) -> bool:
    """Set up a zone from a config entry.

    This function is called by Home Assistant during:
    - Initial setup of the integration via the UI (after the user completes the config flow)
    - Integration reload (via UI or when config options change)
    - HA restart

    What this function does:
    - Creates the coordinator and stores runtime data on the entry
    - Restores checkpointed setpoints and connects the transport
    - Sets up platforms and the send_command service
    - Starts the evaluation cycle
    - Sets up the reload listener
    """

    logger = Log(entry_id=entry.entry_id)
    logger.info("Starting integration setup")

    try:
        # Create the coordinator
        coordinator = DataUpdateCoordinator(hass, entry)

        # Get configuration from options (all user settings are stored in options)
        merged_config = dict(getattr(entry, HA_OPTIONS, {}) or {})

        # Store the config in the coordinator for comparison during reload
        coordinator._merged_config = merged_config

        # Store shared state
        entry.runtime_data = RuntimeData(
            integration=async_get_loaded_integration(hass, entry.domain),
            coordinator=coordinator,
            config=merged_config,
        )

        # Restore setpoints, subscribe, end the startup period
        await coordinator.async_start()

        # Call each platform's async_setup_entry()
        logger.debug("Setting up platforms: %s", PLATFORMS)
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

        # Setpoint numbers follow the fitted equipment; drop the ones no longer offered
        _remove_stale_setpoint_entities(hass, entry, coordinator)

        _async_register_services(hass)

        # Trigger initial coordinator refresh after platforms are set up
        # This ensures all entities are registered before the first state update
        logger.debug("Starting initial coordinator refresh")
        await coordinator.async_config_entry_first_refresh()

        # Register the update listener
        entry.async_on_unload(entry.add_update_listener(async_reload_entry))

    except (OSError, ValueError, TypeError) as err:
        # "Expected" errors: only log an error message
        logger.error("Failed to set up %s integration: %s", INTEGRATION_NAME, err)
        return False
    except Exception as err:
        # "Unexpected" errors: log exception with stack trace
        logger.exception("Error during %s setup: %s", INTEGRATION_NAME, err)
        return False
    else:
        logger.info("%s integration setup completed", INTEGRATION_NAME)
        return True


#
# _remove_stale_setpoint_entities
#
def _remove_stale_setpoint_entities(
    hass: HomeAssistant,
    entry: IntegrationConfigEntry,
    coordinator: DataUpdateCoordinator,
) -> None:
    """Remove setpoint number entities the fitted equipment no longer offers.

    A heat-only zone has no cool setpoint and vice versa. When the user changes
    the climate type, the previously created number would linger in the entity
    registry as unavailable.
    """

    config = coordinator.engine.config
    registry = er.async_get(hass)

    stale_keys: list[str] = []
    if not config.has_heating:
        stale_keys.append(NUMBER_KEY_HEAT_SETPOINT)
    if not config.has_cooling:
        stale_keys.append(NUMBER_KEY_COOL_SETPOINT)

    for key in stale_keys:
        stale_entry = registry.async_get_entity_id(Platform.NUMBER, DOMAIN, f"{entry.entry_id}_{key}")
        if stale_entry is not None:
            registry.async_remove(stale_entry)


#
# _get_coordinator
#
def _get_coordinator(hass: HomeAssistant, entry_id: str) -> DataUpdateCoordinator:
    """Return the coordinator of a loaded entry of this integration.

    Raises:
        ServiceValidationError: No loaded entry with this ID exists.
    """

    entry = hass.config_entries.async_get_entry(entry_id)
    if entry is None or entry.domain != DOMAIN or entry.state is not ConfigEntryState.LOADED:
        raise ServiceValidationError(
            f"Config entry {entry_id} not found",
            translation_domain=DOMAIN,
            translation_key="entry_not_found",
            translation_placeholders={ATTR_ENTRY_ID: entry_id},
        )
    return entry.runtime_data.coordinator


#
# _async_register_services
#
def _async_register_services(hass: HomeAssistant) -> None:
    """Register the integration's services (once for all entries)."""

    if hass.services.has_service(DOMAIN, SERVICE_SEND_COMMAND):
        return

    async def async_handle_send_command(call: ServiceCall) -> None:
        """Deliver an inbound command to a zone."""

        coordinator = _get_coordinator(hass, call.data[ATTR_ENTRY_ID])
        command = {field: call.data[field] for field in COMMAND_FIELDS if field in call.data}
        await coordinator.async_handle_command(command)

    hass.services.async_register(
        DOMAIN,
        SERVICE_SEND_COMMAND,
        async_handle_send_command,
        schema=SEND_COMMAND_SCHEMA,
    )


#
# async_get_options_flow
#
async def async_get_options_flow(entry: IntegrationConfigEntry) -> OptionsFlowHandler:
    """Return the options flow for this handler.

    This function is called by Home Assistant when:
    - The user clicks the gear icon to bring up the integration's options dialog.
    """

    return OptionsFlowHandler(entry)


#
# async_unload_entry
#
async def async_unload_entry(
    hass: HomeAssistant,
    entry: IntegrationConfigEntry,
) -> bool:
    """Handle removal of an entry."""

    logger = Log(entry_id=entry.entry_id)
    logger.info("Unloading %s integration", INTEGRATION_NAME)

    try:
        # The coordinator shuts itself down through the entry's unload callbacks
        return await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    except (OSError, ValueError, TypeError) as err:
        # "Expected" errors: only log an error message
        logger.error("Error unloading %s integration: %s", INTEGRATION_NAME, err)
        return False
    except Exception as err:
        # "Unexpected" errors: log exception with stack trace
        logger.exception("Error unloading %s integration: %s", INTEGRATION_NAME, err)
        return False


#
# async_remove_entry
#
async def async_remove_entry(
    hass: HomeAssistant,
    entry: IntegrationConfigEntry,
) -> None:
    """Delete the entry's checkpointed setpoints."""

    Log(entry_id=entry.entry_id).info("Removing stored setpoints")
    await StoreCheckpoint(hass, entry.entry_id).async_remove()


#
# async_reload_entry
#
async def async_reload_entry(
    hass: HomeAssistant,
    entry: IntegrationConfigEntry,
) -> None:
    """Reload config entry or just refresh coordinator based on what changed.

    For runtime options that have corresponding entities (the advertise switch),
    we only need to refresh the coordinator. For structural changes, we need a full reload.
    """

    logger = Log(entry_id=entry.entry_id)

    # These keys can be changed at runtime via their corresponding entities
    # without requiring a full reload. The list is centrally defined in config.py
    # based on the runtime_configurable flag in CONF_SPECS.
    runtime_configurable_keys = get_runtime_configurable_keys()

    if hasattr(entry, "runtime_data") and entry.runtime_data:
        coordinator = entry.runtime_data.coordinator

        # Get the old configuration that the coordinator was using
        old_config = coordinator._merged_config

        # Get the new configuration from the updated entry (all settings are in options)
        new_config = dict(getattr(entry, HA_OPTIONS, {}) or {})

        # Determine which keys have actually changed
        changed_keys = {key for key in set(old_config.keys()) | set(new_config.keys()) if old_config.get(key) != new_config.get(key)}
        changes = ", ".join(f"{key}={new_config.get(key)}" for key in sorted(changed_keys))

        # If the only changes are to runtime-configurable keys, just refresh
        if changed_keys and changed_keys.issubset(runtime_configurable_keys):
            logger.info("Runtime settings change detected (%s), refreshing coordinator", changes)

            # Update the stored config with new values
            coordinator._merged_config = new_config
            entry.runtime_data.config = new_config

            # Trigger a coordinator refresh to apply the changes
            await coordinator.async_request_refresh()
            return

    # For all other changes (structural, new keys, etc.), do a full reload
    logger.info("Reloading %s integration", INTEGRATION_NAME)
    await hass.config_entries.async_reload(entry.entry_id)


# Re-export common package-level symbols for convenience imports in tooling/tests
__all__ = [
    "DOMAIN",
    "PLATFORMS",
    "async_setup_entry",
    "async_unload_entry",
    "async_reload_entry",
]
