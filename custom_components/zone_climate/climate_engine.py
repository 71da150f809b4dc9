"""Zone climate decision engine.

Pure Python module with no Home Assistant imports. Decides whether a zone
should be heating, cooling, or idle from a stream of mode commands, setpoint
commands, and temperature readings.

Building blocks:
- ``calculate_action``: hysteresis-based action calculator (pure function).
- ``SetpointState`` / ``TemperatureReading`` / ``RunTimers``: immutable state
  records with pure transition functions.
- ``is_connected``: liveness predicate derived from the last status publish.
- ``ClimateEngine``: owns the state, routes commands, and runs the periodic
  evaluation cycle.

Host capabilities are injected through two narrow interfaces: a ``Checkpoint``
key-value store for the heat/cool setpoints and a ``StatusSink`` for status
publishes.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any, Protocol

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


#
# ClimateMode
#
class ClimateMode(StrEnum):
    """Operating mode of the zone."""

    OFF = "off"
    HEAT = "heat"
    COOL = "cool"
    AUTO = "auto"


#
# ClimateAction
#
class ClimateAction(StrEnum):
    """What the zone is currently doing."""

    HEATING = "heating"
    COOLING = "cooling"
    NONE = "none"


#
# ClimateType
#
class ClimateType(StrEnum):
    """Equipment fitted to the zone. Determines the capability flags."""

    HEAT = "heat"
    COOL = "cool"
    BOTH = "both"
    MANUAL = "manual"  # Heating and cooling, no setpoint


#
# StatusSeverity
#
class StatusSeverity(StrEnum):
    """Severity of the displayed status."""

    INFO = "info"
    HEATING = "heating"
    COOLING = "cooling"
    IDLE = "idle"


# Reported in update payloads for unset values
NONE_VALUE = "none"

# Mode aliases that select the controller's default mode
DEFAULT_MODE_ALIASES: frozenset[str] = frozenset({"on", "boost"})

# Transport topic suffixes
TOPIC_SUFFIX_MODE_SET = "/mode/set"
TOPIC_SUFFIX_TEMPERATURE_SET = "/temperature/set"
TOPIC_SUFFIX_STATUS = "/status"

# Checkpoint keys
CHECKPOINT_KEY_HEAT_SETPOINT = "heat_setpoint"
CHECKPOINT_KEY_COOL_SETPOINT = "cool_setpoint"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


#
# StatusPublishError
#
class StatusPublishError(Exception):
    """A status sink could not accept a publish."""


# ---------------------------------------------------------------------------
# Host interfaces
# ---------------------------------------------------------------------------


#
# Checkpoint
#
class Checkpoint(Protocol):
    """Durable key-value store owned by one controller instance."""

    def get(self, key: str) -> Any:
        """Return the stored value, or ``None`` if the key was never set."""

    def set(self, key: str, value: Any) -> None:
        """Store a value."""


#
# StatusSink
#
class StatusSink(Protocol):
    """Outbound status channel.

    ``publish`` raises ``StatusPublishError`` when the message was not accepted.
    """

    def publish(self, topic: str, payload: dict[str, Any]) -> None:
        """Publish a status payload under *topic*."""


#
# MemoryCheckpoint
#
class MemoryCheckpoint:
    """In-process ``Checkpoint``. Values are lost when the process exits."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


#
# slugify_name
#
def slugify_name(name: str) -> str:
    """Lower-case, trim, and replace whitespace runs with ``-``."""

    return re.sub(r"\s+", "-", name.strip().lower())


#
# EngineConfig
#
@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable controller configuration.

    Attributes:
        name: Display name of the zone.
        device_id: Identity reported in update payloads.
        base_topic: Transport topic prefix, or ``None`` when no topic is configured.
        climate_type: Fitted equipment; determines the capability flags.
        tolerance: Dead-band width in K.
        min_temp: Lowest accepted temperature / setpoint.
        max_temp: Highest accepted temperature / setpoint.
        default_heat_setpoint: Heat setpoint used until one is checkpointed.
        default_cool_setpoint: Cool setpoint used until one is checkpointed.
        keep_alive: Liveness window after the last status publish.
        cycle_delay: Interval of the evaluation cycle.
        boost_duration: Maximum continuous run length of an action.
        temp_valid: Validity window of a commanded setpoint.
        swap_delay: Grace period after which a large temperature jump is accepted.
    """

    name: str
    device_id: str
    base_topic: str | None
    climate_type: ClimateType
    tolerance: float
    min_temp: float
    max_temp: float
    default_heat_setpoint: float
    default_cool_setpoint: float
    keep_alive: timedelta
    cycle_delay: timedelta
    boost_duration: timedelta
    temp_valid: timedelta
    swap_delay: timedelta

    @property
    def has_heating(self) -> bool:
        return self.climate_type in (ClimateType.HEAT, ClimateType.BOTH, ClimateType.MANUAL)

    @property
    def has_cooling(self) -> bool:
        return self.climate_type in (ClimateType.COOL, ClimateType.BOTH, ClimateType.MANUAL)

    @property
    def has_setpoint(self) -> bool:
        return self.climate_type != ClimateType.MANUAL

    @property
    def default_mode(self) -> ClimateMode:
        """Mode selected by ``on``/``boost``: heat-only and manual → heat."""

        if self.climate_type == ClimateType.BOTH:
            return ClimateMode.AUTO
        if self.climate_type == ClimateType.COOL:
            return ClimateMode.COOL
        return ClimateMode.HEAT

    @property
    def auto_setpoint(self) -> bool:
        """Heat/cool mode changes load the matching stored setpoint."""

        return self.default_mode == ClimateMode.AUTO

    #
    # in_range
    #
    def in_range(self, value: float) -> bool:
        """Return whether *value* lies within [min_temp, max_temp]."""

        return self.min_temp <= value <= self.max_temp

    #
    # identity
    #
    @staticmethod
    def identity(name: str, fallback_id: str, topic: str) -> tuple[str, str | None]:
        """Derive ``(device_id, base_topic)`` from the zone name and topic prefix."""

        slug = slugify_name(name) if name.strip() else fallback_id
        device_id = f"{slug}-climate"
        prefix = topic.strip().strip("/").lower()
        return device_id, (f"{prefix}/{device_id}" if prefix else None)


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------


#
# parse_number
#
def parse_number(raw: Any) -> float | None:
    """Parse *raw* as a finite float. Returns ``None`` for anything else."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


#
# _normalize
#
def _normalize(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    return str(raw).strip().lower()


# ---------------------------------------------------------------------------
# Action calculator
# ---------------------------------------------------------------------------


#
# calculate_action
#
def calculate_action(
    current_temp: float,
    target_temp: float,
    heat_setpoint: float,
    cool_setpoint: float,
    tolerance: float,
) -> ClimateAction:
    """Map temperatures to an action.

    Both the target band and the heat/cool setpoint band must indicate a need;
    the heat/cool setpoints act as safety rails independent of the target.

    Args:
        current_temp: Last accepted temperature reading.
        target_temp: Momentary target temperature.
        heat_setpoint: Heating rail.
        cool_setpoint: Cooling rail.
        tolerance: Dead-band width.

    Returns:
        ``HEATING``, ``COOLING`` or ``NONE``.
    """

    if current_temp < target_temp - tolerance and current_temp < heat_setpoint - tolerance:
        return ClimateAction.HEATING
    if current_temp > target_temp + tolerance and current_temp > cool_setpoint + tolerance:
        return ClimateAction.COOLING
    return ClimateAction.NONE


# ---------------------------------------------------------------------------
# Setpoint state
# ---------------------------------------------------------------------------


#
# SetpointState
#
@dataclass(frozen=True, slots=True)
class SetpointState:
    """Commanded target temperature and when it was set."""

    current: float | None = None
    set_at: datetime | None = None

    #
    # is_valid
    #
    def is_valid(self, now: datetime, temp_valid: timedelta) -> bool:
        """A setpoint older than *temp_valid* counts as unset."""

        if self.current is None or self.set_at is None:
            return False
        return now - self.set_at <= temp_valid


#
# apply_setpoint
#
def apply_setpoint(state: SetpointState, raw: Any, now: datetime, config: EngineConfig) -> SetpointState:
    """Return the state after a setpoint request.

    ``None`` clears the setpoint. Requests are dropped when the controller has no
    setpoint, the value is not a finite number, or it is outside the accepted range.
    """

    if raw is None:
        return SetpointState()
    if not config.has_setpoint:
        return state
    value = parse_number(raw)
    if value is None or not config.in_range(value):
        return state
    return SetpointState(current=value, set_at=now)


# ---------------------------------------------------------------------------
# Temperature tracker
# ---------------------------------------------------------------------------


#
# TemperatureReading
#
@dataclass(frozen=True, slots=True)
class TemperatureReading:
    """Last accepted temperature reading."""

    value: float | None = None
    observed_at: datetime | None = None


#
# apply_temperature
#
def apply_temperature(reading: TemperatureReading, raw: Any, now: datetime, config: EngineConfig) -> TemperatureReading:
    """Return the reading after a new sample.

    A sample is accepted when it is in range and either there is no prior value,
    the jump is within ``tolerance``, or more than ``swap_delay`` has passed since
    the last accepted reading. Rejected samples leave the reading untouched.
    """

    value = parse_number(raw)
    if value is None or not config.in_range(value):
        return reading

    if (
        reading.value is None
        or abs(value - reading.value) <= config.tolerance
        or reading.observed_at is None
        or now - reading.observed_at > config.swap_delay
    ):
        return TemperatureReading(value=value, observed_at=now)

    return reading


# ---------------------------------------------------------------------------
# Equipment protection
# ---------------------------------------------------------------------------


#
# RunTimers
#
@dataclass(frozen=True, slots=True)
class RunTimers:
    """Start of the current continuous heating / cooling run."""

    heat_since: datetime | None = None
    cool_since: datetime | None = None

    #
    # track
    #
    def track(self, action: ClimateAction, now: datetime) -> RunTimers:
        """Stamp the start of a run; clear the timer of an action that stopped."""

        heat_since = (self.heat_since or now) if action == ClimateAction.HEATING else None
        cool_since = (self.cool_since or now) if action == ClimateAction.COOLING else None
        return replace(self, heat_since=heat_since, cool_since=cool_since)

    #
    # run_time
    #
    def run_time(self, action: ClimateAction, now: datetime) -> timedelta | None:
        """Return how long *action* has been running, or ``None`` if it is not."""

        since = None
        if action == ClimateAction.HEATING:
            since = self.heat_since
        elif action == ClimateAction.COOLING:
            since = self.cool_since
        return now - since if since is not None else None


#
# run_limit_reached
#
def run_limit_reached(timers: RunTimers, action: ClimateAction, now: datetime, limit: timedelta) -> bool:
    """Return whether *action* has been running for at least *limit*."""

    elapsed = timers.run_time(action, now)
    return elapsed is not None and elapsed >= limit


# ---------------------------------------------------------------------------
# Liveness
# ---------------------------------------------------------------------------


#
# is_connected
#
def is_connected(last_sent: datetime | None, now: datetime, keep_alive: timedelta) -> bool:
    """Connected while the last status publish is younger than *keep_alive*."""

    if last_sent is None:
        return False
    return now - last_sent < keep_alive


# ---------------------------------------------------------------------------
# Outbound messages
# ---------------------------------------------------------------------------


#
# ClimateUpdate
#
@dataclass(frozen=True, slots=True)
class ClimateUpdate:
    """Update message emitted on every cycle and accepted mode change."""

    device_id: str
    name: str
    mode: ClimateMode | None
    temperature: float | None
    action: ClimateAction
    heat_setpoint: float
    cool_setpoint: float
    connected: bool

    #
    # as_payload
    #
    def as_payload(self) -> dict[str, Any]:
        """Return the wire representation."""

        return {
            "deviceId": self.device_id,
            "name": self.name,
            "mode": self.mode.value if self.mode is not None else NONE_VALUE,
            "temperature": self.temperature if self.temperature is not None else NONE_VALUE,
            "action": self.action.value,
            "heatSetpoint": self.heat_setpoint,
            "coolSetpoint": self.cool_setpoint,
            "connected": self.connected,
        }


#
# DisplayStatus
#
@dataclass(frozen=True, slots=True)
class DisplayStatus:
    """Human-readable status of the controller."""

    text: str
    severity: StatusSeverity


# ---------------------------------------------------------------------------
# ClimateEngine
# ---------------------------------------------------------------------------


#
# ClimateEngine
#
class ClimateEngine:
    """Zone climate controller.

    Single-owner state machine: commands and evaluation ticks must be delivered
    serially. No method blocks or suspends.

    Args:
        config: Immutable controller configuration.
        checkpoint: Durable store for the heat/cool setpoints.
        sink: Status sink; ``None`` disables status publishing.
        on_update: Receives every emitted ``ClimateUpdate``.
        clock: Returns the current time (timezone-aware).
        logger: Logger for ignored commands, cutoffs, and publish failures.
    """

    def __init__(
        self,
        config: EngineConfig,
        checkpoint: Checkpoint,
        sink: StatusSink | None = None,
        *,
        on_update: Callable[[ClimateUpdate], None] | None = None,
        clock: Callable[[], datetime] | None = None,
        logger: Any = None,
    ) -> None:
        self._config = config
        self._checkpoint = checkpoint
        self._sink = sink
        self._on_update = on_update
        self._clock = clock or (lambda: datetime.now(UTC))
        self._logger = logger or logging.getLogger(__name__)

        self._starting = True
        self._mode: ClimateMode | None = None
        self._setpoint = SetpointState()
        self._override = False
        self._temperature = TemperatureReading()
        self._action = ClimateAction.NONE
        self._timers = RunTimers()
        self._last_sent: datetime | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    #
    # start
    #
    def start(self) -> None:
        """End the startup grace period. Ticks before this only refresh status."""

        self._starting = False

    #
    # attach_sink
    #
    def attach_sink(self, sink: StatusSink | None) -> None:
        """Replace the status sink (``None`` stops publishing)."""

        self._sink = sink

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def starting(self) -> bool:
        return self._starting

    @property
    def mode(self) -> ClimateMode | None:
        """Last accepted mode, ``None`` until a mode is commanded."""

        return self._mode

    @property
    def action(self) -> ClimateAction:
        return self._action

    @property
    def override(self) -> bool:
        return self._override

    @property
    def setpoint_state(self) -> SetpointState:
        return self._setpoint

    @property
    def temperature(self) -> TemperatureReading:
        return self._temperature

    @property
    def run_timers(self) -> RunTimers:
        return self._timers

    @property
    def last_sent(self) -> datetime | None:
        return self._last_sent

    @property
    def advertising(self) -> bool:
        """Status publishes are enabled and have somewhere to go."""

        return self._sink is not None and self._config.base_topic is not None

    #
    # is_connected
    #
    def is_connected(self) -> bool:
        return is_connected(self._last_sent, self._clock(), self._config.keep_alive)

    # ------------------------------------------------------------------
    # Heat / cool setpoints (checkpointed)
    # ------------------------------------------------------------------

    @property
    def heat_setpoint(self) -> float:
        return self._stored_setpoint(CHECKPOINT_KEY_HEAT_SETPOINT, self._config.default_heat_setpoint)

    @property
    def cool_setpoint(self) -> float:
        return self._stored_setpoint(CHECKPOINT_KEY_COOL_SETPOINT, self._config.default_cool_setpoint)

    #
    # set_heat_setpoint
    #
    def set_heat_setpoint(self, raw: Any) -> bool:
        """Checkpoint a new heat setpoint. Returns whether it was accepted."""

        return self._store_setpoint(CHECKPOINT_KEY_HEAT_SETPOINT, raw)

    #
    # set_cool_setpoint
    #
    def set_cool_setpoint(self, raw: Any) -> bool:
        """Checkpoint a new cool setpoint. Returns whether it was accepted."""

        return self._store_setpoint(CHECKPOINT_KEY_COOL_SETPOINT, raw)

    def _stored_setpoint(self, key: str, default: float) -> float:
        value = parse_number(self._checkpoint.get(key))
        return value if value is not None else default

    def _store_setpoint(self, key: str, raw: Any) -> bool:
        value = parse_number(raw)
        if value is None or not self._config.in_range(value):
            self._logger.debug("Ignoring %s %s: not a number within range", key, raw)
            return False
        self._checkpoint.set(key, value)
        return True

    # ------------------------------------------------------------------
    # Mode store
    # ------------------------------------------------------------------

    #
    # get_mode
    #
    def get_mode(self) -> ClimateMode:
        """Return the commanded mode, or the default mode if none was set."""

        return self._mode or self._config.default_mode

    #
    # set_mode
    #
    def set_mode(self, raw: Any) -> None:
        """Request a mode change. Requests beyond the capabilities are dropped."""

        mode = self._parse_mode(raw)
        if mode is None:
            self._logger.debug("Ignoring mode %s: not supported by this controller", raw)
            return
        self._change_mode(mode)

    def _parse_mode(self, raw: Any) -> ClimateMode | None:
        value = _normalize(raw)
        if value == ClimateMode.OFF:
            return ClimateMode.OFF
        if value == ClimateMode.HEAT:
            return ClimateMode.HEAT if self._config.has_heating else None
        if value == ClimateMode.COOL:
            return ClimateMode.COOL if self._config.has_cooling else None
        if value in DEFAULT_MODE_ALIASES:
            return self._config.default_mode
        return ClimateMode.AUTO

    def _change_mode(self, mode: ClimateMode) -> None:
        now = self._clock()
        self._logger.info("Mode changed to %s", mode)

        self._mode = mode
        self._timers = RunTimers()

        if mode == ClimateMode.OFF:
            self._action = ClimateAction.NONE
            self._setpoint = SetpointState()
            self._override = False
            self._emit_update(now)
            return

        if self._config.auto_setpoint:
            if mode == ClimateMode.HEAT:
                self._setpoint = apply_setpoint(self._setpoint, self.heat_setpoint, now, self._config)
            elif mode == ClimateMode.COOL:
                self._setpoint = apply_setpoint(self._setpoint, self.cool_setpoint, now, self._config)

        self._action = self._compute_action(now)
        self._emit_update(now)
        self._publish_status(now)

    # ------------------------------------------------------------------
    # Setpoint store
    # ------------------------------------------------------------------

    #
    # set_setpoint
    #
    def set_setpoint(self, raw: Any) -> None:
        """Set the target temperature (``None`` clears it). Invalid values are dropped."""

        self._setpoint = apply_setpoint(self._setpoint, raw, self._clock(), self._config)

    #
    # get_setpoint
    #
    def get_setpoint(self) -> float:
        """Return the target temperature.

        The commanded setpoint while it is within its validity window, otherwise
        the mode-appropriate default.
        """

        return self._target_setpoint(self._clock())

    def _target_setpoint(self, now: datetime) -> float:
        current = self._setpoint.current
        if current is None or not self._config.has_setpoint:
            return self._default_setpoint()
        if not self._setpoint.is_valid(now, self._config.temp_valid):
            return self._default_setpoint()
        return current

    def _default_setpoint(self) -> float:
        mode = self.get_mode()
        if mode == ClimateMode.HEAT:
            return self.heat_setpoint
        if mode == ClimateMode.COOL:
            return self.cool_setpoint
        if self._config.default_mode == ClimateMode.HEAT:
            return self.heat_setpoint
        return self.cool_setpoint

    # ------------------------------------------------------------------
    # Override and action accessors
    # ------------------------------------------------------------------

    #
    # set_override
    #
    def set_override(self, raw: Any) -> None:
        """Latch the override flag. Anything but ``True`` clears it."""

        self._override = raw is True

    #
    # set_action
    #
    def set_action(self, raw: Any) -> None:
        """Request an action. Translated into the matching mode change."""

        value = _normalize(raw)
        if value == ClimateAction.HEATING and self._config.has_heating:
            self._change_mode(ClimateMode.HEAT)
        elif value == ClimateAction.COOLING and self._config.has_cooling:
            self._change_mode(ClimateMode.COOL)
        elif value == ClimateAction.NONE:
            self._change_mode(ClimateMode.AUTO)
        else:
            self._logger.debug("Ignoring action %s: not supported by this controller", raw)

    #
    # get_action
    #
    def get_action(self) -> ClimateAction:
        """Return the current action, limited to the fitted equipment."""

        if self._action == ClimateAction.HEATING and self._config.has_heating:
            return ClimateAction.HEATING
        if self._action == ClimateAction.COOLING and self._config.has_cooling:
            return ClimateAction.COOLING
        return ClimateAction.NONE

    # ------------------------------------------------------------------
    # Temperature tracker
    # ------------------------------------------------------------------

    #
    # update_temperature
    #
    def update_temperature(self, raw: Any) -> bool:
        """Offer a temperature reading. Returns whether it was accepted."""

        updated = apply_temperature(self._temperature, raw, self._clock(), self._config)
        accepted = updated is not self._temperature
        if not accepted and raw is not None:
            self._logger.debug("Rejected temperature reading %s (last accepted: %s)", raw, self._temperature.value)
        self._temperature = updated
        return accepted

    # ------------------------------------------------------------------
    # Command router
    # ------------------------------------------------------------------

    #
    # handle_command
    #
    def handle_command(self, command: Mapping[str, Any]) -> None:
        """Dispatch an inbound command to the stores.

        Recognized fields, applied in this order: ``payload`` and ``mode`` (mode),
        ``temperature`` (temperature tracker), ``setpoint``, ``override``, ``action``.
        """

        if "payload" in command:
            self.set_mode(command["payload"])
        if "mode" in command:
            self.set_mode(command["mode"])
        if "temperature" in command:
            self.update_temperature(command["temperature"])
        if "setpoint" in command:
            self.set_setpoint(command["setpoint"])
        if "override" in command:
            self.set_override(command["override"])
        if "action" in command:
            self.set_action(command["action"])

    #
    # handle_transport_message
    #
    def handle_transport_message(self, topic: str, payload: Any) -> None:
        """Dispatch a transport message by topic suffix."""

        if topic.endswith(TOPIC_SUFFIX_MODE_SET):
            self.set_mode(payload)
        elif topic.endswith(TOPIC_SUFFIX_TEMPERATURE_SET):
            self.set_setpoint(payload)

    # ------------------------------------------------------------------
    # Evaluation cycle
    # ------------------------------------------------------------------

    #
    # evaluate
    #
    def evaluate(self) -> ClimateUpdate:
        """Run one evaluation tick and return the resulting update.

        During startup, or while advertising without liveness, the tick only
        refreshes status; a status publish is still attempted so that liveness
        can be re-established.
        """

        now = self._clock()

        connected = is_connected(self._last_sent, now, self._config.keep_alive)
        if self._starting or (self.advertising and not connected):
            self._logger.debug("Skipping evaluation (starting=%s, connected=%s)", self._starting, connected)
            if not self._starting:
                self._publish_status(now)
            return self._build_update(now)

        action = self._compute_action(now)
        self._timers = self._timers.track(action, now)

        if run_limit_reached(self._timers, action, now, self._config.boost_duration):
            self._logger.debug("Run-length limit reached, suspending %s for this tick", action)
            # The next tick with the same demand starts a fresh run
            self._timers = self._timers.track(ClimateAction.NONE, now)
            action = ClimateAction.NONE

        self._action = action
        update = self._emit_update(now)
        self._publish_status(now)
        return update

    #
    # display_status
    #
    def display_status(self) -> DisplayStatus:
        """Return the status text and severity."""

        if self._mode is None:
            return DisplayStatus(
                text="connected" if self.is_connected() else "disconnected",
                severity=StatusSeverity.INFO,
            )

        if self._action == ClimateAction.HEATING:
            severity = StatusSeverity.HEATING
        elif self._action == ClimateAction.COOLING:
            severity = StatusSeverity.COOLING
        else:
            severity = StatusSeverity.IDLE
        return DisplayStatus(text=self._mode.value, severity=severity)

    def _compute_action(self, now: datetime) -> ClimateAction:
        mode = self.get_mode()
        if mode == ClimateMode.OFF or self._temperature.value is None:
            return ClimateAction.NONE

        action = calculate_action(
            self._temperature.value,
            self._target_setpoint(now),
            self.heat_setpoint,
            self.cool_setpoint,
            self._config.tolerance,
        )

        if action == ClimateAction.HEATING and not self._config.has_heating:
            return ClimateAction.NONE
        if action == ClimateAction.COOLING and not self._config.has_cooling:
            return ClimateAction.NONE
        return action

    def _build_update(self, now: datetime) -> ClimateUpdate:
        return ClimateUpdate(
            device_id=self._config.device_id,
            name=self._config.name,
            mode=self._mode,
            temperature=self._temperature.value,
            action=self._action,
            heat_setpoint=self.heat_setpoint,
            cool_setpoint=self.cool_setpoint,
            connected=is_connected(self._last_sent, now, self._config.keep_alive),
        )

    def _emit_update(self, now: datetime) -> ClimateUpdate:
        update = self._build_update(now)
        if self._on_update is not None:
            self._on_update(update)
        return update

    def _publish_status(self, now: datetime) -> None:
        # Not advertising
        if self._sink is None or self._config.base_topic is None:
            return

        topic = f"{self._config.base_topic}{TOPIC_SUFFIX_STATUS}"
        try:
            self._sink.publish(topic, self._build_update(now).as_payload())
        except StatusPublishError as err:
            self._logger.warning("Status publish to %s failed: %s", topic, err)
            return
        self._last_sent = now
