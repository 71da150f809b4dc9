"""Unit tests for config.py.

Tests cover:
- ConfKeys enum: all members defined and unique.
- CONF_SPECS registry: all ConfKeys have specs, converters work, defaults are typed.
- resolve(): produces correct defaults, merges overrides, handles coercion/fallback.
- resolve_entry(): works with objects having an ``options`` attribute.
- ResolvedConfig: generic access, as_enum_dict.
- get_runtime_configurable_keys(): returns expected set.
- build_engine_config(): durations, identity, topic handling.
"""

from __future__ import annotations

from dataclasses import fields
from datetime import timedelta
from types import SimpleNamespace

import pytest

from custom_components.zone_climate.climate_engine import ClimateType
from custom_components.zone_climate.config import (
    CONF_SPECS,
    ConfKeys,
    ResolvedConfig,
    build_engine_config,
    get_runtime_configurable_keys,
    resolve,
    resolve_entry,
)
from custom_components.zone_climate.const import (
    DEFAULT_COOL_SETPOINT,
    DEFAULT_CYCLE_DELAY_SECONDS,
    DEFAULT_HEAT_SETPOINT,
    DEFAULT_KEEP_ALIVE_MINUTES,
    DEFAULT_MAX_TEMP,
    DEFAULT_MIN_TEMP,
    DEFAULT_TOLERANCE,
    DEFAULT_TOPIC,
)

# ---------------------------------------------------------------------------
# ConfKeys
# ---------------------------------------------------------------------------


class TestConfKeys:
    """Test ConfKeys enum completeness and uniqueness."""

    def test_all_keys_unique(self) -> None:
        """All ConfKeys values are unique strings."""

        values = [k.value for k in ConfKeys]
        assert len(values) == len(set(values))

    def test_every_key_has_spec(self) -> None:
        """Every ConfKeys member has an entry in CONF_SPECS."""

        for key in ConfKeys:
            assert key in CONF_SPECS, f"Missing CONF_SPECS entry for {key}"

    def test_key_count_matches(self) -> None:
        """ConfKeys and CONF_SPECS have the same number of entries."""

        assert len(ConfKeys) == len(CONF_SPECS)


# ---------------------------------------------------------------------------
# CONF_SPECS
# ---------------------------------------------------------------------------


class TestConfSpecs:
    """Test CONF_SPECS registry defaults and converters."""

    def test_defaults_not_none(self) -> None:
        """No spec has a None default."""

        for key, spec in CONF_SPECS.items():
            assert spec.default is not None, f"{key} has None default"

    def test_bool_converter(self) -> None:
        """Bool converter handles various inputs."""

        spec = CONF_SPECS[ConfKeys.ADVERTISE]
        assert spec.converter(True) is True
        assert spec.converter("false") is False
        assert spec.converter("on") is True
        assert spec.converter("no") is False
        assert spec.converter(0) is False

    def test_float_converter(self) -> None:
        """Float converter handles ints and strings."""

        spec = CONF_SPECS[ConfKeys.TOLERANCE]
        assert spec.converter(1) == 1.0
        assert spec.converter("0.3") == 0.3
        assert isinstance(spec.converter(1), float)

    def test_int_converter(self) -> None:
        """Int converter handles floats and strings."""

        spec = CONF_SPECS[ConfKeys.CYCLE_DELAY]
        assert spec.converter(30.0) == 30
        assert spec.converter("120") == 120

    def test_climate_type_converter(self) -> None:
        """Climate type is normalized and validated."""

        spec = CONF_SPECS[ConfKeys.CLIMATE_TYPE]
        assert spec.converter(" HEAT ") == "heat"
        with pytest.raises(ValueError):
            spec.converter("radiant")


# ---------------------------------------------------------------------------
# resolve()
# ---------------------------------------------------------------------------


class TestResolve:
    """Test the resolve() function."""

    def test_all_defaults(self) -> None:
        """Resolve with no overrides yields all defaults."""

        resolved = resolve(None)
        assert resolved.climate_type == ClimateType.BOTH.value
        assert resolved.temp_sensor == ""
        assert resolved.tolerance == DEFAULT_TOLERANCE
        assert resolved.min_temp == DEFAULT_MIN_TEMP
        assert resolved.max_temp == DEFAULT_MAX_TEMP
        assert resolved.default_heat_setpoint == DEFAULT_HEAT_SETPOINT
        assert resolved.default_cool_setpoint == DEFAULT_COOL_SETPOINT
        assert resolved.keep_alive == DEFAULT_KEEP_ALIVE_MINUTES
        assert resolved.cycle_delay == DEFAULT_CYCLE_DELAY_SECONDS
        assert resolved.advertise is False
        assert resolved.topic == DEFAULT_TOPIC

    def test_empty_dict_defaults(self) -> None:
        """Resolve with empty dict is equivalent to None."""

        resolved = resolve({})
        default = resolve(None)

        for field in fields(ResolvedConfig):
            assert getattr(resolved, field.name) == getattr(default, field.name)

    def test_override_multiple(self) -> None:
        """Override multiple keys."""

        resolved = resolve({"climate_type": "cool", "tolerance": 0.2, "cycle_delay": 30, "advertise": True})
        assert resolved.climate_type == "cool"
        assert resolved.tolerance == 0.2
        assert resolved.cycle_delay == 30
        assert resolved.advertise is True
        # Others still default
        assert resolved.min_temp == DEFAULT_MIN_TEMP

    def test_coercion_string_to_float(self) -> None:
        """String values are coerced to correct types."""

        resolved = resolve({"max_temp": "28.5"})
        assert resolved.max_temp == 28.5
        assert isinstance(resolved.max_temp, float)

    def test_bad_value_falls_back_to_default(self) -> None:
        """Un-convertible values fall back to the coerced default."""

        resolved = resolve({"tolerance": "not_a_number", "climate_type": "radiant"})
        assert resolved.tolerance == DEFAULT_TOLERANCE
        assert resolved.climate_type == "both"

    def test_empty_topic_is_kept(self) -> None:
        """An empty topic is a valid value (transport disabled)."""

        assert resolve({"topic": ""}).topic == ""

    def test_unknown_keys_ignored(self) -> None:
        """Extra keys in options are silently ignored."""

        resolved = resolve({"unknown_key": "value", "tolerance": 1.0})
        assert resolved.tolerance == 1.0

    def test_resolved_config_frozen(self) -> None:
        """ResolvedConfig is frozen (immutable)."""

        resolved = resolve(None)
        with pytest.raises(AttributeError):
            resolved.advertise = True  # type: ignore[misc]


# ---------------------------------------------------------------------------
# resolve_entry()
# ---------------------------------------------------------------------------


class TestResolveEntry:
    """Test resolve_entry() with entry-like objects."""

    def test_with_options(self) -> None:
        """Resolves settings from entry.options."""

        entry = SimpleNamespace(options={"tolerance": 0.8})
        assert resolve_entry(entry).tolerance == 0.8

    def test_no_options(self) -> None:
        """Missing options attribute falls back to defaults."""

        assert resolve_entry(SimpleNamespace()).tolerance == DEFAULT_TOLERANCE

    def test_none_options(self) -> None:
        """None options falls back to defaults."""

        assert resolve_entry(SimpleNamespace(options=None)).advertise is False


# ---------------------------------------------------------------------------
# ResolvedConfig methods
# ---------------------------------------------------------------------------


class TestResolvedConfig:
    """Test ResolvedConfig access methods."""

    def test_get_by_confkey(self) -> None:
        """Generic get() access works for all keys."""

        resolved = resolve({"swap_delay": 5})
        assert resolved.get(ConfKeys.SWAP_DELAY) == 5.0

    def test_as_enum_dict_all_keys(self) -> None:
        """as_enum_dict() includes all ConfKeys."""

        d = resolve(None).as_enum_dict()
        assert set(d.keys()) == set(ConfKeys)
        assert d[ConfKeys.ADVERTISE] is False

    def test_field_count_matches_confkeys(self) -> None:
        """ResolvedConfig has the same number of fields as ConfKeys members."""

        assert len(fields(ResolvedConfig)) == len(ConfKeys)


# ---------------------------------------------------------------------------
# get_runtime_configurable_keys()
# ---------------------------------------------------------------------------


class TestRuntimeConfigurableKeys:
    """Test get_runtime_configurable_keys()."""

    def test_only_advertise(self) -> None:
        """Only the advertise flag can change without a reload."""

        assert get_runtime_configurable_keys() == {"advertise"}


# ---------------------------------------------------------------------------
# build_engine_config()
# ---------------------------------------------------------------------------


class TestBuildEngineConfig:
    """Test conversion to the engine's configuration."""

    def test_durations_and_identity(self) -> None:
        """Durations become timedeltas; identity is derived from the name and topic."""

        resolved = resolve({"keep_alive": 5, "cycle_delay": 30, "swap_delay": 0, "topic": "Home/Climate/"})
        config = build_engine_config(resolved, "Living Room", "entry123")

        assert config.name == "Living Room"
        assert config.device_id == "living-room-climate"
        assert config.base_topic == "home/climate/living-room-climate"
        assert config.keep_alive == timedelta(minutes=5)
        assert config.cycle_delay == timedelta(seconds=30)
        assert config.swap_delay == timedelta(0)
        assert config.boost_duration == timedelta(minutes=60)
        assert config.climate_type == ClimateType.BOTH

    def test_empty_topic_disables_transport(self) -> None:
        """An empty topic yields no base topic."""

        config = build_engine_config(resolve({"topic": ""}), "Office", "entry123")

        assert config.base_topic is None

    def test_blank_name_uses_entry_id(self) -> None:
        """A blank title falls back to the entry ID."""

        config = build_engine_config(resolve(None), "", "entry123")

        assert config.name == "entry123"
        assert config.device_id == "entry123-climate"
