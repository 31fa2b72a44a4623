"""
Contract Tests
==============

Value types, structured errors, echo guard and configuration.

INVARIANTS TESTED:
1. PositionValue is immutable, float-normalized and holds at most 3 components
2. Errors carry their ErrorCode and context
3. The echo guard emits iff the stored value is absent or differs
4. Configuration overrides come from the environment mapping
"""

from dataclasses import FrozenInstanceError

import pytest
from hypothesis import given, strategies as st

from graphview.config import DEFAULT_CONFIG, ViewConfig
from graphview.contracts import (
    ErrorCode, Error, InvalidPositionError, PositionValue, Units, as_predicate
)
from graphview.graphic import EchoGuard


class TestPositionValue:

    def test_integer_and_float_components_compare_equal(self):
        assert PositionValue.of(1, 2, 3) == PositionValue.of(1.0, 2.0, 3.0)

    def test_units_take_part_in_equality(self):
        assert PositionValue.of(1, 2, units=Units.PX) != PositionValue.of(1, 2)

    def test_missing_components_read_as_zero(self):
        value = PositionValue.of(4)
        assert value.value_count == 1
        assert value.xyz() == (4.0, 0.0, 0.0)
        assert value.get(7) == 0.0

    def test_too_many_components(self):
        with pytest.raises(InvalidPositionError) as info:
            PositionValue.of(1, 2, 3, 4)
        assert info.value.error.code is ErrorCode.INVALID_POSITION

    def test_units_must_be_enum(self):
        with pytest.raises(InvalidPositionError):
            PositionValue("px", (1.0,))

    def test_immutable(self):
        value = PositionValue.zero()
        with pytest.raises(FrozenInstanceError):
            value.units = Units.PX

    def test_str(self):
        assert str(PositionValue.of(0.5, 2)) == "(0.5, 2)gu"


class TestError:

    def test_context_is_appended_immutably(self):
        error = Error.create(ErrorCode.ELEMENT_EXISTS, "taken", node_id="A")
        extended = error.with_context("graph_id", "g")

        assert error.context == (("node_id", "A"),)
        assert extended.context == (("node_id", "A"), ("graph_id", "g"))
        assert extended.timestamp == error.timestamp

    def test_invalid_position_is_value_error(self):
        assert issubclass(InvalidPositionError, ValueError)


class TestEchoGuard:

    def test_absent_value_is_emitted(self):
        guard = EchoGuard({}.get)
        assert guard.should_emit("k", 1)
        assert guard.suppressed_count == 0

    def test_equal_value_is_suppressed(self):
        guard = EchoGuard({"k": 1}.get)
        assert not guard.should_emit("k", 1)
        assert guard.suppressed_count == 1

    def test_differing_value_is_emitted(self):
        store = {"k": 1}
        guard = EchoGuard(store.get)
        assert guard.should_emit("k", 2)
        assert guard.last_observed("k") == 1

    def test_lookup_is_live(self):
        store = {}
        guard = EchoGuard(store.get)
        store["k"] = "v"
        assert not guard.should_emit("k", "v")


@given(st.dictionaries(st.text(max_size=4), st.integers(), max_size=5),
       st.text(max_size=4), st.integers())
def test_echo_rule(store, key, value):
    guard = EchoGuard(store.get)
    expected = key not in store or store[key] != value
    assert guard.should_emit(key, value) is expected


class TestViewConfig:

    def test_defaults(self):
        assert DEFAULT_CONFIG.sprite_key("s1") == "ui.sprite.s1"
        assert DEFAULT_CONFIG.sprite_attribute_key("s1", "label") == "ui.sprite.s1.label"
        assert DEFAULT_CONFIG.default_units is Units.GU

    def test_from_env(self):
        config = ViewConfig.from_env({
            "GRAPHVIEW_SPRITE_PREFIX": "view.marker",
            "GRAPHVIEW_DEFAULT_UNITS": "PX",
            "GRAPHVIEW_LOG_LEVEL": "debug",
        })
        assert config.sprite_key("m") == "view.marker.m"
        assert config.default_units is Units.PX
        assert config.log_level == "DEBUG"

    def test_from_empty_env_is_default(self):
        assert ViewConfig.from_env({}) == ViewConfig()

    def test_invalid_units(self):
        with pytest.raises(ValueError):
            ViewConfig.from_env({"GRAPHVIEW_DEFAULT_UNITS": "miles"})

    def test_empty_prefix(self):
        with pytest.raises(ValueError):
            ViewConfig(sprite_prefix="")


class TestAsPredicate:

    def test_none_passes_through(self):
        assert as_predicate(None) is None

    def test_callable_wrapped(self):
        predicate = as_predicate(lambda attribute, value: value is None)
        assert predicate.matches("a", None)
        assert not predicate.matches("a", 0)

    def test_rejects_other_objects(self):
        with pytest.raises(TypeError):
            as_predicate("ui.")
