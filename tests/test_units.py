"""Tests for length units."""

import pytest

from bosun.units import Fathoms, Feet, Meters


class TestConversion:
    """Test conversion between units."""

    def test_feet_to_meters(self):
        assert Feet(10).in_meters.value == pytest.approx(3.048)

    def test_fathom_is_six_feet(self):
        assert Fathoms(1).in_feet == Feet(6)
        assert Fathoms(1).in_meters.value == pytest.approx(1.8288)

    def test_meters_round_trip(self):
        depth = Meters(4.08)
        assert depth.in_feet.in_meters.value == pytest.approx(4.08)
        assert depth.in_fathoms.in_meters.value == pytest.approx(4.08)

    def test_identity_conversions(self):
        assert Meters(2).in_meters == Meters(2)
        assert Feet(2).in_feet == Feet(2)
        assert Fathoms(2).in_fathoms == Fathoms(2)


class TestValues:
    """Test value semantics."""

    def test_meters_are_ordered(self):
        assert Meters(3.9) < Meters(4.0)
        assert min(Meters(4.08), Meters(4.05), Meters(4.1)) == Meters(4.05)

    def test_values_are_immutable(self):
        depth = Meters(4.0)
        with pytest.raises(AttributeError):
            depth.value = 5.0

    def test_feet_and_inches(self):
        depth = Feet(13.5)
        assert depth.feet == 13
        assert depth.inches == 6
        assert str(depth) == "13' 6\""
