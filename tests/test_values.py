"""Tests for declaration values and their accessors."""

import pytest

from style_engine.css import Color, Keyword, Length, Unit


class TestLength:
    def test_pixels_ignore_reference(self):
        assert Length(12, Unit.PX).to_px(reference=500) == 12.0

    def test_percent_of_reference(self):
        assert Length(50, Unit.PERCENT).to_px(reference=300) == 150.0

    def test_percent_without_reference_is_zero(self):
        assert Length(50, Unit.PERCENT).to_px() == 0.0

    @pytest.mark.parametrize("length, text", [
        (Length(10, Unit.PX), "10px"),
        (Length(12.5, Unit.PX), "12.5px"),
        (Length(0.25, Unit.PERCENT), "0.25%"),
        (Length(0.00001, Unit.PX), "0.00001px"),
        (Length(1e-11, Unit.PX), "0.00000000001px"),
        (Length(2.5e-15, Unit.PERCENT), "0.0000000000000025%"),
        (Length(1e20, Unit.PX), "100000000000000000000px"),
    ])
    def test_to_css(self, length, text):
        assert length.to_css() == text

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_value_must_be_finite(self, value):
        with pytest.raises(ValueError):
            Length(value, Unit.PX)

    def test_equality_ignores_int_or_float(self):
        assert Length(10, Unit.PX) == Length(10.0, Unit.PX)
        assert Length(10, Unit.PX) != Length(10, Unit.PERCENT)


class TestColor:
    def test_to_css(self):
        assert Color(255, 0, 128).to_css() == "#FF0080"

    def test_alpha_defaults_to_opaque(self):
        assert Color(1, 2, 3) == Color(1, 2, 3, 255)

    def test_translucent_colour_cannot_be_serialized(self):
        with pytest.raises(ValueError):
            Color(0, 0, 0, 0).to_css()

    def test_channel_range_is_checked(self):
        with pytest.raises(ValueError):
            Color(256, 0, 0)

    def test_to_color_is_identity(self):
        color = Color(1, 2, 3)
        assert color.to_color() is color


class TestKeyword:
    def test_named_colour(self):
        assert Keyword("powderblue").to_color() == Color(176, 224, 230, 255)

    def test_named_colour_is_case_insensitive(self):
        assert Keyword("Red").to_color() == Color(255, 0, 0, 255)

    def test_transparent(self):
        assert Keyword("transparent").to_color() == Color(0, 0, 0, 0)

    def test_non_colour_keyword(self):
        assert Keyword("auto").to_color() is None

    def test_current_color_is_unresolved(self):
        assert Keyword("currentColor").to_color() is None

    def test_length_is_not_a_colour(self):
        assert Length(1, Unit.PX).to_color() is None


class TestValueEquality:
    def test_different_variants_are_unequal(self):
        assert Keyword("red") != Color(255, 0, 0)

    def test_values_are_hashable(self):
        assert len({Keyword("a"), Keyword("a"), Length(1, Unit.PX)}) == 2
