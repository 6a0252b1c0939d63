import pytest

from src.timetable_export.colors import normalize_color, style_background_color


def test_rgb_converts_to_lowercase_hex():
    assert normalize_color("rgb(255,107,107)") == "#ff6b6b"
    assert normalize_color("rgb(0, 128, 255)") == "#0080ff"
    assert normalize_color("  RGB( 1 , 2 , 3 ) ") == "#010203"


def test_hex_is_returned_unchanged():
    assert normalize_color("#FF6B6B") == "#FF6B6B"
    assert normalize_color("#abc") == "#abc"


@pytest.mark.parametrize("raw", [None, "", "   ", "transparent", "Transparent"])
def test_empty_and_transparent_yield_none(raw):
    assert normalize_color(raw) is None


@pytest.mark.parametrize("raw", ["red", "hsl(0, 100%, 50%)", "rgb(1, 2)", "var(--accent)"])
def test_unrecognized_values_yield_none(raw):
    assert normalize_color(raw) is None


def test_rgba_is_accepted_unless_fully_transparent():
    assert normalize_color("rgba(255, 107, 107, 0.5)") == "#ff6b6b"
    assert normalize_color("rgba(0, 0, 0, 0)") is None


def test_components_above_255_are_clamped():
    assert normalize_color("rgb(300, 0, 0)") == "#ff0000"


def test_style_background_color():
    assert style_background_color("color: red; background-color: rgb(1, 2, 3)") == "rgb(1, 2, 3)"
    assert style_background_color("background-color:#ABCDEF !important;") == "#ABCDEF"
    assert style_background_color("background: url(x.png) #112233 no-repeat") == "#112233"
    assert style_background_color("border-color: rgb(1, 2, 3)") is None
    assert style_background_color(None) is None
