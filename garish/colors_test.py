import io
from typing import Any
from unittest import mock

import pytest

from .colors import (
    ColorPreference,
    ColorToken,
    ConfigurationError,
    color_names,
    default_colors_256,
    default_colors_ansi,
    escape_sequence,
    resolve,
    strip_ansi,
    text_width,
    validate_color,
)
from .file import FileWrapper


def test_color_preference_has_a_field_for_every_token() -> None:
    assert color_names() == [str(token) for token in ColorToken]


@pytest.mark.parametrize(
    "supports_color256, theme",
    [(False, default_colors_ansi()), (True, default_colors_256())],
)
def test_resolve_without_overrides_uses_detected_theme(
    supports_color256: bool, theme: dict[ColorToken, Any]
) -> None:
    with mock.patch.object(FileWrapper, "supports_color256", supports_color256):
        preference = resolve({}, FileWrapper(io.StringIO()))

    assert set(theme) == set(ColorToken)
    for token in ColorToken:
        assert preference[token] == theme[token]


def test_resolve_overrides_win() -> None:
    preference = resolve({"string": 45, ColorToken.TYPE: "red"}, FileWrapper(io.StringIO()))

    assert preference.string == 45
    assert preference.type == "ansired"
    assert preference.fieldname == default_colors_ansi()[ColorToken.FIELDNAME]


@pytest.mark.parametrize("color", [0, 255, "normal", "ansibrightblack", "brightblack", "cyan"])
def test_resolve_accepts_valid_colors(color: Any) -> None:
    preference = resolve({"comment": color}, FileWrapper(io.StringIO()))
    assert preference.comment == validate_color(color)


@pytest.mark.parametrize("color", [256, -1, 1000, "purple", True, 1.5, None])
def test_resolve_rejects_invalid_colors(color: Any) -> None:
    with pytest.raises(ConfigurationError):
        resolve({"comment": color}, FileWrapper(io.StringIO()))


def test_resolve_rejects_unknown_tokens() -> None:
    with pytest.raises(ConfigurationError, match=r"Unknown color token 'keyword'"):
        resolve({"keyword": 10}, FileWrapper(io.StringIO()))


def test_color_preference_is_immutable() -> None:
    preference = ColorPreference(**{str(token): 1 for token in ColorToken})
    with pytest.raises(AttributeError):
        preference.number = 2  # type: ignore


@pytest.mark.parametrize(
    "color, start, reset",
    [
        ("ansiyellow", "\x1b[33m", "\x1b[39m"),
        ("ansibrightblue", "\x1b[94m", "\x1b[39m"),
        (180, "\x1b[38;5;180m", "\x1b[39m"),
        (0, "\x1b[38;5;0m", "\x1b[39m"),
        ("normal", "", ""),
    ],
)
def test_escape_sequence(color: Any, start: str, reset: str) -> None:
    sequence = escape_sequence(color)
    assert sequence.color_string() == start
    assert sequence.reset_string() == reset


@pytest.mark.parametrize(
    "text, width",
    [
        ("hello", 5),
        ("\x1b[33mhello\x1b[39m", 5),
        ("日本", 4),
        ("│ a", 3),
        ("tab\there", 7),
    ],
)
def test_text_width(text: str, width: int) -> None:
    assert text_width(text) == width


def test_strip_ansi() -> None:
    assert strip_ansi("\x1b[38;5;39mname\x1b[39m = 1") == "name = 1"
