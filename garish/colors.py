from __future__ import annotations

from collections.abc import Mapping
import dataclasses
from dataclasses import dataclass
import enum
import re
from typing import TYPE_CHECKING, TypeAlias
import unicodedata

from pygments.formatters.terminal256 import EscapeSequence
from pygments.style import ansicolors
from wcwidth import wcswidth

if TYPE_CHECKING:
    from .file import FileWrapper

ColorValue: TypeAlias = int | str

NORMAL = "normal"
ANSI_PATTERN = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class ConfigurationError(ValueError): ...


class ColorToken(enum.StrEnum):
    FIELDNAME = "fieldname"
    TYPE = "type"
    OPERATOR = "operator"
    LITERAL = "literal"
    CONSTANT = "constant"
    NUMBER = "number"
    STRING = "string"
    COMMENT = "comment"
    UNDEF = "undef"
    LINENUMBER = "linenumber"


@dataclass(frozen=True, kw_only=True)
class ColorPreference:
    fieldname: ColorValue
    type: ColorValue
    operator: ColorValue

    # literal-like
    literal: ColorValue
    constant: ColorValue
    number: ColorValue
    string: ColorValue

    # comment-like
    comment: ColorValue
    undef: ColorValue
    linenumber: ColorValue

    def __getitem__(self, token: ColorToken) -> ColorValue:
        return getattr(self, str(token))


def default_colors_ansi() -> dict[ColorToken, ColorValue]:
    return {
        ColorToken.FIELDNAME: "ansibrightblue",
        ColorToken.TYPE: "ansigreen",
        ColorToken.OPERATOR: NORMAL,
        ColorToken.LITERAL: "ansiyellow",
        ColorToken.CONSTANT: "ansiyellow",
        ColorToken.NUMBER: NORMAL,
        ColorToken.STRING: "ansiyellow",
        ColorToken.COMMENT: "ansibrightblack",
        ColorToken.UNDEF: NORMAL,
        ColorToken.LINENUMBER: "ansibrightblack",
    }


def default_colors_256() -> dict[ColorToken, ColorValue]:
    return {
        ColorToken.FIELDNAME: 39,
        ColorToken.TYPE: 37,
        ColorToken.OPERATOR: 196,
        ColorToken.LITERAL: 140,
        ColorToken.CONSTANT: 99,
        ColorToken.NUMBER: 140,
        ColorToken.STRING: 180,
        ColorToken.COMMENT: 240,
        # undef is a constant
        ColorToken.UNDEF: 99,
        ColorToken.LINENUMBER: 240,
    }


def validate_token(key: str | ColorToken) -> ColorToken:
    try:
        return ColorToken(key)
    except ValueError:
        tokens = [str(token) for token in ColorToken]
        raise ConfigurationError(
            f"Unknown color token {key!r}. Please, choose one of {tokens}."
        ) from None


def validate_color(value: object) -> ColorValue:
    """Return the normalized color value or raise `ConfigurationError`.

    Integers select a color from the 256 color palette.
    Strings name an ANSI color, with or without the `ansi` prefix (`"blue"` or `"ansiblue"`),
    or `"normal"` to leave the color unchanged.
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid color {value!r}. Colors cannot be booleans.")
    if isinstance(value, int):
        if not 0 <= value <= 255:
            raise ConfigurationError(
                f"Invalid color {value!r}. Integer colors must be between 0 and 255 inclusive."
            )
        return value
    if isinstance(value, str):
        if value == NORMAL or value in ansicolors:
            return value
        if f"ansi{value}" in ansicolors:
            return f"ansi{value}"
        names = sorted(ansicolors | {NORMAL})
        raise ConfigurationError(f"Unknown color {value!r}. Please, choose one of {names}.")
    raise ConfigurationError(
        f"Invalid color {value!r}. Colors must be an integer or a string, "
        f"not {type(value).__name__}."
    )


def validate_overrides(
    overrides: Mapping[str | ColorToken, object],
) -> dict[ColorToken, ColorValue]:
    return {validate_token(key): validate_color(value) for key, value in overrides.items()}


def resolve(overrides: Mapping[str | ColorToken, object], file: FileWrapper) -> ColorPreference:
    """Merge `overrides` over the default theme supported by `file`."""
    colors = default_colors_256() if file.supports_color256 else default_colors_ansi()
    colors.update(validate_overrides(overrides))
    return ColorPreference(**{str(token): colors[token] for token in ColorToken})


def escape_sequence(color: ColorValue) -> EscapeSequence:
    if color == NORMAL:
        return EscapeSequence()
    return EscapeSequence(fg=color)


def strip_ansi(text: str) -> str:
    return ANSI_PATTERN.sub("", text)


def clean_string(string: str) -> str:
    return "".join(
        char
        for char in strip_ansi(string)
        if unicodedata.category(char)[0] != "C" and wcswidth(char) != -1
    )


def text_width(string: str) -> int:
    """Visible width of `string` in a terminal, ignoring escape sequences."""
    return wcswidth(clean_string(string))


def color_names() -> list[str]:
    return [field.name for field in dataclasses.fields(ColorPreference)]
