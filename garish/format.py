from __future__ import annotations

from collections.abc import Iterable
import io
import sys
from typing import TYPE_CHECKING, Any, Literal
import warnings

from . import defaults as defaults
from .colors import ColorValue
from .config import CONFIG
from .context import OutputContext
from .file import FileWrapper
from .render import render

if TYPE_CHECKING:
    from _typeshed import SupportsWrite


def _render_values(ctx: OutputContext, values: Iterable[Any]) -> None:
    for value in values:
        render(ctx, value)
        ctx.write("\n")


def pprint(
    *values: Any,
    file: SupportsWrite[str] | FileWrapper | None = None,
    indent: int | Literal["config"] = "config",
    compact: bool | Literal["config"] = "config",
    displaysize: tuple[int, int] | None = None,
    show_indent: bool | Literal["config"] = "config",
    color: bool | Literal["auto"] | Literal["config"] = "config",
    **colors: ColorValue,
) -> None:
    """Pretty print objects to a file, each followed by a newline.

    Dataclasses, named tuples and plain objects are printed field by field,
    with special overrides for numbers, strings, sequences, mappings and sets.
    Everything else is printed with its `repr`.

    Args:
        *values (Any):
            The objects to pretty print.

        file (SupportsWrite[str] | FileWrapper | None, optional):
            The file to write to.
            If `None` is used, `sys.stdout` will be used.
            Wrap the file in a `FileWrapper` to force color on or off, or to set its display size or compact preference.
            Defaults to `None`.

        indent (int | Literal["config"], optional):
            The indent size when printing nested objects.
            If `"config"` is used, the indent is taken from local `garish.conf` files.
            Defaults to `"config"`.

        compact (bool | Literal["config"], optional):
            Whether to print everything on as few lines as possible.
            If `"config"` is used, this is taken from local `garish.conf` files, falling back to the preference of `file`.
            Defaults to `"config"`.

        displaysize (tuple[int, int] | None, optional):
            The (rows, columns) of the display, used as a hint for line wrapping.
            If `None` is used, this is calculated based on the `file` size (if `file` is a terminal).
            However, if `file` is not a terminal, a default of (24, 80) is used.
            Defaults to `None`.

        show_indent (bool | Literal["config"], optional):
            Whether to draw a guide in the first column of each indent.
            If `"config"` is used, this is taken from local `garish.conf` files.
            Defaults to `"config"`.

        color (bool | Literal["auto"] | Literal["config"], optional):
            Whether to use color when displaying the output.
            If `"config"` is used, highlighting is determined from local `garish.conf` files.
            If `"auto"` is used, this is calculated based on whether `file` is a terminal that supports color.
            A file that forcibly disables color is never colored.
            Defaults to `"config"`.

        **colors (ColorValue):
            Color overrides for each kind of token:
            `fieldname`, `type`, `operator`, `literal`, `constant`, `number`, `string`, `comment`, `undef` and `linenumber`.
            Each color is an integer between 0 and 255 inclusive (for terminals that support 256 colors),
            an ANSI color name such as `"blue"` or `"ansibrightblack"`, or `"normal"`.

    Raises:
        ConfigurationError: If a color override is invalid. Nothing is printed.
    """
    if color is False and colors:
        warnings.warn(
            f"`color` was set to {color!r}, but colors were given for {list(colors)}. "
            "The output will not be colored."
        )
    if file is None:
        file = sys.stdout
    wrapped_file = file if isinstance(file, FileWrapper) else FileWrapper(file)
    if color == "config":
        color = CONFIG.color
    if indent == "config":
        indent = CONFIG.indent
    if show_indent == "config":
        show_indent = CONFIG.show_indent
    if compact == "config":
        compact = CONFIG.compact or None
    if color == "auto":
        color = wrapped_file.color_enabled
    ctx = OutputContext.new(
        wrapped_file,
        indent=indent,
        compact=compact,
        displaysize=displaysize,
        show_indent=show_indent,
        color=color,
        colors=CONFIG.colors | colors,
    )
    with FileWrapper.lock(wrapped_file):
        _render_values(ctx, values)


def pformat(
    *values: Any,
    width: int = defaults.DEFAULT_WIDTH,
    indent: int = defaults.DEFAULT_INDENT,
    compact: bool = False,
    show_indent: bool = defaults.DEFAULT_SHOW_INDENT,
    color: bool = False,
    **colors: ColorValue,
) -> str:
    """Pretty print objects to a string, one object per line.

    Args:
        *values (Any):
            The objects to pretty print.

        width (int, optional):
            The display width used as a hint for line wrapping.
            Defaults to 80.

        indent (int, optional):
            The number of columns to use for indents when printing nested objects.
            Defaults to 2.

        compact (bool, optional):
            Whether to print everything on as few lines as possible.
            Defaults to `False`.

        show_indent (bool, optional):
            Whether to draw a guide in the first column of each indent.
            Defaults to `True`.

        color (bool, optional):
            Whether to embed color escape sequences in the output.
            Defaults to `False`.

        **colors (ColorValue):
            Color overrides for each kind of token, see `pprint`.
    """
    buffer = io.StringIO()
    wrapped_file = FileWrapper(buffer, displaysize=(defaults.DEFAULT_HEIGHT, width))
    ctx = OutputContext.new(
        wrapped_file,
        indent=indent,
        compact=compact,
        show_indent=show_indent,
        color=color,
        colors=colors,
    )
    _render_values(ctx, values)
    return buffer.getvalue().removesuffix("\n")
