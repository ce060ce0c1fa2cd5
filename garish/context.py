from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
import contextlib
from dataclasses import dataclass, field
import enum
import io
from typing import Any, Self

from . import defaults as defaults
from .colors import ColorPreference, ColorToken, ConfigurationError, resolve, validate_overrides
from .file import FileWrapper


class PrintKind(enum.Enum):
    """Tells lower level printing what it is being printed as part of."""

    UNKNOWN = enum.auto()
    STRUCT_FIELD = enum.auto()


@dataclass
class PrintState:
    kind: PrintKind = PrintKind.UNKNOWN
    noindent_in_first_line: bool = False
    level: int = 0
    # Columns already used on the current line by whoever is printing the value,
    # e.g. the `name = ` before a field value.
    offset: int = 0
    visited: set[int] = field(default_factory=set)
    trailing_indent: bool = False


def _print(file: FileWrapper, *args: Any) -> None:
    file.write("".join(str(arg) for arg in args))


@dataclass(kw_only=True, eq=False)
class OutputContext:
    """The pretty printing preferences and state wrapped around a file.

    Attributes:
        file (FileWrapper): the file that is written to.
        indent (int): the indentation size.
        compact (bool): whether everything is printed on as few lines as possible.
        displaysize (tuple[int, int]): the (rows, columns) of the display.
        show_indent (bool): whether to draw the indentation guide.
        color (ColorPreference | None): the colors to use, or `None` for no color.
        state (PrintState): the state of the printer, shared with derived contexts.
    """

    file: FileWrapper
    indent: int
    compact: bool
    displaysize: tuple[int, int]
    show_indent: bool
    color: ColorPreference | None
    state: PrintState

    @classmethod
    def new(
        cls,
        file: FileWrapper,
        *,
        indent: int = defaults.DEFAULT_INDENT,
        compact: bool | None = None,
        displaysize: tuple[int, int] | None = None,
        show_indent: bool = defaults.DEFAULT_SHOW_INDENT,
        color: bool = True,
        colors: Mapping[str | ColorToken, object] | None = None,
    ) -> Self:
        if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
            raise ConfigurationError(
                f"Invalid indent {indent!r}. Indent must be a non-negative integer."
            )
        colors = colors or {}
        color_preference: ColorPreference | None
        if color and file.forced_color is not False:
            color_preference = resolve(colors, file)
        else:
            validate_overrides(colors)
            color_preference = None
        return cls(
            file=file,
            indent=indent,
            compact=file.compact if compact is None else compact,
            displaysize=file.displaysize if displaysize is None else displaysize,
            show_indent=show_indent,
            color=color_preference,
            state=PrintState(),
        )

    def derive(
        self, file: FileWrapper, *, indent: int | None = None, compact: bool | None = None
    ) -> Self:
        """Create a context writing to `file` that shares this context's state."""
        return type(self)(
            file=file,
            indent=self.indent if indent is None else indent,
            compact=self.compact if compact is None else compact,
            displaysize=self.displaysize,
            show_indent=self.show_indent,
            color=None if file.forced_color is False else self.color,
            state=self.state,
        )

    @property
    def display_width(self) -> int:
        _, width = self.displaysize
        return width

    def write(self, text: str) -> None:
        self.file.write(text)

    @contextlib.contextmanager
    def next_level(self) -> Iterator[None]:
        """Run the body of the `with` block one indentation level deeper."""
        self.state.level += 1
        try:
            yield
        finally:
            self.state.level -= 1

    @contextlib.contextmanager
    def entry(
        self,
        *,
        kind: PrintKind = PrintKind.UNKNOWN,
        offset: int = 0,
        noindent_in_first_line: bool = True,
    ) -> Iterator[None]:
        state = self.state
        previous = (state.kind, state.offset, state.noindent_in_first_line)
        state.kind, state.offset, state.noindent_in_first_line = (
            kind,
            offset,
            noindent_in_first_line,
        )
        try:
            yield
        finally:
            state.kind, state.offset, state.noindent_in_first_line = previous

    @contextlib.contextmanager
    def visit(self, obj: Any) -> Iterator[bool]:
        """Yield whether `obj` can be entered, `False` if it is already being printed."""
        key = id(obj)
        if key in self.state.visited:
            yield False
            return
        self.state.visited.add(key)
        try:
            yield True
        finally:
            self.state.visited.discard(key)

    def print_token(
        self,
        kind: ColorToken,
        *args: Any,
        write: Callable[..., None] = _print,
    ) -> None:
        """Print `args` as the given kind of token using `write(file, *args)`."""
        if self.color is None:
            write(self.file, *args)
            return
        with self.file.colored(self.color[kind]):
            write(self.file, *args)

    def print_operator(self, op: str) -> None:
        """Print an operator, such as `=` or `+`, padded with spaces unless compact."""
        if not self.compact:
            self.write(" ")
        self.print_token(ColorToken.OPERATOR, op)
        if not self.compact:
            self.write(" ")

    def print_indent(self) -> None:
        if self.compact or self.state.level <= 0:
            return
        if not self.show_indent:
            self.write(" " * (self.indent * self.state.level))
            return
        for _ in range(self.state.level):
            self.print_token(ColorToken.COMMENT, defaults.INDENT_GUIDE)
            self.write(" " * (self.indent - 1))

    def indentation_column(self) -> int:
        return self.indent * self.state.level + self.state.offset

    def max_indent_reached(self, offset: int) -> bool:
        return self.indentation_column() + offset > self.display_width

    def capture(self, fn: Callable[[Self], None], *, compact: bool | None = None) -> str:
        """Return what `fn` prints when given a derived context that writes to a buffer."""
        buffer = io.StringIO()
        fn(self.derive(FileWrapper(buffer), compact=compact))
        return buffer.getvalue()
