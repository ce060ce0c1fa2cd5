from collections import Counter, OrderedDict, defaultdict, deque
from collections.abc import Callable, Iterable, Mapping
import types
from typing import Any, TypeAlias

from .colors import ColorToken, text_width
from .context import OutputContext
from .render import register, render_inline

Item: TypeAlias = Callable[[OutputContext], None]


def render_child(ctx: OutputContext, obj: Any, *, offset: int = 0) -> str:
    with ctx.entry(offset=offset):
        return render_inline(ctx, obj)


def element(obj: Any) -> Item:
    def print_element(ctx: OutputContext) -> None:
        ctx.write(render_child(ctx, obj))

    return print_element


def pair(key: Any, value: Any) -> Item:
    def print_pair(ctx: OutputContext) -> None:
        key_text = render_child(ctx, key)
        ctx.write(key_text)
        ctx.print_token(ColorToken.OPERATOR, ":")
        ctx.write(" ")
        *previous_lines, last_line = key_text.split("\n")
        offset = text_width(last_line) + 2
        if previous_lines:
            offset -= ctx.indent * ctx.state.level
        ctx.write(render_child(ctx, value, offset=max(offset, 0)))

    return print_pair


class Brackets:
    def __init__(
        self,
        open: str,
        close: str,
        *,
        name: str | None = None,
        argument: Item | None = None,
        show_braces_when_empty: bool = False,
    ) -> None:
        self._open = open
        self._close = close
        self._name = name
        self._argument = argument
        self._show_braces_when_empty = show_braces_when_empty

    def print_open(self, ctx: OutputContext) -> None:
        if self._name is not None:
            ctx.print_token(ColorToken.TYPE, self._name)
            ctx.write("(")
        if self._argument is not None:
            self._argument(ctx)
            ctx.write(", ")
        ctx.write(self._open)

    def print_close(self, ctx: OutputContext) -> None:
        ctx.write(self._close)
        if self._name is not None:
            ctx.write(")")

    def print_empty(self, ctx: OutputContext) -> None:
        if self._name is not None and not self._show_braces_when_empty:
            ctx.print_token(ColorToken.TYPE, self._name)
            ctx.write("()")
        else:
            self.print_open(ctx)
            self.print_close(ctx)

    def width(self) -> int:
        width = len(self._open) + len(self._close)
        if self._name is not None:
            width += len(self._name) + 2
        return width


def _print_flat(
    ctx: OutputContext, brackets: Brackets, items: list[Item], *, trailing_comma: bool
) -> None:
    brackets.print_open(ctx)
    for i, item in enumerate(items):
        if i > 0:
            ctx.write(", ")
        item(ctx)
    if trailing_comma:
        ctx.write(",")
    brackets.print_close(ctx)


def render_items(
    ctx: OutputContext,
    obj: Any,
    brackets: Brackets,
    items: list[Item],
    *,
    trailing_comma: bool = False,
) -> None:
    """Print `items` on one line if they fit, otherwise one item per line."""
    if not items:
        brackets.print_empty(ctx)
        return
    if not ctx.compact and ctx.max_indent_reached(brackets.width()):
        render_items(
            ctx.derive(ctx.file, compact=True),
            obj,
            brackets,
            items,
            trailing_comma=trailing_comma,
        )
        return
    with ctx.visit(obj) as first_visit:
        if not first_visit:
            brackets.print_open(ctx)
            ctx.write("...")
            brackets.print_close(ctx)
            return
        if ctx.compact:
            _print_flat(ctx, brackets, items, trailing_comma=trailing_comma)
            return
        flat = ctx.capture(
            lambda child: _print_flat(child, brackets, items, trailing_comma=trailing_comma),
            compact=True,
        )
        if "\n" not in flat and ctx.indentation_column() + text_width(flat) < ctx.display_width:
            ctx.write(flat)
            return
        brackets.print_open(ctx)
        ctx.write("\n")
        with ctx.next_level():
            for item in items:
                ctx.print_indent()
                item(ctx)
                ctx.write(",\n")
        ctx.print_indent()
        brackets.print_close(ctx)


def _type_name(obj: Any, base_cls: type[Any]) -> str | None:
    obj_cls = type(obj)
    if obj_cls is base_cls:
        return None
    return obj_cls.__name__


def _elements(obj: Iterable[Any]) -> list[Item]:
    return [element(sub_obj) for sub_obj in obj]


def _pairs(items: Iterable[tuple[Any, Any]]) -> list[Item]:
    return [pair(key, value) for key, value in items]


@register(list)
def render_list(ctx: OutputContext, obj: list[Any]) -> None:
    render_items(ctx, obj, Brackets("[", "]"), _elements(obj))


@register(tuple)
def render_tuple(ctx: OutputContext, obj: tuple[Any, ...]) -> None:
    render_items(ctx, obj, Brackets("(", ")"), _elements(obj), trailing_comma=len(obj) == 1)


@register(deque)
def render_deque(ctx: OutputContext, obj: deque[Any]) -> None:
    brackets = Brackets("[", "]", name=type(obj).__name__, show_braces_when_empty=True)
    render_items(ctx, obj, brackets, _elements(obj))


@register(defaultdict)
def render_defaultdict(ctx: OutputContext, obj: defaultdict[Any, Any]) -> None:
    brackets = Brackets(
        "{",
        "}",
        name=type(obj).__name__,
        argument=element(obj.default_factory),
        show_braces_when_empty=True,
    )
    render_items(ctx, obj, brackets, _pairs(obj.items()))


@register(Counter)
def render_counter(ctx: OutputContext, obj: Counter[Any]) -> None:
    items: Iterable[tuple[Any, Any]]
    try:
        items = obj.most_common()
    except TypeError:
        items = obj.items()
    render_items(ctx, obj, Brackets("{", "}", name=type(obj).__name__), _pairs(items))


@register(OrderedDict)
def render_ordered_dict(ctx: OutputContext, obj: OrderedDict[Any, Any]) -> None:
    render_items(ctx, obj, Brackets("{", "}", name=type(obj).__name__), _pairs(obj.items()))


@register(dict)
def render_dict(ctx: OutputContext, obj: dict[Any, Any]) -> None:
    brackets = Brackets("{", "}", name=_type_name(obj, dict), show_braces_when_empty=True)
    render_items(ctx, obj, brackets, _pairs(obj.items()))


@register(types.MappingProxyType)
def render_mappingproxy(ctx: OutputContext, obj: Mapping[Any, Any]) -> None:
    brackets = Brackets("{", "}", name="mappingproxy", show_braces_when_empty=True)
    render_items(ctx, obj, brackets, _pairs(obj.items()))


@register(set)
def render_set(ctx: OutputContext, obj: set[Any]) -> None:
    # An empty set has no literal.
    name = _type_name(obj, set) if obj else type(obj).__name__
    render_items(ctx, obj, Brackets("{", "}", name=name), _elements(obj))


@register(frozenset)
def render_frozenset(ctx: OutputContext, obj: frozenset[Any]) -> None:
    render_items(ctx, obj, Brackets("{", "}", name=type(obj).__name__), _elements(obj))
