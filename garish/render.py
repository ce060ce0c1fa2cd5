from __future__ import annotations

from collections.abc import Callable
import dataclasses
from pprint import PrettyPrinter
import types
from typing import Any, TypeAlias, TypeVar

from . import defaults as defaults
from .colors import ColorToken
from .context import OutputContext

Renderer: TypeAlias = Callable[[OutputContext, Any], None]
RendererT = TypeVar("RendererT", bound=Renderer)

RENDERERS: list[tuple[type[Any], Renderer]] = []
STRUCT_RENDERERS: list[Renderer] = []


def register(*classes: type[Any]) -> Callable[[RendererT], RendererT]:
    """Register a renderer for instances of `classes`. Earlier registrations take priority."""

    def decorator(renderer: RendererT) -> RendererT:
        for base_cls in classes:
            RENDERERS.append((base_cls, renderer))
        return renderer

    return decorator


def register_struct(renderer: RendererT) -> RendererT:
    """Register the renderer used for structural values without a custom `__repr__`."""
    STRUCT_RENDERERS.insert(0, renderer)
    return renderer


def find_renderer(obj: Any) -> Renderer | None:
    obj_cls = type(obj)
    for base_cls, renderer in RENDERERS:
        # A subclass with its own `__repr__` knows better how to display itself.
        if isinstance(obj, base_cls) and obj_cls.__repr__ is base_cls.__repr__:
            return renderer
    return None


def _is_dataclass_repr(repr_fn: Any) -> bool:
    return hasattr(repr_fn, "__wrapped__") and "__create_fn__" in repr_fn.__wrapped__.__qualname__


def has_default_repr(cls: type[Any]) -> bool:
    """Whether `cls` only displays itself with a generated or generic `__repr__`."""
    repr_fn = cls.__repr__
    if repr_fn is object.__repr__:
        return True
    if dataclasses.is_dataclass(cls):
        return cls.__dataclass_params__.repr and _is_dataclass_repr(repr_fn)  # type: ignore
    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        return getattr(repr_fn, "__module__", None) == "collections"
    return False


def is_structural(obj: Any) -> bool:
    """Whether `obj` is an instance with named fields."""
    if isinstance(obj, type | types.ModuleType):
        return False
    if dataclasses.is_dataclass(obj):
        return True
    if isinstance(obj, tuple):
        return hasattr(type(obj), "_fields")
    if hasattr(obj, "__dict__"):
        return True
    return any("__slots__" in vars(cls) for cls in type(obj).__mro__[:-1])


def fallback_to_struct(obj: Any) -> bool:
    return bool(STRUCT_RENDERERS) and has_default_repr(type(obj)) and is_structural(obj)


def default_text(obj: Any, *, width: int, compact: bool) -> str:
    printer = PrettyPrinter(width=max(width, defaults.MIN_WIDTH), compact=compact)
    return printer.pformat(obj)


def render_default(ctx: OutputContext, obj: Any, *, width: int | None = None) -> None:
    if width is None:
        width = ctx.display_width
    ctx.write(default_text(obj, width=width, compact=ctx.compact))


def render(ctx: OutputContext, obj: Any) -> None:
    if isinstance(obj, type):
        text = default_text(obj, width=ctx.display_width, compact=ctx.compact)
        ctx.print_token(ColorToken.TYPE, text)
        return
    renderer = find_renderer(obj)
    if renderer is not None:
        renderer(ctx, obj)
    elif fallback_to_struct(obj):
        [struct_renderer, *_] = STRUCT_RENDERERS
        struct_renderer(ctx, obj)
    elif ctx.state.level > 0:
        render_within(ctx, obj)
    else:
        render_default(ctx, obj)


def render_within(ctx: OutputContext, obj: Any) -> None:
    """Print the default text of `obj`, indenting every line to the current level."""
    indentation = ctx.indentation_column()
    width = max(ctx.display_width - indentation, defaults.MIN_WIDTH)
    text = default_text(obj, width=width, compact=ctx.compact)
    for i, line in enumerate(text.split("\n")):
        if not (i == 0 and ctx.state.noindent_in_first_line):
            ctx.print_indent()
        ctx.file.write(line + "\n")
    # Leave the cursor aligned for whatever comes next.
    ctx.print_indent()
    ctx.state.trailing_indent = True


def render_inline(ctx: OutputContext, obj: Any, *, compact: bool | None = None) -> str:
    """Return the text of `obj` as a child of the current line.

    The trailing alignment left by `render_within` is removed,
    so the caller can continue the last line.
    """
    ctx.state.trailing_indent = False
    try:
        text = ctx.capture(lambda child: render(child, obj), compact=compact)
        if ctx.state.trailing_indent:
            text, _, _ = text.rpartition("\n")
    finally:
        ctx.state.trailing_indent = False
    return text
