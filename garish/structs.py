from collections.abc import Callable
import dataclasses
from typing import Any, TypeAlias

from . import defaults as defaults
from .colors import ColorToken, text_width
from .context import OutputContext, PrintKind
from .render import register_struct, render_inline

Field: TypeAlias = tuple[str, Callable[[], Any]]


def _attribute(obj: Any, name: str) -> Callable[[], Any]:
    return lambda: getattr(obj, name)


def struct_fields(obj: Any) -> list[Field]:
    """Return the name of each field of `obj` with a function that reads its value."""
    names: list[str]
    if dataclasses.is_dataclass(obj):
        names = [field.name for field in dataclasses.fields(obj) if field.repr]
    elif isinstance(obj, tuple) and hasattr(type(obj), "_fields"):
        names = list(type(obj)._fields)
    else:
        names = []
        for cls in reversed(type(obj).__mro__):
            slots = vars(cls).get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            names.extend(slot for slot in slots if slot not in ("__dict__", "__weakref__"))
        instance_dict = getattr(obj, "__dict__", {})
        names.extend(
            name
            for name in instance_dict
            if not (name.startswith("__") and name.endswith("__")) and name not in names
        )
    return [(name, _attribute(obj, name)) for name in names]


def _print_field(ctx: OutputContext, name: str, getter: Callable[[], Any]) -> None:
    ctx.print_token(ColorToken.FIELDNAME, name)
    ctx.print_operator("=")
    try:
        value = getter()
    except AttributeError:
        ctx.print_token(ColorToken.UNDEF, defaults.UNDEF_MESSAGE)
        return
    offset = text_width(name) + (1 if ctx.compact else 3)
    with ctx.entry(kind=PrintKind.STRUCT_FIELD, offset=offset):
        ctx.write(render_inline(ctx, value))


@register_struct
def render_struct(ctx: OutputContext, obj: Any) -> None:
    name = type(obj).__name__
    if not ctx.compact and ctx.max_indent_reached(text_width(name) + 1):
        render_struct(ctx.derive(ctx.file, compact=True), obj)
        return
    ctx.print_token(ColorToken.TYPE, name)
    ctx.write("(")
    with ctx.visit(obj) as first_visit:
        if not first_visit:
            ctx.write("...)")
            return
        fields = struct_fields(obj)
        if not fields:
            ctx.write(")")
            return
        if ctx.compact:
            for i, (field_name, getter) in enumerate(fields):
                if i > 0:
                    ctx.write(", ")
                _print_field(ctx, field_name, getter)
        else:
            ctx.write("\n")
            with ctx.next_level():
                for field_name, getter in fields:
                    ctx.print_indent()
                    _print_field(ctx, field_name, getter)
                    ctx.write(",\n")
            ctx.print_indent()
    ctx.write(")")
