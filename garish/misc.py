import enum
import os.path
import types
from typing import Any

from .colors import ColorToken
from .context import OutputContext
from .render import register


@register(enum.Enum)
def render_enum(ctx: OutputContext, obj: enum.Enum) -> None:
    ctx.print_token(ColorToken.CONSTANT, f"{type(obj).__name__}.{obj.name}")


@register(str, bytes, bytearray)
def render_string(ctx: OutputContext, obj: str | bytes | bytearray) -> None:
    ctx.print_token(ColorToken.STRING, repr(obj))


@register(types.NoneType, types.EllipsisType, types.NotImplementedType)
def render_constant(ctx: OutputContext, obj: Any) -> None:
    ctx.print_token(ColorToken.CONSTANT, repr(obj))


@register(types.CodeType)
def render_code(ctx: OutputContext, obj: types.CodeType) -> None:
    ctx.write("<")
    ctx.print_token(ColorToken.TYPE, "code")
    ctx.write(f" {obj.co_qualname} ")
    location = f"{os.path.basename(obj.co_filename)}:{obj.co_firstlineno}"
    ctx.print_token(ColorToken.LINENUMBER, location)
    ctx.write(">")
