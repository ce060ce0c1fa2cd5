from decimal import Decimal
from fractions import Fraction
import math

from .colors import ColorToken
from .context import OutputContext
from .render import register


@register(bool)
def render_bool(ctx: OutputContext, obj: bool) -> None:
    ctx.print_token(ColorToken.LITERAL, repr(obj))


@register(int, float)
def render_real(ctx: OutputContext, obj: int | float) -> None:
    ctx.print_token(ColorToken.NUMBER, repr(obj))


@register(Decimal)
def render_decimal(ctx: OutputContext, obj: Decimal) -> None:
    ctx.print_token(ColorToken.NUMBER, str(obj))


@register(complex)
def render_complex(ctx: OutputContext, obj: complex) -> None:
    ctx.print_token(ColorToken.NUMBER, repr(obj.real))
    negative = math.copysign(1.0, obj.imag) < 0
    ctx.print_operator("-" if negative else "+")
    ctx.print_token(ColorToken.NUMBER, f"{abs(obj.imag)!r}j")


@register(Fraction)
def render_fraction(ctx: OutputContext, obj: Fraction) -> None:
    ctx.print_token(ColorToken.NUMBER, repr(obj.numerator))
    ctx.print_operator("/")
    ctx.print_token(ColorToken.NUMBER, repr(obj.denominator))
