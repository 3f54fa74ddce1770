"""Literal parser: literal source text -> exact, kind-tagged value.

Accepted syntax is a bare decimal literal:

    literal  = sign? digits ("." digits?)? exponent?
    digits   = DIGIT (DIGIT | "_")*
    exponent = ("e" | "E") sign? digits

A literal with a decimal point or an exponent is a float literal, anything
else is an integer literal. Type suffixes (``0u32``, ``1.0f32``) and other
bases (``0x10``) are rejected with LiteralKindError.
"""

import re
from fractions import Fraction

from pydantic import BaseModel, ConfigDict

from .errors import LiteralKindError
from .registry import NumericKind

_DECIMAL = re.compile(
    r"(?P<sign>[+-])?"
    r"(?P<digits>[0-9][0-9_]*)"
    r"(?P<dot>\.(?P<fraction>[0-9][0-9_]*)?)?"
    r"(?:[eE](?P<exponent>[+-]?[0-9][0-9_]*))?"
)
_BASE_PREFIX = re.compile(r"[+-]?0[xXoObB]")
_SUFFIX = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# int(str) refuses strings longer than sys.get_int_max_str_digits()
_CHUNK_DIGITS = 1000


def digits_to_int(digits: str) -> int:
    """Convert a string of decimal digits of any length to an int."""
    value = 0
    for start in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[start : start + _CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


class NumericLiteral(BaseModel):
    """A parsed literal. ``value`` is exact: int for integers, Fraction for floats."""

    model_config = ConfigDict(frozen=True)

    text: str
    kind: NumericKind
    negative: bool = False
    digits: str  # integer part, separators removed
    fraction: str = ""
    exponent: int = 0

    @property
    def value(self) -> int | Fraction:
        """Exact value. Check ``decimal_order`` first for float literals with
        huge exponents, the Fraction grows with the exponent."""
        if self.kind is NumericKind.INTEGER:
            magnitude = digits_to_int(self.digits)
            return -magnitude if self.negative else magnitude
        mantissa = digits_to_int(self.digits + self.fraction)
        scale = self.exponent - len(self.fraction)
        magnitude = Fraction(mantissa) * Fraction(10) ** scale
        return -magnitude if self.negative else magnitude

    @property
    def decimal_order(self) -> int | None:
        """Power of ten of the leading nonzero digit, None for zero."""
        significant = (self.digits + self.fraction).lstrip("0")
        if not significant:
            return None
        return len(significant) - len(self.fraction) + self.exponent - 1

    @property
    def is_zero(self) -> bool:
        return self.decimal_order is None

    def __str__(self) -> str:
        return self.text


def parse_literal(text: str) -> NumericLiteral:
    """Parse literal text into a NumericLiteral.

    Raises:
        LiteralKindError: if the text is not a bare decimal literal.
    """
    source = text.strip()
    if not source:
        raise LiteralKindError(text, "empty literal")
    if _BASE_PREFIX.match(source):
        raise LiteralKindError(text, "only decimal literals are supported")

    m = _DECIMAL.match(source)
    if m is None:
        raise LiteralKindError(text, "not a decimal literal")

    rest = source[m.end():]
    if rest:
        if _SUFFIX.fullmatch(rest):
            raise LiteralKindError(text, f"type suffix '{rest}' is not allowed")
        raise LiteralKindError(text, "not a decimal literal")

    is_float = m.group("dot") is not None or m.group("exponent") is not None
    exponent = m.group("exponent")
    return NumericLiteral(
        text=source,
        kind=NumericKind.FLOAT if is_float else NumericKind.INTEGER,
        negative=m.group("sign") == "-",
        digits=m.group("digits").replace("_", ""),
        fraction=(m.group("fraction") or "").replace("_", ""),
        exponent=_exponent(exponent) if exponent else 0,
    )


def _exponent(text: str) -> int:
    text = text.replace("_", "")
    sign = -1 if text.startswith("-") else 1
    return sign * digits_to_int(text.lstrip("+-"))
