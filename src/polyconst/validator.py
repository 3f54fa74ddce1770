"""Validator: decides, per declared tag, whether the literal fits.

Integer tags take the literal's exact value or fail with a specific error.
Float tags take the exact decimal value correctly rounded (half to even) to
the tag's binary format; only rounding to infinity is an error, precision
loss and underflow are accepted silently.

Every tag of a declaration is checked, whatever happened to the tags before
it; all errors are handed to the reporter together.
"""

import keyword
import logging
from fractions import Fraction

from pydantic import BaseModel, ConfigDict

from .ast import Declaration
from .errors import (
    ConstantError,
    DuplicateTagError,
    KindMismatchError,
    LiteralKindError,
    LiteralOverflowError,
    NegativeToUnsignedError,
    ReservedNameError,
    UnknownTagError,
    ZeroToNonZeroError,
)
from .literals import NumericLiteral, parse_literal
from .registry import TypeRegistry, TypeTag, default_registry
from .reporter import ErrorReporter

logger = logging.getLogger(__name__)

# Module-level names a generated module binds or calls
GENERATED_MODULE_NAMES = frozenset(
    {
        "dataclass", "ClassVar", "Final", "numpy", "__all__",
        "int", "float", "str", "list", "tuple", "getattr", "TypeError",
    }
)  # fmt: skip


class TypedValue(BaseModel):
    """The literal rendered exactly in one tag's native form."""

    model_config = ConfigDict(frozen=True)

    tag: TypeTag
    value: int | float


class ValidatedConstant(BaseModel):
    """A declaration whose literal fits every declared tag."""

    model_config = ConfigDict(frozen=True)

    declaration: Declaration
    literal: NumericLiteral
    values: list[TypedValue]

    @property
    def name(self) -> str:
        return self.declaration.name

    @property
    def tags(self) -> list[TypeTag]:
        return [tv.tag for tv in self.values]

    def value_of(self, tag: str) -> int | float:
        for tv in self.values:
            if tv.tag.name == tag:
                return tv.value
        raise KeyError(f"{self.name} has no tag {tag!r}")


def round_to_format(x: Fraction, tag: TypeTag) -> Fraction | None:
    """Round a positive exact value to the nearest value of a float tag.

    Ties go to the even significand. Returns None when the result is
    infinite.
    """
    p = tag.mantissa_bits
    n, d = x.numerator, x.denominator

    # 2**e <= x < 2**(e + 1)
    e = n.bit_length() - d.bit_length()
    if Fraction(2) ** e > x:
        e -= 1
    # subnormals share the quantum of the smallest normal binade
    e = max(e, tag.min_exponent)

    quantum = Fraction(2) ** (e - p + 1)
    rounded = round(x / quantum) * quantum

    max_finite = (2 ** p - 1) * Fraction(2) ** (tag.max_exponent - p + 1)
    if rounded > max_finite:
        return None
    return rounded


def _check_integer(literal: NumericLiteral, tag: TypeTag) -> int:
    value = literal.value
    if value < 0 and not tag.signed:
        raise NegativeToUnsignedError(tag.name, literal.text)
    if value == 0 and tag.nonzero:
        raise ZeroToNonZeroError(tag.name)
    if not tag.min_value <= value <= tag.max_value:
        raise LiteralOverflowError(
            tag.name, literal.text, f"range is {tag.min_value}..={tag.max_value}"
        )
    return value


def _float_overflow(literal: NumericLiteral, tag: TypeTag) -> LiteralOverflowError:
    return LiteralOverflowError(
        tag.name, literal.text, f"rounds to infinity, max is {tag.max_finite!r}"
    )


def _check_float(literal: NumericLiteral, tag: TypeTag) -> float:
    zero = -0.0 if literal.negative else 0.0
    order = literal.decimal_order
    if order is None:
        return zero

    # 10**k > 2**(3k) for k > 0 and 10**k < 2**(3k) for k < 0, so these bounds
    # settle far-out exponents without building the exact value
    if 3 * order > tag.max_exponent:
        raise _float_overflow(literal, tag)
    if 3 * (order + 1) <= tag.min_exponent - tag.mantissa_bits:
        return zero

    rounded = round_to_format(abs(literal.value), tag)
    if rounded is None:
        raise _float_overflow(literal, tag)
    # exact: every f32/f64 value is a Python float
    stored = float(rounded)
    return -stored if literal.negative else stored


def check_tag(literal: NumericLiteral, tag: TypeTag) -> TypedValue:
    """Check one literal against one tag.

    Raises:
        KindMismatchError, LiteralOverflowError, NegativeToUnsignedError,
        ZeroToNonZeroError
    """
    if literal.kind is not tag.kind:
        raise KindMismatchError(tag.name, literal.kind.value, tag.kind.value)
    if tag.is_integer:
        return TypedValue(tag=tag, value=_check_integer(literal, tag))
    return TypedValue(tag=tag, value=_check_float(literal, tag))


class Validator:
    """Validates declarations against a type registry."""

    def __init__(self, registry: TypeRegistry | None = None):
        self.registry = registry or default_registry()
        self.reserved_names = GENERATED_MODULE_NAMES | {self.registry.numpy_alias} | {
            tag.native for tag in self.registry if tag.nonzero
        }

    def is_reserved(self, name: str) -> bool:
        return not name.isidentifier() or keyword.iskeyword(name) or name in self.reserved_names

    def check(self, declaration: Declaration) -> tuple[ValidatedConstant | None, list[ConstantError]]:
        """Run every check for one declaration.

        Returns the validated constant (None if anything failed) and the
        errors: a name error, then a literal error, then errors in tag order.
        """
        errors: list[ConstantError] = []
        if self.is_reserved(declaration.name):
            errors.append(ReservedNameError(declaration.name))

        literal = None
        try:
            literal = parse_literal(declaration.literal)
        except LiteralKindError as exc:
            errors.append(exc)

        seen: set[str] = set()
        values: list[TypedValue] = []
        for name in declaration.tags:
            if name in seen:
                errors.append(DuplicateTagError(name))
                continue
            seen.add(name)

            if name not in self.registry:
                errors.append(UnknownTagError(name))
                continue
            if literal is None:
                continue

            try:
                values.append(check_tag(literal, self.registry.get(name)))
            except ConstantError as exc:
                errors.append(exc)

        if errors:
            logger.debug("%s: %d error(s)", declaration.name, len(errors))
            return None, errors

        logger.debug("%s: fits %s", declaration.name, ", ".join(declaration.tags))
        return ValidatedConstant(declaration=declaration, literal=literal, values=values), []

    def validate(self, declaration: Declaration) -> ValidatedConstant:
        """Validate one declaration. Raises BuildError listing every failure."""
        return self.validate_all([declaration])[0]

    def validate_all(
        self, declarations: list[Declaration], reporter: ErrorReporter | None = None
    ) -> list[ValidatedConstant]:
        """Validate a whole build.

        Errors from every declaration are collected before failing; nothing
        is returned unless all declarations pass.
        """
        reporter = reporter or ErrorReporter()
        validated = []
        for declaration in declarations:
            constant, errors = self.check(declaration)
            if errors:
                reporter.report(declaration, errors)
            else:
                validated.append(constant)

        reporter.raise_if_errors()
        return validated
