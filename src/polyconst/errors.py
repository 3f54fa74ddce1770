"""Structured errors raised while validating a constant declaration.

Each error names the tag (and value, where one applies) it was raised for.
The validator collects them per declaration instead of stopping at the first
one; the reporter attaches the owning declaration and orders them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ast import Declaration


class ConstantError(Exception):
    """Base class for every declaration-level validation failure."""

    code = "PC000"

    def __init__(self, msg: str, tag: str | None = None, value: object = None):
        super().__init__(msg)
        self.msg = msg
        self.tag = tag
        self.value = value
        self.declaration: Declaration | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tag={self.tag!r}, msg={self.msg!r})"


class LiteralKindError(ConstantError):
    """The literal is not a bare decimal literal (suffix, other base, junk)."""

    code = "PC001"

    def __init__(self, text: str, reason: str):
        super().__init__(f"invalid literal {text!r}: {reason}", value=text)
        self.text = text


class DuplicateTagError(ConstantError):
    code = "PC002"

    def __init__(self, tag: str):
        super().__init__(f"tag '{tag}' is declared more than once", tag=tag)


class KindMismatchError(ConstantError):
    code = "PC003"

    def __init__(self, tag: str, literal_kind: str, tag_kind: str):
        super().__init__(
            f"{literal_kind} literal cannot be stored in {tag_kind} tag '{tag}'", tag=tag
        )


class LiteralOverflowError(ConstantError):
    """Literal is outside the tag's range (integers) or rounds to infinity (floats)."""

    code = "PC004"

    def __init__(self, tag: str, value: object, bound: str = ""):
        msg = f"literal {value} overflows '{tag}'"
        if bound:
            msg += f" ({bound})"
        super().__init__(msg, tag=tag, value=value)


class NegativeToUnsignedError(ConstantError):
    code = "PC005"

    def __init__(self, tag: str, value: object):
        super().__init__(
            f"negative literal {value} cannot be stored in unsigned tag '{tag}'",
            tag=tag,
            value=value,
        )


class ZeroToNonZeroError(ConstantError):
    code = "PC006"

    def __init__(self, tag: str):
        super().__init__(f"zero cannot be stored in nonzero tag '{tag}'", tag=tag, value=0)


class UnknownTagError(ConstantError):
    code = "PC007"

    def __init__(self, tag: str):
        super().__init__(f"unknown numeric tag '{tag}'", tag=tag)


class ReservedNameError(ConstantError):
    """The constant name is a Python keyword or clashes with a name the generated module uses."""

    code = "PC008"

    def __init__(self, name: str):
        super().__init__(f"'{name}' cannot be used as a constant name", value=name)


class BuildError(Exception):
    """One or more declarations failed validation. Carries every error, in order."""

    def __init__(self, errors: list[ConstantError]):
        self.errors = list(errors)
        noun = "error" if len(self.errors) == 1 else "errors"
        lines = [f"{len(self.errors)} {noun} in constant declarations"]
        for err in self.errors:
            where = f"{err.declaration.name}: " if err.declaration is not None else ""
            lines.append(f"  [{err.code}] {where}{err.msg}")
        super().__init__("\n".join(lines))
