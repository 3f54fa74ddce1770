"""Nonzero integer types used by generated constant modules.

numpy has no nonzero scalar types, so each ``nz_*`` tag is stored in a small
immutable wrapper around the plain representation. Construction rejects zero
and out-of-range values. ``nz_isize`` and ``nz_usize`` use the wrapper of the
fixed width they were generated for.
"""

from typing import Any, ClassVar

import numpy as np


class NonZero:
    """An integer known not to be zero."""

    __slots__ = ("_value",)

    base: ClassVar[Any]  # numpy scalar type, or int for 128-bit widths
    min_value: ClassVar[int]
    max_value: ClassVar[int]

    def __init__(self, value: Any):
        as_int = int(value)
        if as_int == 0:
            raise ValueError(f"{type(self).__name__} cannot hold zero")
        if not self.min_value <= as_int <= self.max_value:
            raise ValueError(
                f"{as_int} is out of range for {type(self).__name__} "
                f"({self.min_value}..={self.max_value})"
            )
        object.__setattr__(self, "_value", self.base(as_int))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def get(self) -> Any:
        """The wrapped value, in its plain representation."""
        return self._value

    def __int__(self) -> int:
        return int(self._value)

    __index__ = __int__

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NonZero):
            return int(self) == int(other)
        if isinstance(other, (int, np.integer)):
            return int(self) == int(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(int(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


def _nonzero_type(name: str, bits: int, signed: bool) -> type[NonZero]:
    if bits <= 64:
        base = getattr(np, f"{'int' if signed else 'uint'}{bits}")
        info = np.iinfo(base)
        lo, hi = int(info.min), int(info.max)
    else:
        base = int
        lo, hi = (-(2 ** (bits - 1)), 2 ** (bits - 1) - 1) if signed else (0, 2 ** bits - 1)
    return type(name, (NonZero,), {"__slots__": (), "base": base, "min_value": lo, "max_value": hi})


NonZeroI8 = _nonzero_type("NonZeroI8", 8, True)
NonZeroI16 = _nonzero_type("NonZeroI16", 16, True)
NonZeroI32 = _nonzero_type("NonZeroI32", 32, True)
NonZeroI64 = _nonzero_type("NonZeroI64", 64, True)
NonZeroI128 = _nonzero_type("NonZeroI128", 128, True)
NonZeroU8 = _nonzero_type("NonZeroU8", 8, False)
NonZeroU16 = _nonzero_type("NonZeroU16", 16, False)
NonZeroU32 = _nonzero_type("NonZeroU32", 32, False)
NonZeroU64 = _nonzero_type("NonZeroU64", 64, False)
NonZeroU128 = _nonzero_type("NonZeroU128", 128, False)

__all__ = [
    "NonZero",
    "NonZeroI8",
    "NonZeroI16",
    "NonZeroI32",
    "NonZeroI64",
    "NonZeroI128",
    "NonZeroU8",
    "NonZeroU16",
    "NonZeroU32",
    "NonZeroU64",
    "NonZeroU128",
]
