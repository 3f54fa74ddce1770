"""Type registry: the closed catalog of numeric tags.

Every tag a declaration may name lives here, with its kind, width, signedness,
nonzero-ness and range (integers) or binary format (floats). Ranges and
formats are read from numpy so they match the scalar types the generated code
stores values in.
"""

from enum import Enum
from functools import lru_cache

import numpy as np
from pydantic import BaseModel, ConfigDict


class NumericKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"


class TypeTag(BaseModel):
    """One numeric representation (e.g. u8, f64, nz_i32)."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: NumericKind
    bits: int
    signed: bool = True
    nonzero: bool = False
    native: str  # expression naming the runtime type in generated code

    # integers
    min_value: int | None = None
    max_value: int | None = None

    # floats: significand bits incl. the implicit one, unbiased exponent bounds
    mantissa_bits: int | None = None
    max_exponent: int | None = None
    min_exponent: int | None = None

    @property
    def is_integer(self) -> bool:
        return self.kind is NumericKind.INTEGER

    @property
    def is_float(self) -> bool:
        return self.kind is NumericKind.FLOAT

    @property
    def max_finite(self) -> float:
        """Largest finite value of a float tag, as a Python float."""
        return float(
            (2 ** self.mantissa_bits - 1) * 2.0 ** (self.max_exponent - self.mantissa_bits + 1)
        )

    def __str__(self) -> str:
        return self.name


INTEGER_WIDTHS = (8, 16, 32, 64, 128)
FLOAT_TYPES = {"f32": np.float32, "f64": np.float64}
NONZERO_PREFIX = "nz_"


def host_pointer_width() -> int:
    """Pointer width of the running interpreter, in bits."""
    return np.dtype(np.intp).itemsize * 8


def _integer_range(bits: int, signed: bool) -> tuple[int, int]:
    if bits <= 64:
        info = np.iinfo(f"{'int' if signed else 'uint'}{bits}")
        return int(info.min), int(info.max)
    # numpy stops at 64 bits
    if signed:
        return -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    return 0, 2 ** bits - 1


def _integer_tag(name: str, bits: int, signed: bool, alias: str) -> TypeTag:
    lo, hi = _integer_range(bits, signed)
    if bits <= 64:
        native = f"{alias}.{'int' if signed else 'uint'}{bits}"
    else:
        native = "int"
    return TypeTag(
        name=name,
        kind=NumericKind.INTEGER,
        bits=bits,
        signed=signed,
        native=native,
        min_value=lo,
        max_value=hi,
    )


def _float_tag(name: str, dtype: type, alias: str) -> TypeTag:
    info = np.finfo(dtype)
    return TypeTag(
        name=name,
        kind=NumericKind.FLOAT,
        bits=int(info.bits),
        native=f"{alias}.{dtype.__name__}",
        mantissa_bits=int(info.nmant) + 1,
        max_exponent=int(info.maxexp) - 1,
        min_exponent=int(info.minexp),
    )


def _nonzero_tag(base: TypeTag) -> TypeTag:
    # isize/usize share the wrapper of their fixed-width counterpart
    runtime_name = f"NonZero{'I' if base.signed else 'U'}{base.bits}"
    return base.model_copy(
        update={
            "name": NONZERO_PREFIX + base.name,
            "nonzero": True,
            "native": runtime_name,
        }
    )


class TypeRegistry:
    """Fixed, ordered catalog of tags, looked up by name."""

    def __init__(self, pointer_width: int | None = None, numpy_alias: str = "np"):
        self.pointer_width = pointer_width or host_pointer_width()
        self.numpy_alias = numpy_alias
        if self.pointer_width not in (32, 64):
            raise ValueError(f"unsupported pointer width: {self.pointer_width}")

        integers: list[TypeTag] = []
        for signed, prefix in ((True, "i"), (False, "u")):
            for bits in INTEGER_WIDTHS:
                integers.append(_integer_tag(f"{prefix}{bits}", bits, signed, numpy_alias))
            integers.append(
                _integer_tag(f"{prefix}size", self.pointer_width, signed, numpy_alias)
            )

        floats = [_float_tag(name, dtype, numpy_alias) for name, dtype in FLOAT_TYPES.items()]
        nonzero = [_nonzero_tag(tag) for tag in integers]

        self._tags: dict[str, TypeTag] = {
            tag.name: tag for tag in [*integers, *floats, *nonzero]
        }

    def __iter__(self):
        return iter(self._tags.values())

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, name: object) -> bool:
        return name in self._tags

    def get(self, name: str) -> TypeTag:
        """Look up a tag by name. Raises KeyError for unknown names."""
        try:
            return self._tags[name]
        except KeyError:
            raise KeyError(f"unknown numeric tag: {name}") from None

    @property
    def names(self) -> list[str]:
        return list(self._tags)


@lru_cache(maxsize=None)
def default_registry(pointer_width: int | None = None, numpy_alias: str = "np") -> TypeRegistry:
    """Shared registry instance for a given pointer width."""
    return TypeRegistry(pointer_width=pointer_width, numpy_alias=numpy_alias)
