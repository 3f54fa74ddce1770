"""Conversion planning: which declared tag feeds each catalog tag.

A declared target is read directly. Any other target is fed by the closest
declared tag of the same kind that covers it, i.e. whose value set contains
every value of the target. The literal must also validate against the target
itself, so no emitted conversion can fail when called.
"""

import logging

from pydantic import BaseModel, ConfigDict

from ..errors import ConstantError
from ..registry import TypeRegistry, TypeTag
from ..validator import TypedValue, ValidatedConstant, check_tag

logger = logging.getLogger(__name__)


class Conversion(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: TypeTag
    source: TypeTag
    value: TypedValue  # the literal checked against the target

    @property
    def direct(self) -> bool:
        return self.source.name == self.target.name


def covers(source: TypeTag, target: TypeTag) -> bool:
    """True if every value of ``target`` is exactly representable in ``source``."""
    if source.kind is not target.kind:
        return False
    if source.is_integer:
        if source.nonzero and not target.nonzero:
            return False
        return source.min_value <= target.min_value and target.max_value <= source.max_value
    return (
        source.mantissa_bits >= target.mantissa_bits
        and source.max_exponent >= target.max_exponent
        and source.min_exponent <= target.min_exponent
    )


def select_source(target: TypeTag, declared: list[TypeTag]) -> TypeTag | None:
    """Pick the declared tag a conversion to ``target`` reads from."""
    for tag in declared:
        if tag.name == target.name:
            return tag

    candidates = [(i, tag) for i, tag in enumerate(declared) if covers(tag, target)]
    if not candidates:
        return None

    # narrowest first, then same signedness, same nonzero-ness, declaration order
    def closeness(item: tuple[int, TypeTag]) -> tuple:
        i, tag = item
        return (tag.bits, tag.signed != target.signed, tag.nonzero != target.nonzero, i)

    return min(candidates, key=closeness)[1]


def plan_conversions(constant: ValidatedConstant, registry: TypeRegistry) -> list[Conversion]:
    """One conversion per reachable catalog tag, in registry order."""
    declared = constant.tags
    conversions = []
    for target in registry:
        source = select_source(target, declared)
        if source is None:
            continue
        if source.name == target.name:
            value = constant.values[declared.index(source)]
        else:
            try:
                value = check_tag(constant.literal, target)
            except ConstantError as exc:
                logger.debug("%s: no conversion to %s (%s)", constant.name, target.name, exc.msg)
                continue
        conversions.append(Conversion(target=target, source=source, value=value))
    return conversions
