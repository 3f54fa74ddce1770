"""Error reporter: aggregates validation errors for a whole build."""

import logging

from .ast import Declaration
from .errors import BuildError, ConstantError

logger = logging.getLogger(__name__)


class ErrorReporter:
    """Collects errors in declaration order, then tag order within a declaration."""

    def __init__(self, path: str = ""):
        self.path = path
        self.errors: list[ConstantError] = []

    def report(self, declaration: Declaration, errors: list[ConstantError]) -> None:
        for err in errors:
            err.declaration = declaration
            self.errors.append(err)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def raise_if_errors(self) -> None:
        if self.errors:
            logger.info("build failed with %d error(s)", len(self.errors))
            raise BuildError(self.errors)

    def format(self) -> str:
        """Render one ``path:line:col: error[CODE]: NAME: message`` line per error."""
        return "\n".join(format_error(err, self.path) for err in self.errors)


def format_error(err: ConstantError, path: str = "") -> str:
    loc = path or "<input>"
    decl = err.declaration
    if decl is not None and decl.line is not None:
        loc = f"{loc}:{decl.line}:{decl.col}"
    name = f"{decl.name}: " if decl is not None else ""
    return f"{loc}: error[{err.code}]: {name}{err.msg}"
