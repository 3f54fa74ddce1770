"""polyconst: numeric constants validated in several representations at once."""

from .ast import Declaration, Module
from .codegen import (
    Conversion,
    GeneratedArtifact,
    PythonEmitter,
    generate_python,
    plan_conversions,
)
from .config import Settings
from .errors import (
    BuildError,
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
from .generator import Generator
from .literals import NumericLiteral, parse_literal
from .parser import Lexer, ParseError, Parser, parse, parse_file
from .registry import NumericKind, TypeRegistry, TypeTag, default_registry
from .reporter import ErrorReporter
from .validator import TypedValue, ValidatedConstant, Validator, check_tag


def validate(declarations: list[Declaration], registry: TypeRegistry | None = None) -> list[ValidatedConstant]:
    """Validate declarations; raises BuildError with every failure."""
    return Validator(registry).validate_all(declarations)


def generate(source: str, path: str = "", settings: Settings | None = None) -> str:
    """Parse, validate and render declaration source as a Python module."""
    return Generator.from_source(source, path, settings).render()


__all__ = [
    # Parse
    "parse",
    "parse_file",
    "ParseError",
    "Lexer",
    "Parser",
    "parse_literal",
    "NumericLiteral",
    # AST
    "Module",
    "Declaration",
    # Registry
    "NumericKind",
    "TypeTag",
    "TypeRegistry",
    "default_registry",
    # Validate
    "validate",
    "Validator",
    "check_tag",
    "TypedValue",
    "ValidatedConstant",
    "ErrorReporter",
    # Errors
    "ConstantError",
    "BuildError",
    "LiteralKindError",
    "DuplicateTagError",
    "KindMismatchError",
    "LiteralOverflowError",
    "NegativeToUnsignedError",
    "ZeroToNonZeroError",
    "UnknownTagError",
    "ReservedNameError",
    # Codegen
    "generate",
    "generate_python",
    "plan_conversions",
    "Conversion",
    "GeneratedArtifact",
    "PythonEmitter",
    # High-level interface
    "Generator",
    "Settings",
]
