"""Python backend: validated constants -> a plain Python module.

Each constant becomes a frozen dataclass with one field per declared tag,
``to_<tag>()`` conversions, an ``into(tag)`` dispatcher and a singleton
instance bound to the declaration name. Output depends only on the input,
so regenerating from the same declarations gives byte-identical text.
"""

from pydantic import BaseModel, ConfigDict

from ..config import Settings
from ..registry import TypeRegistry, TypeTag
from ..validator import TypedValue, ValidatedConstant
from .conversions import Conversion, plan_conversions

RUNTIME_MODULE = "polyconst.runtime"
INDENT = "    "


class GeneratedArtifact(BaseModel):
    """The emitted value type for one constant, plus its conversions."""

    model_config = ConfigDict(frozen=True)

    constant: ValidatedConstant
    class_name: str
    conversions: list[Conversion]
    source: str  # class definition and singleton

    @property
    def targets(self) -> list[str]:
        return [c.target.name for c in self.conversions]


def class_name_for(name: str, prefix: str = "PolymorphicConstant") -> str:
    """``ASCII_LINE_RETURN`` -> ``PolymorphicConstantAsciiLineReturn``."""
    parts = [p for p in name.split("_") if p]
    return prefix + "".join(p[0].upper() + p[1:].lower() for p in parts)


def _docstring(lines: list[str], indent: str) -> list[str]:
    escaped = [line.replace("\\", "\\\\").replace('"""', '\\"\\"\\"') for line in lines]
    if escaped[-1].endswith('"'):
        escaped[-1] = escaped[-1][:-1] + '\\"'
    if len(escaped) == 1:
        return [f'{indent}"""{escaped[0]}"""']
    body = [f"{indent}{line}".rstrip() for line in escaped[1:]]
    return [f'{indent}"""{escaped[0]}', *body, f'{indent}"""']


def render_value(tv: TypedValue) -> str:
    """Source expression constructing a stored value in its native type."""
    if tv.tag.is_float:
        return f"{tv.tag.native}({tv.value!r})"
    if tv.tag.native == "int":
        return str(tv.value)
    return f"{tv.tag.native}({tv.value})"


def render_conversion(conv: Conversion) -> str:
    """Body expression of ``to_<target>()``."""
    field = f"self.{conv.source.name}"
    if conv.direct:
        return field
    if conv.target.is_float:
        # correctly rounded from the literal, not from the source field
        return render_value(conv.value)
    if conv.target.native == "int":
        return f"int({field})"
    return f"{conv.target.native}(int({field}))"


class PythonEmitter:
    """Emits the value type and conversions for validated constants."""

    def __init__(self, registry: TypeRegistry, settings: Settings | None = None):
        self.registry = registry
        self.settings = settings or Settings()

    def emit(self, constant: ValidatedConstant) -> GeneratedArtifact:
        decl = constant.declaration
        class_name = class_name_for(decl.name, self.settings.class_prefix)
        conversions = plan_conversions(constant, self.registry)

        lines = ["@dataclass(frozen=True)", f"class {class_name}:"]
        if decl.doc:
            lines += _docstring(decl.doc, INDENT)
            lines.append("")

        for tv in constant.values:
            lines.append(f"{INDENT}{tv.tag.name}: {tv.tag.native}")
        lines.append("")

        lines.append(f"{INDENT}CONVERSIONS: ClassVar[tuple[str, ...]] = (")
        lines += [f'{INDENT * 2}"{c.target.name}",' for c in conversions]
        lines.append(f"{INDENT})")

        for conv in conversions:
            lines += [
                "",
                f"{INDENT}def to_{conv.target.name}(self) -> {conv.target.native}:",
                f"{INDENT * 2}return {render_conversion(conv)}",
            ]

        lines += [
            "",
            f"{INDENT}def into(self, tag: str):",
            f"{INDENT * 2}if tag not in self.CONVERSIONS:",
            f'{INDENT * 3}raise TypeError(f"{decl.name} has no conversion to {{tag!r}}")',
            f'{INDENT * 2}return getattr(self, "to_" + tag)()',
            "",
        ]
        lines += self._exact_value_method(constant)

        lines += ["", ""]
        lines += [f"#: {line}".rstrip() for line in decl.doc]
        annotation = f"Final[{class_name}]" if decl.binding == "const" else class_name
        lines.append(f"{decl.name}: {annotation} = {class_name}(")
        lines += [f"{INDENT}{tv.tag.name}={render_value(tv)}," for tv in constant.values]
        lines.append(")")

        return GeneratedArtifact(
            constant=constant,
            class_name=class_name,
            conversions=conversions,
            source="\n".join(lines) + "\n",
        )

    def _exact_value_method(self, constant: ValidatedConstant) -> list[str]:
        tags = constant.tags
        if tags[0].is_integer:
            return [
                f"{INDENT}def __int__(self) -> int:",
                f"{INDENT * 2}return int(self.{tags[0].name})",
            ]
        widest = max(tags, key=lambda t: t.bits)
        return [
            f"{INDENT}def __float__(self) -> float:",
            f"{INDENT * 2}return float(self.{widest.name})",
        ]

    def render_module(self, artifacts: list[GeneratedArtifact], source_path: str = "") -> str:
        """Render a complete module from emitted artifacts."""
        origin = f" from {source_path}" if source_path else ""
        out = [f'"""Constants generated by polyconst{origin}. Do not edit."""', ""]

        tags: list[TypeTag] = []
        for art in artifacts:
            tags += art.constant.tags
            tags += [c.target for c in art.conversions]

        typing_names = ["ClassVar"]
        if any(art.constant.declaration.binding == "const" for art in artifacts):
            typing_names.append("Final")

        out += [
            "from dataclasses import dataclass",
            f"from typing import {', '.join(typing_names)}",
        ]

        alias = self.settings.numpy_alias
        if any(t.native.startswith(alias + ".") for t in tags):
            out.append("")
            out.append("import numpy" if alias == "numpy" else f"import numpy as {alias}")

        runtime = sorted({t.native for t in tags if t.nonzero})
        if runtime:
            out += ["", f"from {RUNTIME_MODULE} import {', '.join(runtime)}"]

        exported = []
        for art in artifacts:
            if art.constant.declaration.is_public:
                exported += [art.constant.name, art.class_name]
        out.append("")
        if exported:
            out.append("__all__ = [")
            out += [f'{INDENT}"{name}",' for name in exported]
            out.append("]")
        else:
            out.append("__all__: list[str] = []")

        for art in artifacts:
            out += ["", ""]
            out.append(art.source.rstrip("\n"))

        return "\n".join(out) + "\n"


def generate_python(
    constants: list[ValidatedConstant],
    registry: TypeRegistry,
    settings: Settings | None = None,
    source_path: str = "",
) -> str:
    """Generate a Python module for already-validated constants."""
    emitter = PythonEmitter(registry, settings)
    artifacts = [emitter.emit(c) for c in constants]
    return emitter.render_module(artifacts, source_path)
