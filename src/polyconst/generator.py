"""High-level interface: declaration text in, Python module text out."""

from __future__ import annotations

import logging
from pathlib import Path

from .ast import Module
from .codegen import GeneratedArtifact, PythonEmitter
from .config import Settings
from .parser import parse
from .registry import TypeRegistry, default_registry
from .reporter import ErrorReporter
from .validator import ValidatedConstant, Validator

logger = logging.getLogger(__name__)


class Generator:
    """A validated set of constants ready to be rendered."""

    def __init__(
        self,
        module: Module,
        constants: list[ValidatedConstant],
        registry: TypeRegistry,
        settings: Settings,
    ):
        self.module = module
        self.constants = constants
        self.registry = registry
        self.settings = settings
        self._emitter = PythonEmitter(registry, settings)

    @classmethod
    def from_module(cls, module: Module, settings: Settings | None = None) -> Generator:
        """Validate a parsed module. Raises BuildError listing every failure."""
        settings = settings or Settings()
        registry = default_registry(settings.pointer_width, settings.numpy_alias)
        reporter = ErrorReporter(module.path)
        constants = Validator(registry).validate_all(module.declarations, reporter)
        logger.info("validated %d constant(s) from %s", len(constants), module.path or "<input>")
        return cls(module, constants, registry, settings)

    @classmethod
    def from_source(cls, source: str, path: str = "", settings: Settings | None = None) -> Generator:
        return cls.from_module(parse(source, path), settings)

    @classmethod
    def from_file(cls, path: str | Path, settings: Settings | None = None) -> Generator:
        path = Path(path)
        return cls.from_source(path.read_text(), str(path), settings)

    @property
    def artifacts(self) -> list[GeneratedArtifact]:
        return [self._emitter.emit(c) for c in self.constants]

    def render(self) -> str:
        """The generated Python module."""
        origin = Path(self.module.path).name if self.module.path else ""
        return self._emitter.render_module(self.artifacts, origin)

    def write(self, out: str | Path) -> Path:
        out = Path(out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.render())
        logger.info("wrote %s", out)
        return out
