"""Shared fixtures for polyconst tests."""

import importlib.util
import sys

import pytest

from polyconst import Declaration, Settings, TypeRegistry, Validator


@pytest.fixture
def registry():
    """A 64-bit registry, independent of the host."""
    return TypeRegistry(pointer_width=64)


@pytest.fixture
def validator(registry):
    return Validator(registry)


@pytest.fixture
def settings():
    return Settings(pointer_width=64)


@pytest.fixture
def load_generated(tmp_path, monkeypatch):
    """Write generated source to a file and import it as a module."""
    counter = iter(range(1_000))

    def load(source: str):
        name = f"generated_constants_{next(counter)}"
        path = tmp_path / f"{name}.py"
        path.write_text(source)
        spec = importlib.util.spec_from_file_location(name, path)
        module = importlib.util.module_from_spec(spec)
        monkeypatch.setitem(sys.modules, name, module)
        spec.loader.exec_module(module)
        return module

    return load


def decl(name: str, tags: str, literal: str, **kwargs) -> Declaration:
    """Build a declaration from a ``"u8 | i16"`` style tag list."""
    return Declaration(name=name, tags=[t.strip() for t in tags.split("|")], literal=literal, **kwargs)
