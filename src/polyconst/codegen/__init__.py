"""Code generation backends."""

from .conversions import Conversion, covers, plan_conversions, select_source
from .python import GeneratedArtifact, PythonEmitter, class_name_for, generate_python

__all__ = [
    "Conversion",
    "covers",
    "select_source",
    "plan_conversions",
    "GeneratedArtifact",
    "PythonEmitter",
    "class_name_for",
    "generate_python",
]
