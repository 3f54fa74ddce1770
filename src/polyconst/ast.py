"""AST nodes for constant declaration files."""

from typing import Literal as TypingLiteral

from pydantic import BaseModel, Field


class Declaration(BaseModel):
    """One named multi-representation constant.

    Visibility, binding kind and documentation are carried verbatim; the
    validator never interprets them.
    """

    name: str
    tags: list[str] = Field(min_length=1)  # in declaration order, may contain duplicates until validated
    literal: str  # literal source text
    visibility: str = ""  # "", "pub", "pub(crate)", ...
    binding: TypingLiteral["static", "const"] = "static"
    doc: list[str] = []
    line: int | None = None
    col: int | None = None

    @property
    def is_public(self) -> bool:
        return self.visibility == "pub"


class Module(BaseModel):
    """A parsed declaration file."""

    path: str = ""
    declarations: list[Declaration] = []
