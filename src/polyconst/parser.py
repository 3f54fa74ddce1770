"""Parser for constant declaration files (.pc).

Grammar:
    module      = declaration*
    declaration = DOC* visibility? ("static" | "const") NAME ":" tags "=" literal ";"
    visibility  = "pub" ("(" vis_path ")")?
    vis_path    = NAME ("::" NAME)* | "in" NAME ("::" NAME)*
    tags        = NAME ("|" NAME)*
    literal     = ("-" | "+")? LITERAL

DOC is a ``///`` line comment; consecutive DOC lines form the declaration's
documentation. Plain ``//`` comments are skipped. The literal token is read
verbatim, suffix included, and checked later by the literal parser.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from . import ast


@dataclass
class Token:
    type: str
    value: str
    line: int
    col: int


class ParseError(Exception):
    def __init__(self, msg: str, line: int, col: int):
        super().__init__(f"line {line}, col {col}: {msg}")
        self.msg = msg
        self.line = line
        self.col = col


class Lexer:
    """Simple lexer for declaration files."""

    KEYWORDS = {"pub", "static", "const"}

    TOKEN_PATTERNS = [
        (re.compile(r"///[^\n]*"), "DOC"),
        (re.compile(r"//[^\n]*"), "COMMENT"),
        (re.compile(r"\s+"), "WS"),
        (
            re.compile(
                r"[0-9][0-9A-Za-z_]*"
                r"(?:\.(?:[0-9][0-9A-Za-z_]*)?)?"
                r"(?:(?<=[eE])[+-][0-9A-Za-z_]*)?"
            ),
            "LITERAL",
        ),
        (re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*"), "IDENT"),
        (re.compile(r"::"), "PATHSEP"),
        (re.compile(r":"), "COLON"),
        (re.compile(r";"), "SEMI"),
        (re.compile(r"\|"), "PIPE"),
        (re.compile(r"="), "EQ"),
        (re.compile(r"-"), "MINUS"),
        (re.compile(r"\+"), "PLUS"),
        (re.compile(r"\("), "LPAREN"),
        (re.compile(r"\)"), "RPAREN"),
    ]

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: list[Token] = []
        self._tokenise()

    def _tokenise(self) -> None:
        while self.pos < len(self.source):
            for pattern, ttype in self.TOKEN_PATTERNS:
                m = pattern.match(self.source, self.pos)
                if m:
                    break
            else:
                raise ParseError(f"unexpected char: {self.source[self.pos]!r}", self.line, self.col)

            value = m.group(0)
            if ttype == "WS":
                for c in value:
                    if c == "\n":
                        self.line += 1
                        self.col = 1
                    else:
                        self.col += 1
            elif ttype == "COMMENT":
                self.col += len(value)
            else:
                if ttype == "IDENT" and value in self.KEYWORDS:
                    ttype = value.upper()
                self.tokens.append(Token(ttype, value, self.line, self.col))
                self.col += len(value)
            self.pos += len(value)

        self.tokens.append(Token("EOF", "", self.line, self.col))


class Parser:
    """Recursive descent parser for declaration files."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[idx]

    def at(self, *types: str) -> bool:
        return self.peek().type in types

    def consume(self, ttype: str) -> Token:
        tok = self.peek()
        if tok.type != ttype:
            raise ParseError(f"expected {ttype}, got {tok.type}", tok.line, tok.col)
        self.pos += 1
        return tok

    def match(self, *types: str) -> Token | None:
        if self.at(*types):
            tok = self.peek()
            self.pos += 1
            return tok
        return None

    def parse_module(self, path: str = "") -> ast.Module:
        """Parse a complete module."""
        module = ast.Module(path=path)
        while not self.at("EOF"):
            module.declarations.append(self.parse_declaration())
        return module

    def parse_declaration(self) -> ast.Declaration:
        doc = []
        while self.at("DOC"):
            doc.append(_doc_text(self.consume("DOC").value))

        start = self.peek()
        if start.type == "EOF":
            raise ParseError("doc comment is not followed by a declaration", start.line, start.col)

        visibility = self._parse_visibility()
        if self.at("STATIC", "CONST"):
            binding = self.match("STATIC", "CONST").value
        else:
            tok = self.peek()
            raise ParseError(f"expected 'static' or 'const', got {tok.type}", tok.line, tok.col)

        name = self.consume("IDENT").value
        self.consume("COLON")

        tags = [self.consume("IDENT").value]
        while self.match("PIPE"):
            tags.append(self.consume("IDENT").value)

        self.consume("EQ")
        literal = self._parse_literal()
        self.consume("SEMI")

        return ast.Declaration(
            name=name,
            tags=tags,
            literal=literal,
            visibility=visibility,
            binding=binding,
            doc=doc,
            line=start.line,
            col=start.col,
        )

    def _parse_visibility(self) -> str:
        if not self.match("PUB"):
            return ""
        if not self.match("LPAREN"):
            return "pub"

        parts: list[str] = []
        while not self.at("RPAREN"):
            tok = self.peek()
            if tok.type == "PATHSEP":
                parts.append("::")
            elif tok.type == "IDENT":
                if parts and parts[-1] != "::":
                    parts.append(" ")
                parts.append(tok.value)
            else:
                raise ParseError(f"unexpected token in visibility: {tok.type}", tok.line, tok.col)
            self.pos += 1
        self.consume("RPAREN")

        if not parts:
            tok = self.peek(-1)
            raise ParseError("empty visibility restriction", tok.line, tok.col)
        return "pub(" + "".join(parts) + ")"

    def _parse_literal(self) -> str:
        sign = ""
        if self.at("MINUS", "PLUS"):
            sign = self.match("MINUS", "PLUS").value
        if self.at("LITERAL"):
            return sign + self.consume("LITERAL").value
        tok = self.peek()
        raise ParseError(f"expected a numeric literal, got {tok.type}", tok.line, tok.col)


def _doc_text(comment: str) -> str:
    text = comment[3:]
    return text[1:] if text.startswith(" ") else text


def parse(source: str, path: str = "") -> ast.Module:
    """Parse declaration source into an AST."""
    lexer = Lexer(source)
    parser = Parser(lexer.tokens)
    return parser.parse_module(path)


def parse_file(filepath: str | Path) -> ast.Module:
    """Parse a declaration file."""
    filepath = Path(filepath)
    source = filepath.read_text()
    return parse(source, str(filepath))
