"""
CSS tokens as produced by `cssvalues.css.lexer.Lexer`.

Every token keeps enough of its source to print itself back exactly, so
`"".join(str(token) for token in tokens)` is the source text. `raw` holds the
interesting part of the token (the name of a function, the body of a string,
the digits of a number, ...) and `__str__` puts the surrounding syntax back.

References:
    - [tokenizing](https://www.w3.org/TR/css-syntax-3/#tokenization)
    - [custom properites](https://developer.mozilla.org/en-US/docs/Web/CSS/Using_CSS_custom_properties)
"""
from __future__ import annotations
from typing import Literal

__all__ = [
    "Token",
    "Ident",
    "Function",
    "AtKeyword",
    "Hash",
    "String",
    "BadString",
    "Url",
    "BadUrl",

    "Bracket",
    "CLOSING",
    "Delim",
    "Colon",
    "Semicolon",
    "Comma",

    "LCurlyBracket",
    "LSquareBracket",
    "LParantheses",
    "RCurlyBracket",
    "RSquareBracket",
    "RParantheses",

    "Number",
    "Percentage",
    "Dimension",

    "Comment",
    "Whitespace",
    "CDC",
    "CDO",
    "EOF"
]

class Token:
    raw: str
    def __init__(self, raw: str = ''):
        self.raw = raw

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.raw!r})'

    def __str__(self) -> str:
        return self.raw

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and str(self) == str(other)

    def __hash__(self) -> int:
        return hash((type(self), str(self)))

class Ident(Token): pass
class Function(Token):
    def __str__(self) -> str:
        return f"{self.raw}("
class AtKeyword(Token):
    def __str__(self) -> str:
        return f"@{self.raw}"
class Hash(Token):
    def __init__(self, raw: str = '', *, type: Literal['id', 'unrestricted'] = 'unrestricted'):
        self.type = type
        super().__init__(raw)
    def __repr__(self) -> str:
        return f'Hash({"id, " if self.type == "id" else ""}{self.raw!r})'
    def __str__(self) -> str:
        return f"#{self.raw}"

class String(Token):
    def __init__(self, raw: str = '', quote: str = '"', *, closed: bool = True):
        self.quote = quote
        self.closed = closed
        super().__init__(raw)
    def __str__(self) -> str:
        return f"{self.quote}{self.raw}{self.quote if self.closed else ''}"
class BadString(Token): pass
class Url(Token):
    def __init__(self, raw: str = '', *, name: str = 'url', closed: bool = True):
        self.name = name
        self.closed = closed
        super().__init__(raw)
    def __str__(self) -> str:
        return f"{self.name}({self.raw}{')' if self.closed else ''}"
class BadUrl(Token): pass

class Delim(Token):
    def __init__(self, raw: str):
        if len(raw) > 1:
            raise ValueError("Delimiters may only be one codepoint long")
        super().__init__(raw)
    def __repr__(self) -> str:
        return f'Delim({self.raw!r})'

class Colon(Delim): pass
class Semicolon(Delim): pass
class Comma(Delim): pass

class Bracket(Token):
    """One of `{` `}` `[` `]` `(` `)`. `alt` is the token type it pairs with."""
    alt: type[Bracket]

class LCurlyBracket(Bracket): pass
class RCurlyBracket(Bracket): pass
class LSquareBracket(Bracket): pass
class RSquareBracket(Bracket): pass
class LParantheses(Bracket): pass
class RParantheses(Bracket): pass

LCurlyBracket.alt, RCurlyBracket.alt = RCurlyBracket, LCurlyBracket
LSquareBracket.alt, RSquareBracket.alt = RSquareBracket, LSquareBracket
LParantheses.alt, RParantheses.alt = RParantheses, LParantheses

CLOSING = {"{": "}", "[": "]", "(": ")"}

class Number(Token):
    value: int | float
    type: Literal['integer', 'number']
    def __init__(self, value: int | float, type: Literal['integer', 'number'], raw: str):
        self.value = value
        self.type = type
        super().__init__(raw)

    def __repr__(self) -> str:
        return f"Number({self.raw!r})"

class Percentage(Number):
    def __repr__(self) -> str:
        return f"Percentage({self.raw!r})"

    def __str__(self) -> str:
        return f"{self.raw}%"
class Dimension(Token):
    value: int | float
    type: Literal['integer', 'number']
    def __init__(self, value: int | float, type: Literal['integer', 'number'], unit: str, raw: str):
        self.value = value
        self.unit = unit
        self.type = type
        super().__init__(raw)

    def __repr__(self) -> str:
        return f"Dimension({self.raw!r})"

class Comment(Token): pass

class Whitespace(Token): pass
class CDO(Token): pass
class CDC(Token): pass
class EOF(Token): pass
