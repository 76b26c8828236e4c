""" CSS LEXING
https://www.w3.org/TR/css-syntax-3/#tokenizing-and-parsing

The lexer is lossless: joining `str(token)` for every produced token gives back
the source it was fed, byte for byte. Escapes are kept as written and newlines
are not normalized, so a stylesheet can be rewritten token by token and
serialized without disturbing anything that was not touched.

<comment></comment>
<at-rule/>
<ruleset>
    <selector/> <block>
        <property/>: <value/>;
        <variable/>: <anything/>;
    </block>
</ruleset>
"""

from __future__ import annotations
import codecs
import re
from typing import Literal
from cssvalues.css.tokens import *

class Check:
    @staticmethod
    def letter(current: str | None) -> bool:
        return current is not None and current.isascii() and current.isalpha()

    @staticmethod
    def non_ascii(current: str | None) -> bool:
        return current is not None and ord(current) >= ord('\u0080')

    @staticmethod
    def ident_start(current: str | None) -> bool:
        return current is not None and (Check.letter(current) or Check.non_ascii(current) or current == "_")

    @staticmethod
    def digit(current: str | None) -> bool:
        return current is not None and current in '0123456789'

    @staticmethod
    def whitespace(current: str | None) -> bool:
        return current is not None and current in '\t\n\r\f '

    @staticmethod
    def hex(current: str | None) -> bool:
        return current is not None and current in '0123456789abcdefABCDEF'

    @staticmethod
    def ident(current: str | None) -> bool:
        return current is not None and (Check.ident_start(current) or Check.digit(current) or current == "-")

    @staticmethod
    def escape(current: str | None, next: str | None) -> bool:
        return current == "\\" and next is not None and next != "\n"

    @staticmethod
    def non_printable(current: str | None) -> bool:
        if current is None:
            return False
        o = ord(current)
        return o <= 0x08 or o == 0x0B or 0x0E <= o <= 0x1F or o == 0x7F

    @staticmethod
    def starts_with_ident(first: str | None, second: str | None, third: str | None) -> bool:
        if first == "-":
            return Check.ident_start(second) or second == "-" or Check.escape(second, third)
        elif Check.ident_start(first):
            return True
        elif first == "\\":
            return Check.escape(first, second)
        return False

    @staticmethod
    def starts_with_number(first: str | None, second: str | None, third: str | None) -> bool:
        if first is None:
            return False
        if first in "+-":
            if Check.digit(second):
                return True
            elif second == "." and Check.digit(third):
                return True
            return False
        elif first == ".":
            return Check.digit(second)
        return Check.digit(first)


CHARSET = re.compile(rb'@charset "([^"]*)";')
class Lexer:
    def __init__(self, source: str) -> None:
        self.source = source
        self.index = 0
        self.errors: list[ParseError] = []

    @staticmethod
    def from_path(path: str) -> Lexer:
        errors: list[ParseError] = []
        lexer = Lexer(Lexer.get_css(path, errors))
        lexer.errors.extend(errors)
        return lexer

    @staticmethod
    def get_css(path: str, errors: list[ParseError] | None = None) -> str:
        """Read a stylesheet from disk, honouring a leading `@charset` rule.

        Without a `@charset` rule the file is read as utf-8. An encoding Python
        does not know is reported on `errors` and the file is read as utf-8 too.
        A byte order mark is dropped, everything else is kept.
        """
        with open(path, "rb") as f:
            data = f.read()

        encoding = "utf-8-sig"
        if (charset := CHARSET.match(data)) is not None:
            name = charset.group(1).decode("ascii", "replace")
            try:
                encoding = codecs.lookup(name).name
            except LookupError:
                if errors is not None:
                    errors.append(ParseError(f"Unknown charset {name!r}"))
        return data.decode(encoding)

    def __iter__(self):
        return self

    def __next__(self):
        next = self.consume()
        if isinstance(next, EOF):
            raise StopIteration
        return next

    def process(self) -> list[Token]:
        """Tokenize the entire source at once."""
        return [token for token in self]

    def peek(self, amount: int = 1) -> str | None:
        """The code point `amount` positions ahead, without consuming it."""
        index = self.index + amount - 1
        if index < len(self.source):
            return self.source[index]
        return None

    def next(self) -> str | None:
        if self.index < len(self.source):
            self.index += 1
            return self.source[self.index - 1]
        return None

    def reconsume(self):
        self.index -= 1

    def error(self, error: ParseError):
        self.errors.append(error)

    def _consume_comment_(self) -> Comment:
        end = self.source.find("*/", self.index + 2)
        if end == -1:
            self.error(ParseError("Comment not closed"))
            end = len(self.source)
        else:
            end += 2
        comment = Comment(self.source[self.index:end])
        self.index = end
        return comment

    def _consume_whitespace_(self, current: str) -> Whitespace:
        whitespace = Whitespace(current)
        while Check.whitespace(self.peek()):
            whitespace.raw += self.next()
        return whitespace

    def _consume_string_(self, quote: str) -> String | BadString:
        string = String(quote=quote)
        while True:
            next = self.next()
            if next is None:
                self.error(ParseError("String was not closed"))
                string.closed = False
                return string
            elif next == quote:
                return string
            elif next == "\n":
                self.error(ParseError("String literal not closed"))
                self.reconsume()
                return BadString(quote + string.raw)
            elif next == "\\":
                if (peek := self.next()) is not None:
                    # Escapes and escaped newlines stay as written
                    string.raw += next + peek
                else:
                    string.raw += next
            else:
                string.raw += next

    def _consume_escape_(self, current: str) -> str:
        """Consume an escape after `current` (a backslash) and return its source text."""
        next = self.next()
        if next is None:
            return current
        output = current + next
        if Check.hex(next):
            digits = 1
            while Check.hex(self.peek()) and digits < 6:
                output += self.next()
                digits += 1
            if Check.whitespace(self.peek()):
                output += self.next()
        return output

    def _consume_ident_(self) -> str:
        result = ''
        while True:
            peek = self.peek()
            if Check.ident(peek):
                result += self.next()
            elif Check.escape(peek, self.peek(2)):
                result += self._consume_escape_(self.next())
            else:
                return result

    def _consume_hash_(self, current: str) -> Hash | Delim:
        if Check.ident(self.peek()) or Check.escape(self.peek(), self.peek(2)):
            hasht = Hash()
            if Check.starts_with_ident(self.peek(), self.peek(2), self.peek(3)):
                hasht.type = "id"
            hasht.raw = self._consume_ident_()
            return hasht
        return Delim(current)

    def _consume_number_(self) -> tuple[int | float, Literal['integer', 'number'], str]:
        """Consume a number from the code points. Returning a numeric value, a type
        of either integer or number, and the source text of the number.
        """
        _type: Literal['integer', 'number'] = 'integer'
        raw = ''
        if (peek := self.peek()) is not None and peek in "-+":
            raw += self.next()

        while Check.digit(self.peek()):
            raw += self.next()

        if self.peek() == "." and Check.digit(self.peek(2)):
            _type = "number"
            raw += self.next()
            while Check.digit(self.peek()):
                raw += self.next()

        if (peek := self.peek()) is not None and peek in "Ee":
            sign = self.peek(2)
            if Check.digit(sign) or (sign is not None and sign in "-+" and Check.digit(self.peek(3))):
                _type = "number"
                raw += self.next() + self.next()
                while Check.digit(self.peek()):
                    raw += self.next()

        if _type == "integer":
            return int(raw), _type, raw
        return float(raw), _type, raw

    def _consume_numeric_(self) -> Number | Percentage | Dimension:
        """Consume code points a produce a Number, Percentage, or Dimension token."""
        value, _type, raw = self._consume_number_()
        if Check.starts_with_ident(self.peek(), self.peek(2), self.peek(3)):
            unit = self._consume_ident_()
            return Dimension(value, _type, unit, raw + unit)
        elif self.peek() == "%":
            self.next()
            return Percentage(value, _type, raw)
        return Number(value, _type, raw)

    def _consume_remnant_bad_url_(self, start: int) -> BadUrl:
        while True:
            next = self.next()
            if next is None or next == ")":
                return BadUrl(self.source[start:self.index])
            elif Check.escape(next, self.peek()):
                self._consume_escape_(next)

    def _consume_url_(self, name: str) -> Url | BadUrl:
        start = self.index - len(name) - 1
        url = Url(name=name)
        while Check.whitespace(self.peek()):
            url.raw += self.next()

        while True:
            next = self.next()
            if next is None:
                self.error(ParseError("Url not closed"))
                url.closed = False
                return url
            elif next == ")":
                return url
            elif Check.whitespace(next):
                url.raw += next
                while Check.whitespace(self.peek()):
                    url.raw += self.next()
                if self.peek() in (")", None):
                    continue
                return self._consume_remnant_bad_url_(start)
            elif next in '\'"(' or Check.non_printable(next):
                self.error(ParseError("Invalid character in url"))
                return self._consume_remnant_bad_url_(start)
            elif next == "\\":
                if Check.escape(next, self.peek()):
                    url.raw += self._consume_escape_(next)
                else:
                    self.error(ParseError("Invalid backslash in url"))
                    return self._consume_remnant_bad_url_(start)
            else:
                url.raw += next

    def _consume_ident_like_(self) -> Ident | Function | Url | BadUrl:
        ident = self._consume_ident_()
        if ident.lower() == "url" and self.peek() == "(":
            self.next()
            offset = 1
            while Check.whitespace(self.peek(offset)):
                offset += 1
            if (quote := self.peek(offset)) is not None and quote in '\'"':
                return Function(ident)
            return self._consume_url_(ident)
        elif self.peek() == "(":
            self.next()
            return Function(ident)
        return Ident(ident)

    def consume(self) -> Token:
        """Consume code points and return the next token."""
        next = self.next()
        if next is None:
            return EOF()
        elif next == "/" and self.peek() == "*":
            self.reconsume()
            return self._consume_comment_()
        elif next in '"\'':
            return self._consume_string_(next)
        elif next == '#':
            return self._consume_hash_(next)
        elif next == "+":
            if Check.starts_with_number(next, self.peek(), self.peek(2)):
                self.reconsume()
                return self._consume_numeric_()
            return Delim(next)
        elif next == "-":
            if Check.starts_with_number(next, self.peek(), self.peek(2)):
                self.reconsume()
                return self._consume_numeric_()
            elif self.peek() == "-" and self.peek(2) == ">":
                self.next()
                self.next()
                return CDC('-->')
            elif Check.starts_with_ident(next, self.peek(), self.peek(2)):
                self.reconsume()
                return self._consume_ident_like_()
            return Delim(next)
        elif next == ".":
            if Check.starts_with_number(next, self.peek(), self.peek(2)):
                self.reconsume()
                return self._consume_numeric_()
            return Delim(next)
        elif next == "<":
            if self.source.startswith("!--", self.index):
                self.index += 3
                return CDO('<!--')
            return Delim("<")
        elif next == "@":
            if Check.starts_with_ident(self.peek(), self.peek(2), self.peek(3)):
                return AtKeyword(self._consume_ident_())
            return Delim(next)
        elif next == "\\":
            if Check.escape(next, self.peek()):
                self.reconsume()
                return self._consume_ident_like_()
            self.error(ParseError("Invalid backslash"))
            return Delim(next)
        elif Check.digit(next):
            self.reconsume()
            return self._consume_numeric_()
        elif Check.ident_start(next):
            self.reconsume()
            return self._consume_ident_like_()
        elif Check.whitespace(next):
            return self._consume_whitespace_(next)
        elif next == "(":
            return LParantheses(next)
        elif next == ")":
            return RParantheses(next)
        elif next == "[":
            return LSquareBracket(next)
        elif next == "]":
            return RSquareBracket(next)
        elif next == "{":
            return LCurlyBracket(next)
        elif next == "}":
            return RCurlyBracket(next)
        elif next == ",":
            return Comma(next)
        elif next == ":":
            return Colon(next)
        elif next == ";":
            return Semicolon(next)
        else:
            return Delim(next)

class ParseError(Exception): pass
