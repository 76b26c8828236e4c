""" CSS Parser
https://www.w3.org/TR/css-syntax-3/#parsing

Two layers live here. Component values (`FunctionBlock`, `Block`, plain tokens)
group a token stream into nested `()`, `[]`, `{}` and function groups. The
stylesheet tree (`Stylesheet`, `Rule`, `AtRule`, `Declaration`, `CommentNode`)
is built on top of them and keeps every piece of whitespace it skips in a
`raws` dict, so `str(Parse.parse_stylesheet(text)) == text`.
"""

from __future__ import annotations
from typing import Any, Iterator
from typing_extensions import TypeAliasType
from cssvalues.css.lexer import Lexer, ParseError

from cssvalues.css.tokens import *

__all__ = [
    "FunctionBlock",
    "Block",
    "Component",
    "stringify",
    "Node",
    "CommentNode",
    "Declaration",
    "Container",
    "Rule",
    "AtRule",
    "Stylesheet",
    "Parse",
    "Parser",
]

class FunctionBlock:
    name: str
    value: list[Component]
    def __init__(self, name: str, value: list | None = None, *, closed: bool = True) -> None:
        self.name = name
        self.value = value or []
        self.closed = closed

    @property
    def opening(self) -> str:
        return f"{self.name}("

    @property
    def closing(self) -> str:
        return ")" if self.closed else ""

    def __repr__(self) -> str:
        return f"FunctionBlock({self.name!r}, {self.value})"

    def __str__(self) -> str:
        return self.opening + stringify(self.value) + self.closing

class Block:
    token: LCurlyBracket | LSquareBracket | LParantheses
    value: list[Component]
    def __init__(self, token: LCurlyBracket | LSquareBracket | LParantheses, *, closed: bool = True) -> None:
        self.token = token
        self.value = []
        self.closed = closed

    @property
    def opening(self) -> str:
        return str(self.token)

    @property
    def closing(self) -> str:
        return CLOSING[str(self.token)] if self.closed else ""

    def __repr__(self) -> str:
        return f"Block({self.opening!r}, {self.value})"

    def __str__(self) -> str:
        return self.opening + stringify(self.value) + self.closing

Component = TypeAliasType("Component", Token | FunctionBlock | Block)

def stringify(components: list[Component]) -> str:
    """Source text of a list of component values."""
    return "".join(str(component) for component in components)

def _split_spaces_(components: list[Component]) -> tuple[str, list[Component], str]:
    """Split leading and trailing whitespace and comments off a component list."""
    start, end = 0, len(components)
    while start < end and isinstance(components[start], (Whitespace, Comment)):
        start += 1
    while end > start and isinstance(components[end - 1], (Whitespace, Comment)):
        end -= 1
    return stringify(components[:start]), components[start:end], stringify(components[end:])


class Node:
    """A statement in the stylesheet tree.

    `raws["before"]` is the whitespace (and stray semicolons) between the previous
    statement and this one. Everything a node prints after that is `source_text`.
    """
    parent: Container | None
    raws: dict[str, Any]

    def __init__(self, raws: dict[str, Any] | None = None) -> None:
        self.parent = None
        self.raws = {"before": "", **(raws or {})}

    @property
    def source_text(self) -> str:
        raise NotImplementedError

    def remove(self) -> Node:
        if self.parent is not None:
            self.parent.remove_child(self)
        return self

    def __str__(self) -> str:
        return self.raws["before"] + self.source_text

class CommentNode(Node):
    def __init__(self, comment: str, *, raws: dict[str, Any] | None = None) -> None:
        self.comment = comment
        super().__init__(raws)

    @property
    def source_text(self) -> str:
        return self.comment

    def __repr__(self) -> str:
        return f"CommentNode({self.comment!r})"

class Declaration(Node):
    important: bool
    prop: str
    value: str
    def __init__(self, prop: str, value: str = "", *, important: bool = False, raws: dict[str, Any] | None = None):
        self.prop = prop
        self.value = value
        self.important = important
        super().__init__({"between": ": ", "after": "", "important": " !important", **(raws or {})})

    @property
    def source_text(self) -> str:
        important = self.raws["important"] if self.important else ""
        return f"{self.prop}{self.raws['between']}{self.value}{important}{self.raws['after']}"

    def __repr__(self) -> str:
        return f"Decl({'!, ' if self.important else ''}{self.prop!r}, {self.value!r})"

class Container(Node):
    """A node holding child statements between `{` and `}`.

    `nodes` is None for an at-rule without a block. `raws["semicolon"]` records
    whether the last declaration of the block was followed by a `;`.
    """
    nodes: list[Node] | None

    def __init__(self, nodes: list[Node] | None = None, *, raws: dict[str, Any] | None = None) -> None:
        super().__init__({"after": "", "semicolon": False, **(raws or {})})
        self.nodes = None if nodes is None else []
        for node in nodes or []:
            self.append(node)

    @property
    def first(self) -> Node | None:
        return self.nodes[0] if self.nodes else None

    @property
    def last(self) -> Node | None:
        return self.nodes[-1] if self.nodes else None

    def index(self, node: Node) -> int:
        for i, child in enumerate(self.nodes or []):
            if child is node:
                return i
        raise ValueError(f"{node!r} is not a child of {self!r}")

    def append(self, node: Node) -> Container:
        return self.insert(len(self.nodes or []), node)

    def insert(self, index: int, node: Node) -> Container:
        if self.nodes is None:
            self.nodes = []
        if node.parent is not None:
            node.remove()
        node.parent = self
        self.nodes.insert(index, node)
        return self

    def remove_child(self, node: Node) -> Container:
        self.nodes.pop(self.index(node))
        node.parent = None
        return self

    def walk(self) -> Iterator[Node]:
        """Every descendant, depth first in source order. Safe against removal of the current node."""
        for node in list(self.nodes or []):
            yield node
            if isinstance(node, Container):
                yield from node.walk()

    def _render_body_(self) -> str:
        nodes = self.nodes or []
        last = len(nodes) - 1
        while last > 0 and isinstance(nodes[last], CommentNode):
            last -= 1

        body = ""
        for i, node in enumerate(nodes):
            body += str(node)
            needs_terminator = isinstance(node, Declaration) or (isinstance(node, AtRule) and node.nodes is None)
            if needs_terminator and (i != last or self.raws["semicolon"]):
                body += ";"
        return body + self.raws["after"]

    def _render_block_(self) -> str:
        return "{" + self._render_body_() + ("}" if self.raws.get("closed", True) else "")

class Rule(Container):
    selector: str
    def __init__(self, selector: str, nodes: list[Node] | None = None, *, raws: dict[str, Any] | None = None) -> None:
        self.selector = selector
        super().__init__(nodes or [], raws={"between": " ", **(raws or {})})

    @property
    def source_text(self) -> str:
        return self.selector + self.raws["between"] + self._render_block_()

    def __repr__(self) -> str:
        return f"Rule({self.selector!r}, nodes={self.nodes})"

class AtRule(Container):
    name: str
    params: str
    def __init__(self, name: str, params: str = "", nodes: list[Node] | None = None, *, raws: dict[str, Any] | None = None) -> None:
        self.name = name
        self.params = params
        super().__init__(nodes, raws={"after_name": " " if params else "", "between": "", **(raws or {})})

    @property
    def source_text(self) -> str:
        head = f"@{self.name}{self.raws['after_name']}{self.params}{self.raws['between']}"
        if self.nodes is None:
            return head
        return head + self._render_block_()

    def __repr__(self) -> str:
        block = "None" if self.nodes is None else "{...}"
        return f"AtRule({self.name!r}, params={self.params!r}, block={block})"

class Stylesheet(Container):
    def __init__(self, nodes: list[Node] | None = None, *, location: str | None = None, raws: dict[str, Any] | None = None) -> None:
        super().__init__(nodes or [], raws=raws)
        self.location = location
        self.errors: list[ParseError] = []

    def insert_rule(self, rule: Node, index: int | None = None) -> int:
        if index is None:
            index = len(self.nodes)
        self.insert(index, rule)
        return index

    def delete_rule(self, index: int) -> Node:
        """Remove the statement at `index`.

        When the first statement goes, the next one inherits its leading
        whitespace so the stylesheet does not start with a stray gap.
        """
        old_rule = self.nodes[index]
        if index == 0 and len(self.nodes) > 1:
            self.nodes[1].raws["before"] = old_rule.raws["before"]
        return old_rule.remove()

    @property
    def source_text(self) -> str:
        return self._render_body_()

    def __str__(self) -> str:
        return self.source_text

    def __repr__(self) -> str:
        sep = "\n  "
        return f"""Stylesheet(
  {sep.join(repr(rule) for rule in self.nodes)}
)"""

Tokens = list[Token] | str | list[Component]

class Parse:
    @staticmethod
    def parse_component_values(_input_: Tokens) -> list[Component]:
        parser = Parser(_input_)
        result = []
        while not isinstance(val := parser.consume_component_value(), EOF):
            result.append(val)
        return result

    @staticmethod
    def parse_comma_separated(_input_: Tokens) -> list[list[Component]]:
        parser = Parser(_input_)
        if all(isinstance(v, Whitespace) for v in parser.tokens):
            return []

        result = []
        current = []
        while True:
            next = parser.consume_component_value()
            if isinstance(next, EOF):
                result.append(current)
                return result
            elif isinstance(next, Comma):
                result.append(current)
                current = []
            else:
                current.append(next)

    @staticmethod
    def parse_rule(_input_: Tokens) -> Rule | AtRule:
        parser = Parser(_input_)
        parser.skip_whitespace()

        first = parser.consume_component_value()
        if isinstance(first, EOF):
            raise SyntaxError("Expected a rule")
        elif isinstance(first, AtKeyword):
            rule, _ = parser.consume_at_rule(first)
        else:
            rule = parser.consume_qualified_rule(first)
            if rule is None:
                raise SyntaxError("Invalid rule")

        parser.skip_whitespace()
        if isinstance(parser.peek(), EOF):
            return rule
        raise SyntaxError("Invalid rule, more tokens then expected")

    @staticmethod
    def parse_declaration(_input_: Tokens) -> Declaration:
        parser = Parser(_input_)
        parser.skip_whitespace()

        first = parser.consume_component_value()
        if not isinstance(first, Ident):
            raise SyntaxError("Expected a property name")
        declaration, _ = parser.consume_declaration(first)
        if parser.errors:
            raise SyntaxError(str(parser.errors[0]))

        parser.skip_whitespace()
        if isinstance(parser.peek(), EOF):
            return declaration
        raise SyntaxError("Invalid declaration, more tokens then expected")

    @staticmethod
    def parse_stylesheet(source: Tokens, url: str | None = None) -> Stylesheet:
        stylesheet = Stylesheet(location=url)
        parser = Parser(source)
        parser.consume_body(stylesheet, top_level=True)
        stylesheet.errors = parser.errors
        return stylesheet


class Parser:
    # List of css tokens, return input
    # List of css component values, return input
    # string, tokenize and keep the lexer's errors
    def __init__(self, tokens: Tokens) -> None:
        self.errors: list[ParseError] = []
        if isinstance(tokens, str):
            lexer = Lexer(tokens)
            self.tokens: list[Token] | list[Component] = lexer.process()
            self.errors.extend(lexer.errors)
        elif isinstance(tokens, list):
            self.tokens = tokens
        else:
            raise TypeError(
                "Unexpected input to parse. Expected string, list of tokens, or list of component values."
            )
        self.index = 0

    def peek(self, amount: int = 1) -> Token | Component:
        if self.index + amount - 1 < len(self.tokens):
            return self.tokens[self.index + amount - 1]
        return EOF()

    def reconsume(self):
        self.index -= 1

    def next(self) -> Token | Component:
        if self.index < len(self.tokens):
            self.index += 1
            return self.tokens[self.index - 1]
        return EOF()

    def skip_whitespace(self):
        while isinstance(self.peek(), Whitespace):
            self.next()

    def error(self, error: ParseError):
        self.errors.append(error)

    def consume_block(self, opening: LCurlyBracket | LSquareBracket | LParantheses) -> Block:
        block = Block(opening)
        while True:
            next = self.next()
            if isinstance(next, opening.alt):
                return block
            elif isinstance(next, EOF):
                self.error(ParseError("Block was not closed"))
                block.closed = False
                return block
            else:
                self.reconsume()
                block.value.append(self.consume_component_value())

    def consume_function(self, function: Function) -> FunctionBlock:
        fblock = FunctionBlock(function.raw)
        while True:
            next = self.next()
            if isinstance(next, RParantheses):
                return fblock
            elif isinstance(next, EOF):
                self.error(ParseError("Function was not closed"))
                fblock.closed = False
                return fblock
            else:
                self.reconsume()
                fblock.value.append(self.consume_component_value())

    def consume_component_value(self) -> Component:
        next = self.next()
        if isinstance(next, (LCurlyBracket, LSquareBracket, LParantheses)):
            return self.consume_block(next)
        elif isinstance(next, Function):
            return self.consume_function(next)
        return next

    def consume_body(self, container: Container, top_level: bool = False) -> Container:
        """Consume statements into `container` until the input runs out."""
        before = ""
        semicolon = False
        while True:
            start = self.index
            next = self.consume_component_value()
            if isinstance(next, EOF):
                container.raws["after"] = before
                container.raws["semicolon"] = semicolon
                return container
            elif isinstance(next, (Whitespace, Semicolon)) or (top_level and isinstance(next, (CDO, CDC))):
                before += str(next)
                continue
            elif isinstance(next, Comment):
                container.append(CommentNode(next.raw, raws={"before": before}))
                before = ""
                continue

            if isinstance(next, AtKeyword):
                node, semicolon = self.consume_at_rule(next)
            elif top_level or self._starts_rule_():
                node, semicolon = self.consume_qualified_rule(next), False
            else:
                node, semicolon = self.consume_declaration(next)

            if node is None:
                # Unterminated rule: keep its text so nothing is lost on output
                before += stringify(self.tokens[start:self.index])
                continue
            node.raws["before"] = before
            before = ""
            container.append(node)

    def _starts_rule_(self) -> bool:
        """Whether the statement being read opens a block before it ends."""
        for token in self.tokens[self.index:]:
            if isinstance(token, Semicolon):
                return False
            elif isinstance(token, Block) and isinstance(token.token, LCurlyBracket):
                return True
        return False

    def _consume_nested_(self, container: Container, block: Block) -> Container:
        parser = Parser(block.value)
        parser.consume_body(container)
        self.errors.extend(parser.errors)
        if not block.closed:
            container.raws["closed"] = False
        return container

    def consume_at_rule(self, keyword: AtKeyword) -> tuple[AtRule, bool]:
        prelude = []
        block = None
        terminated = False
        while True:
            next = self.consume_component_value()
            if isinstance(next, Semicolon):
                terminated = True
                break
            elif isinstance(next, EOF):
                break
            elif isinstance(next, Block) and isinstance(next.token, LCurlyBracket):
                block = next
                break
            prelude.append(next)

        after_name, params, between = _split_spaces_(prelude)
        at_rule = AtRule(keyword.raw, stringify(params), raws={"after_name": after_name, "between": between})
        if block is not None:
            self._consume_nested_(at_rule, block)
        return at_rule, terminated

    def consume_qualified_rule(self, first: Component) -> Rule | None:
        prelude = [first]
        while True:
            next = self.consume_component_value()
            if isinstance(next, EOF):
                self.error(ParseError("Qualified rule is not closed"))
                return None
            elif isinstance(next, Block) and isinstance(next.token, LCurlyBracket):
                _, selector, between = _split_spaces_(prelude)
                return self._consume_nested_(Rule(stringify(selector), raws={"between": between}), next)
            prelude.append(next)

    def consume_declaration(self, first: Component) -> tuple[Declaration, bool]:
        components = [first]
        terminated = False
        while True:
            next = self.consume_component_value()
            if isinstance(next, Semicolon):
                terminated = True
                break
            elif isinstance(next, EOF):
                break
            components.append(next)

        _, components, after = _split_spaces_(components)
        colon = 1
        while colon < len(components) and isinstance(components[colon], Whitespace):
            colon += 1

        if not isinstance(first, Ident) or colon >= len(components) or not isinstance(components[colon], Colon):
            self.error(ParseError("Expected a colon"))
            return Declaration(stringify(components), raws={"between": "", "after": after}), terminated

        start = colon + 1
        while start < len(components) and isinstance(components[start], Whitespace):
            start += 1
        value = components[start:]

        important = ""
        if len(value) >= 2 and isinstance(value[-1], Ident) and value[-1].raw.lower() == "important":
            bang = len(value) - 2
            while bang >= 0 and isinstance(value[bang], Whitespace):
                bang -= 1
            if bang >= 0 and isinstance(value[bang], Delim) and value[bang].raw == "!":
                while bang > 0 and isinstance(value[bang - 1], Whitespace):
                    bang -= 1
                important = stringify(value[bang:])
                value = value[:bang]

        decl = Declaration(
            str(first),
            stringify(value),
            important=important != "",
            raws={"between": stringify(components[1:start]), "after": after},
        )
        if important:
            decl.raws["important"] = important
        return decl, terminated
