"""
`@value` constants for CSS.

    @value primary: #0c77f8;
    @value small: (max-width: 599px);
    @value secondary, danger as error from "./colors.css";

    .button { color: primary; }
    @media small { .button { border-color: error; } }

Every `@value` statement is read in source order: plain definitions see only
the constants declared before them, imports get an alias that a later stage
resolves against the imported file. The statements are then removed, every
remaining usage is replaced, and the constants are published as

    :import("./colors.css") {
      i__const_secondary_0: secondary;
      i__const_error_1: danger;
    }
    :export {
      primary: #0c77f8;
      ...
    }
"""
from __future__ import annotations
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from cssvalues.css.lexer import Lexer, ParseError
from cssvalues.css.parser import (
    AtRule,
    Block,
    Container,
    Declaration,
    Parse,
    Rule,
    Stylesheet,
    stringify,
)
from cssvalues.definitions import (
    Definition,
    DefinitionKind,
    DefinitionTable,
    ImportRegistry,
    ImportSource,
    LiteralSource,
    UnresolvedSource,
)
from cssvalues.diagnostics import DiagnosticKind, Diagnostics
from cssvalues.options import OptionalOptions, default_options
from cssvalues.substitution import find_value_symbols, replace_symbols, replace_value_symbols

__all__ = ["StatementClassifier", "ValuesProcessor", "Result", "process", "process_path"]

logger = logging.getLogger(__name__)

IMPORTS = re.compile(r"^([^\n]+?|\([\s\S]+?\))\s+from\s+(\"[^\"]*\"|'[^']*'|[\w-]+)\Z")
IMPORT_NAME = re.compile(r"([\w-]+)(?:\s+as\s+([\w-]+))?")
DEFINITION = re.compile(r"\s*([\w-]+)(?:\s*:)?(.*)\Z", re.DOTALL)
COMMENTS = re.compile(r"/\*.*?\*/", re.DOTALL)
NOT_COLON = re.compile(r"[^\s:]")

class StatementClassifier:
    """Turns `@value` statements into definitions and import requests."""

    def __init__(self, table: DefinitionTable, registry: ImportRegistry, sink: Diagnostics, at_rule: str = "value") -> None:
        self.table = table
        self.registry = registry
        self.sink = sink
        self._absorbed_ = re.compile(rf"@{re.escape(at_rule)}(?![\w-])", re.IGNORECASE)

    def classify(self, node: AtRule) -> bool:
        """Record what `node` declares. False when the statement has to stay in the tree."""
        params = node.params
        if node.nodes is not None:
            # A missing `;` let the following rule's block end this statement
            self.sink.warn(f"Invalid value definition: {params}", node)
            return False

        statements = self._absorbed_.split(params)
        if len(statements) > 1:
            # A missing `;` swallowed the statements that follow, only the last is kept
            self.sink.warn(f"Invalid value definition: {params}", node)
            params = statements[-1].lstrip()

        if (imports := IMPORTS.match(params)) is not None:
            self._import_(imports.group(1), imports.group(2), node)
        else:
            self._define_(params, node.raws["between"], node)
        return True

    def resolve_source(self, reference: str) -> ImportSource:
        """A quoted path is used as is; a bare name is looked up among the constants declared so far."""
        if reference[0] in "\"'":
            return LiteralSource(reference)
        definition = self.table.get(reference)
        if definition is not None and definition.kind is DefinitionKind.Local:
            return LiteralSource(definition.value)
        return UnresolvedSource(reference)

    def _import_(self, names: str, reference: str, node: AtRule) -> None:
        source = self.resolve_source(reference)
        components = Parse.parse_component_values(names)
        if len(components) == 1 and isinstance(components[0], Block) and components[0].opening == "(":
            components = components[0].value

        for entry in Parse.parse_comma_separated(components):
            text = stringify(entry).strip()
            if (match := IMPORT_NAME.fullmatch(text)) is None:
                self.sink.warn(f"Invalid import definition: {text}", node)
                continue
            remote_name, local_name = match.group(1), match.group(2) or match.group(1)
            alias = self.registry.request(source, remote_name, local_name)
            self.table.set(Definition(local_name, remote_name, DefinitionKind.ImportedAlias, alias))

    def _define_(self, params: str, between: str, node: AtRule) -> None:
        if (match := DEFINITION.match(params + between)) is None:
            self.sink.warn(f"Invalid value definition: {params}", node)
            return

        name, value = match.groups()
        normalized = COMMENTS.sub("", value)
        if not normalized:
            self.sink.warn(f"Invalid value definition: {params}", node)
            return
        if not normalized.isspace():
            value = value.strip()

        value = replace_value_symbols(value, self.table.replacements())
        if name in find_value_symbols(value):
            self.sink.warn(f"Circular value definition: {name}", node, DiagnosticKind.CircularDefinition)
        self.table.set(Definition(name, value))

def _infer_raws_(root: Container) -> tuple[str, bool]:
    """Colon spacing and trailing semicolon used by the stylesheet's own rules."""
    colon, semicolon = None, None
    for node in root.walk():
        if colon is None and isinstance(node, Declaration) and ":" in node.raws["between"]:
            colon = NOT_COLON.sub("", node.raws["between"])
        if semicolon is None and isinstance(node, Container) and node.nodes and isinstance(node.nodes[-1], Declaration):
            semicolon = node.raws["semicolon"]
        if colon is not None and semicolon is not None:
            break
    return colon or ": ", bool(semicolon)

def _block_(selector: str, entries: Iterable[tuple[str, str]], colon: str, semicolon: bool) -> Rule:
    rule = Rule(selector, raws={"before": "\n", "between": " ", "after": "\n", "semicolon": semicolon})
    for prop, value in entries:
        rule.append(Declaration(prop, value, raws={"before": "\n  ", "between": colon}))
    return rule

class ValuesProcessor:
    """Runs the `@value` pass over a stylesheet tree, in place.

    A processor keeps its options and nothing else: every `run` starts with
    an empty definition table, import registry and alias counter.
    """

    def __init__(self, options: OptionalOptions | None = None) -> None:
        self.options = default_options(options)

    def run(self, stylesheet: Stylesheet, sink: Diagnostics | None = None) -> Diagnostics:
        sink = sink if sink is not None else Diagnostics()
        at_rule = self.options["at_rule"].lower()
        statements = [
            node for node in stylesheet.nodes
            if isinstance(node, AtRule) and node.name.lower() == at_rule
        ]
        if not statements:
            return sink

        table = DefinitionTable()
        registry = ImportRegistry(self.options["create_imported_name"])
        classifier = StatementClassifier(table, registry, sink, at_rule)

        position = stylesheet.index(statements[0])
        logger.debug("processing %d @%s statements", len(statements), at_rule)
        for statement in statements:
            if classifier.classify(statement):
                stylesheet.delete_rule(stylesheet.index(statement))

        replace_symbols(stylesheet, table.replacements(), self.options["replace_at_rule_params"])
        self._emit_(stylesheet, position, table, registry)
        return sink

    def _emit_(self, stylesheet: Stylesheet, position: int, table: DefinitionTable, registry: ImportRegistry) -> None:
        colon, semicolon = _infer_raws_(stylesheet)
        rules = [
            _block_(
                f":import({group.source})",
                ((name.alias, name.remote_name) for name in group.names),
                colon,
                semicolon,
            )
            for group in registry
        ]
        if len(table) > 0:
            rules.append(_block_(":export", ((d.name, d.display) for d in table), colon, semicolon))
        if not rules:
            return

        if position == 0:
            rules[0].raws["before"] = ""
        for offset, rule in enumerate(rules):
            stylesheet.insert_rule(rule, position + offset)
            logger.debug("emitted %s with %d entries", rule.selector, len(rule.nodes))

        following = position + len(rules)
        if following < len(stylesheet.nodes):
            node = stylesheet.nodes[following]
            if "\n" not in node.raws["before"]:
                node.raws["before"] = "\n" + node.raws["before"].lstrip()

@dataclass
class Result:
    stylesheet: Stylesheet
    diagnostics: Diagnostics

    @property
    def css(self) -> str:
        return str(self.stylesheet)

    @property
    def errors(self) -> list[ParseError]:
        """Problems the tokenizer and parser recovered from."""
        return self.stylesheet.errors

    @property
    def warnings(self) -> list[str]:
        return self.diagnostics.messages

def _run_(stylesheet: Stylesheet, options: OptionalOptions | None) -> Result:
    for error in stylesheet.errors:
        logger.debug("parse error in %s: %s", stylesheet.location or "<input>", error)
    diagnostics = ValuesProcessor(options).run(stylesheet)
    return Result(stylesheet, diagnostics)

def process(source: str, options: OptionalOptions | None = None, *, url: str | None = None) -> Result:
    """Parse `source`, run the `@value` pass over it and return the rewritten stylesheet."""
    return _run_(Parse.parse_stylesheet(source, url), options)

def process_path(path: str, options: OptionalOptions | None = None) -> Result:
    """Like `process`, for a stylesheet on disk. The file's `@charset` decides its encoding."""
    lexer = Lexer.from_path(path)
    tokens = lexer.process()
    stylesheet = Parse.parse_stylesheet(tokens, path)
    stylesheet.errors[:0] = lexer.errors
    return _run_(stylesheet, options)
