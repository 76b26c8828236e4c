"""
Token-exact replacement of constant names.

Text is tokenized and grouped into component values, then walked recursively so
names inside `calc(...)`, `color(red lightness(50%))` or `:not(.foo)` are found
like any other. Only whole tokens are compared; `red-dark` never matches `red`.
"""
from __future__ import annotations
import re
from collections.abc import Iterable, Iterator, Mapping

from cssvalues.css.parser import (
    AtRule,
    Block,
    Container,
    Declaration,
    FunctionBlock,
    Parse,
    Rule,
    Component,
)
from cssvalues.css.tokens import Delim, Dimension, Hash, Ident, Number, Percentage

__all__ = [
    "replace_value_symbols",
    "replace_selector_symbols",
    "replace_symbols",
    "find_value_symbols",
]

NAME = re.compile(r"[\w-]+")

def _name_of_(component: Component) -> str | None:
    """The constant name a value token could stand for, if it has the shape of one.

    Names may start with a digit (`3char`), which the tokenizer reads as a
    number or dimension, so those count as long as all of their text is a name.
    """
    if isinstance(component, Ident) or (
        isinstance(component, (Number, Dimension)) and not isinstance(component, Percentage)
    ):
        text = str(component)
        if NAME.fullmatch(text):
            return text
    return None

def _replace_value_(components: list[Component], replacements: Mapping[str, str]) -> str:
    result = ""
    for component in components:
        if isinstance(component, (FunctionBlock, Block)):
            result += component.opening + _replace_value_(component.value, replacements) + component.closing
        elif (name := _name_of_(component)) is not None and name in replacements:
            result += replacements[name]
        else:
            result += str(component)
    return result

def _replace_selector_(components: list[Component], replacements: Mapping[str, str]) -> str:
    result = ""
    previous = None
    for component in components:
        if isinstance(component, (FunctionBlock, Block)):
            result += component.opening + _replace_selector_(component.value, replacements) + component.closing
        elif isinstance(component, Hash) and component.raw in replacements:
            result += f"#{replacements[component.raw]}"
        elif (
            isinstance(component, Ident)
            and isinstance(previous, Delim)
            and previous.raw == "."
            and component.raw in replacements
        ):
            result += replacements[component.raw]
        else:
            result += str(component)
        previous = component
    return result

def replace_value_symbols(value: str, replacements: Mapping[str, str]) -> str:
    """Replace every name token in a declaration value or at-rule prelude."""
    if not replacements:
        return value
    return _replace_value_(Parse.parse_component_values(value), replacements)

def replace_selector_symbols(selector: str, replacements: Mapping[str, str]) -> str:
    """Replace the name part of every class and id selector; the `.` or `#` stays."""
    if not replacements:
        return selector
    return _replace_selector_(Parse.parse_component_values(selector), replacements)

def _find_value_(components: list[Component]) -> Iterator[str]:
    for component in components:
        if isinstance(component, (FunctionBlock, Block)):
            yield from _find_value_(component.value)
        elif (name := _name_of_(component)) is not None:
            yield name

def find_value_symbols(value: str) -> list[str]:
    """Names a value refers to, in order of appearance."""
    return list(_find_value_(Parse.parse_component_values(value)))

def replace_symbols(root: Container, replacements: Mapping[str, str], at_rules: Iterable[str] = ("media",)) -> None:
    """Rewrite every declaration value, rule selector and listed at-rule prelude under `root`."""
    if not replacements:
        return
    at_rules = {name.lower() for name in at_rules}
    for node in root.walk():
        if isinstance(node, Declaration):
            node.value = replace_value_symbols(node.value, replacements)
        elif isinstance(node, Rule):
            node.selector = replace_selector_symbols(node.selector, replacements)
        elif isinstance(node, AtRule) and node.name.lower() in at_rules:
            node.params = replace_value_symbols(node.params, replacements)
