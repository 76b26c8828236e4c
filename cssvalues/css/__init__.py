"""
Lossless CSS tokenizer, component-value parser and stylesheet tree.

References:
    - [basics](https://developer.mozilla.org/en-US/docs/Learn/CSS/First_steps/How_CSS_is_structured)
    - [nesting](https://developer.chrome.com/articles/css-nesting/)
    - [custom properites](https://developer.mozilla.org/en-US/docs/Web/CSS/Using_CSS_custom_properties)
    - [@media](https://developer.mozilla.org/en-US/docs/Web/CSS/@media)

stylesheet => <comment/> | <at-rule/> | <ruleset/>
ruleset    => <selector/> { <declaration/>; <ruleset/> ... }
at-rule    => @<name/> <params/> ; | @<name/> <params/> { ... }
"""
from cssvalues.css.lexer import Lexer, ParseError
from cssvalues.css.parser import (
    AtRule,
    CommentNode,
    Container,
    Declaration,
    Node,
    Parse,
    Rule,
    Stylesheet,
)

__all__ = [
    "Lexer",
    "ParseError",
    "AtRule",
    "CommentNode",
    "Container",
    "Declaration",
    "Node",
    "Parse",
    "Rule",
    "Stylesheet",
]
