import pytest

from cssvalues.css.parser import (
    AtRule,
    Block,
    CommentNode,
    Declaration,
    FunctionBlock,
    Parse,
    Rule,
    Stylesheet,
    stringify,
)
from cssvalues.css.tokens import Ident, Whitespace


def test_parser_builds_rules_declarations_and_at_rules():
    stylesheet = Parse.parse_stylesheet(
        """@value red blue;
/* note */
.foo, .bar > a { color: red; margin: 0 !important }
@media (max-width: 599px) { .foo { color: blue; } }"""
    )

    at_rule, comment, rule, media = stylesheet.nodes
    assert isinstance(at_rule, AtRule)
    assert at_rule.name == "value"
    assert at_rule.params == "red blue"
    assert at_rule.nodes is None
    assert isinstance(comment, CommentNode)
    assert comment.comment == "/* note */"
    assert isinstance(rule, Rule)
    assert rule.selector == ".foo, .bar > a"
    color, margin = rule.nodes
    assert (color.prop, color.value, color.important) == ("color", "red", False)
    assert (margin.prop, margin.value, margin.important) == ("margin", "0", True)
    assert rule.raws["semicolon"] is False
    assert media.params == "(max-width: 599px)"
    assert isinstance(media.nodes[0], Rule)
    assert media.nodes[0].nodes[0].value == "blue"


def test_parser_moves_trailing_space_and_comments_out_of_at_rule_params():
    stylesheet = Parse.parse_stylesheet("@value v-comment:/* comment */;@value v-empty:   ;")

    comment, empty = stylesheet.nodes
    assert comment.params == "v-comment:"
    assert comment.raws["between"] == "/* comment */"
    assert empty.params == "v-empty:"
    assert empty.raws["between"] == "   "


def test_parser_keeps_statements_absorbed_by_a_missing_semicolon():
    stylesheet = Parse.parse_stylesheet("@value red blue\n@value green yellow")

    assert len(stylesheet.nodes) == 1
    assert stylesheet.nodes[0].params == "red blue\n@value green yellow"
    assert stylesheet.raws["semicolon"] is False


def test_parser_keeps_declaration_spacing():
    stylesheet = Parse.parse_stylesheet(":root { --color:v-empty; --other : x }")

    color, other = stylesheet.nodes[0].nodes
    assert color.prop == "--color"
    assert color.raws["between"] == ":"
    assert color.value == "v-empty"
    assert other.raws["between"] == " : "
    assert other.raws["after"] == " "


def test_parser_reads_nested_rules_inside_rules():
    stylesheet = Parse.parse_stylesheet(".a { color: red; &:hover { color: blue } .b & { top: 0 } }")

    nodes = stylesheet.nodes[0].nodes
    assert [type(node) for node in nodes] == [Declaration, Rule, Rule]
    assert nodes[1].selector == "&:hover"
    assert nodes[2].selector == ".b &"


def test_parser_collects_errors_for_unclosed_input():
    stylesheet = Parse.parse_stylesheet(".a { color: red")

    assert [str(error) for error in stylesheet.errors] == ["Block was not closed"]
    assert str(stylesheet) == ".a { color: red"


def test_parser_keeps_an_unterminated_rule_as_text():
    stylesheet = Parse.parse_stylesheet(".a { } .b")

    assert len(stylesheet.nodes) == 1
    assert [str(error) for error in stylesheet.errors] == ["Qualified rule is not closed"]
    assert str(stylesheet) == ".a { } .b"


@pytest.mark.parametrize(
    "source",
    [
        "",
        "  \n",
        "@value red blue;",
        "@value red blue\n@value green yellow",
        "@value v-comment:/* comment */;",
        "@value (\n  blue,\n  red\n) from \"./colors.css\";\n.foo { color: red; }\n.bar { color: blue }",
        "@import url(x.css);;\n.a{color:red;;}\n\n/* end */\n",
        ".a { color: red /* why */ ; }",
        "@font-face { font-family: x; src: url(x.woff) }",
        "@media screen { @supports (display: grid) { .a { display: grid } } }",
        ".a { color: red; } /* trailing */",
        "a { b }",
    ],
)
def test_stylesheet_round_trips_source_text(source):
    assert str(Parse.parse_stylesheet(source)) == source


def test_component_values_group_functions_and_blocks():
    components = Parse.parse_component_values("color(red lightness(50%)) [a] (b)")

    function = components[0]
    assert isinstance(function, FunctionBlock)
    assert function.name == "color"
    assert isinstance(function.value[2], FunctionBlock)
    assert function.value[2].name == "lightness"
    assert isinstance(components[2], Block)
    assert components[2].opening == "["
    assert components[4].closing == ")"
    assert stringify(components) == "color(red lightness(50%)) [a] (b)"


def test_unclosed_function_does_not_invent_a_closing_paranthesis():
    components = Parse.parse_component_values("calc(1px + ")

    assert components[0].closed is False
    assert stringify(components) == "calc(1px + "


def test_comma_separated_values_keep_empty_entries():
    groups = Parse.parse_comma_separated(" a, b as c ,")

    assert [stringify(group).strip() for group in groups] == ["a", "b as c", ""]
    assert groups[0] == [Whitespace(" "), Ident("a")]


def test_stylesheet_inserts_and_deletes_rules():
    stylesheet = Parse.parse_stylesheet("@value x: y; .a { top: 0 }")

    removed = stylesheet.delete_rule(0)

    assert isinstance(removed, AtRule)
    assert removed.parent is None
    assert str(stylesheet) == ".a { top: 0 }"

    index = stylesheet.insert_rule(Rule(".b", [Declaration("left", "1px")], raws={"before": "\n"}))

    assert index == 1
    assert str(stylesheet) == ".a { top: 0 }\n.b {left: 1px}"


def test_walk_visits_nodes_in_source_order():
    stylesheet = Parse.parse_stylesheet("@media print { .a { top: 0 } } .b { left: 0 }")

    visited = [type(node).__name__ for node in stylesheet.walk()]

    assert visited == ["AtRule", "Rule", "Declaration", "Rule", "Declaration"]


def test_new_nodes_render_with_default_spacing():
    rule = Rule(":export", raws={"after": "\n"})
    rule.append(Declaration("red", "blue", raws={"before": "\n  "}))
    stylesheet = Stylesheet([rule])

    assert str(stylesheet) == ":export {\n  red: blue\n}"
    assert rule.parent is stylesheet


def test_container_first_and_last_children():
    stylesheet = Parse.parse_stylesheet(".a { top: 0; left: 0 }", url="sheet.css")
    rule = stylesheet.first

    assert stylesheet.location == "sheet.css"
    assert rule is stylesheet.last
    assert rule.first.prop == "top"
    assert rule.last.prop == "left"
    assert Rule(".empty").first is None


def test_parse_rule_reads_exactly_one_rule():
    rule = Parse.parse_rule("  .a { top: 0 }\n")
    at_rule = Parse.parse_rule("@media print { .b { left: 0 } }")

    assert isinstance(rule, Rule)
    assert rule.selector == ".a"
    assert isinstance(at_rule, AtRule)
    assert at_rule.params == "print"


@pytest.mark.parametrize("source", ["", "   ", ".a", ".a { } .b { }"])
def test_parse_rule_rejects_anything_but_one_rule(source):
    with pytest.raises(SyntaxError):
        Parse.parse_rule(source)


def test_parse_declaration():
    declaration = Parse.parse_declaration(" margin : 0 auto !important")

    assert declaration.prop == "margin"
    assert declaration.value == "0 auto"
    assert declaration.important is True


@pytest.mark.parametrize("source", ["", "margin 0", "margin: 0; top: 0", "1px: 0"])
def test_parse_declaration_rejects_invalid_input(source):
    with pytest.raises(SyntaxError):
        Parse.parse_declaration(source)
