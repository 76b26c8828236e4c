import pytest

from cssvalues.css.parser import Parse
from cssvalues.substitution import (
    find_value_symbols,
    replace_selector_symbols,
    replace_symbols,
    replace_value_symbols,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("blue", "red"),
        ("1px solid blue", "1px solid red"),
        ("calc(base * 2)", "calc(10px * 2)"),
        ("color(blue lightness(base))", "color(red lightness(10px))"),
        ("blue,blue", "red,red"),
        ("[blue]", "[red]"),
        ("3char", "#0f0"),
        ("--blue", "i__const___blue_0"),
    ],
)
def test_value_names_are_replaced_everywhere(value, expected):
    replacements = {"blue": "red", "base": "10px", "3char": "#0f0", "--blue": "i__const___blue_0"}

    assert replace_value_symbols(value, replacements) == expected


@pytest.mark.parametrize(
    "value",
    [
        "blue-dark",
        "darkblue",
        "10blue",
        "#blue",
        '"blue"',
        "url(blue.png)",
        "blue(1)",
        "/* blue */",
        "50%",
    ],
)
def test_value_substitution_only_matches_whole_name_tokens(value):
    assert replace_value_symbols(value, {"blue": "red", "50": "x"}) == value


def test_value_substitution_keeps_whitespace_replacements_verbatim():
    assert replace_value_symbols("v-empty", {"v-empty": "   "}) == "   "
    assert replace_value_symbols("a v-empty b", {"v-empty": " /* c */"}) == "a  /* c */ b"


@pytest.mark.parametrize(
    ("selector", "expected"),
    [
        (".colorValue", ".red"),
        ("#colorValue", "#red"),
        (".colorValue > .colorValue", ".red > .red"),
        (".colorValue.colorValue:hover", ".red.red:hover"),
        ("div:not(.colorValue)", "div:not(.red)"),
        ("colorValue .x", "colorValue .x"),
        ("[data-x=colorValue]", "[data-x=colorValue]"),
        (":colorValue", ":colorValue"),
        (".colorValue-2", ".colorValue-2"),
    ],
)
def test_selector_substitution_only_touches_class_and_id_names(selector, expected):
    assert replace_selector_symbols(selector, {"colorValue": "red"}) == expected


def test_find_value_symbols_lists_names_in_order():
    assert find_value_symbols("calc(a * b) c 10px #d 'e'") == ["a", "b", "c", "10px"]


def test_replace_symbols_rewrites_the_whole_tree():
    stylesheet = Parse.parse_stylesheet(
        "@media small { .primary { color: primary; --c: primary } }\n"
        "@supports (display: primary) { .x { top: 0 } }\n"
        ".primary { primary: primary; }"
    )

    replace_symbols(stylesheet, {"small": "(max-width: 599px)", "primary": "blue"})

    assert str(stylesheet) == (
        "@media (max-width: 599px) { .blue { color: blue; --c: blue } }\n"
        "@supports (display: primary) { .x { top: 0 } }\n"
        ".blue { primary: blue; }"
    )


def test_replace_symbols_with_nothing_to_replace_is_a_no_op():
    source = ".a { color: red; }"
    stylesheet = Parse.parse_stylesheet(source)

    replace_symbols(stylesheet, {})

    assert str(stylesheet) == source
