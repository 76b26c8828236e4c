import pytest

from cssvalues.definitions import (
    Definition,
    DefinitionKind,
    DefinitionTable,
    ImportedName,
    ImportRegistry,
    LiteralSource,
    UnresolvedSource,
)
from cssvalues.options import create_imported_name


def test_definition_table_keeps_first_declaration_order_on_redeclaration():
    table = DefinitionTable()
    table.set(Definition("a", "red"))
    table.set(Definition("b", "blue"))
    table.set(Definition("a", "green"))

    assert [definition.name for definition in table] == ["a", "b"]
    assert table.get("a").value == "green"
    assert table.replacements() == {"a": "green", "b": "blue"}
    assert "b" in table
    assert "c" not in table
    assert table.get("c") is None
    assert len(table) == 2


def test_imported_definitions_display_their_alias():
    local = Definition("colors", '"./colors.css"')
    imported = Definition("red", "crimson", DefinitionKind.ImportedAlias, "i__const_red_0")

    assert local.display == '"./colors.css"'
    assert imported.display == "i__const_red_0"


def test_definitions_are_immutable():
    definition = Definition("a", "red")

    with pytest.raises(AttributeError):
        definition.value = "blue"


def test_registry_merges_requests_for_the_same_source():
    registry = ImportRegistry(create_imported_name)

    assert registry.request(LiteralSource('"./a.css"'), "blue", "blue") == "i__const_blue_0"
    assert registry.request(UnresolvedSource("colors"), "red", "red") == "i__const_red_1"
    assert registry.request(LiteralSource('"./a.css"'), "green", "accent") == "i__const_accent_2"

    groups = list(registry)
    assert len(registry) == 2
    assert groups[0].source == LiteralSource('"./a.css"')
    assert groups[0].names == [
        ImportedName("blue", "i__const_blue_0"),
        ImportedName("green", "i__const_accent_2"),
    ]
    assert str(groups[1].source) == "colors"
    assert groups[1].names == [ImportedName("red", "i__const_red_1")]


def test_registry_rejects_duplicate_aliases():
    registry = ImportRegistry(lambda name, index: f"imported_{name}")
    registry.request(LiteralSource('"./a.css"'), "red", "red")

    with pytest.raises(ValueError, match="Duplicate import alias 'imported_red'"):
        registry.request(LiteralSource('"./b.css"'), "red", "red")


@pytest.mark.parametrize(
    ("name", "index", "alias"),
    [
        ("red", 0, "i__const_red_0"),
        ("--red", 0, "i__const___red_0"),
        ("v-color", 12, "i__const_v_color_12"),
    ],
)
def test_default_alias_replaces_non_word_characters(name, index, alias):
    assert create_imported_name(name, index) == alias
