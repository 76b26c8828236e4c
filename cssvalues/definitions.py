"""
Bookkeeping for one pass over a stylesheet: the constants declared so far and
the names imported from other stylesheets.

Both structures are an entry list plus a name index, so iteration order is
always the order names were first seen, whatever happens to them afterwards.
"""
from __future__ import annotations
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing_extensions import TypeAliasType

__all__ = [
    "DefinitionKind",
    "Definition",
    "DefinitionTable",
    "LiteralSource",
    "UnresolvedSource",
    "ImportSource",
    "ImportedName",
    "ImportGroup",
    "ImportRegistry",
]

logger = logging.getLogger(__name__)

class DefinitionKind(Enum):
    Local = "local"
    ImportedAlias = "imported-alias"

@dataclass(frozen=True)
class Definition:
    name: str
    value: str
    kind: DefinitionKind = DefinitionKind.Local
    alias: str | None = None

    @property
    def display(self) -> str:
        """Text written for this constant, both in `:export` and at every usage."""
        if self.kind is DefinitionKind.ImportedAlias:
            return self.alias
        return self.value

class DefinitionTable:
    def __init__(self) -> None:
        self._entries: list[Definition] = []
        self._index: dict[str, int] = {}

    def set(self, definition: Definition) -> Definition:
        """Add a definition, replacing an earlier one of the same name in place."""
        if (position := self._index.get(definition.name)) is not None:
            self._entries[position] = definition
        else:
            self._index[definition.name] = len(self._entries)
            self._entries.append(definition)
        logger.debug("defined %s = %r (%s)", definition.name, definition.display, definition.kind.value)
        return definition

    def get(self, name: str) -> Definition | None:
        if (position := self._index.get(name)) is not None:
            return self._entries[position]
        return None

    def replacements(self) -> dict[str, str]:
        """Name to replacement text for every constant, in declaration order."""
        return {definition.name: definition.display for definition in self._entries}

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[Definition]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

@dataclass(frozen=True)
class LiteralSource:
    """A path as written in the stylesheet, quotes included."""
    path: str

    def __str__(self) -> str:
        return self.path

@dataclass(frozen=True)
class UnresolvedSource:
    """A bare name that was not a known constant when the import was read."""
    name: str

    def __str__(self) -> str:
        return self.name

ImportSource = TypeAliasType("ImportSource", LiteralSource | UnresolvedSource)

@dataclass(frozen=True)
class ImportedName:
    remote_name: str
    alias: str

@dataclass
class ImportGroup:
    source: ImportSource
    names: list[ImportedName] = field(default_factory=list)

class ImportRegistry:
    """Import requests grouped by source, each imported name under a file-unique alias."""

    def __init__(self, create_imported_name: Callable[[str, int], str]) -> None:
        self._create_imported_name_ = create_imported_name
        self._groups: list[ImportGroup] = []
        self._index: dict[str, int] = {}
        self._aliases: set[str] = set()
        self._counter = 0

    def request(self, source: ImportSource, remote_name: str, local_name: str) -> str:
        """Register `remote_name` from `source` and return the alias it is known by locally."""
        alias = self._create_imported_name_(local_name, self._counter)
        if alias in self._aliases:
            raise ValueError(f"Duplicate import alias {alias!r} for {local_name!r}")
        self._counter += 1
        self._aliases.add(alias)

        key = str(source)
        if (position := self._index.get(key)) is None:
            position = self._index[key] = len(self._groups)
            self._groups.append(ImportGroup(source))
        self._groups[position].names.append(ImportedName(remote_name, alias))
        logger.debug("imported %s from %s as %s", remote_name, key, alias)
        return alias

    def __iter__(self) -> Iterator[ImportGroup]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)
