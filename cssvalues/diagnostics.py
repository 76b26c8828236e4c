from __future__ import annotations
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from cssvalues.css.parser import Node

__all__ = ["DiagnosticKind", "Diagnostic", "Diagnostics"]

logger = logging.getLogger(__name__)

class DiagnosticKind(Enum):
    MalformedDeclaration = "malformed-declaration"
    CircularDefinition = "circular-definition"

@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found while processing a stylesheet."""

    message: str
    source_text: str
    kind: DiagnosticKind = DiagnosticKind.MalformedDeclaration
    node: Node | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return self.message

@dataclass
class Diagnostics:
    """Collects diagnostics in the order they were reported.

    Any object with a matching `warn` method can stand in for this one.
    """

    items: list[Diagnostic] = field(default_factory=list)

    def warn(self, message: str, node: Node | None = None, kind: DiagnosticKind = DiagnosticKind.MalformedDeclaration) -> Diagnostic:
        diagnostic = Diagnostic(
            message,
            node.source_text if node is not None else "",
            kind,
            node,
        )
        logger.warning(message)
        self.items.append(diagnostic)
        return diagnostic

    @property
    def messages(self) -> list[str]:
        return [diagnostic.message for diagnostic in self.items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Diagnostic:
        return self.items[index]
