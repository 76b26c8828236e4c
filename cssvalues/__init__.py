"""Named constants for CSS: `@value` declarations, imports and `:export` blocks."""
from cssvalues.definitions import Definition, DefinitionKind, DefinitionTable, ImportRegistry
from cssvalues.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from cssvalues.options import DEFAULTS, OptionalOptions, Options, default_options
from cssvalues.values import Result, StatementClassifier, ValuesProcessor, process, process_path

__version__ = "0.1.0"

__all__ = [
    "Definition",
    "DefinitionKind",
    "DefinitionTable",
    "ImportRegistry",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "DEFAULTS",
    "OptionalOptions",
    "Options",
    "default_options",
    "Result",
    "StatementClassifier",
    "ValuesProcessor",
    "process",
    "process_path",
]
