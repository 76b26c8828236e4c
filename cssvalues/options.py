from __future__ import annotations
import re
from collections.abc import Callable
from typing import TypedDict

__all__ = ["Options", "OptionalOptions", "DEFAULTS", "default_options", "create_imported_name"]

NON_WORD = re.compile(r"\W")

def create_imported_name(name: str, index: int) -> str:
    """Alias for an imported constant: `i__const_<name>_<index>` with non-word characters as `_`."""
    return f"i__const_{NON_WORD.sub('_', name)}_{index}"

class Options(TypedDict):
    create_imported_name: Callable[[str, int], str]
    at_rule: str
    replace_at_rule_params: tuple[str, ...]

class OptionalOptions(TypedDict, total=False):
    create_imported_name: Callable[[str, int], str]
    at_rule: str
    replace_at_rule_params: tuple[str, ...]

DEFAULTS: OptionalOptions = {
    "create_imported_name": create_imported_name,
    "at_rule": "value",
    "replace_at_rule_params": ("media",),
}

def default_options(origin: OptionalOptions | dict | None = None) -> Options:
    options = dict(origin or {})
    for key, value in DEFAULTS.items():
        options[key] = options.get(key, value)
    unknown = set(options) - set(DEFAULTS)
    if unknown:
        raise TypeError(f"Unknown options: {', '.join(sorted(unknown))}")
    return options
