from __future__ import annotations
from typing import Any, Dict, Tuple

from .models import MODE_CONTAINS, MODE_EXACT


def matches_value(value: Any, term: str, mode: str) -> bool:
    """Return True if any string inside ``value`` matches ``term``.

    Strings are lowercased and compared against ``term`` (expected to be
    lowercased already). Lists match when any item matches, dicts when any
    value matches; keys are never compared. Numbers, booleans and null never
    match. Nested values are walked with an explicit stack, so nesting depth
    is not bounded by the interpreter's recursion limit.
    """
    pending = [value]
    while pending:
        current = pending.pop()
        if isinstance(current, str):
            lowered = current.lower()
            if mode == MODE_EXACT and lowered == term:
                return True
            if mode == MODE_CONTAINS and term in lowered:
                return True
        elif isinstance(current, list):
            pending.extend(reversed(current))
        elif isinstance(current, dict):
            pending.extend(reversed(list(current.values())))
    return False


def resolve_field(record: Dict[str, Any], path: str) -> Tuple[Any, bool]:
    """Walk a dot-delimited ``path`` through nested dicts.

    Returns ``(value, True)`` when the final key is present, even if its value
    is null, and ``(None, False)`` when a key is missing or an intermediate
    value is not a dict.
    """
    parts = path.split(".")
    current: Any = record
    for part in parts[:-1]:
        if not isinstance(current, dict) or part not in current:
            return None, False
        current = current[part]
    if not isinstance(current, dict) or parts[-1] not in current:
        return None, False
    return current[parts[-1]], True
