from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

MODE_EXACT = "exact"
MODE_CONTAINS = "contains"
SEARCH_MODES = (MODE_EXACT, MODE_CONTAINS)

# Tried in order; trufflehog nests git metadata under SourceMetadata for some sources.
DEFAULT_FIELD_PREFIXES: Tuple[str, ...] = ("", "SourceMetadata.Data.Github.")


@dataclass
class ParsedRecord:
    file_path: Path
    line_num: int
    text: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None  # set instead of data when the line could not be parsed


@dataclass(frozen=True)
class SearchConfig:
    """Read-only search settings shared by every worker for one run."""

    term: str  # already lowercased
    mode: str = MODE_CONTAINS
    field: str = ""
    prefixes: Tuple[str, ...] = DEFAULT_FIELD_PREFIXES

    @classmethod
    def create(
        cls,
        term: str,
        mode: str = MODE_CONTAINS,
        field: Optional[str] = None,
        extra_prefixes: Iterable[str] = (),
    ) -> "SearchConfig":
        if not term:
            raise ValueError("search term must not be empty")
        if mode not in SEARCH_MODES:
            raise ValueError(f"search mode must be one of {', '.join(SEARCH_MODES)}, got {mode!r}")
        prefixes = list(DEFAULT_FIELD_PREFIXES)
        for prefix in extra_prefixes:
            if prefix not in prefixes:
                prefixes.append(prefix)
        return cls(term=term.lower(), mode=mode, field=field or "", prefixes=tuple(prefixes))
