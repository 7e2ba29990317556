from __future__ import annotations
from typing import Any, Dict

from .matcher import matches_value, resolve_field
from .models import ParsedRecord, SearchConfig
from .reporting import ConsoleReporter


class RecordSearcher:
    """Decides whether a record matches and reports it once if so.

    With a field configured, ``prefix + field`` is resolved for each prefix in
    order and the first matching value wins. A field that matches under no
    prefix means no match; there is no fallback to searching the whole record.
    Without a field, every top-level value of the record is searched.
    """

    def __init__(self, config: SearchConfig, reporter: ConsoleReporter) -> None:
        self.config = config
        self.reporter = reporter

    def matches(self, data: Dict[str, Any]) -> bool:
        cfg = self.config
        if cfg.field:
            for prefix in cfg.prefixes:
                value, found = resolve_field(data, prefix + cfg.field)
                if found and matches_value(value, cfg.term, cfg.mode):
                    return True
            return False
        return any(matches_value(value, cfg.term, cfg.mode) for value in data.values())

    def search(self, record: ParsedRecord) -> bool:
        if record.data is None or not self.matches(record.data):
            return False
        self.reporter.record_match(record)
        return True
