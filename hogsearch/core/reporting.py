from __future__ import annotations
import json
import sys
import threading
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .models import ParsedRecord

RULE = "-" * 40


class ConsoleReporter:
    """Writes search results as plain text.

    Each banner or match block is written under one lock, so output from
    concurrent workers interleaves between blocks but never inside one.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream
        self._lock = threading.Lock()

    def _write(self, text: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        with self._lock:
            stream.write(text)
            stream.flush()

    def file_banner(self, path: Path) -> None:
        self._write(f"\n--- Searching in file: {path.name} ---\n")

    def record_match(self, record: ParsedRecord) -> None:
        header = f"\n--- Related Data at line {record.line_num} in {record.file_path.name} ---\n"
        try:
            self._write(header + json.dumps(record.data, indent=2, ensure_ascii=False) + "\n")
        except UnicodeEncodeError:
            # lone surrogates or a console codec that cannot represent the text
            self._write(header + json.dumps(record.data, indent=2) + "\n")

    def field_catalog(self, fields: Iterable[str]) -> None:
        lines = ["Searchable Fields (case-sensitive):", RULE]
        lines.extend(f"- {name}" for name in fields)
        lines.append(RULE)
        self._write("\n".join(lines) + "\n")
