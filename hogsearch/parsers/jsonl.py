from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator

from ..core.models import ParsedRecord


class RecordParseError(ValueError):
    """A line that is not a single JSON object."""


def _reject_constant(name: str) -> Any:
    raise RecordParseError(f"invalid JSON literal {name}")


class JSONLinesParser:
    NAME = "jsonl"

    def parse_line(self, text: str) -> Dict[str, Any]:
        try:
            data = json.loads(text, parse_constant=_reject_constant)
        except RecordParseError:
            raise
        except json.JSONDecodeError as exc:
            raise RecordParseError(str(exc)) from exc
        except RecursionError as exc:
            raise RecordParseError("JSON nesting too deep") from exc
        if not isinstance(data, dict):
            raise RecordParseError(f"expected a JSON object, got {type(data).__name__}")
        return data

    def parse(self, path: Path, lines: Iterable[str]) -> Iterator[ParsedRecord]:
        """Yield one record per physical line, numbered from 1.

        Unparseable lines are yielded with ``error`` set so the caller can
        report them and keep going. Read errors from ``lines`` propagate.
        """
        for i, raw in enumerate(lines, start=1):
            text = raw.rstrip("\r\n")
            try:
                data = self.parse_line(text)
            except RecordParseError as exc:
                yield ParsedRecord(file_path=path, line_num=i, text=text, error=str(exc))
                continue
            yield ParsedRecord(file_path=path, line_num=i, text=text, data=data)
