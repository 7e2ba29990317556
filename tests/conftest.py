import io
import json
import logging
from pathlib import Path

import pytest

from hogsearch.core.models import SearchConfig
from hogsearch.core.reporting import ConsoleReporter


def _write_jsonl(path: Path, lines) -> Path:
    """Write ``lines`` one per line; dicts are serialized, strings written as-is."""
    rendered = [json.dumps(line) if isinstance(line, dict) else line for line in lines]
    path.write_text("\n".join(rendered) + "\n", encoding="utf-8")
    return path


@pytest.fixture()
def write_jsonl():
    return _write_jsonl


@pytest.fixture()
def out_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def reporter(out_stream: io.StringIO) -> ConsoleReporter:
    return ConsoleReporter(out_stream)


@pytest.fixture()
def github_finding() -> dict:
    return {
        "SourceMetadata": {
            "Data": {
                "Github": {
                    "link": "https://github.com/acme/app/blob/abc123/config.py#L4",
                    "repository": "https://github.com/acme/app.git",
                    "commit": "abc123",
                    "email": "Alice <alice@example.com>",
                    "file": "config.py",
                    "line": 4,
                    "login": "alice",
                    "timestamp": "2024-01-01 10:00:00 +0000",
                }
            }
        },
        "SourceID": 1,
        "SourceType": 7,
        "SourceName": "trufflehog - github",
        "DetectorType": 2,
        "DetectorName": "AWS",
        "DecoderName": "PLAIN",
        "Verified": True,
        "Raw": "AKIAEXAMPLE",
        "RawV2": "",
        "Redacted": "AKIAEXAMPLE",
        "ExtraData": {"account": "123456789012", "resource_type": "Access key"},
        "StructuredData": None,
    }


def _make_config(term: str, mode: str = "contains", field: str = "", extra_prefixes=()) -> SearchConfig:
    return SearchConfig.create(term, mode, field, extra_prefixes)


@pytest.fixture()
def make_config():
    return _make_config


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("hogsearch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
