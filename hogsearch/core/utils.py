from __future__ import annotations
import codecs
import os
import chardet  # type: ignore
from pathlib import Path
from typing import List

ENCODING_SAMPLE_BYTES = 4096
JSON_SUFFIX = ".json"


def detect_encoding(path: Path, sample_size: int = ENCODING_SAMPLE_BYTES) -> str:
    with path.open("rb") as f:
        head = f.read(sample_size)
    if head.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    try:
        # final=False tolerates a multi-byte character cut at the sample boundary
        codecs.getincrementaldecoder("utf-8")().decode(head, final=False)
        return "utf-8"
    except UnicodeDecodeError:
        pass
    enc = chardet.detect(head).get("encoding")
    if not enc or enc.lower() == "ascii":
        return "utf-8"
    try:
        codecs.lookup(enc)
    except LookupError:
        return "utf-8"
    return enc


def is_json_file(name: str) -> bool:
    return name.endswith(JSON_SUFFIX)


def list_json_files(root: Path) -> List[Path]:
    """List ``root`` (non-recursively) and keep entries named ``*.json``, sorted by name.

    Raises ``OSError`` when the directory cannot be listed.
    """
    names = sorted(os.listdir(root))
    return [root / name for name in names if is_json_file(name)]
