from __future__ import annotations
from typing import List

# Common trufflehog JSON output fields. Informational only; any dot-path can be searched.
SEARCHABLE_FIELDS: List[str] = [
    "DecoderName",
    "DetectorDescription",
    "DetectorName",
    "DetectorType",
    "project",
    "rotation_guide",
    "Raw",
    "RawV2",
    "Redacted",
    "SourceID",
    "commit",
    "email",
    "file",
    "line",
    "link",
    "repository",
    "timestamp",
    "SourceName",
    "SourceType",
    "StructuredData",
    "VerificationFromCache",
    "Verified",
]
