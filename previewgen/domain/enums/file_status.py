from __future__ import annotations
from enum import StrEnum

class FileStatus(StrEnum):
    generated = "generated"
    skipped = "skipped"
    failed = "failed"
