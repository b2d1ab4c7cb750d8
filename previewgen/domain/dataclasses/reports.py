# previewgen/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from previewgen.domain.enums.file_status import FileStatus


# ---------------------------------------------------------------------------
# Base report (shared fields + utilities)
# ---------------------------------------------------------------------------
@dataclass
class BaseReport:
    """Common report base:
    - timing: started_at / finished_at
    - error capture: error_details
    - helpers: start(), stop(), add_error(), as_dict()
    """
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    # Each tuple is (subject/path, message)
    error_details: List[Tuple[str, str]] = field(default_factory=list)

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def add_error(self, subject: str, message: str) -> None:
        self.error_details.append((subject, message))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FileOutcome:
    source: Path
    status: FileStatus
    output: Optional[Path] = None
    reason: Optional[str] = None


# ---------------------------------------------------------------------------
# Batch (preview generation) report
# ---------------------------------------------------------------------------
@dataclass
class BatchReport(BaseReport):
    found: int = 0        # candidates handed to the runner
    planned: int = 0      # candidates that passed the size/overwrite filter
    generated: int = 0
    skipped: int = 0
    errors: int = 0
    outcomes: List[FileOutcome] = field(default_factory=list)

    def record(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.status == FileStatus.generated:
            self.generated += 1
        elif outcome.status == FileStatus.skipped:
            self.skipped += 1
        else:
            self.errors += 1
            self.add_error(str(outcome.source), outcome.reason or "unknown error")

    @property
    def done(self) -> int:
        return self.generated + self.errors
