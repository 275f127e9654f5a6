from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional

STORED = "stored"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass
class UploadItem:
    """One named byte stream handed over by the transport."""

    name: str
    content: BinaryIO
    size: Optional[int] = None


@dataclass
class ItemOutcome:
    name: str
    status: str
    stored_name: Optional[str] = None
    bytes_written: int = 0
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status == FAILED


@dataclass
class IngestionResult:
    success: bool
    message: str
    stored_names: List[str] = field(default_factory=list)
    outcomes: List[ItemOutcome] = field(default_factory=list)
