"""
Run Data Models

Per-file outcomes and the per-run summary returned by the traversal driver.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List


class Mode(Enum):
    """What a run does to each matching file"""
    ADD = "add"
    CHECK = "check"
    REMOVE = "remove"


class ApplyResult(Enum):
    """Outcome of inserting a header"""
    ADDED = "added"
    ALREADY_PRESENT = "already_present"


class RemoveResult(Enum):
    """Outcome of removing a header"""
    REMOVED = "removed"
    NOT_PRESENT = "not_present"


@dataclass
class FileFailure:
    """A file or directory entry that could not be processed"""
    path: Path
    error: str


@dataclass
class Summary:
    """Counters of one traversal run"""
    files_changed: int = 0
    filetypes_matched: int = 0
    missing: List[Path] = field(default_factory=list)  # CHECK mode only
    failures: List[FileFailure] = field(default_factory=list)

    @property
    def files_missing(self) -> int:
        return len(self.missing)

    @property
    def files_failed(self) -> int:
        return len(self.failures)

    @property
    def no_filetypes_matched(self) -> bool:
        """Advisory condition: no file matched any configured rule"""
        return self.filetypes_matched == 0
