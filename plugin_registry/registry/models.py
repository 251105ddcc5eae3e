from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from plugin_registry.documents.models import Document


class DuplicatePolicy(str, Enum):
    ERROR = "error"
    KEEP_LAST = "keep-last"


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class BuildIssue:
    path: Path
    error: Exception
    severity: IssueSeverity = IssueSeverity.ERROR

    @property
    def message(self) -> str:
        return str(self.error)

    def as_dict(self) -> dict[str, str]:
        return {
            "path": str(self.path),
            "severity": self.severity.value,
            "kind": type(self.error).__name__,
            "message": self.message,
        }


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading one file, before it is merged into the index."""

    path: Path
    document: Optional[Document] = None
    error: Optional[Exception] = None
