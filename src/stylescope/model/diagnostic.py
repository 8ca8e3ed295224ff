"""Diagnostic model: non-fatal findings collected during an analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about the inputs of an analysis.

    Attributes:
        code: Identifier for the check that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        source: The stylesheet involved, if applicable.
        line: 1-based line in that stylesheet, if known.
    """

    code: str
    severity: Severity
    message: str
    source: str | None = None
    line: int | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = ""
        if self.source and self.line:
            location = f" [{self.source}:{self.line}]"
        elif self.source:
            location = f" [{self.source}]"
        return f"{self.severity.value}{location}: {self.message}"

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
            "source": self.source,
            "line": self.line,
        }
