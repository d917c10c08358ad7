from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    ERROR = "error"
    WARN = "warn"


@dataclass(frozen=True)
class Finding:
    severity: Severity
    message: str
    line: int | None = None
    check_id: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "message", str(self.message).strip())
        if self.line is not None:
            object.__setattr__(self, "line", int(self.line))

    def render(self) -> str:
        return f"{self.message} (line {self.line})" if self.line else self.message

    def as_dict(self) -> dict[str, Any]:
        return {"message": self.message, "line": self.line, "check": self.check_id}


@dataclass(frozen=True)
class Report:
    errors: tuple[Finding, ...] = ()
    warnings: tuple[Finding, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def as_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [item.as_dict() for item in self.errors],
            "warnings": [item.as_dict() for item in self.warnings],
            "summary": {"errors": len(self.errors), "warnings": len(self.warnings)},
        }


@dataclass
class FindingLog:
    """Ordered collector used while one document is being validated."""

    check_id: str = ""
    items: list[Finding] = field(default_factory=list)

    def error(self, message: str, line: int | None = None) -> None:
        self.items.append(Finding(Severity.ERROR, message, line, self.check_id))

    def warning(self, message: str, line: int | None = None) -> None:
        self.items.append(Finding(Severity.WARN, message, line, self.check_id))

    def scoped(self, check_id: str) -> "FindingLog":
        return FindingLog(check_id=check_id, items=self.items)

    @property
    def errors(self) -> tuple[Finding, ...]:
        return tuple(item for item in self.items if item.severity is Severity.ERROR)

    @property
    def warnings(self) -> tuple[Finding, ...]:
        return tuple(item for item in self.items if item.severity is Severity.WARN)

    def to_report(self) -> Report:
        return Report(errors=self.errors, warnings=self.warnings)
