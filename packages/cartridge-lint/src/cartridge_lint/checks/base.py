from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from ..document import CartridgeDocument, SectionIndex
from ..model import FindingLog
from ..registry import StackProfile


@dataclass(frozen=True)
class CheckTarget:
    """Everything a body check may read for one document."""

    document: CartridgeDocument
    sections: SectionIndex
    header: Mapping[str, Any]
    stack_name: str | None
    profile: StackProfile | None

    @property
    def body(self) -> str:
        return self.document.body

    @property
    def tier(self) -> str | None:
        value = self.header.get("tier")
        return str(value) if value is not None else None


CheckFunc = Callable[[CheckTarget, FindingLog], None]


@dataclass(frozen=True)
class CheckDef:
    check_id: str
    description: str
    fn: CheckFunc
