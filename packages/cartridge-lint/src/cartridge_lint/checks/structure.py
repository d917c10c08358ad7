from __future__ import annotations

from ..model import FindingLog
from .base import CheckTarget

REQUIRED_SECTIONS = (
    "Purpose",
    "Stack Contract",
    "Development Style",
    "Inputs",
    "Outputs",
    "Guardrails",
    "Steps the Agent Must Follow",
    "Quality Gates",
    "Integration Points",
    "Examples",
    "Version History",
)


def canonical_index(title: str, required: tuple[str, ...] = REQUIRED_SECTIONS) -> int | None:
    for idx, name in enumerate(required):
        if title.startswith(name):
            return idx
    return None


def check_sections(target: CheckTarget, log: FindingLog, required: tuple[str, ...] = REQUIRED_SECTIONS) -> None:
    titles = target.sections.titles()
    for name in required:
        if not any(title.startswith(name) for title in titles):
            log.error(f"Missing required section: ## {name}")

    expected_order = ", ".join(required)
    highest = -1
    highest_title = ""
    for section in target.sections.sections:
        idx = canonical_index(section.title, required)
        if idx is None:
            continue
        if idx < highest:
            log.warning(
                f'Section "{section.title}" is out of order (found after "{highest_title}"). '
                f"Expected order: {expected_order}",
                line=section.line,
            )
            continue
        highest = idx
        highest_title = section.title
