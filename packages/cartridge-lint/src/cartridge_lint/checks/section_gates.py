from __future__ import annotations

from ..document import find_code_blocks
from ..model import FindingLog
from .base import CheckTarget

QUALITY_GATES = "Quality Gates"
EXAMPLES = "Examples"
SHELL_LANGUAGES = frozenset({"bash", "sh", "shell", "zsh", "console"})
STRICT_TIERS = ("productizing", "production")
EXPECTED_GATE_COMMANDS = ("lint", "typecheck", "test")


def _section_first_line(target: CheckTarget, name: str) -> int:
    section = target.sections.find(name)
    return section.line + 1 if section is not None else 1


def check_quality_gates(target: CheckTarget, log: FindingLog) -> None:
    text = target.sections.extract(QUALITY_GATES)
    if text is None:
        return
    blocks = find_code_blocks(text, first_line=_section_first_line(target, QUALITY_GATES))
    if not any(block.language in SHELL_LANGUAGES for block in blocks):
        log.error("Quality Gates section must include runnable bash commands")

    tier = target.tier
    if tier in STRICT_TIERS:
        for cmd in EXPECTED_GATE_COMMANDS:
            if cmd not in text:
                log.warning(f'Expected command containing "{cmd}" in Quality Gates for {tier} tier')


def check_examples(target: CheckTarget, log: FindingLog) -> None:
    text = target.sections.extract(EXAMPLES)
    if text is None:
        return
    blocks = find_code_blocks(text, first_line=_section_first_line(target, EXAMPLES))
    if not blocks:
        log.error("Examples section must include code blocks")
        return
    for block in blocks:
        if not block.tagged:
            log.warning("Code blocks in Examples should specify a language (e.g., ```typescript)", line=block.start_line)
