"""Forbidden and required technology checks over a cartridge body.

Detection is two rule tables evaluated independently: generic module-specifier
patterns built for every forbidden token, then technology-specific heuristics
keyed by token. A single violation may be reported once per matching rule.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from ..document import CodeBlock, find_code_blocks
from ..model import FindingLog
from .base import CheckTarget

_QUOTE = "['\"`]"


@dataclass(frozen=True)
class GenericRule:
    name: str
    build: Callable[[str], str]


@dataclass(frozen=True)
class HeuristicRule:
    token: str
    label: str
    pattern: re.Pattern[str]


GENERIC_RULES: tuple[GenericRule, ...] = (
    GenericRule("import-from", lambda t: rf"import.*from.*{_QUOTE}.*{t}.*{_QUOTE}"),
    GenericRule("require-call", lambda t: rf"require\(.*{_QUOTE}.*{t}.*{_QUOTE}.*\)"),
    GenericRule("from-clause", lambda t: rf"from.*{_QUOTE}.*{t}.*{_QUOTE}"),
)

HEURISTIC_RULES: tuple[HeuristicRule, ...] = (
    HeuristicRule("vue", "Vue.js", re.compile(r"new Vue\(|createApp\(", re.IGNORECASE)),
    HeuristicRule("svelte", "Svelte", re.compile(r'<script.*lang="ts">|\.svelte', re.IGNORECASE)),
    HeuristicRule("redux", "Redux", re.compile(r"createStore|useDispatch|useSelector", re.IGNORECASE)),
)


def technology_name(descriptor: str) -> str:
    """Strip a trailing `@version`, keeping scoped names like `@trpc/server`."""
    raw = descriptor.strip()
    name, sep, _version = raw.rpartition("@")
    if sep and name:
        return name.strip()
    return raw


def _first_match_line(pattern: re.Pattern[str], blocks: list[CodeBlock]) -> int | None:
    for block in blocks:
        match = pattern.search(block.content)
        if match is not None:
            return block.start_line + 1 + block.content.count("\n", 0, match.start())
    return None


def scan_forbidden(target: CheckTarget, log: FindingLog) -> None:
    profile = target.profile
    if profile is None:
        return
    blocks = find_code_blocks(target.body, first_line=target.document.body_line_offset + 1)
    if not blocks:
        return
    for term in sorted(profile.forbidden):
        escaped = re.escape(term)
        for rule in GENERIC_RULES:
            line = _first_match_line(re.compile(rule.build(escaped), re.IGNORECASE), blocks)
            if line is not None:
                log.error(f'Forbidden technology "{term}" detected in examples for stack "{profile.name}"', line=line)
        for heuristic in HEURISTIC_RULES:
            if heuristic.token != term.lower():
                continue
            line = _first_match_line(heuristic.pattern, blocks)
            if line is not None:
                log.error(f'{heuristic.label} code detected but forbidden in stack "{profile.name}"', line=line)


def check_required_mentions(target: CheckTarget, log: FindingLog) -> None:
    profile = target.profile
    if profile is None:
        return
    for descriptor in profile.required_technologies():
        name = technology_name(descriptor)
        if not name:
            continue
        if re.search(re.escape(name), target.body, re.IGNORECASE) is None:
            log.warning(f'Expected technology "{name}" not mentioned in cartridge content')


def check_stack_compliance(target: CheckTarget, log: FindingLog) -> None:
    scan_forbidden(target, log)
    check_required_mentions(target, log)
