"""Single-document validation: header first, then every body check."""

from __future__ import annotations

from pathlib import Path

from .checks import BODY_CHECKS, CheckDef, CheckTarget
from .checks.front_matter import validate_front_matter
from .document import SectionIndex, split_document
from .errors import ScriptError
from .exit_codes import ERR_CONFIG
from .model import FindingLog, Report
from .registry import StackRegistry


def validate_text(text: str, registry: StackRegistry, checks: tuple[CheckDef, ...] = BODY_CHECKS) -> Report:
    document = split_document(text)
    log = FindingLog()
    front = validate_front_matter(document, registry, log.scoped("cartridge/front-matter"))
    if not document.has_front_matter:
        return log.to_report()
    target = CheckTarget(
        document=document,
        sections=SectionIndex(document.body, first_line=document.body_line_offset + 1),
        header=front.header,
        stack_name=front.stack_name,
        profile=registry.get(front.stack_name),
    )
    for check in checks:
        check.fn(target, log.scoped(check.check_id))
    return log.to_report()


def validate_file(path: Path, registry: StackRegistry) -> Report:
    if not path.is_file():
        raise ScriptError(f"File not found: {path}", ERR_CONFIG, kind="config")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScriptError(f"Unable to read {path}: {exc}", ERR_CONFIG, kind="config") from exc
    return validate_text(text, registry)
