"""Cartridge checks: front matter, section structure, stack compliance and section gates."""

from __future__ import annotations

from .base import CheckDef, CheckTarget
from .compliance import check_stack_compliance
from .section_gates import check_examples, check_quality_gates
from .structure import check_sections

BODY_CHECKS: tuple[CheckDef, ...] = (
    CheckDef("cartridge/sections", "required sections present and in canonical order", check_sections),
    CheckDef("cartridge/stack-compliance", "no forbidden technologies; required technologies mentioned", check_stack_compliance),
    CheckDef("cartridge/quality-gates", "quality gates hold runnable shell commands", check_quality_gates),
    CheckDef("cartridge/examples", "examples hold language-tagged code blocks", check_examples),
)

__all__ = ["BODY_CHECKS", "CheckDef", "CheckTarget"]
