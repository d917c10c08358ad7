from __future__ import annotations

from typing import Any, Iterable

from .core.context import LintContext
from .core.schema import validate_payload
from .model import Finding, Report

TOOL = "cartridge-lint"
REPORT_SCHEMA = "report.schema.json"


def base_payload(ctx: LintContext, kind: str, ok: bool) -> dict[str, Any]:
    return {
        "schema_version": 1,
        "tool": TOOL,
        "kind": kind,
        "status": "pass" if ok else "fail",
        "run_id": ctx.run_id,
    }


def finding_rows(findings: Iterable[Finding]) -> list[dict[str, Any]]:
    return [item.as_dict() for item in findings]


def document_payload(ctx: LintContext, file: str, report: Report, registry_errors: tuple[Finding, ...] = ()) -> dict[str, Any]:
    payload = base_payload(ctx, "document", report.valid and not registry_errors)
    payload.update({"file": file, **report.as_dict(), "registry_errors": finding_rows(registry_errors)})
    validate_payload(payload, REPORT_SCHEMA)
    return payload


def render_findings(title: str, findings: Iterable[Finding], indent: str = "  ") -> list[str]:
    items = list(findings)
    if not items:
        return []
    return [title, *(f"{indent}- {item.render()}" for item in items)]


def render_document_text(file: str, report: Report, registry_errors: tuple[Finding, ...] = ()) -> str:
    lines = [f"Linting: {file}", ""]
    if registry_errors:
        lines.extend(render_findings("Stack registry errors:", registry_errors))
        lines.append("")
    if report.errors:
        lines.extend(render_findings("Errors:", report.errors))
        lines.append("")
    if report.warnings:
        lines.extend(render_findings("Warnings:", report.warnings))
        lines.append("")
    if not report.errors and not report.warnings:
        lines.extend(["Cartridge is valid.", ""])
    lines.append("Summary:")
    lines.append(f"  Errors: {len(report.errors)}")
    lines.append(f"  Warnings: {len(report.warnings)}")
    return "\n".join(lines)
