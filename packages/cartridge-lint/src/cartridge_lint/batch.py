"""Validate every cartridge under `<cartridges>/<tier>/*.md`."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .checks.front_matter import VALID_TIERS
from .core.context import LintContext
from .core.logging import log_event
from .core.schema import validate_payload
from .engine import validate_file
from .errors import ScriptError
from .exit_codes import ERR_CONFIG
from .model import Report
from .registry import StackRegistry
from .reporting import REPORT_SCHEMA, base_payload, finding_rows, render_findings


@dataclass(frozen=True)
class DocumentOutcome:
    tier: str
    file: str
    report: Report


@dataclass
class BatchResult:
    outcomes: list[DocumentOutcome] = field(default_factory=list)
    skipped_tiers: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def failed(self) -> list[DocumentOutcome]:
        return [o for o in self.outcomes if not o.report.valid]

    @property
    def valid_count(self) -> int:
        return self.total - len(self.failed)


def run_batch(ctx: LintContext, registry: StackRegistry, tiers: tuple[str, ...] = VALID_TIERS) -> BatchResult:
    root = ctx.cartridges_dir
    if not root.is_dir():
        raise ScriptError(f"Cartridges directory not found: {root}", ERR_CONFIG, kind="config")
    result = BatchResult()
    for tier in tiers:
        tier_path = root / tier
        if not tier_path.is_dir():
            log_event(ctx, "warn", "batch", "tier-missing", tier=tier)
            result.skipped_tiers.append(tier)
            continue
        files = sorted(p for p in tier_path.iterdir() if p.is_file() and p.suffix == ".md")
        log_event(ctx, "info", "batch", "tier-start", tier=tier, count=len(files))
        for path in files:
            report = validate_file(path, registry)
            result.outcomes.append(DocumentOutcome(tier=tier, file=f"{tier}/{path.name}", report=report))
            log_event(
                ctx,
                "debug",
                "batch",
                "document",
                file=f"{tier}/{path.name}",
                errors=len(report.errors),
                warnings=len(report.warnings),
            )
    return result


def batch_payload(ctx: LintContext, result: BatchResult, registry: StackRegistry) -> dict[str, Any]:
    payload = base_payload(ctx, "batch", not result.failed and not registry.errors)
    payload.update(
        {
            "summary": {"total": result.total, "valid": result.valid_count, "invalid": len(result.failed)},
            "skipped_tiers": list(result.skipped_tiers),
            "registry_errors": finding_rows(registry.errors),
            "documents": [
                {"file": o.file, "tier": o.tier, **o.report.as_dict()}
                for o in result.outcomes
            ],
        }
    )
    validate_payload(payload, REPORT_SCHEMA)
    return payload


def render_batch_text(result: BatchResult, registry: StackRegistry) -> str:
    lines: list[str] = ["Validating all cartridges", ""]
    if registry.errors:
        lines.extend(render_findings("Stack registry errors:", registry.errors))
        lines.append("")
    for tier in result.skipped_tiers:
        lines.append(f"Tier directory not found: {tier}")
    current = None
    for outcome in result.outcomes:
        if outcome.tier != current:
            current = outcome.tier
            count = sum(1 for o in result.outcomes if o.tier == current)
            lines.append(f"Validating {current} tier ({count} cartridges)")
        mark = "PASS" if outcome.report.valid else "FAIL"
        lines.append(f"  {mark} {outcome.file.split('/', 1)[1]}")
    lines.extend(
        [
            "",
            "=" * 50,
            "Validation Summary",
            f"Total cartridges: {result.total}",
            f"Valid: {result.valid_count}",
            f"Invalid: {len(result.failed)}",
        ]
    )
    if result.failed:
        lines.extend(["", "Issues Found:"])
        for outcome in result.failed:
            lines.append(f"{outcome.file}")
            lines.extend(render_findings("  Errors:", outcome.report.errors, indent="    "))
            lines.extend(render_findings("  Warnings:", outcome.report.warnings, indent="    "))
    else:
        lines.extend(["", "All cartridges are valid."])
    return "\n".join(lines)
