from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .. import __version__
from ..batch import batch_payload, render_batch_text, run_batch
from ..core.context import LintContext
from ..core.logging import log_event
from ..core.schema import validate_payload
from ..engine import validate_file
from ..errors import ScriptError
from ..exit_codes import ERR_INTERNAL, ERR_USAGE, ERR_VALIDATION, OK
from ..registry import StackRegistry, load_registry
from ..reporting import REPORT_SCHEMA, TOOL, base_payload, document_payload, finding_rows, render_document_text, render_findings
from .output import emit, render_error, resolve_output_format


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=TOOL, description="Validate cartridge documents against stack profiles.")
    p.add_argument("--version", action="version", version=f"{TOOL} {__version__}")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--run-id", help="run identifier for log events")
    p.add_argument("--stacks-dir", help="directory of stack profile YAML files")
    p.add_argument("--cartridges-dir", help="root directory holding <tier>/*.md cartridges")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines on stderr")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable debug log events")
    vg.add_argument("--quiet", action="store_true", help="only log warnings and errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    lint_p = sub.add_parser("lint", help="validate a single cartridge document")
    lint_p.add_argument("file", help="path to the cartridge markdown file")

    sub.add_parser("validate-all", help="validate every cartridge under the cartridges directory")
    sub.add_parser("stacks", help="list the loaded stack profiles")
    sub.add_parser("version", help="print the tool version")
    return p


def _load_registry(ctx: LintContext) -> StackRegistry:
    registry = load_registry(ctx.stacks_dir)
    log_event(
        ctx,
        "info",
        "registry",
        "loaded",
        stacks=len(registry),
        errors=len(registry.errors),
        root=ctx.display_path(ctx.stacks_dir),
    )
    for item in registry.errors:
        log_event(ctx, "error", "registry", "load-error", message=item.message)
    return registry


def _run_lint(ctx: LintContext, file: str, as_json: bool) -> int:
    registry = _load_registry(ctx)
    path = Path(file)
    report = validate_file(path, registry)
    shown = ctx.display_path(path)
    log_event(ctx, "info", "lint", "done", file=shown, errors=len(report.errors), warnings=len(report.warnings))
    if as_json:
        emit(document_payload(ctx, shown, report, registry.errors), True)
    else:
        print(render_document_text(shown, report, registry.errors))
    return OK if report.valid and not registry.errors else ERR_VALIDATION


def _run_validate_all(ctx: LintContext, as_json: bool) -> int:
    registry = _load_registry(ctx)
    result = run_batch(ctx, registry)
    log_event(ctx, "info", "batch", "done", total=result.total, invalid=len(result.failed))
    if as_json:
        emit(batch_payload(ctx, result, registry), True)
    else:
        print(render_batch_text(result, registry))
    return OK if not result.failed and not registry.errors else ERR_VALIDATION


def _run_stacks(ctx: LintContext, as_json: bool) -> int:
    registry = _load_registry(ctx)
    ok = not registry.errors
    if as_json:
        payload = base_payload(ctx, "stacks", ok)
        payload["stacks"] = [
            {
                "name": profile.name,
                "framework": profile.framework,
                "language": profile.language,
                "forbidden": sorted(profile.forbidden),
            }
            for profile in registry.profiles.values()
        ]
        payload["registry_errors"] = finding_rows(registry.errors)
        validate_payload(payload, REPORT_SCHEMA)
        emit(payload, True)
    else:
        for profile in registry.profiles.values():
            print(f"{profile.name}: {profile.framework or '-'} / {profile.language or '-'}")
        errors = render_findings("Stack registry errors:", registry.errors)
        if errors:
            print("\n".join(errors))
    return OK if ok else ERR_VALIDATION


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    fmt = resolve_output_format(cli_json=ns.json, cli_format=ns.format, ci_present="CI" in os.environ)
    ctx = LintContext.from_args(
        run_id=ns.run_id,
        stacks_dir=ns.stacks_dir,
        cartridges_dir=ns.cartridges_dir,
        output_format="json" if fmt == "json" else "text",
        log_json=ns.log_json,
        verbose=ns.verbose,
        quiet=ns.quiet,
    )
    as_json = ctx.output_format == "json"
    try:
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format)
        if ns.cmd == "version":
            if as_json:
                emit({"schema_version": 1, "tool": TOOL, "version": __version__}, True)
            else:
                print(f"{TOOL} {__version__}")
            return OK
        if ns.cmd == "lint":
            return _run_lint(ctx, ns.file, as_json)
        if ns.cmd == "validate-all":
            return _run_validate_all(ctx, as_json)
        if ns.cmd == "stacks":
            return _run_stacks(ctx, as_json)
        return ERR_USAGE
    except ScriptError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
