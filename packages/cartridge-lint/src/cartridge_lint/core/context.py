from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

OutputFormat = Literal["text", "json"]

STACKS_DIR_ENV = "CARTRIDGE_LINT_STACKS_DIR"
CARTRIDGES_DIR_ENV = "CARTRIDGE_LINT_CARTRIDGES_DIR"
LOG_JSON_ENV = "CARTRIDGE_LINT_LOG_JSON"


def _truthy(raw: str | None) -> bool:
    return str(raw or "").strip().lower() in {"1", "true", "yes", "on"}


def _resolve_dir(explicit: str | None, env_name: str, default: str, base: Path) -> Path:
    raw = explicit or os.environ.get(env_name) or default
    path = Path(raw)
    return (base / path).resolve() if not path.is_absolute() else path.resolve()


@dataclass(frozen=True)
class LintContext:
    run_id: str
    work_dir: Path
    stacks_dir: Path
    cartridges_dir: Path
    output_format: OutputFormat
    log_json: bool
    verbose: bool
    quiet: bool

    @classmethod
    def from_args(
        cls,
        run_id: str | None = None,
        stacks_dir: str | None = None,
        cartridges_dir: str | None = None,
        output_format: OutputFormat = "text",
        log_json: bool = False,
        verbose: bool = False,
        quiet: bool = False,
        work_dir: Path | None = None,
    ) -> "LintContext":
        base = (work_dir or Path.cwd()).resolve()
        default_run = f"lint-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        return cls(
            run_id=run_id or os.environ.get("RUN_ID", default_run),
            work_dir=base,
            stacks_dir=_resolve_dir(stacks_dir, STACKS_DIR_ENV, "stacks", base),
            cartridges_dir=_resolve_dir(cartridges_dir, CARTRIDGES_DIR_ENV, "cartridges", base),
            output_format=output_format,
            log_json=log_json or _truthy(os.environ.get(LOG_JSON_ENV)),
            verbose=verbose,
            quiet=quiet,
        )

    def display_path(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.work_dir).as_posix()
        except ValueError:
            return path.as_posix()
