from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import LintContext

_LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _threshold(ctx: LintContext) -> int:
    if ctx.verbose:
        return _LEVELS["debug"]
    if ctx.quiet:
        return _LEVELS["warn"]
    return _LEVELS["info"]


def log_event(ctx: LintContext, level: str, component: str, action: str, **fields: object) -> None:
    if _LEVELS.get(level, _LEVELS["info"]) < _threshold(ctx):
        return
    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "run_id": ctx.run_id,
        "component": component,
        "action": action,
        **fields,
    }
    if ctx.log_json:
        sys.stderr.write(json.dumps(payload, sort_keys=True) + "\n")
        return
    core = f"level={level} run_id={ctx.run_id} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    sys.stderr.write((core if not extras else f"{core} {extras}") + "\n")
