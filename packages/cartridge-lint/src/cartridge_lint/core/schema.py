from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ScriptError
from ..exit_codes import ERR_INTERNAL

SCHEMAS_ROOT = Path(__file__).resolve().parents[1] / "schemas"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    return json.loads((SCHEMAS_ROOT / name).read_text(encoding="utf-8"))


def schema_violation(payload: Any, name: str) -> str | None:
    """Return a one-line description of the first violation, or None when valid."""
    validator = jsonschema.Draft202012Validator(load_schema(name))
    errors = sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path])
    if not errors:
        return None
    first = errors[0]
    pointer = "/".join(str(p) for p in first.absolute_path)
    return f"schema validation failed at {pointer or '<root>'}: {first.message}"


def validate_payload(payload: Any, name: str) -> None:
    problem = schema_violation(payload, name)
    if problem is not None:
        raise ScriptError(problem, ERR_INTERNAL, kind="output_contract")
