from __future__ import annotations

from pathlib import Path
from types import MappingProxyType

import yaml

from ..core.schema import schema_violation
from ..core.yaml_utils import describe_yaml_error, load_yaml
from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG
from ..model import FindingLog
from .models import StackProfile, StackRegistry

STACK_SCHEMA = "stack-profile.schema.json"
STACK_SUFFIXES = (".yml", ".yaml")


def _stack_files(stacks_dir: Path) -> list[Path]:
    return sorted(p for p in stacks_dir.iterdir() if p.is_file() and p.suffix in STACK_SUFFIXES)


def load_registry(stacks_dir: Path) -> StackRegistry:
    """Load every stack profile under `stacks_dir`.

    A missing directory is fatal. A profile that cannot be read, parsed or
    validated is recorded as an error and skipped, so one broken file never
    hides the rest of the registry. Duplicate stack names keep the first file
    (in sorted file-name order) and record an error for the later one.
    """
    if not stacks_dir.is_dir():
        raise ScriptError(f"Stacks directory not found: {stacks_dir}", ERR_CONFIG, kind="config")

    log = FindingLog(check_id="registry/load")
    profiles: dict[str, StackProfile] = {}
    for path in _stack_files(stacks_dir):
        try:
            payload = load_yaml(path)
        except yaml.YAMLError as exc:
            log.error(f"Failed to load stack {path.name}: {describe_yaml_error(exc)}")
            continue
        except (OSError, UnicodeDecodeError) as exc:
            log.error(f"Failed to load stack {path.name}: {exc}")
            continue
        if not isinstance(payload, dict):
            log.error(f"Failed to load stack {path.name}: root must be a mapping")
            continue
        problem = schema_violation(payload, STACK_SCHEMA)
        if problem is not None:
            log.error(f"Failed to load stack {path.name}: {problem}")
            continue
        profile = StackProfile.from_yaml(payload, source=path)
        existing = profiles.get(profile.name)
        if existing is not None:
            first = existing.source.name if existing.source else "<unknown>"
            log.error(f"Duplicate stack `{profile.name}` in {path.name} (already defined in {first})")
            continue
        profiles[profile.name] = profile
    return StackRegistry(root=stacks_dir, profiles=MappingProxyType(profiles), errors=log.errors)
