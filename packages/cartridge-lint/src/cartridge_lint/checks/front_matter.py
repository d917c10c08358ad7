from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml

from ..core.yaml_utils import describe_yaml_error, parse_yaml
from ..document import CartridgeDocument
from ..model import FindingLog
from ..registry import StackRegistry

REQUIRED_FIELDS = ("cartridge", "name", "tier", "stack", "version", "owner", "status")
VALID_TIERS = ("prototype", "productizing", "production")
VALID_STATUSES = ("draft", "stable", "deprecated")
OWNER_SIGIL = "@"
_SEMVER_PREFIX_RE = re.compile(r"^\d+\.\d+\.\d+")


@dataclass(frozen=True)
class FrontMatterResult:
    header: Mapping[str, Any] = field(default_factory=dict)
    parsed: bool = False
    stack_name: str | None = None


def _present(header: Mapping[str, Any], key: str) -> bool:
    return header.get(key) is not None


def parse_front_matter(document: CartridgeDocument, log: FindingLog) -> Mapping[str, Any] | None:
    if document.header_text is None:
        log.error("Missing front matter")
        return None
    try:
        header = parse_yaml(document.header_text)
    except yaml.YAMLError as exc:
        log.error(f"Invalid YAML in front matter: {describe_yaml_error(exc)}")
        return None
    if header is None:
        header = {}
    if not isinstance(header, dict):
        log.error("Front matter must be a mapping")
        return None
    return header


def check_header_fields(header: Mapping[str, Any], registry: StackRegistry, log: FindingLog) -> str | None:
    """Run every field check independently and return the stack id when it resolves."""
    for key in REQUIRED_FIELDS:
        if key not in header:
            log.error(f"Missing required front matter field: {key}")

    if "cartridge" in header and header["cartridge"] is not True:
        log.error("Front matter cartridge field must be true")

    if _present(header, "tier"):
        tier = str(header["tier"])
        if tier not in VALID_TIERS:
            log.error(f"Invalid tier: {tier}. Must be one of: {', '.join(VALID_TIERS)}")

    resolved: str | None = None
    if _present(header, "stack"):
        stack = str(header["stack"])
        if stack in registry:
            resolved = stack
        else:
            available = ", ".join(registry.names()) or "(none)"
            log.error(f"Unknown stack: {stack}. Available stacks: {available}")

    if _present(header, "version"):
        version = str(header["version"])
        if not _SEMVER_PREFIX_RE.match(version):
            log.error(f"Invalid version format: {version}. Use semver (e.g., 1.0.0)")

    if _present(header, "status"):
        status = str(header["status"])
        if status not in VALID_STATUSES:
            log.error(f"Invalid status: {status}. Must be one of: {', '.join(VALID_STATUSES)}")

    if _present(header, "owner"):
        owner = str(header["owner"])
        if not owner.startswith(OWNER_SIGIL):
            log.warning(f"Owner should start with {OWNER_SIGIL} (e.g., @username): {owner}")

    return resolved


def validate_front_matter(document: CartridgeDocument, registry: StackRegistry, log: FindingLog) -> FrontMatterResult:
    header = parse_front_matter(document, log)
    if header is None:
        return FrontMatterResult()
    return FrontMatterResult(header=header, parsed=True, stack_name=check_header_fields(header, registry, log))
