from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from ..model import Finding

REQUIRED_TECH_FIELDS = ("framework", "language", "orm", "api")


def _strings(values: Any) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, Mapping):
        return tuple(str(k) for k in values)
    return tuple(str(v) for v in values)


@dataclass(frozen=True)
class StackProfile:
    name: str
    framework: str | None = None
    language: str | None = None
    orm: str | None = None
    api: str | None = None
    database: str | None = None
    auth: str | None = None
    repo_mode: str | None = None
    deploy: str | None = None
    ui: tuple[str, ...] = ()
    state: tuple[str, ...] = ()
    testing: tuple[str, ...] = ()
    tooling: tuple[str, ...] = ()
    forbidden: frozenset[str] = frozenset()
    env: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    source: Path | None = None

    @classmethod
    def from_yaml(cls, payload: dict[str, Any], source: Path | None = None) -> "StackProfile":
        return cls(
            name=str(payload["name"]).strip(),
            framework=payload.get("framework"),
            language=payload.get("language"),
            orm=payload.get("orm"),
            api=payload.get("api"),
            database=payload.get("database"),
            auth=payload.get("auth"),
            repo_mode=payload.get("repo_mode"),
            deploy=payload.get("deploy"),
            ui=_strings(payload.get("ui")),
            state=_strings(payload.get("state")),
            testing=_strings(payload.get("testing")),
            tooling=_strings(payload.get("tooling")),
            forbidden=frozenset(filter(None, (token.strip() for token in _strings(payload.get("forbidden"))))),
            env=MappingProxyType({str(k): str(v) for k, v in dict(payload.get("env") or {}).items()}),
            source=source,
        )

    def required_technologies(self) -> tuple[str, ...]:
        """Framework, language, ORM and API descriptors that the profile declares, in that order."""
        out: list[str] = []
        for attr in REQUIRED_TECH_FIELDS:
            value = getattr(self, attr)
            if value:
                out.append(str(value))
        return tuple(out)


@dataclass(frozen=True)
class StackRegistry:
    """Read-only mapping of stack id to profile, built once per session."""

    root: Path
    profiles: Mapping[str, StackProfile]
    errors: tuple[Finding, ...] = ()

    def __contains__(self, name: object) -> bool:
        return name in self.profiles

    def __iter__(self) -> Iterator[str]:
        return iter(self.profiles)

    def __len__(self) -> int:
        return len(self.profiles)

    def get(self, name: str | None) -> StackProfile | None:
        if name is None:
            return None
        return self.profiles.get(name)

    def names(self) -> list[str]:
        return list(self.profiles)
