from __future__ import annotations

import socket
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml
from hypothesis import settings

from cartridge_lint.checks.structure import REQUIRED_SECTIONS
from cartridge_lint.registry import StackRegistry, load_registry

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("cartridge-lint", deadline=None, max_examples=50, database=None)
settings.load_profile("cartridge-lint")

NEXT_STACK: dict[str, Any] = {
    "name": "next-baseline",
    "framework": "next@14",
    "language": "typescript",
    "ui": ["react", "tailwind"],
    "state": ["zustand"],
    "api": "trpc",
    "orm": "prisma@5",
    "database": "postgres",
    "auth": "nextauth",
    "testing": ["vitest", "playwright"],
    "tooling": ["eslint", "prettier"],
    "repo_mode": "single",
    "deploy": "vercel",
    "forbidden": ["vue", "svelte", "redux", "express"],
    "env": {"DATABASE_URL": "Postgres connection string"},
}

FASTAPI_STACK: dict[str, Any] = {
    "name": "fastapi-service",
    "framework": "fastapi",
    "language": "python@3.12",
    "api": "rest",
    "orm": "sqlalchemy",
    "forbidden": ["django", "flask"],
}

VALID_HEADER: dict[str, Any] = {
    "cartridge": True,
    "name": "Next baseline",
    "tier": "production",
    "stack": "next-baseline",
    "version": "1.2.0",
    "owner": "@platform-team",
    "status": "stable",
}

SECTION_BODIES: dict[str, str] = {
    "Purpose": "Scaffold a Next.js app in TypeScript with Prisma and tRPC.",
    "Stack Contract": "Uses the next-baseline stack.",
    "Development Style": "Small, typed modules.",
    "Inputs": "A product brief.",
    "Outputs": "A running application.",
    "Guardrails": "Never bypass the ORM.",
    "Steps the Agent Must Follow": "1. Read the brief.\n2. Generate the app.",
    "Quality Gates": "```bash\npnpm lint\npnpm typecheck\npnpm test\n```",
    "Integration Points": "Auth and database.",
    "Examples": '```typescript\nexport const appRouter = createTRPCRouter({});\n```',
    "Version History": "- 1.2.0: initial release",
}


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CI", "RUN_ID", "CARTRIDGE_LINT_STACKS_DIR", "CARTRIDGE_LINT_CARTRIDGES_DIR", "CARTRIDGE_LINT_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


def write_stack(stacks_dir: Path, filename: str, payload: Any) -> Path:
    stacks_dir.mkdir(parents=True, exist_ok=True)
    path = stacks_dir / filename
    text = payload if isinstance(payload, str) else yaml.safe_dump(payload, sort_keys=False)
    path.write_text(text, encoding="utf-8")
    return path


def render_cartridge(
    header: dict[str, Any] | None = None,
    sections: list[tuple[str, str]] | None = None,
    *,
    overrides: dict[str, str] | None = None,
    drop: tuple[str, ...] = (),
) -> str:
    head = dict(VALID_HEADER if header is None else header)
    bodies = {**SECTION_BODIES, **(overrides or {})}
    if sections is None:
        sections = [(name, bodies[name]) for name in REQUIRED_SECTIONS if name not in drop]
    parts = ["---", yaml.safe_dump(head, sort_keys=False).rstrip("\n"), "---", "", "# Next baseline", ""]
    for title, body in sections:
        parts.extend([f"## {title}", "", body, ""])
    return "\n".join(parts)


@pytest.fixture
def stacks_dir(tmp_path: Path) -> Path:
    root = tmp_path / "stacks"
    write_stack(root, "next-baseline.yml", NEXT_STACK)
    write_stack(root, "fastapi-service.yml", FASTAPI_STACK)
    return root


@pytest.fixture
def registry(stacks_dir: Path) -> StackRegistry:
    return load_registry(stacks_dir)


@pytest.fixture
def cartridge() -> Callable[..., str]:
    return render_cartridge


@pytest.fixture
def stack_writer() -> Callable[[Path, str, Any], Path]:
    return write_stack
