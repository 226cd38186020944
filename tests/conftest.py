"""Shared test fixtures for StudioVault."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest
from rich.console import Console

from studiovault.config import WorkspaceConfig
from studiovault.errors import ToolNotFoundError
from studiovault.reporting import Reporter

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from studiovault.toolchain import ScaffoldTemplate


WRANGLER_JSONC = """\
/**
 * For more details on how to configure Wrangler, refer to:
 * https://developers.cloudflare.com/workers/wrangler/configuration/
 */
{
  "$schema": "node_modules/wrangler/config-schema.json",
  "name": "cleanup",
  "main": "src/index.ts",
  "compatibility_date": "2025-01-01",
  // "triggers": { "crons": [] },
  "observability": {
    "enabled": true
  }
}
"""

CLOUDFLARE_FILES: dict[str, str] = {
    "tsconfig.json": '{\n  "compilerOptions": {\n    "target": "es2021"\n  }\n}\n',
    "wrangler.jsonc": WRANGLER_JSONC,
    "src/index.ts": (
        "export default {\n"
        "  async fetch(request, env, ctx) {\n"
        "    return new Response('Hello World!');\n"
        "  },\n"
        "};\n"
    ),
}


@dataclass
class FakeToolchain:
    """Toolchain that materialises template files instead of running pnpm.

    Existing files are never overwritten, so a second scaffold of the same
    workspace leaves earlier patches in place.
    """

    files: dict[str, str] = field(default_factory=lambda: dict(CLOUDFLARE_FILES))
    versions: dict[str, str] = field(
        default_factory=lambda: {"node": "v20.11.1", "pnpm": "9.15.4"}
    )
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def scaffold(self, template: ScaffoldTemplate, name: str, parent: Path) -> Path:
        self.calls.append(("scaffold", template.package, name))
        workspace = parent / name
        workspace.mkdir(parents=True, exist_ok=True)
        for rel, content in self.files.items():
            path = workspace / rel
            if not path.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")
        return workspace

    def install_packages(
        self, workspace: Path, packages: Sequence[str], *, dev: bool = False
    ) -> None:
        self.calls.append(("install", "dev" if dev else "prod", *packages))

    def version(self, tool: str) -> str:
        if tool not in self.versions:
            msg = f"{tool} is not installed or not in PATH."
            raise ToolNotFoundError(msg)
        return self.versions[tool]


@dataclass
class Captured:
    """A Reporter writing into in-memory buffers."""

    reporter: Reporter
    out: io.StringIO
    err: io.StringIO

    @property
    def text(self) -> str:
        return self.out.getvalue() + self.err.getvalue()


@pytest.fixture()
def captured() -> Captured:
    out = io.StringIO()
    err = io.StringIO()
    reporter = Reporter(
        out=Console(file=out, soft_wrap=True, highlight=False, emoji=False),
        err=Console(file=err, soft_wrap=True, highlight=False, emoji=False),
    )
    return Captured(reporter, out, err)


@pytest.fixture()
def toolchain() -> FakeToolchain:
    return FakeToolchain()


@pytest.fixture()
def config() -> WorkspaceConfig:
    return WorkspaceConfig()


@pytest.fixture()
def monorepo(tmp_path: Path) -> Path:
    """Create a minimal monorepo that passes every doctor gate."""
    for pkg in ("database", "storage", "types", "utils"):
        src = tmp_path / "packages" / pkg / "src"
        src.mkdir(parents=True)
        (src / "index.ts").write_text("export type ID = string;\n", encoding="utf-8")
    (tmp_path / "packages" / "ui").mkdir()
    (tmp_path / "packages" / "ui" / "package.json").write_text(
        '{\n  "name": "@studiovault/ui",\n  "peerDependencies": {"react": "19.1.0"}\n}\n',
        encoding="utf-8",
    )
    (tmp_path / "pnpm-lock.yaml").write_text(
        "lockfileVersion: '9.0'\n"
        "packages:\n"
        "  '@types/react@19.1.2':\n"
        "    resolution: {integrity: sha512-abc}\n"
        "  react@19.1.0:\n"
        "    resolution: {integrity: sha512-def}\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture()
def wrangler_jsonc() -> str:
    """``wrangler.jsonc`` as produced by the Cloudflare template (comment banner first)."""
    return WRANGLER_JSONC
