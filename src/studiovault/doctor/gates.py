"""Doctor: sequential workspace gates, halting on the first violation."""

from __future__ import annotations

import enum
import json
import logging
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from studiovault.doctor.lockfile import extract_versions
from studiovault.doctor.purity import find_forbidden_import
from studiovault.errors import ToolNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from studiovault.config import WorkspaceConfig
    from studiovault.toolchain import Toolchain

logger = logging.getLogger(__name__)


class Severity(enum.Enum):
    """Severity level for a check result."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Check:
    """Result of a single validation check."""

    name: str
    severity: Severity
    description: str


@dataclass(frozen=True)
class DoctorContext:
    """Inputs shared by every gate."""

    project_root: Path
    toolchain: Toolchain
    config: WorkspaceConfig


# ---------------------------------------------------------------------------
# Gate 1: toolchain pinning
# ---------------------------------------------------------------------------


def _probe(ctx: DoctorContext, tool: str) -> str | None:
    try:
        return ctx.toolchain.version(tool)
    except (ToolNotFoundError, subprocess.CalledProcessError) as exc:
        logger.debug("Version probe for %s failed: %s", tool, exc)
        return None


def _check_toolchain(ctx: DoctorContext) -> Iterator[Check]:
    """Node major version prefix and exact pnpm version."""
    major = ctx.config.node_major
    node_version = _probe(ctx, "node")
    if node_version is None:
        yield Check("node_version", Severity.ERROR, "Node.js is not installed or not in PATH.")
        return
    if not node_version.startswith(f"v{major}."):
        yield Check(
            "node_version",
            Severity.ERROR,
            f"Node version must be {major}.x. Found: {node_version}",
        )
        return
    yield Check("node_version", Severity.OK, f"Node version OK ({node_version})")

    expected = ctx.config.pnpm_version
    pnpm_version = _probe(ctx, "pnpm")
    if pnpm_version is None:
        yield Check("pnpm_version", Severity.ERROR, "pnpm is not installed or not in PATH.")
        return
    if pnpm_version != expected:
        yield Check(
            "pnpm_version",
            Severity.ERROR,
            f"pnpm must be {expected}. Found: {pnpm_version}",
        )
        return
    yield Check("pnpm_version", Severity.OK, f"pnpm version OK ({pnpm_version})")


# ---------------------------------------------------------------------------
# Gate 2: shared package import purity
# ---------------------------------------------------------------------------


def _check_import_purity(ctx: DoctorContext) -> Iterator[Check]:
    """No Node-only modules referenced from ``packages/*/src``."""
    packages_dir = ctx.project_root / "packages"
    if not packages_dir.is_dir():
        yield Check("import_purity", Severity.ERROR, "packages/ folder not found.")
        return

    violation = find_forbidden_import(
        packages_dir,
        ctx.config.forbidden_imports,
        ctx.config.source_extensions,
    )
    if violation is not None:
        rel = violation.file_path.relative_to(ctx.project_root).as_posix()
        yield Check(
            "import_purity",
            Severity.ERROR,
            f'Forbidden import "{violation.module}" found in: {rel}. '
            "Shared packages MUST remain runtime-agnostic.",
        )
        return
    yield Check(
        "import_purity",
        Severity.OK,
        "No forbidden runtime imports found in packages/*",
    )


# ---------------------------------------------------------------------------
# Gate 3: single React runtime
# ---------------------------------------------------------------------------


def _check_react_singleton(ctx: DoctorContext) -> Iterator[Check]:
    """Exactly one React version in the lockfile, equal to the pinned one."""
    lock_path = ctx.project_root / ctx.config.lockfile
    if not lock_path.is_file():
        yield Check(
            "react_singleton",
            Severity.WARNING,
            f"{ctx.config.lockfile} not found. Skipping React duplication check.",
        )
        return

    versions = extract_versions(lock_path.read_text(encoding="utf-8"), "react")
    expected = f"react@{ctx.config.react_version}"

    if not versions:
        yield Check(
            "react_singleton",
            Severity.WARNING,
            "React runtime not found in lockfile yet (no apps installed).",
        )
        return
    if len(versions) > 1:
        yield Check(
            "react_singleton",
            Severity.ERROR,
            f"Multiple React runtimes detected: {', '.join(versions)}. "
            "This WILL cause Invalid Hook Call bugs. Run a clean install.",
        )
        return
    if versions[0] != expected:
        yield Check(
            "react_singleton",
            Severity.ERROR,
            f"React version drift detected: expected {expected}, found {versions[0]}. "
            f"Run: rm -rf node_modules {ctx.config.lockfile} && pnpm install",
        )
        return
    yield Check("react_singleton", Severity.OK, f"Single React runtime detected ({expected})")


# ---------------------------------------------------------------------------
# Gate 4: React is a peer dependency of the UI package
# ---------------------------------------------------------------------------


def _check_react_peer_dependency(ctx: DoctorContext) -> Iterator[Check]:
    """The UI package must list react under peerDependencies only."""
    manifest_rel = ctx.config.peer_only_manifest
    manifest = ctx.project_root / manifest_rel
    if not manifest.is_file():
        yield Check(
            "react_peer_dependency",
            Severity.WARNING,
            f"{manifest_rel} not found. Skipping React dependency check.",
        )
        return

    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except ValueError as exc:
        yield Check(
            "react_peer_dependency",
            Severity.ERROR,
            f"{manifest_rel} is not valid JSON: {exc}",
        )
        return

    dependencies = data.get("dependencies") if isinstance(data, dict) else None
    if isinstance(dependencies, dict) and "react" in dependencies:
        yield Check(
            "react_peer_dependency",
            Severity.ERROR,
            f"{manifest_rel} must NOT list react in dependencies, only peerDependencies.",
        )
        return
    yield Check(
        "react_peer_dependency",
        Severity.OK,
        "React peer dependency law upheld (UI does not bundle React).",
    )


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

# (heading, gate) in the fixed order they always run.
GATES: tuple[tuple[str, Callable[[DoctorContext], Iterator[Check]]], ...] = (
    ("Checking toolchain...", _check_toolchain),
    ("Scanning shared packages for forbidden runtime imports...", _check_import_purity),
    ("Checking for duplicate React runtime versions...", _check_react_singleton),
    ("Checking React dependency law...", _check_react_peer_dependency),
)


def iter_checks(
    project_root: Path,
    *,
    toolchain: Toolchain,
    config: WorkspaceConfig,
    on_gate: Callable[[str], None] | None = None,
) -> Iterator[Check]:
    """Run every gate in order, yielding checks as they complete.

    Stops right after the first ``ERROR`` check; later gates never run.
    *on_gate* is called with each gate's heading before it starts.
    """
    ctx = DoctorContext(project_root, toolchain, config)
    for heading, gate in GATES:
        if on_gate is not None:
            on_gate(heading)
        for check in gate(ctx):
            yield check
            if check.severity is Severity.ERROR:
                return


def run_checks(
    project_root: Path,
    *,
    toolchain: Toolchain,
    config: WorkspaceConfig,
) -> list[Check]:
    """Run all gates and return the checks produced, ending at the first error."""
    return list(iter_checks(project_root, toolchain=toolchain, config=config))
