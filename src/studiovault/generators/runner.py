"""Generator orchestrator: scaffold, install shared packages, patch, report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from studiovault.errors import PreconditionError
from studiovault.generators.recipes import (
    RECIPES,
    AppKind,
    build_patches,
    validate_cron,
    validate_name,
)
from studiovault.patching.engine import PatchResult, apply_patch

if TYPE_CHECKING:
    from pathlib import Path

    from studiovault.config import WorkspaceConfig
    from studiovault.reporting import Reporter
    from studiovault.toolchain import Toolchain

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of a generator run."""

    workspace: Path
    patches: list[PatchResult] = field(default_factory=list)


def create_app(
    kind: AppKind,
    name: str,
    project_root: Path,
    *,
    toolchain: Toolchain,
    config: WorkspaceConfig,
    reporter: Reporter,
    cron: str | None = None,
) -> GenerateResult:
    """Create ``apps/<category>/<name>`` under *project_root*.

    Steps
    -----
    1. Validate inputs (fatal, before anything is written).
    2. Scaffold with the official template CLI.
    3. Install shared workspace packages (runtime, then dev).
    4. Apply the recipe's patches in order; drift is a warning, not a stop.

    Raises
    ------
    PreconditionError
        Invalid name or cron expression, or a required template file is
        missing after scaffolding.
    subprocess.CalledProcessError
        When the scaffolder or ``pnpm add`` exits non-zero.
    """
    recipe = RECIPES[kind]
    validate_name(name)
    if kind is AppKind.CRON_WORKER:
        cron = validate_cron(cron)

    base_dir = project_root / "apps" / recipe.category
    base_dir.mkdir(parents=True, exist_ok=True)

    reporter.step(f"Creating {recipe.title}: {name}")
    if cron is not None:
        reporter.step(f"Schedule: {cron}")

    workspace = toolchain.scaffold(recipe.template, name, base_dir)
    if not workspace.is_dir():
        msg = f"Scaffolder did not create {workspace}."
        raise PreconditionError(msg)

    reporter.step("Installing shared workspace packages...")
    toolchain.install_packages(workspace, [config.package(p) for p in recipe.packages])
    if recipe.dev_packages:
        toolchain.install_packages(
            workspace, [config.package(p) for p in recipe.dev_packages], dev=True
        )

    result = GenerateResult(workspace=workspace)
    for patch in build_patches(recipe, name, config, cron=cron):
        reporter.step(f"Patching {patch.path}...")
        result.patches.append(apply_patch(workspace, patch, reporter))

    logger.debug(
        "Generated %s with outcomes %s",
        workspace,
        [r.outcome.value for r in result.patches],
    )

    reporter.plain()
    reporter.ok(f"{recipe.title} created successfully!")
    reporter.plain("Next steps:")
    reporter.plain(f"  cd apps/{recipe.category}/{name}")
    reporter.plain(f"  {recipe.run_command}")
    return result
