"""External tool boundary: scaffolding CLIs, pnpm installs, version probes.

Generators and doctor only talk to a :class:`Toolchain`, so the patch and
validation logic can be exercised without spawning real processes.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from studiovault.errors import ToolNotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaffoldTemplate:
    """An official ``pnpm create`` template plus its fixed flags."""

    package: str
    args: tuple[str, ...] = ()


class Toolchain(Protocol):
    """Capabilities the generators and doctor need from the outside world."""

    def scaffold(self, template: ScaffoldTemplate, name: str, parent: Path) -> Path:
        """Create ``parent / name`` from *template* and return it."""
        ...

    def install_packages(
        self, workspace: Path, packages: Sequence[str], *, dev: bool = False
    ) -> None:
        """Add workspace *packages* to the manifest of *workspace*."""
        ...

    def version(self, tool: str) -> str:
        """Return the trimmed version string reported by *tool*."""
        ...


# Version flags per probed tool.
_VERSION_ARGS: dict[str, tuple[str, ...]] = {
    "node": ("--version",),
    "pnpm": ("-v",),
}


def _resolve(cmd: str) -> str:
    """Resolve *cmd* on PATH (handles ``.cmd`` shims on Windows)."""
    resolved = shutil.which(cmd)
    if resolved is None:
        msg = f"{cmd} is not installed or not in PATH."
        raise ToolNotFoundError(msg)
    return resolved


class PnpmToolchain:
    """Real toolchain backed by ``pnpm``.

    Scaffolding and installs inherit the parent's stdio and block until the
    child exits; a non-zero exit raises :class:`subprocess.CalledProcessError`.
    There is no timeout and no retry.
    """

    def _run(self, argv: list[str], cwd: Path) -> None:
        logger.debug("Running %s in %s", argv, cwd)
        subprocess.run(argv, cwd=str(cwd), check=True)  # noqa: S603

    def scaffold(self, template: ScaffoldTemplate, name: str, parent: Path) -> Path:
        argv = [_resolve("pnpm"), "create", template.package, name, *template.args]
        self._run(argv, parent)
        return parent / name

    def install_packages(
        self, workspace: Path, packages: Sequence[str], *, dev: bool = False
    ) -> None:
        if not packages:
            return
        argv = [_resolve("pnpm"), "add"]
        if dev:
            argv.append("-D")
        argv.extend(packages)
        argv.append("--workspace")
        self._run(argv, workspace)

    def version(self, tool: str) -> str:
        args = _VERSION_ARGS.get(tool, ("--version",))
        argv = [_resolve(tool), *args]
        logger.debug("Probing %s", argv)
        result = subprocess.run(  # noqa: S603
            argv,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()
