"""StudioVault CLI entry point."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click

from studiovault import __version__
from studiovault.config import load_config
from studiovault.errors import StudioVaultError
from studiovault.generators import AppKind, create_app
from studiovault.reporting import Reporter
from studiovault.toolchain import PnpmToolchain

if TYPE_CHECKING:
    from studiovault.toolchain import Toolchain


@click.group()
@click.version_option(version=__version__, prog_name="studiovault")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging to stderr.")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool) -> None:
    """StudioVault - monorepo scaffolding and governance toolkit."""
    ctx.ensure_object(dict)
    ctx.obj.setdefault("toolchain", PnpmToolchain())
    ctx.obj.setdefault("reporter", Reporter())
    if verbose:
        from rich.console import Console
        from rich.logging import RichHandler

        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


_project_option = click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Monorepo root (default: current directory).",
)


def _fail(reporter: Reporter, message: str) -> NoReturn:
    reporter.error(message)
    sys.exit(1)


def _generate(
    ctx: click.Context,
    kind: AppKind,
    name: str | None,
    project: Path | None,
    *,
    cron: str | None = None,
) -> None:
    """Shared body of every ``create-*`` command."""
    reporter: Reporter = ctx.obj["reporter"]
    toolchain: Toolchain = ctx.obj["toolchain"]
    project_root = project or Path.cwd()

    try:
        config = load_config(project_root)
        create_app(
            kind,
            name or "",
            project_root,
            toolchain=toolchain,
            config=config,
            reporter=reporter,
            cron=cron,
        )
    except StudioVaultError as exc:
        _fail(reporter, str(exc))
    except subprocess.CalledProcessError as exc:
        cmd = exc.cmd if isinstance(exc.cmd, str) else " ".join(map(str, exc.cmd))
        _fail(reporter, f"Command failed with exit status {exc.returncode}: {cmd}")


@main.command("create-web")
@click.argument("name", required=False)
@_project_option
@click.pass_context
def create_web(ctx: click.Context, name: str | None, *, project: Path | None) -> None:
    """Create a Next.js + Tailwind app under apps/web/NAME."""
    _generate(ctx, AppKind.WEB, name, project)


@main.command("create-worker")
@click.argument("name", required=False)
@_project_option
@click.pass_context
def create_worker(ctx: click.Context, name: str | None, *, project: Path | None) -> None:
    """Create an HTTP-only Cloudflare Worker under apps/api/NAME."""
    _generate(ctx, AppKind.WORKER, name, project)


@main.command("create-cron-worker")
@click.argument("name", required=False)
@click.option("--cron", default=None, help='Five-field cron expression, e.g. "0 */5 * * *".')
@_project_option
@click.pass_context
def create_cron_worker(
    ctx: click.Context, name: str | None, *, cron: str | None, project: Path | None
) -> None:
    """Create a scheduled Cloudflare Worker under apps/cron/NAME."""
    _generate(ctx, AppKind.CRON_WORKER, name, project, cron=cron)


@main.command("create-desktop")
@click.argument("name", required=False)
@_project_option
@click.pass_context
def create_desktop(ctx: click.Context, name: str | None, *, project: Path | None) -> None:
    """Create an Electron-Vite desktop app under apps/desktop/NAME."""
    _generate(ctx, AppKind.DESKTOP, name, project)


@main.command("create-mobile")
@click.argument("name", required=False)
@_project_option
@click.pass_context
def create_mobile(ctx: click.Context, name: str | None, *, project: Path | None) -> None:
    """Create an Expo mobile app under apps/mobile/NAME."""
    _generate(ctx, AppKind.MOBILE, name, project)


@main.command()
@_project_option
@click.pass_context
def doctor(ctx: click.Context, *, project: Path | None) -> None:
    """Validate toolchain pinning, shared package purity and React singleton.

    Gates run in a fixed order and the first failure exits with status 1.
    """
    from studiovault.doctor import Severity, iter_checks

    reporter: Reporter = ctx.obj["reporter"]
    toolchain: Toolchain = ctx.obj["toolchain"]
    project_root = project or Path.cwd()

    try:
        config = load_config(project_root)
    except StudioVaultError as exc:
        _fail(reporter, str(exc))

    emit = {
        Severity.OK: reporter.ok,
        Severity.WARNING: reporter.warn,
        Severity.ERROR: reporter.error,
    }
    for check in iter_checks(
        project_root, toolchain=toolchain, config=config, on_gate=reporter.step
    ):
        emit[check.severity](check.description)
        if check.severity is Severity.ERROR:
            _fail(reporter, "StudioVault Doctor failed.")

    reporter.plain()
    reporter.ok("StudioVault Doctor: All checks passed.")
