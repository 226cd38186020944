"""Tests for studiovault.toolchain.PnpmToolchain (subprocess mocked)."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from studiovault.errors import ToolNotFoundError
from studiovault.toolchain import PnpmToolchain, ScaffoldTemplate


def _which(cmd: str) -> str:
    return f"/usr/bin/{cmd}"


@pytest.fixture()
def run_mock():
    with (
        patch("studiovault.toolchain.shutil.which", side_effect=_which),
        patch("studiovault.toolchain.subprocess.run") as mock_run,
    ):
        yield mock_run


class TestScaffold:
    def test_runs_pnpm_create_in_parent(self, run_mock: MagicMock, tmp_path: Path) -> None:
        template = ScaffoldTemplate("next-app@latest", ("--ts", "--app"))
        workspace = PnpmToolchain().scaffold(template, "site", tmp_path)

        assert workspace == tmp_path / "site"
        run_mock.assert_called_once_with(
            ["/usr/bin/pnpm", "create", "next-app@latest", "site", "--ts", "--app"],
            cwd=str(tmp_path),
            check=True,
        )

    def test_failure_propagates(self, run_mock: MagicMock, tmp_path: Path) -> None:
        run_mock.side_effect = subprocess.CalledProcessError(1, ["pnpm"])
        with pytest.raises(subprocess.CalledProcessError):
            PnpmToolchain().scaffold(ScaffoldTemplate("cloudflare@latest"), "api", tmp_path)


class TestInstallPackages:
    def test_runtime_packages(self, run_mock: MagicMock, tmp_path: Path) -> None:
        PnpmToolchain().install_packages(tmp_path, ["@studiovault/utils", "@studiovault/types"])
        run_mock.assert_called_once_with(
            ["/usr/bin/pnpm", "add", "@studiovault/utils", "@studiovault/types", "--workspace"],
            cwd=str(tmp_path),
            check=True,
        )

    def test_dev_packages(self, run_mock: MagicMock, tmp_path: Path) -> None:
        PnpmToolchain().install_packages(tmp_path, ["@studiovault/typescript-config"], dev=True)
        argv = run_mock.call_args.args[0]
        assert argv[:3] == ["/usr/bin/pnpm", "add", "-D"]

    def test_nothing_to_install(self, run_mock: MagicMock, tmp_path: Path) -> None:
        PnpmToolchain().install_packages(tmp_path, [])
        run_mock.assert_not_called()


class TestVersion:
    def test_node_version_trimmed(self, run_mock: MagicMock) -> None:
        run_mock.return_value = subprocess.CompletedProcess(
            ["node", "--version"], 0, stdout="v20.11.1\n", stderr=""
        )
        assert PnpmToolchain().version("node") == "v20.11.1"
        assert run_mock.call_args.args[0] == ["/usr/bin/node", "--version"]

    def test_pnpm_uses_short_flag(self, run_mock: MagicMock) -> None:
        run_mock.return_value = subprocess.CompletedProcess(
            ["pnpm", "-v"], 0, stdout="9.15.4\n", stderr=""
        )
        assert PnpmToolchain().version("pnpm") == "9.15.4"
        assert run_mock.call_args.args[0] == ["/usr/bin/pnpm", "-v"]


def test_missing_binary_raises() -> None:
    with (
        patch("studiovault.toolchain.shutil.which", return_value=None),
        patch("studiovault.toolchain.subprocess.run") as mock_run,
        pytest.raises(ToolNotFoundError, match="pnpm is not installed or not in PATH."),
    ):
        PnpmToolchain().install_packages(Path("."), ["x"])
    mock_run.assert_not_called()
