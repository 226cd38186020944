"""Workspace configuration: pinned versions, npm scope, purity denylist."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import yaml

from studiovault.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "studiovault.yml"

# Literal embedded in every patched JSON config; its presence means "already patched".
MARKER_TEXT = "StudioVault Monorepo Fix"
JSON_MARKER = f'"_studiovault": "{MARKER_TEXT}"'

_DEFAULT_FORBIDDEN = (
    "fs",
    "path",
    "node:fs",
    "node:path",
    "child_process",
    "node:child_process",
)


@dataclass(frozen=True)
class WorkspaceConfig:
    """Settings shared by generators and doctor.

    Every field has a default matching the monorepo's constitution, so a
    missing ``studiovault.yml`` is equivalent to an empty one.
    """

    scope: str = "@studiovault"
    node_major: int = 20
    pnpm_version: str = "9.15.4"
    react_version: str = "19.1.0"
    peer_only_manifest: str = "packages/ui/package.json"
    lockfile: str = "pnpm-lock.yaml"
    source_extensions: tuple[str, ...] = (".ts", ".tsx")
    forbidden_imports: tuple[str, ...] = field(default=_DEFAULT_FORBIDDEN)

    def package(self, name: str) -> str:
        """Return the scoped npm name of a shared workspace package."""
        return f"{self.scope}/{name}"


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{key}' in {CONFIG_FILENAME} must be a mapping, got {type(value).__name__}"
        raise ConfigError(msg)
    return value


def _str_list(value: Any, key: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"'{key}' in {CONFIG_FILENAME} must be a list of strings"
        raise ConfigError(msg)
    return tuple(value)


def load_config(project_root: Path) -> WorkspaceConfig:
    """Load ``studiovault.yml`` from *project_root*.

    Falls back to defaults for missing keys, a missing file, or a file that
    cannot be read or parsed.  Raises :class:`ConfigError` when a key is
    present with the wrong type.
    """
    config_path = project_root / CONFIG_FILENAME
    if not config_path.is_file():
        return WorkspaceConfig()

    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError):
        logger.warning("Failed to read %s, using defaults", CONFIG_FILENAME)
        return WorkspaceConfig()

    if not isinstance(data, dict):
        return WorkspaceConfig()

    kwargs: dict[str, Any] = {}

    if "scope" in data:
        scope = data["scope"]
        if not isinstance(scope, str) or not scope.startswith("@"):
            msg = f"'scope' in {CONFIG_FILENAME} must be an npm scope like '@studiovault'"
            raise ConfigError(msg)
        kwargs["scope"] = scope.rstrip("/")

    toolchain = _section(data, "toolchain")
    if "node_major" in toolchain:
        try:
            kwargs["node_major"] = int(toolchain["node_major"])
        except (TypeError, ValueError) as exc:
            msg = f"'toolchain.node_major' in {CONFIG_FILENAME} must be an integer"
            raise ConfigError(msg) from exc
    if "pnpm" in toolchain:
        kwargs["pnpm_version"] = str(toolchain["pnpm"])

    react = _section(data, "react")
    if "version" in react:
        kwargs["react_version"] = str(react["version"])
    if "peer_only_manifest" in react:
        kwargs["peer_only_manifest"] = str(react["peer_only_manifest"])

    purity = _section(data, "purity")
    if "extensions" in purity:
        kwargs["source_extensions"] = _str_list(purity["extensions"], "purity.extensions")
    if "forbidden" in purity:
        kwargs["forbidden_imports"] = _str_list(purity["forbidden"], "purity.forbidden")

    if "lockfile" in data:
        kwargs["lockfile"] = str(data["lockfile"])

    logger.debug("Loaded %s with overrides: %s", CONFIG_FILENAME, sorted(kwargs))
    return WorkspaceConfig(**kwargs)
