"""Per-kind generator recipes: template, shared packages, patches."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from studiovault.config import JSON_MARKER
from studiovault.contracts.utils import assert_never, slugify
from studiovault.errors import PreconditionError
from studiovault.generators import templates
from studiovault.patching.engine import OnMissing, Patch
from studiovault.patching.jsonc import insert_members, loads_jsonc, remove_top_level_key
from studiovault.toolchain import ScaffoldTemplate

if TYPE_CHECKING:
    from collections.abc import Callable

    from studiovault.config import WorkspaceConfig


class AppKind(enum.Enum):
    """Application kinds a generator exists for."""

    WEB = "web"
    WORKER = "worker"
    CRON_WORKER = "cron-worker"
    DESKTOP = "desktop"
    MOBILE = "mobile"


@dataclass(frozen=True)
class Recipe:
    """Everything a generator needs to know about one app kind."""

    kind: AppKind
    category: str
    title: str
    template: ScaffoldTemplate
    packages: tuple[str, ...]
    dev_packages: tuple[str, ...]
    run_command: str


RECIPES: dict[AppKind, Recipe] = {
    AppKind.WEB: Recipe(
        kind=AppKind.WEB,
        category="web",
        title="Next.js + Tailwind app",
        template=ScaffoldTemplate(
            "next-app@latest",
            ("--ts", "--eslint", "--tailwind", "--src-dir", "--app", "--use-pnpm"),
        ),
        packages=("ui", "utils", "types"),
        dev_packages=(),
        run_command="pnpm dev",
    ),
    AppKind.WORKER: Recipe(
        kind=AppKind.WORKER,
        category="api",
        title="API Worker",
        template=ScaffoldTemplate("cloudflare@latest"),
        packages=("utils", "types"),
        dev_packages=("typescript-config",),
        run_command="pnpm dev",
    ),
    AppKind.CRON_WORKER: Recipe(
        kind=AppKind.CRON_WORKER,
        category="cron",
        title="Cron Worker",
        template=ScaffoldTemplate("cloudflare@latest"),
        packages=("utils", "types"),
        dev_packages=("typescript-config",),
        run_command="pnpm dev",
    ),
    AppKind.DESKTOP: Recipe(
        kind=AppKind.DESKTOP,
        category="desktop",
        title="Electron Desktop App",
        template=ScaffoldTemplate("electron-vite@latest"),
        packages=("types", "utils", "ui"),
        dev_packages=("typescript-config",),
        run_command="pnpm dev",
    ),
    AppKind.MOBILE: Recipe(
        kind=AppKind.MOBILE,
        category="mobile",
        title="Expo Mobile App",
        template=ScaffoldTemplate("expo-app@latest"),
        packages=("types", "utils", "ui"),
        dev_packages=("typescript-config",),
        run_command="pnpm start",
    ),
}


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

# One cron field: digits, names (MON, JAN), and the operators * / , - ? L W #.
_CRON_FIELD_RE = re.compile(r"^[A-Za-z0-9*/,\-?#]+$")


def validate_name(name: str) -> str:
    """Return *name* if it is usable as a directory and a source literal."""
    if not name or not name.strip():
        msg = "Missing app name."
        raise PreconditionError(msg)
    if slugify(name) != name:
        msg = (
            f"Invalid app name {name!r}: use lowercase letters, digits and hyphens "
            f"(e.g. {slugify(name) or 'my-app'!r})."
        )
        raise PreconditionError(msg)
    return name


def validate_cron(expr: str | None) -> str:
    """Return the normalised cron expression (exactly five fields)."""
    if expr is None or not expr.strip():
        msg = 'Missing --cron argument. Example: --cron "0 */5 * * *"'
        raise PreconditionError(msg)
    fields = expr.split()
    if len(fields) != 5:
        msg = (
            f"Invalid cron expression: {expr!r}. "
            'Cron must have exactly 5 fields, e.g. "*/30 * * * *".'
        )
        raise PreconditionError(msg)
    bad = [f for f in fields if not _CRON_FIELD_RE.match(f)]
    if bad:
        msg = f"Invalid cron expression: {expr!r}. Unexpected characters in {', '.join(bad)}."
        raise PreconditionError(msg)
    return " ".join(fields)


# ---------------------------------------------------------------------------
# Structural transforms
# ---------------------------------------------------------------------------


def _replace_and_mark(key: str, members: list[str]) -> Callable[[str], str]:
    """Build a transform that drops top-level *key* then inserts *members*.

    If the insertion anchor is missing the original text is returned, even
    when the removal step already changed something.
    """

    def transform(raw: str) -> str:
        cleaned = remove_top_level_key(raw, key)
        patched = insert_members(cleaned, members)
        if patched == cleaned:
            return raw
        return patched

    return transform


def _extend_tsconfig(extends: str) -> Callable[[str], str]:
    """Build a transform that marks a tsconfig and adds ``extends`` if absent."""

    def transform(raw: str) -> str:
        data = loads_jsonc(raw)
        if not isinstance(data, dict):
            return raw
        members = [JSON_MARKER]
        if "extends" not in data:
            members.append(f'"extends": "{extends}"')
        return insert_members(raw, members)

    return transform


# ---------------------------------------------------------------------------
# Patch sets
# ---------------------------------------------------------------------------


def build_patches(
    recipe: Recipe,
    name: str,
    config: WorkspaceConfig,
    *,
    cron: str | None = None,
) -> list[Patch]:
    """Return the ordered patches the generator applies for *recipe*."""
    scope = config.scope
    kind = recipe.kind

    if kind is AppKind.WEB:
        return [
            Patch(
                path="next.config.ts",
                marker=templates.WEB_CONFIG_MARKER,
                label="transpilePackages patch applied",
                body=templates.next_config(
                    scope, tuple(config.package(p) for p in recipe.packages)
                ),
                on_missing=OnMissing.WARN,
            ),
        ]

    if kind is AppKind.WORKER:
        return [
            Patch(
                path="tsconfig.json",
                marker=JSON_MARKER,
                label="extends monorepo baseline",
                body=templates.worker_tsconfig(scope),
            ),
            Patch(
                path="wrangler.jsonc",
                marker=JSON_MARKER,
                label="HTTP-only worker (triggers removed)",
                transform=_replace_and_mark("triggers", [JSON_MARKER]),
                on_missing=OnMissing.WARN,
            ),
            Patch(
                path="src/index.ts",
                marker=templates.API_ENTRY_MARKER,
                label="fetch() entrypoint written",
                body=templates.api_entry(name, scope),
            ),
        ]

    if kind is AppKind.CRON_WORKER:
        if cron is None:
            msg = "Missing --cron argument."
            raise PreconditionError(msg)
        return [
            Patch(
                path="tsconfig.json",
                marker=JSON_MARKER,
                label="extends monorepo baseline",
                body=templates.worker_tsconfig(scope),
            ),
            Patch(
                path="wrangler.jsonc",
                marker=JSON_MARKER,
                label="cron trigger inserted",
                transform=_replace_and_mark(
                    "triggers", [JSON_MARKER, templates.cron_triggers_member(cron)]
                ),
                on_missing=OnMissing.FAIL,
            ),
            Patch(
                path="src/index.ts",
                marker=templates.CRON_ENTRY_MARKER,
                label="scheduled() entrypoint written",
                body=templates.cron_entry(name, cron, scope),
            ),
        ]

    if kind is AppKind.DESKTOP:
        return [
            Patch(
                path="tsconfig.app.json",
                marker=JSON_MARKER,
                label="extends monorepo React baseline",
                transform=_extend_tsconfig(f"{scope}/typescript-config/react.json"),
                on_missing=OnMissing.WARN,
            ),
        ]

    if kind is AppKind.MOBILE:
        # Expo owns its config; nothing is patched.
        return []

    assert_never(kind)
