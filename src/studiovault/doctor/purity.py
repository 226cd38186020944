"""Import purity scan for shared packages.

Shared packages must stay runtime-agnostic, so Node-only modules may not be
referenced from ``packages/*/src``.  Matching is textual and covers the
``from "<mod>"``, ``require("<mod>")``, ``import "<mod>"`` and
``import("<mod>")`` forms, with or without the ``node:`` prefix.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

# Directories never descended into.
_SKIP_DIRS = frozenset({"node_modules", "dist", "build", ".turbo"})


@dataclass(frozen=True)
class ImportViolation:
    """A forbidden module referenced from a shared package source file."""

    file_path: Path
    module: str


@lru_cache(maxsize=64)
def _module_pattern(module: str) -> re.Pattern[str]:
    bare = module.removeprefix("node:")
    target = rf"(?:node:)?{re.escape(bare)}"
    return re.compile(
        rf"""\bfrom\s+(["']){target}\1"""
        rf"""|\brequire\(\s*(["']){target}\2\s*\)"""
        rf"""|\bimport\s*\(\s*(["']){target}\3\s*\)"""
        rf"""|\bimport\s+(["']){target}\4"""
    )


def contains_forbidden_import(text: str, module: str) -> bool:
    """Return True if *text* references *module* through an import form."""
    return _module_pattern(module).search(text) is not None


def iter_source_files(src_dir: Path, extensions: Sequence[str]) -> Iterator[Path]:
    """Yield source files under *src_dir* recursively, in sorted order."""
    for entry in sorted(src_dir.iterdir()):
        if entry.is_dir():
            if entry.name not in _SKIP_DIRS:
                yield from iter_source_files(entry, extensions)
        elif entry.suffix in extensions:
            yield entry


def find_forbidden_import(
    packages_dir: Path,
    modules: Sequence[str],
    extensions: Sequence[str],
) -> ImportViolation | None:
    """Scan every ``<packages_dir>/<pkg>/src`` and return the first violation.

    Packages are visited in sorted order, files in sorted order, modules in
    the order given, so the reported violation is deterministic.
    """
    for pkg_dir in sorted(p for p in packages_dir.iterdir() if p.is_dir()):
        src_dir = pkg_dir / "src"
        if not src_dir.is_dir():
            continue
        for file_path in iter_source_files(src_dir, extensions):
            text = file_path.read_text(encoding="utf-8", errors="replace")
            for module in modules:
                if contains_forbidden_import(text, module):
                    return ImportViolation(file_path, module)
    return None
