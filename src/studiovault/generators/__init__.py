"""Generators domain: scaffold app workspaces and patch them to monorepo conventions."""

from studiovault.generators.recipes import (
    RECIPES,
    AppKind,
    Recipe,
    build_patches,
    validate_cron,
    validate_name,
)
from studiovault.generators.runner import GenerateResult, create_app

__all__ = [
    "RECIPES",
    "AppKind",
    "GenerateResult",
    "Recipe",
    "build_patches",
    "create_app",
    "validate_cron",
    "validate_name",
]
