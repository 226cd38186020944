"""Exception hierarchy shared by generators, doctor and CLI."""

from __future__ import annotations


class StudioVaultError(Exception):
    """Base class for all toolkit errors."""


class PreconditionError(StudioVaultError):
    """Raised before any mutation when an input or required file is invalid.

    Covers a missing or malformed argument (name, cron expression) and a
    required template file that the scaffolder did not produce.
    """


class ToolNotFoundError(StudioVaultError):
    """Raised when an external binary (``pnpm``, ``node``) is not on PATH."""


class ConfigError(StudioVaultError):
    """Raised when ``studiovault.yml`` contains a value of the wrong type."""
