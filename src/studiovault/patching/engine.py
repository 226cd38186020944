"""Idempotent config patcher: marker check, structural transform, drift detection."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from studiovault.errors import PreconditionError

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from studiovault.reporting import Reporter

logger = logging.getLogger(__name__)


class OnMissing(enum.Enum):
    """What to do when the target file does not exist."""

    CREATE = "create"
    WARN = "warn"
    FAIL = "fail"


class PatchOutcome(enum.Enum):
    """How a single patch application ended."""

    CREATED = "created"
    PATCHED = "patched"
    OVERWRITTEN = "overwritten"
    ALREADY_PATCHED = "already_patched"
    DRIFT = "drift"
    MISSING = "missing"


@dataclass(frozen=True)
class Patch:
    """A hand-written patch for one file of a generated workspace.

    Exactly one of *body* and *transform* is set.  A transform must return
    its input unchanged when its anchor is not found.
    """

    path: str
    marker: str
    label: str
    body: str | None = None
    transform: Callable[[str], str] | None = None
    on_missing: OnMissing = OnMissing.CREATE

    def __post_init__(self) -> None:
        if (self.body is None) == (self.transform is None):
            msg = f"Patch for {self.path} needs exactly one of body or transform"
            raise ValueError(msg)
        if self.body is None and self.on_missing is OnMissing.CREATE:
            msg = f"Patch for {self.path} cannot create a missing file without a body"
            raise ValueError(msg)


@dataclass(frozen=True)
class PatchResult:
    """Outcome of :func:`apply_patch`."""

    path: Path
    outcome: PatchOutcome
    message: str

    @property
    def changed(self) -> bool:
        return self.outcome in (
            PatchOutcome.CREATED,
            PatchOutcome.PATCHED,
            PatchOutcome.OVERWRITTEN,
        )


_DRIFT_MESSAGE = "Format changed, patch not applied. Manual review required."


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def apply_patch(workspace: Path, patch: Patch, reporter: Reporter) -> PatchResult:
    """Apply *patch* to ``workspace / patch.path``.

    Decision order: missing file (per ``on_missing``), marker present
    (skip), structural transform (write only if it changed something), full
    body (overwrite).  A transform that raises ``ValueError`` is treated the
    same as one that found no anchor: the file is left byte-for-byte intact.
    A file that is not valid UTF-8 is drift as well, whatever the patch kind.

    Raises
    ------
    PreconditionError
        When the file is missing and ``on_missing`` is ``FAIL``.
    """
    target = workspace / patch.path

    if not target.exists():
        if patch.on_missing is OnMissing.FAIL:
            msg = f"{patch.path} not found. Upstream template changed."
            raise PreconditionError(msg)
        if patch.on_missing is OnMissing.WARN:
            message = f"{patch.path} not found. Template may have changed; {patch.label} skipped."
            reporter.warn(message)
            return PatchResult(target, PatchOutcome.MISSING, message)
        assert patch.body is not None
        _write(target, patch.body)
        message = f"{patch.path} missing. Wrote fresh baseline."
        reporter.warn(message)
        return PatchResult(target, PatchOutcome.CREATED, message)

    try:
        raw = target.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        logger.debug("Cannot decode %s: %s", target, exc)
        message = f"{patch.path}: {_DRIFT_MESSAGE}"
        reporter.warn(message)
        return PatchResult(target, PatchOutcome.DRIFT, message)

    if patch.marker in raw:
        logger.debug("Marker %r found in %s", patch.marker, target)
        message = f"{patch.path} already patched. Skipping."
        reporter.skip(message)
        return PatchResult(target, PatchOutcome.ALREADY_PATCHED, message)

    if patch.transform is not None:
        try:
            patched = patch.transform(raw)
        except ValueError as exc:
            logger.debug("Transform for %s raised: %s", target, exc)
            patched = raw
        if patched == raw:
            message = f"{patch.path}: {_DRIFT_MESSAGE}"
            reporter.warn(message)
            return PatchResult(target, PatchOutcome.DRIFT, message)
        _write(target, patched)
        message = f"{patch.path}: {patch.label}."
        reporter.ok(message)
        return PatchResult(target, PatchOutcome.PATCHED, message)

    assert patch.body is not None
    reporter.warn(f"{patch.path} exists but differs. Overwriting with baseline.")
    _write(target, patch.body)
    message = f"{patch.path}: {patch.label}."
    reporter.ok(message)
    return PatchResult(target, PatchOutcome.OVERWRITTEN, message)
