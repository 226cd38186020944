"""Doctor domain: workspace-wide invariants checked in a fixed gate order."""

from studiovault.doctor.gates import (
    GATES,
    Check,
    DoctorContext,
    Severity,
    iter_checks,
    run_checks,
)
from studiovault.doctor.lockfile import extract_versions
from studiovault.doctor.purity import (
    ImportViolation,
    contains_forbidden_import,
    find_forbidden_import,
    iter_source_files,
)

__all__ = [
    "GATES",
    "Check",
    "DoctorContext",
    "ImportViolation",
    "Severity",
    "contains_forbidden_import",
    "extract_versions",
    "find_forbidden_import",
    "iter_checks",
    "iter_source_files",
    "run_checks",
]
