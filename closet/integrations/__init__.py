"""Integration clients and connectivity check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_openai,
    check_removebg,
    run_all_checks,
)
from .removebg import RemoveBgClient, RemoveBgError, RemoveBgErrorKind

__all__ = [
    "IntegrationCheckResult",
    "RemoveBgClient",
    "RemoveBgError",
    "RemoveBgErrorKind",
    "check_openai",
    "check_removebg",
    "run_all_checks",
]
