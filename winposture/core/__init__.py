"""Core module - check base class, decision tables and orchestration."""
from .capability import Feature, OsVersion, supports
from .check import BaseCheck
from .result import ABSENT, AuditReport, CheckResult, Compliance, Finding
from .engine import AuditEngine

__all__ = [
    "ABSENT",
    "AuditEngine",
    "AuditReport",
    "BaseCheck",
    "CheckResult",
    "Compliance",
    "Feature",
    "Finding",
    "OsVersion",
    "supports",
]
