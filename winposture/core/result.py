"""Result models for compliance findings."""
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from datetime import datetime
import json


# Rendered in place of a value that was never read or is not configured
ABSENT = "(null)"


class Compliance(Enum):
    """Compliance verdict attached to a finding."""
    COMPLIANT = "compliant"
    NON_COMPLIANT = "non_compliant"
    UNKNOWN = "unknown"
    NOT_APPLICABLE = "not_applicable"

    @property
    def is_determined(self) -> bool:
        """True for a definite pass/fail verdict."""
        return self in (Compliance.COMPLIANT, Compliance.NON_COMPLIANT)


def display_value(value: Any) -> str:
    """Render a raw value, using the absent sentinel for ``None``."""
    if value is None:
        return ABSENT
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) if value else ""
    return str(value)


@dataclass(frozen=True)
class Finding:
    """A single compliance finding."""
    subject: str
    description: str
    compliance: Compliance
    field_name: Optional[str] = None
    value: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def display_value(self) -> str:
        """Raw value as text; absent values render as ``(null)``."""
        return display_value(self.value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert finding to dictionary."""
        return {
            "subject": self.subject,
            "field_name": self.field_name,
            "value": self.display_value,
            "description": self.description,
            "compliance": self.compliance.value,
            "extra": {k: display_value(v) for k, v in self.extra.items()},
            "details": self.details,
        }


@dataclass
class CheckResult:
    """Result from a single check."""
    check_id: str
    check_name: str
    category: str
    success: bool
    findings: List[Finding] = field(default_factory=list)
    duration_ms: float = 0.0
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "check_id": self.check_id,
            "check_name": self.check_name,
            "category": self.category,
            "success": self.success,
            "findings": [f.to_dict() for f in self.findings],
            "duration_ms": self.duration_ms,
            "error": self.error,
            "timestamp": self.timestamp.isoformat()
        }

    def count(self, compliance: Compliance) -> int:
        """Count findings with the given verdict."""
        return sum(1 for f in self.findings if f.compliance == compliance)

    @property
    def compliant_count(self) -> int:
        return self.count(Compliance.COMPLIANT)

    @property
    def non_compliant_count(self) -> int:
        return self.count(Compliance.NON_COMPLIANT)

    @property
    def unknown_count(self) -> int:
        """Findings whose state could not be determined or does not apply."""
        return self.count(Compliance.UNKNOWN) + self.count(Compliance.NOT_APPLICABLE)


@dataclass
class AuditReport:
    """Complete audit report across all checks."""
    results: List[CheckResult] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    system_info: Dict[str, Any] = field(default_factory=dict)

    def add_result(self, result: CheckResult):
        """Add a check result."""
        self.results.append(result)

    def finalize(self):
        """Mark report as complete."""
        self.end_time = datetime.now()

    @property
    def total_duration_ms(self) -> float:
        """Total audit duration in milliseconds."""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds() * 1000
        return sum(r.duration_ms for r in self.results)

    @property
    def all_findings(self) -> List[Finding]:
        """Get all findings from all results."""
        findings = []
        for result in self.results:
            findings.extend(result.findings)
        return findings

    @property
    def compliant_count(self) -> int:
        return sum(r.compliant_count for r in self.results)

    @property
    def non_compliant_count(self) -> int:
        return sum(r.non_compliant_count for r in self.results)

    @property
    def unknown_count(self) -> int:
        return sum(r.unknown_count for r in self.results)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary."""
        return {
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "total_duration_ms": self.total_duration_ms,
            "summary": {
                "total_checks": len(self.results),
                "completed_checks": sum(1 for r in self.results if r.success),
                "failed_checks": sum(1 for r in self.results if not r.success),
                "compliant": self.compliant_count,
                "non_compliant": self.non_compliant_count,
                "unknown": self.unknown_count
            },
            "system_info": self.system_info,
            "results": [r.to_dict() for r in self.results]
        }

    def to_json(self, indent: int = 2) -> str:
        """Export report as JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def save_json(self, filepath: str):
        """Save report to JSON file."""
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
