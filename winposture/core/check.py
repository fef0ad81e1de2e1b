"""Base check interface."""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional
import logging
import time

from .result import CheckResult, Compliance, Finding

if TYPE_CHECKING:
    from ..state.base import StateReader

logger = logging.getLogger(__name__)


class BaseCheck(ABC):
    """Abstract base class for all compliance checks."""

    # Check metadata - override in subclasses
    check_id: str = "base"
    name: str = "BaseCheck"
    category: str = "general"
    description: str = "Base check"

    @abstractmethod
    def evaluate(self, reader: "StateReader") -> List[Finding]:
        """
        Read state through the reader and return findings in decision order.

        Must be implemented by all check subclasses.
        """

    def run(self, reader: "StateReader") -> CheckResult:
        """
        Run the check with timing and error handling.

        This is the main entry point for running a check. It never raises:
        an unexpected failure becomes a single UNKNOWN finding so callers
        running many checks still get partial results.
        """
        start = time.perf_counter()
        logger.debug("Running check %s", self.check_id)

        try:
            findings = self.evaluate(reader)
            return self._create_result(start, findings=findings)

        except Exception as e:
            logger.warning("Check %s failed: %s", self.check_id, e, exc_info=logger.isEnabledFor(logging.DEBUG))
            return self._create_result(
                start,
                findings=[self._finding(
                    subject=self.name,
                    description="The check could not be completed.",
                    compliance=Compliance.UNKNOWN,
                    details={"error": str(e)}
                )],
                success=False,
                error=str(e)
            )

    @staticmethod
    def _elapsed_ms(start: float) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - start) * 1000

    def _create_result(
        self,
        start: float,
        findings: List[Finding] = None,
        success: bool = True,
        error: str = None
    ) -> CheckResult:
        """Helper to create a CheckResult."""
        return CheckResult(
            check_id=self.check_id,
            check_name=self.name,
            category=self.category,
            success=success,
            findings=findings or [],
            error=error,
            duration_ms=self._elapsed_ms(start)
        )

    @staticmethod
    def _finding(
        subject: str,
        description: str,
        compliance: Compliance,
        field_name: str = None,
        value: Any = None,
        extra: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> Finding:
        """Helper to create a Finding."""
        return Finding(
            subject=subject,
            description=description,
            compliance=compliance,
            field_name=field_name,
            value=value,
            extra=extra or {},
            details=details or {}
        )
