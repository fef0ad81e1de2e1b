"""Audit engine - runs registered checks against a state reader."""
import logging
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional

from .check import BaseCheck
from .errors import CollaboratorError
from .result import AuditReport, CheckResult

if TYPE_CHECKING:
    from ..state.base import StateReader

logger = logging.getLogger(__name__)


class AuditEngine:
    """Orchestrates compliance checks across all registered checks."""

    def __init__(self, reader: "StateReader"):
        self.reader = reader
        self._checks: Dict[str, BaseCheck] = {}
        self._report: Optional[AuditReport] = None

    def register_check(self, check: BaseCheck):
        """Register a check instance."""
        self._checks[check.check_id] = check

    def register_checks(self, checks: Iterable[BaseCheck]):
        """Register multiple checks."""
        for check in checks:
            self.register_check(check)

    def get_checks(self, check_ids: Optional[Iterable[str]] = None) -> List[BaseCheck]:
        """
        Get checks to run, in registration order.

        Raises:
            KeyError: a requested check id is not registered
        """
        if check_ids is None:
            return list(self._checks.values())

        wanted = [c.lower() for c in check_ids]
        unknown = [c for c in wanted if c not in self._checks]
        if unknown:
            raise KeyError(f"Unknown check(s): {', '.join(unknown)}")
        return [check for key, check in self._checks.items() if key in wanted]

    def run_audit(
        self,
        check_ids: Optional[Iterable[str]] = None,
        progress_callback: Optional[Callable[[int, int, str], None]] = None
    ) -> AuditReport:
        """
        Run an audit.

        Args:
            check_ids: Checks to run (default: all registered checks)
            progress_callback: Optional callback(current, total, check_name)

        Returns:
            AuditReport with all results
        """
        self._report = AuditReport(system_info=self._system_info())
        checks = self.get_checks(check_ids)
        total = len(checks)

        for i, check in enumerate(checks):
            if progress_callback:
                progress_callback(i, total, check.name)

            result = check.run(self.reader)
            self._report.add_result(result)

        self._report.finalize()

        if progress_callback:
            progress_callback(total, total, "Complete")

        return self._report

    def run_single_check(self, check_id: str) -> Optional[CheckResult]:
        """Run a single check by id."""
        check = self._checks.get(check_id.lower())

        if check:
            return check.run(self.reader)
        return None

    def _system_info(self) -> Dict[str, str]:
        try:
            return {"os_version": str(self.reader.get_os_version())}
        except (CollaboratorError, OSError) as e:
            logger.warning("Could not determine OS version: %s", e)
            return {"os_version": "unknown"}

    @property
    def available_checks(self) -> List[str]:
        """List all registered check ids."""
        return list(self._checks.keys())

    @property
    def check_count(self) -> int:
        """Number of registered checks."""
        return len(self._checks)
