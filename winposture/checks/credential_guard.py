"""Credential Guard Check - virtualization-based credential isolation."""
import logging
from typing import List

from ..core.capability import Feature, supports
from ..core.check import BaseCheck
from ..core.errors import CollaboratorError
from ..core.result import Compliance, Finding

logger = logging.getLogger(__name__)

CREDENTIAL_GUARD = "CredentialGuard"


class CredentialGuardCheck(BaseCheck):
    """Check whether Credential Guard is configured and running."""

    check_id = "credential_guard"
    name = "Credential Guard"
    category = "credentials"
    description = "Credential Guard configuration and runtime state"

    def evaluate(self, reader) -> List[Finding]:
        if not supports(Feature.CREDENTIAL_GUARD, reader.get_os_version()):
            return [self._finding(
                subject=CREDENTIAL_GUARD,
                description="Credential Guard is not supported on this version of Windows.",
                compliance=Compliance.NOT_APPLICABLE
            )]

        try:
            info = reader.get_device_guard_info()
        except CollaboratorError as e:
            logger.warning("Device Guard introspection failed: %s", e)
            details = {"error": str(e)}
            if e.error_code is not None:
                details["error_code"] = e.error_code
            return [self._finding(
                subject=CREDENTIAL_GUARD,
                description="The Credential Guard check failed, Device Guard information is unavailable.",
                compliance=Compliance.UNKNOWN,
                details=details
            )]

        configured = sorted(info.configured)
        running = sorted(info.running)
        extra = {"configured": configured, "running": running}

        if CREDENTIAL_GUARD not in info.configured:
            description = "Credential Guard is not configured."
            compliance = Compliance.NON_COMPLIANT
        elif CREDENTIAL_GUARD in info.running:
            description = "Credential Guard is configured and running."
            compliance = Compliance.COMPLIANT
        else:
            description = "Credential Guard is configured but is not running."
            compliance = Compliance.NON_COMPLIANT

        return [self._finding(
            subject=CREDENTIAL_GUARD,
            field_name="SecurityServicesConfigured",
            value=configured,
            description=description,
            compliance=compliance,
            extra=extra
        )]
