"""Secure Boot Check - UEFI Secure Boot state."""
from typing import List

from ..core.check import BaseCheck
from ..core.decision import SwitchRule, Verdict
from ..core.result import Compliance, Finding


SECURE_BOOT = SwitchRule(
    absent=Verdict("Secure Boot is not supported.", Compliance.UNKNOWN),
    enabled=Verdict("Secure Boot is enabled.", Compliance.COMPLIANT),
    disabled=Verdict("Secure Boot is disabled.", Compliance.NON_COMPLIANT),
)


class SecureBootCheck(BaseCheck):
    """Check whether UEFI Secure Boot is enabled."""

    check_id = "secure_boot"
    name = "Secure Boot"
    category = "boot"
    description = "UEFI Secure Boot state"

    SECURE_BOOT_PATH = r"HKLM\SYSTEM\CurrentControlSet\Control\SecureBoot\State"

    def evaluate(self, reader) -> List[Finding]:
        value = reader.read_value(self.SECURE_BOOT_PATH, "UEFISecureBootEnabled")
        return [SECURE_BOOT.finding(self.SECURE_BOOT_PATH, "UEFISecureBootEnabled", value)]
