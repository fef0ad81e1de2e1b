"""LAPS Check - Local Administrator Password Solution."""
from typing import List

from ..core.check import BaseCheck
from ..core.decision import SwitchRule, Verdict
from ..core.result import Compliance, Finding


# Absence is not penalized: another LAPS implementation may be in use
LAPS = SwitchRule(
    absent=Verdict("LAPS is not configured.", Compliance.UNKNOWN),
    enabled=Verdict("LAPS is enabled.", Compliance.COMPLIANT),
    disabled=Verdict("LAPS is disabled.", Compliance.NON_COMPLIANT),
)


class LAPSCheck(BaseCheck):
    """Check whether LAPS manages the local Administrator password."""

    check_id = "laps"
    name = "LAPS"
    category = "credentials"
    description = "Local Administrator Password Solution policy"

    LAPS_POLICY_PATH = r"HKLM\Software\Policies\Microsoft Services\AdmPwd"

    def evaluate(self, reader) -> List[Finding]:
        value = reader.read_value(self.LAPS_POLICY_PATH, "AdmPwdEnabled")
        return [LAPS.finding(self.LAPS_POLICY_PATH, "AdmPwdEnabled", value)]
