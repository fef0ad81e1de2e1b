"""LSA Protection Check - RunAsPPL."""
from typing import List

from ..core.capability import Feature, supports
from ..core.check import BaseCheck
from ..core.decision import SwitchRule, Verdict
from ..core.result import Compliance, Finding


RUN_AS_PPL = SwitchRule(
    absent=Verdict("RunAsPPL is not configured.", Compliance.NON_COMPLIANT),
    enabled=Verdict("RunAsPPL is enabled.", Compliance.COMPLIANT),
    disabled=Verdict("RunAsPPL is disabled.", Compliance.NON_COMPLIANT),
)


class LSAProtectionCheck(BaseCheck):
    """Check whether LSASS runs as a Protected Process Light."""

    check_id = "lsa_protection"
    name = "LSA Protection"
    category = "credentials"
    description = "LSA protection (RunAsPPL)"

    LSA_PATH = r"HKLM\SYSTEM\CurrentControlSet\Control\Lsa"

    def evaluate(self, reader) -> List[Finding]:
        version = reader.get_os_version()
        if not supports(Feature.RUN_AS_PPL, version):
            return [self._finding(
                subject=self.LSA_PATH,
                field_name="RunAsPPL",
                description="RunAsPPL is not supported on this version of Windows.",
                compliance=Compliance.NOT_APPLICABLE
            )]

        value = reader.read_value(self.LSA_PATH, "RunAsPPL")
        return [RUN_AS_PPL.finding(self.LSA_PATH, "RunAsPPL", value)]
