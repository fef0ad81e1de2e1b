"""UAC Check - User Account Control and remote token filtering."""
from typing import List

from ..core.check import BaseCheck
from ..core.decision import SwitchRule, Verdict
from ..core.result import Compliance, Finding


ENABLE_LUA = SwitchRule(
    absent=Verdict("UAC is disabled (not configured).", Compliance.NON_COMPLIANT),
    enabled=Verdict("UAC is enabled.", Compliance.COMPLIANT),
    disabled=Verdict("UAC is disabled.", Compliance.NON_COMPLIANT),
)

LOCAL_ACCOUNT_TOKEN_FILTER_POLICY = SwitchRule(
    absent=Verdict(
        "Only the built-in Administrator account (RID 500) can be granted a high "
        "integrity token when authenticating remotely (default).",
        Compliance.COMPLIANT,
    ),
    enabled=Verdict(
        "Local users that are members of the Administrators group are granted a "
        "high integrity token when authenticating remotely.",
        Compliance.NON_COMPLIANT,
    ),
    disabled=Verdict(
        "Only the built-in Administrator account (RID 500) can be granted a high "
        "integrity token when authenticating remotely.",
        Compliance.COMPLIANT,
    ),
)

FILTER_ADMINISTRATOR_TOKEN = SwitchRule(
    absent=Verdict(
        "The built-in Administrator account (RID 500) is granted a high integrity "
        "token when authenticating remotely (default).",
        Compliance.NON_COMPLIANT,
    ),
    enabled=Verdict(
        "The built-in Administrator account (RID 500) is only granted a medium "
        "integrity token when authenticating remotely.",
        Compliance.COMPLIANT,
    ),
    disabled=Verdict(
        "The built-in Administrator account (RID 500) is granted a high integrity "
        "token when authenticating remotely.",
        Compliance.NON_COMPLIANT,
    ),
)


class UACCheck(BaseCheck):
    """Check UAC and the remote UAC token filtering policy."""

    check_id = "uac"
    name = "UAC"
    category = "access_control"
    description = "User Account Control and remote token filtering"

    UAC_REGISTRY_PATH = r"HKLM\SOFTWARE\Microsoft\Windows\CurrentVersion\Policies\System"

    def evaluate(self, reader) -> List[Finding]:
        findings: List[Finding] = []
        path = self.UAC_REGISTRY_PATH

        # EnableLUA - master UAC switch; nothing else matters once it is off
        enable_lua = reader.read_value(path, "EnableLUA")
        finding = ENABLE_LUA.finding(path, "EnableLUA", enable_lua)
        findings.append(finding)
        if finding.compliance != Compliance.COMPLIANT:
            return findings

        # LocalAccountTokenFilterPolicy - 1 disables remote UAC for every local admin
        latfp = reader.read_value(path, "LocalAccountTokenFilterPolicy")
        finding = LOCAL_ACCOUNT_TOKEN_FILTER_POLICY.finding(path, "LocalAccountTokenFilterPolicy", latfp)
        findings.append(finding)
        if finding.compliance != Compliance.COMPLIANT:
            return findings

        # FilterAdministratorToken - Admin Approval Mode for RID 500
        fat = reader.read_value(path, "FilterAdministratorToken")
        findings.append(FILTER_ADMINISTRATOR_TOKEN.finding(path, "FilterAdministratorToken", fat))

        return findings
