"""BitLocker Check - startup authentication policy.

The cascade only applies to workstations. Servers and domain controllers
are usually protected physically and rarely use pre-boot authentication, so
the check stops there with a compliant verdict.

On a workstation with BitLocker enabled, the FVE group policy decides
whether a second factor (PIN and/or startup key) is required on top of the
TPM. A TPM-only configuration is the Windows default and is not considered
compliant.
"""
from enum import Enum
from typing import Dict, List

from ..core.check import BaseCheck
from ..core.decision import DecisionTable, FieldRule, FieldVerdict, as_int, describe_fields
from ..core.result import Compliance, Finding


class MachineRole(Enum):
    WORKSTATION = "Workstation"
    DOMAIN_CONTROLLER = "Domain Controller"
    SERVER = "Server"
    UNKNOWN = "Unknown"


PRODUCT_TYPES = {
    "winnt": MachineRole.WORKSTATION,
    "lanmannt": MachineRole.DOMAIN_CONTROLLER,
    "servernt": MachineRole.SERVER,
}

PRODUCT_OPTIONS_PATH = r"HKLM\SYSTEM\CurrentControlSet\Control\ProductOptions"


def get_machine_role(reader) -> MachineRole:
    """Determine the machine role from ProductOptions\\ProductType."""
    product_type = reader.read_value(PRODUCT_OPTIONS_PATH, "ProductType")
    if not isinstance(product_type, str):
        return MachineRole.UNKNOWN
    return PRODUCT_TYPES.get(product_type.strip().lower(), MachineRole.UNKNOWN)


FVE_POLICY = DecisionTable(
    FieldRule(
        name="UseAdvancedStartup",
        default=0,
        minimum=0,
        maximum=1,
        descriptions=(
            "Do not require additional authentication at startup (default)",
            "Require additional authentication at startup",
        ),
    ),
    FieldRule(
        name="EnableBDEWithNoTPM",
        default=0,
        minimum=0,
        maximum=1,
        descriptions=(
            "Do not allow BitLocker without a compatible TPM (default)",
            "Allow BitLocker without a compatible TPM",
        ),
    ),
    FieldRule(
        name="UseTPM",
        default=1,
        minimum=0,
        maximum=2,
        descriptions=(
            "Do not allow TPM",
            "Require TPM (default)",
            "Allow TPM",
        ),
    ),
    FieldRule(
        name="UseTPMPIN",
        default=0,
        minimum=0,
        maximum=2,
        descriptions=(
            "Do not allow startup PIN with TPM (default)",
            "Require startup PIN with TPM",
            "Allow startup PIN with TPM",
        ),
    ),
    FieldRule(
        name="UseTPMKey",
        default=0,
        minimum=0,
        maximum=2,
        descriptions=(
            "Do not allow startup key with TPM (default)",
            "Require startup key with TPM",
            "Allow startup key with TPM",
        ),
    ),
    FieldRule(
        name="UseTPMKeyPIN",
        default=0,
        minimum=0,
        maximum=2,
        descriptions=(
            "Do not allow startup key and PIN with TPM (default)",
            "Require startup key and PIN with TPM",
            "Allow startup key and PIN with TPM",
        ),
    ),
)

SECOND_FACTOR_FIELDS = ("UseTPMPIN", "UseTPMKey", "UseTPMKeyPIN")


def is_fve_compliant(verdicts: Dict[str, FieldVerdict]) -> bool:
    """Advanced startup must be on and at least one second factor required."""

    def required(name: str) -> bool:
        verdict = verdicts[name]
        return verdict.valid and verdict.value == 1

    return required("UseAdvancedStartup") and any(required(name) for name in SECOND_FACTOR_FIELDS)


class BitLockerCheck(BaseCheck):
    """Check BitLocker status and startup authentication policy."""

    check_id = "bitlocker"
    name = "BitLocker"
    category = "encryption"
    description = "BitLocker startup authentication policy"

    BITLOCKER_STATUS_PATH = r"HKLM\SYSTEM\CurrentControlSet\Control\BitLockerStatus"
    FVE_POLICY_PATH = r"HKLM\SOFTWARE\Policies\Microsoft\FVE"

    def evaluate(self, reader) -> List[Finding]:
        role = get_machine_role(reader)

        if role is MachineRole.UNKNOWN:
            return [self._finding(
                subject=PRODUCT_OPTIONS_PATH,
                field_name="ProductType",
                value=role.value,
                description="The machine role could not be determined, BitLocker policy was not assessed.",
                compliance=Compliance.UNKNOWN
            )]

        if role is not MachineRole.WORKSTATION:
            return [self._finding(
                subject=PRODUCT_OPTIONS_PATH,
                field_name="ProductType",
                value=role.value,
                description=f"BitLocker startup authentication is not assessed on a {role.value}.",
                compliance=Compliance.COMPLIANT
            )]

        boot_status = reader.read_value(self.BITLOCKER_STATUS_PATH, "BootStatus")
        if boot_status is None:
            return [self._finding(
                subject=self.BITLOCKER_STATUS_PATH,
                field_name="BootStatus",
                description="BitLocker is not configured.",
                compliance=Compliance.NON_COMPLIANT
            )]

        status = as_int(boot_status)
        if status is None:
            return [self._finding(
                subject=self.BITLOCKER_STATUS_PATH,
                field_name="BootStatus",
                value=boot_status,
                description=f"BitLocker status has an unexpected value ({boot_status!r}).",
                compliance=Compliance.UNKNOWN
            )]

        if status < 1:
            return [self._finding(
                subject=self.BITLOCKER_STATUS_PATH,
                field_name="BootStatus",
                value=boot_status,
                description="BitLocker is disabled.",
                compliance=Compliance.NON_COMPLIANT
            )]

        raw_values = {name: reader.read_value(self.FVE_POLICY_PATH, name) for name in FVE_POLICY}
        verdicts = FVE_POLICY.resolve(raw_values)
        invalid = [name for name, verdict in verdicts.items() if not verdict.valid]

        compliance = Compliance.COMPLIANT if is_fve_compliant(verdicts) else Compliance.NON_COMPLIANT
        details = {"policy_path": self.FVE_POLICY_PATH}
        if invalid:
            details["invalid_fields"] = invalid

        return [self._finding(
            subject=self.BITLOCKER_STATUS_PATH,
            field_name="BootStatus",
            value=boot_status,
            description=f"BitLocker is enabled. {describe_fields(verdicts)}",
            compliance=compliance,
            extra=raw_values,
            details=details
        )]
