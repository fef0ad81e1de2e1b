"""Firmware Check - UEFI vs Legacy BIOS boot mode.

Two detection strategies, chosen by OS version:

* Windows 8 / Server 2012 and later expose ``GetFirmwareType``.
* Windows 7 / Server 2008 R2 lack it, so the mode is inferred from the error
  returned by a firmware-variable lookup that is bound to fail. Legacy BIOS
  does not implement the API at all (``ERROR_INVALID_FUNCTION``); UEFI
  implements it and merely reports that the variable does not exist.

Older systems cannot be classified and are reported as unknown.
"""
import logging
from enum import Enum
from typing import List, NamedTuple, Optional

from ..core.capability import Feature, OsVersion, supports
from ..core.check import BaseCheck
from ..core.errors import CollaboratorError
from ..core.result import Compliance, Finding

logger = logging.getLogger(__name__)

FIRMWARE_TYPE_BIOS = 1
FIRMWARE_TYPE_UEFI = 2
ERROR_INVALID_FUNCTION = 1


class FirmwareMode(Enum):
    UNKNOWN = "Unknown"
    LEGACY = "Legacy BIOS"
    UEFI = "UEFI"


class FirmwareDetection(NamedTuple):
    """Detected firmware mode and how it was obtained."""
    mode: FirmwareMode
    method: Optional[str]
    error_code: Optional[int] = None


def detect_firmware_mode(reader, version: OsVersion) -> FirmwareDetection:
    """
    Detect the firmware mode using the strategy the OS version allows.

    Never raises: collaborator failures resolve to FirmwareMode.UNKNOWN with
    the error code kept for diagnostics.
    """
    if supports(Feature.FIRMWARE_TYPE_API, version):
        try:
            firmware_type = reader.read_firmware_type()
        except CollaboratorError as e:
            logger.warning("GetFirmwareType failed (error %s)", e.error_code)
            return FirmwareDetection(FirmwareMode.UNKNOWN, "GetFirmwareType", e.error_code)

        if firmware_type == FIRMWARE_TYPE_BIOS:
            return FirmwareDetection(FirmwareMode.LEGACY, "GetFirmwareType")
        if firmware_type == FIRMWARE_TYPE_UEFI:
            return FirmwareDetection(FirmwareMode.UEFI, "GetFirmwareType")
        logger.warning("GetFirmwareType returned unexpected firmware type %r", firmware_type)
        return FirmwareDetection(FirmwareMode.UNKNOWN, "GetFirmwareType")

    if supports(Feature.FIRMWARE_PROBE, version):
        try:
            code = reader.probe_firmware_variable()
        except CollaboratorError as e:
            logger.warning("Firmware variable probe could not run (error %s)", e.error_code)
            return FirmwareDetection(FirmwareMode.UNKNOWN, "GetFirmwareEnvironmentVariable", e.error_code)

        logger.debug("Firmware variable probe returned error %d", code)
        if code == ERROR_INVALID_FUNCTION:
            return FirmwareDetection(FirmwareMode.LEGACY, "GetFirmwareEnvironmentVariable", code)
        return FirmwareDetection(FirmwareMode.UEFI, "GetFirmwareEnvironmentVariable", code)

    return FirmwareDetection(FirmwareMode.UNKNOWN, None)


class FirmwareCheck(BaseCheck):
    """Check whether the host boots in UEFI mode."""

    check_id = "uefi"
    name = "UEFI"
    category = "boot"
    description = "Firmware boot mode (UEFI or Legacy BIOS)"

    def evaluate(self, reader) -> List[Finding]:
        detection = detect_firmware_mode(reader, reader.get_os_version())

        details = {}
        if detection.method:
            details["method"] = detection.method
        if detection.error_code is not None:
            details["error_code"] = detection.error_code

        if detection.mode is FirmwareMode.UEFI:
            description = "BIOS mode is UEFI."
            compliance = Compliance.COMPLIANT
        elif detection.mode is FirmwareMode.LEGACY:
            description = "BIOS mode is Legacy."
            compliance = Compliance.NON_COMPLIANT
        elif detection.method is None:
            description = "Cannot determine BIOS mode on this version of Windows."
            compliance = Compliance.UNKNOWN
        else:
            description = "BIOS mode could not be determined."
            compliance = Compliance.UNKNOWN

        return [self._finding(
            subject="UEFI",
            value=detection.mode.value,
            description=description,
            compliance=compliance,
            details=details
        )]
