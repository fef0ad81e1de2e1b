import pytest

from conftest import VISTA, WIN10, WIN7, WIN8, make_reader
from winposture.checks.firmware import FirmwareCheck, FirmwareMode, detect_firmware_mode
from winposture.core.result import Compliance


@pytest.mark.parametrize("code,mode", [
    (2, FirmwareMode.UEFI),
    (1, FirmwareMode.LEGACY),
    (0, FirmwareMode.UNKNOWN),
    (3, FirmwareMode.UNKNOWN),
])
def test_firmware_type_api(code, mode):
    reader = make_reader(os_version=WIN10, firmware={"type": code})
    detection = detect_firmware_mode(reader, WIN10)
    assert detection.mode is mode
    assert detection.method == "GetFirmwareType"
    assert not reader.was_called("probe_firmware_variable")


def test_firmware_type_api_is_called_once():
    reader = make_reader(os_version=WIN8, firmware={"type": 2})
    detect_firmware_mode(reader, WIN8)
    assert [call for call in reader.calls if call[0] == "read_firmware_type"] == [("read_firmware_type",)]


def test_firmware_type_failure_is_unknown_with_error_code():
    reader = make_reader(firmware={"type_error": 87})
    detection = detect_firmware_mode(reader, WIN10)
    assert detection.mode is FirmwareMode.UNKNOWN
    assert detection.error_code == 87


@pytest.mark.parametrize("code,mode", [
    (1, FirmwareMode.LEGACY),
    (998, FirmwareMode.UEFI),
    (203, FirmwareMode.UEFI),
    (0, FirmwareMode.UEFI),
])
def test_probe_fallback_on_windows_7(code, mode):
    reader = make_reader(os_version=WIN7, firmware={"type": 1, "probe_error": code})
    detection = detect_firmware_mode(reader, WIN7)
    assert detection.mode is mode
    assert detection.method == "GetFirmwareEnvironmentVariable"
    assert not reader.was_called("read_firmware_type")


def test_old_os_is_unknown_without_any_call():
    reader = make_reader(os_version=VISTA, firmware={"type": 2, "probe_error": 1})
    detection = detect_firmware_mode(reader, VISTA)
    assert detection.mode is FirmwareMode.UNKNOWN
    assert detection.method is None
    assert not reader.was_called("read_firmware_type")
    assert not reader.was_called("probe_firmware_variable")


@pytest.mark.parametrize("os_version,firmware,compliance,value", [
    (WIN10, {"type": 2}, Compliance.COMPLIANT, "UEFI"),
    (WIN10, {"type": 1}, Compliance.NON_COMPLIANT, "Legacy BIOS"),
    (WIN10, {"type_error": 5}, Compliance.UNKNOWN, "Unknown"),
    (WIN7, {"probe_error": 1}, Compliance.NON_COMPLIANT, "Legacy BIOS"),
    (VISTA, {}, Compliance.UNKNOWN, "Unknown"),
])
def test_firmware_check(os_version, firmware, compliance, value):
    findings = FirmwareCheck().evaluate(make_reader(os_version=os_version, firmware=firmware))
    assert len(findings) == 1
    assert findings[0].subject == "UEFI"
    assert findings[0].compliance == compliance
    assert findings[0].value == value


def test_firmware_check_on_old_os_says_cannot_determine():
    findings = FirmwareCheck().evaluate(make_reader(os_version=VISTA))
    assert "Cannot determine" in findings[0].description
    assert findings[0].details == {}


def test_firmware_check_keeps_error_code_in_details_only():
    findings = FirmwareCheck().evaluate(make_reader(firmware={"type_error": 5}))
    assert findings[0].details["error_code"] == 5
    assert "5" not in findings[0].description
