import pytest

from conftest import WIN10, WIN8, WIN81, make_reader
from winposture.checks.laps import LAPSCheck
from winposture.checks.lsa import LSAProtectionCheck
from winposture.checks.secure_boot import SecureBootCheck
from winposture.core.result import Compliance

SECURE_BOOT_PATH = SecureBootCheck.SECURE_BOOT_PATH
LAPS_PATH = LAPSCheck.LAPS_POLICY_PATH
LSA_PATH = LSAProtectionCheck.LSA_PATH


def single(check, path, field, value, os_version=WIN10):
    registry = {} if value is None else {path: {field: value}}
    findings = check.evaluate(make_reader(registry=registry, os_version=os_version))
    assert len(findings) == 1
    return findings[0]


@pytest.mark.parametrize("value,compliance,text", [
    (1, Compliance.COMPLIANT, "Secure Boot is enabled."),
    (0, Compliance.NON_COMPLIANT, "Secure Boot is disabled."),
    (None, Compliance.UNKNOWN, "Secure Boot is not supported."),
])
def test_secure_boot(value, compliance, text):
    finding = single(SecureBootCheck(), SECURE_BOOT_PATH, "UEFISecureBootEnabled", value)
    assert finding.compliance == compliance
    assert finding.description == text
    assert finding.field_name == "UEFISecureBootEnabled"


@pytest.mark.parametrize("value,compliance", [
    (1, Compliance.COMPLIANT),
    (2, Compliance.COMPLIANT),
    (0, Compliance.NON_COMPLIANT),
    (None, Compliance.UNKNOWN),
])
def test_laps(value, compliance):
    finding = single(LAPSCheck(), LAPS_PATH, "AdmPwdEnabled", value)
    assert finding.compliance == compliance


def test_laps_absent_is_not_penalized():
    finding = single(LAPSCheck(), LAPS_PATH, "AdmPwdEnabled", None)
    assert finding.description == "LAPS is not configured."
    assert finding.display_value == "(null)"


@pytest.mark.parametrize("value,compliance", [
    (1, Compliance.COMPLIANT),
    (2, Compliance.COMPLIANT),
    (0, Compliance.NON_COMPLIANT),
    (None, Compliance.NON_COMPLIANT),
])
def test_run_as_ppl(value, compliance):
    finding = single(LSAProtectionCheck(), LSA_PATH, "RunAsPPL", value, os_version=WIN81)
    assert finding.compliance == compliance


def test_run_as_ppl_unsupported_short_circuits():
    reader = make_reader(registry={LSA_PATH: {"RunAsPPL": 1}}, os_version=WIN8)
    findings = LSAProtectionCheck().evaluate(reader)
    assert len(findings) == 1
    assert findings[0].compliance == Compliance.NOT_APPLICABLE
    assert "not supported" in findings[0].description
    assert not reader.was_called("read_value")


@pytest.mark.parametrize("check,path,field,value", [
    (SecureBootCheck(), SECURE_BOOT_PATH, "UEFISecureBootEnabled", 1),
    (SecureBootCheck(), SECURE_BOOT_PATH, "UEFISecureBootEnabled", None),
    (LAPSCheck(), LAPS_PATH, "AdmPwdEnabled", 0),
    (LSAProtectionCheck(), LSA_PATH, "RunAsPPL", 1),
])
def test_single_value_checks_are_idempotent(check, path, field, value):
    reader = make_reader(registry={path: {field: value}} if value is not None else {})
    first = check.evaluate(reader)
    second = check.evaluate(reader)
    assert first == second
    assert [f.to_dict() for f in first] == [f.to_dict() for f in second]


def test_malformed_value_is_unknown():
    finding = single(SecureBootCheck(), SECURE_BOOT_PATH, "UEFISecureBootEnabled", "enabled")
    assert finding.compliance == Compliance.UNKNOWN
