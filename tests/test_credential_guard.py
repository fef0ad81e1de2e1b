import pytest

from conftest import WIN10, WIN81, make_reader
from winposture.checks.credential_guard import CredentialGuardCheck
from winposture.core.result import Compliance


def evaluate(device_guard, os_version=WIN10):
    reader = make_reader(os_version=os_version, device_guard=device_guard)
    findings = CredentialGuardCheck().evaluate(reader)
    assert len(findings) == 1
    return findings[0], reader


def test_not_supported_before_windows_10():
    finding, reader = evaluate({"configured": ["CredentialGuard"]}, os_version=WIN81)
    assert finding.compliance == Compliance.NOT_APPLICABLE
    assert "not supported" in finding.description
    assert not reader.was_called("get_device_guard_info")


@pytest.mark.parametrize("device_guard", [None, {"error": 2147749902}])
def test_introspection_failure_is_check_failed(device_guard):
    finding, _ = evaluate(device_guard)
    assert finding.compliance == Compliance.UNKNOWN
    assert "check failed" in finding.description
    assert "not configured" not in finding.description


def test_introspection_error_code_is_diagnostic_only():
    finding, _ = evaluate({"error": 5})
    assert finding.details["error_code"] == 5


def test_configured_and_running():
    finding, _ = evaluate({
        "configured": ["CredentialGuard", "HypervisorEnforcedCodeIntegrity"],
        "running": ["CredentialGuard"],
    })
    assert finding.compliance == Compliance.COMPLIANT
    assert finding.description == "Credential Guard is configured and running."


def test_configured_but_not_running_reports_running_list():
    finding, _ = evaluate({
        "configured": ["CredentialGuard", "HypervisorEnforcedCodeIntegrity"],
        "running": ["HypervisorEnforcedCodeIntegrity"],
    })
    assert finding.compliance == Compliance.NON_COMPLIANT
    assert finding.description == "Credential Guard is configured but is not running."
    assert finding.extra["configured"] == ["CredentialGuard", "HypervisorEnforcedCodeIntegrity"]
    assert finding.extra["running"] == ["HypervisorEnforcedCodeIntegrity"]


@pytest.mark.parametrize("device_guard", [
    {"configured": [], "running": []},
    {"configured": ["HypervisorEnforcedCodeIntegrity"], "running": ["CredentialGuard"]},
])
def test_not_configured(device_guard):
    finding, _ = evaluate(device_guard)
    assert finding.compliance == Compliance.NON_COMPLIANT
    assert finding.description == "Credential Guard is not configured."
