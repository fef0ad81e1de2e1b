import time

import pytest

from conftest import make_reader
from winposture.checks import get_all_checks
from winposture.checks.uac import UACCheck
from winposture.core.check import BaseCheck
from winposture.core.engine import AuditEngine
from winposture.core.result import Compliance


class ExplodingCheck(BaseCheck):
    check_id = "exploding"
    name = "Exploding"

    def evaluate(self, reader):
        raise RuntimeError("boom")


class NestedCheck(BaseCheck):
    """Runs itself again on a second reader from inside its own evaluation."""
    check_id = "nested"
    name = "Nested"

    def __init__(self, inner_reader):
        self.inner_reader = inner_reader
        self.inner_result = None

    def evaluate(self, reader):
        if reader is not self.inner_reader:
            time.sleep(0.05)
            self.inner_result = self.run(self.inner_reader)
        return []


def make_engine(reader=None, checks=None):
    engine = AuditEngine(reader or make_reader())
    engine.register_checks(checks if checks is not None else get_all_checks())
    return engine


def test_all_checks_registered():
    engine = make_engine()
    assert engine.available_checks == [
        "uac", "laps", "lsa_protection", "credential_guard",
        "bitlocker", "uefi", "secure_boot", "ps_transcription",
    ]
    assert engine.check_count == 8


def test_failing_check_yields_unknown_finding_instead_of_raising():
    result = ExplodingCheck().run(make_reader())
    assert not result.success
    assert result.error == "boom"
    assert len(result.findings) == 1
    assert result.findings[0].compliance == Compliance.UNKNOWN
    assert result.findings[0].details == {"error": "boom"}


def test_audit_returns_partial_results_when_a_check_fails():
    engine = make_engine(checks=[ExplodingCheck(), UACCheck()])
    report = engine.run_audit()
    assert [r.check_id for r in report.results] == ["exploding", "uac"]
    assert report.results[1].success
    assert report.to_dict()["summary"]["failed_checks"] == 1


def test_audit_on_empty_host_completes():
    report = make_engine().run_audit()
    assert len(report.results) == 8
    assert all(r.success for r in report.results)
    assert report.system_info == {"os_version": "10.0.19045"}
    assert report.end_time is not None
    # Transcription has no policy key, so it reports nothing
    transcription = [r for r in report.results if r.check_id == "ps_transcription"][0]
    assert transcription.findings == []


def test_audit_subset_keeps_registration_order():
    report = make_engine().run_audit(check_ids=["secure_boot", "UAC"])
    assert [r.check_id for r in report.results] == ["uac", "secure_boot"]


def test_unknown_check_id():
    with pytest.raises(KeyError):
        make_engine().run_audit(check_ids=["nope"])


def test_progress_callback():
    calls = []
    make_engine(checks=[UACCheck()]).run_audit(progress_callback=lambda *args: calls.append(args))
    assert calls == [(0, 1, "UAC"), (1, 1, "Complete")]


def test_run_single_check():
    engine = make_engine()
    assert engine.run_single_check("uac").check_id == "uac"
    assert engine.run_single_check("missing") is None


def test_report_counts():
    reader = make_reader(registry={UACCheck.UAC_REGISTRY_PATH: {"EnableLUA": 1, "FilterAdministratorToken": 1}})
    report = make_engine(reader, checks=[UACCheck()]).run_audit()
    assert report.compliant_count == 3
    assert report.non_compliant_count == 0
    data = report.to_dict()
    assert data["summary"]["compliant"] == 3
    assert data["results"][0]["findings"][1]["value"] == "(null)"


def test_overlapping_runs_keep_their_own_duration():
    inner = make_reader()
    check = NestedCheck(inner)
    outer = check.run(make_reader())
    assert outer.duration_ms >= 40
    assert check.inner_result.duration_ms < outer.duration_ms
