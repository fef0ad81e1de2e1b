import pytest

from winposture.core.capability import OsVersion
from winposture.core.errors import CollaboratorError, SnapshotError
from winposture.state import SnapshotStateReader
from winposture.state.snapshot import normalize_path

SNAPSHOT = """
os_version: {major: 10, minor: 0, build: 22631}
registry:
  HKEY_LOCAL_MACHINE\\SYSTEM\\CurrentControlSet\\Control\\Lsa:
    RunAsPPL: 2
firmware:
  type: 2
device_guard:
  configured: [CredentialGuard]
  running: []
"""


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "state.yaml"
    path.write_text(SNAPSHOT, encoding="utf-8")
    return path


def test_load_from_file(snapshot_file):
    reader = SnapshotStateReader.from_file(snapshot_file)
    assert reader.get_os_version() == OsVersion(10, 0, 22631)
    assert reader.read_value(r"HKLM\SYSTEM\CurrentControlSet\Control\Lsa", "runasppl") == 2
    assert reader.key_exists(r"hklm\system\currentcontrolset\control\lsa")
    assert reader.read_firmware_type() == 2
    info = reader.get_device_guard_info()
    assert info.configured == frozenset({"CredentialGuard"})
    assert info.running == frozenset()


def test_missing_values_are_none(snapshot_file):
    reader = SnapshotStateReader.from_file(snapshot_file)
    assert reader.read_value(r"HKLM\SYSTEM\CurrentControlSet\Control\Lsa", "Missing") is None
    assert reader.read_value(r"HKLM\SOFTWARE\Nowhere", "RunAsPPL") is None
    assert not reader.key_exists(r"HKLM\SOFTWARE\Nowhere")


def test_calls_are_recorded(snapshot_file):
    reader = SnapshotStateReader.from_file(snapshot_file)
    reader.read_value(r"HKLM\X", "Y")
    reader.get_os_version()
    assert reader.calls == [("read_value", r"HKLM\X", "Y"), ("get_os_version",)]
    assert reader.was_called("get_os_version")
    assert not reader.was_called("read_firmware_type")


def test_unrecorded_collaborators_fail():
    reader = SnapshotStateReader(os_version=OsVersion(10, 0))
    with pytest.raises(CollaboratorError):
        reader.read_firmware_type()
    with pytest.raises(CollaboratorError):
        reader.probe_firmware_variable()
    with pytest.raises(CollaboratorError):
        reader.get_device_guard_info()


def test_recorded_firmware_error_keeps_code():
    reader = SnapshotStateReader(os_version=OsVersion(10, 0), firmware={"type_error": 50})
    with pytest.raises(CollaboratorError) as excinfo:
        reader.read_firmware_type()
    assert excinfo.value.error_code == 50


@pytest.mark.parametrize("data", [
    [],
    {},
    {"os_version": {"major": 10}},
    {"os_version": {"major": "ten", "minor": 0}},
    {"os_version": {"major": 10, "minor": 0}, "registry": {r"HKLM\X": [1, 2]}},
    {"os_version": {"major": 10, "minor": 0}, "registry": {r"HKLM\X": {1: 2}}},
    {"os_version": {"major": 10, "minor": 0}, "registry": {7: {"A": 1}}},
    {"os_version": {"major": 10, "minor": 0}, "firmware": [1, 2]},
    {"os_version": {"major": 10, "minor": 0}, "device_guard": "CredentialGuard"},
    {"os_version": {"major": 10, "minor": 0}, "device_guard": {"running": 1}},
])
def test_invalid_snapshot(data):
    with pytest.raises(SnapshotError):
        SnapshotStateReader.from_dict(data)


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("os_version: [unclosed", encoding="utf-8")
    with pytest.raises(SnapshotError):
        SnapshotStateReader.from_file(path)


def test_missing_file(tmp_path):
    with pytest.raises(SnapshotError):
        SnapshotStateReader.from_file(tmp_path / "absent.yaml")


def test_normalize_path():
    assert normalize_path("HKEY_LOCAL_MACHINE\\Software\\") == "hklm\\software"
    assert normalize_path("HKCU/Software/Policies") == "hkcu\\software\\policies"
