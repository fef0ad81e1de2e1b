import pytest

from winposture.core.capability import OsVersion
from winposture.state import SnapshotStateReader

WIN10 = OsVersion(10, 0, 19045)
WIN81 = OsVersion(6, 3, 9600)
WIN8 = OsVersion(6, 2, 9200)
WIN7 = OsVersion(6, 1, 7601)
VISTA = OsVersion(6, 0, 6002)


def make_reader(registry=None, os_version=WIN10, firmware=None, device_guard=None):
    return SnapshotStateReader(
        os_version=os_version,
        registry=registry,
        firmware=firmware,
        device_guard=device_guard,
    )


@pytest.fixture
def reader_factory():
    return make_reader
