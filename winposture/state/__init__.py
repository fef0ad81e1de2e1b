"""Raw state readers - live Windows host and offline snapshots."""
from .base import SECURITY_SERVICES, DeviceGuardInfo, StateReader, service_names
from .snapshot import SnapshotStateReader

__all__ = [
    "SECURITY_SERVICES", "DeviceGuardInfo", "StateReader", "SnapshotStateReader",
    "get_live_reader", "service_names",
]


def get_live_reader() -> StateReader:
    """Create a reader for the local Windows host."""
    from .windows import WindowsStateReader
    return WindowsStateReader()
