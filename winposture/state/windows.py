"""State reader for the local Windows host."""
import logging
import sys
from typing import Any, Optional

from ..core.capability import OsVersion
from ..core.errors import CollaboratorError
from ..utils import firmware_api, registry
from ..utils.wmi_helper import DEVICE_GUARD_NAMESPACE, WMIHelper
from .base import DeviceGuardInfo, StateReader

logger = logging.getLogger(__name__)


class WindowsStateReader(StateReader):
    """Reads registry values and firmware / Device Guard state from this host."""

    def __init__(self, wmi_helper: Optional[WMIHelper] = None):
        self._wmi = wmi_helper

    def read_value(self, path: str, field_name: str) -> Optional[Any]:
        return registry.read_value(path, field_name)

    def key_exists(self, path: str) -> bool:
        return registry.key_exists(path)

    def read_firmware_type(self) -> int:
        return firmware_api.get_firmware_type()

    def probe_firmware_variable(self) -> int:
        return firmware_api.probe_firmware_variable()

    def get_device_guard_info(self) -> DeviceGuardInfo:
        if self._wmi is None:
            self._wmi = WMIHelper()
        instance = self._wmi.query_single("Win32_DeviceGuard", DEVICE_GUARD_NAMESPACE)
        if instance is None:
            raise CollaboratorError("Win32_DeviceGuard returned no instance")
        return DeviceGuardInfo.from_codes(
            instance.get("SecurityServicesConfigured"),
            instance.get("SecurityServicesRunning"),
        )

    def get_os_version(self) -> OsVersion:
        info = sys.getwindowsversion()
        return OsVersion(info.major, info.minor, info.build)
