"""Offline state reader backed by a recorded snapshot.

A snapshot is a YAML (or plain dict) document::

    os_version: {major: 10, minor: 0, build: 19045}
    registry:
      HKLM\\SYSTEM\\CurrentControlSet\\Control\\Lsa:
        RunAsPPL: 1
    firmware:
      type: 2            # or type_error: <win32 error code>
      probe_error: 1     # result of the legacy firmware-variable probe
    device_guard:
      configured: [CredentialGuard]   # names or Win32_DeviceGuard codes
      running: [CredentialGuard]
      # or error: <code> when the introspection layer is unusable

Registry paths and value names are matched case-insensitively, as Windows
does. Sections that were not recorded behave like a failed collaborator.
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml

from ..core.capability import OsVersion
from ..core.errors import CollaboratorError, SnapshotError
from .base import DeviceGuardInfo, StateReader

logger = logging.getLogger(__name__)

HIVE_ALIASES = {
    "HKEY_LOCAL_MACHINE": "HKLM",
    "HKEY_CURRENT_USER": "HKCU",
    "HKEY_USERS": "HKU",
}


def normalize_path(path: str) -> str:
    """Canonical, case-folded form of a registry key path."""
    parts = [p for p in path.replace("/", "\\").split("\\") if p]
    if parts:
        parts[0] = HIVE_ALIASES.get(parts[0].upper(), parts[0])
    return "\\".join(parts).lower()


class SnapshotStateReader(StateReader):
    """Serves raw state from an in-memory snapshot and records every call."""

    def __init__(
        self,
        os_version: OsVersion,
        registry: Optional[Mapping[str, Mapping[str, Any]]] = None,
        firmware: Optional[Mapping[str, Any]] = None,
        device_guard: Optional[Mapping[str, Any]] = None,
    ):
        self.os_version = os_version
        self.firmware = dict(firmware or {})
        self.device_guard = dict(device_guard) if device_guard is not None else None
        self.calls: List[Tuple[Any, ...]] = []
        self._registry: Dict[str, Dict[str, Any]] = {}
        for path, values in (registry or {}).items():
            key = self._registry.setdefault(normalize_path(path), {})
            for name, value in (values or {}).items():
                key[name.lower()] = value

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SnapshotStateReader":
        """Build a reader from a parsed snapshot document."""
        if not isinstance(data, Mapping):
            raise SnapshotError("Snapshot must be a mapping")

        version = data.get("os_version")
        if not isinstance(version, Mapping) or "major" not in version or "minor" not in version:
            raise SnapshotError("Snapshot needs an os_version mapping with major and minor")
        try:
            os_version = OsVersion(int(version["major"]), int(version["minor"]), int(version.get("build", 0)))
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"Invalid os_version: {e}") from e

        registry = data.get("registry") or {}
        if not isinstance(registry, Mapping):
            raise SnapshotError("registry must map key paths to value mappings")
        for path, values in registry.items():
            if not isinstance(path, str) or not (isinstance(values, Mapping) or values is None):
                raise SnapshotError("registry must map key paths to value mappings")
            bad = [name for name in (values or {}) if not isinstance(name, str)]
            if bad:
                raise SnapshotError(f"Value names under {path} must be strings, got {bad!r}")

        for section in ("firmware", "device_guard"):
            if not isinstance(data.get(section), (Mapping, type(None))):
                raise SnapshotError(f"{section} must be a mapping")
        device_guard = data.get("device_guard") or {}
        for field in ("configured", "running"):
            if not isinstance(device_guard.get(field), (list, tuple, type(None))):
                raise SnapshotError(f"device_guard.{field} must be a list of service names")

        return cls(
            os_version=os_version,
            registry=registry,
            firmware=data.get("firmware"),
            device_guard=data.get("device_guard"),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SnapshotStateReader":
        """Load a YAML snapshot file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise SnapshotError(f"Could not read snapshot {path}: {e}") from e
        except yaml.YAMLError as e:
            raise SnapshotError(f"Invalid YAML in snapshot {path}: {e}") from e
        logger.debug("Loaded snapshot from %s", path)
        return cls.from_dict(data or {})

    def read_value(self, path: str, field_name: str) -> Optional[Any]:
        self.calls.append(("read_value", path, field_name))
        return self._registry.get(normalize_path(path), {}).get(field_name.lower())

    def key_exists(self, path: str) -> bool:
        self.calls.append(("key_exists", path))
        return normalize_path(path) in self._registry

    def read_firmware_type(self) -> int:
        self.calls.append(("read_firmware_type",))
        if "type_error" in self.firmware:
            code = self.firmware["type_error"]
            raise CollaboratorError(f"GetFirmwareType failed with error {code}", error_code=code)
        if "type" not in self.firmware:
            raise CollaboratorError("Firmware type was not recorded in the snapshot")
        return self.firmware["type"]

    def probe_firmware_variable(self) -> int:
        self.calls.append(("probe_firmware_variable",))
        if "probe_error" not in self.firmware:
            raise CollaboratorError("Firmware probe result was not recorded in the snapshot")
        return int(self.firmware["probe_error"])

    def get_device_guard_info(self) -> DeviceGuardInfo:
        self.calls.append(("get_device_guard_info",))
        if self.device_guard is None:
            raise CollaboratorError("Device Guard state was not recorded in the snapshot")
        if "error" in self.device_guard:
            code = self.device_guard["error"]
            raise CollaboratorError(f"Device Guard query failed with error {code}", error_code=code)
        return DeviceGuardInfo.from_codes(
            self.device_guard.get("configured"),
            self.device_guard.get("running"),
        )

    def get_os_version(self) -> OsVersion:
        self.calls.append(("get_os_version",))
        return self.os_version

    def was_called(self, name: str) -> bool:
        """True if the named reader method was invoked at least once."""
        return any(call[0] == name for call in self.calls)
