"""Raw state reader interface.

Checks never touch the registry or native APIs directly. They go through a
``StateReader`` so the same decision logic can run against the live host or
against a recorded snapshot.
"""
from abc import ABC, abstractmethod
from typing import Any, FrozenSet, Iterable, NamedTuple, Optional

from ..core.capability import OsVersion

# Win32_DeviceGuard SecurityServicesConfigured / SecurityServicesRunning codes
SECURITY_SERVICES = {
    1: "CredentialGuard",
    2: "HypervisorEnforcedCodeIntegrity",
    3: "SystemGuardSecureLaunch",
    4: "SmmFirmwareMeasurement",
}


def service_names(codes: Optional[Iterable[Any]]) -> FrozenSet[str]:
    """Translate Device Guard service codes into names; unknown codes are kept as text."""
    if isinstance(codes, (int, str)):
        codes = [codes]
    names = set()
    for code in codes or ():
        try:
            names.add(SECURITY_SERVICES.get(int(code), str(code)))
        except (TypeError, ValueError):
            names.add(str(code))
    return frozenset(names)


class DeviceGuardInfo(NamedTuple):
    """Virtualization-based security services reported by the host."""
    configured: FrozenSet[str]
    running: FrozenSet[str]

    @classmethod
    def from_codes(cls, configured: Optional[Iterable[Any]], running: Optional[Iterable[Any]]) -> "DeviceGuardInfo":
        """Build from the raw Win32_DeviceGuard code arrays."""
        return cls(configured=service_names(configured), running=service_names(running))


class StateReader(ABC):
    """Abstract source of raw configuration state."""

    @abstractmethod
    def read_value(self, path: str, field_name: str) -> Optional[Any]:
        """
        Read a single registry value.

        Returns None when the key or value is missing or cannot be read.
        Must not raise for "not found".
        """

    @abstractmethod
    def key_exists(self, path: str) -> bool:
        """Check if a registry key exists."""

    @abstractmethod
    def read_firmware_type(self) -> int:
        """
        Query the firmware type (1 = BIOS, 2 = UEFI).

        Raises:
            CollaboratorError: the query failed
        """

    @abstractmethod
    def probe_firmware_variable(self) -> int:
        """
        Look up a firmware variable with an empty name and the null GUID.

        Returns the resulting error code (0 if the call unexpectedly succeeded).

        Raises:
            CollaboratorError: the probe could not be attempted
        """

    @abstractmethod
    def get_device_guard_info(self) -> DeviceGuardInfo:
        """
        Get configured and running Device Guard security services.

        Raises:
            CollaboratorError: the introspection layer is unavailable
        """

    @abstractmethod
    def get_os_version(self) -> OsVersion:
        """Get the host OS version."""
