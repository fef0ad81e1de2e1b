"""OS capability resolver - which features exist on which Windows versions."""
from enum import Enum
from typing import NamedTuple


class OsVersion(NamedTuple):
    """Windows NT version of the audited host."""
    major: int
    minor: int
    build: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.build}"


class Feature(Enum):
    """Version-gated OS features the checks depend on."""
    FIRMWARE_TYPE_API = "firmware_type_api"
    FIRMWARE_PROBE = "firmware_probe"
    RUN_AS_PPL = "run_as_ppl"
    CREDENTIAL_GUARD = "credential_guard"


def _nt6_or_later(version: OsVersion, minor: int) -> bool:
    # 6.x numbering covers Vista through 8.1, 10 covers Windows 10 and 11
    return version.major >= 10 or (version.major == 6 and version.minor >= minor)


def supports(feature: Feature, version: OsVersion) -> bool:
    """
    Check whether a feature is available on the given OS version.

    Args:
        feature: The feature to test
        version: Host OS version

    Returns:
        True if the feature can be used on this host
    """
    if feature is Feature.FIRMWARE_TYPE_API:
        # GetFirmwareType: Windows 8 / Server 2012
        return _nt6_or_later(version, 2)
    if feature is Feature.FIRMWARE_PROBE:
        # Windows 7 / Server 2008 R2 only
        return version.major == 6 and version.minor == 1
    if feature is Feature.RUN_AS_PPL:
        # Windows 8.1 / Server 2012 R2
        return _nt6_or_later(version, 3)
    if feature is Feature.CREDENTIAL_GUARD:
        return version.major >= 10
    raise ValueError(f"Unknown feature: {feature}")
