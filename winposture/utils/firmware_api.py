"""Firmware introspection through kernel32."""
import ctypes
from ctypes import wintypes

from ..core.errors import CollaboratorError

FIRMWARE_TYPE_UNKNOWN = 0

NULL_GUID = "{00000000-0000-0000-0000-000000000000}"


def _kernel32():
    return ctypes.WinDLL("kernel32", use_last_error=True)


def get_firmware_type() -> int:
    """
    Call GetFirmwareType (Windows 8 / Server 2012 and later).

    Returns:
        The FIRMWARE_TYPE value reported by the OS

    Raises:
        CollaboratorError: the call failed
    """
    kernel32 = _kernel32()
    func = kernel32.GetFirmwareType
    func.argtypes = [ctypes.POINTER(ctypes.c_int)]
    func.restype = wintypes.BOOL

    firmware_type = ctypes.c_int(FIRMWARE_TYPE_UNKNOWN)
    if not func(ctypes.byref(firmware_type)):
        code = ctypes.get_last_error()
        raise CollaboratorError(f"GetFirmwareType failed with error {code}", error_code=code)
    return firmware_type.value


def probe_firmware_variable() -> int:
    """
    Call GetFirmwareEnvironmentVariableW with an empty name and the null GUID.

    The call is expected to fail. On legacy BIOS systems the API is not
    implemented and the error is ERROR_INVALID_FUNCTION; on UEFI systems it
    fails with a different code because the variable does not exist.

    Returns:
        The last error code, or 0 if the call succeeded
    """
    kernel32 = _kernel32()
    func = kernel32.GetFirmwareEnvironmentVariableW
    func.argtypes = [wintypes.LPCWSTR, wintypes.LPCWSTR, wintypes.LPVOID, wintypes.DWORD]
    func.restype = wintypes.DWORD

    ctypes.set_last_error(0)
    if func("", NULL_GUID, None, 0):
        return 0
    return ctypes.get_last_error()
