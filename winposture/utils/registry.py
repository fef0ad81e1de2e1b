"""Windows Registry access utilities."""
import logging
import winreg
from typing import Any, Tuple

logger = logging.getLogger(__name__)

# Registry hive mappings
HIVES = {
    "HKLM": winreg.HKEY_LOCAL_MACHINE,
    "HKEY_LOCAL_MACHINE": winreg.HKEY_LOCAL_MACHINE,
    "HKCU": winreg.HKEY_CURRENT_USER,
    "HKEY_CURRENT_USER": winreg.HKEY_CURRENT_USER,
    "HKU": winreg.HKEY_USERS,
    "HKEY_USERS": winreg.HKEY_USERS,
}

# Always read the native 64-bit view, even from a 32-bit interpreter
ACCESS = winreg.KEY_READ | winreg.KEY_WOW64_64KEY


def parse_key_path(path: str) -> Tuple[int, str]:
    """
    Parse registry path into hive and subkey.

    Args:
        path: Full registry path (e.g., "HKLM\\SOFTWARE\\Microsoft")

    Returns:
        Tuple of (hive_constant, subkey_path)
    """
    parts = path.split("\\", 1)
    hive_name = parts[0].upper()
    subkey = parts[1] if len(parts) > 1 else ""

    hive = HIVES.get(hive_name)
    if hive is None:
        raise ValueError(f"Unknown registry hive: {hive_name}")

    return hive, subkey


def read_value(path: str, value_name: str, default: Any = None) -> Any:
    """
    Read a single registry value.

    Args:
        path: Registry key path (e.g., "HKLM\\SYSTEM\\CurrentControlSet\\Control\\Lsa")
        value_name: Name of the value to read
        default: Default value if not found

    Returns:
        The registry value or default
    """
    try:
        hive, subkey = parse_key_path(path)
        with winreg.OpenKey(hive, subkey, 0, ACCESS) as key:
            value, _ = winreg.QueryValueEx(key, value_name)
            return value
    except FileNotFoundError:
        return default
    except OSError as e:
        # PermissionError lands here too; an unreadable value counts as absent
        logger.debug("Could not read %s\\%s: %s", path, value_name, e)
        return default


def key_exists(path: str) -> bool:
    """Check if a registry key exists."""
    try:
        hive, subkey = parse_key_path(path)
        with winreg.OpenKey(hive, subkey, 0, ACCESS):
            return True
    except OSError:
        return False
