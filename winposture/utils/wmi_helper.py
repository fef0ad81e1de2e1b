"""WMI query helper with a PowerShell fallback."""
import json
import logging
import subprocess
from typing import Any, Dict, List, Optional

from ..core.errors import CollaboratorError

logger = logging.getLogger(__name__)

DEVICE_GUARD_NAMESPACE = "root\\Microsoft\\Windows\\DeviceGuard"


class WMIHelper:
    """Helper class for Windows Management Instrumentation queries."""

    def __init__(self, timeout: int = 30):
        self.timeout = timeout
        self._wmi_available = self._check_wmi()

    def _check_wmi(self) -> bool:
        """Check if the WMI module is available."""
        try:
            import wmi  # noqa: F401
            return True
        except ImportError:
            logger.debug("wmi module not available, using PowerShell for WMI queries")
            return False

    def query(self, wmi_class: str, namespace: str = "root\\cimv2") -> List[Dict[str, Any]]:
        """
        Query a WMI class and return results as list of dictionaries.

        Args:
            wmi_class: WMI class name (e.g., "Win32_DeviceGuard")
            namespace: WMI namespace (default: root\\cimv2)

        Returns:
            List of dictionaries with WMI object properties

        Raises:
            CollaboratorError: the namespace or class could not be queried
        """
        if self._wmi_available:
            return self._query_wmi(wmi_class, namespace)
        return self._query_powershell(wmi_class, namespace)

    def _query_wmi(self, wmi_class: str, namespace: str) -> List[Dict[str, Any]]:
        """Query using the Python WMI module."""
        import wmi
        try:
            connection = wmi.WMI(namespace=namespace)
            results = []
            for item in getattr(connection, wmi_class)():
                obj_dict = {}
                for prop in item.properties:
                    obj_dict[prop] = getattr(item, prop, None)
                results.append(obj_dict)
            return results
        except wmi.x_wmi as e:
            code = getattr(e, "com_error", None)
            code = getattr(code, "hresult", None)
            raise CollaboratorError(f"WMI query {namespace}:{wmi_class} failed: {e}", error_code=code) from e
        except AttributeError as e:
            raise CollaboratorError(f"WMI class {wmi_class} is not available in {namespace}") from e

    def _query_powershell(self, wmi_class: str, namespace: str) -> List[Dict[str, Any]]:
        """Fallback: query using PowerShell."""
        cmd = (
            f"Get-CimInstance -Namespace '{namespace}' -ClassName {wmi_class} "
            f"-ErrorAction Stop | ConvertTo-Json -Depth 3"
        )
        try:
            result = subprocess.run(
                ['powershell', '-NoProfile', '-Command', cmd],
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise CollaboratorError(f"PowerShell query for {wmi_class} failed: {e}") from e

        if result.returncode != 0:
            raise CollaboratorError(
                f"PowerShell query for {wmi_class} failed: {result.stderr.strip()}",
                error_code=result.returncode
            )
        if not result.stdout.strip():
            return []

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise CollaboratorError(f"Unreadable PowerShell output for {wmi_class}") from e
        # Ensure it's always a list
        if isinstance(data, dict):
            return [data]
        return data

    def query_single(self, wmi_class: str, namespace: str = "root\\cimv2") -> Optional[Dict[str, Any]]:
        """Query and return first result only."""
        results = self.query(wmi_class, namespace)
        return results[0] if results else None
