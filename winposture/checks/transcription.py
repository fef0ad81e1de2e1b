"""PowerShell Transcription Check - transcription policy settings."""
from typing import List

from ..core.check import BaseCheck
from ..core.decision import as_int
from ..core.result import Compliance, Finding


TRANSCRIPTION_FIELDS = ("EnableTranscripting", "EnableInvocationHeader", "OutputDirectory")


def describe_transcription(enable_transcripting, enable_invocation_header, output_directory) -> str:
    """Describe the transcription policy from its three raw values."""
    enabled = _is_set(enable_transcripting)
    if enable_transcripting is None:
        text = "Transcription is not configured."
    elif as_int(enable_transcripting) is None:
        text = f"Transcription setting has an unexpected value ({enable_transcripting!r})."
    elif enabled:
        text = "Transcription is enabled."
    else:
        text = "Transcription is disabled."

    if _is_set(enable_invocation_header):
        text += " Invocation headers are written."

    if output_directory:
        text += f" Output directory: {output_directory}."
    elif enabled:
        text += " Transcripts are written to the user's Documents folder (default)."
    return text


def _is_set(value) -> bool:
    return bool(as_int(value))


class TranscriptionCheck(BaseCheck):
    """Report PowerShell transcription policy for machine and user hives."""

    check_id = "ps_transcription"
    name = "PowerShell Transcription"
    category = "logging"
    description = "PowerShell transcription policy (informational)"

    TRANSCRIPTION_PATHS = (
        r"HKLM\SOFTWARE\Policies\Microsoft\Windows\PowerShell\Transcription",
        r"HKCU\SOFTWARE\Policies\Microsoft\Windows\PowerShell\Transcription",
    )

    def evaluate(self, reader) -> List[Finding]:
        findings: List[Finding] = []

        for path in self.TRANSCRIPTION_PATHS:
            # No policy key in this hive: nothing to report
            if not reader.key_exists(path):
                continue

            values = {name: reader.read_value(path, name) for name in TRANSCRIPTION_FIELDS}
            findings.append(self._finding(
                subject=path,
                field_name="EnableTranscripting",
                value=values["EnableTranscripting"],
                description=describe_transcription(*values.values()),
                compliance=Compliance.NOT_APPLICABLE,
                extra=values
            ))

        return findings
