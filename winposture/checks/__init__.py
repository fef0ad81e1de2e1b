"""Compliance checks - UAC, BitLocker, LAPS, Secure Boot, LSA, etc."""
from .uac import UACCheck
from .bitlocker import BitLockerCheck
from .laps import LAPSCheck
from .secure_boot import SecureBootCheck
from .firmware import FirmwareCheck
from .lsa import LSAProtectionCheck
from .credential_guard import CredentialGuardCheck
from .transcription import TranscriptionCheck

__all__ = [
    "UACCheck",
    "BitLockerCheck",
    "LAPSCheck",
    "SecureBootCheck",
    "FirmwareCheck",
    "LSAProtectionCheck",
    "CredentialGuardCheck",
    "TranscriptionCheck",
    "get_all_checks",
]


def get_all_checks():
    """Get instances of all available checks."""
    return [
        UACCheck(),
        LAPSCheck(),
        LSAProtectionCheck(),
        CredentialGuardCheck(),
        BitLockerCheck(),
        FirmwareCheck(),
        SecureBootCheck(),
        TranscriptionCheck(),
    ]
