"""Secure storage collaborator."""

from wave_wallet.storage.secure import MemorySecureStorage, SecureStorage

__all__ = ["MemorySecureStorage", "SecureStorage"]
