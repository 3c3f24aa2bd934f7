"""Type definitions for Tessera."""

from .common import (
    HexStr,
    PrivateKeyBytes,
    ViewKeyBytes,
    AddressBytes,
    SignatureBytes,
    EncodedString,
    Message,
)

__all__ = [
    "HexStr",
    "PrivateKeyBytes",
    "ViewKeyBytes",
    "AddressBytes",
    "SignatureBytes",
    "EncodedString",
    "Message",
]
