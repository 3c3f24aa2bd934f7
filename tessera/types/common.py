"""Common type definitions for Tessera."""

from typing import NewType, Union

__all__ = [
    "HexStr",
    "PrivateKeyBytes",
    "ViewKeyBytes",
    "AddressBytes",
    "SignatureBytes",
    "EncodedString",
    "Message",
]

HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

# Raw values
PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""32-byte private key scalar."""

ViewKeyBytes = NewType("ViewKeyBytes", bytes)
"""32-byte view key scalar."""

AddressBytes = NewType("AddressBytes", bytes)
"""33-byte compressed curve point."""

SignatureBytes = NewType("SignatureBytes", bytes)
"""64-byte challenge || response."""

EncodedString = NewType("EncodedString", str)
"""Prefixed, checksummed Base58 string."""

# Type aliases
Message = Union[str, bytes]
"""Message to sign; strings are UTF-8 encoded."""
