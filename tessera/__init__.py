"""
Tessera Python Library

Account key hierarchy for blockchain participants: private keys, view keys,
addresses, Schnorr signatures and their checksummed string encodings.
"""

from .account import Account
from .constants import KeyKind, Network
from .exceptions import (
    TesseraError,
    CryptoError,
    EntropyUnavailable,
    InvalidSignature,
    ValidationError,
    InvalidEncoding,
    InvalidPrefix,
    ChecksumMismatch,
    BoundaryError,
)
from .crypto import (
    PrivateKey,
    ViewKey,
    Address,
    Signature,
    SystemEntropy,
    HostEntropy,
    sign,
    verify,
)

__version__ = "1.0.0"
__author__ = "Tessera Python Library"

__all__ = [
    # Account
    "Account",

    # Configuration
    "Network",
    "KeyKind",

    # Exceptions
    "TesseraError",
    "CryptoError",
    "EntropyUnavailable",
    "InvalidSignature",
    "ValidationError",
    "InvalidEncoding",
    "InvalidPrefix",
    "ChecksumMismatch",
    "BoundaryError",

    # Crypto
    "PrivateKey",
    "ViewKey",
    "Address",
    "Signature",
    "SystemEntropy",
    "HostEntropy",
    "sign",
    "verify",
]
