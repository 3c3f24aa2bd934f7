"""Cryptographic primitives for Tessera accounts."""

from ..crypto.entropy import BaseEntropySource, SystemEntropy, HostEntropy, default_entropy
from ..crypto.keys import PrivateKey, ViewKey, Address
from ..crypto.signature import (
    Signature,
    generate_nonce,
    sign,
    verify,
    sign_message,
    verify_message,
)

__all__ = [
    # Entropy
    "BaseEntropySource",
    "SystemEntropy",
    "HostEntropy",
    "default_entropy",

    # Keys
    "PrivateKey",
    "ViewKey",
    "Address",

    # Signatures
    "Signature",
    "generate_nonce",
    "sign",
    "verify",
    "sign_message",
    "verify_message",
]
