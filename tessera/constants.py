"""Protocol constants for Tessera accounts."""

from enum import Enum

__all__ = [
    "Network",
    "KeyKind",
    "CURVE_ORDER",
    "PRIVATE_KEY_LENGTH",
    "VIEW_KEY_LENGTH",
    "ADDRESS_LENGTH",
    "SCALAR_LENGTH",
    "SIGNATURE_LENGTH",
    "RAW_LENGTHS",
    "CHECKSUM_LENGTH",
    "MAX_SAMPLING_ATTEMPTS",
    "PROTOCOL_VERSION",
    "VIEW_KEY_DOMAIN",
    "NONCE_DOMAIN",
    "CHALLENGE_DOMAIN",
    "CHECKSUM_DOMAIN",
    "ENCODING_PREFIXES",
]


class Network(str, Enum):
    """Networks an encoded value can be bound to."""

    MAINNET = "mainnet"
    TESTNET = "testnet"


class KeyKind(str, Enum):
    """Kinds of values that have a string encoding."""

    PRIVATE_KEY = "private_key"
    VIEW_KEY = "view_key"
    ADDRESS = "address"
    SIGNATURE = "signature"


# secp256k1 group order
CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Raw sizes (bytes)
SCALAR_LENGTH = 32
PRIVATE_KEY_LENGTH = SCALAR_LENGTH
VIEW_KEY_LENGTH = SCALAR_LENGTH
ADDRESS_LENGTH = 33  # compressed point
SIGNATURE_LENGTH = 2 * SCALAR_LENGTH  # challenge || response

RAW_LENGTHS = {
    KeyKind.PRIVATE_KEY: PRIVATE_KEY_LENGTH,
    KeyKind.VIEW_KEY: VIEW_KEY_LENGTH,
    KeyKind.ADDRESS: ADDRESS_LENGTH,
    KeyKind.SIGNATURE: SIGNATURE_LENGTH,
}

CHECKSUM_LENGTH = 4

# Consecutive out-of-range draws before an entropy source is treated as broken
MAX_SAMPLING_ATTEMPTS = 64

# Domain separation tags. Any change here is a protocol version bump.
PROTOCOL_VERSION = 1
VIEW_KEY_DOMAIN = f"tessera/v{PROTOCOL_VERSION}/view-key"
NONCE_DOMAIN = f"tessera/v{PROTOCOL_VERSION}/nonce"
CHALLENGE_DOMAIN = f"tessera/v{PROTOCOL_VERSION}/challenge"
CHECKSUM_DOMAIN = f"tessera/v{PROTOCOL_VERSION}/checksum"

# Human-readable prefixes. No prefix may be a prefix of another one.
ENCODING_PREFIXES = {
    Network.MAINNET: {
        KeyKind.PRIVATE_KEY: "TPrivateKey1",
        KeyKind.VIEW_KEY: "TViewKey1",
        KeyKind.ADDRESS: "tsr1",
        KeyKind.SIGNATURE: "tsig1",
    },
    Network.TESTNET: {
        KeyKind.PRIVATE_KEY: "TtPrivateKey1",
        KeyKind.VIEW_KEY: "TtViewKey1",
        KeyKind.ADDRESS: "ttsr1",
        KeyKind.SIGNATURE: "ttsig1",
    },
}
