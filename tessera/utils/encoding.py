"""Encoding and decoding utilities for Tessera."""

import hashlib
import hmac
import math
from typing import Optional, Tuple, Union

from ..constants import (
    CHECKSUM_DOMAIN,
    CHECKSUM_LENGTH,
    CURVE_ORDER,
    ENCODING_PREFIXES,
    RAW_LENGTHS,
    SCALAR_LENGTH,
    KeyKind,
    Network,
)
from ..exceptions import ChecksumMismatch, InvalidEncoding, InvalidPrefix, ValidationError
from ..types.common import EncodedString, HexStr

__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "int_to_bytes",
    "bytes_to_int",
    "tagged_hash",
    "tagged_hash_wide",
    "hash_to_scalar",
    "encode_base58",
    "decode_base58",
    "checksum",
    "encode",
    "decode",
    "detect_prefix",
]

# Constants
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX = {char: index for index, char in enumerate(BASE58_ALPHABET)}


def _max_base58_length(size: int) -> int:
    """Longest Base58 string that can decode to size bytes."""
    return math.ceil(size * 8 / math.log2(58))


# Longest valid body per kind, checked before decoding
_MAX_BODY_LENGTHS = {
    kind: _max_base58_length(length + CHECKSUM_LENGTH)
    for kind, length in RAW_LENGTHS.items()
}


# (prefix, kind, network), longest prefix first
_PREFIX_TABLE = sorted(
    (
        (prefix, kind, network)
        for network, prefixes in ENCODING_PREFIXES.items()
        for kind, prefix in prefixes.items()
    ),
    key=lambda entry: len(entry[0]),
    reverse=True,
)


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If hex string is invalid
    """
    try:
        if isinstance(hex_str, str) and hex_str.startswith("0x"):
            hex_str = hex_str[2:]
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise ValidationError("Invalid hex string") from e


def bytes_to_hex(data: bytes, prefix: bool = False) -> HexStr:
    """Convert bytes to hex string, optionally with 0x prefix."""
    hex_str = data.hex()
    if prefix:
        hex_str = f"0x{hex_str}"
    return HexStr(hex_str)


def int_to_bytes(value: int, length: int = SCALAR_LENGTH) -> bytes:
    """
    Convert non-negative integer to fixed-length big-endian bytes.

    Raises:
        InvalidEncoding: If value does not fit in length bytes
    """
    try:
        return value.to_bytes(length, "big")
    except OverflowError as e:
        raise InvalidEncoding(f"Integer does not fit in {length} bytes") from e


def bytes_to_int(data: bytes) -> int:
    """Convert big-endian bytes to integer."""
    return int.from_bytes(data, "big")


def tagged_hash(tag: str, data: bytes) -> bytes:
    """
    Compute tagged hash as specified in BIP 340.

    Args:
        tag: Domain separation tag
        data: Data to hash

    Returns:
        32-byte tagged hash
    """
    tag_hash = hashlib.sha256(tag.encode()).digest()
    return hashlib.sha256(tag_hash + tag_hash + data).digest()


def tagged_hash_wide(tag: str, data: bytes) -> bytes:
    """Compute 64-byte tagged hash (SHA512 over the BIP 340 tag prefix)."""
    tag_hash = hashlib.sha256(tag.encode()).digest()
    return hashlib.sha512(tag_hash + tag_hash + data).digest()


def hash_to_scalar(tag: str, data: bytes) -> int:
    """
    Hash data to a nonzero scalar modulo the group order.

    The 512-bit digest is reduced modulo the 256-bit order, so the bias of the
    reduction is negligible. A trailing counter byte is bumped only in the
    (practically impossible) case that the reduction yields zero.

    Args:
        tag: Domain separation tag
        data: Data to hash

    Returns:
        Scalar in [1, order)
    """
    for counter in range(256):
        digest = tagged_hash_wide(tag, data + bytes([counter]))
        scalar = bytes_to_int(digest) % CURVE_ORDER
        if scalar:
            return scalar
    raise ValueError("hash_to_scalar exhausted counter space")


def encode_base58(data: bytes) -> str:
    """
    Encode bytes as Base58 string.

    Args:
        data: Bytes to encode

    Returns:
        Base58 encoded string
    """
    n = bytes_to_int(data)

    encoded = ""
    while n:
        n, remainder = divmod(n, 58)
        encoded = BASE58_ALPHABET[remainder] + encoded

    # Leading zero bytes map to leading '1's
    for byte in data:
        if byte == 0:
            encoded = "1" + encoded
        else:
            break

    return encoded


def decode_base58(string: str) -> bytes:
    """
    Decode Base58 string to bytes.

    Args:
        string: Base58 string

    Returns:
        Decoded bytes

    Raises:
        InvalidEncoding: If string contains invalid characters
    """
    n = 0
    for char in string:
        try:
            n = n * 58 + _BASE58_INDEX[char]
        except KeyError:
            raise InvalidEncoding("Invalid Base58 character") from None

    body = n.to_bytes((n.bit_length() + 7) // 8, "big")
    leading_zeros = len(string) - len(string.lstrip("1"))
    return b"\x00" * leading_zeros + body


def checksum(prefix: str, raw: bytes) -> bytes:
    """Checksum bound to both the prefix and the payload."""
    return tagged_hash(CHECKSUM_DOMAIN, prefix.encode() + raw)[:CHECKSUM_LENGTH]


def encode(
    raw: bytes,
    kind: KeyKind,
    network: Network = Network.MAINNET
) -> EncodedString:
    """
    Encode raw bytes as a prefixed, checksummed string.

    Args:
        raw: Raw value bytes
        kind: Kind of value being encoded
        network: Target network

    Returns:
        Encoded string of the form prefix + base58(raw || checksum)

    Raises:
        InvalidEncoding: If raw has the wrong length for kind
    """
    kind = KeyKind(kind)
    network = Network(network)

    expected = RAW_LENGTHS[kind]
    if len(raw) != expected:
        raise InvalidEncoding(
            f"{kind.value} must be {expected} bytes, got {len(raw)}"
        )

    prefix = ENCODING_PREFIXES[network][kind]
    return EncodedString(prefix + encode_base58(raw + checksum(prefix, raw)))


def decode(
    encoded: str,
    kind: KeyKind,
    network: Optional[Network] = Network.MAINNET
) -> bytes:
    """
    Decode a prefixed, checksummed string back to raw bytes.

    Args:
        encoded: Encoded string
        kind: Expected kind of value
        network: Expected network, or None to accept any network

    Returns:
        Raw value bytes

    Raises:
        InvalidPrefix: If the prefix does not match kind and network
        InvalidEncoding: If the body is not valid Base58 or has the wrong length
        ChecksumMismatch: If the checksum does not match
    """
    kind = KeyKind(kind)
    if network is None:
        detected, network = detect_prefix(encoded)
        if detected != kind:
            raise InvalidPrefix(f"Expected {kind.value} prefix")
    network = Network(network)

    prefix = ENCODING_PREFIXES[network][kind]
    if not isinstance(encoded, str) or not encoded.startswith(prefix):
        raise InvalidPrefix(f"Expected {network.value} {kind.value} prefix")

    body = encoded[len(prefix):]
    if len(body) > _MAX_BODY_LENGTHS[kind]:
        raise InvalidEncoding(f"Invalid {kind.value} length: {len(body)} characters")

    data = decode_base58(body)

    expected = RAW_LENGTHS[kind] + CHECKSUM_LENGTH
    if len(data) != expected:
        raise InvalidEncoding(
            f"Invalid {kind.value} payload length: {len(data)}"
        )

    raw, check = data[:-CHECKSUM_LENGTH], data[-CHECKSUM_LENGTH:]
    if not hmac.compare_digest(check, checksum(prefix, raw)):
        raise ChecksumMismatch(f"Invalid {kind.value} checksum")

    return raw


def detect_prefix(encoded: str) -> Tuple[KeyKind, Network]:
    """
    Identify kind and network of an encoded string from its prefix.

    Raises:
        InvalidPrefix: If no known prefix matches
    """
    if isinstance(encoded, str):
        for prefix, kind, network in _PREFIX_TABLE:
            if encoded.startswith(prefix):
                return kind, network
    raise InvalidPrefix("Unknown encoding prefix")
