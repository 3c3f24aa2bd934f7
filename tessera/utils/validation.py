"""Validation utilities for Tessera."""

import re
from typing import Union

from coincurve import PublicKey as SecpPublicKey

from ..constants import ADDRESS_LENGTH, CURVE_ORDER, SCALAR_LENGTH, SIGNATURE_LENGTH
from ..exceptions import InvalidEncoding, InvalidSignature

__all__ = [
    "is_valid_scalar",
    "validate_scalar",
    "validate_point",
    "validate_signature",
]

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


def _normalize(value: Union[str, bytes], name: str) -> bytes:
    """Accept bytes or a hex string and return bytes."""
    if isinstance(value, str):
        if value.startswith("0x"):
            value = value[2:]
        if not HEX_PATTERN.match(value) or len(value) % 2:
            raise InvalidEncoding(f"{name} must be hexadecimal")
        return bytes.fromhex(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise InvalidEncoding(f"{name} must be bytes or hex string")


def is_valid_scalar(value: Union[str, bytes]) -> bool:
    """
    Check if value is a canonical nonzero scalar.

    Args:
        value: Scalar as hex string or bytes

    Returns:
        True if valid, False otherwise
    """
    try:
        validate_scalar(value)
        return True
    except InvalidEncoding:
        return False


def validate_scalar(value: Union[str, bytes], name: str = "Scalar") -> bytes:
    """
    Validate a secret scalar and return it as bytes.

    Args:
        value: Scalar as hex string or bytes
        name: Label used in error messages

    Returns:
        Scalar as 32 bytes

    Raises:
        InvalidEncoding: If length is wrong, value is zero or not below the order
    """
    data = _normalize(value, name)

    if len(data) != SCALAR_LENGTH:
        raise InvalidEncoding(f"{name} must be {SCALAR_LENGTH} bytes, got {len(data)}")

    scalar = int.from_bytes(data, "big")
    if scalar == 0:
        raise InvalidEncoding(f"{name} cannot be zero")
    if scalar >= CURVE_ORDER:
        raise InvalidEncoding(f"{name} exceeds curve order")

    return data


def validate_point(value: Union[str, bytes]) -> bytes:
    """
    Validate a compressed curve point.

    secp256k1 has cofactor 1, so every point on the curve lies in the
    prime-order group.

    Args:
        value: Point as hex string or bytes

    Returns:
        Point as 33 bytes

    Raises:
        InvalidEncoding: If the bytes are not a compressed point on the curve
    """
    data = _normalize(value, "Address")

    if len(data) != ADDRESS_LENGTH:
        raise InvalidEncoding(f"Address must be {ADDRESS_LENGTH} bytes, got {len(data)}")
    if data[0] not in (0x02, 0x03):
        raise InvalidEncoding("Address must be a compressed point")

    try:
        SecpPublicKey(data)
    except ValueError:
        raise InvalidEncoding("Address is not a point on the curve") from None

    return data


def validate_signature(value: Union[str, bytes]) -> bytes:
    """
    Validate signature structure: length and canonical scalars.

    Args:
        value: Signature as hex string or bytes

    Returns:
        Signature as 64 bytes

    Raises:
        InvalidSignature: If signature is malformed or not canonically reduced
    """
    try:
        data = _normalize(value, "Signature")
    except InvalidEncoding as e:
        raise InvalidSignature(e.message) from None

    if len(data) != SIGNATURE_LENGTH:
        raise InvalidSignature(f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(data)}")

    for label, part in (("challenge", data[:SCALAR_LENGTH]), ("response", data[SCALAR_LENGTH:])):
        scalar = int.from_bytes(part, "big")
        if scalar == 0 or scalar >= CURVE_ORDER:
            raise InvalidSignature(f"Signature {label} is not a canonical scalar")

    return data
