"""Schnorr signatures bound to Tessera addresses."""

import hashlib
import hmac
import logging
from typing import Optional, Union

from coincurve import PublicKey as SecpPublicKey

from ..constants import (
    CHALLENGE_DOMAIN,
    CURVE_ORDER,
    NONCE_DOMAIN,
    SCALAR_LENGTH,
    KeyKind,
    Network,
)
from ..exceptions import CryptoError, InvalidSignature
from ..metrics import SIGNATURES_CREATED, SIGNATURES_REJECTED, SIGNATURES_VERIFIED, increment
from ..types.common import EncodedString, HexStr, Message, SignatureBytes
from ..utils.encoding import (
    bytes_to_hex,
    decode,
    encode,
    hash_to_scalar,
    int_to_bytes,
    tagged_hash,
)
from ..utils.validation import validate_signature
from .keys import Address, PrivateKey

__all__ = [
    "Signature",
    "generate_nonce",
    "sign",
    "verify",
    "sign_message",
    "verify_message",
]

logger = logging.getLogger(__name__)

# Retries of the nonce derivation before giving up on a zero response
MAX_SIGNING_ATTEMPTS = 16


class Signature:
    """
    Schnorr signature as a (challenge, response) scalar pair.

    Both scalars must lie in [1, order), so every valid signature has exactly
    one byte encoding.
    """

    def __init__(self, challenge: int, response: int) -> None:
        """
        Initialize signature.

        Raises:
            InvalidSignature: If either scalar is outside [1, order)
        """
        for label, scalar in (("challenge", challenge), ("response", response)):
            if not 0 < scalar < CURVE_ORDER:
                raise InvalidSignature(f"Signature {label} is not a canonical scalar")
        self._challenge = challenge
        self._response = response

    @property
    def challenge(self) -> int:
        return self._challenge

    @property
    def response(self) -> int:
        return self._response

    @classmethod
    def from_bytes(cls, data: Union[bytes, str]) -> "Signature":
        """
        Parse signature from 64 bytes or hex.

        Raises:
            InvalidSignature: If length is wrong or scalars are not canonical
        """
        raw = validate_signature(data)
        return cls(
            int.from_bytes(raw[:SCALAR_LENGTH], "big"),
            int.from_bytes(raw[SCALAR_LENGTH:], "big"),
        )

    @classmethod
    def from_string(cls, encoded: str, network: Optional[Network] = None) -> "Signature":
        """Parse signature from its encoded string."""
        return cls.from_bytes(decode(encoded, KeyKind.SIGNATURE, network))

    def to_bytes(self) -> SignatureBytes:
        """Get signature as challenge || response."""
        return SignatureBytes(int_to_bytes(self._challenge) + int_to_bytes(self._response))

    def hex(self) -> HexStr:
        return bytes_to_hex(self.to_bytes())

    def to_string(self, network: Network = Network.MAINNET) -> EncodedString:
        """Export signature as encoded string."""
        return encode(self.to_bytes(), KeyKind.SIGNATURE, network)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return (self._challenge, self._response) == (other._challenge, other._response)

    def __hash__(self) -> int:
        return hash((self._challenge, self._response))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Signature({self.to_string()})"


def generate_nonce(secret: bytes, digest: bytes, extra: bytes = b"") -> int:
    """
    Generate the deterministic nonce according to RFC 6979.

    HMAC-DRBG with SHA256, keyed by the private key and the message digest.
    The optional extra data (RFC 6979 section 3.6) selects a different nonce
    for the same key and message.

    Args:
        secret: 32-byte private key
        digest: 32-byte message digest
        extra: Additional data mixed into the DRBG seed

    Returns:
        Nonce in [1, order)
    """
    order = CURVE_ORDER
    qlen = order.bit_length()
    rolen = (qlen + 7) // 8

    # bits2octets(h1)
    h1 = int.from_bytes(digest, "big")
    if len(digest) * 8 > qlen:
        h1 >>= len(digest) * 8 - qlen
    h1_bytes = (h1 % order).to_bytes(rolen, "big")

    V = b"\x01" * 32
    K = b"\x00" * 32

    K = hmac.new(K, V + b"\x00" + secret + h1_bytes + extra, hashlib.sha256).digest()
    V = hmac.new(K, V, hashlib.sha256).digest()
    K = hmac.new(K, V + b"\x01" + secret + h1_bytes + extra, hashlib.sha256).digest()
    V = hmac.new(K, V, hashlib.sha256).digest()

    while True:
        t = b""
        while len(t) * 8 < qlen:
            V = hmac.new(K, V, hashlib.sha256).digest()
            t += V

        k = int.from_bytes(t, "big")
        if len(t) * 8 > qlen:
            k >>= len(t) * 8 - qlen

        if 1 <= k < order:
            return k

        K = hmac.new(K, V + b"\x00", hashlib.sha256).digest()
        V = hmac.new(K, V, hashlib.sha256).digest()


def _to_bytes(message: Message) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    if isinstance(message, (bytes, bytearray, memoryview)):
        return bytes(message)
    raise TypeError("Message must be str or bytes")


def _challenge(commitment: bytes, address: bytes, message: bytes) -> int:
    return hash_to_scalar(CHALLENGE_DOMAIN, commitment + address + message)


def sign(private_key: PrivateKey, message: Message) -> Signature:
    """
    Sign a message.

    Args:
        private_key: Signing key
        message: Message to sign (str is UTF-8 encoded)

    Returns:
        Signature verifiable with the key's address

    Raises:
        CryptoError: If no usable nonce could be derived
    """
    message = _to_bytes(message)

    view_key = private_key.view_key()
    secret = int.from_bytes(view_key.to_bytes(), "big")
    address = Address.from_view_key(view_key).to_bytes()

    digest = tagged_hash(NONCE_DOMAIN, address + message)

    for attempt in range(MAX_SIGNING_ATTEMPTS):
        extra = attempt.to_bytes(4, "big") if attempt else b""
        k = generate_nonce(private_key.to_bytes(), digest, extra)

        commitment = SecpPublicKey.from_secret(int_to_bytes(k)).format(compressed=True)
        e = _challenge(commitment, address, message)
        s = (k + e * secret) % CURVE_ORDER
        if s:
            increment(SIGNATURES_CREATED)
            return Signature(e, s)

    raise CryptoError("Signing failed: no usable nonce")


def verify(
    address: Address,
    message: Message,
    signature: Union[Signature, bytes]
) -> bool:
    """
    Verify a signature against an address.

    Recovers the commitment R = s*G - e*A and checks that it hashes back to
    the challenge.

    Args:
        address: Signer's address
        message: Signed message
        signature: Signature object or its 64-byte encoding

    Returns:
        True if signature is valid

    Raises:
        InvalidSignature: If raw signature bytes are malformed
    """
    if not isinstance(signature, Signature):
        signature = Signature.from_bytes(signature)
    message = _to_bytes(message)

    e = signature.challenge
    s = signature.response
    point = address.to_bytes()

    s_g = SecpPublicKey.from_secret(int_to_bytes(s))
    neg_e_a = SecpPublicKey(point).multiply(int_to_bytes(CURVE_ORDER - e))

    try:
        commitment = SecpPublicKey.combine_keys([s_g, neg_e_a]).format(compressed=True)
    except ValueError:
        # s*G == e*A: commitment at infinity
        logger.debug("Signature rejected: commitment at infinity")
        increment(SIGNATURES_REJECTED)
        return False

    valid = hmac.compare_digest(
        int_to_bytes(_challenge(commitment, point, message)),
        int_to_bytes(e),
    )
    increment(SIGNATURES_VERIFIED if valid else SIGNATURES_REJECTED)
    logger.debug("Signature %s", "verified" if valid else "rejected")
    return valid


def sign_message(private_key: PrivateKey, message: Message) -> Signature:
    """Sign message; alias of sign for symmetry with verify_message."""
    return sign(private_key, message)


def verify_message(
    address: Union[Address, str],
    message: Message,
    signature: Union[Signature, bytes, str]
) -> bool:
    """
    Verify a signed message given encoded or parsed values.

    Args:
        address: Address object or encoded address string
        message: Signed message
        signature: Signature object, raw bytes, or encoded signature string

    Returns:
        True if signature is valid
    """
    if isinstance(address, str):
        address = Address.from_string(address)
    if isinstance(signature, str):
        signature = Signature.from_string(signature)
    return verify(address, message, signature)
