"""Key hierarchy for Tessera accounts: private key, view key and address."""

import hmac
import logging
from typing import TYPE_CHECKING, Optional, Union

from coincurve import PublicKey as SecpPublicKey

from ..constants import (
    MAX_SAMPLING_ATTEMPTS,
    PRIVATE_KEY_LENGTH,
    VIEW_KEY_DOMAIN,
    KeyKind,
    Network,
)
from ..exceptions import EntropyUnavailable
from ..metrics import KEYS_GENERATED, increment
from ..types.common import (
    AddressBytes,
    EncodedString,
    HexStr,
    Message,
    PrivateKeyBytes,
    ViewKeyBytes,
)
from ..utils.encoding import bytes_to_hex, decode, encode, hash_to_scalar, int_to_bytes
from ..utils.validation import is_valid_scalar, validate_point, validate_scalar
from .entropy import BaseEntropySource, default_entropy

if TYPE_CHECKING:
    from .signature import Signature

__all__ = ["PrivateKey", "ViewKey", "Address"]

logger = logging.getLogger(__name__)


def _mask(hex_str: str) -> str:
    return f"{hex_str[:4]}...{hex_str[-4:]}"


class PrivateKey:
    """
    Account private key.

    Holds the secret scalar with spending authority. The view key and the
    address are derived from it deterministically.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, key: Union[bytes, str, "PrivateKey"]) -> None:
        """
        Initialize private key.

        Args:
            key: Private key as 32 bytes, hex string, or another PrivateKey

        Raises:
            InvalidEncoding: If key length is wrong or scalar is out of range
        """
        if isinstance(key, PrivateKey):
            self._secret = key._secret
            return

        self._secret = PrivateKeyBytes(validate_scalar(key, "Private key"))

    @classmethod
    def generate(cls, entropy: Optional[BaseEntropySource] = None) -> "PrivateKey":
        """
        Create new random private key.

        Draws are rejection-sampled: out-of-range values are discarded rather
        than reduced modulo the order, which would bias the distribution.

        Args:
            entropy: Randomness source (default: system CSPRNG)

        Returns:
            New PrivateKey instance

        Raises:
            EntropyUnavailable: If the source fails or never yields a valid scalar
        """
        source = entropy or default_entropy()

        for _ in range(MAX_SAMPLING_ATTEMPTS):
            candidate = source.next_bytes(PRIVATE_KEY_LENGTH)
            if is_valid_scalar(candidate):
                increment(KEYS_GENERATED)
                logger.debug("Generated private key")
                return cls(candidate)

        logger.warning("Entropy source produced %d out-of-range draws", MAX_SAMPLING_ATTEMPTS)
        raise EntropyUnavailable("Entropy source never produced a valid scalar")

    @classmethod
    def from_bytes(cls, data: bytes) -> "PrivateKey":
        """Create private key from its 32-byte encoding."""
        return cls(data)

    @classmethod
    def from_string(cls, encoded: str, network: Optional[Network] = None) -> "PrivateKey":
        """
        Import private key from its encoded string.

        Args:
            encoded: Encoded private key
            network: Expected network (None accepts any)

        Raises:
            InvalidPrefix: If the prefix is not a private key prefix
            ChecksumMismatch: If the checksum is wrong
            InvalidEncoding: If the payload is malformed or out of range
        """
        return cls(decode(encoded, KeyKind.PRIVATE_KEY, network))

    def to_bytes(self) -> PrivateKeyBytes:
        """Get private key as canonical 32 bytes."""
        return self._secret

    def hex(self) -> HexStr:
        """Get private key as hex string."""
        return bytes_to_hex(self._secret)

    def to_string(self, network: Network = Network.MAINNET) -> EncodedString:
        """Export private key as encoded string."""
        return encode(self._secret, KeyKind.PRIVATE_KEY, network)

    def view_key(self) -> "ViewKey":
        """Derive the view key."""
        return ViewKey.from_private_key(self)

    def address(self) -> "Address":
        """Derive the address."""
        return Address.from_private_key(self)

    derive_view_key = view_key
    derive_address = address

    def sign(self, message: Message) -> "Signature":
        """
        Sign a message.

        Args:
            message: Message bytes (str is UTF-8 encoded)

        Returns:
            Signature verifiable against this key's address
        """
        from .signature import sign
        return sign(self, message)

    def __eq__(self, other: object) -> bool:
        """Check equality in constant time."""
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return hmac.compare_digest(self._secret, other._secret)

    def __repr__(self) -> str:
        """String representation."""
        return f"PrivateKey({_mask(self.hex())})"


class ViewKey:
    """
    Account view key.

    A secret derived one-way from the private key. It determines the address
    but carries no signing capability.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, key: Union[bytes, str, "ViewKey"]) -> None:
        """
        Initialize view key.

        Args:
            key: View key as 32 bytes, hex string, or another ViewKey

        Raises:
            InvalidEncoding: If key length is wrong or scalar is out of range
        """
        if isinstance(key, ViewKey):
            self._secret = key._secret
            return

        self._secret = ViewKeyBytes(validate_scalar(key, "View key"))

    @classmethod
    def from_private_key(cls, private_key: PrivateKey) -> "ViewKey":
        """Derive view key as a domain-separated hash of the private key."""
        scalar = hash_to_scalar(VIEW_KEY_DOMAIN, private_key.to_bytes())
        return cls(int_to_bytes(scalar))

    @classmethod
    def from_bytes(cls, data: bytes) -> "ViewKey":
        """Create view key from its 32-byte encoding."""
        return cls(data)

    @classmethod
    def from_string(cls, encoded: str, network: Optional[Network] = None) -> "ViewKey":
        """Import view key from its encoded string."""
        return cls(decode(encoded, KeyKind.VIEW_KEY, network))

    def to_bytes(self) -> ViewKeyBytes:
        """Get view key as canonical 32 bytes."""
        return self._secret

    def hex(self) -> HexStr:
        """Get view key as hex string."""
        return bytes_to_hex(self._secret)

    def to_string(self, network: Network = Network.MAINNET) -> EncodedString:
        """Export view key as encoded string."""
        return encode(self._secret, KeyKind.VIEW_KEY, network)

    def address(self) -> "Address":
        """Derive the address."""
        return Address.from_view_key(self)

    def __eq__(self, other: object) -> bool:
        """Check equality in constant time."""
        if not isinstance(other, ViewKey):
            return NotImplemented
        return hmac.compare_digest(self._secret, other._secret)

    def __repr__(self) -> str:
        """String representation."""
        return f"ViewKey({_mask(self.hex())})"


class Address:
    """
    Account address.

    The public point view_key * G in compressed form. Safe to share.
    """

    def __init__(self, point: Union[bytes, str, "Address"]) -> None:
        """
        Initialize address.

        Args:
            point: 33-byte compressed point, hex string, or another Address

        Raises:
            InvalidEncoding: If bytes are not a compressed curve point
        """
        if isinstance(point, Address):
            self._point = point._point
            return

        self._point = AddressBytes(validate_point(point))

    @classmethod
    def from_view_key(cls, view_key: ViewKey) -> "Address":
        """Multiply the generator by the view key scalar."""
        point = SecpPublicKey.from_secret(view_key.to_bytes()).format(compressed=True)
        return cls(point)

    @classmethod
    def from_private_key(cls, private_key: PrivateKey) -> "Address":
        """Derive address through the private key's view key."""
        return cls.from_view_key(ViewKey.from_private_key(private_key))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Address":
        """Create address from its 33-byte encoding."""
        return cls(data)

    @classmethod
    def from_string(cls, encoded: str, network: Optional[Network] = None) -> "Address":
        """Parse address from its encoded string."""
        return cls(decode(encoded, KeyKind.ADDRESS, network))

    def to_bytes(self) -> AddressBytes:
        """Get address as 33-byte compressed point."""
        return self._point

    def hex(self) -> HexStr:
        """Get address as hex string."""
        return bytes_to_hex(self._point)

    def to_string(self, network: Network = Network.MAINNET) -> EncodedString:
        """Export address as encoded string."""
        return encode(self._point, KeyKind.ADDRESS, network)

    def verify(self, message: Message, signature: Union["Signature", bytes]) -> bool:
        """
        Verify a signature made by this address's private key.

        Args:
            message: Signed message
            signature: Signature object or its 64-byte encoding

        Returns:
            True if signature is valid

        Raises:
            InvalidSignature: If raw signature bytes are malformed
        """
        from .signature import verify
        return verify(self, message, signature)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Address):
            return NotImplemented
        return self._point == other._point

    def __hash__(self) -> int:
        return hash(self._point)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        """String representation."""
        return f"Address({self.to_string()})"

