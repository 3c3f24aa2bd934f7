"""Account bundle for Tessera."""

import logging
from typing import Optional, Union

from .constants import Network
from .crypto import Address, BaseEntropySource, PrivateKey, Signature, ViewKey
from .types.common import EncodedString, Message

__all__ = ["Account"]

logger = logging.getLogger(__name__)


class Account:
    """
    Private key together with its derived view key and address.

    Derivations run once at construction. The account belongs to its caller;
    nothing in the library keeps a reference to it.
    """

    def __init__(
        self,
        private_key: Union[PrivateKey, bytes, str],
        network: Network = Network.MAINNET,
    ) -> None:
        """
        Initialize account.

        Args:
            private_key: Account private key (object, 32 bytes or hex)
            network: Network used for string exports
        """
        self._private_key = PrivateKey(private_key)
        self._view_key = self._private_key.view_key()
        self._address = self._view_key.address()
        self.network = Network(network)

        self._logger = logging.getLogger(f"{__name__}.Account.{self.address_string[:12]}")

    @classmethod
    def generate(
        cls,
        network: Network = Network.MAINNET,
        entropy: Optional[BaseEntropySource] = None,
    ) -> "Account":
        """
        Create account with a fresh private key.

        Raises:
            EntropyUnavailable: If no secure randomness is available
        """
        return cls(PrivateKey.generate(entropy), network)

    @classmethod
    def from_string(cls, encoded: str) -> "Account":
        """Create account from an encoded private key; network follows its prefix."""
        from .utils.encoding import detect_prefix
        _, network = detect_prefix(encoded)
        return cls(PrivateKey.from_string(encoded, network), network)

    @property
    def private_key(self) -> PrivateKey:
        return self._private_key

    @property
    def view_key(self) -> ViewKey:
        return self._view_key

    @property
    def address(self) -> Address:
        return self._address

    @property
    def address_string(self) -> EncodedString:
        """Address encoded for this account's network."""
        return self._address.to_string(self.network)

    def sign(self, message: Message) -> Signature:
        """Sign message with the account's private key."""
        signature = self._private_key.sign(message)
        self._logger.debug("Signed message")
        return signature

    def verify(self, message: Message, signature: Union[Signature, bytes]) -> bool:
        """Verify signature against the account's address."""
        return self._address.verify(message, signature)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._private_key == other._private_key

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """String representation showing only public data."""
        return f"Account({self.address_string})"
