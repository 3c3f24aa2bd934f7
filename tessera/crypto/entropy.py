"""Secure randomness sources for key generation."""

import logging
import secrets
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..exceptions import EntropyUnavailable

__all__ = ["BaseEntropySource", "SystemEntropy", "HostEntropy", "default_entropy"]

logger = logging.getLogger(__name__)


class BaseEntropySource(ABC):
    """
    Abstract source of cryptographically secure random bytes.

    Access to the underlying provider is serialized, so concurrent callers
    always receive independent draws. Sources are never seeded by this
    library.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def _read(self, n: int) -> bytes:
        """
        Read n bytes from the underlying provider.

        Raises:
            EntropyUnavailable: If the provider cannot be reached
        """
        raise NotImplementedError

    def next_bytes(self, n: int) -> bytes:
        """
        Return n fresh random bytes.

        Args:
            n: Number of bytes, must be positive

        Returns:
            Random bytes of length n

        Raises:
            ValueError: If n is not a positive integer
            EntropyUnavailable: If the source fails or returns malformed output
        """
        if not isinstance(n, int) or isinstance(n, bool) or n <= 0:
            raise ValueError("Byte count must be a positive integer")

        with self._lock:
            data = self._read(n)

        if not isinstance(data, bytes) or len(data) != n:
            self._logger.warning("Entropy provider returned malformed output")
            raise EntropyUnavailable("Entropy source returned malformed output")

        return data

    def __repr__(self) -> str:
        """String representation of source."""
        return f"{self.__class__.__name__}()"


class SystemEntropy(BaseEntropySource):
    """Operating system CSPRNG."""

    def _read(self, n: int) -> bytes:
        try:
            return secrets.token_bytes(n)
        except (NotImplementedError, OSError) as e:
            raise EntropyUnavailable("System randomness source unavailable") from e


class HostEntropy(BaseEntropySource):
    """
    Randomness supplied by an embedding host.

    Used where the interpreter has no native secure RNG and the host exposes
    its own secure-random primitive (for example a browser bridge to
    crypto.getRandomValues).
    """

    def __init__(self, provider: Callable[[int], bytes]) -> None:
        """
        Initialize host entropy source.

        Args:
            provider: Callable returning n secure random bytes
        """
        super().__init__()
        if not callable(provider):
            raise TypeError("Entropy provider must be callable")
        self._provider = provider

    def _read(self, n: int) -> bytes:
        try:
            data = self._provider(n)
        except Exception as e:
            raise EntropyUnavailable("Host randomness source unavailable") from e
        if isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        return data


_default: Optional[SystemEntropy] = None
_default_lock = threading.Lock()


def default_entropy() -> SystemEntropy:
    """Return the process-wide system entropy source."""
    global _default
    with _default_lock:
        if _default is None:
            _default = SystemEntropy()
        return _default
