"""Tessera exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
    "TesseraError",
    "CryptoError",
    "EntropyUnavailable",
    "InvalidSignature",
    "ValidationError",
    "InvalidEncoding",
    "InvalidPrefix",
    "ChecksumMismatch",
    "BoundaryError",
]


class TesseraError(Exception):
    """Base exception for all Tessera errors."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class CryptoError(TesseraError):
    """Raised when cryptographic operation fails."""
    pass


class EntropyUnavailable(CryptoError):
    """Raised when no secure randomness source can be reached."""
    pass


class InvalidSignature(CryptoError):
    """Raised when a signature is structurally malformed."""
    pass


class ValidationError(TesseraError):
    """Raised when validation fails."""
    pass


class InvalidEncoding(ValidationError):
    """Raised on bad lengths, out-of-range scalars, invalid points or bad base58."""
    pass


class InvalidPrefix(ValidationError):
    """Raised when an encoded string carries an unexpected prefix."""
    pass


class ChecksumMismatch(ValidationError):
    """Raised when an encoded string fails its checksum."""
    pass


class BoundaryError(TesseraError):
    """Raised by the boundary adapter with a caller-facing code and message."""
    pass
