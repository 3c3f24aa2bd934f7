"""
Narrow call surface for foreign callers.

Every operation takes and returns strings, bytes and booleans only. Secrets
cross the boundary in encoded form, and raw private key bytes leave it only
through to_bytes. Errors are reduced to a closed set of codes with fixed
messages; internal exception details never reach the caller.
"""

import functools
import json
import logging
from enum import IntEnum
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar, Union

from .constants import KeyKind, Network
from .crypto import Address, PrivateKey, Signature, ViewKey
from .exceptions import (
    BoundaryError,
    ChecksumMismatch,
    EntropyUnavailable,
    InvalidEncoding,
    InvalidPrefix,
    InvalidSignature,
    ValidationError,
)
from .utils.encoding import bytes_to_hex, decode, detect_prefix, hex_to_bytes

__all__ = [
    "ErrorCode",
    "generate_private_key",
    "private_key_to_view_key",
    "private_key_to_address",
    "sign",
    "verify",
    "to_bytes",
    "from_bytes",
    "dispatch",
]

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class ErrorCode(IntEnum):
    """Caller-visible error codes."""

    ENTROPY_UNAVAILABLE = 1
    INVALID_ENCODING = 2
    INVALID_PREFIX = 3
    CHECKSUM_MISMATCH = 4
    INVALID_SIGNATURE = 5
    INVALID_ARGUMENT = 6
    INTERNAL_ERROR = 7


ERROR_MESSAGES = {
    ErrorCode.ENTROPY_UNAVAILABLE: "Secure randomness is unavailable",
    ErrorCode.INVALID_ENCODING: "Malformed value",
    ErrorCode.INVALID_PREFIX: "Unexpected value prefix",
    ErrorCode.CHECKSUM_MISMATCH: "Checksum mismatch",
    ErrorCode.INVALID_SIGNATURE: "Malformed signature",
    ErrorCode.INVALID_ARGUMENT: "Invalid argument",
    ErrorCode.INTERNAL_ERROR: "Internal error",
}

# Most specific first
_ERROR_MAP = (
    (EntropyUnavailable, ErrorCode.ENTROPY_UNAVAILABLE),
    (InvalidSignature, ErrorCode.INVALID_SIGNATURE),
    (InvalidPrefix, ErrorCode.INVALID_PREFIX),
    (ChecksumMismatch, ErrorCode.CHECKSUM_MISMATCH),
    (InvalidEncoding, ErrorCode.INVALID_ENCODING),
    (ValidationError, ErrorCode.INVALID_ENCODING),
    (TypeError, ErrorCode.INVALID_ARGUMENT),
    (ValueError, ErrorCode.INVALID_ARGUMENT),
)

_KEY_TYPES = {
    KeyKind.PRIVATE_KEY: PrivateKey,
    KeyKind.VIEW_KEY: ViewKey,
    KeyKind.ADDRESS: Address,
    KeyKind.SIGNATURE: Signature,
}


def _error_code(exc: Exception) -> ErrorCode:
    for exc_type, code in _ERROR_MAP:
        if isinstance(exc, exc_type):
            return code
    return ErrorCode.INTERNAL_ERROR


def _boundary(func: F) -> F:
    """Translate any failure into a BoundaryError without chaining."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        code: Optional[ErrorCode] = None
        try:
            return func(*args, **kwargs)
        except Exception as e:
            code = _error_code(e)
            if code is ErrorCode.INTERNAL_ERROR:
                logger.error("Boundary call %s failed unexpectedly: %s", func.__name__, type(e).__name__)
            else:
                logger.debug("Boundary call %s rejected: %s", func.__name__, code.name)
        # Raised outside the handler so no internal exception is attached
        raise BoundaryError(ERROR_MESSAGES[code], code=int(code))

    return wrapper  # type: ignore[return-value]


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    return value


def _require_bytes(value: Any, name: str) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"{name} must be bytes")
    return bytes(value)


def _parse_private_key(encoded: Any) -> Tuple[PrivateKey, Network]:
    encoded = _require_str(encoded, "private_key")
    kind, network = detect_prefix(encoded)
    if kind is not KeyKind.PRIVATE_KEY:
        raise InvalidPrefix("Expected private key")
    return PrivateKey.from_string(encoded, network), network


@_boundary
def generate_private_key(network: str = Network.MAINNET.value) -> str:
    """Generate a private key and return its encoded string."""
    network = Network(_require_str(network, "network"))
    return PrivateKey.generate().to_string(network)


@_boundary
def private_key_to_view_key(private_key: str) -> str:
    """Derive the encoded view key of an encoded private key."""
    key, network = _parse_private_key(private_key)
    return key.view_key().to_string(network)


@_boundary
def private_key_to_address(private_key: str) -> str:
    """Derive the encoded address of an encoded private key."""
    key, network = _parse_private_key(private_key)
    return key.address().to_string(network)


@_boundary
def sign(private_key: str, message: bytes) -> str:
    """Sign message bytes; the signature uses the key's network prefix."""
    key, network = _parse_private_key(private_key)
    return key.sign(_require_bytes(message, "message")).to_string(network)


@_boundary
def verify(address: str, message: bytes, signature: str) -> bool:
    """
    Verify an encoded signature against an encoded address.

    Returns False for a well-formed signature that does not verify. Raises
    BoundaryError for malformed inputs or a signature from another network.
    """
    address = _require_str(address, "address")
    kind, network = detect_prefix(address)
    if kind is not KeyKind.ADDRESS:
        raise InvalidPrefix("Expected address")

    parsed_address = Address.from_string(address, network)
    parsed_signature = Signature.from_string(_require_str(signature, "signature"), network)
    return parsed_address.verify(_require_bytes(message, "message"), parsed_signature)


@_boundary
def to_bytes(encoded: str) -> bytes:
    """
    Decode any encoded value to its raw bytes.

    This is the explicit raw export: applied to a private key string it
    returns the secret scalar bytes.
    """
    encoded = _require_str(encoded, "encoded")
    kind, network = detect_prefix(encoded)
    value = _KEY_TYPES[kind].from_bytes(decode(encoded, kind, network))
    return bytes(value.to_bytes())


@_boundary
def from_bytes(
    data: Union[bytes, bytearray],
    type_tag: str,
    network: str = Network.MAINNET.value,
) -> str:
    """
    Encode raw bytes of the given kind.

    Args:
        data: Raw value bytes
        type_tag: One of private_key, view_key, address, signature
        network: Target network
    """
    kind = KeyKind(_require_str(type_tag, "type_tag"))
    network = Network(_require_str(network, "network"))
    value = _KEY_TYPES[kind].from_bytes(_require_bytes(data, "data"))
    return value.to_string(network)


def _hex_param(params: Dict[str, Any], name: str) -> bytes:
    value = params.get(name)
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a hex string")
    try:
        return hex_to_bytes(value)
    except ValidationError:
        raise ValueError(f"{name} must be a hex string") from None


def _call(method: str, params: Dict[str, Any]) -> Any:
    """Route one decoded request to the boundary surface."""
    if method == "generate_private_key":
        return generate_private_key(params.get("network", Network.MAINNET.value))
    if method == "private_key_to_view_key":
        return private_key_to_view_key(params.get("private_key"))
    if method == "private_key_to_address":
        return private_key_to_address(params.get("private_key"))
    if method == "sign":
        return sign(params.get("private_key"), _hex_param(params, "message"))
    if method == "verify":
        return verify(
            params.get("address"),
            _hex_param(params, "message"),
            params.get("signature"),
        )
    if method == "to_bytes":
        return bytes_to_hex(to_bytes(params.get("encoded")))
    if method == "from_bytes":
        return from_bytes(
            _hex_param(params, "data"),
            params.get("type_tag"),
            params.get("network", Network.MAINNET.value),
        )
    raise ValueError("Unknown method")


def _error_response(request_id: Any, code: ErrorCode) -> Dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": int(code), "message": ERROR_MESSAGES[code]},
    }


def dispatch(request: str) -> str:
    """
    Serve one JSON-RPC style request.

    Byte values (message, data, and the to_bytes result) travel as hex
    strings. Never raises; failures become error responses.

    Args:
        request: JSON object with id, method and params

    Returns:
        JSON response with either result or error
    """
    try:
        payload = json.loads(request)
    except (TypeError, ValueError, RecursionError):
        return json.dumps(_error_response(None, ErrorCode.INVALID_ARGUMENT))

    if not isinstance(payload, dict):
        return json.dumps(_error_response(None, ErrorCode.INVALID_ARGUMENT))

    request_id = payload.get("id")
    method = payload.get("method")
    params = payload.get("params") or {}

    if not isinstance(method, str) or not isinstance(params, dict):
        return json.dumps(_error_response(request_id, ErrorCode.INVALID_ARGUMENT))

    code: Optional[ErrorCode] = None
    try:
        result = _call(method, params)
    except BoundaryError as e:
        code = ErrorCode(e.code)
    except (TypeError, ValueError):
        code = ErrorCode.INVALID_ARGUMENT

    if code is not None:
        logger.debug("Request %s failed: %s", method, code.name)
        return json.dumps(_error_response(request_id, code))

    return json.dumps({"jsonrpc": "2.0", "id": request_id, "result": result})
