import pytest

from tessera.constants import ENCODING_PREFIXES, RAW_LENGTHS, KeyKind, Network
from tessera.exceptions import ChecksumMismatch, InvalidEncoding, InvalidPrefix, ValidationError
from tessera.utils.encoding import (
    BASE58_ALPHABET,
    hex_to_bytes, bytes_to_hex, encode_base58, decode_base58,
    tagged_hash, hash_to_scalar, checksum, encode, decode, detect_prefix
)
from tessera.constants import CURVE_ORDER, CHALLENGE_DOMAIN, VIEW_KEY_DOMAIN


def test_hex_helpers():
    assert bytes_to_hex(b"\x00\xab") == "00ab"
    assert bytes_to_hex(b"\x00\xab", prefix=True) == "0x00ab"
    assert hex_to_bytes("0x00ab") == b"\x00\xab"
    assert hex_to_bytes("00AB") == b"\x00\xab"


@pytest.mark.parametrize("value", ["zzzz", "abc", "0xg0"])
def test_hex_to_bytes_rejects_malformed(value):
    with pytest.raises(ValidationError):
        hex_to_bytes(value)


@pytest.mark.parametrize("payload", [b"hello world", b"\x00\x00abc", b"\x00\x00", b""])
def test_base58_roundtrip(payload):
    assert decode_base58(encode_base58(payload)) == payload


def test_base58_leading_zeros():
    assert encode_base58(b"\x00\x00\x01") == "112"


def test_base58_rejects_invalid_characters():
    for char in "0OIl+/":
        with pytest.raises(InvalidEncoding):
            decode_base58("abc" + char)


def test_hash_to_scalar_range_and_separation():
    data = b"some key material"
    scalar = hash_to_scalar(VIEW_KEY_DOMAIN, data)
    assert 0 < scalar < CURVE_ORDER
    assert scalar == hash_to_scalar(VIEW_KEY_DOMAIN, data)
    assert scalar != hash_to_scalar(CHALLENGE_DOMAIN, data)


def test_tagged_hash_depends_on_tag():
    assert len(tagged_hash("a", b"x")) == 32
    assert tagged_hash("a", b"x") != tagged_hash("b", b"x")


@pytest.mark.parametrize("network", list(Network))
@pytest.mark.parametrize("kind", list(KeyKind))
def test_encode_decode_all_kinds(kind, network):
    raw = bytes(range(1, RAW_LENGTHS[kind] + 1))
    encoded = encode(raw, kind, network)
    assert encoded.startswith(ENCODING_PREFIXES[network][kind])
    assert decode(encoded, kind, network) == raw
    assert decode(encoded, kind, None) == raw
    assert detect_prefix(encoded) == (kind, network)


def test_encode_rejects_wrong_length():
    with pytest.raises(InvalidEncoding):
        encode(b"\x01" * 31, KeyKind.PRIVATE_KEY)


def test_decode_wrong_kind_or_network():
    encoded = encode(b"\x01" * 32, KeyKind.VIEW_KEY, Network.MAINNET)
    with pytest.raises(InvalidPrefix):
        decode(encoded, KeyKind.PRIVATE_KEY, Network.MAINNET)
    with pytest.raises(InvalidPrefix):
        decode(encoded, KeyKind.VIEW_KEY, Network.TESTNET)
    with pytest.raises(InvalidPrefix):
        decode(encoded, KeyKind.PRIVATE_KEY, None)


def test_decode_wrong_payload_length():
    prefix = ENCODING_PREFIXES[Network.MAINNET][KeyKind.ADDRESS]
    raw = b"\x02" * 20
    encoded = prefix + encode_base58(raw + checksum(prefix, raw))
    with pytest.raises(InvalidEncoding):
        decode(encoded, KeyKind.ADDRESS)


def test_checksum_is_bound_to_prefix():
    raw = b"\x07" * 32
    view = encode(raw, KeyKind.VIEW_KEY)
    body = view[len(ENCODING_PREFIXES[Network.MAINNET][KeyKind.VIEW_KEY]):]
    relabelled = ENCODING_PREFIXES[Network.MAINNET][KeyKind.PRIVATE_KEY] + body
    with pytest.raises(ChecksumMismatch):
        decode(relabelled, KeyKind.PRIVATE_KEY)


def test_single_character_corruption_detected():
    raw = bytes(range(33))
    encoded = encode(raw, KeyKind.ADDRESS)
    for position in range(len(encoded)):
        original = encoded[position]
        replacement = next(c for c in BASE58_ALPHABET if c != original)
        corrupted = encoded[:position] + replacement + encoded[position + 1:]
        with pytest.raises((ChecksumMismatch, InvalidEncoding, InvalidPrefix)):
            decode(corrupted, KeyKind.ADDRESS)


def test_detect_prefix_unknown():
    with pytest.raises(InvalidPrefix):
        detect_prefix("nothing-here")
    with pytest.raises(InvalidPrefix):
        detect_prefix(b"tsr1")


def test_prefixes_are_unambiguous():
    prefixes = [p for table in ENCODING_PREFIXES.values() for p in table.values()]
    assert len(set(prefixes)) == len(prefixes)
    for a in prefixes:
        for b in prefixes:
            if a != b:
                assert not b.startswith(a)


@pytest.mark.parametrize("kind", list(KeyKind))
def test_decode_rejects_oversized_body_before_decoding(kind):
    prefix = ENCODING_PREFIXES[Network.MAINNET][kind]
    with pytest.raises(InvalidEncoding):
        decode(prefix + "z" * 200000, kind)


@pytest.mark.parametrize("kind", list(KeyKind))
def test_decode_accepts_longest_valid_body(kind):
    # All 0xff bytes give the longest Base58 body for a given length
    prefix = ENCODING_PREFIXES[Network.MAINNET][kind]
    body = encode_base58(b"\xff" * (RAW_LENGTHS[kind] + 4))
    with pytest.raises(ChecksumMismatch):
        decode(prefix + body, kind)
