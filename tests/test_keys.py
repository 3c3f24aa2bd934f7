import secrets

import pytest

from tessera.constants import CURVE_ORDER, Network
from tessera.crypto.entropy import HostEntropy
from tessera.crypto.keys import PrivateKey, ViewKey, Address
from tessera.exceptions import EntropyUnavailable, InvalidEncoding, InvalidPrefix

KEY = bytes.fromhex("01" * 32)
GENERATOR = bytes.fromhex("0279BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798")


def _draws(*values):
    it = iter(values)
    return HostEntropy(lambda n: next(it))


@pytest.mark.parametrize("raw", [
    b"\x00" * 32,
    CURVE_ORDER.to_bytes(32, "big"),
    b"\xff" * 32,
    b"\x01" * 31,
    b"\x01" * 33,
])
def test_private_key_rejects_invalid_bytes(raw):
    with pytest.raises(InvalidEncoding):
        PrivateKey.from_bytes(raw)


def test_private_key_bytes_roundtrip():
    for _ in range(50):
        raw = secrets.token_bytes(32)
        if not 0 < int.from_bytes(raw, "big") < CURVE_ORDER:
            continue
        key = PrivateKey.from_bytes(raw)
        assert PrivateKey.from_bytes(key.to_bytes()) == key
        assert key.to_bytes() == raw
        assert len(key.to_bytes()) == 32


def test_private_key_hex_and_copy():
    key = PrivateKey(KEY.hex())
    assert key == PrivateKey(KEY)
    assert PrivateKey(key) == key
    assert key.hex() == KEY.hex()


def test_private_key_string_roundtrip():
    key = PrivateKey(KEY)
    encoded = key.to_string()
    assert encoded.startswith("TPrivateKey1")
    assert PrivateKey.from_string(encoded) == key
    assert PrivateKey.from_string(encoded, Network.MAINNET) == key
    with pytest.raises(InvalidPrefix):
        PrivateKey.from_string(encoded, Network.TESTNET)

    testnet = key.to_string(Network.TESTNET)
    assert testnet.startswith("TtPrivateKey1")
    assert PrivateKey.from_string(testnet) == key


def test_private_key_repr_masks_secret():
    key = PrivateKey(bytes.fromhex("ab" * 16 + "cd" * 16))
    assert key.hex() not in repr(key)
    assert key.to_string() not in repr(key)
    assert repr(key) == "PrivateKey(abab...cdcd)"


def test_private_key_unhashable():
    with pytest.raises(TypeError):
        hash(PrivateKey(KEY))


def test_derivation_is_deterministic():
    key = PrivateKey(KEY)
    assert key.view_key() == key.view_key()
    assert key.view_key().to_bytes() == ViewKey.from_private_key(PrivateKey(KEY)).to_bytes()
    assert key.address().to_bytes() == key.address().to_bytes()
    assert key.derive_address() == Address.from_view_key(key.derive_view_key())


def test_view_key_differs_from_private_key():
    key = PrivateKey(KEY)
    assert key.view_key().to_bytes() != key.to_bytes()


def test_view_key_cannot_sign():
    assert not hasattr(ViewKey, "sign")


def test_address_is_view_key_times_generator():
    one = ViewKey((1).to_bytes(32, "big"))
    assert Address.from_view_key(one).to_bytes() == GENERATOR
    address = PrivateKey(KEY).address()
    assert len(address.to_bytes()) == 33
    assert address.to_bytes()[0] in (2, 3)


def test_address_rejects_invalid_points():
    with pytest.raises(InvalidEncoding):
        Address(b"\x02" + b"\xff" * 32)
    with pytest.raises(InvalidEncoding):
        Address(GENERATOR[:-1])


def test_address_string_and_hash():
    address = PrivateKey(KEY).address()
    assert str(address).startswith("tsr1")
    assert address.to_string(Network.TESTNET).startswith("ttsr1")
    assert Address.from_string(str(address)) == address
    assert len({address, Address(address.to_bytes())}) == 1


def test_view_key_string_roundtrip():
    view_key = PrivateKey(KEY).view_key()
    encoded = view_key.to_string()
    assert encoded.startswith("TViewKey1")
    assert ViewKey.from_string(encoded) == view_key
    assert view_key.hex() not in repr(view_key)


def test_generate_uses_rejection_sampling():
    entropy = _draws(CURVE_ORDER.to_bytes(32, "big"), b"\x00" * 32, b"\x05" * 32)
    key = PrivateKey.generate(entropy)
    assert key.to_bytes() == b"\x05" * 32


def test_generate_gives_up_on_broken_source():
    entropy = HostEntropy(lambda n: b"\xff" * n)
    with pytest.raises(EntropyUnavailable):
        PrivateKey.generate(entropy)


def test_generate_fails_without_entropy():
    def unavailable(n):
        raise OSError("no randomness")

    with pytest.raises(EntropyUnavailable):
        PrivateKey.generate(HostEntropy(unavailable))


def test_generated_addresses_do_not_collide():
    addresses = {PrivateKey.generate().address().to_bytes() for _ in range(200)}
    assert len(addresses) == 200


def test_encode_decode_derive_scenario():
    key = PrivateKey.generate()
    restored = PrivateKey.from_string(key.to_string())
    first = restored.address().to_string()
    second = restored.address().to_string()
    assert first == second
    assert first == key.address().to_string()
