import pytest

from tessera.constants import CURVE_ORDER
from tessera.utils import validation as v
from tessera.exceptions import InvalidEncoding, InvalidSignature

GENERATOR = "0279BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798"


def test_scalar_validation():
    assert v.validate_scalar(b"\x01" * 32) == b"\x01" * 32
    assert v.validate_scalar("0x" + "01" * 32) == b"\x01" * 32
    assert v.is_valid_scalar((CURVE_ORDER - 1).to_bytes(32, "big"))
    assert not v.is_valid_scalar(b"\x00" * 32)
    assert not v.is_valid_scalar(CURVE_ORDER.to_bytes(32, "big"))
    assert not v.is_valid_scalar(b"\x01" * 31)
    assert not v.is_valid_scalar("zz" * 32)
    with pytest.raises(InvalidEncoding):
        v.validate_scalar(b"\xff" * 32)


def test_point_validation():
    assert v.validate_point(GENERATOR) == bytes.fromhex(GENERATOR)
    assert v.validate_point(bytes.fromhex(GENERATOR)) == bytes.fromhex(GENERATOR)


@pytest.mark.parametrize("point", [
    b"\x02" + b"\xff" * 32,
    b"\x04" + bytes.fromhex(GENERATOR)[1:],
    bytes.fromhex(GENERATOR)[:-1],
    12345,
])
def test_point_validation_rejects(point):
    with pytest.raises(InvalidEncoding):
        v.validate_point(point)


def test_signature_validation():
    good = (1).to_bytes(32, "big") + (2).to_bytes(32, "big")
    assert v.validate_signature(good) == good
    with pytest.raises(InvalidSignature):
        v.validate_signature(good[:-1])
    with pytest.raises(InvalidSignature):
        v.validate_signature(b"\x00" * 64)
    with pytest.raises(InvalidSignature):
        v.validate_signature(CURVE_ORDER.to_bytes(32, "big") + (2).to_bytes(32, "big"))
    with pytest.raises(InvalidSignature):
        v.validate_signature((1).to_bytes(32, "big") + CURVE_ORDER.to_bytes(32, "big"))
    with pytest.raises(InvalidSignature):
        v.validate_signature("not hex")
