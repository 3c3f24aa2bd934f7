from tessera import Account, Network, PrivateKey, Signature

KEY = bytes.fromhex("01" * 32)


def test_account_bundles_hierarchy():
    account = Account(KEY)
    key = PrivateKey(KEY)
    assert account.private_key == key
    assert account.view_key == key.view_key()
    assert account.address == key.address()
    assert account.address_string == str(key.address())


def test_account_generate_and_sign():
    account = Account.generate(Network.TESTNET)
    assert account.address_string.startswith("ttsr1")
    signature = account.sign(b"hello")
    assert isinstance(signature, Signature)
    assert account.verify(b"hello", signature)
    assert not Account.generate().verify(b"hello", signature)


def test_account_from_string_keeps_network():
    key = PrivateKey(KEY)
    account = Account.from_string(key.to_string(Network.TESTNET))
    assert account.network == Network.TESTNET
    assert account == Account(KEY)


def test_account_repr_shows_address_only():
    account = Account(KEY)
    text = repr(account)
    assert account.address_string in text
    assert account.private_key.hex() not in text
    assert account.private_key.to_string() not in text
