"""
Tessera Library Usage Examples

This file demonstrates key features of the Tessera library.
"""

import json
import logging

from tessera import Account, Address, Network, PrivateKey, Signature, TesseraError
from tessera import boundary

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def key_hierarchy_example():
    """Example 1: Private key, view key and address."""
    print("\n=== Key Hierarchy Example ===")

    private_key = PrivateKey.generate()
    view_key = private_key.view_key()
    address = view_key.address()

    print(f"Private key: {private_key!r}")
    print(f"View key: {view_key!r}")
    print(f"Address: {address}")
    print(f"Testnet address: {address.to_string(Network.TESTNET)}")

    # Re-import from the encoded string and derive again
    restored = PrivateKey.from_string(private_key.to_string())
    print(f"Same address after re-import: {restored.address() == address}")


def signing_example():
    """Example 2: Signing and verification."""
    print("\n=== Signing Example ===")

    alice = Account.generate()
    bob = Account.generate()
    message = b"transfer:1:alice->bob"

    signature = alice.sign(message)
    print(f"Signature: {signature}")
    print(f"Valid for alice: {alice.verify(message, signature)}")
    print(f"Valid for bob: {bob.verify(message, signature)}")

    # Verify from encoded strings only
    parsed = Signature.from_string(str(signature))
    print(f"Valid after parsing: {Address.from_string(str(alice.address)).verify(message, parsed)}")


def error_handling_example():
    """Example 3: Corrupted input."""
    print("\n=== Error Handling Example ===")

    address = str(Account.generate().address)
    corrupted = address[:-1] + ("2" if address[-1] != "2" else "3")

    try:
        Address.from_string(corrupted)
    except TesseraError as e:
        print(f"{type(e).__name__}: {e}")


def boundary_example():
    """Example 4: String-only boundary and JSON dispatch."""
    print("\n=== Boundary Example ===")

    private_key = boundary.generate_private_key()
    address = boundary.private_key_to_address(private_key)
    signature = boundary.sign(private_key, b"hello")
    print(f"Address: {address}")
    print(f"Verified: {boundary.verify(address, b'hello', signature)}")

    request = json.dumps({
        "id": 1,
        "method": "verify",
        "params": {"address": address, "message": b"hello".hex(), "signature": signature},
    })
    print(f"Dispatch: {boundary.dispatch(request)}")

    bad = json.dumps({"id": 2, "method": "to_bytes", "params": {"encoded": "garbage"}})
    print(f"Dispatch error: {boundary.dispatch(bad)}")


def main():
    """Run all examples."""
    examples = [
        key_hierarchy_example,
        signing_example,
        error_handling_example,
        boundary_example,
    ]

    for example in examples:
        try:
            example()
        except Exception as e:
            print(f"Error in {example.__name__}: {e}")


if __name__ == "__main__":
    main()
