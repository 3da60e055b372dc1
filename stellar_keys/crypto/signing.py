import hashlib
import secrets
from typing import Union
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.exceptions import InvalidSignature

from stellar_keys.core.exceptions import CryptoError
from stellar_keys.core.key_types import (
    KeyMaterial, ED25519_PUBLIC_KEY_LENGTH, ED25519_SEED_LENGTH, ED25519_SIGNATURE_LENGTH
)

# SEP-0053 message signing prefix
SIGNED_MESSAGE_PREFIX = b"Stellar Signed Message:\n"

class Ed25519Signer:
    """RFC 8032 Ed25519 primitives over raw 32-byte seeds and public keys"""

    @staticmethod
    def generate() -> KeyMaterial:
        """Generate a key pair from the platform CSPRNG"""
        return Ed25519Signer.from_seed(secrets.token_bytes(ED25519_SEED_LENGTH))

    @staticmethod
    def from_seed(seed: bytes) -> KeyMaterial:
        """Derive the public key for a 32-byte seed"""
        return KeyMaterial(public_key=Ed25519Signer.public_key_from_seed(seed), private_key=bytes(seed))

    @staticmethod
    def public_key_from_seed(seed: bytes) -> bytes:
        private_key_obj = Ed25519Signer._load_private_key(seed)
        return private_key_obj.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        )

    @staticmethod
    def sign(seed: bytes, message: bytes) -> bytes:
        """Sign message bytes, returning the 64-byte signature"""
        if not isinstance(message, (bytes, bytearray)):
            raise TypeError("Message must be bytes")
        return Ed25519Signer._load_private_key(seed).sign(bytes(message))

    @staticmethod
    def verify(public_key: bytes, message: bytes, signature: bytes) -> bool:
        """Verify a signature; any mismatch or malformed input yields False"""
        if len(public_key) != ED25519_PUBLIC_KEY_LENGTH or len(signature) != ED25519_SIGNATURE_LENGTH:
            return False
        try:
            public_key_obj = Ed25519PublicKey.from_public_bytes(bytes(public_key))
            public_key_obj.verify(bytes(signature), bytes(message))
            return True
        except InvalidSignature:
            return False
        except ValueError:
            return False

    @staticmethod
    def message_digest(message: Union[str, bytes]) -> bytes:
        """SEP-0053 digest: SHA-256 over the prefixed message bytes"""
        if isinstance(message, str):
            message = message.encode('utf-8')
        return hashlib.sha256(SIGNED_MESSAGE_PREFIX + bytes(message)).digest()

    @staticmethod
    def _load_private_key(seed: bytes) -> Ed25519PrivateKey:
        if not isinstance(seed, (bytes, bytearray)):
            raise TypeError("Seed must be bytes")
        if len(seed) != ED25519_SEED_LENGTH:
            raise CryptoError(f"Ed25519 seed must be {ED25519_SEED_LENGTH} bytes, got {len(seed)}")
        try:
            return Ed25519PrivateKey.from_private_bytes(bytes(seed))
        except ValueError as e:
            raise CryptoError(f"Invalid Ed25519 seed: {e}") from e
