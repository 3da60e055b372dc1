# stellar_keys/core/key_types.py
import struct
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional

from stellar_keys.core.exceptions import CryptoError

ED25519_PUBLIC_KEY_LENGTH = 32
ED25519_SEED_LENGTH = 32
ED25519_SIGNATURE_LENGTH = 64
SIGNATURE_HINT_LENGTH = 4

class VersionByte(Enum):
    """StrKey version bytes.

    The top five bits hold the index of the leading base32 letter, so every
    family encodes to a string starting with a fixed character.
    """
    ACCOUNT_ID = 6 << 3            # G
    MUXED_ACCOUNT = 12 << 3        # M
    SEED = 18 << 3                 # S
    PRE_AUTH_TX = 19 << 3          # T
    SHA256_HASH = 23 << 3          # X
    SIGNED_PAYLOAD = 15 << 3       # P
    CONTRACT_ID = 2 << 3           # C
    LIQUIDITY_POOL_ID = 11 << 3    # L
    CLAIMABLE_BALANCE_ID = 1 << 3  # B

    # hash(x) signer keys are usually called HASH_X
    HASH_X = SHA256_HASH

    @property
    def prefix(self) -> str:
        return chr(ord('A') + (self.value >> 3))

    @classmethod
    def from_prefix(cls, prefix: str) -> Optional['VersionByte']:
        for member in cls:
            if member.prefix == prefix.upper():
                return member
        return None

@dataclass(frozen=True)
class KeyMaterial:
    """Raw Ed25519 key material; the private half is optional"""
    public_key: bytes
    private_key: Optional[bytes] = field(default=None, repr=False)

    def __post_init__(self):
        if len(self.public_key) != ED25519_PUBLIC_KEY_LENGTH:
            raise CryptoError(f"Public key must be {ED25519_PUBLIC_KEY_LENGTH} bytes, got {len(self.public_key)}")
        if self.private_key is not None and len(self.private_key) != ED25519_SEED_LENGTH:
            raise CryptoError(f"Private key must be {ED25519_SEED_LENGTH} bytes, got {len(self.private_key)}")

    @property
    def has_private_key(self) -> bool:
        return self.private_key is not None

@dataclass(frozen=True)
class DecoratedSignature:
    """Signature hint plus Ed25519 signature, as carried in a transaction envelope"""
    hint: bytes
    signature: bytes

    def __post_init__(self):
        if len(self.hint) != SIGNATURE_HINT_LENGTH:
            raise CryptoError(f"Signature hint must be {SIGNATURE_HINT_LENGTH} bytes, got {len(self.hint)}")
        if len(self.signature) > ED25519_SIGNATURE_LENGTH:
            raise CryptoError(f"Signature must be at most {ED25519_SIGNATURE_LENGTH} bytes")

    def encode(self) -> bytes:
        """XDR encoding: opaque[4] hint followed by opaque<64> signature"""
        padding = (4 - len(self.signature) % 4) % 4
        return self.hint + struct.pack('>I', len(self.signature)) + self.signature + b'\x00' * padding
