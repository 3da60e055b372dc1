# stellar_keys/core/xdr_types.py
"""XDR value objects handed to the transaction-building layer.

Only the shapes needed around key pairs live here: muxed accounts, signer
keys and signed payloads. They carry raw bytes and know their XDR layout,
nothing more.
"""
import struct
from enum import Enum
from dataclasses import dataclass
from typing import Optional

from stellar_keys.core.exceptions import InvalidLengthError
from stellar_keys.core.key_types import ED25519_PUBLIC_KEY_LENGTH

SIGNED_PAYLOAD_MIN_LENGTH = 4
SIGNED_PAYLOAD_MAX_LENGTH = 64
MAX_UINT64 = 2 ** 64 - 1

class CryptoKeyType(Enum):
    KEY_TYPE_ED25519 = 0
    KEY_TYPE_PRE_AUTH_TX = 1
    KEY_TYPE_HASH_X = 2
    KEY_TYPE_ED25519_SIGNED_PAYLOAD = 3
    KEY_TYPE_MUXED_ED25519 = 0x100

class SignerKeyType(Enum):
    ED25519 = 0
    PRE_AUTH_TX = 1
    HASH_X = 2
    ED25519_SIGNED_PAYLOAD = 3

def _check_key(name: str, value: bytes) -> None:
    if len(value) != ED25519_PUBLIC_KEY_LENGTH:
        raise InvalidLengthError(f"{name} must be {ED25519_PUBLIC_KEY_LENGTH} bytes, got {len(value)}")

@dataclass(frozen=True)
class XdrMuxedAccountMed25519:
    id: int
    ed25519: bytes

    def __post_init__(self):
        _check_key("ed25519", self.ed25519)
        if not 0 <= self.id <= MAX_UINT64:
            raise ValueError(f"Muxed id must fit in 64 bits: {self.id}")

    def encode(self) -> bytes:
        """XDR order: id then key"""
        return struct.pack('>Q', self.id) + self.ed25519

    def encode_inverted(self) -> bytes:
        """StrKey order: key then id"""
        return self.ed25519 + struct.pack('>Q', self.id)

    @classmethod
    def decode_inverted(cls, data: bytes) -> 'XdrMuxedAccountMed25519':
        if len(data) != ED25519_PUBLIC_KEY_LENGTH + 8:
            raise InvalidLengthError(f"Muxed account payload must be 40 bytes, got {len(data)}")
        (muxed_id,) = struct.unpack('>Q', data[ED25519_PUBLIC_KEY_LENGTH:])
        return cls(id=muxed_id, ed25519=bytes(data[:ED25519_PUBLIC_KEY_LENGTH]))

@dataclass(frozen=True)
class XdrMuxedAccount:
    ed25519: Optional[bytes] = None
    med25519: Optional[XdrMuxedAccountMed25519] = None

    def __post_init__(self):
        if (self.ed25519 is None) == (self.med25519 is None):
            raise ValueError("Exactly one of ed25519 or med25519 must be set")
        if self.ed25519 is not None:
            _check_key("ed25519", self.ed25519)

    @property
    def discriminant(self) -> CryptoKeyType:
        if self.med25519 is not None:
            return CryptoKeyType.KEY_TYPE_MUXED_ED25519
        return CryptoKeyType.KEY_TYPE_ED25519

    @property
    def account_public_key(self) -> bytes:
        """The underlying Ed25519 key, with or without a muxed id"""
        if self.med25519 is not None:
            return self.med25519.ed25519
        return self.ed25519

    def encode(self) -> bytes:
        body = self.med25519.encode() if self.med25519 is not None else self.ed25519
        return struct.pack('>I', self.discriminant.value) + body

@dataclass(frozen=True)
class XdrSignedPayload:
    ed25519: bytes
    payload: bytes

    def __post_init__(self):
        _check_key("ed25519", self.ed25519)
        if len(self.payload) > SIGNED_PAYLOAD_MAX_LENGTH:
            raise InvalidLengthError(
                f"Signed payload must be at most {SIGNED_PAYLOAD_MAX_LENGTH} bytes, got {len(self.payload)}"
            )

    def encode(self) -> bytes:
        padding = (4 - len(self.payload) % 4) % 4
        return self.ed25519 + struct.pack('>I', len(self.payload)) + self.payload + b'\x00' * padding

    @classmethod
    def decode(cls, data: bytes) -> 'XdrSignedPayload':
        header = ED25519_PUBLIC_KEY_LENGTH + 4
        if len(data) < header:
            raise InvalidLengthError(f"Signed payload data too short: {len(data)} bytes")

        (length,) = struct.unpack('>I', data[ED25519_PUBLIC_KEY_LENGTH:header])
        if not SIGNED_PAYLOAD_MIN_LENGTH <= length <= SIGNED_PAYLOAD_MAX_LENGTH:
            raise InvalidLengthError(f"Signed payload length out of range: {length}")

        padded = length + (4 - length % 4) % 4
        if len(data) != header + padded:
            raise InvalidLengthError(
                f"Signed payload declares {length} bytes but carries {len(data) - header}"
            )
        if any(data[header + length:]):
            raise InvalidLengthError("Signed payload padding must be zero")

        return cls(ed25519=bytes(data[:ED25519_PUBLIC_KEY_LENGTH]),
                   payload=bytes(data[header:header + length]))

@dataclass(frozen=True)
class XdrSignerKey:
    type: SignerKeyType
    ed25519: Optional[bytes] = None
    pre_auth_tx: Optional[bytes] = None
    hash_x: Optional[bytes] = None
    signed_payload: Optional[XdrSignedPayload] = None

    @classmethod
    def from_ed25519(cls, public_key: bytes) -> 'XdrSignerKey':
        _check_key("ed25519", public_key)
        return cls(type=SignerKeyType.ED25519, ed25519=public_key)

    @classmethod
    def from_pre_auth_tx(cls, tx_hash: bytes) -> 'XdrSignerKey':
        _check_key("pre_auth_tx", tx_hash)
        return cls(type=SignerKeyType.PRE_AUTH_TX, pre_auth_tx=tx_hash)

    @classmethod
    def from_hash_x(cls, hash_x: bytes) -> 'XdrSignerKey':
        _check_key("hash_x", hash_x)
        return cls(type=SignerKeyType.HASH_X, hash_x=hash_x)

    @classmethod
    def from_signed_payload(cls, signed_payload: XdrSignedPayload) -> 'XdrSignerKey':
        return cls(type=SignerKeyType.ED25519_SIGNED_PAYLOAD, signed_payload=signed_payload)

    def encode(self) -> bytes:
        body = {
            SignerKeyType.ED25519: lambda: self.ed25519,
            SignerKeyType.PRE_AUTH_TX: lambda: self.pre_auth_tx,
            SignerKeyType.HASH_X: lambda: self.hash_x,
            SignerKeyType.ED25519_SIGNED_PAYLOAD: lambda: self.signed_payload.encode(),
        }[self.type]()
        return struct.pack('>I', self.type.value) + body
