# stellar_keys/crypto/muxed_account.py
from typing import Optional

from stellar_keys.core.exceptions import InvalidLengthError, UnexpectedVersionByteError
from stellar_keys.core.key_types import VersionByte, ED25519_PUBLIC_KEY_LENGTH
from stellar_keys.core.xdr_types import (
    XdrMuxedAccount, XdrMuxedAccountMed25519, XdrSignedPayload,
    CryptoKeyType, SIGNED_PAYLOAD_MAX_LENGTH
)
from stellar_keys.crypto.strkey import StrKey

class MuxedAccount:
    """An account id optionally multiplexed with a 64-bit memo id"""

    def __init__(self, ed25519_account_id: str, id: Optional[int] = None):
        # Validates the G... form up front
        self._public_key = StrKey.decode_account_id(ed25519_account_id)
        self.ed25519_account_id = ed25519_account_id
        self.id = id
        if id is None:
            self._xdr = XdrMuxedAccount(ed25519=self._public_key)
        else:
            self._xdr = XdrMuxedAccount(med25519=XdrMuxedAccountMed25519(id=id, ed25519=self._public_key))

    @property
    def account_id(self) -> str:
        """M... when an id is set, otherwise the plain G... id"""
        if self.id is None:
            return self.ed25519_account_id
        return StrKey.encode_muxed_account(self._public_key, self.id)

    @property
    def public_key(self) -> bytes:
        return self._public_key

    @classmethod
    def from_account_id(cls, account_id: str) -> 'MuxedAccount':
        """Accept either a G... or an M... string"""
        version, payload = StrKey.decode(account_id)
        if version is VersionByte.MUXED_ACCOUNT:
            return cls.from_med25519(XdrMuxedAccountMed25519.decode_inverted(payload))
        if version is VersionByte.ACCOUNT_ID:
            return cls(account_id)
        raise UnexpectedVersionByteError(VersionByte.ACCOUNT_ID, version)

    @classmethod
    def from_med25519(cls, med25519: XdrMuxedAccountMed25519) -> 'MuxedAccount':
        return cls(StrKey.encode_account_id(med25519.ed25519), med25519.id)

    @classmethod
    def from_med25519_account_id(cls, muxed_account_id: str) -> 'MuxedAccount':
        payload = StrKey.decode_muxed_account_id(muxed_account_id)
        return cls.from_med25519(XdrMuxedAccountMed25519.decode_inverted(payload))

    @classmethod
    def from_xdr(cls, xdr: XdrMuxedAccount) -> 'MuxedAccount':
        if xdr.discriminant is CryptoKeyType.KEY_TYPE_MUXED_ED25519:
            return cls.from_med25519(xdr.med25519)
        return cls(StrKey.encode_account_id(xdr.ed25519))

    def to_xdr(self) -> XdrMuxedAccount:
        return self._xdr

    def __eq__(self, other):
        if not isinstance(other, MuxedAccount):
            return NotImplemented
        return self._public_key == other._public_key and self.id == other.id

    def __hash__(self):
        return hash((self._public_key, self.id))

    def __repr__(self):
        return f"MuxedAccount(account_id={self.account_id!r})"

class SignedPayloadSigner:
    """Ed25519 signer bound to a payload of up to 64 bytes"""

    def __init__(self, signer_account_id: str, payload: bytes):
        if len(payload) > SIGNED_PAYLOAD_MAX_LENGTH:
            raise InvalidLengthError(
                f"Signed payload must be at most {SIGNED_PAYLOAD_MAX_LENGTH} bytes, got {len(payload)}"
            )
        self.signer_account_id = signer_account_id
        self.payload = bytes(payload)
        self._public_key = StrKey.decode_account_id(signer_account_id)

    @property
    def public_key(self) -> bytes:
        return self._public_key

    @classmethod
    def from_account_id(cls, signer_account_id: str, payload: bytes) -> 'SignedPayloadSigner':
        return cls(signer_account_id, payload)

    @classmethod
    def from_public_key(cls, public_key: bytes, payload: bytes) -> 'SignedPayloadSigner':
        if len(public_key) != ED25519_PUBLIC_KEY_LENGTH:
            raise InvalidLengthError(f"Public key must be {ED25519_PUBLIC_KEY_LENGTH} bytes")
        return cls(StrKey.encode_account_id(public_key), payload)

    def to_xdr(self) -> XdrSignedPayload:
        return XdrSignedPayload(ed25519=self._public_key, payload=self.payload)

    def encode(self) -> str:
        """P... string form"""
        return StrKey.encode_signed_payload(self)

    def __eq__(self, other):
        if not isinstance(other, SignedPayloadSigner):
            return NotImplemented
        return self._public_key == other._public_key and self.payload == other.payload

    def __hash__(self):
        return hash((self._public_key, self.payload))

    def __repr__(self):
        return f"SignedPayloadSigner(signer_account_id={self.signer_account_id!r}, payload={self.payload.hex()!r})"
