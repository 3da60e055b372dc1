# stellar_keys/crypto/strkey.py
"""StrKey: version byte + payload + CRC-16 checksum, base32 encoded.

Strings decode canonically: any checksum, length or version problem raises,
nothing is ever corrected.
"""
from typing import Tuple, Union

from stellar_keys.core.exceptions import (
    StrKeyError, MalformedInputError, InvalidLengthError, ChecksumMismatchError,
    UnknownVersionByteError, UnexpectedVersionByteError
)
from stellar_keys.core.key_types import VersionByte, ED25519_PUBLIC_KEY_LENGTH
from stellar_keys.core.xdr_types import (
    XdrSignedPayload, XdrMuxedAccountMed25519, SIGNED_PAYLOAD_MIN_LENGTH, SIGNED_PAYLOAD_MAX_LENGTH
)
from stellar_keys.crypto.base32_encoding import Base32
from stellar_keys.crypto.checksum import Crc16XModem
from stellar_keys.crypto.signing import Ed25519Signer

MUXED_ACCOUNT_DECODED_LENGTH = ED25519_PUBLIC_KEY_LENGTH + 8
CLAIMABLE_BALANCE_DECODED_LENGTH = ED25519_PUBLIC_KEY_LENGTH + 1
SIGNED_PAYLOAD_DECODED_MIN_LENGTH = ED25519_PUBLIC_KEY_LENGTH + 4 + SIGNED_PAYLOAD_MIN_LENGTH
SIGNED_PAYLOAD_DECODED_MAX_LENGTH = ED25519_PUBLIC_KEY_LENGTH + 4 + SIGNED_PAYLOAD_MAX_LENGTH

# Decoded payload length bounds per family, inclusive
PAYLOAD_LENGTHS = {
    VersionByte.ACCOUNT_ID: (32, 32),
    VersionByte.SEED: (32, 32),
    VersionByte.PRE_AUTH_TX: (32, 32),
    VersionByte.SHA256_HASH: (32, 32),
    VersionByte.CONTRACT_ID: (32, 32),
    VersionByte.LIQUIDITY_POOL_ID: (32, 32),
    VersionByte.MUXED_ACCOUNT: (MUXED_ACCOUNT_DECODED_LENGTH, MUXED_ACCOUNT_DECODED_LENGTH),
    VersionByte.CLAIMABLE_BALANCE_ID: (CLAIMABLE_BALANCE_DECODED_LENGTH, CLAIMABLE_BALANCE_DECODED_LENGTH),
    VersionByte.SIGNED_PAYLOAD: (SIGNED_PAYLOAD_DECODED_MIN_LENGTH, SIGNED_PAYLOAD_DECODED_MAX_LENGTH),
}

BytesLike = Union[bytes, bytearray]

class StrKey:
    """Encode and decode Stellar keys between raw bytes and their string forms"""

    # Generic entry points

    @classmethod
    def encode_check(cls, version: VersionByte, data: BytesLike) -> str:
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("Data must be bytes")
        cls._check_length(version, len(data))

        versioned = bytes([version.value]) + bytes(data)
        return Base32.encode(versioned + Crc16XModem.checksum_bytes(versioned))

    @classmethod
    def decode(cls, encoded: str) -> Tuple[VersionByte, bytes]:
        """Decode any StrKey string into its version and raw payload"""
        if not isinstance(encoded, str):
            raise TypeError("Encoded key must be a string")

        raw = Base32.decode(encoded)
        if len(raw) < 3:
            raise MalformedInputError(f"Encoded key too short: {len(encoded)} characters")

        try:
            version = VersionByte(raw[0])
        except ValueError:
            raise UnknownVersionByteError(f"Unknown version byte: 0x{raw[0]:02x}") from None

        payload = raw[1:-2]
        cls._check_length(version, len(payload))

        if not Crc16XModem.verify(raw[:-2], raw[-2:]):
            raise ChecksumMismatchError("Invalid checksum in encoded key")

        return version, payload

    @classmethod
    def decode_check(cls, version: VersionByte, encoded: str) -> bytes:
        """Decode a string that must belong to the given family"""
        actual, payload = cls.decode(encoded)
        if actual is not version:
            raise UnexpectedVersionByteError(version, actual)
        return payload

    @classmethod
    def is_valid(cls, version: VersionByte, encoded: str) -> bool:
        if not isinstance(encoded, str):
            return False
        try:
            payload = cls.decode_check(version, encoded)
            if version is VersionByte.SIGNED_PAYLOAD:
                XdrSignedPayload.decode(payload)
            return True
        except StrKeyError:
            return False

    @staticmethod
    def _check_length(version: VersionByte, length: int) -> None:
        low, high = PAYLOAD_LENGTHS[version]
        if not low <= length <= high:
            expected = str(low) if low == high else f"{low}..{high}"
            raise InvalidLengthError(
                f"Invalid payload length for {version.name}: expected {expected} bytes, got {length}"
            )

    # Account ids (G...)

    @classmethod
    def encode_account_id(cls, public_key: BytesLike) -> str:
        return cls.encode_check(VersionByte.ACCOUNT_ID, public_key)

    @classmethod
    def decode_account_id(cls, account_id: str) -> bytes:
        return cls.decode_check(VersionByte.ACCOUNT_ID, account_id)

    @classmethod
    def is_valid_account_id(cls, account_id: str) -> bool:
        return cls.is_valid(VersionByte.ACCOUNT_ID, account_id)

    @classmethod
    def decode_account_id_to_ed25519(cls, account_id: str) -> bytes:
        """Raw Ed25519 key from a G... id or from an M... muxed id (memo id dropped)"""
        version, payload = cls.decode(account_id)
        if version is VersionByte.ACCOUNT_ID:
            return payload
        if version is VersionByte.MUXED_ACCOUNT:
            return payload[:ED25519_PUBLIC_KEY_LENGTH]
        raise UnexpectedVersionByteError(VersionByte.ACCOUNT_ID, version)

    # Muxed accounts (M...)

    @classmethod
    def encode_muxed_account(cls, public_key: BytesLike, muxed_id: int) -> str:
        med25519 = XdrMuxedAccountMed25519(id=muxed_id, ed25519=bytes(public_key))
        return cls.encode_check(VersionByte.MUXED_ACCOUNT, med25519.encode_inverted())

    @classmethod
    def encode_muxed_account_id(cls, data: BytesLike) -> str:
        """Encode an already assembled 40-byte key + id payload"""
        return cls.encode_check(VersionByte.MUXED_ACCOUNT, data)

    @classmethod
    def decode_muxed_account_id(cls, muxed_account_id: str) -> bytes:
        return cls.decode_check(VersionByte.MUXED_ACCOUNT, muxed_account_id)

    @classmethod
    def is_valid_muxed_account_id(cls, muxed_account_id: str) -> bool:
        return cls.is_valid(VersionByte.MUXED_ACCOUNT, muxed_account_id)

    # Secret seeds (S...)

    @classmethod
    def encode_seed(cls, seed: BytesLike) -> str:
        return cls.encode_check(VersionByte.SEED, seed)

    @classmethod
    def decode_seed(cls, seed: str) -> bytes:
        return cls.decode_check(VersionByte.SEED, seed)

    @classmethod
    def is_valid_seed(cls, seed: str) -> bool:
        return cls.is_valid(VersionByte.SEED, seed)

    # Pre-authorized transactions (T...) and hash(x) signers (X...)

    @classmethod
    def encode_pre_auth_tx(cls, tx_hash: BytesLike) -> str:
        return cls.encode_check(VersionByte.PRE_AUTH_TX, tx_hash)

    @classmethod
    def decode_pre_auth_tx(cls, pre_auth_tx: str) -> bytes:
        return cls.decode_check(VersionByte.PRE_AUTH_TX, pre_auth_tx)

    @classmethod
    def is_valid_pre_auth_tx(cls, pre_auth_tx: str) -> bool:
        return cls.is_valid(VersionByte.PRE_AUTH_TX, pre_auth_tx)

    @classmethod
    def encode_sha256_hash(cls, hash_x: BytesLike) -> str:
        return cls.encode_check(VersionByte.SHA256_HASH, hash_x)

    @classmethod
    def decode_sha256_hash(cls, hash_x: str) -> bytes:
        return cls.decode_check(VersionByte.SHA256_HASH, hash_x)

    @classmethod
    def is_valid_sha256_hash(cls, hash_x: str) -> bool:
        return cls.is_valid(VersionByte.SHA256_HASH, hash_x)

    # Signed payloads (P...)

    @classmethod
    def encode_xdr_signed_payload(cls, signed_payload: XdrSignedPayload) -> str:
        if len(signed_payload.payload) < SIGNED_PAYLOAD_MIN_LENGTH:
            raise InvalidLengthError(
                f"Signed payload must be at least {SIGNED_PAYLOAD_MIN_LENGTH} bytes to encode"
            )
        return cls.encode_check(VersionByte.SIGNED_PAYLOAD, signed_payload.encode())

    @classmethod
    def decode_xdr_signed_payload(cls, signed_payload: str) -> XdrSignedPayload:
        return XdrSignedPayload.decode(cls.decode_check(VersionByte.SIGNED_PAYLOAD, signed_payload))

    @classmethod
    def encode_signed_payload(cls, signer) -> str:
        """Encode a SignedPayloadSigner"""
        return cls.encode_xdr_signed_payload(signer.to_xdr())

    @classmethod
    def decode_signed_payload(cls, signed_payload: str):
        """Decode a P... string into a SignedPayloadSigner"""
        from stellar_keys.crypto.muxed_account import SignedPayloadSigner
        xdr = cls.decode_xdr_signed_payload(signed_payload)
        return SignedPayloadSigner.from_public_key(xdr.ed25519, xdr.payload)

    @classmethod
    def is_valid_signed_payload(cls, signed_payload: str) -> bool:
        return cls.is_valid(VersionByte.SIGNED_PAYLOAD, signed_payload)

    # Contracts (C...), liquidity pools (L...) and claimable balances (B...)

    @classmethod
    def encode_contract_id(cls, contract_id: BytesLike) -> str:
        return cls.encode_check(VersionByte.CONTRACT_ID, contract_id)

    @classmethod
    def encode_contract_id_hex(cls, contract_id: str) -> str:
        return cls.encode_contract_id(bytes.fromhex(contract_id))

    @classmethod
    def decode_contract_id(cls, contract_id: str) -> bytes:
        return cls.decode_check(VersionByte.CONTRACT_ID, contract_id)

    @classmethod
    def decode_contract_id_hex(cls, contract_id: str) -> str:
        return cls.decode_contract_id(contract_id).hex()

    @classmethod
    def is_valid_contract_id(cls, contract_id: str) -> bool:
        return cls.is_valid(VersionByte.CONTRACT_ID, contract_id)

    @classmethod
    def encode_liquidity_pool_id(cls, pool_id: BytesLike) -> str:
        return cls.encode_check(VersionByte.LIQUIDITY_POOL_ID, pool_id)

    @classmethod
    def encode_liquidity_pool_id_hex(cls, pool_id: str) -> str:
        return cls.encode_liquidity_pool_id(bytes.fromhex(pool_id))

    @classmethod
    def decode_liquidity_pool_id(cls, pool_id: str) -> bytes:
        return cls.decode_check(VersionByte.LIQUIDITY_POOL_ID, pool_id)

    @classmethod
    def decode_liquidity_pool_id_hex(cls, pool_id: str) -> str:
        return cls.decode_liquidity_pool_id(pool_id).hex()

    @classmethod
    def is_valid_liquidity_pool_id(cls, pool_id: str) -> bool:
        return cls.is_valid(VersionByte.LIQUIDITY_POOL_ID, pool_id)

    @classmethod
    def encode_claimable_balance_id(cls, balance_id: BytesLike) -> str:
        if len(balance_id) == ED25519_PUBLIC_KEY_LENGTH:
            # bare hash: prepend the v0 discriminant
            balance_id = b'\x00' + bytes(balance_id)
        return cls.encode_check(VersionByte.CLAIMABLE_BALANCE_ID, balance_id)

    @classmethod
    def encode_claimable_balance_id_hex(cls, balance_id: str) -> str:
        return cls.encode_claimable_balance_id(bytes.fromhex(balance_id))

    @classmethod
    def decode_claimable_balance_id(cls, balance_id: str) -> bytes:
        return cls.decode_check(VersionByte.CLAIMABLE_BALANCE_ID, balance_id)

    @classmethod
    def decode_claimable_balance_id_hex(cls, balance_id: str) -> str:
        return cls.decode_claimable_balance_id(balance_id).hex()

    @classmethod
    def is_valid_claimable_balance_id(cls, balance_id: str) -> bool:
        return cls.is_valid(VersionByte.CLAIMABLE_BALANCE_ID, balance_id)

    # Key helpers

    @staticmethod
    def public_key_from_private_key(private_key: BytesLike) -> bytes:
        return Ed25519Signer.public_key_from_seed(private_key)

    @classmethod
    def account_id_from_private_key(cls, private_key: BytesLike) -> str:
        return cls.encode_account_id(cls.public_key_from_private_key(private_key))

    @classmethod
    def account_id_from_seed(cls, seed: str) -> str:
        return cls.account_id_from_private_key(cls.decode_seed(seed))
