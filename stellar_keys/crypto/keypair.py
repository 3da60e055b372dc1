# stellar_keys/crypto/keypair.py
"""Key pair facade.

A key pair is either a FullKeyPair (public key plus 32-byte seed, can sign)
or a PublicOnlyKeyPair (verify only). Construct through the KeyPair
classmethods; they pick the variant from what the input carries.
"""
import struct
from abc import ABC, abstractmethod
from typing import Optional, Union

from stellar_keys.core.config import KeysConfig, DEFAULT_CONFIG
from stellar_keys.core.exceptions import CryptoError, DerivationError, MissingPrivateKeyError
from stellar_keys.core.key_types import (
    KeyMaterial, DecoratedSignature,
    ED25519_PUBLIC_KEY_LENGTH, ED25519_SEED_LENGTH, SIGNATURE_HINT_LENGTH
)
from stellar_keys.core.xdr_types import (
    XdrMuxedAccount, XdrMuxedAccountMed25519, XdrSignerKey
)
from stellar_keys.crypto.signing import Ed25519Signer
from stellar_keys.crypto.strkey import StrKey
from stellar_keys.crypto import derivation
from stellar_keys.utils.logging import logger

log = logger.child("keypair")

MessageLike = Union[str, bytes, bytearray]

class KeyPair(ABC):
    """Base for both key pair variants; not instantiable on its own"""

    def __init__(self, public_key: bytes):
        if not isinstance(public_key, (bytes, bytearray)):
            raise TypeError("Public key must be bytes")
        if len(public_key) != ED25519_PUBLIC_KEY_LENGTH:
            raise CryptoError(
                f"Public key must be {ED25519_PUBLIC_KEY_LENGTH} bytes, got {len(public_key)}"
            )
        self._public_key = bytes(public_key)

    # Construction

    @classmethod
    def random(cls) -> 'FullKeyPair':
        material = Ed25519Signer.generate()
        log.debug("Generated random key pair")
        return FullKeyPair(material.private_key, material.public_key)

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> 'FullKeyPair':
        """Build from an S... secret seed or 32 raw seed bytes"""
        if isinstance(seed, str):
            seed = StrKey.decode_seed(seed)
        return cls.from_private_key(seed)

    @classmethod
    def from_secret_seed(cls, secret_seed: str) -> 'FullKeyPair':
        if not isinstance(secret_seed, str):
            raise TypeError("Secret seed must be an S... string")
        return cls.from_seed(secret_seed)

    @classmethod
    def from_private_key(cls, private_key: Union[str, bytes]) -> 'FullKeyPair':
        """Build from a 32-byte seed, raw or hex encoded"""
        if isinstance(private_key, str):
            try:
                private_key = bytes.fromhex(private_key)
            except ValueError as e:
                raise CryptoError(f"Private key is not valid hex: {e}") from e
        material = Ed25519Signer.from_seed(private_key)
        return FullKeyPair(material.private_key, material.public_key)

    @classmethod
    def from_public_key(cls, public_key: bytes) -> 'PublicOnlyKeyPair':
        return PublicOnlyKeyPair(public_key)

    @classmethod
    def from_account_id(cls, account_id: str) -> 'PublicOnlyKeyPair':
        """Build from a G... id, or from an M... id whose memo id is dropped"""
        return PublicOnlyKeyPair(StrKey.decode_account_id_to_ed25519(account_id))

    @classmethod
    def from_mnemonic(cls, words: str, account_index: int, passphrase: str = "",
                      config: KeysConfig = DEFAULT_CONFIG) -> 'FullKeyPair':
        """Derive the key pair at m/44'/148'/account_index' from a BIP-39 mnemonic"""
        # Masked only while the phrase is in use here
        registered = config.mask_secrets and log.add_sensitive_data(words)
        try:
            seed = derivation.mnemonic_to_seed(words, passphrase, config=config)
            return cls.from_private_key(derivation.derive_ed25519(seed, account_index, config))
        finally:
            if registered:
                log.remove_sensitive_data(words)

    @classmethod
    def from_bip39_seed_hex(cls, bip39_seed: str, account_index: int,
                            config: KeysConfig = DEFAULT_CONFIG) -> 'FullKeyPair':
        try:
            seed = bytes.fromhex(bip39_seed)
        except (TypeError, ValueError) as e:
            raise DerivationError(f"BIP-39 seed is not valid hex: {e}") from e
        return cls.from_private_key(derivation.derive_ed25519(seed, account_index, config))

    # Accessors

    def get_account_id(self) -> str:
        return StrKey.encode_account_id(self._public_key)

    @property
    def account_id(self) -> str:
        return self.get_account_id()

    def get_public_key(self) -> bytes:
        return self._public_key

    def get_private_key(self) -> Optional[bytes]:
        return None

    def get_secret_seed(self) -> Optional[str]:
        return None

    @property
    def can_sign(self) -> bool:
        return False

    def get_hint(self) -> bytes:
        """Last four bytes of the public key"""
        return self._public_key[-SIGNATURE_HINT_LENGTH:]

    def get_public_key_checksum(self) -> int:
        """Last two public key bytes read as a little-endian u16"""
        (checksum,) = struct.unpack('<H', self._public_key[-2:])
        return checksum

    def to_key_material(self) -> KeyMaterial:
        return KeyMaterial(public_key=self._public_key, private_key=self.get_private_key())

    # Signing

    @abstractmethod
    def sign(self, data: bytes) -> bytes:
        """Ed25519 signature over data, or MissingPrivateKeyError"""

    def sign_message(self, message: MessageLike) -> bytes:
        """Sign a SEP-0053 message: str is taken as UTF-8"""
        return self.sign(Ed25519Signer.message_digest(message))

    def sign_decorated(self, data: bytes) -> DecoratedSignature:
        return DecoratedSignature(hint=self.get_hint(), signature=self.sign(data))

    def sign_payload_decorated(self, payload: bytes) -> DecoratedSignature:
        """Sign a signed-payload; the hint is XORed with the payload's last four bytes.

        Payloads shorter than four bytes are zero padded on the left.
        """
        signature = self.sign(payload)
        tail = bytes(payload[-SIGNATURE_HINT_LENGTH:]).rjust(SIGNATURE_HINT_LENGTH, b'\x00')
        hint = bytes(a ^ b for a, b in zip(self.get_hint(), tail))
        return DecoratedSignature(hint=hint, signature=signature)

    # Verification

    def verify_signature(self, signature: bytes, data: bytes) -> bool:
        """False for any mismatch or malformed signature, never raises on bad input"""
        if not isinstance(signature, (bytes, bytearray)) or not isinstance(data, (bytes, bytearray)):
            return False
        return Ed25519Signer.verify(self._public_key, data, signature)

    def verify_message(self, message: MessageLike, signature: bytes) -> bool:
        if not isinstance(message, (str, bytes, bytearray)):
            return False
        return self.verify_signature(signature, Ed25519Signer.message_digest(message))

    # XDR

    def get_xdr_muxed_account(self, muxed_id: Optional[int] = None) -> XdrMuxedAccount:
        if muxed_id is None:
            return XdrMuxedAccount(ed25519=self._public_key)
        return XdrMuxedAccount(med25519=XdrMuxedAccountMed25519(id=muxed_id, ed25519=self._public_key))

    def get_xdr_signer_key(self) -> XdrSignerKey:
        return XdrSignerKey.from_ed25519(self._public_key)

    # Value semantics on the public key

    def __eq__(self, other):
        if not isinstance(other, KeyPair):
            return NotImplemented
        return self._public_key == other._public_key

    def __hash__(self):
        return hash(self._public_key)

    def __repr__(self):
        return f"{type(self).__name__}(account_id={self.get_account_id()!r})"

class FullKeyPair(KeyPair):
    """Public key plus private seed; can sign"""

    def __init__(self, private_key: bytes, public_key: Optional[bytes] = None):
        if not isinstance(private_key, (bytes, bytearray)):
            raise TypeError("Private key must be bytes")
        if len(private_key) != ED25519_SEED_LENGTH:
            raise CryptoError(f"Private key must be {ED25519_SEED_LENGTH} bytes, got {len(private_key)}")

        derived = Ed25519Signer.public_key_from_seed(private_key)
        if public_key is not None and bytes(public_key) != derived:
            raise CryptoError("Public key does not match private key")

        super().__init__(derived)
        self._private_key = bytes(private_key)

    def get_private_key(self) -> bytes:
        return self._private_key

    def get_secret_seed(self) -> str:
        return StrKey.encode_seed(self._private_key)

    @property
    def can_sign(self) -> bool:
        return True

    def sign(self, data: bytes) -> bytes:
        return Ed25519Signer.sign(self._private_key, data)

    def to_public_key_pair(self) -> 'PublicOnlyKeyPair':
        return PublicOnlyKeyPair(self._public_key)

class PublicOnlyKeyPair(KeyPair):
    """Public key only; verifies but cannot sign"""

    def sign(self, data: bytes) -> bytes:
        log.warning("Signing refused, key pair has no private key", account_id=self.get_account_id())
        raise MissingPrivateKeyError(self.get_account_id())
