from stellar_keys.crypto.base32_encoding import Base32
from stellar_keys.crypto.checksum import Crc16XModem
from stellar_keys.crypto.signing import Ed25519Signer
from stellar_keys.crypto.strkey import StrKey
from stellar_keys.crypto.muxed_account import MuxedAccount, SignedPayloadSigner
from stellar_keys.crypto.derivation import HDNode
from stellar_keys.crypto.keypair import KeyPair, FullKeyPair, PublicOnlyKeyPair

__all__ = [
    'Base32',
    'Crc16XModem',
    'Ed25519Signer',
    'StrKey',
    'MuxedAccount',
    'SignedPayloadSigner',
    'HDNode',
    'KeyPair',
    'FullKeyPair',
    'PublicOnlyKeyPair'
]
