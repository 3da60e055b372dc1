from stellar_keys.core.config import KeysConfig
from stellar_keys.core.exceptions import KeysError, StrKeyError, MissingPrivateKeyError, DerivationError
from stellar_keys.core.key_types import VersionByte, DecoratedSignature
from stellar_keys.crypto.strkey import StrKey
from stellar_keys.crypto.keypair import KeyPair, FullKeyPair, PublicOnlyKeyPair
from stellar_keys.crypto.muxed_account import MuxedAccount, SignedPayloadSigner
from stellar_keys.utils.helpers import generate_mnemonic, validate_mnemonic, mnemonic_to_seed
from stellar_keys.utils.helpers import create_keypair_from_mnemonic, create_keypair_from_private_key
from stellar_keys.utils.logging import setup_logging

__version__ = "1.0.0"
__all__ = [
    'KeysConfig',
    'KeysError',
    'StrKeyError',
    'MissingPrivateKeyError',
    'DerivationError',
    'VersionByte',
    'DecoratedSignature',
    'StrKey',
    'KeyPair',
    'FullKeyPair',
    'PublicOnlyKeyPair',
    'MuxedAccount',
    'SignedPayloadSigner',
    'generate_mnemonic',
    'validate_mnemonic',
    'mnemonic_to_seed',
    'create_keypair_from_mnemonic',
    'create_keypair_from_private_key',
    'setup_logging'
]
