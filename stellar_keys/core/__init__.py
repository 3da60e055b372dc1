from .exceptions import KeysError, ConfigurationError, StrKeyError, CryptoError, DerivationError
from .exceptions import MalformedInputError, InvalidLengthError, ChecksumMismatchError
from .exceptions import UnknownVersionByteError, UnexpectedVersionByteError, MissingPrivateKeyError
from .key_types import VersionByte, KeyMaterial, DecoratedSignature
from .xdr_types import CryptoKeyType, SignerKeyType, XdrMuxedAccount, XdrMuxedAccountMed25519
from .xdr_types import XdrSignedPayload, XdrSignerKey
from .config import KeysConfig, DEFAULT_CONFIG

__all__ = [
    'KeysError',
    'ConfigurationError',
    'StrKeyError',
    'CryptoError',
    'DerivationError',
    'MalformedInputError',
    'InvalidLengthError',
    'ChecksumMismatchError',
    'UnknownVersionByteError',
    'UnexpectedVersionByteError',
    'MissingPrivateKeyError',
    'VersionByte',
    'KeyMaterial',
    'DecoratedSignature',
    'CryptoKeyType',
    'SignerKeyType',
    'XdrMuxedAccount',
    'XdrMuxedAccountMed25519',
    'XdrSignedPayload',
    'XdrSignerKey',
    'KeysConfig',
    'DEFAULT_CONFIG'
]
