class KeysError(Exception):
    """Base exception for key management errors"""
    pass

class ConfigurationError(KeysError):
    """Invalid configuration values"""
    pass

class StrKeyError(KeysError, ValueError):
    """StrKey encoding or decoding errors"""
    pass

class MalformedInputError(StrKeyError):
    """Input is not canonical unpadded base32"""
    pass

class InvalidLengthError(StrKeyError):
    """Decoded payload length does not fit the version byte"""
    pass

class ChecksumMismatchError(StrKeyError):
    """CRC-16 checksum verification failed"""
    pass

class UnknownVersionByteError(StrKeyError):
    """Leading byte is not a known StrKey version byte"""
    pass

class UnexpectedVersionByteError(UnknownVersionByteError):
    """Version byte is known but belongs to another key family"""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected version byte {expected!r}, got {actual!r}")

class CryptoError(KeysError):
    """Cryptography-related errors"""
    pass

class MissingPrivateKeyError(CryptoError):
    """Signing requested on a key pair that only holds a public key"""

    def __init__(self, account_id: str = None):
        self.account_id = account_id
        message = "Key pair has no private key and cannot sign"
        if account_id:
            message = f"{message}: {account_id}"
        super().__init__(message)

class DerivationError(KeysError):
    """Mnemonic or hierarchical derivation errors"""
    pass
