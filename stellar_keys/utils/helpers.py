# helpers.py
import hashlib
import secrets
from typing import Optional, Tuple

from stellar_keys.core.config import KeysConfig, DEFAULT_CONFIG
from stellar_keys.crypto import derivation
from stellar_keys.crypto.keypair import KeyPair, FullKeyPair
from stellar_keys.crypto.strkey import StrKey

def generate_mnemonic(strength: Optional[int] = None, word_count: Optional[int] = None,
                      language: Optional[str] = None, config: KeysConfig = DEFAULT_CONFIG) -> str:
    """Generate BIP39 mnemonic phrase, sized by entropy bits or by word count"""
    if word_count is not None:
        strength = derivation.word_count_to_strength(word_count)
    return derivation.generate_mnemonic(strength, language, config)

def validate_mnemonic(mnemonic_phrase: str, language: Optional[str] = None) -> bool:
    """Validate BIP39 mnemonic phrase"""
    return derivation.validate_mnemonic(mnemonic_phrase, language)

def mnemonic_to_seed(mnemonic_phrase: str, passphrase: str = "") -> bytes:
    """Convert mnemonic to seed using BIP39"""
    return derivation.mnemonic_to_seed(mnemonic_phrase, passphrase)

def create_keypair_from_mnemonic(account_index: int = 0, passphrase: str = "",
                                 config: KeysConfig = DEFAULT_CONFIG) -> Tuple[str, FullKeyPair]:
    """Create a new mnemonic and the key pair at the given account index"""
    mnemonic = derivation.generate_mnemonic(config=config)
    return mnemonic, KeyPair.from_mnemonic(mnemonic, account_index, passphrase, config)

def create_keypair_from_private_key(private_key: str) -> FullKeyPair:
    """Create a key pair from an S... secret seed or a 64-char hex private key"""
    if private_key.startswith('S'):
        return KeyPair.from_secret_seed(private_key)
    return KeyPair.from_private_key(private_key)

def generate_random_bytes(length: int = 32) -> bytes:
    """Generate cryptographically secure random bytes"""
    return secrets.token_bytes(length)

def generate_random_hex(length: int = 32) -> str:
    """Generate cryptographically secure random hex string"""
    return secrets.token_hex(length)

def hash_data(data: bytes, algorithm: str = "sha256") -> str:
    """Hash data using specified algorithm"""
    if algorithm == "sha256":
        return hashlib.sha256(data).hexdigest()
    elif algorithm == "sha512":
        return hashlib.sha512(data).hexdigest()
    else:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")

def hash_x_signer(preimage: bytes) -> str:
    """X... signer key for the SHA-256 of a preimage"""
    return StrKey.encode_sha256_hash(hashlib.sha256(preimage).digest())

def secure_compare(a: str, b: str) -> bool:
    """Constant-time string comparison to prevent timing attacks"""
    return secrets.compare_digest(a, b)
