# stellar_keys/crypto/derivation.py
"""BIP-39 mnemonics and SLIP-0010 Ed25519 derivation (SEP-0005).

Every function here is pure: seeds and mnemonics go in, new bytes come out.
"""
import hmac
import hashlib
import struct
import threading
from dataclasses import dataclass, field
from typing import List, Optional
from mnemonic import Mnemonic

from stellar_keys.core.config import KeysConfig, DEFAULT_CONFIG
from stellar_keys.core.exceptions import DerivationError
from stellar_keys.utils.logging import logger

HARDENED_MINIMUM_INDEX = 0x80000000
MASTER_HMAC_KEY = b'ed25519 seed'
BIP39_SEED_LENGTH = 64

_mnemonic_cache = {}
_mnemonic_lock = threading.Lock()

def _get_mnemonic(language: str) -> Mnemonic:
    """Word lists are loaded once per language"""
    with _mnemonic_lock:
        mnemo = _mnemonic_cache.get(language)
        if mnemo is None:
            try:
                mnemo = Mnemonic(language)
            except Exception as e:
                raise DerivationError(f"Unsupported mnemonic language {language!r}: {e}") from e
            _mnemonic_cache[language] = mnemo
        return mnemo

@dataclass(frozen=True)
class HDNode:
    """SLIP-0010 Ed25519 node: 32-byte key plus 32-byte chain code"""
    private_key: bytes = field(repr=False)
    chain_code: bytes = field(repr=False)

    def __post_init__(self):
        if len(self.private_key) != 32:
            raise DerivationError("Private key must be 32 bytes")
        if len(self.chain_code) != 32:
            raise DerivationError("Chain code must be 32 bytes")

    @classmethod
    def new_master_node(cls, seed: bytes) -> 'HDNode':
        digest = hmac.new(MASTER_HMAC_KEY, bytes(seed), hashlib.sha512).digest()
        return cls(private_key=digest[:32], chain_code=digest[32:])

    def derive(self, index: int) -> 'HDNode':
        """Derive the hardened child `index'`; only hardened derivation exists for Ed25519"""
        if not 0 <= index < HARDENED_MINIMUM_INDEX:
            raise DerivationError(f"Index out of range for hardened derivation: {index}")

        data = b'\x00' + self.private_key + struct.pack('>I', index + HARDENED_MINIMUM_INDEX)
        digest = hmac.new(self.chain_code, data, hashlib.sha512).digest()
        return HDNode(private_key=digest[:32], chain_code=digest[32:])

    def derive_path(self, path: str) -> 'HDNode':
        node = self
        for index in parse_derivation_path(path):
            node = node.derive(index)
        return node

def parse_derivation_path(path: str) -> List[int]:
    """Parse "m/44'/148'/0'" into [44, 148, 0]; every segment must be hardened"""
    parts = path.split('/')
    if parts[0].lower() != 'm':
        raise DerivationError('Path must start with "m"')

    indices = []
    for part in parts[1:]:
        if not part.endswith("'"):
            raise DerivationError(f"Path can only contain hardened indexes: {path}")
        number = part[:-1]
        if not number.isdigit():
            raise DerivationError(f"Path must be numeric: {path}")
        indices.append(int(number))
    return indices

def generate_mnemonic(strength: Optional[int] = None, language: Optional[str] = None,
                      config: KeysConfig = DEFAULT_CONFIG) -> str:
    """Generate a BIP-39 mnemonic phrase from CSPRNG entropy"""
    strength = strength or config.mnemonic_strength
    language = language or config.mnemonic_language
    try:
        return _get_mnemonic(language).generate(strength=strength)
    except ValueError as e:
        raise DerivationError(f"Mnemonic generation failed: {e}") from e

def word_count_to_strength(word_count: int) -> int:
    if word_count not in (12, 15, 18, 21, 24):
        raise DerivationError(f"Unsupported word count: {word_count}")
    return word_count * 32 // 3

def validate_mnemonic(words: str, language: Optional[str] = None,
                      config: KeysConfig = DEFAULT_CONFIG) -> bool:
    try:
        check_mnemonic(words, language, config)
        return True
    except DerivationError:
        return False

def check_mnemonic(words: str, language: Optional[str] = None,
                   config: KeysConfig = DEFAULT_CONFIG) -> None:
    """Raise DerivationError for unknown words, bad word counts or a bad checksum"""
    if not isinstance(words, str):
        raise TypeError("Mnemonic must be a string")

    mnemo = _get_mnemonic(language or config.mnemonic_language)
    word_list = words.split()

    if len(word_list) not in (12, 15, 18, 21, 24):
        raise DerivationError(f"Invalid mnemonic word count: {len(word_list)}")

    # Some word lists ship composed characters, input may arrive decomposed
    known = set(mnemo.wordlist) | {Mnemonic.normalize_string(w) for w in mnemo.wordlist}
    unknown = [word for word in word_list
               if word not in known and Mnemonic.normalize_string(word) not in known]
    if unknown:
        raise DerivationError(f"Mnemonic contains {len(unknown)} unknown word(s)")

    if not mnemo.check(words):
        raise DerivationError("Mnemonic checksum verification failed")

def mnemonic_to_seed(words: str, passphrase: str = "", language: Optional[str] = None,
                     config: KeysConfig = DEFAULT_CONFIG) -> bytes:
    """PBKDF2-HMAC-SHA512 (2048 rounds) over the mnemonic with salt "mnemonic" + passphrase"""
    if config.verify_mnemonic_checksum:
        check_mnemonic(words, language, config)
    return Mnemonic.to_seed(words, passphrase or "")

def derive_ed25519(seed: bytes, account_index: int, config: KeysConfig = DEFAULT_CONFIG) -> bytes:
    """Walk m/44'/148'/index' from a 64-byte BIP-39 seed, returning the Ed25519 seed"""
    if len(seed) != BIP39_SEED_LENGTH:
        raise DerivationError(f"BIP-39 seed must be {BIP39_SEED_LENGTH} bytes, got {len(seed)}")
    if not isinstance(account_index, int) or not 0 <= account_index < HARDENED_MINIMUM_INDEX:
        raise DerivationError(f"Account index out of range: {account_index!r}")

    path = config.derivation_path(account_index)
    logger.debug("Deriving account key", path=path)
    return HDNode.new_master_node(seed).derive_path(path).private_key

def bip39_seed_hex(words: str, passphrase: str = "", config: KeysConfig = DEFAULT_CONFIG) -> str:
    return mnemonic_to_seed(words, passphrase, config=config).hex()

def m44148_key_hex(words: str, passphrase: str = "", config: KeysConfig = DEFAULT_CONFIG) -> str:
    """Hex of the m/44'/148' key, the root every account index is derived from"""
    seed = mnemonic_to_seed(words, passphrase, config=config)
    node = HDNode.new_master_node(seed).derive_path(f"m/{config.purpose}'/{config.coin_type}'")
    return node.private_key.hex()
