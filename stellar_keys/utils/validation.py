import re
from typing import Optional

from stellar_keys.core.exceptions import DerivationError
from stellar_keys.core.key_types import VersionByte
from stellar_keys.crypto.strkey import StrKey
from stellar_keys.crypto import derivation

def validate_address_format(address: str, version: Optional[VersionByte] = None) -> bool:
    """Validate any StrKey string, or one of a given family"""
    if not isinstance(address, str) or not address:
        return False

    if version is None:
        version = VersionByte.from_prefix(address[0])
        if version is None:
            return False

    return StrKey.is_valid(version, address)

def validate_account_id(account_id: str) -> bool:
    return StrKey.is_valid_account_id(account_id)

def validate_muxed_account(account_id: str) -> bool:
    """Accept a G... id or an M... muxed id"""
    return StrKey.is_valid_account_id(account_id) or StrKey.is_valid_muxed_account_id(account_id)

def validate_secret_seed(seed: str) -> bool:
    return StrKey.is_valid_seed(seed)

def validate_private_key(private_key: str, key_type: str = "hex") -> bool:
    """Validate private key format"""
    if not isinstance(private_key, str):
        return False

    if key_type == "hex":
        if private_key.startswith('0x'):
            private_key = private_key[2:]
        return re.match(r'^[0-9a-fA-F]{64}$', private_key) is not None

    elif key_type == "seed":
        return validate_secret_seed(private_key)

    else:
        return False

def validate_mnemonic(mnemonic_phrase: str, language: Optional[str] = None) -> bool:
    """Validate BIP39 mnemonic phrase"""
    if not isinstance(mnemonic_phrase, str):
        return False
    return derivation.validate_mnemonic(mnemonic_phrase, language)

def validate_derivation_path(path: str) -> bool:
    """Validate a hardened-only SLIP-0010 derivation path"""
    if not isinstance(path, str) or not re.match(r"^m(/\d+')*$", path):
        return False

    try:
        indices = derivation.parse_derivation_path(path)
    except DerivationError:
        return False
    return all(index < derivation.HARDENED_MINIMUM_INDEX for index in indices)

def validate_muxed_id(muxed_id: int) -> bool:
    return isinstance(muxed_id, int) and not isinstance(muxed_id, bool) and 0 <= muxed_id < 2 ** 64
