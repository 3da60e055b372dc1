#stellar_keys/core/config.py
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

from stellar_keys.core.exceptions import ConfigurationError
from stellar_keys.utils.logging import LogLevel

SUPPORTED_STRENGTHS = (128, 160, 192, 224, 256)
SUPPORTED_LANGUAGES = (
    "english", "chinese_simplified", "chinese_traditional", "french",
    "italian", "japanese", "korean", "spanish", "czech", "portuguese",
)

@dataclass
class KeysConfig:
    """Key management configuration"""
    mnemonic_language: str = "english"
    mnemonic_strength: int = 256
    purpose: int = 44
    coin_type: int = 148
    verify_mnemonic_checksum: bool = True
    log_level: LogLevel = LogLevel.INFO
    mask_secrets: bool = True

    def __post_init__(self):
        """Validate values after object creation"""
        # Values loaded from plain mappings arrive as strings
        self._validate_enum_types()

        if self.mnemonic_language not in SUPPORTED_LANGUAGES:
            raise ConfigurationError(f"Unsupported mnemonic language: {self.mnemonic_language}")

        if self.mnemonic_strength not in SUPPORTED_STRENGTHS:
            raise ConfigurationError(
                f"Mnemonic strength must be one of {SUPPORTED_STRENGTHS}, got {self.mnemonic_strength}"
            )

        for name in ("purpose", "coin_type"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value < 0x80000000:
                raise ConfigurationError(f"{name} must be a non-hardened index, got {value!r}")

    def _validate_enum_types(self):
        if isinstance(self.log_level, str):
            try:
                self.log_level = LogLevel[self.log_level.upper()]
            except KeyError:
                raise ConfigurationError(f"Unknown log level: {self.log_level}")

    @property
    def word_count(self) -> int:
        return (self.mnemonic_strength + self.mnemonic_strength // 32) // 11

    def derivation_path(self, account_index: int) -> str:
        """Get the SEP-0005 derivation path for an account index"""
        if account_index < 0:
            raise ConfigurationError(f"Account index must not be negative: {account_index}")
        return f"m/{self.purpose}'/{self.coin_type}'/{account_index}'"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['log_level'] = self.log_level.value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'KeysConfig':
        """Build a config from a mapping, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

DEFAULT_CONFIG = KeysConfig()
