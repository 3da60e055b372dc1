# stellar_keys/crypto/base32_encoding.py
from typing import Tuple, List

from stellar_keys.core.exceptions import MalformedInputError

class Base32:
    """RFC-4648 Base32 encoding without padding characters"""

    ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ234567'
    DECODE_MAP = {char: index for index, char in enumerate(ALPHABET)}

    # Unpadded lengths that can end a quantum: 1, 2, 3, 4 or 5 bytes
    VALID_REMAINDERS = (0, 2, 4, 5, 7)

    @classmethod
    def encode(cls, data: bytes) -> str:
        """
        Encode bytes to an unpadded Base32 string
        """
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("Input must be bytes")

        encoded_chars = []
        buffer = 0
        bits_in_buffer = 0

        for byte in data:
            buffer = (buffer << 8) | byte
            bits_in_buffer += 8

            while bits_in_buffer >= 5:
                bits_in_buffer -= 5
                index = (buffer >> bits_in_buffer) & 0x1F
                encoded_chars.append(cls.ALPHABET[index])
                buffer &= (1 << bits_in_buffer) - 1

        # Left-align the remaining bits in a final character
        if bits_in_buffer > 0:
            buffer <<= (5 - bits_in_buffer)
            encoded_chars.append(cls.ALPHABET[buffer & 0x1F])

        return ''.join(encoded_chars)

    @classmethod
    def decode(cls, encoded: str) -> bytes:
        """
        Decode a Base32 string, case-insensitively.

        Raises MalformedInputError for characters outside the alphabet
        (padding and whitespace included), impossible lengths and non-zero
        leftover bits.
        """
        if not isinstance(encoded, str):
            raise TypeError("Input must be string")

        # str.upper folds some non-ASCII letters onto the alphabet
        if not encoded.isascii():
            raise MalformedInputError("Base32 input must be ASCII")
        encoded = encoded.upper()

        if len(encoded) % 8 not in cls.VALID_REMAINDERS:
            raise MalformedInputError(f"Invalid Base32 length: {len(encoded)}")

        decoded_bytes = bytearray()
        buffer = 0
        bits_in_buffer = 0

        for position, char in enumerate(encoded):
            value = cls.DECODE_MAP.get(char)
            if value is None:
                raise MalformedInputError(f"Invalid Base32 character at position {position}: {char!r}")

            buffer = (buffer << 5) | value
            bits_in_buffer += 5

            if bits_in_buffer >= 8:
                bits_in_buffer -= 8
                decoded_bytes.append((buffer >> bits_in_buffer) & 0xFF)
                buffer &= (1 << bits_in_buffer) - 1

        if buffer != 0:
            raise MalformedInputError("Invalid Base32 padding - non-zero trailing bits")

        return bytes(decoded_bytes)

    @classmethod
    def validate_encoded_string(cls, encoded: str) -> Tuple[bool, List[str]]:
        """
        Validate a Base32 string
        Returns: (is_valid, list_of_errors)
        """
        errors = []

        if not isinstance(encoded, str):
            errors.append("Input must be string")
            return False, errors

        for i, char in enumerate(encoded):
            if not char.isascii() or char.upper() not in cls.DECODE_MAP:
                errors.append(f"Invalid character at position {i}: '{char}'")

        if not errors:
            try:
                cls.decode(encoded)
            except MalformedInputError as e:
                errors.append(f"Decoding failed: {e}")

        return len(errors) == 0, errors
