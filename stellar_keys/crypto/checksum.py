import struct

CRC16_INITIAL = 0x0000
CRC16_POLYNOMIAL = 0x1021
CRC16_MASK = 0xFFFF

def _build_table():
    table = []
    for byte in range(256):
        crc = byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ CRC16_POLYNOMIAL) & CRC16_MASK
            else:
                crc = (crc << 1) & CRC16_MASK
        table.append(crc)
    return tuple(table)

class Crc16XModem:
    """CRC-16/XMODEM: poly 0x1021, init 0x0000, no reflection, no final xor"""

    TABLE = _build_table()

    @classmethod
    def compute(cls, data: bytes) -> int:
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("Input must be bytes")

        crc = CRC16_INITIAL
        for byte in data:
            crc = ((crc << 8) & CRC16_MASK) ^ cls.TABLE[((crc >> 8) ^ byte) & 0xFF]
        return crc

    @classmethod
    def checksum_bytes(cls, data: bytes) -> bytes:
        """Checksum as two little-endian bytes, the StrKey wire order"""
        return struct.pack('<H', cls.compute(data))

    @classmethod
    def verify(cls, data: bytes, expected: bytes) -> bool:
        return cls.checksum_bytes(data) == bytes(expected)
