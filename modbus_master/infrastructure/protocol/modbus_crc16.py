"""Modbus CRC-16 implementation.

CRC-16/MODBUS: reflected polynomial 0xA001, initial value 0xFFFF, no final
XOR. The result is transmitted little-endian after the RTU frame body.

Reference: Modbus over Serial Line V1.02, section 6.2.2

CRC calculation for complete frames is cached with @lru_cache: masters
poll the same handful of requests over and over.
"""

from functools import lru_cache
from typing import Iterable, List, Union

from ...domain.interfaces import IChecksum

CRC16_POLYNOMIAL = 0xA001
CRC16_INITIAL = 0xFFFF


def _build_table() -> List[int]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            if crc & 0x0001:
                crc = (crc >> 1) ^ CRC16_POLYNOMIAL
            else:
                crc >>= 1
        table.append(crc)
    return table


_CRC16_TABLE = _build_table()


def _fold(crc: int, data: Iterable[int]) -> int:
    for byte in data:
        crc = (crc >> 8) ^ _CRC16_TABLE[(crc ^ byte) & 0xFF]
    return crc


@lru_cache(maxsize=128)
def _calculate_crc16_cached(data: bytes) -> int:
    """Cached CRC-16 of a complete byte string."""
    return _fold(CRC16_INITIAL, data)


class ModbusCRC16(IChecksum):
    """Modbus CRC-16 checksum calculator.

    Works both as a one-shot calculator and as an accumulator that can be
    fed unit id, function code and data separately.

    Example:
        >>> crc = ModbusCRC16()
        >>> crc.calculate(b'\\x01\\x03\\x00\\x00\\x00\\x0a')
        52677
        >>> crc.reset().push_byte(0x01).push_byte(0x03).push_bytes(b'\\x00\\x00\\x00\\x0a').value()
        52677
    """

    def __init__(self) -> None:
        self._crc = CRC16_INITIAL

    def reset(self) -> "ModbusCRC16":
        self._crc = CRC16_INITIAL
        return self

    def push_bytes(self, data: Iterable[int]) -> "ModbusCRC16":
        self._crc = _fold(self._crc, data)
        return self

    def value(self) -> int:
        return self._crc

    def calculate(self, data: Union[bytes, bytearray]) -> int:
        """Calculate Modbus CRC-16 checksum with caching.

        Args:
            data: Byte data to calculate CRC for (bytes or bytearray)

        Returns:
            CRC checksum as 16-bit unsigned integer (0-65535)

        Raises:
            ValueError: If data is None (empty data is valid, returns 0xFFFF)

        Note:
            Bytearray is converted to bytes for cache support; transports
            hand back bytearray buffers, which are not hashable.
        """
        if data is None:
            raise ValueError("Data cannot be None")
        if isinstance(data, bytearray):
            data = bytes(data)
        return _calculate_crc16_cached(data)
