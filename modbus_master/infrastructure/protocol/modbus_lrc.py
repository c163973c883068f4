"""Modbus LRC implementation.

Longitudinal Redundancy Check used by ASCII framing: the 8-bit sum of
unit id, function code and data (carries discarded), negated in two's
complement. Start and end delimiters are excluded.
"""

from typing import Iterable

from ...domain.interfaces import IChecksum


class ModbusLRC(IChecksum):
    """8-bit longitudinal checksum accumulator.

    Example:
        >>> lrc = ModbusLRC()
        >>> lrc.calculate(bytes([0x11, 0x03, 0x00, 0x6B, 0x00, 0x03]))
        126
    """

    def __init__(self) -> None:
        self._sum = 0

    def reset(self) -> "ModbusLRC":
        self._sum = 0
        return self

    def push_bytes(self, data: Iterable[int]) -> "ModbusLRC":
        for byte in data:
            self._sum = (self._sum + byte) & 0xFF
        return self

    def value(self) -> int:
        return -self._sum & 0xFF
