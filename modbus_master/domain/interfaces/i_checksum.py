"""IChecksum interface for frame integrity algorithms."""

from abc import ABC, abstractmethod
from typing import Iterable


class IChecksum(ABC):
    """Interface for checksum accumulators.

    Serial framings protect unit id, function code and data with a
    checksum: ASCII uses an 8-bit LRC, RTU a 16-bit CRC. Accumulators are
    order-sensitive, so bytes must always be folded as unit id, then
    function code, then data.

    Example:
        >>> lrc = ModbusLRC()
        >>> lrc.reset().push_byte(0x11).push_byte(0x03).push_bytes(b"\\x00\\x6b\\x00\\x03")
        >>> assert lrc.value() == 0x7E
    """

    @abstractmethod
    def reset(self) -> "IChecksum":
        """Restore the initial accumulator value."""

    @abstractmethod
    def push_bytes(self, data: Iterable[int]) -> "IChecksum":
        """Fold a sequence of bytes into the accumulator."""

    @abstractmethod
    def value(self) -> int:
        """Return the checksum of everything folded so far."""

    def push_byte(self, byte: int) -> "IChecksum":
        """Fold a single byte into the accumulator."""
        return self.push_bytes((byte,))

    def calculate(self, data: bytes) -> int:
        """Compute the checksum of ``data`` from a fresh accumulator.

        Raises:
            ValueError: If data is None
        """
        if data is None:
            raise ValueError("Data cannot be None")
        return self.reset().push_bytes(data).value()

    def validate(self, data: bytes, expected: int) -> bool:
        """Return True if ``data`` checksums to ``expected``."""
        return self.calculate(data) == expected
