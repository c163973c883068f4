"""ProtocolDataUnit value object.

Function code plus payload, independent of the wire framing.
"""

from dataclasses import dataclass

MAX_PDU_DATA_SIZE = 252


@dataclass(frozen=True)
class ProtocolDataUnit:
    """Immutable Modbus PDU.

    Attributes:
        function_code: Single-byte function code
        data: Payload bytes (0-252 bytes)

    Example:
        >>> pdu = ProtocolDataUnit(0x03, bytes([0x00, 0x6B, 0x00, 0x03]))
        >>> pdu.to_bytes().hex()
        '03006b0003'
    """

    function_code: int
    data: bytes = b""

    def __post_init__(self) -> None:
        """Validate PDU components.

        Raises:
            ValueError: If function code or data size is out of range
            TypeError: If data is not bytes-like
        """
        if not isinstance(self.function_code, int) or not (
            0 <= self.function_code <= 0xFF
        ):
            raise ValueError(
                f"Function code must be 0-255, got {self.function_code!r}"
            )

        if not isinstance(self.data, (bytes, bytearray)):
            raise TypeError(f"Data must be bytes, got {type(self.data).__name__}")

        if len(self.data) > MAX_PDU_DATA_SIZE:
            raise ValueError(
                f"PDU data must be at most {MAX_PDU_DATA_SIZE} bytes, "
                f"got {len(self.data)}"
            )

        # Freeze bytearray input
        object.__setattr__(self, "data", bytes(self.data))

    def to_bytes(self) -> bytes:
        """Serialize as function code followed by data."""
        return bytes([self.function_code]) + self.data

    def __repr__(self) -> str:
        return (
            f"ProtocolDataUnit(function_code={self.function_code:#04x}, "
            f"data={self.data.hex()})"
        )
