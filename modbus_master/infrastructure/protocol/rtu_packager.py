"""Modbus RTU packager.

Frame layout::

    +---------+----------+----------------+---------+
    | Address | Function |      Data      | CRC-16  |
    | 1 byte  |  1 byte  | 0 to 252 bytes | 2 bytes |
    +---------+----------+----------------+---------+

The CRC covers address, function and data and is sent low byte first.
There are no delimiters: the end of a response is inferred from its
header, from a zero-length read, or from the maximum frame size.
"""

from __future__ import annotations

import logging
import struct
from typing import Optional

from ...const import RTU_EXCEPTION_SIZE, RTU_MAX_SIZE, RTU_MIN_SIZE
from ...domain.exceptions import FramingError
from ...domain.interfaces import IPackager, ITransport
from ...domain.value_objects import Framing, FunctionCode, ProtocolDataUnit
from .framing import log_response, read_into, send_request
from .modbus_crc16 import ModbusCRC16

# Responses carrying a one-byte byte count after the function code
_BYTE_COUNT_RESPONSES = frozenset(
    {
        FunctionCode.READ_COILS,
        FunctionCode.READ_DISCRETE_INPUTS,
        FunctionCode.READ_HOLDING_REGISTERS,
        FunctionCode.READ_INPUT_REGISTERS,
        FunctionCode.READ_WRITE_MULTIPLE_REGISTERS,
    }
)

# Responses echoing address plus value/quantity
_ECHO_RESPONSES = frozenset(
    {
        FunctionCode.WRITE_SINGLE_COIL,
        FunctionCode.WRITE_SINGLE_REGISTER,
        FunctionCode.WRITE_MULTIPLE_COILS,
        FunctionCode.WRITE_MULTIPLE_REGISTERS,
    }
)


class RTUPackager(IPackager):
    """Packager for Modbus RTU framing.

    Example:
        >>> packager = RTUPackager()
        >>> packager.encode(0x11, ProtocolDataUnit(0x03, bytes.fromhex("006B0003"))).hex()
        '1103006b00037687'
    """

    framing = Framing.RTU

    def __init__(self) -> None:
        self._crc = ModbusCRC16()

    def encode(self, unit_id: int, pdu: ProtocolDataUnit) -> bytes:
        body = bytes([unit_id, pdu.function_code]) + pdu.data
        return body + struct.pack("<H", self._crc.calculate(body))

    def verify(self, request_adu: bytes, response_adu: bytes) -> None:
        """Verify response length and unit id."""
        length = len(response_adu)
        if length < RTU_MIN_SIZE:
            raise FramingError(
                f"modbus: response length '{length}' does not meet minimum "
                f"'{RTU_MIN_SIZE}'",
                expected=RTU_MIN_SIZE,
                actual=length,
            )
        if response_adu[0] != request_adu[0]:
            raise FramingError(
                f"modbus: response slave id '{response_adu[0]}' does not match "
                f"request '{request_adu[0]}'",
                expected=request_adu[0],
                actual=response_adu[0],
            )

    def decode(self, adu: bytes) -> ProtocolDataUnit:
        """Extract the PDU and check the CRC."""
        if len(adu) < RTU_MIN_SIZE:
            raise FramingError(
                f"modbus: response length '{len(adu)}' does not meet minimum "
                f"'{RTU_MIN_SIZE}'",
                expected=RTU_MIN_SIZE,
                actual=len(adu),
            )

        received = struct.unpack("<H", adu[-2:])[0]
        calculated = self._crc.calculate(bytes(adu[:-2]))
        if received != calculated:
            raise FramingError(
                f"modbus: response crc '{received:#06x}' does not match "
                f"expected '{calculated:#06x}'",
                expected=calculated,
                actual=received,
            )

        return ProtocolDataUnit(adu[1], bytes(adu[2:-2]))

    def exchange(
        self,
        transport: ITransport,
        request_adu: bytes,
        timeout: float,
        logger: logging.Logger,
    ) -> bytes:
        """Read the response header, then exactly the length it announces."""
        send_request(transport, request_adu, timeout, logger)

        buffer = bytearray()
        if read_into(transport, buffer, RTU_EXCEPTION_SIZE):
            expected = self._expected_length(request_adu, buffer)
            if expected is None:
                # Unknown layout: read until the stream goes quiet
                read_into(transport, buffer, RTU_MAX_SIZE)
            else:
                read_into(transport, buffer, min(expected, RTU_MAX_SIZE))

        response_adu = bytes(buffer)
        log_response(logger, response_adu)
        return response_adu

    @staticmethod
    def _expected_length(request_adu: bytes, header: bytearray) -> Optional[int]:
        """Total response length announced by its first five bytes.

        Returns:
            Expected frame length including CRC, or None if the function
            code has no known response layout
        """
        function_code = header[1]
        if function_code != request_adu[1]:
            return RTU_EXCEPTION_SIZE
        if function_code in _BYTE_COUNT_RESPONSES:
            return 3 + header[2] + 2
        if function_code in _ECHO_RESPONSES:
            return 8
        if function_code == FunctionCode.MASK_WRITE_REGISTER:
            return 10
        if function_code == FunctionCode.READ_FIFO_QUEUE:
            return 4 + struct.unpack(">H", header[2:4])[0] + 2
        return None
