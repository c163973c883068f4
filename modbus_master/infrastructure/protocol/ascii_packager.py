"""Modbus ASCII packager.

Frame layout::

    +-------+---------+----------+----------------+-------+--------+
    | Start | Address | Function |      Data      |  LRC  |  End   |
    | ":"   | 2 chars | 2 chars  | 0 to 2x252 ch. | 2 ch. | "\\r\\n" |
    +-------+---------+----------+----------------+-------+--------+

Every byte between the delimiters is sent as two uppercase hex characters.
The LRC covers address, function and data (binary values, not the hex).
"""

from __future__ import annotations

import logging

from ...const import (
    ASCII_END,
    ASCII_MAX_SIZE,
    ASCII_MIN_RESPONSE_SIZE,
    ASCII_MIN_SIZE,
    ASCII_START,
)
from ...domain.exceptions import FramingError
from ...domain.interfaces import IPackager, ITransport
from ...domain.value_objects import Framing, ProtocolDataUnit
from .framing import log_response, read_hex, send_request, write_hex
from .modbus_lrc import ModbusLRC


class AsciiPackager(IPackager):
    """Packager for Modbus ASCII framing.

    Example:
        >>> packager = AsciiPackager()
        >>> packager.encode(0x11, ProtocolDataUnit(0x03, bytes.fromhex("006B0003")))
        b':1103006B00037E\\r\\n'
    """

    framing = Framing.ASCII

    def encode(self, unit_id: int, pdu: ProtocolDataUnit) -> bytes:
        lrc = ModbusLRC()
        lrc.push_byte(unit_id).push_byte(pdu.function_code).push_bytes(pdu.data)
        body = bytes([unit_id, pdu.function_code]) + pdu.data + bytes([lrc.value()])
        return ASCII_START + write_hex(body) + ASCII_END

    def verify(self, request_adu: bytes, response_adu: bytes) -> None:
        """Verify response length, delimiters and unit id."""
        length = len(response_adu)
        # Start + address + function + LRC + end
        if length < ASCII_MIN_RESPONSE_SIZE:
            raise FramingError(
                f"modbus: response length '{length}' does not meet minimum "
                f"'{ASCII_MIN_RESPONSE_SIZE}'",
                expected=ASCII_MIN_RESPONSE_SIZE,
                actual=length,
            )
        # Length excluding the start marker must be even
        if length % 2 != 1:
            raise FramingError(
                f"modbus: response length '{length - 1}' is not an even number",
                actual=length,
            )
        if response_adu[: len(ASCII_START)] != ASCII_START:
            raise FramingError(
                f"modbus: response frame {response_adu[:len(ASCII_START)]!r}... "
                f"is not started with {ASCII_START!r}",
                expected=ASCII_START,
                actual=response_adu[: len(ASCII_START)],
            )
        if response_adu[-len(ASCII_END):] != ASCII_END:
            raise FramingError(
                f"modbus: response frame ...{response_adu[-len(ASCII_END):]!r} "
                f"is not ended with {ASCII_END!r}",
                expected=ASCII_END,
                actual=response_adu[-len(ASCII_END):],
            )

        response_unit = read_hex(response_adu[1:3])[0]
        request_unit = read_hex(request_adu[1:3])[0]
        if response_unit != request_unit:
            raise FramingError(
                f"modbus: response slave id '{response_unit}' does not match "
                f"request '{request_unit}'",
                expected=request_unit,
                actual=response_unit,
            )

    def decode(self, adu: bytes) -> ProtocolDataUnit:
        """Extract the PDU and check the LRC."""
        body = read_hex(adu[len(ASCII_START):-len(ASCII_END)])
        if len(body) < 3:
            raise FramingError(
                f"modbus: response body of {len(body)} bytes is too short",
                expected=3,
                actual=len(body),
            )

        unit_id, function_code = body[0], body[1]
        data, received = body[2:-1], body[-1]

        lrc = ModbusLRC()
        lrc.push_byte(unit_id).push_byte(function_code).push_bytes(data)
        if received != lrc.value():
            raise FramingError(
                f"modbus: response lrc '{received:#04x}' does not match "
                f"expected '{lrc.value():#04x}'",
                expected=lrc.value(),
                actual=received,
            )

        return ProtocolDataUnit(function_code, data)

    def exchange(
        self,
        transport: ITransport,
        request_adu: bytes,
        timeout: float,
        logger: logging.Logger,
    ) -> bytes:
        """Read until the end delimiter, the size cap, or end of stream."""
        send_request(transport, request_adu, timeout, logger)

        buffer = bytearray()
        while len(buffer) < ASCII_MAX_SIZE:
            chunk = transport.read(ASCII_MAX_SIZE - len(buffer))
            if not chunk:
                break
            buffer += chunk
            if len(buffer) > ASCII_MIN_SIZE and buffer.endswith(ASCII_END):
                break

        response_adu = bytes(buffer)
        log_response(logger, response_adu)
        return response_adu
