"""Modbus TCP packager.

Frame layout (MBAP header + PDU)::

    +----------------+-------------+---------+---------+----------+--------+
    | Transaction id | Protocol id | Length  | Unit id | Function |  Data  |
    |    2 bytes     |   2 bytes   | 2 bytes | 1 byte  |  1 byte  | 0..252 |
    +----------------+-------------+---------+---------+----------+--------+

Length counts every byte after the length field (unit id + PDU). There is
no checksum; the stream transport is assumed reliable.
"""

from __future__ import annotations

import itertools
import logging
import struct

from ...const import TCP_HEADER_SIZE, TCP_MAX_LENGTH, TCP_PROTOCOL_IDENTIFIER
from ...domain.exceptions import FramingError
from ...domain.interfaces import IPackager, ITransport
from ...domain.value_objects import Framing, ProtocolDataUnit
from .framing import log_response, read_into, send_request

_HEADER = struct.Struct(">HHHB")
_MAX_LENGTH_FIELD = TCP_MAX_LENGTH - (TCP_HEADER_SIZE - 1)


class TCPPackager(IPackager):
    """Packager for Modbus TCP (MBAP) framing.

    Each encoded request gets the next transaction identifier, starting
    at 1 and wrapping at 16 bits.

    Example:
        >>> packager = TCPPackager()
        >>> packager.encode(0x11, ProtocolDataUnit(0x03, bytes.fromhex("006B0003"))).hex()
        '0001000000061103006b0003'
    """

    framing = Framing.TCP

    def __init__(self) -> None:
        self._transaction_ids = itertools.count(1)

    def encode(self, unit_id: int, pdu: ProtocolDataUnit) -> bytes:
        transaction_id = next(self._transaction_ids) & 0xFFFF
        header = _HEADER.pack(
            transaction_id,
            TCP_PROTOCOL_IDENTIFIER,
            1 + 1 + len(pdu.data),
            unit_id,
        )
        return header + pdu.to_bytes()

    def verify(self, request_adu: bytes, response_adu: bytes) -> None:
        """Verify transaction id, protocol id and unit id echo."""
        length = len(response_adu)
        if length < TCP_HEADER_SIZE + 1:
            raise FramingError(
                f"modbus: response length '{length}' does not meet minimum "
                f"'{TCP_HEADER_SIZE + 1}'",
                expected=TCP_HEADER_SIZE + 1,
                actual=length,
            )

        response_tid, response_pid, _, response_unit = _HEADER.unpack_from(response_adu)
        request_tid, request_pid, _, request_unit = _HEADER.unpack_from(request_adu)

        if response_tid != request_tid:
            raise FramingError(
                f"modbus: response transaction id '{response_tid}' does not match "
                f"request '{request_tid}'",
                expected=request_tid,
                actual=response_tid,
            )
        if response_pid != request_pid:
            raise FramingError(
                f"modbus: response protocol id '{response_pid}' does not match "
                f"request '{request_pid}'",
                expected=request_pid,
                actual=response_pid,
            )
        if response_unit != request_unit:
            raise FramingError(
                f"modbus: response unit id '{response_unit}' does not match "
                f"request '{request_unit}'",
                expected=request_unit,
                actual=response_unit,
            )

    def decode(self, adu: bytes) -> ProtocolDataUnit:
        """Extract the PDU and check the length field."""
        if len(adu) < TCP_HEADER_SIZE:
            raise FramingError(
                f"modbus: response length '{len(adu)}' does not meet minimum "
                f"'{TCP_HEADER_SIZE}'",
                expected=TCP_HEADER_SIZE,
                actual=len(adu),
            )

        length = struct.unpack(">H", adu[4:6])[0]
        pdu_length = len(adu) - TCP_HEADER_SIZE
        if pdu_length <= 0 or pdu_length != length - 1:
            raise FramingError(
                f"modbus: length in response '{length - 1}' does not match "
                f"pdu data length '{pdu_length}'",
                expected=length - 1,
                actual=pdu_length,
            )

        return ProtocolDataUnit(adu[TCP_HEADER_SIZE], bytes(adu[TCP_HEADER_SIZE + 1 :]))

    def exchange(
        self,
        transport: ITransport,
        request_adu: bytes,
        timeout: float,
        logger: logging.Logger,
    ) -> bytes:
        """Read exactly the header, then exactly the length it announces."""
        send_request(transport, request_adu, timeout, logger)

        buffer = bytearray()
        if read_into(transport, buffer, TCP_HEADER_SIZE):
            length = struct.unpack(">H", buffer[4:6])[0]
            if length == 0:
                transport.flush()
                raise FramingError(
                    "modbus: length in response header must not be zero",
                    actual=length,
                )
            if length > _MAX_LENGTH_FIELD:
                transport.flush()
                raise FramingError(
                    f"modbus: length in response header '{length}' must not be "
                    f"greater than '{_MAX_LENGTH_FIELD}'",
                    expected=_MAX_LENGTH_FIELD,
                    actual=length,
                )
            read_into(transport, buffer, TCP_HEADER_SIZE - 1 + length)

        response_adu = bytes(buffer)
        log_response(logger, response_adu)
        return response_adu
