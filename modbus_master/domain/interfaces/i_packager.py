"""IPackager interface for wire framings."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..value_objects import Framing, ProtocolDataUnit
from .i_transport import ITransport


class IPackager(ABC):
    """Interface for wrapping a PDU in one wire framing.

    A packager is stateless apart from the TCP transaction counter. The
    orchestrator drives it as:

        adu = packager.encode(unit_id, pdu)
        raw = packager.exchange(transport, adu, timeout, logger)
        packager.verify(adu, raw)
        response = packager.decode(raw)

    A response whose function code differs from the request is NOT a
    framing error; it passes verify/decode and the orchestrator turns it
    into a ModbusError.
    """

    framing: Framing

    @abstractmethod
    def encode(self, unit_id: int, pdu: ProtocolDataUnit) -> bytes:
        """Wrap ``pdu`` addressed to ``unit_id`` into a frame."""

    @abstractmethod
    def verify(self, request_adu: bytes, response_adu: bytes) -> None:
        """Check structural agreement between request and response.

        Raises:
            FramingError: On bad length, delimiters or identity mismatch
        """

    @abstractmethod
    def decode(self, adu: bytes) -> ProtocolDataUnit:
        """Extract the PDU from a frame and check its integrity.

        Raises:
            FramingError: On checksum or length-field mismatch
        """

    @abstractmethod
    def exchange(
        self,
        transport: ITransport,
        request_adu: bytes,
        timeout: float,
        logger: logging.Logger,
    ) -> bytes:
        """Send ``request_adu`` and read one complete response frame.

        Raises:
            TransportError: On I/O failure or timeout
            FramingError: If the response header is unusable
        """
