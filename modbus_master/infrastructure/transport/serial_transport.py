"""Serial line transport built on pyserial."""

from __future__ import annotations

import logging
from typing import Optional, Union

import serial

from ...const import (
    DEFAULT_BAUDRATE,
    DEFAULT_BYTESIZE,
    DEFAULT_PARITY,
    DEFAULT_SERIAL_TIMEOUT,
    DEFAULT_STOPBITS,
)
from ...domain.exceptions import TransportError, TransportTimeoutError
from ...domain.interfaces import ITransport
from ..decorators import handle_transport_errors

_LOGGER = logging.getLogger(__name__)


class SerialTransport(ITransport):
    """Transport over a serial port (RS-232/RS-485).

    The port is opened lazily by connect(). A read returns as soon as the
    first byte arrives, together with whatever else is already buffered.

    Example:
        >>> transport = SerialTransport("/dev/ttyUSB0", baudrate=9600, parity="N")
        >>> transport.connect()
        >>> transport.write(request)
        >>> first_bytes = transport.read(256)
    """

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        bytesize: int = DEFAULT_BYTESIZE,
        parity: str = DEFAULT_PARITY,
        stopbits: Union[int, float] = DEFAULT_STOPBITS,
        timeout: float = DEFAULT_SERIAL_TIMEOUT,
    ) -> None:
        self.port = port
        self.baudrate = baudrate
        self.bytesize = bytesize
        self.parity = parity
        self.stopbits = stopbits
        self._timeout: Optional[float] = timeout if timeout > 0 else None
        self._serial: Optional[serial.Serial] = None

    @property
    def is_connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    @handle_transport_errors("Serial open")
    def connect(self) -> None:
        if self.is_connected:
            return

        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                bytesize=self.bytesize,
                parity=self.parity,
                stopbits=self.stopbits,
                timeout=self._timeout,
            )
        except (serial.SerialException, ValueError) as err:
            raise TransportError(f"open serial {self.port}: {err}") from err

        _LOGGER.info(
            "Serial port %s opened (%d %d%s%s)",
            self.port,
            self.baudrate,
            self.bytesize,
            self.parity,
            self.stopbits,
        )

    @handle_transport_errors("Serial read")
    def read(self, size: int) -> bytes:
        port = self._require_port()
        try:
            first = port.read(1)
            pending = min(size - 1, port.in_waiting) if first else 0
            rest = port.read(pending) if pending > 0 else b""
        except serial.SerialException as err:
            raise TransportError(f"read serial {self.port}: {err}") from err

        if not first:
            raise TransportTimeoutError(
                f"read serial {self.port}: i/o timeout after {self._timeout}s"
            )
        return first + rest

    @handle_transport_errors("Serial write")
    def write(self, data: bytes) -> int:
        port = self._require_port()
        try:
            written = port.write(data)
        except serial.SerialException as err:
            raise TransportError(f"write serial {self.port}: {err}") from err
        return len(data) if written is None else written

    def close(self) -> None:
        if self._serial is None:
            return
        port, self._serial = self._serial, None
        port.close()
        _LOGGER.debug("Serial port %s closed", self.port)

    def set_read_timeout(self, timeout: float) -> None:
        self._timeout = timeout if timeout > 0 else None
        if self._serial is not None:
            self._serial.timeout = self._timeout

    def flush(self) -> None:
        """Discard anything waiting in the input buffer."""
        port = self._require_port()
        try:
            port.reset_input_buffer()
        except serial.SerialException as err:
            raise TransportError(f"flush serial {self.port}: {err}") from err

    def _require_port(self) -> serial.Serial:
        if self._serial is None:
            raise TransportError(f"serial port {self.port} is not open")
        return self._serial
