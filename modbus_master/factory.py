"""Client factory functions.

Single place to wire a packager and a transport into a ModbusClient.
Dependencies are created in order:
1. Transport (socket or serial port, not yet opened)
2. Packager for the requested framing
3. Client holding both

Example:
    >>> client = create_rtu_client("/dev/ttyUSB0", baudrate=9600, parity="N")
    >>> with client:
    ...     client.set_unit_id(17).read_holding_registers(0x006B, 3)
"""

from __future__ import annotations

import logging
import socket
from typing import Optional, Union

from .application.services import ModbusClient
from .const import (
    DEFAULT_BAUDRATE,
    DEFAULT_BYTESIZE,
    DEFAULT_PARITY,
    DEFAULT_SERIAL_TIMEOUT,
    DEFAULT_STOPBITS,
    DEFAULT_TCP_TIMEOUT,
    DEFAULT_UNIT_ID,
)
from .domain.interfaces import ITransport
from .domain.value_objects import Framing
from .infrastructure.protocol import create_packager
from .infrastructure.transport import SerialTransport, TCPConnTransport, TCPTransport

_LOGGER = logging.getLogger(__name__)


def create_client(
    framing: Union[Framing, str],
    transport: ITransport,
    unit_id: int = DEFAULT_UNIT_ID,
    timeout: float = DEFAULT_TCP_TIMEOUT,
    logger: Optional[logging.Logger] = None,
) -> ModbusClient:
    """Wire ``transport`` to a fresh packager for ``framing``.

    Raises:
        ValueError: If ``framing`` names no known framing
    """
    packager = create_packager(framing)
    _LOGGER.debug(
        "Creating %s client over %s", packager.framing.value, type(transport).__name__
    )
    return ModbusClient(packager, transport, unit_id=unit_id, timeout=timeout, logger=logger)


def create_tcp_client(
    address: str, timeout: float = DEFAULT_TCP_TIMEOUT, **kwargs
) -> ModbusClient:
    """Modbus TCP client that dials ``address`` (``host:port``) on demand."""
    return create_client(Framing.TCP, TCPTransport(address, timeout), timeout=timeout, **kwargs)


def create_tcp_client_from_socket(
    sock: socket.socket, timeout: float = DEFAULT_TCP_TIMEOUT, **kwargs
) -> ModbusClient:
    """Modbus TCP client over an already connected socket.

    The client cannot reconnect once closed.
    """
    return create_client(Framing.TCP, TCPConnTransport(sock), timeout=timeout, **kwargs)


def create_rtu_over_tcp_client(
    address: str, timeout: float = DEFAULT_TCP_TIMEOUT, **kwargs
) -> ModbusClient:
    """RTU frames carried over a TCP connection (serial gateways)."""
    return create_client(Framing.RTU, TCPTransport(address, timeout), timeout=timeout, **kwargs)


def create_ascii_over_tcp_client(
    address: str, timeout: float = DEFAULT_TCP_TIMEOUT, **kwargs
) -> ModbusClient:
    """ASCII frames carried over a TCP connection."""
    return create_client(
        Framing.ASCII, TCPTransport(address, timeout), timeout=timeout, **kwargs
    )


def create_rtu_client(
    port: str,
    baudrate: int = DEFAULT_BAUDRATE,
    bytesize: int = DEFAULT_BYTESIZE,
    parity: str = DEFAULT_PARITY,
    stopbits: Union[int, float] = DEFAULT_STOPBITS,
    timeout: float = DEFAULT_SERIAL_TIMEOUT,
    **kwargs,
) -> ModbusClient:
    """Modbus RTU client on a serial port."""
    transport = SerialTransport(port, baudrate, bytesize, parity, stopbits, timeout)
    return create_client(Framing.RTU, transport, timeout=timeout, **kwargs)


def create_ascii_client(
    port: str,
    baudrate: int = DEFAULT_BAUDRATE,
    bytesize: int = DEFAULT_BYTESIZE,
    parity: str = DEFAULT_PARITY,
    stopbits: Union[int, float] = DEFAULT_STOPBITS,
    timeout: float = DEFAULT_SERIAL_TIMEOUT,
    **kwargs,
) -> ModbusClient:
    """Modbus ASCII client on a serial port.

    ASCII devices commonly use 7 data bits; pass ``bytesize=7`` for them.
    """
    transport = SerialTransport(port, baudrate, bytesize, parity, stopbits, timeout)
    return create_client(Framing.ASCII, transport, timeout=timeout, **kwargs)
