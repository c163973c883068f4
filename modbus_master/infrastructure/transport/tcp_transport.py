"""TCP socket transports.

TCPConnTransport wraps a socket the caller already opened and never
redials. TCPTransport dials on demand and redials after close().
"""

from __future__ import annotations

import logging
import socket
from typing import Optional, Tuple

from ...const import DEFAULT_TCP_PORT, FLUSH_CHUNK_SIZE, FLUSH_POLL_INTERVAL
from ...domain.exceptions import TransportError, TransportTimeoutError
from ...domain.interfaces import ITransport
from ..decorators import handle_transport_errors

_LOGGER = logging.getLogger(__name__)


def parse_address(address: str) -> Tuple[str, int]:
    """Split ``host:port`` (or ``[v6-host]:port``) into a socket address.

    A missing port defaults to 502.

    Examples:
        >>> parse_address("127.0.0.1:5020")
        ('127.0.0.1', 5020)
        >>> parse_address("plc.local")
        ('plc.local', 502)

    Raises:
        ValueError: If the port is not a number
    """
    if address.startswith("["):
        host, _, rest = address[1:].partition("]")
        port = rest.lstrip(":")
    elif address.count(":") == 1:
        host, _, port = address.partition(":")
    else:
        host, port = address, ""

    if not port:
        return host, DEFAULT_TCP_PORT
    if not port.isdigit():
        raise ValueError(f"Invalid port in address {address!r}")
    return host, int(port)


class TCPConnTransport(ITransport):
    """Transport over a caller-supplied connected socket.

    Once closed it cannot reconnect.

    Example:
        >>> sock = socket.create_connection(("127.0.0.1", 502))
        >>> transport = TCPConnTransport(sock)
        >>> transport.write(request)
        >>> response = transport.read(260)
        >>> transport.close()
    """

    def __init__(self, sock: Optional[socket.socket] = None) -> None:
        self._sock = sock
        self._timeout: Optional[float] = None

    @property
    def is_connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        if self._sock is None:
            raise TransportError("connection was closed, not support to reconnect")

    @handle_transport_errors("TCP read")
    def read(self, size: int) -> bytes:
        sock = self._require_socket()
        try:
            return sock.recv(size)
        except socket.timeout as err:
            raise TransportTimeoutError(f"read tcp: i/o timeout after {self._timeout}s") from err
        except OSError as err:
            raise TransportError(f"read tcp: {err}") from err

    @handle_transport_errors("TCP write")
    def write(self, data: bytes) -> int:
        sock = self._require_socket()
        try:
            sock.sendall(data)
        except socket.timeout as err:
            raise TransportTimeoutError(f"write tcp: i/o timeout after {self._timeout}s") from err
        except OSError as err:
            raise TransportError(f"write tcp: {err}") from err
        return len(data)

    def close(self) -> None:
        if self._sock is None:
            return
        sock, self._sock = self._sock, None
        try:
            sock.close()
        except OSError as err:
            raise TransportError(f"close tcp: {err}") from err
        _LOGGER.debug("TCP transport closed")

    def set_read_timeout(self, timeout: float) -> None:
        self._timeout = timeout if timeout > 0 else None
        if self._sock is not None:
            self._sock.settimeout(self._timeout)

    def flush(self) -> None:
        """Drain bytes already received, polling for at most 1 ms per read."""
        sock = self._require_socket()
        sock.settimeout(FLUSH_POLL_INTERVAL)
        drained = 0
        try:
            while True:
                chunk = sock.recv(FLUSH_CHUNK_SIZE)
                if not chunk:
                    break
                drained += len(chunk)
        except socket.timeout:
            pass
        except OSError as err:
            raise TransportError(f"flush tcp: {err}") from err
        finally:
            sock.settimeout(self._timeout)

        if drained:
            _LOGGER.debug("Flushed %d stale bytes", drained)

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("tcp transport is not connected")
        return self._sock


class TCPTransport(TCPConnTransport):
    """Transport that dials ``address`` on demand.

    Attributes:
        address: Remote ``host:port``
        connect_timeout: Dial timeout in seconds
    """

    def __init__(self, address: str, connect_timeout: float) -> None:
        super().__init__()
        self.address = address
        self.connect_timeout = connect_timeout

    @handle_transport_errors("TCP connect")
    def connect(self) -> None:
        if self._sock is not None:
            return

        host, port = parse_address(self.address)
        try:
            sock = socket.create_connection(
                (host, port), timeout=self.connect_timeout or None
            )
        except socket.timeout as err:
            raise TransportTimeoutError(
                f"dial tcp {self.address}: i/o timeout after {self.connect_timeout}s"
            ) from err
        except OSError as err:
            raise TransportError(f"dial tcp {self.address}: {err}") from err

        sock.settimeout(self._timeout)
        self._sock = sock
        _LOGGER.info("TCP transport connected to %s", self.address)
