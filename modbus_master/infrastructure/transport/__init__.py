"""Byte-stream transports implementing ITransport."""

from .serial_transport import SerialTransport
from .tcp_transport import TCPConnTransport, TCPTransport, parse_address

__all__ = [
    "SerialTransport",
    "TCPConnTransport",
    "TCPTransport",
    "parse_address",
]
