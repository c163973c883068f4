"""Test doubles for unit testing.

We primarily use Fakes because they actually implement the interface
contracts and can be reused across many tests.

Example:
    >>> from tests.doubles import FakeTransport
    >>> transport = FakeTransport()
    >>> transport.add_response(rtu_frame(0x11, bytes.fromhex("0302000A")))
"""

from .fake_transport import FakeTransport
from .frames import ascii_frame, device_reply, rtu_frame, tcp_reply

__all__ = ["FakeTransport", "ascii_frame", "device_reply", "rtu_frame", "tcp_reply"]
