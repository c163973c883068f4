"""Helpers shared by the packagers.

Request submission, bounded response reads, frame tracing and the
uppercase hex codec used by ASCII framing.
"""

from __future__ import annotations

import binascii
import logging

from ...domain.exceptions import FramingError, TransportError
from ...domain.interfaces import ITransport


def send_request(
    transport: ITransport,
    request_adu: bytes,
    timeout: float,
    logger: logging.Logger,
) -> None:
    """Connect if needed, drain stale input, apply the read timeout and
    write the request.

    A timeout of 0 is pushed as well, so the transport blocks with no
    read timeout.

    Raises:
        TransportError: If the transport fails or accepts a short write
    """
    transport.connect()
    transport.flush()
    transport.set_read_timeout(timeout)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("modbus: sending %s", request_adu.hex(" "))

    written = transport.write(request_adu)
    if written != len(request_adu):
        raise TransportError(
            f"modbus: wrote {written} of {len(request_adu)} request bytes"
        )


def read_into(transport: ITransport, buffer: bytearray, target: int) -> bool:
    """Read until ``buffer`` holds ``target`` bytes.

    Returns:
        True when ``target`` was reached, False if the stream returned a
        zero-length read first
    """
    while len(buffer) < target:
        chunk = transport.read(target - len(buffer))
        if not chunk:
            return False
        buffer += chunk
    return True


def log_response(logger: logging.Logger, response_adu: bytes) -> None:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("modbus: received %s", response_adu.hex(" "))


def write_hex(data: bytes) -> bytes:
    """Encode bytes as uppercase ASCII hex, e.g. 0xA5 -> b"A5"."""
    return binascii.hexlify(data).upper()


def read_hex(data: bytes) -> bytes:
    """Decode ASCII hex (either case) into bytes.

    Raises:
        FramingError: If ``data`` contains a non-hex character or has odd length
    """
    try:
        return binascii.unhexlify(data)
    except (binascii.Error, ValueError) as err:
        raise FramingError(f"modbus: invalid hex in response {data!r}: {err}") from err
