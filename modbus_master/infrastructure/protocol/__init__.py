"""Modbus framing implementations.

Checksum engines and the three packagers implementing the IPackager
interface defined in the domain layer.
"""

from typing import Union

from ...domain.interfaces import IPackager
from ...domain.value_objects import Framing
from .ascii_packager import AsciiPackager
from .modbus_crc16 import ModbusCRC16
from .modbus_lrc import ModbusLRC
from .rtu_packager import RTUPackager
from .tcp_packager import TCPPackager

_PACKAGERS = {
    Framing.ASCII: AsciiPackager,
    Framing.RTU: RTUPackager,
    Framing.TCP: TCPPackager,
}


def create_packager(framing: Union[Framing, str]) -> IPackager:
    """Create a fresh packager for ``framing``.

    Raises:
        ValueError: If ``framing`` names no known framing
    """
    return _PACKAGERS[Framing(framing)]()


__all__ = [
    "AsciiPackager",
    "ModbusCRC16",
    "ModbusLRC",
    "RTUPackager",
    "TCPPackager",
    "create_packager",
]
