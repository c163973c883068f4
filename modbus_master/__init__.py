"""Modbus master client over TCP, RTU and ASCII framings.

Example:
    >>> from modbus_master import create_tcp_client
    >>> with create_tcp_client("192.168.1.10:502") as client:
    ...     client.read_coils(0x0013, 0x0013)
"""

from .application.services import (
    Coil,
    DiscreteInput,
    HoldingRegister,
    HoldingRegisters,
    InputRegister,
    InputRegisters,
    ModbusClient,
)
from .config import create_client_from_config, load_client_config, validate_client_config
from .domain.exceptions import (
    FramingError,
    InvalidArgumentError,
    ModbusError,
    TransportError,
    TransportTimeoutError,
)
from .domain.value_objects import ExceptionCode, Framing, FunctionCode, ProtocolDataUnit
from .factory import (
    create_ascii_client,
    create_ascii_over_tcp_client,
    create_client,
    create_rtu_client,
    create_rtu_over_tcp_client,
    create_tcp_client,
    create_tcp_client_from_socket,
)

__version__ = "0.1.0"

__all__ = [
    "Coil",
    "DiscreteInput",
    "ExceptionCode",
    "Framing",
    "FramingError",
    "FunctionCode",
    "HoldingRegister",
    "HoldingRegisters",
    "InputRegister",
    "InputRegisters",
    "InvalidArgumentError",
    "ModbusClient",
    "ModbusError",
    "ProtocolDataUnit",
    "TransportError",
    "TransportTimeoutError",
    "create_ascii_client",
    "create_ascii_over_tcp_client",
    "create_client",
    "create_client_from_config",
    "create_rtu_client",
    "create_rtu_over_tcp_client",
    "create_tcp_client",
    "create_tcp_client_from_socket",
    "load_client_config",
    "validate_client_config",
]
