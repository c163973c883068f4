"""Application services for the Modbus master.

ModbusClient orchestrates one request/response exchange per operation;
the object views are thin handles that delegate to it.
"""

from .modbus_client import ModbusClient
from .object_views import (
    Coil,
    DiscreteInput,
    HoldingRegister,
    HoldingRegisters,
    InputRegister,
    InputRegisters,
)

__all__ = [
    "Coil",
    "DiscreteInput",
    "HoldingRegister",
    "HoldingRegisters",
    "InputRegister",
    "InputRegisters",
    "ModbusClient",
]
