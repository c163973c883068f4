"""Value objects for the Modbus master domain.

Immutable primitives that validate their invariants at construction.
"""

from .exception_code import EXCEPTION_NAMES, ExceptionCode, exception_name
from .framing import Framing
from .function_code import EXCEPTION_FLAG, FunctionCode
from .protocol_data_unit import MAX_PDU_DATA_SIZE, ProtocolDataUnit

__all__ = [
    "EXCEPTION_FLAG",
    "EXCEPTION_NAMES",
    "ExceptionCode",
    "Framing",
    "FunctionCode",
    "MAX_PDU_DATA_SIZE",
    "ProtocolDataUnit",
    "exception_name",
]
