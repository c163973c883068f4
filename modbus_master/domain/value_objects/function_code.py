"""Modbus function codes."""

from enum import IntEnum


class FunctionCode(IntEnum):
    """Public function codes issued by the master."""

    # Bit access
    READ_COILS = 0x01
    READ_DISCRETE_INPUTS = 0x02
    WRITE_SINGLE_COIL = 0x05
    WRITE_MULTIPLE_COILS = 0x0F

    # 16-bit access
    READ_HOLDING_REGISTERS = 0x03
    READ_INPUT_REGISTERS = 0x04
    WRITE_SINGLE_REGISTER = 0x06
    WRITE_MULTIPLE_REGISTERS = 0x10
    MASK_WRITE_REGISTER = 0x16
    READ_WRITE_MULTIPLE_REGISTERS = 0x17
    READ_FIFO_QUEUE = 0x18


# Exception responses have the high bit set
EXCEPTION_FLAG = 0x80
