"""Modbus exception codes."""

from enum import IntEnum


class ExceptionCode(IntEnum):
    """Exception codes returned by a device in an exception response."""

    ILLEGAL_FUNCTION = 0x01
    ILLEGAL_DATA_ADDRESS = 0x02
    ILLEGAL_DATA_VALUE = 0x03
    SLAVE_DEVICE_FAILURE = 0x04
    ACKNOWLEDGE = 0x05
    SLAVE_DEVICE_BUSY = 0x06
    MEMORY_PARITY_ERROR = 0x08
    GATEWAY_PATH_UNAVAILABLE = 0x0A
    GATEWAY_TARGET_NO_RESPONSE = 0x0B


EXCEPTION_NAMES = {
    ExceptionCode.ILLEGAL_FUNCTION: "illegal function",
    ExceptionCode.ILLEGAL_DATA_ADDRESS: "illegal data address",
    ExceptionCode.ILLEGAL_DATA_VALUE: "illegal data value",
    ExceptionCode.SLAVE_DEVICE_FAILURE: "slave device failure",
    ExceptionCode.ACKNOWLEDGE: "acknowledge",
    ExceptionCode.SLAVE_DEVICE_BUSY: "slave device busy",
    ExceptionCode.MEMORY_PARITY_ERROR: "memory parity error",
    ExceptionCode.GATEWAY_PATH_UNAVAILABLE: "gateway path unavailable",
    ExceptionCode.GATEWAY_TARGET_NO_RESPONSE: "gateway target device failed to respond",
}


def exception_name(code: int) -> str:
    """Return the human-readable name for an exception code.

    Unrecognized codes are reported as "unknown".

    Examples:
        >>> exception_name(0x02)
        'illegal data address'
        >>> exception_name(0x42)
        'unknown'
    """
    return EXCEPTION_NAMES.get(code, "unknown")
