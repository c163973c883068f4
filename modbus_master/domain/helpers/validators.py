"""Argument validation helpers.

Every data operation validates its arguments against the protocol's hard
limits before building a request. All validators raise
InvalidArgumentError (subclass of ValueError).
"""

from typing import Tuple

from ...const import MAX_ADDRESS, MAX_REGISTER_VALUE, MAX_UNIT_ID
from ..exceptions import InvalidArgumentError


def validate_address(address: int, name: str = "address") -> int:
    """Validate a data address is in range (0x0000-0xFFFF).

    Args:
        address: Address to validate
        name: Parameter name for error message

    Returns:
        Validated address

    Raises:
        InvalidArgumentError: If address is not an int or out of range

    Examples:
        >>> validate_address(0x006B)
        107
    """
    if not isinstance(address, int) or isinstance(address, bool):
        raise InvalidArgumentError(
            f"modbus: {name} must be integer, got {type(address).__name__}"
        )

    if not 0 <= address <= MAX_ADDRESS:
        raise InvalidArgumentError(
            f"modbus: {name} '{address}' must be between '0' and '{MAX_ADDRESS}'"
        )

    return address


def validate_register_value(value: int, name: str = "value") -> int:
    """Validate a 16-bit register value (0-65535).

    Raises:
        InvalidArgumentError: If value is not an int or out of range
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(
            f"modbus: {name} must be integer, got {type(value).__name__}"
        )

    if not 0 <= value <= MAX_REGISTER_VALUE:
        raise InvalidArgumentError(
            f"modbus: {name} '{value}' must be between '0' and '{MAX_REGISTER_VALUE}'"
        )

    return value


def validate_quantity(
    quantity: int, limits: Tuple[int, int], name: str = "quantity"
) -> int:
    """Validate a quantity against an inclusive (min, max) pair.

    Args:
        quantity: Number of bits or registers
        limits: Inclusive (minimum, maximum) for the operation
        name: Parameter name for error message

    Returns:
        Validated quantity

    Raises:
        InvalidArgumentError: If quantity is outside limits

    Examples:
        >>> validate_quantity(3, (1, 125))
        3
        >>> validate_quantity(126, (1, 125))  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        InvalidArgumentError: modbus: quantity '126' must be between '1' and '125'
    """
    minimum, maximum = limits
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise InvalidArgumentError(
            f"modbus: {name} must be integer, got {type(quantity).__name__}"
        )

    if not minimum <= quantity <= maximum:
        raise InvalidArgumentError(
            f"modbus: {name} '{quantity}' must be between '{minimum}' and '{maximum}'"
        )

    return quantity


def validate_unit_id(unit_id: int) -> int:
    """Validate a unit/slave identifier (0-255)."""
    if not isinstance(unit_id, int) or isinstance(unit_id, bool):
        raise InvalidArgumentError(
            f"modbus: unit id must be integer, got {type(unit_id).__name__}"
        )

    if not 0 <= unit_id <= MAX_UNIT_ID:
        raise InvalidArgumentError(
            f"modbus: unit id '{unit_id}' must be between '0' and '{MAX_UNIT_ID}'"
        )

    return unit_id


def validate_timeout(timeout: float) -> float:
    """Validate a timeout in seconds (>= 0, 0 disables it)."""
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise InvalidArgumentError(
            f"modbus: timeout must be a number, got {type(timeout).__name__}"
        )

    if timeout < 0:
        raise InvalidArgumentError(f"modbus: timeout '{timeout}' must not be negative")

    return float(timeout)
