"""Exceptions raised by the Modbus master.

Four kinds of failure reach the caller of an operation:

- InvalidArgumentError: address, quantity or value outside protocol limits.
  Raised before anything touches the wire.
- TransportError / TransportTimeoutError: the byte stream failed or a read
  timed out.
- FramingError: the response is malformed, truncated, fails its checksum
  or does not agree with the request.
- ModbusError: the device answered with a well-formed exception response.

None of them are retried internally.
"""

from __future__ import annotations

from typing import Any

from .value_objects.exception_code import exception_name
from .value_objects.function_code import EXCEPTION_FLAG


class InvalidArgumentError(ValueError):
    """Caller-supplied argument outside protocol limits.

    Subclass of ValueError so plain ``except ValueError`` keeps working.

    Example:
        >>> raise InvalidArgumentError(
        ...     "modbus: quantity '0' must be between '1' and '125'"
        ... )
    """


class TransportError(OSError):
    """Connect, read, write or close failed on the underlying byte stream."""


class TransportTimeoutError(TransportError, TimeoutError):
    """A read did not complete within the configured timeout."""


class FramingError(Exception):
    """Response frame is malformed or disagrees with the request.

    Attributes:
        expected: Value the client expected (when applicable)
        actual: Value found in the response (when applicable)

    Example:
        >>> raise FramingError(
        ...     "modbus: response crc '0x1234' does not match expected '0xCDC5'",
        ...     expected=0xCDC5,
        ...     actual=0x1234,
        ... )
    """

    def __init__(
        self, message: str, expected: Any = None, actual: Any = None
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class ModbusError(Exception):
    """Exception response reported by the remote device.

    The device signals an exception by answering with a function code that
    differs from the request (the request code with the high bit set); the
    first data byte carries the exception code.

    Attributes:
        function_code: Function code as reported back by the device
        exception_code: Exception code from the first data byte (0 if absent)

    Example:
        >>> err = ModbusError(function_code=0x98, exception_code=0x01)
        >>> str(err)
        "modbus: exception '1' (illegal function), function '152'"
    """

    def __init__(self, function_code: int, exception_code: int = 0) -> None:
        self.function_code = function_code
        self.exception_code = exception_code
        super().__init__(self._format())

    @property
    def request_function_code(self) -> int:
        """Function code of the request that triggered the exception."""
        return self.function_code & ~EXCEPTION_FLAG

    @property
    def exception_name(self) -> str:
        return exception_name(self.exception_code)

    def _format(self) -> str:
        return (
            f"modbus: exception '{self.exception_code}' ({self.exception_name}), "
            f"function '{self.function_code}'"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModbusError):
            return NotImplemented
        return (self.function_code, self.exception_code) == (
            other.function_code,
            other.exception_code,
        )

    def __hash__(self) -> int:
        return hash((self.function_code, self.exception_code))
