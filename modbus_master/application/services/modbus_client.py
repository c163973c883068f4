"""ModbusClient: request orchestrator for one master session.

This service builds the PDU for each operation, drives a packager over a
transport, and classifies the outcome:

1. Validate arguments (no I/O on failure)
2. Encode, exchange, verify and decode under the session lock
3. Map a function code mismatch to ModbusError
4. Check the response shape and unpack typed results

Errors are never retried here; retry policy belongs to the caller.
"""

from __future__ import annotations

import logging
import struct
import threading
from typing import List, Optional, Sequence

from ...const import (
    COIL_OFF,
    COIL_ON,
    DEFAULT_TCP_TIMEOUT,
    DEFAULT_UNIT_ID,
    MAX_FIFO_COUNT,
    QUANTITY_READ_BITS,
    QUANTITY_READ_REGISTERS,
    QUANTITY_READ_WRITE_READ,
    QUANTITY_READ_WRITE_WRITE,
    QUANTITY_WRITE_COILS,
    QUANTITY_WRITE_REGISTERS,
)
from ...domain.exceptions import FramingError, InvalidArgumentError, ModbusError
from ...domain.helpers import (
    bytes_to_words,
    data_block,
    data_block_suffix,
    pack_bits,
    unpack_bits,
    validate_address,
    validate_quantity,
    validate_register_value,
    validate_timeout,
    validate_unit_id,
    words_to_bytes,
)
from ...domain.interfaces import IPackager, ITransport
from ...domain.value_objects import Framing, FunctionCode, ProtocolDataUnit
from .object_views import (
    Coil,
    DiscreteInput,
    HoldingRegister,
    HoldingRegisters,
    InputRegister,
    InputRegisters,
)

_LOGGER = logging.getLogger(__name__)

_ECHO_LABELS = {"and_mask": "AND-mask", "or_mask": "OR-mask"}


class ModbusClient:
    """Synchronous Modbus master bound to one packager and one transport.

    At most one request is in flight per client: every operation holds
    the session lock from encode to decode, and releases it on every exit
    path. Concurrent callers block until the lock is free.

    Dependencies (injected):
    - packager: ASCII, RTU or TCP framing
    - transport: byte stream the frames travel over

    Example:
        >>> client = create_tcp_client("192.168.1.10:502")
        >>> with client:
        ...     values = client.read_holding_registers(0x006B, 3)
        ...     client.set_unit_id(2).coil(0x0001).toggle()
    """

    def __init__(
        self,
        packager: IPackager,
        transport: ITransport,
        unit_id: int = DEFAULT_UNIT_ID,
        timeout: float = DEFAULT_TCP_TIMEOUT,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the client.

        Args:
            packager: Framing implementation
            transport: Byte-stream transport
            unit_id: Slave/unit identifier for subsequent requests (0-255)
            timeout: Read timeout per exchange in seconds (0 disables it)
            logger: Diagnostic sink for frame traces (default: module logger)
        """
        self._packager = packager
        self._transport = transport
        self._unit_id = validate_unit_id(unit_id)
        self._timeout = validate_timeout(timeout)
        self._logger = logger or _LOGGER
        self._lock = threading.Lock()

    # Session

    @property
    def framing(self) -> Framing:
        return self._packager.framing

    @property
    def packager(self) -> IPackager:
        return self._packager

    @property
    def transport(self) -> ITransport:
        return self._transport

    @property
    def unit_id(self) -> int:
        return self._unit_id

    @unit_id.setter
    def unit_id(self, unit_id: int) -> None:
        self._unit_id = validate_unit_id(unit_id)

    @property
    def timeout(self) -> float:
        return self._timeout

    @timeout.setter
    def timeout(self, timeout: float) -> None:
        self._timeout = validate_timeout(timeout)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_unit_id(self, unit_id: int) -> "ModbusClient":
        """Address subsequent requests to ``unit_id``. Returns self."""
        self.unit_id = unit_id
        return self

    def set_timeout(self, timeout: float) -> "ModbusClient":
        """Set the per-exchange read timeout in seconds. Returns self."""
        self.timeout = timeout
        return self

    def set_logger(self, logger: Optional[logging.Logger]) -> "ModbusClient":
        """Install the diagnostic sink; ``None`` restores the default."""
        self._logger = logger or _LOGGER
        return self

    def connect(self) -> None:
        with self._lock:
            self._transport.connect()

    def close(self) -> None:
        with self._lock:
            self._transport.close()

    def __enter__(self) -> "ModbusClient":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"ModbusClient(framing={self.framing.value}, "
            f"unit_id={self._unit_id}, timeout={self._timeout})"
        )

    # Bit access

    def read_coils(self, address: int, quantity: int) -> List[bool]:
        """Read 1-2000 contiguous coils (function code 0x01)."""
        return self._read_bits(FunctionCode.READ_COILS, address, quantity)

    def read_discrete_inputs(self, address: int, quantity: int) -> List[bool]:
        """Read 1-2000 contiguous discrete inputs (function code 0x02)."""
        return self._read_bits(FunctionCode.READ_DISCRETE_INPUTS, address, quantity)

    def write_single_coil(self, address: int, value: bool) -> None:
        """Drive one coil ON (sent as 0xFF00) or OFF (0x0000).

        Raises:
            FramingError: If the device does not echo address and value
        """
        validate_address(address)
        state = COIL_ON if value else COIL_OFF

        response = self._transceive(
            ProtocolDataUnit(FunctionCode.WRITE_SINGLE_COIL, data_block(address, state))
        )
        self._check_echo(response, address=address, value=state)

    def write_multiple_coils(self, address: int, values: Sequence[bool]) -> None:
        """Force a sequence of 1-1968 coils starting at ``address``."""
        validate_address(address)
        quantity = validate_quantity(len(values), QUANTITY_WRITE_COILS)

        response = self._transceive(
            ProtocolDataUnit(
                FunctionCode.WRITE_MULTIPLE_COILS,
                data_block_suffix(pack_bits(values), address, quantity),
            )
        )
        self._check_echo(response, address=address, quantity=quantity)

    # 16-bit access

    def read_holding_registers(self, address: int, quantity: int) -> List[int]:
        """Read 1-125 contiguous holding registers (function code 0x03)."""
        return self._read_registers(
            FunctionCode.READ_HOLDING_REGISTERS, address, quantity
        )

    def read_input_registers(self, address: int, quantity: int) -> List[int]:
        """Read 1-125 contiguous input registers (function code 0x04)."""
        return self._read_registers(FunctionCode.READ_INPUT_REGISTERS, address, quantity)

    def write_single_register(self, address: int, value: int) -> None:
        validate_address(address)
        validate_register_value(value)

        response = self._transceive(
            ProtocolDataUnit(
                FunctionCode.WRITE_SINGLE_REGISTER, data_block(address, value)
            )
        )
        self._check_echo(response, address=address, value=value)

    def write_multiple_registers(self, address: int, values: Sequence[int]) -> None:
        """Write 1-123 contiguous registers starting at ``address``."""
        validate_address(address)
        quantity = validate_quantity(len(values), QUANTITY_WRITE_REGISTERS)
        for index, value in enumerate(values):
            validate_register_value(value, name=f"values[{index}]")

        response = self._transceive(
            ProtocolDataUnit(
                FunctionCode.WRITE_MULTIPLE_REGISTERS,
                data_block_suffix(words_to_bytes(values), address, quantity),
            )
        )
        self._check_echo(response, address=address, quantity=quantity)

    def mask_write_register(self, address: int, and_mask: int, or_mask: int) -> None:
        """Modify one holding register as (current AND and_mask) OR (or_mask AND NOT and_mask)."""
        validate_address(address)
        validate_register_value(and_mask, name="AND-mask")
        validate_register_value(or_mask, name="OR-mask")

        response = self._transceive(
            ProtocolDataUnit(
                FunctionCode.MASK_WRITE_REGISTER, data_block(address, and_mask, or_mask)
            )
        )
        self._check_echo(
            response, address=address, and_mask=and_mask, or_mask=or_mask
        )

    def read_write_multiple_registers(
        self,
        read_address: int,
        read_quantity: int,
        write_address: int,
        write_quantity: int,
        write_values: bytes,
    ) -> List[int]:
        """Write a register block then read another in one transaction.

        Args:
            read_address: First register to read
            read_quantity: Registers to read (1-125)
            write_address: First register to write
            write_quantity: Registers to write (1-121)
            write_values: Big-endian register contents, 2 bytes per register

        Returns:
            The ``read_quantity`` register values read back
        """
        validate_address(read_address, name="read address")
        validate_quantity(
            read_quantity, QUANTITY_READ_WRITE_READ, name="quantity to read"
        )
        validate_address(write_address, name="write address")
        validate_quantity(
            write_quantity, QUANTITY_READ_WRITE_WRITE, name="quantity to write"
        )
        if not isinstance(write_values, (bytes, bytearray)):
            raise InvalidArgumentError(
                f"modbus: write values must be bytes, got {type(write_values).__name__}"
            )
        if len(write_values) != write_quantity * 2:
            raise InvalidArgumentError(
                f"modbus: write values length '{len(write_values)}' does not match "
                f"quantity to write '{write_quantity}' (2 bytes per register)"
            )

        response = self._transceive(
            ProtocolDataUnit(
                FunctionCode.READ_WRITE_MULTIPLE_REGISTERS,
                data_block_suffix(
                    write_values,
                    read_address,
                    read_quantity,
                    write_address,
                    write_quantity,
                ),
            )
        )
        payload = self._counted_payload(response)
        self._check_size(payload, read_quantity * 2)
        return bytes_to_words(payload)

    def read_fifo_queue(self, address: int) -> List[int]:
        """Read the FIFO queue at ``address`` (up to 31 values)."""
        validate_address(address)

        response = self._transceive(
            ProtocolDataUnit(FunctionCode.READ_FIFO_QUEUE, data_block(address))
        )
        data = response.data
        if len(data) < 4:
            raise FramingError(
                f"modbus: response data size '{len(data)}' is less than expected '4'",
                expected=4,
                actual=len(data),
            )

        byte_count, fifo_count = struct.unpack_from(">HH", data)
        if fifo_count > MAX_FIFO_COUNT:
            raise FramingError(
                f"modbus: fifo count '{fifo_count}' is greater than expected "
                f"'{MAX_FIFO_COUNT}'",
                expected=MAX_FIFO_COUNT,
                actual=fifo_count,
            )
        if byte_count != len(data) - 2:
            raise FramingError(
                f"modbus: response data size '{len(data) - 2}' does not match "
                f"count '{byte_count}'",
                expected=byte_count,
                actual=len(data) - 2,
            )

        values = data[4:]
        self._check_size(values, fifo_count * 2)
        return bytes_to_words(values)

    # Object views

    def discrete_input(self, address: int) -> DiscreteInput:
        return DiscreteInput(self, validate_address(address))

    def coil(self, address: int) -> Coil:
        return Coil(self, validate_address(address))

    def input_register(self, address: int) -> InputRegister:
        return InputRegister(self, validate_address(address))

    def input_registers(self, address: int, count: int) -> InputRegisters:
        validate_quantity(count, QUANTITY_READ_REGISTERS, name="count")
        return InputRegisters(self, validate_address(address), count)

    def holding_register(self, address: int) -> HoldingRegister:
        return HoldingRegister(self, validate_address(address))

    def holding_registers(self, address: int, count: int) -> HoldingRegisters:
        validate_quantity(count, QUANTITY_READ_REGISTERS, name="count")
        return HoldingRegisters(self, validate_address(address), count)

    # Internals

    def _transceive(self, request: ProtocolDataUnit) -> ProtocolDataUnit:
        """Run one exchange and surface device exceptions.

        Raises:
            ModbusError: If the response function code differs from the request
            FramingError: If the response is malformed or carries no data
            TransportError: If the transport fails or times out
        """
        with self._lock:
            request_adu = self._packager.encode(self._unit_id, request)
            response_adu = self._packager.exchange(
                self._transport, request_adu, self._timeout, self._logger
            )
            self._packager.verify(request_adu, response_adu)
            response = self._packager.decode(response_adu)

        if response.function_code != request.function_code:
            error = ModbusError(
                response.function_code, response.data[0] if response.data else 0
            )
            self._logger.debug("%s", error)
            raise error

        if not response.data:
            raise FramingError("modbus: response data is empty")

        return response

    def _read_bits(
        self, function_code: FunctionCode, address: int, quantity: int
    ) -> List[bool]:
        validate_address(address)
        validate_quantity(quantity, QUANTITY_READ_BITS)

        response = self._transceive(
            ProtocolDataUnit(function_code, data_block(address, quantity))
        )
        payload = self._counted_payload(response)
        if len(payload) * 8 < quantity:
            raise FramingError(
                f"modbus: response carries '{len(payload) * 8}' bits, "
                f"expected at least '{quantity}'",
                expected=quantity,
                actual=len(payload) * 8,
            )
        return unpack_bits(payload, quantity)

    def _read_registers(
        self, function_code: FunctionCode, address: int, quantity: int
    ) -> List[int]:
        validate_address(address)
        validate_quantity(quantity, QUANTITY_READ_REGISTERS)

        response = self._transceive(
            ProtocolDataUnit(function_code, data_block(address, quantity))
        )
        payload = self._counted_payload(response)
        self._check_size(payload, quantity * 2)
        return bytes_to_words(payload)

    @staticmethod
    def _counted_payload(response: ProtocolDataUnit) -> bytes:
        """Return the bytes following a 1-byte byte-count, checking the count."""
        byte_count = response.data[0]
        payload = response.data[1:]
        if byte_count != len(payload):
            raise FramingError(
                f"modbus: response data size '{len(payload)}' does not match "
                f"count '{byte_count}'",
                expected=byte_count,
                actual=len(payload),
            )
        return payload

    @staticmethod
    def _check_size(payload: bytes, expected: int) -> None:
        if len(payload) != expected:
            raise FramingError(
                f"modbus: response data size '{len(payload)}' does not match "
                f"expected '{expected}'",
                expected=expected,
                actual=len(payload),
            )

    @staticmethod
    def _check_echo(response: ProtocolDataUnit, **fields: int) -> None:
        """Check a write response echoes ``fields`` in order, 2 bytes each."""
        data = response.data
        expected_size = 2 * len(fields)
        if len(data) != expected_size:
            raise FramingError(
                f"modbus: response data size '{len(data)}' does not match "
                f"expected '{expected_size}'",
                expected=expected_size,
                actual=len(data),
            )

        echoed = struct.unpack(f">{len(fields)}H", data)
        for (name, sent), received in zip(fields.items(), echoed):
            if received != sent:
                label = _ECHO_LABELS.get(name, name)
                raise FramingError(
                    f"modbus: response {label} '{received}' does not match "
                    f"request '{sent}'",
                    expected=sent,
                    actual=received,
                )
