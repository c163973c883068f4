"""Addressable object views over a ModbusClient.

Each view borrows its client and delegates to the raw operations. Views
are composed from the capability protocols in
``domain.interfaces.object_capabilities`` rather than a class hierarchy:

    DiscreteInput     Testable
    Coil              Testable, Settable
    InputRegister     Readable
    HoldingRegister   Readable, Writable
    InputRegisters    Readable, TextReadable
    HoldingRegisters  Readable, Writable, TextReadable, TextWritable
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence

from ...domain.exceptions import InvalidArgumentError
from ...domain.helpers import text_to_words, words_to_text

if TYPE_CHECKING:
    from .modbus_client import ModbusClient


@dataclass(frozen=True)
class DiscreteInput:
    """Read-only bit."""

    client: "ModbusClient"
    address: int

    def test(self) -> bool:
        return self.client.read_discrete_inputs(self.address, 1)[0]


@dataclass(frozen=True)
class Coil:
    """Read-write bit."""

    client: "ModbusClient"
    address: int

    def test(self) -> bool:
        return self.client.read_coils(self.address, 1)[0]

    def set(self) -> None:
        self.client.write_single_coil(self.address, True)

    def clear(self) -> None:
        self.client.write_single_coil(self.address, False)

    def toggle(self) -> None:
        """Read the coil, then write the opposite state.

        Two separate exchanges: not atomic, a concurrent writer between
        the read and the write is not detected.
        """
        if self.test():
            self.clear()
        else:
            self.set()


@dataclass(frozen=True)
class InputRegister:
    client: "ModbusClient"
    address: int

    def read(self) -> int:
        return self.client.read_input_registers(self.address, 1)[0]


@dataclass(frozen=True)
class HoldingRegister:
    client: "ModbusClient"
    address: int

    def read(self) -> int:
        return self.client.read_holding_registers(self.address, 1)[0]

    def write(self, value: int) -> None:
        self.client.write_single_register(self.address, value)


@dataclass(frozen=True)
class InputRegisters:
    """Read-only block of ``count`` registers."""

    client: "ModbusClient"
    address: int
    count: int

    def read(self) -> List[int]:
        return self.client.read_input_registers(self.address, self.count)

    def read_string(self) -> str:
        """Read the block as big-endian bytes decoded as UTF-8.

        Trailing zero bytes are dropped.
        """
        return words_to_text(self.read())


@dataclass(frozen=True)
class HoldingRegisters:
    """Read-write block of ``count`` registers."""

    client: "ModbusClient"
    address: int
    count: int

    def read(self) -> List[int]:
        return self.client.read_holding_registers(self.address, self.count)

    def read_string(self) -> str:
        return words_to_text(self.read())

    def write(self, values: Sequence[int]) -> None:
        """Write ``values`` from the start of the block.

        Raises:
            InvalidArgumentError: If more values than the block holds are given
        """
        if len(values) > self.count:
            raise InvalidArgumentError(
                f"modbus: invalid length of words '{len(values)}', "
                f"block holds '{self.count}'"
            )
        self.client.write_multiple_registers(self.address, values)

    def write_string(self, text: str) -> None:
        """Write ``text`` as UTF-8, zero-padding the final word if needed."""
        self.write(text_to_words(text))
