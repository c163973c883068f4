"""Capability protocols for addressable object views.

Uses structural typing (Protocol) rather than inheritance: a view
implements whichever capability sets apply to it, and any object with
the right methods satisfies the protocol.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Testable(Protocol):
    """A single bit that can be read."""

    def test(self) -> bool:
        ...


@runtime_checkable
class Settable(Protocol):
    """A single bit that can be driven ON/OFF."""

    def set(self) -> None:
        ...

    def clear(self) -> None:
        ...

    def toggle(self) -> None:
        ...


@runtime_checkable
class Readable(Protocol):
    """One register or a block of registers that can be read."""

    def read(self):
        ...


@runtime_checkable
class Writable(Protocol):
    """One register or a block of registers that can be written."""

    def write(self, value) -> None:
        ...


@runtime_checkable
class TextReadable(Protocol):
    """A register block that can be read as text."""

    def read_string(self) -> str:
        ...


@runtime_checkable
class TextWritable(Protocol):
    """A register block that can be written as text."""

    def write_string(self, text: str) -> None:
        ...
