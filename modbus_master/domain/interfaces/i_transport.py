"""ITransport interface for byte-stream transports."""

from abc import ABC, abstractmethod


class ITransport(ABC):
    """Interface for the byte stream a packager exchanges frames over.

    Implementations: TCP socket (dial on demand or wrapping an existing
    socket) and serial port.

    Connection lifecycle:
        1. connect() -> opens the stream (no-op when already open)
        2. write()/read() -> one or more exchanges
        3. close() -> releases the stream

    Errors:
        TransportTimeoutError when a read times out, TransportError for any
        other I/O failure.
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the stream. Idempotent while a live connection exists.

        Raises:
            TransportError: If the stream cannot be opened
        """

    @abstractmethod
    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes.

        Blocks until at least one byte is available or the read timeout
        expires.

        Returns:
            Between 1 and ``size`` bytes; ``b""`` when the stream has ended

        Raises:
            TransportTimeoutError: If nothing arrived before the timeout
            TransportError: On any other read failure
        """

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written.

        Raises:
            TransportError: If the write fails
        """

    @abstractmethod
    def close(self) -> None:
        """Close the stream. Safe to call more than once."""

    @abstractmethod
    def set_read_timeout(self, timeout: float) -> None:
        """Set the timeout in seconds applied to subsequent reads."""

    @abstractmethod
    def flush(self) -> None:
        """Discard unread bytes already buffered.

        Must return promptly even when nothing is pending.
        """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the stream is currently open."""
