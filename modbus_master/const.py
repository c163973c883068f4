"""Constants for the Modbus master.

Protocol limits come from the Modbus Application Protocol
V1.1b3; framing sizes from the serial line and TCP implementation guides.
"""

from __future__ import annotations

# Session defaults
DEFAULT_UNIT_ID = 1
DEFAULT_SERIAL_TIMEOUT = 5.0  # seconds
DEFAULT_TCP_TIMEOUT = 10.0  # seconds
DEFAULT_TCP_PORT = 502

# Serial port settings
DEFAULT_BAUDRATE = 19200
DEFAULT_BYTESIZE = 8
DEFAULT_PARITY = "E"
DEFAULT_STOPBITS = 1

# Register and value ranges
MAX_ADDRESS = 0xFFFF
MAX_REGISTER_VALUE = 0xFFFF
MAX_UNIT_ID = 0xFF

# Quantity limits (min, max) per operation
QUANTITY_READ_BITS = (1, 2000)
QUANTITY_READ_REGISTERS = (1, 125)
QUANTITY_WRITE_COILS = (1, 1968)
QUANTITY_WRITE_REGISTERS = (1, 123)
QUANTITY_READ_WRITE_READ = (1, 125)
QUANTITY_READ_WRITE_WRITE = (1, 121)
MAX_FIFO_COUNT = 31

# Coil states on the wire
COIL_ON = 0xFF00
COIL_OFF = 0x0000

# ASCII framing
ASCII_START = b":"
ASCII_END = b"\r\n"
ASCII_MIN_SIZE = 3
ASCII_MIN_RESPONSE_SIZE = ASCII_MIN_SIZE + 6
ASCII_MAX_SIZE = 513

# RTU framing
RTU_MIN_SIZE = 4
RTU_EXCEPTION_SIZE = 5
RTU_MAX_SIZE = 256

# TCP framing
TCP_PROTOCOL_IDENTIFIER = 0x0000
TCP_HEADER_SIZE = 7
TCP_MAX_LENGTH = 260

# Transport tuning
FLUSH_POLL_INTERVAL = 0.001  # seconds
FLUSH_CHUNK_SIZE = 1024
