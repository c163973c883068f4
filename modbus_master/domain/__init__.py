"""Domain layer for the Modbus master.

This layer contains:
- Interfaces: contracts for checksums, packagers, transports and object views
- Value Objects: immutable protocol primitives
- Helpers: argument validation and word/bit codecs
- Exceptions: the error taxonomy surfaced to callers

The domain layer has no dependencies outside the Python standard library.
"""
