"""Domain interfaces for the Modbus master.

Contracts that infrastructure implementations fulfil, so the orchestrator
can be driven by any packager and any transport (and by fakes in tests).
"""

from .i_checksum import IChecksum
from .i_packager import IPackager
from .i_transport import ITransport
from .object_capabilities import (
    Readable,
    Settable,
    Testable,
    TextReadable,
    TextWritable,
    Writable,
)

__all__ = [
    "IChecksum",
    "IPackager",
    "ITransport",
    "Readable",
    "Settable",
    "Testable",
    "TextReadable",
    "TextWritable",
    "Writable",
]
