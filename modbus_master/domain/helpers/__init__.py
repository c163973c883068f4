"""Domain helper functions.

Pure functions for argument validation and payload encoding.
"""

from .codecs import (
    bytes_to_words,
    data_block,
    data_block_suffix,
    pack_bits,
    text_to_words,
    unpack_bits,
    words_to_bytes,
    words_to_text,
)
from .validators import (
    validate_address,
    validate_quantity,
    validate_register_value,
    validate_timeout,
    validate_unit_id,
)

__all__ = [
    "bytes_to_words",
    "data_block",
    "data_block_suffix",
    "pack_bits",
    "text_to_words",
    "unpack_bits",
    "validate_address",
    "validate_quantity",
    "validate_register_value",
    "validate_timeout",
    "validate_unit_id",
    "words_to_bytes",
    "words_to_text",
]
