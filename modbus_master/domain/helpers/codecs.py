"""Word and bit codecs for PDU payloads.

Modbus carries 16-bit values big-endian and packs bit fields least
significant bit first within each byte.
"""

import struct
from typing import List, Sequence


def data_block(*values: int) -> bytes:
    """Pack 16-bit values big-endian.

    Examples:
        >>> data_block(0x006B, 0x0003).hex()
        '006b0003'
    """
    return struct.pack(f">{len(values)}H", *values)


def data_block_suffix(suffix: bytes, *values: int) -> bytes:
    """Pack 16-bit values, then a byte count and ``suffix`` itself.

    Examples:
        >>> data_block_suffix(b"\\x00\\x0a\\x01\\x02", 0x0001, 0x0002).hex()
        '0001000204000a0102'
    """
    return data_block(*values) + bytes([len(suffix)]) + bytes(suffix)


def bytes_to_words(data: bytes) -> List[int]:
    """Unpack big-endian 16-bit words.

    An odd trailing byte becomes a word of its own value.

    Examples:
        >>> bytes_to_words(b"\\x02\\x2b\\x00\\x00\\x00\\x64")
        [555, 0, 100]
    """
    count = len(data) // 2
    words = list(struct.unpack(f">{count}H", data[: count * 2]))
    if len(data) % 2:
        words.append(data[-1])
    return words


def words_to_bytes(words: Sequence[int]) -> bytes:
    """Pack 16-bit words big-endian."""
    return struct.pack(f">{len(words)}H", *words)


def pack_bits(bits: Sequence[bool]) -> bytes:
    """Pack booleans into bytes, least significant bit first.

    Examples:
        >>> pack_bits([True, False, True, True, False, False, True, True, True, False]).hex()
        'cd01'
    """
    packed = bytearray((len(bits) + 7) // 8)
    for index, bit in enumerate(bits):
        if bit:
            packed[index >> 3] |= 1 << (index & 7)
    return bytes(packed)


def unpack_bits(data: bytes, quantity: int) -> List[bool]:
    """Unpack ``quantity`` booleans from a packed bit field.

    Pad bits beyond ``quantity`` are discarded without inspection.
    """
    return [bool(data[i >> 3] & (1 << (i & 7))) for i in range(quantity)]


def text_to_words(text: str) -> List[int]:
    """Encode text as UTF-8 and pack it into 16-bit words.

    An odd byte count is padded with a trailing zero byte.

    Examples:
        >>> text_to_words("ABC")
        [16706, 17152]
    """
    raw = text.encode("utf-8")
    if len(raw) % 2:
        raw += b"\x00"
    return bytes_to_words(raw)


def words_to_text(words: Sequence[int]) -> str:
    """Reinterpret words as big-endian bytes, dropping trailing zero bytes."""
    return words_to_bytes(words).rstrip(b"\x00").decode("utf-8", errors="replace")
