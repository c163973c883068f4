"""Framing variants supported by the master."""

from enum import Enum


class Framing(str, Enum):
    """Closed set of wire framings.

    ASCII and RTU are serial line framings (they can also be tunnelled over
    a TCP byte stream); TCP is the MBAP length-prefixed framing.
    """

    ASCII = "ascii"
    RTU = "rtu"
    TCP = "tcp"
