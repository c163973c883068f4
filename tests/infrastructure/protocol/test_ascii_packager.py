"""Tests for AsciiPackager."""

import logging

import pytest

from modbus_master.domain.exceptions import FramingError
from modbus_master.domain.value_objects import ProtocolDataUnit
from modbus_master.infrastructure.protocol import AsciiPackager
from tests.doubles import FakeTransport, ascii_frame

_LOGGER = logging.getLogger(__name__)

READ_REQUEST = ProtocolDataUnit(0x03, bytes.fromhex("006B0003"))
REQUEST_FRAME = b":1103006B00037E\r\n"


@pytest.fixture
def packager():
    return AsciiPackager()


class TestAsciiEncodeDecode:
    """Test ASCII frame encoding and decoding."""

    def test_encode_published_frame(self, packager):
        assert packager.encode(0x11, READ_REQUEST) == REQUEST_FRAME

    def test_encode_uppercase_hex(self, packager):
        adu = packager.encode(0x0A, ProtocolDataUnit(0x06, bytes.fromhex("00ab00cd")))
        assert adu[1:-2] == adu[1:-2].upper()

    def test_decode_round_trip(self, packager):
        assert packager.decode(REQUEST_FRAME) == READ_REQUEST

    def test_decode_lowercase_hex(self, packager):
        assert packager.decode(b":1103006b00037e\r\n") == READ_REQUEST

    def test_decode_bad_lrc(self, packager):
        with pytest.raises(FramingError, match="lrc") as exc_info:
            packager.decode(b":1103006B00037F\r\n")
        assert exc_info.value.expected == 0x7E
        assert exc_info.value.actual == 0x7F

    def test_decode_invalid_hex(self, packager):
        with pytest.raises(FramingError, match="invalid hex"):
            packager.decode(b":11030G6B00037E\r\n")

    def test_decode_body_too_short(self, packager):
        with pytest.raises(FramingError):
            packager.decode(b":1103\r\n")


class TestAsciiVerify:
    """Test structural request/response agreement."""

    def test_verify_ok(self, packager):
        packager.verify(REQUEST_FRAME, ascii_frame(0x11, bytes.fromhex("0306022B00000064")))

    def test_verify_too_short(self, packager):
        with pytest.raises(FramingError, match="does not meet minimum '9'"):
            packager.verify(REQUEST_FRAME, b":1103\r\n")

    def test_verify_even_total_length(self, packager):
        """Verify an even total length (odd hex body) is rejected."""
        with pytest.raises(FramingError, match="not an even number"):
            packager.verify(REQUEST_FRAME, b":1103006B00037\r\n")

    def test_verify_missing_start(self, packager):
        with pytest.raises(FramingError, match="is not started with"):
            packager.verify(REQUEST_FRAME, b"!1103006B00037E\r\n")

    def test_verify_missing_end(self, packager):
        with pytest.raises(FramingError, match="is not ended with"):
            packager.verify(REQUEST_FRAME, b":1103006B00037E\n\n")

    def test_verify_unit_mismatch(self, packager):
        with pytest.raises(FramingError, match="slave id '18' does not match request '17'"):
            packager.verify(REQUEST_FRAME, ascii_frame(0x12, bytes.fromhex("8302")))


class TestAsciiExchange:
    """Test reading until the end delimiter."""

    def test_stops_at_end_delimiter(self, packager):
        response = ascii_frame(0x11, bytes.fromhex("0306022B00000064"))
        transport = FakeTransport(chunk_size=1)
        transport.add_response(response + b":1103")

        assert packager.exchange(transport, REQUEST_FRAME, 1.0, _LOGGER) == response
        assert transport.pending == b":1103"

    def test_stops_when_stream_ends(self, packager):
        transport = FakeTransport()
        transport.add_response(b":1103")

        assert packager.exchange(transport, REQUEST_FRAME, 1.0, _LOGGER) == b":1103"

    def test_stops_at_max_size(self, packager):
        transport = FakeTransport()
        transport.add_response(b":" + b"0" * 600)

        response = packager.exchange(transport, REQUEST_FRAME, 1.0, _LOGGER)
        assert len(response) == 513

    def test_zero_timeout_clears_read_timeout(self, packager):
        transport = FakeTransport()
        transport.add_response(REQUEST_FRAME)
        transport.add_response(REQUEST_FRAME)

        packager.exchange(transport, REQUEST_FRAME, 1.0, _LOGGER)
        packager.exchange(transport, REQUEST_FRAME, 0, _LOGGER)
        assert transport.read_timeout == 0

    def test_frames_logged_at_debug(self, packager, caplog):
        transport = FakeTransport()
        transport.add_response(REQUEST_FRAME)

        with caplog.at_level(logging.DEBUG, logger=__name__):
            packager.exchange(transport, REQUEST_FRAME, 1.0, _LOGGER)

        assert "modbus: sending" in caplog.text
        assert "modbus: received" in caplog.text
