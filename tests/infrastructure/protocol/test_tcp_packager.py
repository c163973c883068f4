"""Tests for TCPPackager."""

import logging

import pytest

from modbus_master.domain.exceptions import FramingError
from modbus_master.domain.value_objects import ProtocolDataUnit
from modbus_master.infrastructure.protocol import TCPPackager
from tests.doubles import FakeTransport

_LOGGER = logging.getLogger(__name__)

READ_REQUEST = ProtocolDataUnit(0x03, bytes.fromhex("006B0003"))


@pytest.fixture
def packager():
    return TCPPackager()


class TestTCPEncodeDecode:
    """Test MBAP encoding and decoding."""

    def test_encode_header(self, packager):
        adu = packager.encode(0x11, READ_REQUEST)
        assert adu == bytes.fromhex("0001" "0000" "0006" "11" "03006B0003")

    def test_transaction_id_increments(self, packager):
        first = packager.encode(0x11, READ_REQUEST)
        second = packager.encode(0x11, READ_REQUEST)
        assert first[:2] == b"\x00\x01"
        assert second[:2] == b"\x00\x02"

    def test_transaction_id_wraps(self, packager):
        for _ in range(0xFFFF):
            packager.encode(0x11, READ_REQUEST)
        assert packager.encode(0x11, READ_REQUEST)[:2] == b"\x00\x00"

    def test_decode_round_trip(self, packager):
        assert packager.decode(packager.encode(0x11, READ_REQUEST)) == READ_REQUEST

    def test_decode_length_mismatch(self, packager):
        adu = bytes.fromhex("0001000000071103006B0003")
        with pytest.raises(FramingError, match="length in response '6' does not match pdu data length '5'"):
            packager.decode(adu)


class TestTCPVerify:
    """Test transaction, protocol and unit echo."""

    REQUEST = bytes.fromhex("0005000000061103006B0003")

    def test_verify_ok(self, packager):
        packager.verify(self.REQUEST, bytes.fromhex("000500000003118302"))

    @pytest.mark.parametrize(
        "response,field",
        [
            ("000600000003118302", "transaction id"),
            ("000500010003118302", "protocol id"),
            ("000500000003128302", "unit id"),
        ],
    )
    def test_verify_mismatch(self, packager, response, field):
        with pytest.raises(FramingError, match=field):
            packager.verify(self.REQUEST, bytes.fromhex(response))

    def test_verify_too_short(self, packager):
        with pytest.raises(FramingError, match="does not meet minimum '8'"):
            packager.verify(self.REQUEST, bytes.fromhex("00050000000311"))


class TestTCPExchange:
    """Test length-prefixed reads."""

    def test_reads_exactly_announced_length(self, packager):
        request = packager.encode(0x11, READ_REQUEST)
        response = request[:4] + bytes.fromhex("0009" "11" "0306022B00000064")
        transport = FakeTransport(chunk_size=3)
        transport.add_response(response + b"\x00\x02")

        assert packager.exchange(transport, request, 1.0, _LOGGER) == response
        assert transport.pending == b"\x00\x02"

    def test_zero_length_flushes_and_fails(self, packager):
        request = packager.encode(0x11, READ_REQUEST)
        transport = FakeTransport()
        transport.add_response(request[:4] + bytes.fromhex("0000" "11" "03"))

        with pytest.raises(FramingError, match="must not be zero"):
            packager.exchange(transport, request, 1.0, _LOGGER)
        assert transport.flush_count == 2
        assert transport.pending == b""

    def test_oversized_length_flushes_and_fails(self, packager):
        request = packager.encode(0x11, READ_REQUEST)
        transport = FakeTransport()
        transport.add_response(request[:4] + bytes.fromhex("0100" "11" "03"))

        with pytest.raises(FramingError, match="must not be greater than '254'"):
            packager.exchange(transport, request, 1.0, _LOGGER)
        assert transport.flush_count == 2
        assert transport.pending == b""

    def test_stale_bytes_drained_before_request(self, packager):
        """A late reply to an earlier request must not be read as this one's."""
        request = packager.encode(0x11, READ_REQUEST)
        response = request[:4] + bytes.fromhex("0005" "11" "0302002A")
        transport = FakeTransport()
        transport.deliver_late(bytes.fromhex("0063" "0000" "0005" "11" "03020063"))
        transport.add_response(response)

        assert packager.exchange(transport, request, 1.0, _LOGGER) == response
        assert transport.flush_count == 1

    def test_truncated_body_fails_decode(self, packager):
        request = packager.encode(0x11, READ_REQUEST)
        transport = FakeTransport()
        transport.add_response(request[:4] + bytes.fromhex("0009" "11" "0306"))

        response = packager.exchange(transport, request, 1.0, _LOGGER)
        with pytest.raises(FramingError, match="does not match pdu data length"):
            packager.decode(response)
