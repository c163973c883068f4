"""Tests for RTUPackager."""

import logging

import pytest

from modbus_master.domain.exceptions import FramingError, TransportTimeoutError
from modbus_master.domain.value_objects import ProtocolDataUnit
from modbus_master.infrastructure.protocol import RTUPackager
from tests.doubles import FakeTransport, rtu_frame

_LOGGER = logging.getLogger(__name__)

READ_REQUEST = ProtocolDataUnit(0x03, bytes.fromhex("006B0003"))


@pytest.fixture
def packager():
    return RTUPackager()


class TestRTUEncodeDecode:
    """Test RTU frame encoding and decoding."""

    def test_encode_published_frame(self, packager):
        assert packager.encode(0x11, READ_REQUEST) == bytes.fromhex("1103006B00037687")

    def test_encode_crc_low_byte_first(self, packager):
        adu = packager.encode(0x01, ProtocolDataUnit(0x03, bytes.fromhex("0000000A")))
        assert adu[-2:] == bytes.fromhex("C5CD")

    @pytest.mark.parametrize(
        "pdu",
        [
            READ_REQUEST,
            ProtocolDataUnit(0x10, bytes.fromhex("000100020400") + b"\x0a\x01\x02"),
            ProtocolDataUnit(0x2B),
        ],
    )
    def test_decode_round_trip(self, packager, pdu):
        assert packager.decode(packager.encode(0x11, pdu)) == pdu

    def test_decode_bad_crc(self, packager):
        """Verify CRC mismatch names expected and actual values."""
        adu = bytearray(packager.encode(0x11, READ_REQUEST))
        adu[-1] ^= 0xFF
        with pytest.raises(FramingError, match="crc") as exc_info:
            packager.decode(bytes(adu))
        assert exc_info.value.expected == 0x8776
        assert exc_info.value.actual != 0x8776

    def test_decode_too_short(self, packager):
        with pytest.raises(FramingError):
            packager.decode(b"\x11\x03\x00")


class TestRTUVerify:
    """Test structural request/response agreement."""

    def test_verify_ok(self, packager):
        request = packager.encode(0x11, READ_REQUEST)
        packager.verify(request, rtu_frame(0x11, bytes.fromhex("0306022B00000064")))

    def test_verify_too_short(self, packager):
        request = packager.encode(0x11, READ_REQUEST)
        with pytest.raises(FramingError, match="does not meet minimum '4'"):
            packager.verify(request, b"\x11\x03\x00")

    def test_verify_unit_mismatch(self, packager):
        request = packager.encode(0x11, READ_REQUEST)
        with pytest.raises(FramingError, match="slave id '18' does not match request '17'"):
            packager.verify(request, rtu_frame(0x12, bytes.fromhex("0306022B00000064")))


class TestRTUExchange:
    """Test response boundary detection."""

    def _exchange(self, packager, transport, pdu=READ_REQUEST):
        request = packager.encode(0x11, pdu)
        return packager.exchange(transport, request, 2.0, _LOGGER)

    def test_reads_byte_count_response(self, packager):
        response = rtu_frame(0x11, bytes.fromhex("0306022B00000064"))
        transport = FakeTransport()
        transport.add_response(response + b"\x99\x99")

        assert self._exchange(packager, transport) == response
        assert transport.pending == b"\x99\x99"

    def test_connects_and_sets_timeout(self, packager):
        transport = FakeTransport()
        transport.add_response(rtu_frame(0x11, bytes.fromhex("0306022B00000064")))

        self._exchange(packager, transport)

        assert transport.get_calls()[:2] == ["connect", "write"]
        assert transport.read_timeout == 2.0

    def test_fragmented_reads(self, packager):
        """Verify single-byte chunks are reassembled."""
        response = rtu_frame(0x11, bytes.fromhex("0306022B00000064"))
        transport = FakeTransport(chunk_size=1)
        transport.add_response(response)

        assert self._exchange(packager, transport) == response

    def test_exception_response_stops_at_five_bytes(self, packager):
        response = rtu_frame(0x11, bytes.fromhex("8302"))
        transport = FakeTransport(timeout_on_empty=True)
        transport.add_response(response)

        assert self._exchange(packager, transport) == response

    @pytest.mark.parametrize(
        "request_pdu,response_pdu",
        [
            (ProtocolDataUnit(0x05, bytes.fromhex("00ACFF00")), "0500ACFF00"),
            (ProtocolDataUnit(0x06, bytes.fromhex("00010003")), "0600010003"),
            (ProtocolDataUnit(0x16, bytes.fromhex("000400F20025")), "16000400F20025"),
            (ProtocolDataUnit(0x18, bytes.fromhex("04DE")), "180006000201B81284"),
        ],
    )
    def test_fixed_and_counted_layouts(self, packager, request_pdu, response_pdu):
        """Verify echo, mask write and FIFO responses end exactly."""
        response = rtu_frame(0x11, bytes.fromhex(response_pdu))
        transport = FakeTransport(timeout_on_empty=True)
        transport.add_response(response)

        assert self._exchange(packager, transport, request_pdu) == response

    def test_unknown_function_reads_until_stream_ends(self, packager):
        response = rtu_frame(0x11, bytes.fromhex("2B0E01"))
        transport = FakeTransport()
        transport.add_response(response)

        assert self._exchange(packager, transport, ProtocolDataUnit(0x2B)) == response

    def test_truncated_response_returned_short(self, packager):
        """Verify a short stream yields what arrived for verify/decode to reject."""
        transport = FakeTransport()
        transport.add_response(b"\x11\x03")

        response = self._exchange(packager, transport)
        assert response == b"\x11\x03"
        with pytest.raises(FramingError):
            packager.verify(packager.encode(0x11, READ_REQUEST), response)

    def test_timeout_propagates(self, packager):
        transport = FakeTransport(timeout_on_empty=True)
        with pytest.raises(TransportTimeoutError):
            self._exchange(packager, transport)
