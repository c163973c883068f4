"""Tests for ProtocolDataUnit value object."""

from dataclasses import FrozenInstanceError

import pytest

from modbus_master.domain.value_objects import FunctionCode, ProtocolDataUnit


class TestProtocolDataUnitCreation:
    """Test creation and validation."""

    def test_create(self):
        pdu = ProtocolDataUnit(FunctionCode.READ_HOLDING_REGISTERS, b"\x00\x6b\x00\x03")
        assert pdu.function_code == 0x03
        assert pdu.data == b"\x00\x6b\x00\x03"

    def test_default_data_empty(self):
        assert ProtocolDataUnit(0x11).data == b""

    def test_bytearray_frozen_to_bytes(self):
        pdu = ProtocolDataUnit(0x03, bytearray(b"\x01"))
        assert type(pdu.data) is bytes

    def test_immutable(self):
        pdu = ProtocolDataUnit(0x03)
        with pytest.raises(FrozenInstanceError):
            pdu.function_code = 0x04

    @pytest.mark.parametrize("function_code", [-1, 0x100])
    def test_function_code_out_of_range(self, function_code):
        with pytest.raises(ValueError, match="Function code"):
            ProtocolDataUnit(function_code)

    def test_data_too_long(self):
        with pytest.raises(ValueError, match="at most 252"):
            ProtocolDataUnit(0x10, bytes(253))

    def test_data_must_be_bytes(self):
        with pytest.raises(TypeError):
            ProtocolDataUnit(0x10, [1, 2])


class TestProtocolDataUnitBehavior:
    def test_to_bytes(self):
        assert ProtocolDataUnit(0x03, b"\x00\x6b").to_bytes() == b"\x03\x00\x6b"

    def test_equality(self):
        assert ProtocolDataUnit(0x03, b"\x01") == ProtocolDataUnit(0x03, bytearray(b"\x01"))
