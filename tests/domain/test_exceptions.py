"""Tests for the error taxonomy."""

import pytest

from modbus_master.domain.exceptions import (
    FramingError,
    ModbusError,
    TransportError,
    TransportTimeoutError,
)
from modbus_master.domain.value_objects import ExceptionCode, exception_name


class TestModbusError:
    """Test ModbusError formatting and codes."""

    def test_message_format(self):
        """Test message carries exception code, name and function code."""
        err = ModbusError(function_code=0x98, exception_code=0x01)
        assert str(err) == "modbus: exception '1' (illegal function), function '152'"

    def test_request_function_code(self):
        assert ModbusError(0x83, 0x02).request_function_code == 0x03

    @pytest.mark.parametrize(
        "code,name",
        [
            (ExceptionCode.ILLEGAL_FUNCTION, "illegal function"),
            (ExceptionCode.ILLEGAL_DATA_ADDRESS, "illegal data address"),
            (ExceptionCode.ILLEGAL_DATA_VALUE, "illegal data value"),
            (ExceptionCode.SLAVE_DEVICE_FAILURE, "slave device failure"),
            (ExceptionCode.GATEWAY_TARGET_NO_RESPONSE, "gateway target device failed to respond"),
        ],
    )
    def test_exception_names(self, code, name):
        assert ModbusError(0x83, code).exception_name == name

    def test_unknown_code_passes_through(self):
        """Test unrecognized codes keep their numeric value."""
        err = ModbusError(0x83, 0x42)
        assert err.exception_code == 0x42
        assert "exception '66' (unknown)" in str(err)
        assert exception_name(0x42) == "unknown"

    def test_equality(self):
        assert ModbusError(0x81, 1) == ModbusError(0x81, 1)
        assert ModbusError(0x81, 1) != ModbusError(0x81, 2)
        assert len({ModbusError(0x81, 1), ModbusError(0x81, 1)}) == 1


class TestErrorHierarchy:
    def test_timeout_is_transport_error(self):
        assert issubclass(TransportTimeoutError, TransportError)
        assert issubclass(TransportTimeoutError, TimeoutError)

    def test_transport_error_is_os_error(self):
        assert issubclass(TransportError, OSError)

    def test_framing_error_details(self):
        err = FramingError("bad crc", expected=0xCDC5, actual=0x1234)
        assert str(err) == "bad crc"
        assert err.expected == 0xCDC5
        assert err.actual == 0x1234

    def test_framing_error_is_not_modbus_error(self):
        assert not issubclass(FramingError, ModbusError)
        assert not issubclass(ModbusError, FramingError)
