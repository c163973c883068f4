"""Pytest configuration and fixtures for Modbus master tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import modbus_master and tests.doubles
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from modbus_master.application.services import ModbusClient
from modbus_master.domain.value_objects import Framing
from modbus_master.infrastructure.protocol import create_packager
from tests.doubles import FakeTransport, device_reply

UNIT_ID = 0x11


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Return an empty scripted transport."""
    return FakeTransport()


@pytest.fixture(params=[Framing.RTU, Framing.ASCII, Framing.TCP], ids=lambda f: f.value)
def framing(request) -> Framing:
    """Parametrize a test over every framing."""
    return request.param


@pytest.fixture
def client(framing, fake_transport) -> ModbusClient:
    """Client addressing unit 0x11 over the parametrized framing."""
    return ModbusClient(
        create_packager(framing), fake_transport, unit_id=UNIT_ID, timeout=1.0
    )


@pytest.fixture
def rtu_client(fake_transport) -> ModbusClient:
    return ModbusClient(
        create_packager(Framing.RTU), fake_transport, unit_id=UNIT_ID, timeout=1.0
    )


@pytest.fixture
def respond(client, fake_transport):
    """Queue a device answer (given as PDU hex) for the client's framing."""

    def _respond(pdu_hex: str, unit_id: int = UNIT_ID) -> None:
        fake_transport.add_response(
            device_reply(client.framing, unit_id, bytes.fromhex(pdu_hex))
        )

    return _respond


@pytest.fixture
def sent_pdu(client, fake_transport):
    """Return the PDUs the client wrote, unwrapped from their frames."""

    def _sent_pdu():
        packager = create_packager(client.framing)
        return [packager.decode(adu) for adu in fake_transport.get_writes()]

    return _sent_pdu
