"""Client configuration: voluptuous schema and YAML profile loader.

A profile describes one client session, for example::

    framing: rtu
    unit_id: 17
    timeout: 2.5
    serial:
      port: /dev/ttyUSB0
      baudrate: 9600
      parity: N

or, for a network device::

    framing: tcp
    address: 192.168.1.10:502
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Union

import voluptuous as vol
import yaml

from .application.services import ModbusClient
from .const import (
    DEFAULT_BAUDRATE,
    DEFAULT_BYTESIZE,
    DEFAULT_PARITY,
    DEFAULT_SERIAL_TIMEOUT,
    DEFAULT_STOPBITS,
    DEFAULT_TCP_TIMEOUT,
    DEFAULT_UNIT_ID,
    MAX_UNIT_ID,
)
from .domain.exceptions import InvalidArgumentError
from .domain.value_objects import Framing
from .factory import create_client
from .infrastructure.transport import SerialTransport, TCPTransport

_LOGGER = logging.getLogger(__name__)

CONF_ADDRESS = "address"
CONF_BAUDRATE = "baudrate"
CONF_BYTESIZE = "bytesize"
CONF_FRAMING = "framing"
CONF_PARITY = "parity"
CONF_PORT = "port"
CONF_SERIAL = "serial"
CONF_STOPBITS = "stopbits"
CONF_TIMEOUT = "timeout"
CONF_UNIT_ID = "unit_id"

PARITIES = ["N", "E", "O", "M", "S"]
BYTESIZES = [5, 6, 7, 8]
STOPBITS = [1, 1.5, 2]


def _framing(value: Any) -> Framing:
    if isinstance(value, Framing):
        return value
    try:
        return Framing(str(value).lower())
    except ValueError as err:
        raise vol.Invalid(
            f"unknown framing '{value}', expected one of "
            f"{', '.join(f.value for f in Framing)}"
        ) from err


def _endpoint(config: Dict[str, Any]) -> Dict[str, Any]:
    """Require exactly one endpoint and fill in the framing's default timeout."""
    framing = config[CONF_FRAMING]
    if framing is Framing.TCP and CONF_ADDRESS not in config:
        raise vol.Invalid("tcp framing requires 'address'", path=[CONF_ADDRESS])
    if CONF_ADDRESS not in config and CONF_SERIAL not in config:
        raise vol.Invalid(
            f"{framing.value} framing requires 'serial' or 'address'",
            path=[CONF_SERIAL],
        )
    if framing is Framing.TCP and CONF_SERIAL in config:
        raise vol.Invalid("tcp framing cannot use 'serial'", path=[CONF_SERIAL])

    if CONF_TIMEOUT not in config:
        config[CONF_TIMEOUT] = (
            DEFAULT_SERIAL_TIMEOUT if CONF_SERIAL in config else DEFAULT_TCP_TIMEOUT
        )
    return config


SERIAL_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_PORT): vol.All(str, vol.Length(min=1)),
        vol.Optional(CONF_BAUDRATE, default=DEFAULT_BAUDRATE): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(CONF_BYTESIZE, default=DEFAULT_BYTESIZE): vol.All(
            vol.Coerce(int), vol.In(BYTESIZES)
        ),
        vol.Optional(CONF_PARITY, default=DEFAULT_PARITY): vol.All(
            str, vol.Upper, vol.In(PARITIES)
        ),
        vol.Optional(CONF_STOPBITS, default=DEFAULT_STOPBITS): vol.In(STOPBITS),
    }
)

CLIENT_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Required(CONF_FRAMING): _framing,
            vol.Optional(CONF_UNIT_ID, default=DEFAULT_UNIT_ID): vol.All(
                vol.Coerce(int), vol.Range(min=0, max=MAX_UNIT_ID)
            ),
            vol.Optional(CONF_TIMEOUT): vol.All(vol.Coerce(float), vol.Range(min=0)),
            vol.Exclusive(CONF_ADDRESS, "endpoint"): vol.All(str, vol.Length(min=1)),
            vol.Exclusive(CONF_SERIAL, "endpoint"): SERIAL_SCHEMA,
        }
    ),
    _endpoint,
)


def validate_client_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Validate ``config`` against CLIENT_SCHEMA and apply defaults.

    Raises:
        InvalidArgumentError: With the voluptuous message if invalid
    """
    try:
        return CLIENT_SCHEMA(dict(config))
    except vol.Invalid as err:
        raise InvalidArgumentError(f"Invalid client configuration: {err}") from err


def load_client_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load and validate a client profile from YAML.

    Args:
        path: Profile file

    Returns:
        Validated configuration dict

    Raises:
        FileNotFoundError: If the profile does not exist
        InvalidArgumentError: If the YAML or the settings are invalid
    """
    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        config = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise InvalidArgumentError(f"Invalid YAML in {config_file}: {err}") from err

    if not config:
        raise InvalidArgumentError(f"Configuration file is empty: {config_file}")
    if not isinstance(config, dict):
        raise InvalidArgumentError(
            f"Configuration in {config_file} must be a mapping, "
            f"got {type(config).__name__}"
        )

    validated = validate_client_config(config)
    _LOGGER.info(
        "Loaded %s client profile from %s", validated[CONF_FRAMING].value, config_file
    )
    return validated


def create_client_from_config(config: Dict[str, Any]) -> ModbusClient:
    """Build a client (not yet connected) from a profile mapping."""
    config = validate_client_config(config)
    timeout = config[CONF_TIMEOUT]

    if CONF_SERIAL in config:
        serial_config = config[CONF_SERIAL]
        transport = SerialTransport(
            serial_config[CONF_PORT],
            baudrate=serial_config[CONF_BAUDRATE],
            bytesize=serial_config[CONF_BYTESIZE],
            parity=serial_config[CONF_PARITY],
            stopbits=serial_config[CONF_STOPBITS],
            timeout=timeout,
        )
    else:
        transport = TCPTransport(config[CONF_ADDRESS], timeout)

    return create_client(
        config[CONF_FRAMING], transport, unit_id=config[CONF_UNIT_ID], timeout=timeout
    )
