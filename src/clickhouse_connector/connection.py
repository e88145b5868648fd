"""Connection descriptor assembly for the ClickHouse ODBC driver."""

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

from .config import DEFAULT_DRIVER_NAME
from .credentials import Credential, credential_fragment, resolve_ssl_mode
from .errors import InvalidEndpointError

LOG = logging.getLogger(__name__)

OptionValue = Union[str, bool]
ConnectionDescriptor = Mapping[str, OptionValue]
CredentialFragment = Mapping[str, str]

_QUOTE_CHARACTERS = ("'", '"')
_SPECIAL_CHARACTERS = (";", "{", "}", "=")


def parse_dsn_name(endpoint: str) -> Optional[str]:
    """
    Extract the driver-qualified name from an endpoint such as ``DSN='ClickHouse'``.

    The endpoint is split on ``=`` and quote characters are removed from
    the second fragment. Plain URLs carry no such fragment.

    Args:
        endpoint: Endpoint string supplied by the caller

    Returns:
        The unquoted name, or None if the endpoint has no ``=``
    """
    parts = endpoint.split("=")
    if len(parts) < 2:
        return None

    name = parts[1]
    for quote in _QUOTE_CHARACTERS:
        name = name.replace(quote, "")
    return name


def add_connection_string_option(
    options: Mapping[str, Any],
    name: str,
    value: Any,
) -> Mapping[str, Any]:
    """Return ``options`` with ``name`` added, unless ``value`` is None."""
    if value is None:
        return options
    extended = dict(options)
    extended[name] = value
    return MappingProxyType(extended)


def build_connection_descriptor(
    endpoint: str,
    database: Optional[str],
    query: Optional[str],
    credential: Credential,
    driver_name: str = DEFAULT_DRIVER_NAME,
) -> Tuple[ConnectionDescriptor, CredentialFragment]:
    """
    Build the connection descriptor and credential fragment for one call.

    The database and query do not influence the descriptor; navigation
    and query selection happen after the data source is opened.

    Args:
        endpoint: ClickHouse URL, e.g. "http://localhost:8123"
        database: Optional database name
        query: Optional query text
        credential: Credential selected in the host's store
        driver_name: ODBC driver to load

    Returns:
        Tuple of (descriptor, credential fragment), both read-only

    Raises:
        UnsupportedAuthenticationError: Credential is not username/password
        InvalidEndpointError: Endpoint is empty
    """
    fragment = credential_fragment(credential)

    if not endpoint or not endpoint.strip():
        raise InvalidEndpointError("Endpoint must be a non-empty string")

    ssl_mode = resolve_ssl_mode(credential.encrypt_connection)
    dsn_name = parse_dsn_name(endpoint)

    descriptor = MappingProxyType({
        "Driver": driver_name,
        "Url": endpoint,
        "HugeIntAsString": "on",
        "VerifyConnectionEarly": "on",
        "SSLMode": ssl_mode.value,
    })

    LOG.debug(
        "Built connection descriptor for %s (dsn=%s, database=%s, query=%s, SSLMode=%s)",
        endpoint, dsn_name, database, query is not None, ssl_mode.value,
    )
    return descriptor, fragment


def _format_value(value: OptionValue) -> str:
    if isinstance(value, bool):
        return "on" if value else "off"

    text = str(value)
    if any(c in text for c in _SPECIAL_CHARACTERS) or text != text.strip():
        return "{" + text.replace("}", "}}") + "}"
    return text


def format_connection_string(
    descriptor: ConnectionDescriptor,
    fragment: Optional[CredentialFragment] = None,
) -> str:
    """
    Render a descriptor (and optionally the credential fragment) as an ODBC string.

    The Driver value is always braced, as driver managers expect.
    """
    parts = []
    for key, value in descriptor.items():
        if key == "Driver":
            parts.append(f"Driver={{{str(value).replace('}', '}}')}}}")
        else:
            parts.append(f"{key}={_format_value(value)}")

    for key, value in (fragment or {}).items():
        parts.append(f"{key}={_format_value(value)}")

    return ";".join(parts) + ";"
