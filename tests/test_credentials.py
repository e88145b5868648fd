"""Unit tests for credential policy."""

import pytest

from clickhouse_connector.credentials import (
    AuthenticationKind,
    Credential,
    SSLMode,
    credential_fragment,
    resolve_ssl_mode,
)
from clickhouse_connector.errors import UnsupportedAuthenticationError


@pytest.mark.parametrize(
    "encrypt_connection, expected",
    [(None, SSLMode.REQUIRE), (True, SSLMode.REQUIRE), (False, SSLMode.PREFER)],
)
def test_resolve_ssl_mode(encrypt_connection, expected):
    """Test that encryption is required unless explicitly declined."""
    assert resolve_ssl_mode(encrypt_connection) is expected


def test_ssl_mode_values():
    """Test the driver-facing SSLMode strings."""
    assert SSLMode.REQUIRE.value == "require"
    assert SSLMode.PREFER.value == "prefer"


def test_credential_fragment():
    """Test UID/PWD for a username/password credential."""
    credential = Credential(AuthenticationKind.USERNAME_PASSWORD, "alice", "pw")
    assert dict(credential_fragment(credential)) == {"UID": "alice", "PWD": "pw"}


def test_credential_fragment_missing_password():
    """Test that a missing password is sent as empty."""
    credential = Credential(AuthenticationKind.USERNAME_PASSWORD, "default")
    assert credential_fragment(credential)["PWD"] == ""


def test_credential_fragment_windows_rejected():
    """Test that Windows authentication is not implemented."""
    credential = Credential(AuthenticationKind.WINDOWS)
    with pytest.raises(UnsupportedAuthenticationError):
        credential_fragment(credential)


def test_credential_repr_hides_password():
    """Test that the password does not leak into logs."""
    credential = Credential(AuthenticationKind.USERNAME_PASSWORD, "alice", "hunter2")
    assert "hunter2" not in repr(credential)
