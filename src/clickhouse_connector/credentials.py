"""Stored credentials and the TLS/credential policy applied to them."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .errors import UnsupportedAuthenticationError


class AuthenticationKind(Enum):
    """Authentication kinds a host credential store may hold."""
    USERNAME_PASSWORD = "UsernamePassword"
    WINDOWS = "Windows"
    KEY = "Key"
    IMPLICIT = "Implicit"
    ANONYMOUS = "Anonymous"


class SSLMode(Enum):
    """Values accepted by the driver's SSLMode connection option."""
    REQUIRE = "require"
    PREFER = "prefer"


@dataclass(frozen=True)
class Credential:
    """
    A credential record selected by the caller in the host's store.

    ``encrypt_connection`` is tri-state: None means the user never
    answered the question.
    """
    authentication_kind: Union[AuthenticationKind, str, None]
    username: Optional[str] = None
    password: Optional[str] = None
    encrypt_connection: Optional[bool] = None

    def __repr__(self) -> str:
        return (
            f"Credential(authentication_kind={self.authentication_kind!r}, "
            f"username={self.username!r}, password='***', "
            f"encrypt_connection={self.encrypt_connection!r})"
        )

    @property
    def is_username_password(self) -> bool:
        kind = self.authentication_kind
        if isinstance(kind, AuthenticationKind):
            return kind is AuthenticationKind.USERNAME_PASSWORD
        return kind == AuthenticationKind.USERNAME_PASSWORD.value


def resolve_ssl_mode(encrypt_connection: Optional[bool]) -> SSLMode:
    """
    Decide the encryption mode for a connection.

    Anything other than an explicit False requires encryption.

    Args:
        encrypt_connection: The credential's "encrypt connection" flag

    Returns:
        SSLMode.PREFER when encryption was explicitly declined, else SSLMode.REQUIRE
    """
    if encrypt_connection is None or encrypt_connection is True:
        return SSLMode.REQUIRE
    return SSLMode.PREFER


def credential_fragment(credential: Credential) -> Mapping[str, str]:
    """
    Build the secret-bearing part of the connection string.

    Raises:
        UnsupportedAuthenticationError: If the credential is not username/password
    """
    if not credential.is_username_password:
        raise UnsupportedAuthenticationError(credential.authentication_kind)

    return MappingProxyType({
        "UID": credential.username or "",
        "PWD": credential.password or "",
    })
