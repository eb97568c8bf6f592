"""Credential bundle supplied with every call."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from pancli.errors import InvalidArgumentError

# Secret keys understood in a credential bundle
REALM_ADDRESS = "realm_ip"
USERNAME = "user"
PASSWORD = "password"
PRIVATE_KEY = "private_key"
PRIVATE_KEY_PASSPHRASE = "private_key_passphrase"


def realm_of(secrets: Mapping[str, str]) -> str:
    """Return the realm address from a secret bundle.

    Raises:
        InvalidArgumentError: If the realm address is missing or empty
    """
    realm = secrets.get(REALM_ADDRESS, "")
    if not realm:
        raise InvalidArgumentError(f"missing {REALM_ADDRESS} in secrets")
    return realm


@dataclass(frozen=True)
class Credentials:
    """Validated SSH credentials for one realm.

    Secret values are excluded from ``repr`` so they never reach logs.
    """

    realm: str
    user: str
    password: str = field(default="", repr=False)
    private_key: str = field(default="", repr=False)
    private_key_passphrase: str = field(default="", repr=False)

    @classmethod
    def from_secrets(cls, secrets: Mapping[str, str]) -> "Credentials":
        """Validate a secret bundle.

        Args:
            secrets: Mapping of secret name to value

        Returns:
            Credentials with at least one authentication method

        Raises:
            InvalidArgumentError: If realm or user is missing, or neither
                password nor private key is provided
        """
        realm = realm_of(secrets)

        user = secrets.get(USERNAME, "")
        if not user:
            raise InvalidArgumentError(f"missing {USERNAME} in secrets")

        password = secrets.get(PASSWORD, "")
        private_key = secrets.get(PRIVATE_KEY, "")
        if not password and not private_key:
            raise InvalidArgumentError(
                "no valid authentication method provided in secrets, "
                "either password or private key is required"
            )

        return cls(
            realm=realm,
            user=user,
            password=password,
            private_key=private_key,
            private_key_passphrase=secrets.get(PRIVATE_KEY_PASSPHRASE, ""),
        )
