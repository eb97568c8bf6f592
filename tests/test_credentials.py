"""Tests for credential bundles."""

import pytest

from pancli.errors import InvalidArgumentError
from pancli.models import Credentials
from pancli.models.credentials import realm_of


def test_from_secrets_with_password(secrets) -> None:
    credentials = Credentials.from_secrets(secrets)

    assert credentials.realm == "testrealm"
    assert credentials.user == "testuser"
    assert credentials.password == "testpass"
    assert credentials.private_key == ""


def test_from_secrets_with_private_key() -> None:
    credentials = Credentials.from_secrets(
        {
            "realm_ip": "10.0.0.1",
            "user": "admin",
            "private_key": "KEY",
            "private_key_passphrase": "phrase",
        }
    )

    assert credentials.private_key == "KEY"
    assert credentials.private_key_passphrase == "phrase"
    assert credentials.password == ""


def test_missing_user() -> None:
    with pytest.raises(InvalidArgumentError, match="user"):
        Credentials.from_secrets({"realm_ip": "r", "password": "p"})


def test_missing_auth_method() -> None:
    with pytest.raises(InvalidArgumentError, match="either password or private key"):
        Credentials.from_secrets({"realm_ip": "r", "user": "u", "private_key_passphrase": "x"})


def test_repr_hides_secrets() -> None:
    credentials = Credentials(
        realm="r", user="u", password="hunter2", private_key="KEY", private_key_passphrase="pp"
    )

    text = repr(credentials)

    assert "hunter2" not in text
    assert "KEY" not in text
    assert "u" in text


def test_realm_of(secrets) -> None:
    assert realm_of(secrets) == "testrealm"


@pytest.mark.parametrize("secrets", [{}, {"realm_ip": ""}])
def test_realm_of_missing(secrets) -> None:
    with pytest.raises(InvalidArgumentError, match="missing realm_ip"):
        realm_of(secrets)
