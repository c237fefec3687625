import pytest
from pydantic import ValidationError

from vaultmount.factory import universal_factory
from vaultmount.base import ResourceBlueprint
from vaultmount.vault.secret_backend import SecretBackend


class TestUniversalFactory:
    def test_vault_secret_backend(self, mock_hvac, fake_sys):
        result = universal_factory("vault_secret_backend", {
            "address": "http://127.0.0.1:8200",
            "token": "root",
        })
        assert isinstance(result, SecretBackend)
        assert isinstance(result, ResourceBlueprint)
        assert result.client.sys is fake_sys

    def test_unsupported_resource(self):
        with pytest.raises(ValueError, match="Unsupported resource type"):
            universal_factory("vault_auth_backend", {"address": "http://v:8200"})

    def test_invalid_config(self, mock_hvac):
        with pytest.raises(ValidationError):
            universal_factory("vault_secret_backend", {
                "address": "http://v:8200",
                "aws_access_key_id": "k",
            })
