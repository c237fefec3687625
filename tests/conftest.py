"""Shared fixtures: an in-memory stand-in for Vault's ``sys/mounts`` API."""

from unittest.mock import patch, MagicMock
import pytest
from hvac.exceptions import InvalidRequest

from vaultmount.base.client_cache import ClientCache
from vaultmount.base.config import VaultConfig
from vaultmount.vault.secret_backend import SecretBackend


def _seconds(value):
    if value is None:
        return 0
    return int(str(value).rstrip("s"))


class FakeVaultSys:
    """Mount table with the subset of ``hvac.Client.sys`` the resource calls.

    Every method is a MagicMock so tests can assert calls or inject errors.
    """

    def __init__(self):
        self.mounts = {
            "cubbyhole/": {
                "type": "cubbyhole",
                "description": "per-token private secret storage",
                "config": {"default_lease_ttl": 0, "max_lease_ttl": 0},
            },
            "sys/": {
                "type": "system",
                "description": "system endpoints used for control, policy and debugging",
                "config": {"default_lease_ttl": 0, "max_lease_ttl": 0},
            },
        }
        self.enable_secrets_engine = MagicMock(side_effect=self._enable)
        self.list_mounted_secrets_engines = MagicMock(side_effect=self._list)
        self.tune_mount_configuration = MagicMock(side_effect=self._tune)
        self.disable_secrets_engine = MagicMock(side_effect=self._disable)

    def _enable(self, backend_type, path=None, description=None, config=None, **kwargs):
        key = (path or backend_type).strip("/") + "/"
        if key in self.mounts:
            raise InvalidRequest(f"path is already in use at {key}")
        config = config or {}
        self.mounts[key] = {
            "type": backend_type,
            "description": description or "",
            "config": {
                "default_lease_ttl": _seconds(config.get("default_lease_ttl")),
                "max_lease_ttl": _seconds(config.get("max_lease_ttl")),
            },
        }

    def _list(self):
        mounts = {key: dict(value) for key, value in self.mounts.items()}
        return {"request_id": "fake", "data": mounts}

    def _tune(self, path, default_lease_ttl=None, max_lease_ttl=None, **kwargs):
        key = path.strip("/") + "/"
        if key not in self.mounts:
            raise InvalidRequest(f"cannot tune '{key}'")
        self.mounts[key]["config"] = {
            "default_lease_ttl": _seconds(default_lease_ttl),
            "max_lease_ttl": _seconds(max_lease_ttl),
        }

    def _disable(self, path):
        self.mounts.pop(path.strip("/") + "/", None)


@pytest.fixture
def fake_sys():
    return FakeVaultSys()


@pytest.fixture
def mock_hvac(fake_sys):
    ClientCache().clear()
    with patch("vaultmount.vault.client.hvac") as mock:
        mock.Client.return_value.sys = fake_sys
        yield mock
    ClientCache().clear()


@pytest.fixture
def backend(mock_hvac, fake_sys):
    instance = SecretBackend(VaultConfig(address="http://127.0.0.1:8200", token="root"))
    yield instance, fake_sys
