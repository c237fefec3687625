import json
import pytest

from vaultmount.cli import main


CONFIG = json.dumps({"address": "http://127.0.0.1:8200", "token": "root"})
SSH_ATTRS = json.dumps({
    "type": "ssh",
    "path": "ssh-test",
    "description": "test description",
    "default_lease_ttl_seconds": 3600,
    "max_lease_ttl_seconds": 86400,
})


def _run(capsys, *args):
    main(["--config", CONFIG, *args])
    return capsys.readouterr().out


class TestCli:
    def test_create_then_read(self, mock_hvac, capsys):
        created = json.loads(_run(capsys, "create", "vault_secret_backend", "--attrs", SSH_ATTRS))
        assert created["id"] == "ssh-test"
        assert created["attributes"]["max_lease_ttl_seconds"] == 86400

        read = json.loads(_run(capsys, "read", "vault_secret_backend", "--id", "ssh-test"))
        assert read == created

    def test_update_ttls(self, mock_hvac, capsys):
        state = _run(capsys, "create", "vault_secret_backend", "--attrs", SSH_ATTRS)
        attrs = {**json.loads(SSH_ATTRS), "default_lease_ttl_seconds": 1800}
        updated = json.loads(_run(
            capsys, "update", "vault_secret_backend",
            "--state", state, "--attrs", json.dumps(attrs),
        ))
        assert updated["attributes"]["default_lease_ttl_seconds"] == 1800
        assert updated["attributes"]["description"] == "test description"

    def test_update_one_ttl_keeps_the_other(self, mock_hvac, fake_sys, capsys):
        state = _run(capsys, "create", "vault_secret_backend", "--attrs", SSH_ATTRS)
        attrs = {k: v for k, v in json.loads(SSH_ATTRS).items() if k != "default_lease_ttl_seconds"}
        attrs["max_lease_ttl_seconds"] = 43200
        updated = json.loads(_run(
            capsys, "update", "vault_secret_backend",
            "--state", state, "--attrs", json.dumps(attrs),
        ))
        fake_sys.tune_mount_configuration.assert_called_once_with(
            path="ssh-test", default_lease_ttl="3600s", max_lease_ttl="43200s",
        )
        assert updated["attributes"]["default_lease_ttl_seconds"] == 3600
        assert updated["attributes"]["max_lease_ttl_seconds"] == 43200

    def test_update_refuses_force_new_change(self, mock_hvac, fake_sys, capsys):
        state = _run(capsys, "create", "vault_secret_backend", "--attrs", SSH_ATTRS)
        attrs = {**json.loads(SSH_ATTRS), "type": "kv"}
        with pytest.raises(SystemExit):
            _run(capsys, "update", "vault_secret_backend", "--state", state, "--attrs", json.dumps(attrs))
        assert "force a new resource: type" in capsys.readouterr().err
        fake_sys.tune_mount_configuration.assert_not_called()

    def test_plan(self, mock_hvac, capsys):
        diff = json.loads(_run(capsys, "plan", "vault_secret_backend", "--attrs", '{"type": "kv"}'))
        assert diff["requires_replace"] is False
        assert diff["changes"]["path"] == {"old": None, "new": "kv"}

    def test_exists_and_delete(self, mock_hvac, capsys):
        _run(capsys, "create", "vault_secret_backend", "--attrs", SSH_ATTRS)
        assert json.loads(_run(capsys, "exists", "vault_secret_backend", "--id", "ssh-test")) == {"exists": True}
        assert _run(capsys, "delete", "vault_secret_backend", "--id", "ssh-test").strip() == "OK"
        assert json.loads(_run(capsys, "exists", "vault_secret_backend", "--id", "ssh-test")) == {"exists": False}

    def test_import(self, mock_hvac, capsys):
        created = json.loads(_run(capsys, "create", "vault_secret_backend", "--attrs", SSH_ATTRS))
        imported = json.loads(_run(capsys, "import", "vault_secret_backend", "--id", "ssh-test"))
        assert imported == created

    def test_validation_error(self, mock_hvac, fake_sys, capsys):
        with pytest.raises(SystemExit):
            _run(capsys, "create", "vault_secret_backend", "--attrs", '{"type": "ssh", "path": "ssh/"}')
        assert "path cannot end in '/'" in capsys.readouterr().err
        fake_sys.enable_secrets_engine.assert_not_called()

    @pytest.mark.parametrize("operation", ["update", "delete", "exists", "import"])
    def test_empty_id_rejected(self, mock_hvac, fake_sys, capsys, operation):
        gone = json.dumps({"id": "", "attributes": json.loads(SSH_ATTRS)})
        with pytest.raises(SystemExit):
            _run(capsys, operation, "vault_secret_backend", "--state", gone, "--attrs", SSH_ATTRS)
        assert "requires a non-empty resource id" in capsys.readouterr().err
        fake_sys.tune_mount_configuration.assert_not_called()
        fake_sys.disable_secrets_engine.assert_not_called()

    def test_missing_attrs(self, mock_hvac, capsys):
        with pytest.raises(SystemExit):
            _run(capsys, "create", "vault_secret_backend")
        assert "requires --attrs" in capsys.readouterr().err

    def test_unsupported_resource(self, capsys):
        with pytest.raises(SystemExit):
            _run(capsys, "read", "vault_policy", "--id", "x")
        assert "Unsupported resource type" in capsys.readouterr().err

    def test_invalid_config_json(self, capsys):
        with pytest.raises(SystemExit):
            main(["--config", "{not json", "read", "vault_secret_backend", "--id", "x"])
        assert "Invalid --config JSON" in capsys.readouterr().err
