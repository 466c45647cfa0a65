"""Tests for config module."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from vault_signer.lib.config import SignerConfig, VaultEntry, load_vault_entries


class TestSignerConfig:
    """Tests for SignerConfig defaults."""

    def test_defaults(self) -> None:
        config = SignerConfig()

        assert config.key_size == 4096
        assert config.mount_point == "ssh-client-signer"
        assert config.ssh_port == 47805
        assert config.private_key_name == "id_rsa"

    def test_resolved_key_dir_expands_home(self) -> None:
        """~ in key_dir resolves to the user's home directory."""
        resolved = SignerConfig(key_dir="~/.ssh/vault-signer").resolved_key_dir()

        assert resolved == Path.home() / ".ssh" / "vault-signer"


class TestLoadVaultEntries:
    """Tests for load_vault_entries."""

    def test_loads_entries_in_file_order(self, write_config: Callable[..., Path]) -> None:
        entries = load_vault_entries(write_config())

        assert [e.alias for e in entries] == ["prod", "staging"]
        assert entries[0] == VaultEntry(
            alias="prod",
            token="s.prod-token",
            endpoint="https://vault.prod.example.com:8200",
            username="deploy",
            subnet="10.20.*.*",
        )

    def test_missing_file_raises_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="config file not found"):
            load_vault_entries(tmp_path / "absent.yaml")

    def test_malformed_yaml_raises_value_error(self, write_config: Callable[..., Path]) -> None:
        path = write_config("vaultConfigs: [alias: prod\n")

        with pytest.raises(ValueError, match="malformed YAML"):
            load_vault_entries(path)

    def test_empty_list_raises_value_error(self, write_config: Callable[..., Path]) -> None:
        path = write_config("vaultConfigs: []\n")

        with pytest.raises(ValueError, match="no vaultConfigs entries"):
            load_vault_entries(path)

    def test_missing_root_key_raises_value_error(self, write_config: Callable[..., Path]) -> None:
        path = write_config("other: 1\n")

        with pytest.raises(ValueError, match="no vaultConfigs entries"):
            load_vault_entries(path)

    def test_missing_fields_are_listed(self, write_config: Callable[..., Path]) -> None:
        path = write_config("vaultConfigs:\n  - alias: prod\n    token: t\n")

        with pytest.raises(ValueError, match="endpoint, username, subnet"):
            load_vault_entries(path)

    def test_blank_field_counts_as_missing(self, write_config: Callable[..., Path]) -> None:
        path = write_config(
            "vaultConfigs:\n"
            "  - {alias: prod, token: '  ', endpoint: e, username: u, subnet: s}\n"
        )

        with pytest.raises(ValueError, match="missing required fields: token"):
            load_vault_entries(path)

    def test_non_mapping_entry_raises(self, write_config: Callable[..., Path]) -> None:
        path = write_config("vaultConfigs:\n  - just-a-string\n")

        with pytest.raises(ValueError, match=r"vaultConfigs\[0\] must be a mapping"):
            load_vault_entries(path)

    @pytest.mark.parametrize("alias", ["../escape", ".hidden", "a/b"])
    def test_unsafe_alias_rejected(self, write_config: Callable[..., Path], alias: str) -> None:
        path = write_config(
            "vaultConfigs:\n"
            f"  - {{alias: '{alias}', token: t, endpoint: e, username: u, subnet: s}}\n"
        )

        with pytest.raises(ValueError, match="alias"):
            load_vault_entries(path)

    def test_duplicate_alias_rejected(self, write_config: Callable[..., Path]) -> None:
        path = write_config(
            "vaultConfigs:\n"
            "  - {alias: prod, token: t, endpoint: e, username: u, subnet: s}\n"
            "  - {alias: prod, token: t2, endpoint: e2, username: u2, subnet: s2}\n"
        )

        with pytest.raises(ValueError, match="duplicate alias in .*: prod"):
            load_vault_entries(path)

    def test_numeric_values_are_coerced_to_str(self, write_config: Callable[..., Path]) -> None:
        path = write_config(
            "vaultConfigs:\n"
            "  - {alias: 1, token: 42, endpoint: e, username: u, subnet: s}\n"
        )

        entry = load_vault_entries(path)[0]

        assert entry.alias == "1"
        assert entry.token == "42"

    def test_unreadable_file_raises_value_error(
        self, write_config: Callable[..., Path]
    ) -> None:
        path = write_config()

        with (
            patch.object(Path, "read_text", side_effect=PermissionError("denied")),
            pytest.raises(ValueError, match="cannot read config file .*denied"),
        ):
            load_vault_entries(path)
