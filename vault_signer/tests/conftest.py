"""Test fixtures for vault_signer tests."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from vault_signer.lib.config import SignerConfig, VaultEntry
from vault_signer.lib.key_utils import generate_private_key

CONFIG_YAML = """\
vaultConfigs:
  - alias: prod
    token: s.prod-token
    endpoint: https://vault.prod.example.com:8200
    username: deploy
    subnet: 10.20.*.*
  - alias: staging
    token: s.staging-token
    endpoint: https://vault.staging.example.com:8200
    username: ops
    subnet: 192.168.1.*
"""


@pytest.fixture
def key_dir(tmp_path: Path) -> Path:
    """Return key output directory (not yet created)."""
    return tmp_path / "vault-signer"


@pytest.fixture
def signer_config(key_dir: Path) -> SignerConfig:
    """Return test signer configuration with a smaller key."""
    return SignerConfig(
        key_dir=str(key_dir),
        key_size=2048,  # Faster for tests
        mount_point="ssh-client-signer",
        ssh_port=47805,
    )


@pytest.fixture(scope="session")
def private_key() -> RSAPrivateKey:
    """Generate RSA private key shared across tests."""
    return generate_private_key(key_size=2048)


@pytest.fixture
def prod_entry() -> VaultEntry:
    return VaultEntry(
        alias="prod",
        token="s.prod-token",
        endpoint="https://vault.prod.example.com:8200",
        username="deploy",
        subnet="10.20.*.*",
    )


@pytest.fixture
def staging_entry() -> VaultEntry:
    return VaultEntry(
        alias="staging",
        token="s.staging-token",
        endpoint="https://vault.staging.example.com:8200",
        username="ops",
        subnet="192.168.1.*",
    )


@pytest.fixture
def write_config(tmp_path: Path) -> Generator[Callable[[str], Path]]:
    """Return a helper writing YAML text to a config file under tmp_path."""

    def _write(text: str = CONFIG_YAML) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(text)
        return path

    yield _write
