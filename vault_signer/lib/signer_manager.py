"""Signer manager for key generation and Vault signing runs."""

from collections.abc import Callable
from pathlib import Path

from .config import SignerConfig, VaultEntry
from .key_utils import (
    ensure_key_dir,
    generate_private_key,
    serialize_private_key,
    serialize_public_key_openssh,
    write_key_file,
)
from .logging_config import LOGGER
from .models import KeyPairResult, SignedKeyResult, SigningRunResult
from .ssh_config import build_match_block, build_ssh_config
from .vault_client import VaultSSHClient

ClientFactory = Callable[..., VaultSSHClient]


class SignerManager:
    """Generates the run's key pair and has each Vault entry sign it."""

    def __init__(self, config: SignerConfig) -> None:
        """Initialize signer manager with configuration.

        Args:
            config: Signer configuration with key size, mount point and port
        """
        self.config = config

    def cert_path_for(self, key_dir: Path, alias: str) -> Path:
        """Return ``<key_dir>/<private_key_name>_<alias>.pub``."""
        return key_dir / f"{self.config.private_key_name}_{alias}.pub"

    def create_key_pair(self, key_dir: Path) -> KeyPairResult:
        """Generate a fresh RSA key pair and write both halves to key_dir.

        Existing files are overwritten.

        Args:
            key_dir: Directory for the private key and public key

        Returns:
            KeyPairResult with file paths and the public key line
        """
        ensure_key_dir(key_dir)

        private_key = generate_private_key(self.config.key_size)
        public_key = serialize_public_key_openssh(private_key, comment=self.config.key_comment)

        private_key_path = key_dir / self.config.private_key_name
        public_key_path = key_dir / f"{self.config.private_key_name}.pub"

        write_key_file(serialize_private_key(private_key), private_key_path)
        write_key_file(public_key, public_key_path)

        return KeyPairResult(
            private_key_path=private_key_path,
            public_key_path=public_key_path,
            public_key=public_key.decode("utf-8"),
        )

    def sign_entry(
        self,
        entry: VaultEntry,
        key_pair: KeyPairResult,
        key_dir: Path,
        client_factory: ClientFactory = VaultSSHClient,
    ) -> SignedKeyResult:
        """Sign the run's public key with a single Vault entry and write the cert.

        Raises:
            ValueError: If Vault rejects the request or returns no certificate
        """
        client = client_factory(
            endpoint=entry.endpoint,
            token=entry.token,
            mount_point=self.config.mount_point,
        )
        signed = client.sign_public_key(entry.username, key_pair.public_key)

        cert_path = self.cert_path_for(key_dir, entry.alias)
        write_key_file(signed.signed_key.encode("utf-8"), cert_path)

        return SignedKeyResult(
            alias=entry.alias,
            cert_path=cert_path,
            serial_number=signed.serial_number,
        )

    def sign_entries(
        self,
        entries: list[VaultEntry],
        key_pair: KeyPairResult,
        key_dir: Path,
        client_factory: ClientFactory = VaultSSHClient,
    ) -> SigningRunResult:
        """Sign the public key with every entry, continuing past failures.

        1. Build a Vault client per entry
        2. Sign the public key under the entry's username role
        3. Write the certificate next to the key pair
        4. Append a Match stanza for the entry's subnet

        Args:
            entries: Vault entries in configuration order
            key_pair: Key pair created for this run
            key_dir: Directory for certificate output
            client_factory: Callable returning a client for an entry

        Returns:
            SigningRunResult with counts, aliases and the assembled SSH config
        """
        signed_aliases: list[str] = []
        failed_aliases: list[str] = []
        blocks: list[str] = []

        for entry in entries:
            try:
                result = self.sign_entry(entry, key_pair, key_dir, client_factory)
            except Exception as e:
                LOGGER.error(
                    "Failed to sign key with %s (%s): %s",
                    entry.alias,
                    entry.endpoint,
                    str(e),
                    extra={"alias": entry.alias},
                )
                failed_aliases.append(entry.alias)
                continue

            signed_aliases.append(entry.alias)
            blocks.append(
                build_match_block(
                    entry,
                    private_key_path=key_pair.private_key_path,
                    cert_path=result.cert_path,
                    port=self.config.ssh_port,
                )
            )
            LOGGER.info(
                "Signed key with %s: %s (serial %s)",
                entry.alias,
                result.cert_path,
                result.serial_number or "unknown",
                extra={"alias": entry.alias},
            )

        return SigningRunResult(
            signed_count=len(signed_aliases),
            failed_count=len(failed_aliases),
            signed_aliases=signed_aliases,
            failed_aliases=failed_aliases,
            ssh_config=build_ssh_config(blocks),
        )
