#!/usr/bin/env python3
"""Generate an SSH key pair, sign it with each configured Vault, emit SSH config."""

import argparse
import sys
from pathlib import Path

from vault_signer.lib.config import DEFAULT_CONFIG_FILE, SignerConfig, load_vault_entries
from vault_signer.lib.logging_config import LOGGER
from vault_signer.lib.signer_manager import SignerManager


def main() -> int:
    """Run a signing pass over every Vault entry in the config file.

    Returns:
        Exit code (0 when every entry was signed, 1 otherwise)
    """
    defaults = SignerConfig()
    parser = argparse.ArgumentParser(
        description="Sign a fresh SSH key with Vault SSH secrets engines"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(DEFAULT_CONFIG_FILE),
        help=f"The vault-signer config file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--ssh-config",
        action="store_true",
        help="Print SSH client config for the signed identities",
    )
    parser.add_argument(
        "--key-dir",
        default=defaults.key_dir,
        help=f"Directory for keys and certificates (default: {defaults.key_dir})",
    )
    parser.add_argument(
        "--mount-point",
        default=defaults.mount_point,
        help=f"Vault SSH secrets engine mount (default: {defaults.mount_point})",
    )
    args = parser.parse_args()

    config = SignerConfig(key_dir=args.key_dir, mount_point=args.mount_point)
    manager = SignerManager(config)

    try:
        entries = load_vault_entries(args.config)
    except FileNotFoundError as e:
        LOGGER.error("Config file not found: %s", e)
        return 1
    except ValueError as e:
        LOGGER.error("Invalid config: %s", e)
        return 1
    LOGGER.info("Loaded %d Vault entries from %s", len(entries), args.config)

    key_dir = config.resolved_key_dir()
    try:
        key_pair = manager.create_key_pair(key_dir)
    except Exception as e:
        LOGGER.error("Key pair generation failed: %s", e)
        return 1

    LOGGER.info("Key pair written:")
    LOGGER.info("  Private: %s", key_pair.private_key_path)
    LOGGER.info("  Public: %s", key_pair.public_key_path)

    result = manager.sign_entries(entries, key_pair, key_dir)

    LOGGER.info("Signing complete:")
    LOGGER.info("  Signed: %d", result.signed_count)
    LOGGER.info("  Failed: %d", result.failed_count)

    if args.ssh_config:
        print(result.ssh_config)

    if result.failed_count > 0:
        LOGGER.warning("Failed entries: %s", result.failed_aliases)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
