"""OpenSSH client config stanzas mapping subnets to signed identities."""

import re
from pathlib import Path

from .config import VaultEntry

# A wildcard plus any wildcard octets chained after it, e.g. "*.*" in "10.20.*.*"
_WILDCARD_RUN = re.compile(r"\*(?:\.\*)*")


def subnet_to_pattern(subnet: str) -> str:
    """Turn a subnet like ``10.20.*.*`` into the grep pattern ``10\\.20\\.``."""
    return _WILDCARD_RUN.sub("", subnet).replace(".", "\\.")


def build_match_block(
    entry: VaultEntry,
    private_key_path: Path,
    cert_path: Path,
    port: int,
) -> str:
    """Return the ``Match exec`` stanza selecting this entry's identity."""
    pattern = subnet_to_pattern(entry.subnet)
    return (
        f"Match exec \"host %h | grep -qE '{pattern}'\"\n"
        f"\tUser {entry.username}\n"
        f"\tPort {port}\n"
        f"\tIdentityFile {private_key_path}\n"
        f"\tIdentityFile {cert_path}\n"
    )


def build_ssh_config(blocks: list[str]) -> str:
    """Concatenate stanzas in configuration order."""
    return "".join(blocks)
