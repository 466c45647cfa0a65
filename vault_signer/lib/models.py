"""Result models for signing runs."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class KeyPairResult:
    """Key pair written for the run.

    Every certificate signed in the run certifies ``public_key``.
    """

    private_key_path: Path
    public_key_path: Path
    public_key: str


@dataclass
class SignedKey:
    """Signed certificate as returned by Vault."""

    signed_key: str
    serial_number: str | None = None


@dataclass
class SignedKeyResult:
    """Certificate written for a single Vault entry."""

    alias: str
    cert_path: Path
    serial_number: str | None = None


@dataclass
class SigningRunResult:
    """Outcome of signing the public key against every configured entry."""

    signed_count: int
    failed_count: int
    signed_aliases: list[str] = field(default_factory=list)
    failed_aliases: list[str] = field(default_factory=list)
    ssh_config: str = ""
