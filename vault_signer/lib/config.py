"""Signer configuration dataclasses and the YAML entry loader."""

import re
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

DEFAULT_CONFIG_FILE = "config.yaml"
CONFIG_ROOT_KEY = "vaultConfigs"

_ALIAS_PATTERN = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9._-]*$")


@dataclass
class SignerConfig:
    """Tool-wide defaults shared by every Vault entry."""

    key_dir: str = "~/.ssh/vault-signer"
    key_size: int = 4096
    mount_point: str = "ssh-client-signer"
    ssh_port: int = 47805
    private_key_name: str = "id_rsa"
    key_comment: str | None = None

    def resolved_key_dir(self) -> Path:
        """Return key_dir with ``~`` expanded."""
        return Path(self.key_dir).expanduser()


@dataclass(frozen=True)
class VaultEntry:
    """One signing endpoint from the ``vaultConfigs`` list."""

    alias: str
    token: str
    endpoint: str
    username: str
    subnet: str

    @classmethod
    def from_dict(cls, raw: object, index: int) -> "VaultEntry":
        """Build an entry from a parsed YAML mapping.

        Args:
            raw: Parsed YAML node for the entry
            index: Position in the list, used in error messages

        Returns:
            VaultEntry with all fields populated

        Raises:
            ValueError: If the node is not a mapping, a field is missing or
                blank, or the alias is not usable as a file name component
        """
        if not isinstance(raw, dict):
            raise ValueError(f"{CONFIG_ROOT_KEY}[{index}] must be a mapping")

        values: dict[str, str] = {}
        missing: list[str] = []
        for field in fields(cls):
            value = raw.get(field.name)
            if value is None or not str(value).strip():
                missing.append(field.name)
                continue
            values[field.name] = str(value).strip()

        if missing:
            raise ValueError(
                f"{CONFIG_ROOT_KEY}[{index}] missing required fields: {', '.join(missing)}"
            )

        if not _ALIAS_PATTERN.match(values["alias"]):
            raise ValueError(
                f"{CONFIG_ROOT_KEY}[{index}] alias {values['alias']!r} "
                "must match [A-Za-z0-9._-]+ and not start with '.'"
            )

        return cls(**values)


def load_vault_entries(config_path: Path | str = DEFAULT_CONFIG_FILE) -> list[VaultEntry]:
    """Read Vault entries from a YAML file.

    Args:
        config_path: Path to the YAML file holding a ``vaultConfigs`` list

    Returns:
        Entries in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be read, the YAML is malformed, or an
            entry is invalid
    """
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"config file not found: {path}")

    try:
        text = path.read_text()
    except OSError as e:
        raise ValueError(f"cannot read config file {path}: {e}") from e

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"malformed YAML in {path}: {e}") from e

    if not isinstance(document, dict) or not document.get(CONFIG_ROOT_KEY):
        raise ValueError(f"{path} has no {CONFIG_ROOT_KEY} entries")

    raw_entries = document[CONFIG_ROOT_KEY]
    if not isinstance(raw_entries, list):
        raise ValueError(f"{CONFIG_ROOT_KEY} in {path} must be a list")

    entries = [VaultEntry.from_dict(raw, i) for i, raw in enumerate(raw_entries)]

    seen: set[str] = set()
    for entry in entries:
        if entry.alias in seen:
            raise ValueError(f"duplicate alias in {path}: {entry.alias}")
        seen.add(entry.alias)

    return entries
