"""Key generation, serialization, and owner-only file writes."""

import os
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

KEY_FILE_MODE = 0o600
KEY_DIR_MODE = 0o700


def generate_private_key(key_size: int = 4096) -> RSAPrivateKey:
    """Generate RSA private key with specified size."""
    return rsa.generate_private_key(
        public_exponent=65537,
        key_size=key_size,
    )


def serialize_private_key(key: RSAPrivateKey) -> bytes:
    """Serialize private key to PEM (PKCS#1 "RSA PRIVATE KEY", no encryption)."""
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


def deserialize_private_key(pem_data: bytes) -> RSAPrivateKey:
    """Deserialize private key from PEM bytes."""
    key = serialization.load_pem_private_key(pem_data, password=None)
    if not isinstance(key, RSAPrivateKey):
        raise ValueError("expected RSA private key")
    return key


def serialize_public_key_openssh(key: RSAPrivateKey, comment: str | None = None) -> bytes:
    """Return the authorized_keys line for the key's public half.

    Format is ``ssh-rsa <base64>[ <comment>]`` terminated by a newline.
    """
    line = key.public_key().public_bytes(
        encoding=serialization.Encoding.OpenSSH,
        format=serialization.PublicFormat.OpenSSH,
    )
    if comment:
        line += b" " + comment.encode("utf-8")
    return line + b"\n"


def ensure_key_dir(key_dir: Path) -> Path:
    """Create key_dir if needed and restrict it to the owner.

    mkdir honours the umask and leaves existing directories alone, so the mode
    is applied explicitly.
    """
    key_dir.mkdir(mode=KEY_DIR_MODE, parents=True, exist_ok=True)
    key_dir.chmod(KEY_DIR_MODE)
    return key_dir


def write_key_file(data: bytes, path: Path) -> Path:
    """Write data to path with 0600 permissions, replacing any existing file.

    The mode is reapplied after writing since os.open only honours it when
    the file is created.
    """
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, KEY_FILE_MODE)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
    os.chmod(path, KEY_FILE_MODE)
    return path
