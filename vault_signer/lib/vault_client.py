"""Vault client for signing SSH public keys with the SSH secrets engine."""

import hvac
from hvac.exceptions import Forbidden, InvalidPath, Unauthorized

from .models import SignedKey


class VaultSSHClient:
    """Vault client bound to one endpoint, token, and SSH signer mount."""

    def __init__(self, endpoint: str, token: str, mount_point: str = "ssh-client-signer") -> None:
        """Initialize Vault client.

        Args:
            endpoint: Vault address (e.g., 'https://vault.example.com:8200')
            token: Vault token used for the sign request
            mount_point: Mount path of the SSH secrets engine
        """
        self.endpoint = endpoint
        self.mount_point = mount_point.strip("/")
        self.client = hvac.Client(url=endpoint, token=token)

    def sign_public_key(self, role: str, public_key: str) -> SignedKey:
        """Submit public_key to ``<mount_point>/sign/<role>``.

        Args:
            role: SSH signer role (the entry's username)
            public_key: authorized_keys line to certify

        Returns:
            SignedKey with the certificate text and serial number

        Raises:
            ValueError: If the token is rejected, the mount or role does not
                exist, or the response carries no signed key
        """
        path = f"{self.mount_point}/sign/{role}"

        try:
            response = self.client.write_data(path, data={"public_key": public_key})
        except (Forbidden, Unauthorized) as e:
            raise ValueError(f"Vault token rejected by {self.endpoint}") from e
        except InvalidPath as e:
            raise ValueError(
                f"SSH signer not found at {self.endpoint}. Path checked: {path}"
            ) from e

        data = response.get("data") if isinstance(response, dict) else None
        signed_key = data.get("signed_key") if isinstance(data, dict) else None
        if not isinstance(signed_key, str) or not signed_key.strip():
            raise ValueError(f"Vault at {self.endpoint} returned no signed_key for {path}")

        serial_number = data.get("serial_number")
        return SignedKey(
            signed_key=signed_key,
            serial_number=str(serial_number) if serial_number is not None else None,
        )
