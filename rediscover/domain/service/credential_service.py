"""Password credential domain service.

Credentials are stored as ``salt_hex:derived_hex`` where the derived key is
PBKDF2-HMAC over the password with a per-credential random salt.
"""

import secrets

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from rediscover.config import CredentialSettings

from .base import Service

SEPARATOR = ":"
MIN_KEY_BYTES = 32

DIGESTS = {
    "sha512": hashes.SHA512,
    "sha384": hashes.SHA384,
}


def _password_bytes(password: str) -> bytes:
    # JSON bodies can carry lone surrogates; they must hash, not raise
    return password.encode("utf-8", errors="surrogatepass")


class CredentialService(Service):
    """Hashes and verifies passwords. Pure computation, no storage access."""

    def __init__(self, credential_settings: CredentialSettings) -> None:
        """Initialize credential service.

        Args:
            credential_settings: Key-derivation parameters
        """
        self.settings = credential_settings

    def _kdf(self, salt: bytes, key_bytes: int) -> PBKDF2HMAC:
        return PBKDF2HMAC(
            algorithm=DIGESTS[self.settings.digest](),
            length=key_bytes,
            salt=salt,
            iterations=self.settings.iterations,
        )

    def hash_password(self, password: str) -> str:
        """Hash a password with a fresh random salt.

        Args:
            password: Plain-text password

        Returns:
            Encoded credential ``salt_hex:derived_hex``
        """
        salt = secrets.token_bytes(self.settings.salt_bytes)
        derived = self._kdf(salt, self.settings.key_bytes).derive(
            _password_bytes(password)
        )
        return f"{salt.hex()}{SEPARATOR}{derived.hex()}"

    def verify_password(self, password: str, credential: str | None) -> bool:
        """Check a password against a stored credential.

        Fails closed: a missing or malformed credential, or one whose derived
        key is shorter than 32 bytes, returns False. The derived key length
        otherwise follows the stored value, so credentials written with a
        different ``key_bytes`` setting still verify.

        Args:
            password: Plain-text password
            credential: Stored ``salt_hex:derived_hex`` value

        Returns:
            True if the password matches
        """
        if not credential or credential.count(SEPARATOR) != 1:
            return False

        salt_hex, derived_hex = credential.split(SEPARATOR)
        if not salt_hex or not derived_hex:
            return False

        try:
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(derived_hex)
        except ValueError:
            return False

        if len(expected) < MIN_KEY_BYTES:
            return False

        try:
            self._kdf(salt, len(expected)).verify(_password_bytes(password), expected)
        except InvalidKey:
            return False
        return True
