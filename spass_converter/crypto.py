"""
Cryptographic operations for unwrapping Samsung Pass exports.

LEGAL NOTICE:
This module decrypts password export files. It must only be used on export
files that belong to you, on devices you own or administer.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Union

from . import config
from .errors import CapabilityError, DecryptionError, FormatError

try:
    from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
    from cryptography.hazmat.primitives import hashes
    from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
    from cryptography.hazmat.backends import default_backend
    from cryptography.exceptions import UnsupportedAlgorithm
    CRYPTOGRAPHY_AVAILABLE = True
except ImportError:
    CRYPTOGRAPHY_AVAILABLE = False

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncryptedContainer:
    """The three parts of a decoded SPASS file."""
    salt: bytes
    iv: bytes
    ciphertext: bytes

    @classmethod
    def from_base64(cls, data: Union[str, bytes]) -> 'EncryptedContainer':
        """
        Decode a base64 SPASS payload and split it into salt, IV and ciphertext.

        Raises:
            FormatError: If the payload is not base64 or is shorter than salt + IV
        """
        if isinstance(data, str):
            try:
                data = data.encode('ascii')
            except UnicodeEncodeError:
                raise FormatError("Invalid SPASS file: content is not base64 text", stage="unwrap")

        # Exports are sometimes wrapped over several lines
        compact = b"".join(data.split())
        try:
            raw = base64.b64decode(compact, validate=True)
        except (binascii.Error, ValueError) as e:
            raise FormatError(f"Invalid SPASS file: content is not valid base64 ({e})", stage="unwrap") from e

        if len(raw) < config.SPASS_HEADER_BYTES:
            raise FormatError(
                f"Invalid SPASS file: {len(raw)} bytes is shorter than the "
                f"{config.SPASS_HEADER_BYTES}-byte salt and IV header",
                stage="unwrap"
            )

        salt_end = config.SPASS_SALT_BYTES
        iv_end = config.SPASS_HEADER_BYTES
        return cls(salt=raw[:salt_end], iv=raw[salt_end:iv_end], ciphertext=raw[iv_end:])


class CryptoManager:
    """Handles the key derivation and decryption of SPASS containers."""

    # Constants
    SALT_SIZE = config.SPASS_SALT_BYTES
    KEY_SIZE = config.SPASS_KEY_LENGTH
    BLOCK_SIZE = config.SPASS_BLOCK_SIZE
    PBKDF2_ITERATIONS = config.SPASS_ITERATION_COUNT

    def __init__(self):
        """Initialize the crypto manager."""
        self.backend = default_backend() if CRYPTOGRAPHY_AVAILABLE else None
        self._available = None

    def is_available(self) -> bool:
        """Check whether AES-CBC and PBKDF2-HMAC-SHA256 are usable on this host."""
        if self.backend is None:
            return False
        if self._available is None:
            self._available = self._check_primitives()
        return self._available

    def _check_primitives(self) -> bool:
        try:
            # Single iteration and a single block: enough to hit every primitive the export needs
            PBKDF2HMAC(
                algorithm=hashes.SHA256(),
                length=self.KEY_SIZE,
                salt=bytes(self.SALT_SIZE),
                iterations=1,
                backend=self.backend
            ).derive(b"spass")
            cipher = Cipher(algorithms.AES(bytes(self.KEY_SIZE)), modes.CBC(bytes(self.BLOCK_SIZE)), backend=self.backend)
            decryptor = cipher.decryptor()
            decryptor.update(bytes(self.BLOCK_SIZE))
            decryptor.finalize()
        except UnsupportedAlgorithm as e:
            logger.warning(f"Required cryptographic primitive unavailable: {e}")
            return False
        return True

    def _require_available(self) -> None:
        if not self.is_available():
            raise CapabilityError(
                "AES-CBC and PBKDF2-HMAC-SHA256 are not available. Please install cryptography."
            )

    def derive_key(self, password: str, salt: bytes) -> bytes:
        """
        Derive the AES key from the export password.

        Args:
            password: The password chosen when the export was made
            salt: Salt read from the container

        Returns:
            32-byte decryption key
        """
        self._require_available()
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=self.KEY_SIZE,
            salt=salt,
            iterations=self.PBKDF2_ITERATIONS,
            backend=self.backend
        )
        return kdf.derive(password.encode('utf-8'))

    def decrypt(self, ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
        """
        Decrypt data using AES-256-CBC without touching the padding.

        Raises:
            DecryptionError: If the ciphertext is empty or not block aligned
        """
        self._require_available()
        if not ciphertext or len(ciphertext) % self.BLOCK_SIZE:
            raise DecryptionError(
                f"Corrupted SPASS file: ciphertext length {len(ciphertext)} is not a "
                f"positive multiple of {self.BLOCK_SIZE}"
            )

        cipher = Cipher(
            algorithms.AES(key),
            modes.CBC(iv),
            backend=self.backend
        )
        decryptor = cipher.decryptor()
        try:
            return decryptor.update(ciphertext) + decryptor.finalize()
        except ValueError as e:
            raise DecryptionError(f"Decryption failed: {e}") from e

    def unwrap(self, data: Union[str, bytes], password: str) -> bytes:
        """
        Turn a base64 SPASS payload into the decrypted document bytes.

        Args:
            data: File content, base64 text
            password: The export password

        Returns:
            Decrypted plaintext with the padding removed

        Raises:
            FormatError: If the payload cannot be decoded or is too short
            DecryptionError: If decryption or padding removal fails
            CapabilityError: If the required primitives are missing
        """
        self._require_available()
        container = EncryptedContainer.from_base64(data)
        logger.debug(f"Container parsed: {len(container.ciphertext)} bytes of ciphertext")

        key = self.derive_key(password, container.salt)
        plaintext = self.decrypt(container.ciphertext, key, container.iv)
        return remove_padding(plaintext)


def remove_padding(data: bytes) -> bytes:
    """
    Strip trailing-byte-count padding.

    The last byte gives the number of padding bytes, itself included. A count
    of zero, a count past the start of the buffer, or an empty result means the
    key was wrong or the data is corrupted.
    """
    if not data:
        raise DecryptionError("Invalid password or corrupted SPASS file: nothing was decrypted")

    padding_len = data[-1]
    if padding_len == 0 or padding_len > len(data):
        raise DecryptionError("Invalid password or corrupted SPASS file: bad padding")

    stripped = data[:-padding_len]
    if not stripped:
        raise DecryptionError("Invalid password or corrupted SPASS file: no data after padding removal")
    return stripped
