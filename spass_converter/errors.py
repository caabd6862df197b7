"""
Exceptions raised by the conversion pipeline.

Every failure reaches the caller as a ``ConversionError``; the subclass and the
``stage`` attribute tell which part of the pipeline gave up.
"""


class ConversionError(Exception):
    """Base class for all conversion failures."""

    stage = "convert"

    def __init__(self, message: str, stage: str = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class FormatError(ConversionError):
    """The container or the decrypted document is not laid out as expected."""

    stage = "extract"


class DecryptionError(ConversionError):
    """The cipher rejected the key/IV/ciphertext, usually a wrong password."""

    stage = "unwrap"


class CapabilityError(ConversionError):
    """The host lacks AES-CBC or PBKDF2-HMAC-SHA256."""

    stage = "capability"
