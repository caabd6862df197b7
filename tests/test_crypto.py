import base64
import os
import unittest
from unittest import mock

from spass_converter import config
from spass_converter.crypto import CryptoManager, EncryptedContainer, remove_padding
from spass_converter.errors import CapabilityError, DecryptionError, FormatError

from spass_fixtures import PASSWORD, SAMPLE_DOCUMENT, encrypt_document


class EncryptedContainerTests(unittest.TestCase):

    def test_splits_salt_iv_and_ciphertext(self):
        salt = bytes(range(20))
        iv = bytes(range(100, 116))
        body = b"\xaa" * 32
        container = EncryptedContainer.from_base64(base64.b64encode(salt + iv + body))
        self.assertEqual(container.salt, salt)
        self.assertEqual(container.iv, iv)
        self.assertEqual(container.ciphertext, body)

    def test_accepts_text_wrapped_over_lines(self):
        encoded = base64.b64encode(os.urandom(68)).decode("ascii")
        wrapped = "\n".join(encoded[i:i + 20] for i in range(0, len(encoded), 20)) + "\r\n"
        container = EncryptedContainer.from_base64(wrapped)
        self.assertEqual(len(container.ciphertext), 32)

    def test_rejects_non_base64(self):
        with self.assertRaises(FormatError):
            EncryptedContainer.from_base64("this is *not* base64!")

    def test_rejects_non_ascii_text(self):
        with self.assertRaises(FormatError):
            EncryptedContainer.from_base64("ünïcode")

    def test_rejects_short_payload(self):
        with self.assertRaises(FormatError) as ctx:
            EncryptedContainer.from_base64(base64.b64encode(b"\x00" * 35))
        self.assertEqual(ctx.exception.stage, "unwrap")

    def test_header_only_payload_has_empty_ciphertext(self):
        container = EncryptedContainer.from_base64(base64.b64encode(b"\x00" * 36))
        self.assertEqual(container.ciphertext, b"")


class RemovePaddingTests(unittest.TestCase):

    def test_strips_counted_bytes(self):
        self.assertEqual(remove_padding(b"hello" + b"\x03" * 3), b"hello")

    def test_full_block_of_padding(self):
        self.assertEqual(remove_padding(b"A" * 16 + b"\x10" * 16), b"A" * 16)

    def test_count_larger_than_buffer(self):
        with self.assertRaises(DecryptionError):
            remove_padding(b"ab\x09")

    def test_zero_count(self):
        with self.assertRaises(DecryptionError):
            remove_padding(b"abc\x00")

    def test_nothing_left(self):
        with self.assertRaises(DecryptionError):
            remove_padding(b"\x02\x02")

    def test_empty_buffer(self):
        with self.assertRaises(DecryptionError):
            remove_padding(b"")


class CryptoManagerTests(unittest.TestCase):

    def setUp(self):
        self.crypto = CryptoManager()

    def test_is_available(self):
        self.assertTrue(self.crypto.is_available())

    def test_derive_key_matches_format_parameters(self):
        salt = b"\x01" * config.SPASS_SALT_BYTES
        key = self.crypto.derive_key("pw", salt)
        self.assertEqual(len(key), 32)
        self.assertEqual(key, self.crypto.derive_key("pw", salt))
        self.assertNotEqual(key, self.crypto.derive_key("pw2", salt))

    def test_unwrap_returns_plaintext(self):
        payload = encrypt_document(SAMPLE_DOCUMENT)
        plaintext = self.crypto.unwrap(payload, PASSWORD)
        self.assertEqual(plaintext.decode("utf-8"), SAMPLE_DOCUMENT)

    def test_unwrap_accepts_bytes(self):
        payload = encrypt_document("a\nb\nnext_table\n").encode("ascii")
        self.assertEqual(self.crypto.unwrap(payload, PASSWORD), b"a\nb\nnext_table\n")

    def test_unaligned_ciphertext(self):
        payload = base64.b64encode(os.urandom(36 + 20))
        with self.assertRaises(DecryptionError):
            self.crypto.unwrap(payload, PASSWORD)

    def test_empty_ciphertext(self):
        payload = base64.b64encode(os.urandom(36))
        with self.assertRaises(DecryptionError):
            self.crypto.unwrap(payload, PASSWORD)

    def test_primitive_check_runs_once_per_manager(self):
        payload = encrypt_document(SAMPLE_DOCUMENT)
        with mock.patch.object(CryptoManager, "_check_primitives", return_value=True) as check:
            self.crypto.unwrap(payload, PASSWORD)
            self.crypto.unwrap(payload, PASSWORD)
        check.assert_called_once_with()

    def test_missing_primitives_reported_as_capability_error(self):
        payload = encrypt_document(SAMPLE_DOCUMENT)
        with mock.patch.object(CryptoManager, "is_available", return_value=False):
            with self.assertRaises(CapabilityError):
                self.crypto.unwrap(payload, PASSWORD)

    def test_missing_backend_is_not_available(self):
        self.crypto.backend = None
        self.assertFalse(self.crypto.is_available())


if __name__ == "__main__":
    unittest.main()
