import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import mock

from spass_converter import cli

from spass_fixtures import PASSWORD, SAMPLE_DOCUMENT, SAMPLE_RECORD_COUNT, encrypt_document


class CliTests(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.payload = encrypt_document(SAMPLE_DOCUMENT)

    def setUp(self):
        self.tmpdir = TemporaryDirectory()
        self.tmp_path = Path(self.tmpdir.name)
        self.export = self.tmp_path / "export.spass"
        self.export.write_text(self.payload, encoding="ascii")

    def tearDown(self):
        self.tmpdir.cleanup()

    def _run(self, *args):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = cli.main(list(args))
        return code, out.getvalue(), err.getvalue()

    def test_writes_output_file(self):
        output = self.tmp_path / "chrome.csv"
        code, out, _ = self._run(str(self.export), "-p", PASSWORD, "-o", str(output))
        self.assertEqual(code, 0)
        self.assertIn(f"Exported {SAMPLE_RECORD_COUNT} passwords", out)
        self.assertTrue(output.read_text(encoding="utf-8").startswith("name,url,username,password,note\n"))

    def test_stdout(self):
        code, out, _ = self._run(str(self.export), "--password", PASSWORD, "--stdout")
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("name,url,username,password,note\nExample,"))
        self.assertEqual(list(self.tmp_path.glob("*.csv")), [])

    def test_include_empty(self):
        _, plain, _ = self._run(str(self.export), "-p", PASSWORD, "--stdout")
        _, with_empty, _ = self._run(str(self.export), "-p", PASSWORD, "--stdout", "--include-empty")
        self.assertIn("\n,,,,\n", with_empty)
        self.assertNotIn("\n,,,,\n", plain)

    def test_prompts_for_password(self):
        with mock.patch("getpass.getpass", return_value=PASSWORD) as prompt:
            code, out, _ = self._run(str(self.export), "--stdout")
        prompt.assert_called_once()
        self.assertEqual(code, 0)

    def test_wrong_password(self):
        code, out, err = self._run(str(self.export), "-p", "wrong", "--stdout")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Conversion failed", err)

    def test_unreadable_file(self):
        denied = PermissionError(13, "Permission denied")
        with mock.patch("spass_converter.converter.open", side_effect=denied, create=True):
            code, out, err = self._run(str(self.export), "-p", PASSWORD, "--stdout")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Conversion failed: Could not read", err)
        self.assertIn("Permission denied", err)

    def test_missing_file(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run(str(self.tmp_path / "nope.spass"), "-p", PASSWORD)
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
