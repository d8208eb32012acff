"""Tests for the run_gotags command-line front end."""

import io
import shlex
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import run_gotags

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestCommandLine(unittest.TestCase):

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.output = self.tmp / "TAGS"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_writes_output_file(self):
        t1 = str(FIXTURES_DIR / "t1.go")
        status = run_gotags.main(["-q", "-e", "", "-o", str(self.output), t1])
        self.assertEqual(status, 0)
        data = self.output.read_bytes()
        self.assertTrue(data.startswith(b"\x0c\n" + t1.encode() + b",0\n"))
        self.assertTrue(data.endswith(b"\n"))

    def test_reads_names_from_stdin(self):
        names = io.StringIO(f"{FIXTURES_DIR / 't1.go'}\n{FIXTURES_DIR / 'members.go'}\n")
        with patch("sys.stdin", names):
            status = run_gotags.main(["-q", "-e", "", "-o", str(self.output), "-"])
        self.assertEqual(status, 0)
        self.assertEqual(self.output.read_bytes().count(b"\x0c\n"), 2)

    def test_no_members_flag(self):
        members = str(FIXTURES_DIR / "members.go")
        run_gotags.main(["-q", "-e", "", "--no-members", "-o", str(self.output), members])
        self.assertNotIn(b"\tLabel\x7f", self.output.read_bytes())

        run_gotags.main(["-q", "-e", "", "-o", str(self.output), members])
        self.assertIn(b"\tLabel\x7fLabel\x01", self.output.read_bytes())

    def test_no_inputs_is_usage_error(self):
        with patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                run_gotags.main(["-o", str(self.output)])
        self.assertEqual(ctx.exception.code, 2)
        self.assertFalse(self.output.exists())

    def test_bad_option_is_usage_error(self):
        with patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                run_gotags.main(["--bogus", "a.go"])
        self.assertEqual(ctx.exception.code, 2)

    def test_delegate_status_becomes_exit_status(self):
        fake = f"{shlex.quote(sys.executable)} {shlex.quote(str(FIXTURES_DIR / 'fake_etags.py'))}"
        with patch.dict("os.environ", {"FAKE_ETAGS_EXIT": "5"}):
            status = run_gotags.main(["-q", "-e", fake, "-o", str(self.output), "x.c"])
        self.assertEqual(status, 5)

    def test_strict_config_error_is_usage_error(self):
        config = self.tmp / "gotags.yaml"
        config.write_text("unknown_key: 1\n", encoding="utf-8")
        with patch.dict("os.environ", {"GOTAGS_STRICT_CONFIG": "1"}):
            status = run_gotags.main(["-q", "--config", str(config), "-o", str(self.output), "a.go"])
        self.assertEqual(status, 2)

    def test_directory_config_keeps_defaults(self):
        go = self.tmp / "a.go"
        go.write_bytes(b"package a\n")
        with patch.dict("os.environ", {"GOTAGS_STRICT_CONFIG": "0"}):
            status = run_gotags.main(["-q", "-e", "", "--config", str(self.tmp), "-o", str(self.output), str(go)])
        self.assertEqual(status, 0)
        self.assertIn(b"package a\x7fa\x011,0", self.output.read_bytes())

    def test_strict_directory_config_is_usage_error(self):
        with patch.dict("os.environ", {"GOTAGS_STRICT_CONFIG": "1"}):
            status = run_gotags.main(["-q", "--config", str(self.tmp), "-o", str(self.output), "a.go"])
        self.assertEqual(status, 2)


if __name__ == "__main__":
    unittest.main()
