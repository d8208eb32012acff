"""Unit tests for delegation to an external etags-compatible program."""

import io
import os
import shlex
import subprocess
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

from gotags.delegate import (
    DelegateError,
    build_delegate_command,
    delegate_tags,
    run_delegate,
)

FAKE_ETAGS = Path(__file__).parent / "fixtures" / "fake_etags.py"
FAKE_PROGRAM = f"{shlex.quote(sys.executable)} {shlex.quote(str(FAKE_ETAGS))}"


class TestDelegateCommand(unittest.TestCase):

    def test_reads_stdin_and_writes_stdout(self):
        self.assertEqual(build_delegate_command("etags"), ["etags", "-o", "-", "-"])

    def test_member_suppression(self):
        self.assertEqual(
            build_delegate_command("etags", members=False),
            ["etags", "--no-members", "-o", "-", "-"],
        )

    def test_program_with_arguments(self):
        self.assertEqual(
            build_delegate_command("etags --declarations")[:2],
            ["etags", "--declarations"],
        )

    def test_empty_program_rejected(self):
        with self.assertRaises(DelegateError):
            build_delegate_command("   ")


class TestRunDelegate(unittest.TestCase):

    def test_output_is_copied_verbatim(self):
        sink = io.BytesIO()
        result = run_delegate(FAKE_PROGRAM, ["a.c", "b.py"])
        written = delegate_tags(FAKE_PROGRAM, ["a.c", "b.py"], sink)

        self.assertEqual(result.returncode, 0)
        self.assertEqual(sink.getvalue(), result.stdout)
        self.assertEqual(written, len(result.stdout))
        self.assertEqual(
            sink.getvalue(),
            b"\x0c\na.c,0\nmembers\x7f1,0\n\x0c\nb.py,0\nmembers\x7f1,0\n",
        )

    def test_members_flag_is_passed(self):
        sink = io.BytesIO()
        delegate_tags(FAKE_PROGRAM, ["a.c"], sink, members=False)
        self.assertIn(b"nomembers", sink.getvalue())

    def test_stderr_lines_are_warnings(self):
        sink = io.BytesIO()
        with patch.dict(os.environ, {"FAKE_ETAGS_STDERR": "cannot open a.c"}):
            with self.assertLogs("gotags.delegate", level="WARNING") as logs:
                delegate_tags(FAKE_PROGRAM, ["a.c"], sink)
        self.assertTrue(any("cannot open a.c" in line for line in logs.output))
        self.assertTrue(sink.getvalue().startswith(b"\x0c\na.c,0"))

    def test_nonzero_exit_is_fatal_with_its_status(self):
        sink = io.BytesIO()
        with patch.dict(os.environ, {"FAKE_ETAGS_EXIT": "3"}):
            with self.assertRaises(DelegateError) as ctx:
                delegate_tags(FAKE_PROGRAM, ["a.c"], sink)
        self.assertEqual(ctx.exception.status, 3)
        self.assertEqual(sink.getvalue(), b"")

    def test_missing_program_is_fatal(self):
        with self.assertRaises(DelegateError) as ctx:
            delegate_tags("/definitely/missing/etags", ["a.c"], io.BytesIO())
        self.assertNotEqual(ctx.exception.status, 0)

    def test_timeout_is_fatal(self):
        expired = subprocess.TimeoutExpired(cmd=["etags"], timeout=0.5)
        with patch("gotags.delegate.subprocess.run", side_effect=expired):
            with self.assertRaises(DelegateError) as ctx:
                run_delegate("etags", ["a.c"], timeout_s=0.5)
        self.assertIn("timed out", str(ctx.exception))

    def test_names_are_newline_separated_on_stdin(self):
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=b"", stderr=b"")
        with patch("gotags.delegate.subprocess.run", return_value=completed) as run:
            run_delegate("etags", ["a.c", "sub dir/b.h"])
        self.assertEqual(run.call_args.kwargs["input"], b"a.c\nsub dir/b.h\n")
        self.assertEqual(run.call_args.args[0], ["etags", "-o", "-", "-"])


if __name__ == "__main__":
    unittest.main()
