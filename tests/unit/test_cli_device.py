# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.


import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from slipmark.cli.io import device as device_module
from slipmark.cli.io.inputs import _read_input_bytes, _read_markdown


class TestDeviceOutput(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)

    def test_write_device_writes_existing_node(self) -> None:
        target = self.tmp / "lp0"
        target.write_bytes(b"")
        device_module.write_device(target, b"\x1b@hello")
        self.assertEqual(target.read_bytes(), b"\x1b@hello")

    def test_write_device_never_creates_files(self) -> None:
        target = self.tmp / "missing"
        with self.assertRaises(FileNotFoundError):
            device_module.write_device(target, b"data")
        self.assertFalse(target.exists())

    def test_exclusive_lock_creates_lock_file(self) -> None:
        lock = self.tmp / "printer.lock"
        with device_module.exclusive_lock(lock):
            self.assertTrue(lock.exists())

    def test_exclusive_lock_without_path(self) -> None:
        with mock.patch.object(device_module.fcntl, "flock") as flock:
            with device_module.exclusive_lock(None):
                pass
        flock.assert_not_called()

    def test_exclusive_lock_releases_on_error(self) -> None:
        lock = self.tmp / "printer.lock"
        with mock.patch.object(device_module.fcntl, "flock") as flock:
            with self.assertRaises(RuntimeError):
                with device_module.exclusive_lock(lock):
                    raise RuntimeError("write failed")
        operations = [call.args[1] for call in flock.call_args_list]
        self.assertEqual(
            operations,
            [device_module.fcntl.LOCK_EX, device_module.fcntl.LOCK_UN],
        )

    def test_unopenable_lock_file(self) -> None:
        lock = self.tmp / "no-such-dir" / "printer.lock"
        with self.assertRaises(OSError) as caught:
            with device_module.exclusive_lock(lock):
                pass
        self.assertIn("lock file", str(caught.exception))

    def test_write_output_to_file(self) -> None:
        target = self.tmp / "out.bin"
        with mock.patch.object(device_module, "console_err"):
            device_module._write_output(str(target), b"abc", quiet=False)
        self.assertEqual(target.read_bytes(), b"abc")

    def test_write_output_to_stdout(self) -> None:
        buffer = io.BytesIO()
        fake_stdout = mock.Mock(buffer=buffer)
        with mock.patch.object(device_module.sys, "stdout", fake_stdout):
            device_module._write_output("-", b"abc", quiet=True)
        self.assertEqual(buffer.getvalue(), b"abc")


class TestInputs(unittest.TestCase):
    def test_read_markdown_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "doc.md"
            path.write_text("# Café\n", encoding="utf-8")
            self.assertEqual(_read_markdown(str(path)), "# Café\n")

    def test_read_markdown_rejects_invalid_utf8(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "doc.md"
            path.write_bytes(b"\xff")
            with self.assertRaises(ValueError) as caught:
                _read_markdown(str(path))
        self.assertIn("UTF-8", str(caught.exception))

    def test_read_input_errors(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(IsADirectoryError):
                _read_input_bytes(tmpdir)
            with self.assertRaises(FileNotFoundError):
                _read_input_bytes(str(Path(tmpdir) / "missing.md"))

    def test_read_stdin(self) -> None:
        fake_stdin = mock.Mock(buffer=io.BytesIO(b"from stdin"))
        with mock.patch("slipmark.cli.io.inputs.sys.stdin", fake_stdin):
            self.assertEqual(_read_input_bytes(None), b"from stdin")
            fake_stdin.buffer.seek(0)
            self.assertEqual(_read_input_bytes("-"), b"from stdin")


if __name__ == "__main__":
    unittest.main()
