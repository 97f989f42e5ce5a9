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


from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from slipmark.config import installer


class TestConfigInstaller(unittest.TestCase):
    def test_user_config_dir_precedence(self) -> None:
        with mock.patch.dict(os.environ, {installer.XDG_CONFIG_ENV: "/tmp/xdg"}, clear=False):
            with mock.patch.object(installer.sys, "platform", "linux"):
                self.assertEqual(installer._user_config_dir(), Path("/tmp/xdg/slipmark"))

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "darwin"):
                with mock.patch.object(installer.Path, "home", return_value=Path("/Users/example")):
                    self.assertEqual(
                        installer._user_config_dir(),
                        Path("/Users/example/.config/slipmark"),
                    )

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "linux"):
                with mock.patch.object(
                    installer, "user_config_dir", return_value="/opt/config/slipmark"
                ):
                    self.assertEqual(installer._user_config_dir(), Path("/opt/config/slipmark"))

    def test_resolve_config_path_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            user_dir = Path(tmpdir) / "user"
            env_file = Path(tmpdir) / "env.toml"
            with mock.patch.object(installer, "_user_config_dir", return_value=user_dir):
                with mock.patch.dict(os.environ, {}, clear=False):
                    os.environ.pop(installer.CONFIG_ENV, None)
                    self.assertEqual(installer.resolve_config_path(), installer.DEFAULT_CONFIG_PATH)

                    user_dir.mkdir()
                    (user_dir / installer.CONFIG_FILENAME).write_text("", encoding="utf-8")
                    self.assertEqual(
                        installer.resolve_config_path(), user_dir / installer.CONFIG_FILENAME
                    )

                    os.environ[installer.CONFIG_ENV] = str(env_file)
                    self.assertEqual(installer.resolve_config_path(), env_file)
                    self.assertEqual(
                        installer.resolve_config_path("explicit.toml"), Path("explicit.toml")
                    )

    def test_init_user_config_copies_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            user_dir = Path(tmpdir) / "cfg"
            with mock.patch.object(installer, "_user_config_dir", return_value=user_dir):
                self.assertTrue(installer.user_config_needs_init())
                path = installer.init_user_config()
                self.assertEqual(path, user_dir / installer.CONFIG_FILENAME)
                self.assertEqual(
                    path.read_bytes(), installer.DEFAULT_CONFIG_PATH.read_bytes()
                )
                path.write_text("# edited\n", encoding="utf-8")
                installer.init_user_config()
                self.assertEqual(path.read_text(encoding="utf-8"), "# edited\n")
                self.assertFalse(installer.user_config_needs_init())

    def test_init_user_config_reports_failures(self) -> None:
        with mock.patch.object(installer, "_copy_if_missing", side_effect=PermissionError("denied")):
            with self.assertRaises(OSError) as ctx:
                installer.init_user_config()
        self.assertIn("unable to create config", str(ctx.exception))

    def test_default_config_is_packaged(self) -> None:
        self.assertTrue(installer.DEFAULT_CONFIG_PATH.is_file())


if __name__ == "__main__":
    unittest.main()
