"""Tests for configuration resolution and the command-line interface."""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

from fritz_cli import cli
from fritz_cli.config import Credentials, load_credentials, read_config_file, write_config
from fritz_cli.exceptions import ConfigError, DecodeError, LoginRejectedError
from fritz_cli.models import Device


class TestLoadCredentials(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "config.json"

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_is_empty(self):
        self.assertEqual(read_config_file(self.path), {})

    def test_file_must_be_object(self):
        self.path.write_text("[1, 2]", encoding="utf-8")
        with self.assertRaises(ConfigError):
            read_config_file(self.path)

    def test_invalid_json(self):
        self.path.write_text("{", encoding="utf-8")
        with self.assertRaises(ConfigError):
            read_config_file(self.path)

    def test_priority_flags_env_file(self):
        self.path.write_text(json.dumps({
            "base_url": "http://file", "username": "file-user", "password": "file-pw",
        }), encoding="utf-8")
        env = {"FRITZ_USER": "env-user", "FRITZ_PASSWORD": "env-pw"}
        resolved = load_credentials(self.path, password="flag-pw", environ=env)
        self.assertEqual(resolved, {
            "base_url": "http://file", "username": "env-user", "password": "flag-pw",
        })

    def test_defaults(self):
        resolved = load_credentials(self.path, environ={})
        self.assertEqual(resolved["base_url"], "http://fritz.box")
        self.assertIsNone(resolved["username"])
        self.assertIsNone(resolved["password"])

    def test_write_then_read(self):
        write_config(self.path, Credentials("http://192.168.178.1/", "admin", "pw"))
        self.assertEqual(read_config_file(self.path), {
            "base_url": "http://192.168.178.1", "username": "admin", "password": "pw",
        })


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config = str(Path(self._tmp.name) / "config.json")
        self.argv = ["--config", self.config, "--url", "http://fritz.box",
                     "--user", "admin", "--password", "pw"]

    def tearDown(self):
        self._tmp.cleanup()

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main([*self.argv, *argv])
        return code, out.getvalue()

    @patch("fritz_cli.cli.ResourceGateway")
    @patch("fritz_cli.cli.SessionClient")
    def test_devices_prints_table(self, mock_client_cls, mock_gateway_cls):
        client = mock_client_cls.return_value.__enter__.return_value
        mock_gateway_cls.return_value.fetch_devices.return_value = [
            Device(name="nas", ip="192.168.178.2", mac="AA", type="lan", active=True),
        ]

        code, out = self.run_cli("devices")

        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[0].split(), ["NAME", "IP", "MAC", "TYPE", "ACTIVE"])
        self.assertEqual(out.splitlines()[1].split(), ["nas", "192.168.178.2", "AA", "lan", "Yes"])
        client.login.assert_called_once()
        creds = mock_client_cls.call_args.args[0]
        self.assertEqual(creds, Credentials("http://fritz.box", "admin", "pw"))

    @patch("fritz_cli.cli.ResourceGateway")
    @patch("fritz_cli.cli.SessionClient")
    def test_reboot_refused(self, mock_client_cls, mock_gateway_cls):
        mock_gateway_cls.return_value.reboot.return_value = False
        code, out = self.run_cli("reboot")
        self.assertEqual(code, 0)
        self.assertTrue(out.splitlines()[1].startswith("false"))

    @patch("fritz_cli.cli.ResourceGateway")
    @patch("fritz_cli.cli.SessionClient")
    def test_reconnect_notice(self, mock_client_cls, mock_gateway_cls):
        mock_gateway_cls.return_value.reconnect.return_value = 30
        code, out = self.run_cli("reconnect")
        self.assertEqual(code, 0)
        self.assertIn("up to 30s", out)

    @patch("fritz_cli.cli.ResourceGateway")
    @patch("fritz_cli.cli.SessionClient")
    def test_decode_error_prints_nothing(self, mock_client_cls, mock_gateway_cls):
        mock_gateway_cls.return_value.fetch_overview.side_effect = DecodeError("bad json")
        code, out = self.run_cli("info")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")

    @patch("fritz_cli.cli.ResourceGateway")
    @patch("fritz_cli.cli.SessionClient")
    def test_rejected_login_skips_command(self, mock_client_cls, mock_gateway_cls):
        client = mock_client_cls.return_value.__enter__.return_value
        client.login.side_effect = LoginRejectedError("rejected")
        code, out = self.run_cli("devices")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        mock_gateway_cls.return_value.fetch_devices.assert_not_called()

    def test_init_writes_config(self):
        code, out = self.run_cli("init")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(Path(self.config).read_text(encoding="utf-8")), {
            "base_url": "http://fritz.box", "username": "admin", "password": "pw",
        })
        self.assertIn("CONFIG", out.splitlines()[0])

    @patch.dict(os.environ, {}, clear=True)
    @patch("fritz_cli.cli.sys.stdin")
    def test_missing_password_without_tty(self, mock_stdin):
        mock_stdin.isatty.return_value = False
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main(["--config", self.config, "info"])
        self.assertEqual(code, 2)
        self.assertEqual(out.getvalue(), "")

    def test_no_command_exits(self):
        with self.assertRaises(SystemExit) as ctx:
            cli.parse_args([])
        self.assertEqual(ctx.exception.code, 2)

    def test_negative_spacing_rejected(self):
        with self.assertRaises(SystemExit):
            cli.parse_args(["--spacing", "-1", "info"])

    def test_non_positive_timeout_rejected(self):
        for value in ("0", "-1"):
            with self.subTest(timeout=value):
                with self.assertRaises(SystemExit) as ctx:
                    cli.parse_args(["--timeout", value, "info"])
                self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
