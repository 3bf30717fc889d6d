"""
End-to-end tests against the fixture router served on a local ephemeral port.
"""

import threading
import unittest

from fritz_cli.auth.client import ClientState, SessionClient
from fritz_cli.config import Credentials
from fritz_cli.exceptions import LoginRejectedError, NotLoggedInError
from fritz_cli.gateway import ResourceGateway
from fritz_cli.mock_server import DEFAULT_SID, MockRouter, make_server
from fritz_cli.network.client import build_session
from fritz_cli.table import render


class MockRouterTestCase(unittest.TestCase):
    reboot_status = "ok"

    def setUp(self):
        self.router = MockRouter(
            username="admin", password="secret", challenge="abc",
            reboot_status=self.reboot_status,
        )
        self.server = make_server(self.router)
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()
        host, port = self.server.server_address[:2]
        self.base = f"http://{host}:{port}"

    def tearDown(self):
        self.server.shutdown()
        self.server.server_close()
        self.thread.join(timeout=5)

    def client(self, password="secret"):
        http = build_session()
        http.trust_env = False  # no proxies for the loopback server
        return SessionClient(Credentials(self.base, "admin", password), http=http, timeout=5)

    def paths(self):
        return [(method, path) for method, path, _ in self.router.requests]


class TestEndToEnd(MockRouterTestCase):
    def test_login_and_list_devices(self):
        with self.client() as client:
            session = client.login()
            self.assertEqual(session.sid, DEFAULT_SID)
            devices = ResourceGateway(client).fetch_devices()

        self.assertEqual([d.name for d in devices], ["laptop", "nas", "printer"])
        text = render(devices)
        self.assertTrue(text.startswith("NAME"))
        self.assertEqual(len(text.splitlines()), 4)

    def test_overview(self):
        with self.client() as client:
            client.login()
            overview = ResourceGateway(client).fetch_overview()
        self.assertEqual(overview.product_name, "FRITZ!Box 7590")
        self.assertEqual(overview.internet.state, "connected")

    def test_wrong_password_is_rejected(self):
        with self.client(password="wrong") as client:
            with self.assertRaises(LoginRejectedError):
                client.login()
            self.assertEqual(client.state, ClientState.FAILED)
            with self.assertRaises(NotLoggedInError):
                ResourceGateway(client).fetch_devices()

        self.assertEqual(self.paths(), [("GET", "/login_sid.lua"), ("POST", "/login_sid.lua")])

    def test_reboot_confirms(self):
        with self.client() as client:
            client.login()
            self.assertTrue(ResourceGateway(client).reboot())
        self.assertEqual(self.paths()[-2:], [("POST", "/data.lua"), ("POST", "/reboot.lua")])

    def test_reconnect_order(self):
        with self.client() as client:
            client.login()
            ResourceGateway(client).reconnect()
        actions = [params.get("action") for _, path, params in self.router.requests
                   if path == "/internet/inetstat_monitor.lua"]
        self.assertEqual(actions, ["disconnect", "connect"])


class TestRefusedReboot(MockRouterTestCase):
    reboot_status = "busy"

    def test_no_confirmation_request(self):
        with self.client() as client:
            client.login()
            self.assertFalse(ResourceGateway(client).reboot())
        self.assertNotIn(("POST", "/reboot.lua"), self.paths())


if __name__ == "__main__":
    unittest.main()
