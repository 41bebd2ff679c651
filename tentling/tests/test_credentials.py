"""Tests for issuing MAC credentials."""

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase

from ..credentials import issue_mac_credentials


class TestIssueMacCredentials(SimpleTestCase):
    def test_uses_configured_algorithm(self):
        with self.settings(TENT_MAC_ALGORITHM="hmac-sha-1"):
            result = issue_mac_credentials()

        self.assertEqual(result.mac_algorithm, "hmac-sha-1")

    def test_key_and_id_are_fresh_each_time(self):
        results = [issue_mac_credentials() for _ in range(50)]

        self.assertEqual(len({r.mac_key_id for r in results}), 50)
        self.assertEqual(len({r.mac_key for r in results}), 50)

    def test_key_is_long_enough(self):
        result = issue_mac_credentials()

        self.assertGreaterEqual(len(result.mac_key), 64)
        self.assertTrue(result.mac_key_id.startswith("s:"))

    def test_rejects_unsupported_algorithm(self):
        with self.settings(TENT_MAC_ALGORITHM="rot13"), self.assertRaises(ImproperlyConfigured):
            issue_mac_credentials()
