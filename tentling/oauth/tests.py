"""Tests for the oauth app."""

import factory
from django.test import TestCase

from .models import App


class AppFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = App

    name = factory.Sequence(lambda n: f"App {n}")
    description = factory.Sequence(lambda n: f"Description of app {n}")
    url = factory.Sequence(lambda n: f"https://app{n}.example.com")
    icon = factory.Sequence(lambda n: f"https://app{n}.example.com/icon.png")
    redirect_uris = factory.LazyAttribute(lambda x: [f"{x.url}/callback", f"{x.url}/other"])
    scopes = factory.LazyFunction(lambda: ["read_posts", "write_posts"])
    mac_key_id = factory.Sequence(lambda n: f"a:id-of-key-{n}")
    mac_key = factory.Sequence(lambda n: f"*SECRET*{n}*")
    mac_algorithm = "hmac-sha-256"


class TestAppAsJson(TestCase):
    def setUp(self):
        self.app = AppFactory()
        self.public_attributes = {
            "id": self.app.public_id,
            "name": self.app.name,
            "description": self.app.description,
            "url": self.app.url,
            "icon": self.app.icon,
            "redirect_uris": self.app.redirect_uris,
            "scopes": self.app.scopes,
        }
        self.mac_attributes = {
            "mac_key_id": self.app.mac_key_id,
            "mac_key": self.app.mac_key,
            "mac_algorithm": self.app.mac_algorithm,
        }

    def test_returns_public_attributes_without_options(self):
        self.assertEqual(self.app.as_json(), self.public_attributes)

    def test_id_is_public_id_not_primary_key(self):
        self.assertNotEqual(self.app.as_json()["id"], self.app.pk)

    def test_returns_mac_keys_when_self(self):
        self.assertEqual(self.app.as_json(is_self=True), {**self.public_attributes, **self.mac_attributes})

    def test_returns_mac_keys_when_mac(self):
        self.assertEqual(self.app.as_json(mac=True), {**self.public_attributes, **self.mac_attributes})

    def test_excludes_specified_keys(self):
        expected = dict(self.public_attributes)
        del expected["id"]

        self.assertEqual(self.app.as_json(exclude=["id"]), expected)

    def test_exclude_applies_to_mac_keys_too(self):
        result = self.app.as_json(mac=True, exclude=["mac_key"])

        self.assertNotIn("mac_key", result)
        self.assertEqual(result["mac_key_id"], self.app.mac_key_id)

    def test_keeps_order_of_redirect_uris(self):
        app = AppFactory(redirect_uris=["https://b.example.com/", "https://a.example.com/"])

        self.assertEqual(app.as_json()["redirect_uris"], ["https://b.example.com/", "https://a.example.com/"])


class TestAppManager(TestCase):
    def test_create_app_issues_credentials_and_public_id(self):
        with self.settings(TENT_MAC_ALGORITHM="hmac-sha-256"):
            app = App.objects.create_app(name="Thing", url="https://thing.example.com")

        app.refresh_from_db()
        self.assertTrue(app.public_id)
        self.assertNotEqual(app.public_id, str(app.pk))
        self.assertTrue(app.mac_key_id)
        self.assertTrue(app.mac_key)
        self.assertEqual(app.mac_algorithm, "hmac-sha-256")

    def test_apps_get_different_credentials(self):
        first = App.objects.create_app(name="First")
        second = App.objects.create_app(name="Second")

        self.assertNotEqual(first.public_id, second.public_id)
        self.assertNotEqual(first.mac_key_id, second.mac_key_id)
        self.assertNotEqual(first.mac_key, second.mac_key)


class TestAppViews(TestCase):
    def test_detail_returns_public_attributes(self):
        app = AppFactory()

        r = self.client.get(f"/apps/{app.public_id}")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), app.as_json())
        self.assertNotIn("mac_key", r.json())

    def test_detail_404_if_no_such_app(self):
        r = self.client.get("/apps/no-such-app")

        self.assertEqual(r.status_code, 404)

    def test_list_returns_apps(self):
        apps = [AppFactory(), AppFactory()]

        r = self.client.get("/apps")

        self.assertEqual(r.json(), [app.as_json() for app in apps])

    def test_rejects_post(self):
        r = self.client.post("/apps", {})

        self.assertEqual(r.status_code, 405)
