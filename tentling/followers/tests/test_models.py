"""Tests for follower models."""

from django.test import TestCase

from ...credentials import MacCredentials
from ...discovery import Profile
from ..models import (
    MUTABLE_FIELDS,
    AlreadyFollowing,
    Follower,
    NotificationSubscription,
    Reconciliation,
    mutable_fields_of,
    parse_type,
)
from .factories import FollowerFactory, NotificationSubscriptionFactory

STATUS = "https://tent.io/types/post/status/v0.1.x"
PHOTO = "https://tent.io/types/post/photo/v0.1.x"
VIDEO = "https://tent.io/types/post/video/v0.1.x"


class TestParseType(TestCase):
    def test_splits_off_view(self):
        self.assertEqual(parse_type(f"{PHOTO}#meta"), (PHOTO, "meta"))

    def test_defaults_to_full_when_no_fragment(self):
        self.assertEqual(parse_type(STATUS), (STATUS, "full"))

    def test_defaults_to_full_when_fragment_empty(self):
        self.assertEqual(parse_type(f"{STATUS}#"), (STATUS, "full"))

    def test_splits_on_last_hash(self):
        self.assertEqual(parse_type("https://example.com/a#b#meta"), ("https://example.com/a#b", "meta"))

    def test_ignores_surrounding_space(self):
        self.assertEqual(parse_type(f" {STATUS}#meta\n"), (STATUS, "meta"))

    def test_rejects_empty(self):
        for bad in ["", "   ", "#meta", "#"]:
            with self.subTest(bad=bad), self.assertRaises(ValueError):
                parse_type(bad)


class TestMutableFieldsOf(TestCase):
    def test_keeps_licenses_and_groups(self):
        data = {"licenses": ["http://example.com/l"], "groups": ["friends"]}

        self.assertEqual(mutable_fields_of(data), data)

    def test_drops_everything_else(self):
        data = {
            "entity": "https://chunky-bacon.example.com",
            "profile": {"entity": "https://chunky-bacon.example.com"},
            "type": "following",
            "mac_key_id": "12345",
            "mac_key": "12312",
            "mac_algorithm": "sdfjhsd",
            "mac_timestamp_delta": "124123",
            "groups": ["family"],
        }

        self.assertEqual(mutable_fields_of(data), {"groups": ["family"]})

    def test_mutable_fields_exclude_identity_and_credentials(self):
        for name in ["entity", "profile", "mac_key_id", "mac_key", "mac_algorithm", "mac_timestamp_delta"]:
            self.assertNotIn(name, MUTABLE_FIELDS)


class TestFollowerJson(TestCase):
    def test_as_json_has_read_fields_without_key(self):
        follower = FollowerFactory(entity="https://alex.example.org", groups=["friends"])

        result = follower.as_json()

        self.assertEqual(
            result,
            {
                "id": follower.pk,
                "groups": ["friends"],
                "entity": "https://alex.example.org",
                "licenses": ["http://creativecommons.org/licenses/by/3.0/"],
                "type": "follower",
                "mac_key_id": follower.mac_key_id,
                "mac_algorithm": "hmac-sha-256",
            },
        )
        self.assertNotIn("mac_key", result)

    def test_credentials_json_has_key(self):
        follower = FollowerFactory()

        self.assertEqual(
            follower.credentials_json(),
            {
                "id": follower.pk,
                "mac_key_id": follower.mac_key_id,
                "mac_key": follower.mac_key,
                "mac_algorithm": follower.mac_algorithm,
            },
        )


class TestReconcileSubscriptions(TestCase):
    def setUp(self):
        self.follower = FollowerFactory(types=[f"{STATUS}#full", f"{PHOTO}#meta"])

    def pairs(self):
        return {(s.type_base, s.view) for s in self.follower.notification_subscriptions.all()}

    def test_creates_subscription_per_type(self):
        self.assertEqual(self.pairs(), {(STATUS, "full"), (PHOTO, "meta")})

    def test_same_types_changes_nothing(self):
        before = set(self.follower.notification_subscriptions.values_list("pk", flat=True))

        result = self.follower.reconcile_subscriptions([f"{STATUS}#full", f"{PHOTO}#meta"])

        self.assertEqual(result, Reconciliation([], []))
        after = set(self.follower.notification_subscriptions.values_list("pk", flat=True))
        self.assertEqual(after, before)

    def test_adds_one(self):
        result = self.follower.reconcile_subscriptions([f"{STATUS}#full", f"{PHOTO}#meta", f"{VIDEO}#meta"])

        self.assertEqual(result, Reconciliation([(VIDEO, "meta")], []))
        self.assertEqual(NotificationSubscription.objects.filter(follower=self.follower).count(), 3)

    def test_removes_one(self):
        result = self.follower.reconcile_subscriptions([f"{STATUS}#full"])

        self.assertEqual(result, Reconciliation([], [(PHOTO, "meta")]))
        self.assertEqual(self.pairs(), {(STATUS, "full")})

    def test_change_of_view_replaces_subscription(self):
        result = self.follower.reconcile_subscriptions([f"{STATUS}#meta", f"{PHOTO}#meta"])

        self.assertEqual(result, Reconciliation([(STATUS, "meta")], [(STATUS, "full")]))
        self.assertEqual(self.pairs(), {(STATUS, "meta"), (PHOTO, "meta")})

    def test_collapses_duplicates(self):
        self.follower.reconcile_subscriptions([STATUS, f"{STATUS}#full", f"{STATUS}#", f"{PHOTO}#meta"])

        self.assertEqual(self.follower.notification_subscriptions.count(), 2)

    def test_empty_list_removes_all(self):
        self.follower.reconcile_subscriptions([])

        self.assertFalse(self.follower.notification_subscriptions.exists())

    def test_leaves_other_followers_alone(self):
        other = FollowerFactory(types=[f"{STATUS}#full"])

        self.follower.reconcile_subscriptions([])

        self.assertEqual(other.notification_subscriptions.count(), 1)

    def test_subscription_type_includes_view(self):
        subscription = NotificationSubscriptionFactory(type_base=VIDEO, view="meta")

        self.assertEqual(subscription.type, f"{VIDEO}#meta")
        self.assertEqual(str(subscription), f"{VIDEO}#meta")


class TestFollowerManager(TestCase):
    credentials = MacCredentials("s:key-id", "*KEY*", "hmac-sha-256")

    def test_create_follower_stores_profile_and_credentials(self):
        profile = Profile(
            "https://alex.example.org",
            ["http://creativecommons.org/licenses/by/3.0/"],
            ["https://alex.example.org/tent"],
            data={"some": "document"},
        )

        follower = Follower.objects.create_follower(
            "https://alex.example.org",
            ["http://creativecommons.org/licenses/by-nc-sa/3.0/"],
            profile,
            self.credentials,
        )

        follower.refresh_from_db()
        self.assertEqual(follower.entity, "https://alex.example.org")
        self.assertEqual(follower.licenses, ["http://creativecommons.org/licenses/by-nc-sa/3.0/"])
        self.assertEqual(follower.profile, {"some": "document"})
        self.assertEqual(follower.mac_key_id, "s:key-id")
        self.assertEqual(follower.mac_key, "*KEY*")
        self.assertEqual(follower.mac_algorithm, "hmac-sha-256")
        self.assertEqual(follower.type, Follower.FOLLOWER)

    def test_create_follower_leaves_follower_with_same_entity_alone(self):
        old = FollowerFactory(entity="https://alex.example.org", groups=["friends"])
        profile = Profile("https://alex.example.org")

        with self.assertRaises(AlreadyFollowing) as cm:
            Follower.objects.create_follower("https://alex.example.org", [], profile, self.credentials)

        self.assertEqual(cm.exception.entity, "https://alex.example.org")
        old.refresh_from_db()
        self.assertEqual(old.groups, ["friends"])
        self.assertEqual(old.notification_subscriptions.count(), 2)
        self.assertEqual(Follower.objects.count(), 1)

    def test_find_returns_follower(self):
        follower = FollowerFactory()

        self.assertEqual(Follower.objects.find(follower.pk), follower)
        self.assertEqual(Follower.objects.find(str(follower.pk)), follower)

    def test_find_raises_does_not_exist(self):
        for bad in ["invalid-id", "", None, "999999"]:
            with self.subTest(bad=bad), self.assertRaises(Follower.DoesNotExist):
                Follower.objects.find(bad)

    def test_update_follower_changes_licenses_and_groups(self):
        follower = FollowerFactory()

        Follower.objects.update_follower(
            follower,
            {"licenses": ["http://creativecommons.org/licenses/by-sa/3.0/"], "groups": ["friends"]},
        )

        follower.refresh_from_db()
        self.assertEqual(follower.licenses, ["http://creativecommons.org/licenses/by-sa/3.0/"])
        self.assertEqual(follower.groups, ["friends"])

    def test_update_follower_ignores_immutable_fields(self):
        follower = FollowerFactory()
        original = Follower.objects.get(pk=follower.pk)

        Follower.objects.update_follower(
            follower,
            {
                "entity": "https://chunky-bacon.example.com",
                "profile": {"entity": "https:://chunky-bacon.example.com"},
                "mac_key_id": "12345",
                "mac_key": "12312",
                "mac_algorithm": "sdfjhsd",
                "mac_timestamp_delta": "124123",
            },
        )

        follower.refresh_from_db()
        for name in ["entity", "profile", "mac_key_id", "mac_key", "mac_algorithm", "mac_timestamp_delta"]:
            with self.subTest(name=name):
                self.assertEqual(getattr(follower, name), getattr(original, name))

    def test_update_follower_reconciles_types(self):
        follower = FollowerFactory(types=[f"{STATUS}#full"])

        Follower.objects.update_follower(follower, {"types": [f"{STATUS}#full", f"{VIDEO}#meta"]})

        self.assertEqual(follower.notification_subscriptions.count(), 2)

    def test_update_follower_without_types_keeps_subscriptions(self):
        follower = FollowerFactory(types=[f"{STATUS}#full"])

        Follower.objects.update_follower(follower, {"groups": ["friends"]})

        self.assertEqual(follower.notification_subscriptions.count(), 1)
