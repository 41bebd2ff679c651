"""Database models for followers of this server."""

from collections import namedtuple
import logging

from django.db import IntegrityError, models, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from ..protocol import DEFAULT_VIEW


logger = logging.getLogger(__name__)

# Fields of a follower that may be changed after it is created.
# Everything else (entity, profile, credentials) is fixed by the negotiation.
MUTABLE_FIELDS = ("licenses", "groups")


def mutable_fields_of(data):
    """Return the part of this update payload that is allowed to change a follower."""
    return {k: v for k, v in data.items() if k in MUTABLE_FIELDS}


def parse_type(type_uri):
    """Split a post type URI in to base type and view.

    The view is the fragment (`#meta` etc.); if missing or empty it is `full`.

    Raises ValueError if there is no base type.
    """
    base, hash, view = type_uri.strip().rpartition("#")
    if not hash:
        base, view = view, ""
    if not base:
        raise ValueError(f"{type_uri!r} is not a post type")
    return base, view or DEFAULT_VIEW


Reconciliation = namedtuple("Reconciliation", ["added", "removed"])


class AlreadyFollowing(Exception):
    """There is already a follower with this entity."""

    def __init__(self, entity):
        super().__init__(f"{entity} is already following")
        self.entity = entity


class FollowerManager(models.Manager):
    def create_follower(self, entity, licenses, profile, credentials):
        """Create a follower for an entity whose profile has been discovered.

        Arguments --
            entity -- URL identifying the follower
            licenses -- list of license URIs the follower accepts
            profile -- Profile instance from discovery
            credentials -- MacCredentials issued for the follower

        Raises AlreadyFollowing if there is already a follower with this entity,
        which is left as it was.
        """
        try:
            with transaction.atomic():
                return self.create(
                    entity=entity,
                    licenses=list(licenses or []),
                    profile=profile.data,
                    mac_key_id=credentials.mac_key_id,
                    mac_key=credentials.mac_key,
                    mac_algorithm=credentials.mac_algorithm,
                )
        except IntegrityError:
            if self.filter(entity=entity).exists():
                raise AlreadyFollowing(entity) from None
            raise

    def find(self, pk):
        """Return the follower with this ID.

        Raises Follower.DoesNotExist if there is none, including when the ID is malformed.
        """
        try:
            return self.get(pk=int(pk))
        except (TypeError, ValueError):
            raise self.model.DoesNotExist(f"{pk!r} is not a follower ID") from None

    def update_follower(self, follower, data):
        """Apply this update to the follower.

        Only the fields named in MUTABLE_FIELDS are changed; the rest are ignored.
        If `types` is supplied, the notification subscriptions are reconciled with it.
        """
        with transaction.atomic():
            changes = mutable_fields_of(data)
            for name, value in changes.items():
                setattr(follower, name, value)
            if changes:
                follower.save(update_fields=[*changes, "modified"])
            if data.get("types") is not None:
                follower.reconcile_subscriptions(data["types"])
        return follower


class Follower(models.Model):
    """Another Tent entity that receives notifications of our posts."""

    FOLLOWER, FOLLOWING = "follower", "following"
    TYPE_CHOICES = [
        (FOLLOWER, _("follower")),
        (FOLLOWING, _("following")),
    ]

    entity = models.URLField(
        _("entity"),
        max_length=4000,
        unique=True,
        help_text=_("URL identifying the follower."),
    )
    profile = models.JSONField(
        _("profile"),
        default=dict,
        blank=True,
        help_text=_("Profile document found by discovery when the follower was created."),
    )
    licenses = models.JSONField(
        _("licenses"),
        default=list,
        blank=True,
        help_text=_("URIs of licenses the follower accepts."),
    )
    groups = models.JSONField(
        _("groups"),
        default=list,
        blank=True,
    )
    type = models.CharField(
        _("type"),
        max_length=20,
        choices=TYPE_CHOICES,
        default=FOLLOWER,
    )
    mac_key_id = models.CharField(
        _("MAC key ID"),
        max_length=255,
        unique=True,
    )
    mac_key = models.CharField(
        _("MAC key"),
        max_length=255,
    )
    mac_algorithm = models.CharField(
        _("MAC algorithm"),
        max_length=64,
    )
    mac_timestamp_delta = models.BigIntegerField(
        _("MAC timestamp delta"),
        null=True,
        blank=True,
        help_text=_("Difference between the follower’s clock and ours, in seconds."),
    )
    created = models.DateTimeField(_("created"), default=timezone.now)
    modified = models.DateTimeField(_("modified"), auto_now=True)

    objects = FollowerManager()

    class Meta:
        ordering = ("created", "pk")
        verbose_name = _("follower")
        verbose_name_plural = _("followers")

    def __str__(self):
        return self.entity

    def as_json(self):
        """Representation returned when reading the follower.

        Omits the MAC key, which is only revealed when the follower is created.
        """
        return {
            "id": self.pk,
            "groups": self.groups,
            "entity": self.entity,
            "licenses": self.licenses,
            "type": self.type,
            "mac_key_id": self.mac_key_id,
            "mac_algorithm": self.mac_algorithm,
        }

    def credentials_json(self):
        """Representation returned to the follower when it is created."""
        return {
            "id": self.pk,
            "mac_key_id": self.mac_key_id,
            "mac_key": self.mac_key,
            "mac_algorithm": self.mac_algorithm,
        }

    def reconcile_subscriptions(self, types):
        """Make the notification subscriptions match this list of type URIs.

        Subscriptions for types not already present are created,
        and ones whose type is not in the list are deleted.
        Calling it again with the same list changes nothing.

        Returns Reconciliation with lists of added and removed (base, view) pairs.
        """
        wanted = list(dict.fromkeys(parse_type(t) for t in types))  # Keeps order of request.
        existing = {(s.type_base, s.view): s for s in self.notification_subscriptions.all()}

        removed = [key for key in existing if key not in wanted]
        for key in removed:
            existing[key].delete()
        added = [key for key in wanted if key not in existing]
        NotificationSubscription.objects.bulk_create(
            NotificationSubscription(follower=self, type_base=base, view=view) for base, view in added
        )
        if added or removed:
            logger.debug(f"{self.entity}: subscribed to {added}, unsubscribed from {removed}")
        return Reconciliation(added, removed)


class NotificationSubscription(models.Model):
    """A type of post a follower wants to be notified about."""

    follower = models.ForeignKey(
        Follower,
        models.CASCADE,
        related_name="notification_subscriptions",
        related_query_name="notification_subscription",
        verbose_name=_("follower"),
    )
    type_base = models.CharField(
        _("type"),
        max_length=2000,
        help_text=_("URI of the post type, without the view."),
    )
    view = models.CharField(
        _("view"),
        max_length=64,
        default=DEFAULT_VIEW,
        help_text=_("How much of each post is sent, such as full or meta."),
    )
    created = models.DateTimeField(_("created"), default=timezone.now)

    class Meta:
        unique_together = (("follower", "type_base", "view"),)
        ordering = ("created", "pk")
        verbose_name = _("notification subscription")
        verbose_name_plural = _("notification subscriptions")

    def __str__(self):
        return self.type

    @property
    def type(self):
        """The type URI including the view, as supplied by the follower."""
        return f"{self.type_base}#{self.view}"
