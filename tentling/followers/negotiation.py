"""Negotiating a new follower.

An entity asks to follow us by posting its entity URL, the licenses it
accepts, and the post types it wants to hear about. Before we agree we
discover its profile and check the profile names the same entity.
Only then are credentials issued and the follower saved.
"""

import logging

from django.db import transaction

from ..credentials import issue_mac_credentials
from ..discovery import DiscoveryError, discover
from .models import AlreadyFollowing, Follower


logger = logging.getLogger(__name__)


class IdentityConflict(Exception):
    """The discovered profile belongs to a different entity from the one asking to follow."""

    def __init__(self, entity, discovered_entity):
        super().__init__(f"{entity} has profile of {discovered_entity}")
        self.entity = entity
        self.discovered_entity = discovered_entity


def verify_identity(entity, profile):
    """Raise IdentityConflict unless the profile’s entity is exactly this entity."""
    if profile.entity != entity:
        raise IdentityConflict(entity, profile.entity)


class FollowNegotiation:
    """Steps through creating a follower, recording how far it got in `state`."""

    RECEIVED = "received"
    DISCOVERING = "discovering"
    VERIFYING = "verifying"
    ISSUING = "issuing"
    PERSISTING = "persisting"
    COMPLETED = "completed"
    DISCOVERY_FAILED = "discovery_failed"
    IDENTITY_CONFLICT = "identity_conflict"
    ALREADY_FOLLOWING = "already_following"

    def __init__(self, entity, licenses=None, types=None):
        self.entity = entity
        self.licenses = licenses or []
        self.types = types or []
        self.state = self.RECEIVED
        self.profile = None
        self.follower = None

    def __str__(self):
        return f"{self.entity} ({self.state})"

    def enter(self, state):
        logger.debug(f"Negotiation with {self.entity}: {self.state} -> {state}")
        self.state = state

    def run(self):
        """Carry out the negotiation.

        Returns the new Follower instance.
        Raises DiscoveryError, IdentityConflict, or AlreadyFollowing,
        in which case nothing is saved and any existing follower is left alone.
        """
        if Follower.objects.filter(entity=self.entity).exists():
            self.enter(self.ALREADY_FOLLOWING)
            raise AlreadyFollowing(self.entity)

        self.enter(self.DISCOVERING)
        try:
            self.profile = discover(self.entity)
        except DiscoveryError:
            self.enter(self.DISCOVERY_FAILED)
            raise

        self.enter(self.VERIFYING)
        try:
            verify_identity(self.entity, self.profile)
        except IdentityConflict as e:
            self.enter(self.IDENTITY_CONFLICT)
            logger.warning(f"Refusing follower: {e}")
            raise

        self.enter(self.ISSUING)
        credentials = issue_mac_credentials()

        self.enter(self.PERSISTING)
        try:
            with transaction.atomic():
                self.follower = Follower.objects.create_follower(
                    self.entity, self.licenses, self.profile, credentials
                )
                self.follower.reconcile_subscriptions(self.types)
        except AlreadyFollowing:
            # Another request for the same entity got there first.
            self.enter(self.ALREADY_FOLLOWING)
            raise

        self.enter(self.COMPLETED)
        logger.info(f"New follower {self.follower.pk}: {self.entity}")
        return self.follower


def follow(entity, licenses=None, types=None):
    """Negotiate a follower for this entity and return it."""
    return FollowNegotiation(entity, licenses, types).run()
