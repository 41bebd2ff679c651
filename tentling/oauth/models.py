"""Database models for apps authorized to use this server."""

import secrets

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from ..credentials import issue_mac_credentials


def generate_public_id():
    return secrets.token_urlsafe(12)


class AppManager(models.Manager):
    def create_app(self, **kwargs):
        """Create an app with freshly minted MAC credentials."""
        credentials = issue_mac_credentials()
        return self.create(**kwargs, **credentials._asdict())


class App(models.Model):
    """A client application registered with this server (OAuth2 client)."""

    mac_fields = ["mac_key_id", "mac_key", "mac_algorithm"]

    public_id = models.CharField(
        _("public ID"),
        max_length=64,
        unique=True,
        default=generate_public_id,
        help_text=_("Identifies the app in the API. Distinct from the database key."),
    )
    name = models.CharField(
        _("name"),
        max_length=255,
    )
    description = models.TextField(
        _("description"),
        blank=True,
    )
    url = models.URLField(
        _("URL"),
        max_length=4000,
        blank=True,
        help_text=_("Home page of the app."),
    )
    icon = models.URLField(
        _("icon"),
        max_length=4000,
        blank=True,
    )
    redirect_uris = models.JSONField(
        _("redirect URIs"),
        default=list,
        blank=True,
        help_text=_("Where the user may be sent after authorizing the app, in order of preference."),
    )
    scopes = models.JSONField(
        _("scopes"),
        default=list,
        blank=True,
        help_text=_("Names of the scopes the app may ask for."),
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
    created = models.DateTimeField(_("created"), default=timezone.now)
    modified = models.DateTimeField(_("modified"), auto_now=True)

    objects = AppManager()

    class Meta:
        ordering = ("created", "pk")
        verbose_name = _("app")
        verbose_name_plural = _("apps")

    def __str__(self):
        return self.name

    def as_json(self, mac=False, is_self=False, exclude=()):
        """Return the representation of the app for the API.

        Arguments --
            mac -- include the MAC credentials
            is_self -- the app is asking about itself, so include the MAC credentials
            exclude -- names of keys to leave out
        """
        result = {
            "id": self.public_id,
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "icon": self.icon,
            "redirect_uris": self.redirect_uris,
            "scopes": self.scopes,
        }
        if mac or is_self:
            result.update((name, getattr(self, name)) for name in self.mac_fields)
        for name in exclude:
            result.pop(name, None)
        return result
