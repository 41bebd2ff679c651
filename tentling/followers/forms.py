"""Forms for validating requests from would-be followers.

The requests are JSON documents rather than form submissions,
so the decoded object is passed as the form data.
"""

from django import forms
from django.core.exceptions import ValidationError
from django.core.validators import URLValidator

from .models import NotificationSubscription, parse_type


class StringListField(forms.Field):
    """A list of strings, such as license URIs or group names."""

    def to_python(self, value):
        if value in self.empty_values:
            return []
        if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
            raise ValidationError("Expected a list of strings.", code="invalid")
        return value


class TypeListField(StringListField):
    """A list of post type URIs, each optionally with a view fragment."""

    def validate(self, value):
        super().validate(value)
        max_base = NotificationSubscription._meta.get_field("type_base").max_length
        max_view = NotificationSubscription._meta.get_field("view").max_length
        for x in value:
            try:
                base, view = parse_type(x)
            except ValueError:
                raise ValidationError("%(value)r is not a post type.", code="invalid", params={"value": x})
            if len(base) > max_base or len(view) > max_view:
                raise ValidationError("Post type is too long.", code="max_length")


class FollowerForm(forms.Form):
    """Request to follow this server."""

    # Not URLField because that normalizes the URL and we need the entity exactly as given.
    entity = forms.CharField(
        max_length=4000,
        strip=False,
        validators=[URLValidator(schemes=["http", "https"])],
    )
    licenses = StringListField(required=False)
    types = TypeListField(required=False)


class FollowerUpdateForm(forms.Form):
    """Changes to an existing follower.

    Only fields listed here can be changed; anything else in the request is ignored.
    """

    licenses = StringListField(required=False)
    groups = StringListField(required=False)
    types = TypeListField(required=False)

    def changes(self):
        """Return cleaned values of the fields that were present in the request."""
        return {
            name: value for name, value in self.cleaned_data.items() if self.data.get(name) is not None
        }
