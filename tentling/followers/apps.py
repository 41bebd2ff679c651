from django.apps import AppConfig


class FollowersConfig(AppConfig):
    name = "tentling.followers"
    default_auto_field = "django.db.models.BigAutoField"
