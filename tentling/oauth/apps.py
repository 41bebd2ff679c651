from django.apps import AppConfig


class OAuthConfig(AppConfig):
    name = "tentling.oauth"
    label = "oauth"
    verbose_name = "OAuth"
    default_auto_field = "django.db.models.BigAutoField"
