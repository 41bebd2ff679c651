import django.utils.timezone
from django.db import migrations, models

import tentling.oauth.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="App",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "public_id",
                    models.CharField(
                        default=tentling.oauth.models.generate_public_id,
                        help_text="Identifies the app in the API. Distinct from the database key.",
                        max_length=64,
                        unique=True,
                        verbose_name="public ID",
                    ),
                ),
                ("name", models.CharField(max_length=255, verbose_name="name")),
                ("description", models.TextField(blank=True, verbose_name="description")),
                (
                    "url",
                    models.URLField(blank=True, help_text="Home page of the app.", max_length=4000, verbose_name="URL"),
                ),
                ("icon", models.URLField(blank=True, max_length=4000, verbose_name="icon")),
                (
                    "redirect_uris",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Where the user may be sent after authorizing the app, in order of preference.",
                        verbose_name="redirect URIs",
                    ),
                ),
                (
                    "scopes",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Names of the scopes the app may ask for.",
                        verbose_name="scopes",
                    ),
                ),
                ("mac_key_id", models.CharField(max_length=255, unique=True, verbose_name="MAC key ID")),
                ("mac_key", models.CharField(max_length=255, verbose_name="MAC key")),
                ("mac_algorithm", models.CharField(max_length=64, verbose_name="MAC algorithm")),
                ("created", models.DateTimeField(default=django.utils.timezone.now, verbose_name="created")),
                ("modified", models.DateTimeField(auto_now=True, verbose_name="modified")),
            ],
            options={
                "verbose_name": "app",
                "verbose_name_plural": "apps",
                "ordering": ("created", "pk"),
            },
        ),
    ]
