import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Follower",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "entity",
                    models.URLField(
                        help_text="URL identifying the follower.", max_length=4000, unique=True, verbose_name="entity"
                    ),
                ),
                (
                    "profile",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Profile document found by discovery when the follower was created.",
                        verbose_name="profile",
                    ),
                ),
                (
                    "licenses",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="URIs of licenses the follower accepts.",
                        verbose_name="licenses",
                    ),
                ),
                ("groups", models.JSONField(blank=True, default=list, verbose_name="groups")),
                (
                    "type",
                    models.CharField(
                        choices=[("follower", "follower"), ("following", "following")],
                        default="follower",
                        max_length=20,
                        verbose_name="type",
                    ),
                ),
                ("mac_key_id", models.CharField(max_length=255, unique=True, verbose_name="MAC key ID")),
                ("mac_key", models.CharField(max_length=255, verbose_name="MAC key")),
                ("mac_algorithm", models.CharField(max_length=64, verbose_name="MAC algorithm")),
                (
                    "mac_timestamp_delta",
                    models.BigIntegerField(
                        blank=True,
                        help_text="Difference between the follower’s clock and ours, in seconds.",
                        null=True,
                        verbose_name="MAC timestamp delta",
                    ),
                ),
                ("created", models.DateTimeField(default=django.utils.timezone.now, verbose_name="created")),
                ("modified", models.DateTimeField(auto_now=True, verbose_name="modified")),
            ],
            options={
                "verbose_name": "follower",
                "verbose_name_plural": "followers",
                "ordering": ("created", "pk"),
            },
        ),
        migrations.CreateModel(
            name="NotificationSubscription",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "type_base",
                    models.CharField(
                        help_text="URI of the post type, without the view.", max_length=2000, verbose_name="type"
                    ),
                ),
                (
                    "view",
                    models.CharField(
                        default="full",
                        help_text="How much of each post is sent, such as full or meta.",
                        max_length=64,
                        verbose_name="view",
                    ),
                ),
                ("created", models.DateTimeField(default=django.utils.timezone.now, verbose_name="created")),
                (
                    "follower",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notification_subscriptions",
                        related_query_name="notification_subscription",
                        to="followers.follower",
                        verbose_name="follower",
                    ),
                ),
            ],
            options={
                "verbose_name": "notification subscription",
                "verbose_name_plural": "notification subscriptions",
                "ordering": ("created", "pk"),
                "unique_together": {("follower", "type_base", "view")},
            },
        ),
    ]
