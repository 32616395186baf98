import uuid

import django.core.serializers.json
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Activity",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("actor_display", models.CharField(blank=True, help_text="Snapshot of actor identity at the time of the action", max_length=200)),
                ("entity_type", models.CharField(help_text="Entity kind: estimate, invoice", max_length=50)),
                ("entity_id", models.CharField(help_text="Primary key of the affected entity", max_length=50)),
                ("action", models.CharField(db_index=True, help_text="Action type: created, updated, deleted", max_length=50)),
                ("description", models.TextField(blank=True)),
                ("changes", models.JSONField(blank=True, default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder, help_text='Field changes: {"field": {"old": x, "new": y}}')),
                ("metadata", models.JSONField(blank=True, default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder)),
                (
                    "actor_user",
                    models.ForeignKey(
                        blank=True,
                        help_text="User who performed the action (null for system actions)",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="portal_activities",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "Activities",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["entity_type", "entity_id"], name="activity_entity_idx"),
                    models.Index(fields=["actor_user", "created_at"], name="activity_actor_created_idx"),
                ],
            },
        ),
    ]
