"""Activity log model.

One row per user-visible change to an estimate or invoice: who did what to
which entity, with a human-readable description and a field diff.

NOTE: Activities are append-only. They are never updated or deleted.
"""
import uuid

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models


class Activity(models.Model):
    """Immutable activity entry."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    actor_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='portal_activities',
        help_text='User who performed the action (null for system actions)',
    )
    actor_display = models.CharField(
        max_length=200,
        blank=True,
        help_text='Snapshot of actor identity at the time of the action',
    )

    entity_type = models.CharField(
        max_length=50,
        help_text='Entity kind: estimate, invoice',
    )
    entity_id = models.CharField(
        max_length=50,
        help_text='Primary key of the affected entity',
    )
    action = models.CharField(
        max_length=50,
        db_index=True,
        help_text='Action type: created, updated, deleted',
    )
    description = models.TextField(blank=True)

    changes = models.JSONField(
        default=dict,
        encoder=DjangoJSONEncoder,
        blank=True,
        help_text='Field changes: {"field": {"old": x, "new": y}}',
    )
    metadata = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)

    class Meta:
        ordering = ['-created_at']
        verbose_name_plural = 'Activities'
        indexes = [
            models.Index(fields=['entity_type', 'entity_id'], name='activity_entity_idx'),
            models.Index(fields=['actor_user', 'created_at'], name='activity_actor_created_idx'),
        ]

    def __str__(self):
        actor = self.actor_display or 'System'
        return f"{actor} {self.action} {self.entity_type} {self.entity_id}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Activities are immutable and cannot be updated")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Activities are immutable and cannot be deleted")
