"""Public API for the activity log.

    from opsportal.activity import record_activity

    record_activity(
        actor=request.user,
        entity=estimate,
        action='updated',
        description='Updated estimate: EST-1000',
    )

Entries are written with the caller's connection, so inside a service's
``transaction.atomic()`` block the entry commits or rolls back with the
change it describes.
"""
import logging

from .models import Activity

logger = logging.getLogger(__name__)


def _get_actor_display(actor):
    if not actor or not getattr(actor, 'is_authenticated', False):
        return ''
    if getattr(actor, 'email', ''):
        return actor.email
    if getattr(actor, 'username', ''):
        return actor.username
    return str(actor)


def _entity_type(entity) -> str:
    return entity._meta.model_name


def record_activity(
    action,
    entity=None,
    entity_type=None,
    entity_id=None,
    actor=None,
    description='',
    changes=None,
    metadata=None,
):
    """Append an activity entry.

    Args:
        action: created, updated, deleted, ...
        entity: Model instance (entity_type/entity_id are taken from it)
        entity_type: Entity kind if entity is not given (e.g. after delete)
        entity_id: Entity primary key if entity is not given
        actor: User who performed the action (None or anonymous for system)
        description: Human-readable summary
        changes: Dict of field changes: {"field": {"old": x, "new": y}}
        metadata: Additional context as dict

    Returns:
        Activity instance
    """
    if entity is not None:
        entity_type = _entity_type(entity)
        entity_id = entity.pk

    if actor is not None and not getattr(actor, 'is_authenticated', False):
        actor = None

    activity = Activity.objects.create(
        action=action,
        entity_type=entity_type or '',
        entity_id=str(entity_id) if entity_id else '',
        actor_user=actor,
        actor_display=_get_actor_display(actor)[:200],
        description=description,
        changes=changes or {},
        metadata=metadata or {},
    )
    logger.debug("Activity %s %s %s", action, activity.entity_type, activity.entity_id)
    return activity


def activities_for(entity):
    """Activity entries for an entity, newest first."""
    return Activity.objects.filter(
        entity_type=_entity_type(entity),
        entity_id=str(entity.pk),
    )
