"""Tests for the activity log."""
import pytest

from opsportal.activity import record_activity
from opsportal.activity.api import activities_for
from opsportal.activity.models import Activity


@pytest.mark.django_db
class TestRecordActivity:
    """Test suite for record_activity."""

    def test_records_entity_and_actor(self, estimate, user):
        activity = record_activity(
            action='updated',
            entity=estimate,
            actor=user,
            description='Updated estimate',
            changes={'title': {'old': 'a', 'new': 'b'}},
        )

        assert activity.entity_type == 'estimate'
        assert activity.entity_id == str(estimate.pk)
        assert activity.actor_user == user
        assert activity.actor_display == 'estimator@example.com'
        assert activity.changes == {'title': {'old': 'a', 'new': 'b'}}

    def test_explicit_entity_type_and_id(self):
        activity = record_activity(action='deleted', entity_type='estimate', entity_id='abc')

        assert activity.entity_type == 'estimate'
        assert activity.entity_id == 'abc'
        assert activity.actor_user is None
        assert activity.actor_display == ''

    def test_anonymous_actor_is_stored_as_system(self):
        from django.contrib.auth.models import AnonymousUser

        activity = record_activity(action='created', entity_type='x', entity_id='1', actor=AnonymousUser())

        assert activity.actor_user is None

    def test_decimal_changes_are_serialized(self, estimate):
        """Amount diffs contain Decimals; they must be storable."""
        activity = record_activity(
            action='updated',
            entity=estimate,
            changes={'total': {'old': estimate.total_amount, 'new': estimate.total_amount * 2}},
        )
        activity = Activity.objects.get(pk=activity.pk)

        assert set(activity.changes['total']) == {'old', 'new'}

    def test_activities_for(self, estimate):
        assert activities_for(estimate).filter(action='created').count() == 1


@pytest.mark.django_db
class TestActivityImmutability:
    """Activities are append-only."""

    def test_update_raises(self):
        activity = record_activity(action='created', entity_type='x', entity_id='1')
        activity.description = 'changed'

        with pytest.raises(ValueError):
            activity.save()

    def test_delete_raises(self):
        activity = record_activity(action='created', entity_type='x', entity_id='1')

        with pytest.raises(ValueError):
            activity.delete()
