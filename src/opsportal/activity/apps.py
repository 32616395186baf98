"""Django app configuration for the activity log."""
from django.apps import AppConfig


class ActivityConfig(AppConfig):
    name = 'opsportal.activity'
    label = 'activity'
    verbose_name = 'Activity Log'
    default_auto_field = 'django.db.models.BigAutoField'
