"""Django app configuration for estimating."""

from django.apps import AppConfig


class EstimatingConfig(AppConfig):
    """Estimating app configuration."""

    name = "opsportal.estimating"
    label = "estimating"
    verbose_name = "Estimating"
    default_auto_field = "django.db.models.BigAutoField"
