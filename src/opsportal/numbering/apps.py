"""Django app configuration for document numbering."""

from django.apps import AppConfig


class NumberingConfig(AppConfig):
    """App configuration for opsportal.numbering."""

    name = 'opsportal.numbering'
    label = 'numbering'
    verbose_name = 'Document Numbering'
    default_auto_field = 'django.db.models.BigAutoField'
