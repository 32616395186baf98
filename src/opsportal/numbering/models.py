"""Counter rows backing human-readable document numbers."""

from datetime import date

from django.db import models


class DocumentSequence(models.Model):
    """
    Strictly increasing counter for one document type.

    Produces numbers like "EST-1042" or "INV-2031". Rows are only ever
    incremented under ``select_for_update()`` (see services.next_number),
    so a value is never handed out twice.
    """

    scope = models.CharField(
        max_length=50,
        unique=True,
        help_text="Document type, e.g. 'estimate', 'invoice'",
    )
    prefix = models.CharField(
        max_length=20,
        blank=True,
        help_text="Prefix for formatted value, e.g. 'EST-'",
    )
    current_value = models.PositiveBigIntegerField(
        default=0,
        help_text="Last value issued (0 = nothing issued yet)",
    )
    pad_width = models.PositiveSmallIntegerField(
        default=0,
        help_text="Zero-padding width for the number portion (0 = none)",
    )
    include_year = models.BooleanField(
        default=False,
        help_text="Whether to include the current year in the formatted value",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['scope']

    def __str__(self):
        return f"{self.scope}: {self.current_value}"

    def format_value(self, value: int) -> str:
        """
        Format a counter value with prefix, optional year and padding.

        Examples:
            - Default: "EST-1042"
            - pad_width=6, include_year=True: "INV-2026-001042"
        """
        number_str = str(value).zfill(self.pad_width) if self.pad_width else str(value)
        if self.include_year:
            return f"{self.prefix}{date.today().year}-{number_str}"
        return f"{self.prefix}{number_str}"

    @property
    def formatted_value(self) -> str:
        """The most recently issued number."""
        return self.format_value(self.current_value)
