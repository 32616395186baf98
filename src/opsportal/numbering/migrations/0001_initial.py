from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DocumentSequence",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("scope", models.CharField(help_text="Document type, e.g. 'estimate', 'invoice'", max_length=50, unique=True)),
                ("prefix", models.CharField(blank=True, help_text="Prefix for formatted value, e.g. 'EST-'", max_length=20)),
                ("current_value", models.PositiveBigIntegerField(default=0, help_text="Last value issued (0 = nothing issued yet)")),
                ("pad_width", models.PositiveSmallIntegerField(default=0, help_text="Zero-padding width for the number portion (0 = none)")),
                ("include_year", models.BooleanField(default=False, help_text="Whether to include the current year in the formatted value")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["scope"],
            },
        ),
    ]
