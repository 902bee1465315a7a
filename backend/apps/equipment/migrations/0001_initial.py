from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Equipment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tag_number", models.CharField(help_text="Plant tag, e.g. 'V-101'", max_length=100, unique=True)),
                ("description", models.CharField(blank=True, max_length=255)),
                (
                    "equipment_type",
                    models.CharField(blank=True, help_text="e.g. 'Pressure Vessel'", max_length=100),
                ),
                ("function", models.CharField(blank=True, max_length=100)),
                ("geometry", models.CharField(blank=True, max_length=100)),
                ("construction", models.CharField(blank=True, max_length=100)),
                ("service", models.CharField(blank=True, max_length=100)),
                ("orientation", models.CharField(blank=True, max_length=100)),
                ("status", models.CharField(blank=True, default="Active", max_length=100)),
                ("location", models.CharField(blank=True, max_length=255)),
                ("manufacturer", models.CharField(blank=True, max_length=255)),
                ("year_built", models.PositiveIntegerField(blank=True, null=True)),
                ("image_url", models.URLField(blank=True, max_length=500)),
                (
                    "image_key",
                    models.CharField(blank=True, help_text="Storage key of the current image", max_length=500),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "verbose_name_plural": "equipment",
            },
        ),
    ]
