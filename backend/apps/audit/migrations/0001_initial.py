import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "action",
                    models.CharField(
                        db_index=True,
                        help_text="Action type, e.g. 'USER_DELETED_COMPLETE'",
                        max_length=100,
                    ),
                ),
                (
                    "performed_by_uid",
                    models.CharField(blank=True, db_index=True, max_length=255, null=True),
                ),
                ("performed_by_username", models.CharField(default="Unknown", max_length=150)),
                ("performed_by_email", models.EmailField(blank=True, max_length=254, null=True)),
                (
                    "target_uid",
                    models.CharField(blank=True, db_index=True, max_length=255, null=True),
                ),
                ("target_username", models.CharField(default="Unknown", max_length=150)),
                ("target_email", models.EmailField(blank=True, max_length=254, null=True)),
                (
                    "details",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Action-specific details, e.g. affected record counts",
                    ),
                ),
                (
                    "correlation_id",
                    models.UUIDField(
                        blank=True, help_text="Request trace ID for correlation", null=True
                    ),
                ),
                ("timestamp", models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                "ordering": ["-timestamp"],
            },
        ),
    ]
