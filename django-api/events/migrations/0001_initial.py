import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("date", models.DateTimeField()),
                ("registration", models.DateTimeField(blank=True, null=True)),
                ("time", models.CharField(blank=True, max_length=32, null=True)),
                ("location", models.CharField(blank=True, max_length=255, null=True)),
                ("image_ref", models.CharField(blank=True, max_length=500, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-date"],
                "indexes": [models.Index(fields=["-date"], name="event_date_desc_idx")],
            },
        ),
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("event_id", models.UUIDField(db_index=True)),
                ("user_id", models.CharField(db_index=True, max_length=255)),
                ("user_name", models.CharField(max_length=255)),
                ("user_email", models.CharField(blank=True, max_length=255)),
                ("registered_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ["registered_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("event_id", "user_id"), name="unique_registration_per_user"
                    )
                ],
            },
        ),
    ]
